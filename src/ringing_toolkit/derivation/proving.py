"""
Module: derivation.proving

Purpose:
    Truth proving. Flattens every proved realized Row with its origin,
    sorts them by Row value so that repeats sit next to each other, and
    groups the repeats into falseness groups.

Key Functions:
    - flatten_proved_rows(): (origin, Row) pairs for every proved row
    - generate_false_row_groups(): Deduplicated falseness groups

Dependencies:
    - numpy: Lexicographic sort and adjacent-equality sweep over a
      bell-index matrix

Used By:
    - derivation.pipeline: Truth-proving phase
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Set, Tuple

import numpy as np

from ringing_toolkit.core.models import Row
from .derived_state import ExpandedRow, RowLocation, RowOrigin

logger = logging.getLogger(__name__)


# A falseness group: the sorted locations of rows that are all equal
FalseGroup = Tuple[RowLocation, ...]


def flatten_proved_rows(
    expanded_fragments: Sequence[Sequence[ExpandedRow]],
) -> Tuple[List[Tuple[RowOrigin, Row]], int]:
    """
    Every realized Row that should be proved, with where it came from.

    Rows whose ExpandedRow is not proved (such as leftover rows) are
    skipped. The output is not sorted.

    Args:
        expanded_fragments: ExpandedRows for each fragment

    Returns:
        Tuple of (origin/Row pairs, part length). The part length counts
        each proved ExpandedRow once, however many parts it expands to.
    """
    flattened: List[Tuple[RowOrigin, Row]] = []
    part_length = 0
    for fragment_index, expanded_rows in enumerate(expanded_fragments):
        for row_index, expanded_row in enumerate(expanded_rows):
            if not expanded_row.is_proved:
                continue
            for part_index, row in enumerate(expanded_row.rows):
                flattened.append((RowOrigin(part_index, fragment_index, row_index), row))
            part_length += 1
    return flattened, part_length


def _row_matrix(rows: Sequence[Row]) -> np.ndarray:
    """Bell indices of ``rows`` as a ``(len(rows), stage)`` integer matrix."""
    stage = len(rows[0]) if rows else 0
    matrix = np.array([[bell.index for bell in row] for row in rows], dtype=np.int64)
    return matrix.reshape(len(rows), stage)


def _sort_order(matrix: np.ndarray) -> np.ndarray:
    """Indices that sort the rows of ``matrix`` lexicographically."""
    if matrix.shape[1] == 0:
        # Zero-bell rows are all equal
        return np.arange(matrix.shape[0])
    # lexsort treats its last key as the primary one
    return np.lexsort(matrix.T[::-1])


def generate_false_row_groups(
    flattened: Sequence[Tuple[RowOrigin, Row]],
) -> Tuple[List[FalseGroup], int]:
    """
    Group identical Rows into falseness groups.

    Rows are sorted by value, then runs of equal Rows of length two or
    more become groups. Part indices are dropped; when the part heads form
    a group the same falseness recurs in every part, so groups are
    deduplicated by content.

    Args:
        flattened: Output of ``flatten_proved_rows``

    Returns:
        Tuple of (groups, false row count). Each group is a sorted tuple of
        RowLocations; groups are returned in sorted order. The count covers
        every realized Row in any run of repeats.
    """
    if not flattened:
        return [], 0

    matrix = _row_matrix([row for _, row in flattened])
    order = _sort_order(matrix)
    sorted_matrix = matrix[order]
    # same_as_next[i] is True when sorted rows i and i + 1 are equal
    same_as_next = np.all(sorted_matrix[1:] == sorted_matrix[:-1], axis=1)

    groups: Set[FalseGroup] = set()
    num_false_rows = 0
    run_start = 0
    for i in range(len(order)):
        if i < len(same_as_next) and same_as_next[i]:
            continue
        run_length = i - run_start + 1
        if run_length > 1:
            num_false_rows += run_length
            locations = sorted(
                flattened[order[j]][0].location for j in range(run_start, i + 1)
            )
            groups.add(tuple(locations))
        run_start = i + 1

    logger.debug(
        f"Proved {len(flattened)} rows: {num_false_rows} false rows "
        f"in {len(groups)} distinct groups"
    )
    return sorted(groups), num_false_rows
