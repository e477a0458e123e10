"""
Module: derivation.coalescing

Purpose:
    Merges positionally contiguous falseness groups into "meta-groups" so
    that a block of consecutive false rows is shown with one colour, and
    turns each meta-group into per-fragment FalseRowRanges.

Key Functions:
    - coalesce_false_row_groups(): Ranges per fragment, plus group count
    - groups_are_adjacent(): Adjacency test between two falseness groups

Dependencies:
    - derivation.derived_state: RowLocation, FalseRowRange

Used By:
    - derivation.pipeline: Coalescing phase
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from ringing_toolkit.core.errors import DerivationError
from .derived_state import FalseRowRange, RowLocation

logger = logging.getLogger(__name__)


def groups_are_adjacent(
    group: Sequence[RowLocation],
    previous: Sequence[RowLocation],
) -> bool:
    """
    Whether two sorted falseness groups are one row apart everywhere.

    Both groups must have the same size, and each pair of locations (paired
    by sorted position) must be in the same fragment with row indices that
    differ by exactly one.
    """
    if len(group) != len(previous):
        return False
    return all(
        a.fragment == b.fragment and abs(a.row - b.row) == 1
        for a, b in zip(group, previous)
    )


def _add_ranges(
    ranges_by_fragment: Dict[int, List[FalseRowRange]],
    first: Sequence[RowLocation],
    last: Sequence[RowLocation],
    group_id: int,
) -> None:
    """Add one range per paired location between the first and last groups of a meta-group."""
    if len(first) != len(last):
        raise DerivationError(
            f"meta-group {group_id} spans groups of different sizes: {len(first)} != {len(last)}"
        )
    for start_loc, end_loc in zip(first, last):
        if start_loc.fragment != end_loc.fragment:
            raise DerivationError(
                f"meta-group {group_id} crosses fragments {start_loc.fragment} and {end_loc.fragment}"
            )
        # Rows can be false against each other in the opposite order
        ranges_by_fragment.setdefault(start_loc.fragment, []).append(
            FalseRowRange(
                fragment=start_loc.fragment,
                start=min(start_loc.row, end_loc.row),
                end=max(start_loc.row, end_loc.row),
                group=group_id,
            )
        )


def coalesce_false_row_groups(
    groups: Sequence[Sequence[RowLocation]],
) -> Tuple[Dict[int, List[FalseRowRange]], int]:
    """
    Combine adjacent falseness groups into ranges.

    Groups are re-sorted (each group's locations, then the groups
    themselves) so that consecutive rows of a false block are consecutive
    in the walk. Runs of adjacent groups form one meta-group; each
    meta-group is emitted as one FalseRowRange per location, tagged with an
    incrementing group id.

    Args:
        groups: Falseness groups from ``generate_false_row_groups``

    Returns:
        Tuple of (ranges keyed by fragment index, number of meta-groups)

    Example:
        >>> groups = [(RowLocation(0, 4),), (RowLocation(0, 5),), (RowLocation(0, 6),)]
        >>> coalesce_false_row_groups(groups)
        ({0: [FalseRowRange(fragment=0, start=4, end=6, group=0)]}, 1)
    """
    ranges_by_fragment: Dict[int, List[FalseRowRange]] = {}
    ordered: List[Tuple[RowLocation, ...]] = sorted(tuple(sorted(g)) for g in groups)
    if not ordered:
        return ranges_by_fragment, 0

    group_id = 0
    first_in_meta_group = ordered[0]
    last_group = ordered[0]
    for group in ordered[1:]:
        if not groups_are_adjacent(group, last_group):
            _add_ranges(ranges_by_fragment, first_in_meta_group, last_group, group_id)
            first_in_meta_group = group
            group_id += 1
        last_group = group
    _add_ranges(ranges_by_fragment, first_in_meta_group, last_group, group_id)

    num_groups = group_id + 1
    logger.debug(f"Coalesced {len(ordered)} false groups into {num_groups} meta-groups")
    return ranges_by_fragment, num_groups
