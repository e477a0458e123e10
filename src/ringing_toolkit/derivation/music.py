"""
Module: derivation.music

Purpose:
    Scores runs at the front and back of every realized row and records,
    per bell position, which parts show music there.

Key Functions:
    - calculate_music(): Music highlights for one skeleton row's realizations

Dependencies:
    - ringing_toolkit.core.utils.run_len

Used By:
    - derivation.expansion: Attaches highlights to each ExpandedRow
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ringing_toolkit.core.models import Row, Stage
from ringing_toolkit.core.utils import run_len


# Shortest run which counts as music by default
DEFAULT_MIN_RUN_LENGTH = 4


def calculate_music(
    rows: Sequence[Row],
    stage: Stage,
    min_run_length: int = DEFAULT_MIN_RUN_LENGTH,
) -> Tuple[Tuple[int, ...], ...]:
    """
    For each bell position, the parts whose Row has a run covering it.

    A front run of at least ``min_run_length`` bells highlights positions
    ``0..front``. A back run of at least ``min_run_length`` highlights
    ``max(front, stage - back)..stage``; the ``max`` stops a Row whose front
    and back runs overlap (e.g. rounds) from counting a position twice.

    Args:
        rows: One realized Row per part
        stage: Stage of the Rows
        min_run_length: Shortest run that counts as music

    Returns:
        Tuple of length ``stage``; entry ``i`` holds the part indices (in
        increasing order) with music at position ``i``.

    Example:
        >>> calculate_music([Row.parse("65871234")], Stage.MAJOR)
        ((), (), (), (), (0,), (0,), (0,), (0,))
    """
    n = stage.num_bells
    music: List[List[int]] = [[] for _ in range(n)]
    for part, row in enumerate(rows):
        front = run_len(row)
        if front >= min_run_length:
            for position in range(front):
                music[position].append(part)

        back = run_len(reversed(row))
        if back >= min_run_length:
            for position in range(max(front, n - back), n):
                music[position].append(part)
    return tuple(tuple(parts) for parts in music)
