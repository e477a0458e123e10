"""
Module: core.utils.runs

Purpose:
    Run detection for music scoring. A run is the longest stretch of bells
    at the start of a sequence that is strictly ascending or strictly
    descending in value (``5678``, ``1357`` or ``8642``). The first two
    bells fix the direction. Scanning a reversed Row measures the run at
    the back.

Key Functions:
    - run_len(bells): Length of the run at the start of ``bells``

Used By:
    - derivation.music
"""

from __future__ import annotations

from typing import Iterable

from ..models.bell import Bell


def run_len(bells: Iterable[Bell]) -> int:
    """
    Length of the run at the start of ``bells``.

    Returns 0 for an empty sequence and 1 for a single bell. Any two
    distinct bells form a run of at least 2.

    Example:
        >>> run_len(Row.parse("13572468"))
        4
        >>> run_len(reversed(Row.parse("65871234")))
        4
    """
    iterator = iter(bells)
    first = next(iterator, None)
    if first is None:
        return 0
    second = next(iterator, None)
    if second is None:
        return 1
    if second.index == first.index:
        return 1

    ascending = second.index > first.index
    length = 2
    last = second
    for bell in iterator:
        if (bell.index > last.index) != ascending or bell.index == last.index:
            break
        length += 1
        last = bell
    return length
