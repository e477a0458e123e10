"""
Module: bell

Purpose:
    Provides the Bell dataclass - the identity of one bell, stored as a
    zero-based index and displayed using the conventional bell names
    (``1``-``9``, ``0`` for the tenth, then letters).

Key Functions:
    - Bell.from_index(i): Total construction from a zero-based index
    - Bell.from_number(n): Construction from a one-based number
    - Bell.from_name(c): Parse a display character (None if unrecognized)
    - Bell.name: Display character for this bell

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.row.Row
    - core.utils.runs
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


BELL_NAMES = "1234567890ETABCDFGHJKLMNPQRSUVWXYZ"


@dataclass(frozen=True, slots=True, order=True)
class Bell:
    """
    A single bell, identified by its zero-based index.

    Attributes:
        index: Zero-based index (the treble is 0)

    Example:
        >>> Bell.from_name("0").index
        9
        >>> Bell.from_index(10).name
        'E'
        >>> Bell.from_name("|") is None
        True
    """

    index: int

    def __post_init__(self) -> None:
        """Validate index on construction."""
        if self.index < 0:
            raise ValueError(f"Bell index cannot be negative: {self.index}")

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def from_index(cls, index: int) -> Bell:
        """Create a Bell from its zero-based index."""
        return cls(index)

    @classmethod
    def from_number(cls, number: int) -> Optional[Bell]:
        """Create a Bell from its one-based number, or None for ``number < 1``."""
        if number < 1:
            return None
        return cls(number - 1)

    @classmethod
    def from_name(cls, name: str) -> Optional[Bell]:
        """
        Parse a single display character into a Bell.

        Lookup is case-insensitive. Returns None for anything that is not
        a recognized bell name, so callers can filter with it.
        """
        if len(name) != 1:
            return None
        index = BELL_NAMES.find(name.upper())
        if index == -1:
            return None
        return cls(index)

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def number(self) -> int:
        """One-based bell number."""
        return self.index + 1

    @property
    def name(self) -> str:
        """Display character, or ``?`` if the index has no conventional name."""
        if self.index < len(BELL_NAMES):
            return BELL_NAMES[self.index]
        return "?"

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Bell({self.name})"


TREBLE = Bell(0)
