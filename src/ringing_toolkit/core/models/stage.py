"""
Module: stage

Purpose:
    Provides the Stage dataclass - the number of bells shared by every
    Row and Bell used together in a composition.

Key Functions:
    - Stage.from_row_length(n): Total conversion from a row length
    - Stage.name: Conventional ringing name ("Major", "Royal", ...)

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.row.Row
    - core.models.part_heads.PartHeads
    - derivation (all stages)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Dict


_STAGE_NAMES: Dict[int, str] = {
    3: "Singles",
    4: "Minimus",
    5: "Doubles",
    6: "Minor",
    7: "Triples",
    8: "Major",
    9: "Caters",
    10: "Royal",
    11: "Cinques",
    12: "Maximus",
    13: "Sextuples",
    14: "Fourteen",
    15: "Septuples",
    16: "Sixteen",
}


@dataclass(frozen=True, slots=True, order=True)
class Stage:
    """
    Number of bells in a composition.

    Attributes:
        num_bells: Bell count (non-negative)

    Invariants:
        - num_bells >= 0

    Example:
        >>> Stage(8).name
        'Major'
        >>> Stage.from_row_length(10) == Stage.ROYAL
        True
    """

    num_bells: int

    MINIMUS: ClassVar[Stage]
    DOUBLES: ClassVar[Stage]
    MINOR: ClassVar[Stage]
    TRIPLES: ClassVar[Stage]
    MAJOR: ClassVar[Stage]
    CATERS: ClassVar[Stage]
    ROYAL: ClassVar[Stage]
    CINQUES: ClassVar[Stage]
    MAXIMUS: ClassVar[Stage]
    SEXTUPLES: ClassVar[Stage]
    FOURTEEN: ClassVar[Stage]
    SEPTUPLES: ClassVar[Stage]
    SIXTEEN: ClassVar[Stage]

    def __post_init__(self) -> None:
        """Validate stage on construction."""
        if self.num_bells < 0:
            raise ValueError(f"Stage cannot be negative: {self.num_bells}")

    @classmethod
    def from_row_length(cls, length: int) -> Stage:
        """Stage of a Row with ``length`` bells."""
        return cls(length)

    @property
    def name(self) -> str:
        """Conventional ringing name, or ``Stage(n)`` for unnamed sizes."""
        return _STAGE_NAMES.get(self.num_bells, f"Stage({self.num_bells})")

    def __int__(self) -> int:
        return self.num_bells

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"Stage({self.num_bells})"


Stage.MINIMUS = Stage(4)
Stage.DOUBLES = Stage(5)
Stage.MINOR = Stage(6)
Stage.TRIPLES = Stage(7)
Stage.MAJOR = Stage(8)
Stage.CATERS = Stage(9)
Stage.ROYAL = Stage(10)
Stage.CINQUES = Stage(11)
Stage.MAXIMUS = Stage(12)
Stage.SEXTUPLES = Stage(13)
Stage.FOURTEEN = Stage(14)
Stage.SEPTUPLES = Stage(15)
Stage.SIXTEEN = Stage(16)
