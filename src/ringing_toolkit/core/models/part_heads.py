"""
Module: part_heads

Purpose:
    Provides the PartHeads dataclass - the ordered list of Rows that each
    generate one part of a multi-part composition by permuting the shared
    skeleton.

Key Functions:
    - PartHeads.parse(text, stage): Parse generators and build their group
    - PartHeads.from_rows(rows): Use the given Rows verbatim
    - PartHeads.is_group(): Whether the set is closed under multiplication
    - PartHeads.get(i): Point query (None if out of range)

Dependencies:
    - dataclasses (std)
    - math (std)
    - re (std)
    - core.models.row.Row

Used By:
    - derivation.skeleton.Skeleton
    - derivation.derived_state.DerivedState
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from ..errors import DerivationError, IncompatibleStagesError
from .row import Row
from .stage import Stage


# Generators are separated by commas, semicolons or newlines
_SEPARATOR = re.compile(r"[,;\n]")


@dataclass(frozen=True, slots=True)
class PartHeads:
    """
    Ordered part-head Rows sharing one Stage.

    Part 0 is displayed by default; when the part heads come from ``parse``
    it is always rounds.

    Attributes:
        rows: Part-head Rows, in part order
        stage: Stage shared by every part head

    Invariants:
        - At least one part head
        - Every part head has ``stage`` bells

    Example:
        >>> heads = PartHeads.parse("18234567", Stage.MAJOR)
        >>> len(heads)
        7
        >>> str(heads[1])
        '18234567'
        >>> heads.is_group()
        True
    """

    rows: Tuple[Row, ...]
    stage: Stage

    def __post_init__(self) -> None:
        """Validate part heads on construction."""
        if not self.rows:
            raise ValueError("PartHeads needs at least one row")
        for row in self.rows:
            IncompatibleStagesError.check(row.stage, self.stage)

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def rounds_only(cls, stage: Stage) -> PartHeads:
        """A one-part composition."""
        return cls(rows=(Row.rounds(stage),), stage=stage)

    @classmethod
    def from_rows(cls, rows: Iterable[Row]) -> PartHeads:
        """
        Use ``rows`` as the part heads, in order and without adding rounds.

        Raises:
            ValueError: If ``rows`` is empty
            IncompatibleStagesError: If the rows do not share a Stage
        """
        rows = tuple(rows)
        if not rows:
            raise ValueError("PartHeads needs at least one row")
        return cls(rows=rows, stage=rows[0].stage)

    @classmethod
    def parse(cls, text: str, stage: Stage) -> PartHeads:
        """
        Parse generator Rows and expand them into the group they generate.

        The result starts with rounds, followed by the remaining group
        elements in the order they are found by repeatedly multiplying
        known elements by each generator. A single generator therefore
        gives rounds followed by its closure.

        Raises:
            InvalidRowError: If a generator is not a valid Row
            IncompatibleStagesError: If a generator's Stage differs from ``stage``
        """
        generators: List[Row] = []
        for chunk in _SEPARATOR.split(text):
            if not chunk.strip():
                continue
            row = Row.parse(chunk)
            IncompatibleStagesError.check(row.stage, stage)
            generators.append(row)
        return cls(rows=tuple(_generate_group(generators, stage)), stage=stage)

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def get(self, index: int) -> Optional[Row]:
        """The part head at ``index``, or None if there is no such part."""
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def is_group(self) -> bool:
        """Whether every product of two part heads is itself a part head."""
        members: Set[Row] = set(self.rows)
        return all(a.mul_unchecked(b) in members for a in self.rows for b in self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> Row:
        return self.rows[index]

    def __str__(self) -> str:
        return ", ".join(str(r) for r in self.rows)


def _generate_group(generators: List[Row], stage: Stage) -> List[Row]:
    """Breadth-first closure of ``generators`` under right multiplication."""
    rounds = Row.rounds(stage)
    elements: List[Row] = [rounds]
    seen: Set[Row] = {rounds}
    limit = math.factorial(stage.num_bells)

    # Walk the elements list while extending it; each new element is tried
    # against every generator exactly once
    cursor = 0
    while cursor < len(elements):
        current = elements[cursor]
        cursor += 1
        for generator in generators:
            product = current.mul_unchecked(generator)
            if product not in seen:
                if len(elements) >= limit:
                    raise DerivationError(
                        f"part-head group on {stage} exceeded {limit} elements"
                    )
                seen.add(product)
                elements.append(product)
    return elements
