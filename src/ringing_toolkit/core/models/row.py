"""
Module: row

Purpose:
    Provides the Row dataclass - an ordered arrangement of Bells that is
    also used as a permutation. A Row is only ever built through validated
    entry points, so every other operation assumes it is a bijection onto
    ``0..stage`` (in the same way a ``str`` is assumed to be well formed).

Key Functions:
    - Row.rounds/backrounds/queens(stage): Trivially valid generator rows
    - Row.parse(text): Parse bell names, skipping unrecognized characters
    - Row.from_bells(bells): Checked construction
    - Row * Row: Permutation product (RHS permutes LHS)
    - Row.inverse(): Inverse permutation (also ``~row``)
    - Row.closure(): Powers of a Row up to and including rounds
    - Row.fast_hash(): Mixed-radix key in base ``stage``

Dependencies:
    - dataclasses (std)
    - math (std)
    - core.errors

Used By:
    - core.models.part_heads
    - derivation (every stage of the pipeline)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple, overload

from ..errors import (
    BellOutOfStageError,
    DerivationError,
    DuplicateBellError,
    IncompatibleStagesError,
)
from .bell import Bell
from .stage import Stage


@dataclass(frozen=True, slots=True, order=True)
class Row:
    """
    A single row of Bells; equivalently a permutation of rounds.

    Equality, ordering (lexicographic over Bells) and hashing are structural.

    Attributes:
        bells: The Bells in this Row, front to back

    Invariants:
        - Every Bell index in ``0..len(bells)`` appears exactly once
          (checked by every constructor except the ``*_unchecked`` ones)

    Example:
        >>> queens = Row.parse("13579 | 24680")
        >>> queens.stage
        Stage(10)
        >>> str(queens)
        '1357924680'
        >>> Row.parse("112345")
        Traceback (most recent call last):
        ...
        DuplicateBellError: Bell 1 would appear twice.
    """

    bells: Tuple[Bell, ...]

    # ─────────────────────────────────────────────────────────────────────────
    # Factory Methods
    # ─────────────────────────────────────────────────────────────────────────

    @classmethod
    def rounds(cls, stage: Stage) -> Row:
        """The identity permutation on ``stage`` bells (e.g. ``12345678``)."""
        return cls.from_bells_unchecked(Bell(i) for i in range(stage.num_bells))

    @classmethod
    def backrounds(cls, stage: Stage) -> Row:
        """Bells in descending order (e.g. ``87654321``)."""
        return cls.from_bells_unchecked(Bell(i) for i in reversed(range(stage.num_bells)))

    @classmethod
    def queens(cls, stage: Stage) -> Row:
        """Odd bells then even bells (e.g. ``13572468``)."""
        n = stage.num_bells
        indices = list(range(0, n, 2)) + list(range(1, n, 2))
        return cls.from_bells_unchecked(Bell(i) for i in indices)

    @classmethod
    def parse(cls, text: str) -> Row:
        """
        Parse a Row from text, skipping any characters that aren't bell names.

        Raises:
            DuplicateBellError: If a bell name appears twice
            BellOutOfStageError: If a bell doesn't fit the parsed length

        Example:
            >>> str(Row.parse("3|2|1  6|5|4  9|8|7"))
            '321654987'
        """
        bells = (Bell.from_name(c) for c in text)
        return cls.from_bells(b for b in bells if b is not None)

    @classmethod
    def from_bells(cls, bells: Iterable[Bell]) -> Row:
        """
        Create a Row from Bells, checking that the result is valid.

        Raises:
            DuplicateBellError: If any Bell appears twice
            BellOutOfStageError: If any Bell's index is >= the number of Bells
        """
        row = cls.from_bells_unchecked(bells)
        row._check_validity()
        return row

    @classmethod
    def from_indices(cls, indices: Iterable[int]) -> Row:
        """Checked construction from zero-based bell indices."""
        return cls.from_bells(Bell(i) for i in indices)

    @classmethod
    def from_bells_unchecked(cls, bells: Iterable[Bell]) -> Row:
        """
        Create a Row without the validity check.

        Only use this when validity is already provable (rounds, products and
        inverses of valid Rows). Invalid Rows make every other operation
        meaningless.
        """
        return cls(tuple(bells))

    def _check_validity(self) -> None:
        """Tick each Bell off a checklist, failing on the first bad Bell."""
        stage = self.stage
        checklist = [False] * stage.num_bells
        for bell in self.bells:
            if bell.index >= len(checklist):
                raise BellOutOfStageError(bell, stage)
            if checklist[bell.index]:
                raise DuplicateBellError(bell)
            checklist[bell.index] = True

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def stage(self) -> Stage:
        """Number of Bells in this Row."""
        return Stage.from_row_length(len(self.bells))

    def is_rounds(self) -> bool:
        """Equivalent to ``row == Row.rounds(row.stage)`` without allocating."""
        return all(bell.index == i for i, bell in enumerate(self.bells))

    def fast_hash(self) -> int:
        """
        Read the Row as a number in base ``stage``.

        Two Rows of the same Stage share a key only if they are equal. Python
        integers never overflow, so the key is exact for every Stage; use
        ``fast_hash_is_lossless`` to check whether it also fits a fixed-width
        integer (up to 6 bells in 16 bits, 9 in 32 bits, 16 in 64 bits).
        """
        base = len(self.bells)
        accum = 0
        for bell in self.bells:
            accum = accum * base + bell.index
        return accum

    @staticmethod
    def fast_hash_is_lossless(stage: Stage, bits: int) -> bool:
        """Whether every ``fast_hash`` on ``stage`` fits in ``bits`` unsigned bits."""
        n = stage.num_bells
        return n ** n <= 2 ** bits

    # ─────────────────────────────────────────────────────────────────────────
    # Permutation Algebra
    # ─────────────────────────────────────────────────────────────────────────

    def mul_unchecked(self, rhs: Row) -> Row:
        """
        Use ``rhs`` to permute this Row without comparing Stages.

        The result is only meaningful when both Rows share a Stage.
        """
        bells = self.bells
        return Row.from_bells_unchecked(bells[b.index] for b in rhs.bells)

    def __mul__(self, rhs: object) -> Row:
        """
        Use ``rhs`` to permute this Row: bell ``i`` of the result is ``self[rhs[i]]``.

        Raises:
            IncompatibleStagesError: If the Rows have different Stages
        """
        if not isinstance(rhs, Row):
            return NotImplemented
        IncompatibleStagesError.check(self.stage, rhs.stage)
        return self.mul_unchecked(rhs)

    def inverse(self) -> Row:
        """
        The unique Row ``inv`` such that ``self * inv == inv * self == rounds``.

        Example:
            >>> str(Row.parse("135246").inverse())
            '142536'
        """
        inv = [Bell(0)] * len(self.bells)
        for i, bell in enumerate(self.bells):
            inv[bell.index] = Bell(i)
        return Row.from_bells_unchecked(inv)

    def __invert__(self) -> Row:
        return self.inverse()

    def closure(self) -> List[Row]:
        """
        All the Rows formed by repeatedly permuting this Row by itself.

        The first item is always this Row and the last is always rounds. The
        powers of a permutation form a cyclic subgroup of order dividing
        ``stage!``, so the loop is capped there.

        Raises:
            DerivationError: If rounds is not reached within ``stage!`` steps
                (only possible for an invalid Row)

        Example:
            >>> [str(r) for r in Row.parse("18234567").closure()][-2:]
            ['13456782', '12345678']
        """
        limit = math.factorial(len(self.bells))
        closure: List[Row] = []
        row = self
        while len(closure) < limit:
            closure.append(row)
            if row.is_rounds():
                return closure
            row = row.mul_unchecked(self)
        raise DerivationError(f"closure of {self} did not reach rounds within {limit} steps")

    # ─────────────────────────────────────────────────────────────────────────
    # Sequence Protocol
    # ─────────────────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.bells)

    def __iter__(self) -> Iterator[Bell]:
        return iter(self.bells)

    def __reversed__(self) -> Iterator[Bell]:
        return reversed(self.bells)

    @overload
    def __getitem__(self, index: int) -> Bell: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Bell, ...]: ...

    def __getitem__(self, index):
        return self.bells[index]

    def __str__(self) -> str:
        """
        Bell names, front to back.

        Only the first ``len(BELL_NAMES)`` (34) bells have names; any bell
        beyond that displays as ``?``, so ``Row.parse(str(row)) == row`` holds
        up to 34 bells.
        """
        return "".join(bell.name for bell in self.bells)

    def __repr__(self) -> str:
        return f"Row({self})"
