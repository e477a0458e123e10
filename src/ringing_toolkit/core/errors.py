"""
Module: core.errors

Purpose:
    Exception taxonomy for the permutation algebra and the derivation
    pipeline. Row construction and multiplication failures are ordinary
    ValueErrors so callers can reject or re-prompt input; DerivationError
    marks a breached internal invariant.

Key Classes:
    - InvalidRowError: Base class for Row construction failures
    - DuplicateBellError: A Bell would appear twice in a Row
    - BellOutOfStageError: A Bell does not fit the Row's Stage
    - IncompatibleStagesError: Two Rows of different Stage were combined
    - DerivationError: Internal consistency check failed

Dependencies:
    - core.models.bell, core.models.stage (TYPE_CHECKING only)

Used By:
    - core.models.row
    - core.models.part_heads
    - derivation.skeleton
    - derivation.pipeline
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.bell import Bell
    from .models.stage import Stage


class InvalidRowError(ValueError):
    """Raised when a sequence of Bells does not form a valid Row."""


class DuplicateBellError(InvalidRowError):
    """
    A Bell would appear twice in the new Row (e.g. ``113456``).

    By the pigeonhole principle no ``MissingBell`` error is needed: a missing
    Bell always shows up as a duplicate or an out-of-range Bell elsewhere.
    """

    def __init__(self, bell: Bell):
        super().__init__(f"Bell {bell} would appear twice.")
        self.bell = bell

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DuplicateBellError) and other.bell == self.bell

    def __hash__(self) -> int:
        return hash(("duplicate", self.bell))


class BellOutOfStageError(InvalidRowError):
    """A Bell is not within the Stage of the new Row (e.g. ``7`` in ``12745``)."""

    def __init__(self, bell: Bell, stage: Stage):
        super().__init__(f"Bell {bell} is not within the stage {stage}")
        self.bell = bell
        self.stage = stage

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, BellOutOfStageError)
            and other.bell == self.bell
            and other.stage == self.stage
        )

    def __hash__(self) -> int:
        return hash(("out_of_stage", self.bell, self.stage))


class IncompatibleStagesError(ValueError):
    """
    Raised when two Rows (or a Row and a Stage) of different Stage are combined.

    Attributes:
        lhs_stage: Stage of the Row being permuted
        rhs_stage: Stage of the Row doing the permuting
    """

    def __init__(self, lhs_stage: Stage, rhs_stage: Stage):
        super().__init__(f"Incompatible stages: {lhs_stage} (lhs), {rhs_stage} (rhs)")
        self.lhs_stage = lhs_stage
        self.rhs_stage = rhs_stage

    @classmethod
    def check(cls, lhs_stage: Stage, rhs_stage: Stage) -> None:
        """Raise IncompatibleStagesError unless the two stages are equal."""
        if lhs_stage != rhs_stage:
            raise cls(lhs_stage, rhs_stage)


class DerivationError(RuntimeError):
    """
    An internal consistency check failed.

    Never raised for a valid skeleton; signals a contract breach upstream
    (e.g. a fragment whose leftover row is marked as proved).
    """
