"""
Module: derivation.skeleton

Purpose:
    Input models for the derivation pipeline: the immutable snapshot of a
    composition that the editor hands over after every edit. The skeleton
    is validated once here; the pipeline then trusts it.

Key Classes:
    - SkeletonRow: One skeleton row with its annotations
    - Fragment: A run of skeleton rows placed on the canvas
    - Skeleton: Stage, fragments and part heads of a composition

Dependencies:
    - dataclasses (std)
    - ringing_toolkit.core.models: Row, Stage, PartHeads

Used By:
    - derivation.expansion: Expands skeleton rows over all parts
    - derivation.pipeline: Entry point input
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from ringing_toolkit.core.errors import IncompatibleStagesError
from ringing_toolkit.core.models import PartHeads, Row, Stage


@dataclass(frozen=True, slots=True)
class SkeletonRow:
    """
    One row of a fragment before multi-part expansion.

    Attributes:
        row: The Row in part 0 terms (before applying part heads)
        call_label: Call shown next to this row (e.g. "-" or "s"), if any
        method_label: Method name shown at the start of a lead, if any
        is_lead_end: Whether a lead-end line is drawn under this row
        is_proved: Whether this row takes part in truth proving. A
            fragment's leftover row is never proved.
    """

    row: Row
    call_label: Optional[str] = None
    method_label: Optional[str] = None
    is_lead_end: bool = False
    is_proved: bool = True


@dataclass(frozen=True, slots=True)
class Fragment:
    """
    A contiguous block of skeleton rows.

    The last row is the "leftover" row: it is where the next fragment
    would continue from, and is used for linking but never proved.

    Attributes:
        rows: Skeleton rows, top to bottom (leftover row last)
        x: Canvas x coordinate
        y: Canvas y coordinate
        is_muted: Muted fragments are displayed but never proved

    Invariants:
        - At least one row (the leftover row)
    """

    rows: Tuple[SkeletonRow, ...]
    x: float = 0.0
    y: float = 0.0
    is_muted: bool = False

    def __post_init__(self) -> None:
        """Validate fragment on construction."""
        if not self.rows:
            raise ValueError("Fragment must contain at least its leftover row")

    @property
    def leftover_row(self) -> SkeletonRow:
        """The trailing row, used only to link onto other fragments."""
        return self.rows[-1]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[SkeletonRow]:
        return iter(self.rows)


@dataclass(frozen=True, slots=True)
class Skeleton:
    """
    Everything the engine reads from the composition being edited.

    Attributes:
        stage: Stage shared by every row and part head
        fragments: Fragments, in canvas order (their indices are stable
            identifiers in the derived output)
        part_heads: Part heads used to expand every row

    Invariants:
        - Every skeleton row and part head has ``stage`` bells

    Example:
        >>> frag = Fragment(rows=(
        ...     SkeletonRow(Row.rounds(Stage.MINOR)),
        ...     SkeletonRow(Row.parse("214365"), is_proved=False),
        ... ))
        >>> skeleton = Skeleton(Stage.MINOR, (frag,), PartHeads.rounds_only(Stage.MINOR))
        >>> skeleton.length
        1
    """

    stage: Stage
    fragments: Tuple[Fragment, ...] = ()
    part_heads: Optional[PartHeads] = field(default=None)

    def __post_init__(self) -> None:
        """Validate shared Stage and fill in single-part default."""
        if self.part_heads is None:
            object.__setattr__(self, "part_heads", PartHeads.rounds_only(self.stage))
        IncompatibleStagesError.check(self.part_heads.stage, self.stage)
        for fragment in self.fragments:
            for skeleton_row in fragment.rows:
                IncompatibleStagesError.check(skeleton_row.row.stage, self.stage)

    @property
    def length(self) -> int:
        """
        Number of proved rows in one part.

        ``derive`` checks the rows it actually proves against this count.
        """
        return sum(
            1
            for fragment in self.fragments
            if not fragment.is_muted
            for skeleton_row in fragment.rows
            if skeleton_row.is_proved
        )

    @property
    def num_parts(self) -> int:
        """Number of parts (one per part head)."""
        return len(self.part_heads)

    def fragment_position(self, index: int) -> Optional[Tuple[float, float]]:
        """Canvas (x, y) of a fragment, or None if there is no such fragment."""
        if 0 <= index < len(self.fragments):
            fragment = self.fragments[index]
            return (fragment.x, fragment.y)
        return None
