"""
Module: derivation.derived_state

Purpose:
    Output models of the derivation pipeline - everything the rendering
    layer needs to draw one snapshot of a composition. All of it is
    recomputed from scratch on every derivation.

Key Classes:
    - RowOrigin: (part, fragment, row) of one realized row
    - RowLocation: (fragment, row), the part-independent location
    - ExpandedRow: One skeleton row realized in every part
    - FalseRowRange: Inclusive range of rows sharing a falseness group
    - FragLink / FragLinkGroups: Fragment adjacency and end colouring
    - AnnotatedFragment: Everything needed to draw one fragment
    - DerivedStats: Summary statistics
    - DerivedState: The aggregate result, with point queries

Dependencies:
    - dataclasses (std)
    - ringing_toolkit.core.models: Row, Stage, PartHeads

Used By:
    - derivation.expansion, proving, coalescing, linking, pipeline
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Tuple

from ringing_toolkit.core.models import PartHeads, Row, Stage

if TYPE_CHECKING:
    from .config import DerivationConfig
    from .skeleton import Skeleton
    from .timing import TimingLog


@dataclass(frozen=True, slots=True)
class RowOrigin:
    """Where one realized Row comes from: its part, fragment and row index."""

    part: int
    fragment: int
    row: int

    @property
    def location(self) -> RowLocation:
        """This origin without the part index."""
        return RowLocation(self.fragment, self.row)


@dataclass(frozen=True, slots=True, order=True)
class RowLocation:
    """
    Where a row sits on screen, regardless of part.

    Ordered by fragment index then row index; range coalescing depends on
    this ordering.
    """

    fragment: int
    row: int


@dataclass(frozen=True, slots=True)
class ExpandedRow:
    """
    One on-screen skeleton row, realized in every part.

    Attributes:
        rows: One Row per part, in part-head order
        call_label: Call annotation, if any
        method_label: Method annotation, if any
        is_lead_end: Whether a lead-end line follows this row
        is_proved: Whether these Rows take part in truth proving
        music_highlights: For each bell position, the parts whose Row has
            music covering that position

    Example:
        For skeleton row ``21345678`` under part heads ``12345678``,
        ``18234567``, ... the realized rows are ``21345678``, ``81234567``,
        ``71823456``, ... and ``music_highlights[7] == (0, 1, 2, 3)``.
    """

    rows: Tuple[Row, ...]
    call_label: Optional[str] = None
    method_label: Optional[str] = None
    is_lead_end: bool = False
    is_proved: bool = True
    music_highlights: Tuple[Tuple[int, ...], ...] = ()


@dataclass(frozen=True, slots=True)
class FalseRowRange:
    """
    Rows ``start..=end`` of a fragment that are false in the same way.

    Invariants:
        - start <= end
    """

    fragment: int
    start: int
    end: int
    group: int

    def __post_init__(self) -> None:
        """Validate range on construction."""
        if self.start > self.end:
            raise ValueError(f"start must be <= end: {self.start} > {self.end}")


@dataclass(frozen=True, slots=True)
class FragLink:
    """Fragment ``to_fragment`` can be joined onto the end of ``from_fragment``."""

    from_fragment: int
    to_fragment: int
    group: int


@dataclass(frozen=True, slots=True)
class FragLinkGroups:
    """Link groups touching the top and bottom of a fragment (colours its ends)."""

    link_group_top: Optional[int] = None
    link_group_bottom: Optional[int] = None


@dataclass(frozen=True, slots=True)
class AnnotatedFragment:
    """Everything the renderer needs to draw one fragment."""

    expanded_rows: Tuple[ExpandedRow, ...]
    false_row_ranges: Tuple[FalseRowRange, ...] = ()
    is_proved: bool = True
    link_groups: FragLinkGroups = FragLinkGroups()
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True, slots=True)
class DerivedStats:
    """
    Summary statistics shown alongside the composition.

    Attributes:
        part_length: Proved rows per part
        false_row_count: Realized rows involved in any falseness
        false_group_count: Coalesced falseness groups shown to the user
    """

    part_length: int
    false_row_count: int
    false_group_count: int


@dataclass(frozen=True, slots=True)
class DerivedState:
    """
    The full result of deriving a skeleton.

    Attributes:
        annotated_fragments: One entry per skeleton fragment, same order
        fragment_links: Every fragment pair that can be joined
        stats: Summary statistics
        part_heads: Part heads the composition was expanded with
        stage: Stage of the composition
        timings: Per-phase durations, if timing was enabled
    """

    annotated_fragments: Tuple[AnnotatedFragment, ...]
    fragment_links: Tuple[FragLink, ...]
    stats: DerivedStats
    part_heads: PartHeads
    stage: Stage
    timings: Optional[TimingLog] = None

    @classmethod
    def from_skeleton(
        cls,
        skeleton: Skeleton,
        config: Optional[DerivationConfig] = None,
    ) -> DerivedState:
        """Derive a new DerivedState from a skeleton (see ``pipeline.derive``)."""
        from .pipeline import derive
        return derive(skeleton, config=config)

    # ─────────────────────────────────────────────────────────────────────────
    # Point Queries
    # ─────────────────────────────────────────────────────────────────────────

    def get_row(self, part: int, fragment: int, row: int) -> Optional[Row]:
        """The realized Row at a location, or None if any index is out of range."""
        if not 0 <= fragment < len(self.annotated_fragments):
            return None
        expanded_rows = self.annotated_fragments[fragment].expanded_rows
        if not 0 <= row < len(expanded_rows):
            return None
        rows = expanded_rows[row].rows
        if not 0 <= part < len(rows):
            return None
        return rows[part]

    def get_part_head(self, part: int) -> Optional[Row]:
        """The part head at ``part``, or None if there is no such part."""
        return self.part_heads.get(part)
