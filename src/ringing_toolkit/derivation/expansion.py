"""
Module: derivation.expansion

Purpose:
    Multi-part fan-out. Every skeleton row is permuted by every part head,
    producing the realized Rows that the rest of the pipeline works on.
    This is the only place where parts are multiplied out.

Key Functions:
    - expand_row(): Realize one skeleton Row in every part
    - expand_fragment(): Build ExpandedRows for one fragment
    - expand_skeleton(): Build ExpandedRows for every fragment

Dependencies:
    - ringing_toolkit.core.models: Row, PartHeads
    - derivation.music: Music highlighting

Used By:
    - derivation.pipeline: First phase of derivation
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ringing_toolkit.core.models import PartHeads, Row, Stage
from .config import DerivationConfig
from .derived_state import ExpandedRow
from .music import calculate_music
from .skeleton import Fragment, Skeleton, SkeletonRow

logger = logging.getLogger(__name__)


def expand_row(row: Row, part_heads: PartHeads) -> Tuple[Row, ...]:
    """
    Realize ``row`` in every part, as ``part_head * row``.

    Stages are not re-checked here; Skeleton validates them once.
    """
    return tuple(part_head.mul_unchecked(row) for part_head in part_heads)


def expand_skeleton_row(
    skeleton_row: SkeletonRow,
    part_heads: PartHeads,
    stage: Stage,
    *,
    is_muted: bool = False,
    min_run_length: int = 4,
) -> ExpandedRow:
    """
    Build the ExpandedRow for one skeleton row.

    Args:
        skeleton_row: Row and annotations from the skeleton
        part_heads: Part heads to realize the row with
        stage: Stage of the composition
        is_muted: Whether the owning fragment is muted (never proved)
        min_run_length: Shortest run that counts as music
    """
    rows = expand_row(skeleton_row.row, part_heads)
    return ExpandedRow(
        rows=rows,
        call_label=skeleton_row.call_label,
        method_label=skeleton_row.method_label,
        is_lead_end=skeleton_row.is_lead_end,
        is_proved=skeleton_row.is_proved and not is_muted,
        music_highlights=calculate_music(rows, stage, min_run_length),
    )


def expand_fragment(
    fragment: Fragment,
    part_heads: PartHeads,
    stage: Stage,
    config: Optional[DerivationConfig] = None,
) -> Tuple[ExpandedRow, ...]:
    """Build the ExpandedRows of one fragment, top to bottom."""
    config = config or DerivationConfig()
    return tuple(
        expand_skeleton_row(
            skeleton_row,
            part_heads,
            stage,
            is_muted=fragment.is_muted,
            min_run_length=config.music_min_run_length,
        )
        for skeleton_row in fragment.rows
    )


def expand_skeleton(
    skeleton: Skeleton,
    config: Optional[DerivationConfig] = None,
) -> List[Tuple[ExpandedRow, ...]]:
    """
    Expand every fragment of ``skeleton`` over all of its parts.

    Returns:
        One tuple of ExpandedRows per fragment, in fragment order
    """
    config = config or DerivationConfig()
    expanded = [
        expand_fragment(fragment, skeleton.part_heads, skeleton.stage, config)
        for fragment in skeleton.fragments
    ]
    logger.debug(
        f"Expanded {len(expanded)} fragments over {skeleton.num_parts} parts"
    )
    return expanded
