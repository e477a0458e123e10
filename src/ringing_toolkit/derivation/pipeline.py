"""
Module: derivation.pipeline

Purpose:
    Main pipeline orchestrator. Turns a Skeleton into a DerivedState by
    expanding it over every part, proving it, coalescing falseness into
    ranges and linking fragments. The pipeline is a pure function of its
    input and is re-run in full after every edit.

Key Functions:
    - derive(): Main entry point for derivation

Dependencies:
    - derivation.expansion: Multi-part expansion and music
    - derivation.proving: Falseness detection
    - derivation.coalescing: Range coalescing
    - derivation.linking: Fragment links

Used By:
    - derivation.derived_state.DerivedState.from_skeleton
"""

from __future__ import annotations

import logging
from typing import Optional

from ringing_toolkit.core.errors import DerivationError
from .coalescing import coalesce_false_row_groups
from .config import DerivationConfig
from .derived_state import AnnotatedFragment, DerivedState, DerivedStats
from .expansion import expand_skeleton
from .linking import generate_fragment_links
from .proving import flatten_proved_rows, generate_false_row_groups
from .skeleton import Skeleton
from .timing import TimingLog, timed_phase


logger = logging.getLogger(__name__)


def derive(
    skeleton: Skeleton,
    *,
    config: Optional[DerivationConfig] = None,
) -> DerivedState:
    """
    Derive everything the renderer shows from a skeleton.

    Pipeline:
    1. Expand every skeleton row over all part heads (with music)
    2. Flatten the proved realized rows with their origins
    3. Sort and group repeated rows into falseness groups
    4. Coalesce adjacent groups into per-fragment ranges
    5. Link fragments whose leftover row starts another fragment

    Args:
        skeleton: Immutable snapshot of the composition
        config: Optional derivation configuration

    Returns:
        DerivedState with one AnnotatedFragment per skeleton fragment

    Raises:
        DerivationError: If a fragment's leftover row is marked as proved, or
            the proved row count disagrees with ``skeleton.length``

    Example:
        >>> state = derive(skeleton)
        >>> print(f"{state.stats.false_row_count} false rows")
        0 false rows
    """
    config = config or DerivationConfig()
    timing_log = TimingLog() if config.record_timings else None

    with timed_phase(timing_log, "expansion"):
        expanded_fragments = expand_skeleton(skeleton, config)

    for index, expanded_rows in enumerate(expanded_fragments):
        if expanded_rows[-1].is_proved:
            raise DerivationError(f"leftover row of fragment {index} must not be proved")

    with timed_phase(timing_log, "flatten"):
        flattened, part_length = flatten_proved_rows(expanded_fragments)
    if part_length != skeleton.length:
        raise DerivationError(
            f"proved {part_length} rows per part but the skeleton has {skeleton.length}"
        )
    with timed_phase(timing_log, "false_groups"):
        false_groups, num_false_rows = generate_false_row_groups(flattened)
    with timed_phase(timing_log, "coalesce"):
        ranges_by_fragment, num_false_groups = coalesce_false_row_groups(false_groups)
    with timed_phase(timing_log, "links"):
        fragment_links, link_groups = generate_fragment_links(expanded_fragments)

    annotated_fragments = tuple(
        AnnotatedFragment(
            expanded_rows=expanded_rows,
            false_row_ranges=tuple(ranges_by_fragment.get(index, ())),
            is_proved=not fragment.is_muted,
            link_groups=fragment_link_groups,
            x=fragment.x,
            y=fragment.y,
        )
        for index, (fragment, expanded_rows, fragment_link_groups) in enumerate(
            zip(skeleton.fragments, expanded_fragments, link_groups)
        )
    )

    logger.info(
        f"Derived {len(annotated_fragments)} fragments x {skeleton.num_parts} parts: "
        f"part length {part_length}, {num_false_rows} false rows "
        f"in {num_false_groups} groups, {len(fragment_links)} links"
    )
    if timing_log is not None:
        logger.debug(timing_log.summary())

    return DerivedState(
        annotated_fragments=annotated_fragments,
        fragment_links=tuple(fragment_links),
        stats=DerivedStats(
            part_length=part_length,
            false_row_count=num_false_rows,
            false_group_count=num_false_groups,
        ),
        part_heads=skeleton.part_heads,
        stage=skeleton.stage,
        timings=timing_log,
    )
