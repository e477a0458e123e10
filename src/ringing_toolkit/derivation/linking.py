"""
Module: derivation.linking

Purpose:
    Decides which fragments can follow which. Fragment ``g`` can be joined
    onto fragment ``f`` when ``g`` starts with ``f``'s leftover row. Links
    through the same Row share a group id so that the renderer colours
    them alike.

Key Functions:
    - generate_fragment_links(): Link edges and per-fragment end groups

Dependencies:
    - derivation.derived_state: FragLink, FragLinkGroups

Used By:
    - derivation.pipeline: Linking phase
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ringing_toolkit.core.models import Row
from .derived_state import ExpandedRow, FragLink, FragLinkGroups

logger = logging.getLogger(__name__)


def generate_fragment_links(
    expanded_fragments: Sequence[Sequence[ExpandedRow]],
) -> Tuple[List[FragLink], List[FragLinkGroups]]:
    """
    Find every ordered pair of fragments ``(f, g)`` where ``g`` can follow ``f``.

    Only part 0 is compared: linking is a property of the skeleton, not of
    whichever part happens to be displayed. Every pair is tested,
    including a fragment against itself.

    Args:
        expanded_fragments: ExpandedRows for each fragment (each non-empty)

    Returns:
        Tuple of (links in discovery order, link groups per fragment)
    """
    # Row -> group id, assigned in the order link Rows are first seen
    group_ids: Dict[Row, int] = {}
    links: List[FragLink] = []
    tops: List[Optional[int]] = [None] * len(expanded_fragments)
    bottoms: List[Optional[int]] = [None] * len(expanded_fragments)

    for i, f in enumerate(expanded_fragments):
        leftover_row = f[-1].rows[0]
        for j, g in enumerate(expanded_fragments):
            if leftover_row != g[0].rows[0]:
                continue
            group = group_ids.setdefault(leftover_row, len(group_ids))
            links.append(FragLink(from_fragment=i, to_fragment=j, group=group))
            bottoms[i] = group
            tops[j] = group

    link_groups = [
        FragLinkGroups(link_group_top=top, link_group_bottom=bottom)
        for top, bottom in zip(tops, bottoms)
    ]
    logger.debug(f"Found {len(links)} fragment links in {len(group_ids)} groups")
    return links, link_groups
