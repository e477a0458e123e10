"""
Derivation Pipeline

Expands a composition skeleton over all of its parts, proves it, groups
falseness into displayable ranges, links fragments and scores music.

Main entry point:
    derive(skeleton, config=None) -> DerivedState
"""

from .config import DerivationConfig
from .derived_state import (
    AnnotatedFragment,
    DerivedState,
    DerivedStats,
    ExpandedRow,
    FalseRowRange,
    FragLink,
    FragLinkGroups,
    RowLocation,
    RowOrigin,
)
from .pipeline import derive
from .skeleton import Fragment, Skeleton, SkeletonRow
from .timing import TimingLog

__all__ = [
    "derive",
    "DerivationConfig",
    "Skeleton",
    "Fragment",
    "SkeletonRow",
    "DerivedState",
    "DerivedStats",
    "AnnotatedFragment",
    "ExpandedRow",
    "FalseRowRange",
    "FragLink",
    "FragLinkGroups",
    "RowLocation",
    "RowOrigin",
    "TimingLog",
]
