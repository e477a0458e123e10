"""
Core Models Package

Immutable, validated value types for the permutation algebra.

All models in this package are frozen dataclasses. A Row is checked once,
when it is built, and every later operation relies on that check. This
makes Rows safe to share between fragments, parts and derivations, and
usable as dict keys or set members.
"""

from .bell import Bell, TREBLE
from .stage import Stage
from .row import Row
from .part_heads import PartHeads

__all__ = [
    "Bell",
    "TREBLE",
    "Stage",
    "Row",
    "PartHeads",
]
