"""
Ringing Toolkit Core Package

Shared value types and utilities used by the derivation pipeline:

1. **Permutation algebra**
   - `Bell`, `Stage` and `Row` (``core.models``)
   - `PartHeads`, the Rows that generate each part of a composition

2. **Error taxonomy**
   - Row construction and Stage mismatches raise ``ValueError`` subclasses
   - Internal invariant breaches raise `DerivationError`
"""

from .errors import (
    BellOutOfStageError,
    DerivationError,
    DuplicateBellError,
    IncompatibleStagesError,
    InvalidRowError,
)
from .models import Bell, PartHeads, Row, Stage, TREBLE
from .utils import run_len

__all__ = [
    "Bell",
    "TREBLE",
    "Stage",
    "Row",
    "PartHeads",
    "run_len",
    "InvalidRowError",
    "DuplicateBellError",
    "BellOutOfStageError",
    "IncompatibleStagesError",
    "DerivationError",
]
