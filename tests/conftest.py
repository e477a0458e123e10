import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import ringing_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from ringing_toolkit.core.models import PartHeads, Row, Stage
from ringing_toolkit.derivation.skeleton import Fragment, Skeleton, SkeletonRow


# Plain hunt on four bells: eight distinct rows, then back to rounds
PLAIN_HUNT_MINIMUS = ["1234", "2143", "2413", "4231", "4321", "3412", "3142", "1324", "1234"]


# Common test fixtures
@pytest.fixture
def make_fragment():
    """
    Build a Fragment from row strings.

    Every row is proved except the last (leftover) row.
    """
    def _make(rows, *, x=0.0, y=0.0, is_muted=False):
        skeleton_rows = [SkeletonRow(Row.parse(r)) for r in rows[:-1]]
        skeleton_rows.append(SkeletonRow(Row.parse(rows[-1]), is_proved=False))
        return Fragment(rows=tuple(skeleton_rows), x=x, y=y, is_muted=is_muted)
    return _make


@pytest.fixture
def make_skeleton(make_fragment):
    """Build a Skeleton from lists of row strings (one list per fragment)."""
    def _make(*fragments, stage=Stage.MINIMUS, part_heads=None):
        return Skeleton(
            stage=stage,
            fragments=tuple(make_fragment(rows) for rows in fragments),
            part_heads=part_heads,
        )
    return _make


@pytest.fixture
def cyclic_minimus_heads():
    """Four cyclic part heads on four bells: 1234, 2341, 3412, 4123."""
    return PartHeads.parse("2341", Stage.MINIMUS)


@pytest.fixture
def plain_hunt_minimus():
    """Row strings of a plain course of minimus, ending with the leftover rounds."""
    return list(PLAIN_HUNT_MINIMUS)
