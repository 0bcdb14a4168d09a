import os
import sys

import pytest

# Run against the source tree without installing, and keep pygame headless
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

from sweepline.utils.geometry import Segment


def seg(id, x1, y1, x2, y2):
    return Segment.from_coords(id, x1, y1, x2, y2)


@pytest.fixture
def crossing_pair():
    return [seg(0, 0, 0, 1, 1), seg(1, 0, 1, 1, 0)]


@pytest.fixture
def triangle():
    """Three segments crossing pairwise at three distinct points."""
    return [
        seg(0, 0.0, 0.1, 1.0, 0.6),
        seg(1, 0.0, 0.6, 1.0, 0.1),
        seg(2, 0.0, 0.5, 1.0, 0.5),
    ]
