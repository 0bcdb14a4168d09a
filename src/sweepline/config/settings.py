"""Intersection engine configuration settings."""
from dataclasses import dataclass
from typing import Optional, Tuple
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(module)s:%(lineno)d %(levelname)s %(asctime)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
    handlers=[
        logging.StreamHandler(),
    ]
)


@dataclass
class IntersectConfig:
    """Numeric tolerances of the geometry kernel and the sweeps."""
    # Parallel/collinear detection, endpoint margin in parameter space,
    # and point matching between reports
    EPSILON: float = 1e-2
    # Sweep status: x coordinates closer than this are the same point.
    # Deliberately much tighter than EPSILON: a 1e-2 tie band would order
    # segments that only pass near each other by direction, not position.
    STATUS_TOLERANCE: float = 1e-9


@dataclass
class GeneratorConfig:
    """Random segment generation configuration."""
    COUNT: int = 1000
    ALGORITHM: str = "short"  # short, unit
    SEED: Optional[int] = None
    MAX_SHORT_LENGTH: float = 0.25


@dataclass
class RenderConfig:
    """Raster output configuration."""
    WIDTH: int = 1000
    HEIGHT: int = 1000
    SCALE: float = 900.0
    OFFSET: Tuple[float, float] = (50.0, 50.0)
    BACKGROUND_COLOR: Tuple[int, int, int] = (255, 255, 255)
    SEGMENT_COLOR: Tuple[int, int, int] = (255, 0, 0)
    POINT_COLOR: Tuple[int, int, int] = (0, 0, 255)
    SEGMENT_WIDTH: int = 2
    POINT_RADIUS: int = 5
    OUTPUT: str = "output.png"
    CAPTION: str = "Segment intersections"


# Create global instances
intersect = IntersectConfig()
generator = GeneratorConfig()
render = RenderConfig()
