"""Random segment generators for benchmarks and tests."""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type, Union
import logging
import math

import numpy as np

from ..config.settings import generator as config
from ..utils.geometry import Point, Segment


def random_unit_point(rng: np.random.Generator) -> Point:
    """Uniform random point in the unit square."""
    x, y = rng.random(2)
    return Point(float(x), float(y))


def random_point_in_circle(center: Point, radius: float, rng: np.random.Generator) -> Point:
    """Random point around a center, uniform in polar coordinates.

    Args:
        center: Center of the circle
        radius: Circle radius
        rng: Random number generator

    Returns:
        A point at most ``radius`` away from ``center``
    """
    r = rng.uniform(0.0, radius)
    theta = rng.uniform(0.0, 2.0 * math.pi)
    return Point(float(center.x + r * math.cos(theta)),
                 float(center.y + r * math.sin(theta)))


class SegmentGenerator(ABC):
    """Produces one random segment at a time."""

    @abstractmethod
    def segment(self, id: int, rng: np.random.Generator) -> Segment:
        """Create a segment with the given id."""


class RandomUnitSquare(SegmentGenerator):
    """Both endpoints uniform in the unit square. Produces long, crowded segments."""

    def segment(self, id: int, rng: np.random.Generator) -> Segment:
        return Segment(id, random_unit_point(rng), random_unit_point(rng))


class ShortLines(SegmentGenerator):
    """Start uniform in the unit square, end within a short random radius of it."""

    def __init__(self, max_length: Optional[float] = None):
        self.max_length = config.MAX_SHORT_LENGTH if max_length is None else max_length

    def segment(self, id: int, rng: np.random.Generator) -> Segment:
        start = random_unit_point(rng)
        length = rng.uniform(0.0, self.max_length)
        return Segment(id, start, random_point_in_circle(start, length, rng))


GENERATORS: Dict[str, Type[SegmentGenerator]] = {
    "unit": RandomUnitSquare,
    "short": ShortLines,
}

GeneratorLike = Union[str, SegmentGenerator, Type[SegmentGenerator]]


def resolve_generator(generator: GeneratorLike) -> SegmentGenerator:
    """Turn a generator name, class or instance into an instance.

    Raises:
        ValueError: If the name is not known
    """
    if isinstance(generator, SegmentGenerator):
        return generator
    if isinstance(generator, type) and issubclass(generator, SegmentGenerator):
        return generator()
    if isinstance(generator, str) and generator in GENERATORS:
        return GENERATORS[generator]()
    raise ValueError(f"Unknown segment generator: {generator!r}")


def generate_segments(count: int,
                      generator: GeneratorLike = config.ALGORITHM,
                      rng: Union[np.random.Generator, int, None] = None,
                      first_id: int = 0) -> List[Segment]:
    """Generate random segments with consecutive ids.

    Args:
        count: Number of segments
        generator: Generator name ("unit", "short"), class or instance
        rng: Random number generator, or a seed for a new one
        first_id: Id of the first segment

    Returns:
        The segments, ids ``first_id`` to ``first_id + count - 1``

    Raises:
        ValueError: If count is negative or the generator is unknown
    """
    if count < 0:
        raise ValueError(f"Segment count must not be negative, got {count}")
    gen = resolve_generator(generator)
    if not isinstance(rng, np.random.Generator):
        rng = np.random.default_rng(rng)

    segments = [gen.segment(first_id + i, rng) for i in range(count)]
    logging.debug(f"Generated {count} segments with {gen.__class__.__name__}")
    return segments
