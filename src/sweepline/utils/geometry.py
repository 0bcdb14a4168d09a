"""Geometry kernel: points, segments and the segment crossing predicate."""
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config.settings import intersect


@dataclass(frozen=True)
class Point:
    """An immutable 2-D point, also used as a vector."""
    x: float
    y: float

    def __add__(self, other: 'Point') -> 'Point':
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point') -> 'Point':
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> 'Point':
        return Point(self.x * k, self.y * k)

    # scalar-point multiplication is commutative
    __rmul__ = __mul__

    def isclose(self, other: 'Point', epsilon: Optional[float] = None) -> bool:
        """Check if two points coincide within the tolerance on both axes.

        Args:
            other: The point to compare against
            epsilon: Tolerance, defaults to the configured one

        Returns:
            True if the points are spatially the same
        """
        if epsilon is None:
            epsilon = intersect.EPSILON
        return abs(self.x - other.x) < epsilon and abs(self.y - other.y) < epsilon

    def as_tuple(self):
        return (self.x, self.y)


@dataclass(frozen=True, eq=False)
class Segment:
    """A line segment between two endpoints.

    Segments are identified by ``id`` alone: two segments with the same
    endpoints but different ids are different segments.
    """
    id: int
    a: Point
    b: Point

    @classmethod
    def from_coords(cls, id: int, x1: float, y1: float, x2: float, y2: float) -> 'Segment':
        return cls(id, Point(float(x1), float(y1)), Point(float(x2), float(y2)))

    def __repr__(self):
        return (f"Segment(id={self.id}, ({self.a.x:.3f}, {self.a.y:.3f}) -> "
                f"({self.b.x:.3f}, {self.b.y:.3f}))")

    def __eq__(self, other):
        """Segments are equal if they have the same ID."""
        return isinstance(other, Segment) and self.id == other.id

    def __hash__(self):
        """Hash based on unique ID, making it usable in sets/dicts."""
        return hash(self.id)

    @property
    def is_horizontal(self) -> bool:
        return self.a.y == self.b.y


@dataclass(frozen=True)
class Intersection:
    """A crossing between two segments."""
    l1: Segment
    l2: Segment
    point: Point


def cross(v: Point, w: Point) -> float:
    """2-D cross product (z component of the 3-D cross product)."""
    return v.x * w.y - v.y * w.x


def segment_intersect(l1: Segment, l2: Segment,
                      epsilon: Optional[float] = None) -> Optional[Intersection]:
    """Find the point where two segments cross, if they do.

    Segment 1 goes from p to p + r and segment 2 from q to q + s. They
    intersect if there is a t and u such that p + t * r = q + u * s.

    Collinear segments are never reported, and neither are crossings that
    lie within ``epsilon`` (in parameter space) of an endpoint of either
    segment.

    Args:
        l1: First segment
        l2: Second segment
        epsilon: Tolerance, defaults to the configured one

    Returns:
        The intersection record, or None if the segments do not cross
    """
    if l1 == l2:
        return None
    if epsilon is None:
        epsilon = intersect.EPSILON

    rs, t, u = _solve(l1, l2)

    # r x s ~ 0: the directions are parallel. Whether (q - p) x r ~ 0 too
    # (collinear, overlaps are not reported) or not (disjoint), no result.
    if abs(rs) < epsilon:
        return None

    # Keep t and u away from 0 and 1 so endpoint contacts don't count
    if epsilon < t < 1.0 - epsilon and epsilon < u < 1.0 - epsilon:
        return Intersection(l1, l2, l1.a + t * (l1.b - l1.a))

    return None


def crossing_point(l1: Segment, l2: Segment) -> Optional[Point]:
    """Find where two segments meet, with no tolerance at all.

    Endpoint contacts and nearly parallel crossings count here. This is
    not a reporting predicate: sweeps use it to know where two segments
    swap sides, including crossings ``segment_intersect`` does not report.

    Returns:
        The meeting point, or None for parallel or disjoint segments
    """
    if l1 == l2:
        return None
    rs, t, u = _solve(l1, l2)
    if rs == 0.0:
        return None
    if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
        return l1.a + t * (l1.b - l1.a)
    return None


def _solve(l1: Segment, l2: Segment) -> Tuple[float, float, float]:
    """Solve p + t * r = q + u * s for the lines through two segments.

    Returns:
        (r x s, t, u), with t and u NaN when r x s is 0
    """
    p = l1.a
    r = l1.b - p
    q = l2.a
    s = l2.b - q

    rs = cross(r, s)
    if rs == 0.0:
        return rs, float('nan'), float('nan')
    return rs, cross(q - p, s) / rs, cross(q - p, r) / rs
