"""Status structure: segments crossing the sweep line, ordered left to right."""
from functools import cmp_to_key
from typing import Iterator, List, Optional, Set, Tuple

from ..utils.geometry import Segment
from .event import endpoints


def x_at(segment: Segment, y: float) -> float:
    """X coordinate where a segment meets the horizontal line at height y."""
    start, end = endpoints(segment)
    if start.y == end.y:
        return start.x
    return start.x + (start.y - y) * (end.x - start.x) / (start.y - end.y)


def descent_slope(segment: Segment) -> float:
    """Change in x per unit of downward sweep travel."""
    start, end = endpoints(segment)
    if start.y == end.y:
        return float('inf')
    return (end.x - start.x) / (start.y - end.y)


class SweepStatus:
    """Ordered sequence of the segments currently crossed by the sweep line.

    Order is by x at the current sweep height. Two segments whose x
    coordinates differ by less than ``tolerance`` are treated as meeting at
    the same point, and are ordered by where they go below the sweep line
    (then by id, so the order is total).
    """

    def __init__(self, tolerance: float):
        self.tolerance = tolerance
        self._items: List[Segment] = []
        self._members: Set[Segment] = set()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._items)

    def __contains__(self, segment: Segment) -> bool:
        return segment in self._members

    def __getitem__(self, index: int) -> Segment:
        return self._items[index]

    def compare(self, s1: Segment, s2: Segment, y: float) -> int:
        """Three-way comparison of two segments at sweep height y."""
        x1, x2 = x_at(s1, y), x_at(s2, y)
        if abs(x1 - x2) >= self.tolerance:
            return -1 if x1 < x2 else 1
        d1, d2 = descent_slope(s1), descent_slope(s2)
        if d1 != d2:
            return -1 if d1 < d2 else 1
        if s1.id != s2.id:
            return -1 if s1.id < s2.id else 1
        return 0

    def insert(self, segment: Segment, y: float) -> int:
        """Insert a segment at its place at height y.

        Returns:
            The index the segment was inserted at
        """
        lo, hi = 0, len(self._items)
        while lo < hi:
            mid = (lo + hi) // 2
            if self.compare(segment, self._items[mid], y) < 0:
                hi = mid
            else:
                lo = mid + 1
        self._items.insert(lo, segment)
        self._members.add(segment)
        return lo

    def remove(self, segment: Segment, y: Optional[float] = None) -> int:
        """Remove a segment.

        Args:
            segment: The segment to remove
            y: Current sweep height, used to locate the segment

        Returns:
            The index the segment was at
        """
        pos = self.index(segment, y)
        del self._items[pos]
        self._members.discard(segment)
        return pos

    def index(self, segment: Segment, y: Optional[float] = None) -> int:
        """Position of a segment in the status.

        With the sweep height the search starts from where binary search
        puts the segment and widens outward from there, which finds it in
        a few steps unless the order around it is stale.

        Raises:
            ValueError: If the segment is not in the status
        """
        if segment not in self._members:
            raise ValueError(f"{segment!r} is not in the status")
        if y is None:
            return self._items.index(segment)

        n = len(self._items)
        guess = self._bisect(segment, y)
        for offset in range(n + 1):
            for k in (guess - offset, guess + offset):
                if 0 <= k < n and self._items[k] is segment:
                    return k
        return self._items.index(segment)

    def _bisect(self, segment: Segment, y: float) -> int:
        lo, hi = 0, len(self._items)
        while lo < hi:
            mid = (lo + hi) // 2
            if self.compare(self._items[mid], segment, y) < 0:
                lo = mid + 1
            else:
                hi = mid
        return lo

    def neighbor(self, pos: int, offset: int) -> Optional[Segment]:
        """Return the segment ``offset`` places away from ``pos``, if any."""
        n = pos + offset
        if 0 <= n < len(self._items):
            return self._items[n]
        return None

    def neighbors(self, pos: int) -> Tuple[Optional[Segment], Optional[Segment]]:
        """Return the (left, right) neighbors of the segment at ``pos``."""
        return self.neighbor(pos, -1), self.neighbor(pos, 1)

    def resort(self, lo: int, hi: int, y: float) -> None:
        """Re-establish the order of the block ``lo..hi`` (inclusive) at height y."""
        block = self._items[lo:hi + 1]
        block.sort(key=cmp_to_key(lambda s1, s2: self.compare(s1, s2, y)))
        self._items[lo:hi + 1] = block

    def cluster(self, lo: int, hi: int, x: float, y: float) -> Tuple[int, int]:
        """Widen the block ``lo..hi`` by neighbors passing within tolerance of (x, y).

        Returns:
            The bounds (inclusive) of every segment through that point
        """
        while lo > 0 and abs(x_at(self._items[lo - 1], y) - x) < self.tolerance:
            lo -= 1
        last = len(self._items) - 1
        while hi < last and abs(x_at(self._items[hi + 1], y) - x) < self.tolerance:
            hi += 1
        return lo, hi

    def between(self, x_lo: float, x_hi: float, y: float) -> List[Segment]:
        """Return the segments meeting height y within ``[x_lo, x_hi]``."""
        lo, hi = x_lo - self.tolerance, x_hi + self.tolerance
        return [s for s in self._items if lo <= x_at(s, y) <= hi]
