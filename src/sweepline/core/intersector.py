"""Segment intersection strategies.

Every strategy is an ``Intersector``: constructed over a segment list,
it can be pulled one intersection at a time (it is an iterator that
resumes where it stopped) or drained at once with ``report()``.
"""
from abc import ABC, abstractmethod
from collections import Counter
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple, Type, Union
import heapq
import logging

from ..config.settings import intersect
from ..utils.geometry import Intersection, Segment, crossing_point, segment_intersect
from .event import EventKind, SweepEvent, endpoint_events, endpoints
from .report import Report
from .status import SweepStatus


class Intersector(ABC):
    """Abstract base class for intersection strategies."""

    def __init__(self, segments: Sequence[Segment], epsilon: Optional[float] = None):
        """Prepare a run over the given segments.

        Args:
            segments: The segments to intersect. Ids must be unique.
            epsilon: Tolerance, defaults to the configured one

        Raises:
            ValueError: If two segments share an id
        """
        self.segments: List[Segment] = list(segments)
        duplicates = [i for i, n in Counter(s.id for s in self.segments).items() if n > 1]
        if duplicates:
            raise ValueError(f"Duplicate segment ids: {sorted(duplicates)}")

        self.epsilon = intersect.EPSILON if epsilon is None else epsilon
        self.intersections: List[Intersection] = []
        self._num_tests = 0
        self._finished = False
        self._pending = self._run()

    def __repr__(self):
        return f"{self.__class__.__name__}(segments={len(self.segments)})"

    @property
    def test_count(self) -> int:
        """Number of pairwise tests performed so far."""
        return self._num_tests

    @property
    def finished(self) -> bool:
        return self._finished

    def __iter__(self) -> Iterator[Intersection]:
        return self

    def __next__(self) -> Intersection:
        try:
            intersection = next(self._pending)
        except StopIteration:
            if not self._finished:
                self._finished = True
                logging.debug(f"{self!r} done: {len(self.intersections)} intersections, "
                              f"{self._num_tests} tests")
            raise
        self.intersections.append(intersection)
        return intersection

    def report(self) -> Report:
        """Run to completion and return everything found, including
        intersections already pulled from the iterator."""
        for _ in self:
            pass
        return Report(list(self.intersections), self._num_tests)

    def _test(self, l1: Segment, l2: Segment) -> Optional[Intersection]:
        self._num_tests += 1
        return segment_intersect(l1, l2, self.epsilon)

    @abstractmethod
    def _run(self) -> Iterator[Intersection]:
        """Yield intersections as they are discovered."""


class BruteForceIntersector(Intersector):
    """Tests every pair of segments once, in index order."""

    def _run(self) -> Iterator[Intersection]:
        lines = self.segments
        for i in range(len(lines) - 1):
            for j in range(i + 1, len(lines)):
                intersection = self._test(lines[i], lines[j])
                if intersection:
                    yield intersection


class SweepLineIntersector(Intersector):
    """Sweeps top to bottom, testing each new segment against all active ones.

    Two segments that cross must both be active when the lower of their
    two start points is reached, so no crossing is missed.
    """

    def _run(self) -> Iterator[Intersection]:
        events = [e for line in self.segments for e in endpoint_events(line)]
        events.sort(key=lambda e: e.sort_key)

        # dict keeps activation order, so tests run in a stable order
        active: Dict[Segment, None] = {}

        for event in events:
            if event.kind == EventKind.START:
                for other in active:
                    intersection = self._test(event.segment, other)
                    if intersection:
                        yield intersection
                active[event.segment] = None
            elif event.kind == EventKind.END:
                active.pop(event.segment, None)


class StatusOrderedSweepIntersector(Intersector):
    """Bentley-Ottmann style sweep that only tests neighboring segments.

    The status structure holds the segments crossing the sweep line in x
    order. Segments are tested when they become neighbors: on insertion,
    when a segment between them ends, and when a crossing reorders them.
    Crossings found are pushed back into the event queue so the order can
    be repaired when the sweep line reaches them.
    """

    def __init__(self, segments: Sequence[Segment], epsilon: Optional[float] = None):
        super().__init__(segments, epsilon)
        self._queue: List[Tuple[Tuple[float, int, float, int], int, SweepEvent]] = []
        self._counter = 0  # Used as a tiebreaker for equal keys
        self._tested: Set[Tuple[int, int]] = set()

    def _push(self, event: SweepEvent) -> None:
        heapq.heappush(self._queue, (event.sort_key, self._counter, event))
        self._counter += 1

    def _check(self, l1: Optional[Segment], l2: Optional[Segment]) -> Optional[Intersection]:
        """Test a pair of neighbors, at most once per pair."""
        if l1 is None or l2 is None or l1 == l2:
            return None
        pair = (min(l1.id, l2.id), max(l1.id, l2.id))
        if pair in self._tested:
            return None
        self._tested.add(pair)

        intersection = self._test(l1, l2)
        # Crossings too close to an endpoint to report still reorder the status
        point = intersection.point if intersection else crossing_point(l1, l2)
        if point is not None:
            self._push(SweepEvent(point, EventKind.INTERSECTION, l1, l2))
        return intersection

    def _run(self) -> Iterator[Intersection]:
        for line in self.segments:
            for event in endpoint_events(line):
                self._push(event)

        status = SweepStatus(intersect.STATUS_TOLERANCE)

        while self._queue:
            _, _, event = heapq.heappop(self._queue)
            y = event.point.y
            segment = event.segment

            if event.kind == EventKind.START:
                if segment.is_horizontal:
                    # Lives for a single sweep position: test everything it spans
                    start, end = endpoints(segment)
                    candidates = status.between(start.x, end.x, y)
                else:
                    pos = status.insert(segment, y)
                    candidates = list(status.neighbors(pos))
                for other in candidates:
                    intersection = self._check(segment, other)
                    if intersection:
                        yield intersection

            elif event.kind == EventKind.END:
                if segment not in status:
                    continue
                pos = status.remove(segment, y)
                intersection = self._check(status.neighbor(pos, -1), status.neighbor(pos, 0))
                if intersection:
                    yield intersection

            else:
                other = event.other
                if segment not in status or other not in status:
                    continue
                i, j = status.index(segment, y), status.index(other, y)
                lo, hi = status.cluster(min(i, j), max(i, j), event.point.x, y)

                # Every segment through the crossing point meets every other
                # one there, adjacent or not
                bundle = [status[k] for k in range(lo, hi + 1)]
                for a in range(len(bundle) - 1):
                    for b in range(a + 1, len(bundle)):
                        intersection = self._check(bundle[a], bundle[b])
                        if intersection:
                            yield intersection

                status.resort(lo, hi, y)
                for k in (lo - 1, hi):
                    if k < 0:
                        continue
                    intersection = self._check(status.neighbor(k, 0), status.neighbor(k, 1))
                    if intersection:
                        yield intersection


class Strategy(Enum):
    """Available intersection strategies."""
    BRUTE_FORCE = "brute"
    SWEEP_LINE = "sweep"
    STATUS_ORDERED = "status"

    def __str__(self) -> str:
        return self.value

    @property
    def intersector(self) -> Type[Intersector]:
        return _INTERSECTORS[self]


_INTERSECTORS: Dict[Strategy, Type[Intersector]] = {
    Strategy.BRUTE_FORCE: BruteForceIntersector,
    Strategy.SWEEP_LINE: SweepLineIntersector,
    Strategy.STATUS_ORDERED: StatusOrderedSweepIntersector,
}

StrategyLike = Union[Strategy, str, Type[Intersector]]


def resolve_strategy(strategy: StrategyLike) -> Type[Intersector]:
    """Turn a strategy, its name or value, or an Intersector class into a class.

    Raises:
        ValueError: If the strategy is not known
    """
    if isinstance(strategy, type) and issubclass(strategy, Intersector):
        return strategy
    if isinstance(strategy, Strategy):
        return strategy.intersector
    if isinstance(strategy, str):
        for member in Strategy:
            if strategy.lower() in (member.value, member.name.lower()):
                return member.intersector
    raise ValueError(f"Unknown intersection strategy: {strategy!r}")


def report_intersections(segments: Sequence[Segment],
                         strategy: StrategyLike = Strategy.STATUS_ORDERED,
                         epsilon: Optional[float] = None) -> Report:
    """Find all crossings among the segments with the given strategy.

    Args:
        segments: The segments to intersect
        strategy: Which algorithm to use
        epsilon: Tolerance, defaults to the configured one

    Returns:
        The intersections found and the number of pairwise tests made
    """
    intersector = resolve_strategy(strategy)(segments, epsilon)
    report = intersector.report()
    logging.info(f"{intersector!r}: {len(report)} intersections, {report.num_tests} tests")
    return report
