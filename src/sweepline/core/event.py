"""Sweep events and sweep ordering."""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from ..utils.geometry import Point, Segment


class EventKind(Enum):
    """What happens to the sweep state at an event.

    Values double as the processing order of events at equal height.
    """

    START = 0          # Segment enters the sweep line
    INTERSECTION = 1   # Two segments swap order
    END = 2            # Segment leaves the sweep line

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        return self.name.lower().capitalize()


@dataclass(frozen=True)
class SweepEvent:
    """A point where the sweep state changes."""
    point: Point
    kind: EventKind
    segment: Segment
    other: Optional[Segment] = None  # second segment of an INTERSECTION

    @property
    def sort_key(self) -> Tuple[float, int, float, int]:
        # top to bottom, then starts before crossings before ends, then left to right
        return (-self.point.y, self.kind.value, self.point.x, self.segment.id)


def sweep_order(p: Point) -> Tuple[float, float]:
    """Key that sorts points the way the sweep line meets them.

    The sweep runs from high to low y. Points at the same height are met
    from left to right.
    """
    return (-p.y, p.x)


def endpoints(segment: Segment) -> Tuple[Point, Point]:
    """Return (start, end) of a segment in sweep order.

    The start is the endpoint with the greater y. For a horizontal segment
    it is the left endpoint.
    """
    if sweep_order(segment.a) <= sweep_order(segment.b):
        return segment.a, segment.b
    return segment.b, segment.a


def endpoint_events(segment: Segment) -> List[SweepEvent]:
    """Build the START and END events of a segment."""
    start, end = endpoints(segment)
    return [SweepEvent(start, EventKind.START, segment),
            SweepEvent(end, EventKind.END, segment)]
