"""Line-segment intersection engine with brute-force and sweep-line strategies."""
from .utils.geometry import Intersection, Point, Segment, cross, segment_intersect
from .core.report import Report, ReportDiff, compare_reports
from .core.intersector import (
    Intersector,
    BruteForceIntersector,
    SweepLineIntersector,
    StatusOrderedSweepIntersector,
    Strategy,
    report_intersections,
)
from .core.generators import RandomUnitSquare, ShortLines, generate_segments

__version__ = "0.1.0"
