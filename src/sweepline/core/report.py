"""Intersection reports and report comparison."""
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
from scipy.spatial import cKDTree

from ..config.settings import intersect
from ..utils.geometry import Intersection, Point


@dataclass
class Report:
    """Everything one intersector run found, plus how hard it worked."""
    intersections: List[Intersection] = field(default_factory=list)
    num_tests: int = 0

    def __len__(self) -> int:
        return len(self.intersections)

    @property
    def points(self) -> List[Point]:
        return [i.point for i in self.intersections]

    def as_array(self) -> np.ndarray:
        """Intersection points as an (n, 2) array."""
        return np.array([p.as_tuple() for p in self.points], dtype=float).reshape(-1, 2)


@dataclass
class ReportDiff:
    """Points one report has that the other lacks."""
    missing: List[Point] = field(default_factory=list)
    extra: List[Point] = field(default_factory=list)

    @property
    def matches(self) -> bool:
        return not self.missing and not self.extra

    def __str__(self) -> str:
        return f"{len(self.missing)} missing, {len(self.extra)} extra"


def compare_reports(expected: Report, actual: Report,
                    epsilon: Optional[float] = None) -> ReportDiff:
    """Match the intersection points of two reports as multisets.

    Each expected point is paired with the closest unpaired actual point
    that lies within ``epsilon`` of it on both axes.

    Args:
        expected: Reference report, usually from brute force
        actual: Report under test
        epsilon: Matching tolerance, defaults to the configured one

    Returns:
        The unmatched points of both reports
    """
    if epsilon is None:
        epsilon = intersect.EPSILON

    expected_points = expected.points
    actual_points = actual.points
    if not expected_points or not actual_points:
        return ReportDiff(missing=list(expected_points), extra=list(actual_points))

    actual_array = actual.as_array()
    tree = cKDTree(actual_array)
    used = np.zeros(len(actual_points), dtype=bool)
    missing = []

    for point in expected_points:
        candidates = [i for i in tree.query_ball_point(point.as_tuple(), r=epsilon, p=np.inf)
                      if not used[i]]
        if not candidates:
            missing.append(point)
            continue
        # closest unused candidate
        distances = np.abs(actual_array[candidates] - point.as_tuple()).max(axis=1)
        used[candidates[int(np.argmin(distances))]] = True

    extra = [p for p, u in zip(actual_points, used) if not u]
    return ReportDiff(missing=missing, extra=extra)
