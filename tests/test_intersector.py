import math

import pytest

from sweepline.core.generators import generate_segments
from sweepline.core.intersector import (
    BruteForceIntersector,
    Intersector,
    StatusOrderedSweepIntersector,
    Strategy,
    SweepLineIntersector,
    report_intersections,
    resolve_strategy,
)
from sweepline.core.report import compare_reports
from conftest import seg

ALL_STRATEGIES = list(Strategy)
SWEEPS = [Strategy.SWEEP_LINE, Strategy.STATUS_ORDERED]


def pairs(report):
    return {frozenset((i.l1.id, i.l2.id)) for i in report.intersections}


def star(count, cx=0.5, cy=0.5, radius=0.5, first_id=0):
    """Diameters of a circle at evenly spread angles, all through its centre."""
    segments = []
    for i in range(count):
        angle = math.pi * i / count
        dx, dy = radius * math.cos(angle), radius * math.sin(angle)
        segments.append(seg(first_id + i, cx - dx, cy - dy, cx + dx, cy + dy))
    return segments


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_single_crossing(strategy, crossing_pair):
    report = report_intersections(crossing_pair, strategy)
    assert len(report) == 1
    assert report.intersections[0].point.x == pytest.approx(0.5)
    assert report.intersections[0].point.y == pytest.approx(0.5)
    assert report.num_tests == 1


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_parallel_segments(strategy):
    report = report_intersections([seg(0, 0, 0, 1, 0), seg(1, 0, 1, 1, 1)], strategy)
    assert len(report) == 0


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_collinear_overlap(strategy):
    report = report_intersections([seg(0, 0, 0, 2, 0), seg(1, 1, 0, 3, 0)], strategy)
    assert len(report) == 0


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_triangle_of_crossings(strategy, triangle):
    report = report_intersections(triangle, strategy)
    assert len(report) == 3
    assert pairs(report) == {frozenset((0, 1)), frozenset((0, 2)), frozenset((1, 2))}
    assert report.num_tests <= 3


def test_brute_force_triangle_test_count(triangle):
    assert report_intersections(triangle, Strategy.BRUTE_FORCE).num_tests == 3


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
@pytest.mark.parametrize("segments", [[], [seg(0, 0, 0, 1, 1)]])
def test_fewer_than_two_segments(strategy, segments):
    report = report_intersections(segments, strategy)
    assert report.intersections == []
    assert report.num_tests == 0


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_duplicate_coordinates_are_not_skipped(strategy):
    # Two copies of one diagonal, each crossing the other diagonal
    segments = [seg(0, 0, 0, 1, 1), seg(1, 0, 0, 1, 1), seg(2, 0, 1, 1, 0)]
    report = report_intersections(segments, strategy)
    assert pairs(report) == {frozenset((0, 2)), frozenset((1, 2))}


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_horizontal_segment_crossing_many(strategy):
    segments = [seg(0, 0.0, 0.5, 1.0, 0.5)]
    segments += [seg(i, 0.1 * i, 1.0, 0.1 * i + 0.05, 0.0) for i in range(1, 9)]
    report = report_intersections(segments, strategy)
    assert pairs(report) == {frozenset((0, i)) for i in range(1, 9)}


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_vertical_segments(strategy):
    segments = [seg(0, 0.5, 0.0, 0.5, 1.0), seg(1, 0.0, 0.3, 1.0, 0.7)]
    report = report_intersections(segments, strategy)
    assert len(report) == 1
    assert report.intersections[0].point.x == pytest.approx(0.5)
    assert report.intersections[0].point.y == pytest.approx(0.5)


def test_brute_force_tests_every_pair():
    segments = generate_segments(25, "short", rng=3)
    assert report_intersections(segments, Strategy.BRUTE_FORCE).num_tests == 25 * 24 // 2


def test_brute_force_reports_pairs_in_index_order(triangle):
    report = report_intersections(triangle, Strategy.BRUTE_FORCE)
    assert [(i.l1.id, i.l2.id) for i in report.intersections] == [(0, 1), (0, 2), (1, 2)]


@pytest.mark.parametrize("strategy", SWEEPS)
@pytest.mark.parametrize("generator, count", [("short", 80), ("unit", 30)])
@pytest.mark.parametrize("seed", range(5))
def test_sweeps_match_brute_force(strategy, generator, count, seed):
    segments = generate_segments(count, generator, rng=seed)
    oracle = report_intersections(segments, Strategy.BRUTE_FORCE)
    report = report_intersections(segments, strategy)

    assert compare_reports(oracle, report).matches
    assert pairs(report) == pairs(oracle)
    assert report.num_tests <= count * (count - 1) // 2


@pytest.mark.parametrize("strategy", SWEEPS)
def test_sweeps_prune_tests_on_short_lines(strategy):
    segments = generate_segments(200, "short", rng=11)
    report = report_intersections(segments, strategy)
    assert report.num_tests < 200 * 199 // 2


def test_status_ordered_tests_fewer_pairs_than_active_set():
    segments = generate_segments(300, "short", rng=5)
    active = report_intersections(segments, Strategy.SWEEP_LINE)
    ordered = report_intersections(segments, Strategy.STATUS_ORDERED)
    assert ordered.num_tests <= active.num_tests


def test_active_set_worst_case_tests_every_pair():
    # Every segment spans the full height, so all are active together
    n = 6
    segments = [seg(i, i / n, 1.0, i / n, 0.0) for i in range(n)]
    report = report_intersections(segments, Strategy.SWEEP_LINE)
    assert report.num_tests == n * (n - 1) // 2


@pytest.mark.parametrize("cls", [BruteForceIntersector, SweepLineIntersector, StatusOrderedSweepIntersector])
def test_incremental_matches_batch(cls):
    segments = generate_segments(60, "unit", rng=7)
    batch = cls(segments).report()

    intersector = cls(segments)
    pulled = [next(intersector) for _ in range(5)]
    assert intersector.test_count <= batch.num_tests
    assert not intersector.finished

    rest = list(intersector)
    assert intersector.finished
    assert pulled + rest == batch.intersections
    assert intersector.test_count == batch.num_tests

    # report() after iteration keeps everything that was pulled
    again = intersector.report()
    assert again.intersections == batch.intersections
    assert again.num_tests == batch.num_tests


def test_incremental_resumes_instead_of_restarting():
    segments = generate_segments(40, "unit", rng=1)
    intersector = BruteForceIntersector(segments)
    first = next(intersector)
    tests_after_first = intersector.test_count
    second = next(intersector)
    assert first != second
    assert intersector.test_count >= tests_after_first
    assert intersector.test_count <= 40 * 39 // 2


def test_intersector_is_abstract():
    with pytest.raises(TypeError):
        Intersector([])


def test_duplicate_ids_rejected():
    with pytest.raises(ValueError):
        SweepLineIntersector([seg(0, 0, 0, 1, 1), seg(0, 0, 1, 1, 0)])


@pytest.mark.parametrize("value, expected", [
    (Strategy.BRUTE_FORCE, BruteForceIntersector),
    ("sweep", SweepLineIntersector),
    ("status", StatusOrderedSweepIntersector),
    ("STATUS_ORDERED", StatusOrderedSweepIntersector),
    (SweepLineIntersector, SweepLineIntersector),
])
def test_resolve_strategy(value, expected):
    assert resolve_strategy(value) is expected


def test_unknown_strategy():
    with pytest.raises(ValueError):
        report_intersections([], "quadtree")


def test_epsilon_is_passed_through():
    segments = [seg(0, 0, 0, 1, 0), seg(1, 0.05, 1, 0.05, -1)]
    for strategy in Strategy:
        assert len(report_intersections(segments, strategy)) == 1
        assert len(report_intersections(segments, strategy, epsilon=0.1)) == 0


@pytest.mark.parametrize("strategy", SWEEPS)
@pytest.mark.parametrize("count, cx, cy, radius", [
    (12, 0.5, 0.5, 0.5),
    (9, 0.37, 0.61, 0.3),
    (7, 0.123, 0.456, 0.1),
])
def test_many_segments_through_one_point(strategy, count, cx, cy, radius):
    segments = star(count, cx, cy, radius)
    oracle = report_intersections(segments, Strategy.BRUTE_FORCE)
    report = report_intersections(segments, strategy)

    assert len(oracle) == count * (count - 1) // 2
    assert pairs(report) == pairs(oracle)
    assert len(report) == len(oracle)


@pytest.mark.parametrize("seed", range(3))
def test_star_among_random_lines(seed):
    segments = star(12) + generate_segments(40, "short", rng=seed, first_id=12)
    oracle = report_intersections(segments, Strategy.BRUTE_FORCE)
    report = report_intersections(segments, Strategy.STATUS_ORDERED)

    assert pairs(report) == pairs(oracle)
    assert compare_reports(oracle, report).matches
