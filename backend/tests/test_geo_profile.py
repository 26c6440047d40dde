import math

import pytest

from runmetrics.engine.geo import haversine_m, segment_distance_m
from runmetrics.engine.profile import build_profile
from runmetrics.schemas.run import CoordinatePoint


def test_haversine_one_degree_latitude():
    d = haversine_m(40.0, -105.0, 41.0, -105.0)
    assert d == pytest.approx(111194.93, abs=0.01)


def test_segment_filter_rejects_jitter_and_jumps(make_point):
    origin = make_point(0, 0)
    assert segment_distance_m(origin, make_point(0.4, 1)) == 0.0
    assert segment_distance_m(origin, make_point(100, 1)) == pytest.approx(100.0, abs=1e-6)
    assert segment_distance_m(origin, make_point(300, 1)) == 0.0


def test_segment_filter_bounds_are_inclusive(make_point):
    a, b = make_point(0, 0), make_point(100, 1)
    d = haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)
    assert segment_distance_m(a, b, min_m=d) == 0.0
    assert segment_distance_m(a, b, max_m=d) == 0.0
    assert segment_distance_m(a, b, min_m=d - 0.01, max_m=d + 0.01) == d


def test_segment_filter_non_finite_is_zero(make_point):
    bad = CoordinatePoint(latitude=math.nan, longitude=-105.0, timestamp_sec=1, horizontal_accuracy_m=5)
    assert segment_distance_m(make_point(0, 0), bad) == 0.0
    worse = CoordinatePoint(latitude=math.inf, longitude=-105.0, timestamp_sec=1, horizontal_accuracy_m=5)
    assert segment_distance_m(make_point(0, 0), worse) == 0.0


def test_profile_needs_two_points(make_point):
    assert build_profile([]) is None
    assert build_profile(None) is None
    assert build_profile([make_point(0, 0)]) is None


def test_profile_sorts_by_timestamp(make_point):
    pts = [make_point(200, 20), make_point(0, 0), make_point(100, 10)]
    profile = build_profile(pts)
    assert [p.timestamp_sec for p in profile.points] == [0, 10, 20]
    assert profile.cumulative_meters[0] == 0
    assert profile.total_meters == pytest.approx(200.0, abs=1e-6)


def test_profile_keeps_rejected_points_with_zero_contribution(make_point):
    # 100 m hop, 400 m teleport, 100 m hop
    pts = [make_point(0, 0), make_point(100, 30), make_point(500, 31), make_point(600, 60)]
    profile = build_profile(pts)
    assert len(profile.points) == 4
    expected = [0.0, 100.0, 100.0, 200.0]
    for got, want in zip(profile.cumulative_meters, expected):
        assert got == pytest.approx(want, abs=1e-6)
    assert profile.span_seconds == 60


def test_profile_cumulative_is_non_decreasing(make_point):
    offsets = [0, 0.2, 40, 39.8, 400, 420, 421, 700, 650, 660]
    pts = [make_point(m, i * 5) for i, m in enumerate(offsets)]
    cumulative = build_profile(pts).cumulative_meters
    assert cumulative[0] == 0
    assert all(b >= a for a, b in zip(cumulative, cumulative[1:]))


def test_profile_jitter_only_route_has_zero_distance(make_point):
    pts = [make_point(0.3 * (i % 2), i) for i in range(10)]
    profile = build_profile(pts)
    assert profile.total_meters == 0.0
    assert profile.span_seconds == 9
