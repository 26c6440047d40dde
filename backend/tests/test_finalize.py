import pytest

from runmetrics.core.config import Thresholds
from runmetrics.core.constants import MILE_M
from runmetrics.engine.finalize import finalize_run
from runmetrics.engine.sources import first_present
from runmetrics.schemas.run import DistanceSource, RawRun, RunMode


def test_first_present_skips_missing_values():
    assert first_present(None, 2.0, 3.0) == 2.0
    assert first_present(0.0, 2.0) == 0.0
    assert first_present(None, None, default=7) == 7
    assert first_present() is None


def test_manual_run_keeps_reported_numbers():
    entry = finalize_run(RawRun(mode=RunMode.manual, distance_miles=3.0, duration_seconds=1800))
    assert entry.distance_source == DistanceSource.manual
    assert entry.distance_miles == 3.0
    assert entry.elapsed_seconds == entry.moving_seconds == entry.duration_seconds == 1800
    assert entry.splits == ()
    assert entry.elevation_gain_ft is None
    assert entry.elevation_series == ()
    assert entry.avg_pace_sec_per_mile == 600
    assert entry.avg_moving_pace_sec_per_mile == 600


def test_manual_run_ignores_route(make_route):
    raw = RawRun(mode=RunMode.manual, distance_miles=1.0, duration_seconds=500, route=tuple(make_route(100, 20, 30)))
    entry = finalize_run(raw)
    assert entry.distance_source == DistanceSource.manual
    assert entry.distance_miles == 1.0
    assert entry.route is None


def test_live_counters_fill_in_missing_summary():
    raw = RawRun(mode=RunMode.manual, live_distance_miles=2.0, live_elapsed_seconds=1000)
    entry = finalize_run(raw)
    assert entry.distance_miles == 2.0
    assert entry.elapsed_seconds == 1000
    assert entry.avg_pace_sec_per_mile == 500


def test_gps_without_route_is_estimated(make_point):
    entry = finalize_run(RawRun(mode=RunMode.gps, distance_miles=1.5, duration_seconds=900))
    assert entry.distance_source == DistanceSource.estimated
    assert entry.moving_seconds == entry.elapsed_seconds == 900
    assert entry.splits == ()

    single = finalize_run(RawRun(mode=RunMode.gps, distance_miles=1.5, duration_seconds=900, route=(make_point(0, 0),)))
    assert single.distance_source == DistanceSource.estimated


def test_zero_distance_has_no_pace():
    entry = finalize_run(RawRun(mode=RunMode.manual, distance_miles=0, duration_seconds=600))
    assert entry.avg_pace_sec_per_mile is None
    assert entry.avg_moving_pace_sec_per_mile is None


def test_negative_reports_are_clamped():
    entry = finalize_run(RawRun(mode=RunMode.manual, distance_miles=-2, duration_seconds=-10))
    assert entry.distance_miles == 0
    assert entry.elapsed_seconds == 0


def test_gps_route_overrides_stale_counters(make_route):
    # 2000 m in 600 s, altitudes climbing 1 m per fix
    route = make_route(100, 20, 30, altitudes=[float(i) for i in range(21)])
    entry = finalize_run(RawRun(mode=RunMode.gps, distance_miles=0.5, duration_seconds=300, route=tuple(route)))
    assert entry.distance_source == DistanceSource.gps
    assert entry.distance_miles == pytest.approx(2000 / MILE_M)
    assert entry.elapsed_seconds == 600
    assert entry.duration_seconds == entry.elapsed_seconds
    assert entry.moving_seconds == 600
    assert len(entry.splits) == 1
    assert entry.elevation_gain_ft > 0
    assert entry.elevation_loss_ft == 0
    assert entry.avg_pace_sec_per_mile == round(600 / (2000 / MILE_M))


def test_gps_keeps_larger_reported_values(make_route):
    route = make_route(100, 20, 30)
    entry = finalize_run(RawRun(mode=RunMode.gps, distance_miles=5.0, duration_seconds=3000, route=tuple(route)))
    assert entry.distance_miles == 5.0
    assert entry.elapsed_seconds == 3000
    assert entry.moving_seconds <= entry.elapsed_seconds
    # splits still come from the route only
    assert len(entry.splits) == 1
    assert sum(s.split_seconds for s in entry.splits) <= entry.elapsed_seconds


def test_route_is_stored_sorted(make_route):
    route = list(reversed(make_route(100, 5, 30)))
    entry = finalize_run(RawRun(mode=RunMode.gps, route=tuple(route)))
    times = [p.timestamp_sec for p in entry.route]
    assert times == sorted(times)


def test_moving_never_exceeds_elapsed(make_point):
    # reported speeds claim movement across the whole span
    pts = tuple(make_point(0, i * 10, speed=3.0) for i in range(7))
    entry = finalize_run(RawRun(mode=RunMode.gps, route=pts))
    assert entry.elapsed_seconds == 60
    assert entry.moving_seconds <= entry.elapsed_seconds
    assert entry.distance_miles == 0
    assert entry.avg_pace_sec_per_mile is None


def test_thresholds_are_overridable(make_route):
    route = tuple(make_route(100, 10, 30))
    strict = Thresholds(max_segment_m=50)
    entry = finalize_run(RawRun(mode=RunMode.gps, route=route), strict)
    assert entry.distance_miles == 0


def test_fractional_seconds_round_half_up():
    entry = finalize_run(RawRun(mode=RunMode.manual, distance_miles=3.0, duration_seconds=1800.4))
    assert entry.elapsed_seconds == 1800
    live = finalize_run(RawRun(mode=RunMode.manual, live_distance_miles=1.0, live_elapsed_seconds=420.5))
    assert live.elapsed_seconds == 421
    assert live.avg_pace_sec_per_mile == 421
