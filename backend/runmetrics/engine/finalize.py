"""Turn a raw tracker / manual run into the canonical RunEntry.

GPS runs with a usable route have their distance, elapsed time, moving
time, splits and elevation derived from the route profile. Everything else
(manual entries, GPS sessions whose route never materialized) keeps the
reported numbers with moving time equal to elapsed time.
"""
import logging
import math
from typing import Optional

from runmetrics.core.config import Thresholds
from runmetrics.core.constants import MILE_M
from runmetrics.core.time_utils import average_pace, round_half_up
from runmetrics.engine.elevation import analyze_elevation
from runmetrics.engine.moving_time import estimate_moving_seconds
from runmetrics.engine.profile import build_profile
from runmetrics.engine.sources import first_present
from runmetrics.engine.splits import route_splits
from runmetrics.schemas.run import DistanceSource, RawRun, RunEntry, RunMode

logger = logging.getLogger(__name__)


def _non_negative(value: Optional[float]) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return max(0.0, float(value))


def finalize_run(raw: RawRun, thresholds: Optional[Thresholds] = None) -> RunEntry:
    t = thresholds or Thresholds()

    reported_miles = _non_negative(first_present(raw.distance_miles, raw.live_distance_miles))
    reported_seconds = round_half_up(
        _non_negative(first_present(raw.duration_seconds, raw.live_elapsed_seconds))
    )

    profile = None
    if raw.mode == RunMode.gps and raw.route:
        profile = build_profile(raw.route, t.min_segment_m, t.max_segment_m)

    if profile is None:
        source = DistanceSource.estimated if raw.mode == RunMode.gps else DistanceSource.manual
        logger.debug("finalizing %s run without route profile", source.value)
        return RunEntry(
            mode=raw.mode,
            distance_miles=reported_miles,
            elapsed_seconds=reported_seconds,
            moving_seconds=reported_seconds,
            duration_seconds=reported_seconds,
            avg_pace_sec_per_mile=average_pace(reported_seconds, reported_miles),
            avg_moving_pace_sec_per_mile=average_pace(reported_seconds, reported_miles),
            distance_source=source,
            notes=raw.notes,
            route=raw.route if raw.mode == RunMode.gps else None,
        )

    # the route is the source of truth when live counters lag behind it
    distance_miles = max(reported_miles, profile.total_meters / MILE_M)
    elapsed = max(reported_seconds, round_half_up(profile.span_seconds))
    moving = min(
        elapsed,
        estimate_moving_seconds(
            profile,
            max_accuracy_m=t.max_accuracy_m,
            moving_speed_mps=t.moving_speed_mps,
            moving_distance_m=t.moving_distance_m,
        ),
    )
    splits = route_splits(profile)
    elevation = analyze_elevation(
        profile,
        max_accuracy_m=t.max_accuracy_m,
        window=t.elevation_window,
        max_points=t.elevation_max_points,
    )

    logger.debug(
        "finalized gps run: %.3f mi, %d s elapsed, %d s moving, %d splits",
        distance_miles, elapsed, moving, len(splits),
    )
    return RunEntry(
        mode=raw.mode,
        distance_miles=distance_miles,
        elapsed_seconds=elapsed,
        moving_seconds=moving,
        duration_seconds=elapsed,
        splits=tuple(splits),
        elevation_gain_ft=elevation.gain_ft,
        elevation_loss_ft=elevation.loss_ft,
        elevation_min_ft=elevation.min_ft,
        elevation_max_ft=elevation.max_ft,
        elevation_series=elevation.series,
        avg_pace_sec_per_mile=average_pace(elapsed, distance_miles),
        avg_moving_pace_sec_per_mile=average_pace(moving, distance_miles),
        distance_source=DistanceSource.gps,
        notes=raw.notes,
        route=profile.points,
    )
