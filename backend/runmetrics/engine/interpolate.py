from bisect import bisect_left
from typing import Optional

from runmetrics.core.constants import BOUNDARY_TOLERANCE_M
from runmetrics.schemas.run import RouteDistanceProfile


def time_at_distance(profile: RouteDistanceProfile, target_m: float) -> Optional[float]:
    """Timestamp (epoch seconds) at which the route reached target_m.

    Linear in time between the two bracketing fixes. Returns None when the
    target lies beyond the recorded route; callers must not extrapolate.
    """
    cumulative = profile.cumulative_meters
    times = [p.timestamp_sec for p in profile.points]
    if target_m <= 0:
        return times[0]
    if target_m > cumulative[-1] + BOUNDARY_TOLERANCE_M:
        return None

    # first i >= 1 with cumulative[i] >= target (tolerance absorbs float misses)
    i = bisect_left(cumulative, target_m - BOUNDARY_TOLERANCE_M, lo=1)
    if i >= len(cumulative):
        i = len(cumulative) - 1

    d0, d1 = cumulative[i - 1], cumulative[i]
    t0, t1 = times[i - 1], times[i]
    if d1 - d0 <= 0:
        return t1
    ratio = max(0.0, min(1.0, (target_m - d0) / (d1 - d0)))
    return t0 + ratio * (t1 - t0)


def elapsed_at_distance(profile: RouteDistanceProfile, target_m: float) -> Optional[float]:
    """Seconds since the first fix at which target_m was reached, or None."""
    t = time_at_distance(profile, target_m)
    if t is None:
        return None
    return max(0.0, t - profile.start_time)


def distance_at_time(profile: RouteDistanceProfile, timestamp_sec: float) -> float:
    """Cumulative meters covered at a timestamp, clamped to the route's time span."""
    cumulative = profile.cumulative_meters
    times = [p.timestamp_sec for p in profile.points]
    if timestamp_sec <= times[0]:
        return 0.0
    if timestamp_sec >= times[-1]:
        return cumulative[-1]

    i = bisect_left(times, timestamp_sec, lo=1)
    t0, t1 = times[i - 1], times[i]
    d0, d1 = cumulative[i - 1], cumulative[i]
    if t1 - t0 <= 0:
        return d1
    ratio = (timestamp_sec - t0) / (t1 - t0)
    return d0 + ratio * (d1 - d0)
