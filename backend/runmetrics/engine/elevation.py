import logging
import math
from typing import Sequence, TypeVar

from runmetrics.core.constants import (
    ELEVATION_MAX_POINTS,
    ELEVATION_WINDOW,
    FEET_PER_METER,
    MAX_ACCURACY_M,
    MILE_M,
)
from runmetrics.core.time_utils import round_half_up
from runmetrics.engine.geo import is_accurate
from runmetrics.schemas.run import ElevationPoint, ElevationSummary, RouteDistanceProfile

logger = logging.getLogger(__name__)

T = TypeVar("T")


def smooth(values: Sequence[float], window: int = ELEVATION_WINDOW) -> list[float]:
    """Centered moving average; the window shrinks at both ends."""
    half = max(0, window // 2)
    n = len(values)
    out: list[float] = []
    for i in range(n):
        lo = max(0, i - half)
        hi = min(n, i + half + 1)
        chunk = values[lo:hi]
        out.append(sum(chunk) / len(chunk))
    return out


def downsample(series: Sequence[T], max_count: int = ELEVATION_MAX_POINTS) -> list[T]:
    """Thin a series to at most max_count items, always keeping the last one."""
    n = len(series)
    if n <= max_count:
        return list(series)
    if max_count <= 1:
        return [series[-1]]

    step = (n - 1) / (max_count - 1)
    indices: list[int] = []
    for i in range(max_count):
        idx = min(n - 1, round_half_up(i * step))
        if not indices or indices[-1] != idx:
            indices.append(idx)
    if indices[-1] != n - 1:
        indices.append(n - 1)
    return [series[i] for i in indices]


def analyze_elevation(
    profile: RouteDistanceProfile,
    max_accuracy_m: float = MAX_ACCURACY_M,
    window: int = ELEVATION_WINDOW,
    max_points: int = ELEVATION_MAX_POINTS,
) -> ElevationSummary:
    """Gain, loss, min, max (feet) and a display series from route altitudes.

    Only accurate fixes with a finite altitude are used. No usable samples
    yields an empty summary rather than zeros.
    """
    samples: list[tuple[float, float]] = []  # (cumulative meters, altitude m)
    for point, cumulative_m in zip(profile.points, profile.cumulative_meters):
        if point.altitude_m is None or not math.isfinite(point.altitude_m):
            continue
        if not is_accurate(point, max_accuracy_m):
            continue
        samples.append((cumulative_m, point.altitude_m))

    if not samples:
        logger.debug("no usable altitude samples")
        return ElevationSummary()

    smoothed = smooth([alt for _, alt in samples], window)
    gain = 0.0
    loss = 0.0
    for prev, cur in zip(smoothed, smoothed[1:]):
        delta = cur - prev
        if delta > 0:
            gain += delta
        else:
            loss += -delta

    series = [
        ElevationPoint(mile=cumulative_m / MILE_M, elevation_ft=alt * FEET_PER_METER)
        for cumulative_m, alt in samples
    ]

    return ElevationSummary(
        gain_ft=gain * FEET_PER_METER,
        loss_ft=loss * FEET_PER_METER,
        min_ft=min(smoothed) * FEET_PER_METER,
        max_ft=max(smoothed) * FEET_PER_METER,
        series=tuple(downsample(series, max_points)),
    )
