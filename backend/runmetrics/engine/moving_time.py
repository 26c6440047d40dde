import logging

from runmetrics.core.constants import MAX_ACCURACY_M, MOVING_DISTANCE_M, MOVING_SPEED_MPS
from runmetrics.core.time_utils import round_half_up
from runmetrics.engine.geo import is_accurate
from runmetrics.schemas.run import RouteDistanceProfile

logger = logging.getLogger(__name__)


def estimate_moving_seconds(
    profile: RouteDistanceProfile,
    max_accuracy_m: float = MAX_ACCURACY_M,
    moving_speed_mps: float = MOVING_SPEED_MPS,
    moving_distance_m: float = MOVING_DISTANCE_M,
) -> int:
    """Whole seconds spent moving along the route.

    An interval counts when its speed reaches moving_speed_mps or it covered
    at least moving_distance_m; the distance clause keeps sparse but fast
    fixes from reading as stopped. Intervals with a non-positive time delta
    or an inaccurate endpoint are skipped.
    """
    points = profile.points
    moving = 0.0
    skipped = 0
    for i in range(1, len(points)):
        a, b = points[i - 1], points[i]
        dt = b.timestamp_sec - a.timestamp_sec
        if dt <= 0 or not (is_accurate(a, max_accuracy_m) and is_accurate(b, max_accuracy_m)):
            skipped += 1
            continue

        d = profile.segment_meters(i)
        if b.speed_mps is not None and b.speed_mps >= 0:
            speed = b.speed_mps
        else:
            speed = d / dt

        if speed >= moving_speed_mps or d >= moving_distance_m:
            moving += dt

    logger.debug("moving time %.1f s (%d intervals skipped)", moving, skipped)
    return round_half_up(max(0.0, moving))
