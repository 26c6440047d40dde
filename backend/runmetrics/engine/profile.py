import logging
from typing import Iterable, Optional

from runmetrics.core.constants import MAX_SEGMENT_M, MIN_SEGMENT_M
from runmetrics.engine.geo import segment_distance_m
from runmetrics.schemas.run import CoordinatePoint, RouteDistanceProfile

logger = logging.getLogger(__name__)


def build_profile(
    points: Optional[Iterable[CoordinatePoint]],
    min_segment_m: float = MIN_SEGMENT_M,
    max_segment_m: float = MAX_SEGMENT_M,
) -> Optional[RouteDistanceProfile]:
    """Sort fixes by time and accumulate filtered hop distances.

    Returns None when fewer than two points are available. Every point is
    kept; a rejected hop (jitter or jump) only contributes zero distance, so
    time still elapses across it.
    """
    ordered = sorted(points or (), key=lambda p: p.timestamp_sec)
    if len(ordered) < 2:
        return None

    cumulative = [0.0]
    rejected = 0
    for i in range(1, len(ordered)):
        d = segment_distance_m(ordered[i - 1], ordered[i], min_segment_m, max_segment_m)
        if d == 0.0:
            rejected += 1
        cumulative.append(cumulative[-1] + d)

    logger.debug(
        "profile built: %d points, %.1f m, %d zero-distance hops",
        len(ordered), cumulative[-1], rejected,
    )
    return RouteDistanceProfile(points=tuple(ordered), cumulative_meters=tuple(cumulative))
