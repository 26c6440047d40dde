import math

from runmetrics.core.constants import EARTH_RADIUS_M, MAX_ACCURACY_M, MAX_SEGMENT_M, MIN_SEGMENT_M
from runmetrics.schemas.run import CoordinatePoint


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return great-circle distance in meters between two WGS84 points.

    Uses the standard haversine formula; sufficient for per-point distances
    over a typical GPS activity track.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def segment_distance_m(
    a: CoordinatePoint,
    b: CoordinatePoint,
    min_m: float = MIN_SEGMENT_M,
    max_m: float = MAX_SEGMENT_M,
) -> float:
    """Distance contribution of the hop a -> b.

    Zero when the raw distance is non-finite, at or below the jitter floor
    (min_m), or at or above the jump ceiling (max_m).
    """
    try:
        d = haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)
    except ValueError:
        # math domain errors on garbage coordinates
        return 0.0
    if not math.isfinite(d) or d <= min_m or d >= max_m:
        return 0.0
    return d


def is_accurate(point: CoordinatePoint, max_accuracy_m: float = MAX_ACCURACY_M) -> bool:
    # negative accuracy marks an invalid fix
    return 0 <= point.horizontal_accuracy_m <= max_accuracy_m
