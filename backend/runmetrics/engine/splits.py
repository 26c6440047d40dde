import logging
import math
from typing import Optional

from runmetrics.core.constants import MILE_M, WHOLE_MILE_EPSILON
from runmetrics.core.time_utils import round_half_up
from runmetrics.engine.interpolate import elapsed_at_distance
from runmetrics.schemas.run import RouteDistanceProfile, RunSplit

logger = logging.getLogger(__name__)


def route_splits(profile: RouteDistanceProfile) -> list[RunSplit]:
    """Full-mile splits measured along the route.

    Boundary times are rounded as elapsed offsets before differencing, so the
    splits always sum to the rounded time of the last boundary. Stops at the
    first boundary the route cannot reach; earlier splits stay valid.
    """
    whole_miles = int(math.floor(profile.total_miles + WHOLE_MILE_EPSILON))
    splits: list[RunSplit] = []
    prev_elapsed = 0
    for mile in range(1, whole_miles + 1):
        t = elapsed_at_distance(profile, mile * MILE_M)
        if t is None:
            logger.debug("split boundary %d mi not reachable; stopping", mile)
            break
        elapsed = round_half_up(t)
        seconds = max(0, elapsed - prev_elapsed)
        splits.append(
            RunSplit(
                split_index=mile,
                start_mile=float(mile - 1),
                end_mile=float(mile),
                split_seconds=seconds,
                split_pace_sec_per_mile=seconds,  # exactly one mile
            )
        )
        prev_elapsed = max(prev_elapsed, elapsed)
    return splits


def synthetic_splits(distance_miles: float, duration_seconds: float) -> list[RunSplit]:
    """Uniform whole-mile splits for a run with no route (manual entry)."""
    distance_miles = max(0.0, distance_miles)
    duration_seconds = max(0.0, duration_seconds)
    if distance_miles <= 0 or duration_seconds <= 0:
        return []
    per_mile = max(1, round_half_up(duration_seconds / distance_miles))
    return [
        RunSplit(
            split_index=mile,
            start_mile=float(mile - 1),
            end_mile=float(mile),
            split_seconds=per_mile,
            split_pace_sec_per_mile=per_mile,
        )
        for mile in range(1, int(math.floor(distance_miles)) + 1)
    ]


def compute_splits(
    profile: Optional[RouteDistanceProfile],
    distance_miles: float,
    duration_seconds: float,
) -> list[RunSplit]:
    """Route splits when a profile exists, otherwise synthetic ones.

    Sub-mile runs produce no splits in either mode.
    """
    if profile is not None:
        return route_splits(profile)
    return synthetic_splits(distance_miles, duration_seconds)
