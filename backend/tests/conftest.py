import math

import pytest

from runmetrics.core.constants import EARTH_RADIUS_M
from runmetrics.schemas.run import CoordinatePoint

# Degrees of latitude per meter along a meridian (exact for the haversine sphere)
DEG_PER_M = 180.0 / (math.pi * EARTH_RADIUS_M)


def point(meters: float, t: float, alt=None, accuracy: float = 5.0, speed=None, lon: float = -105.0):
    """A fix `meters` north of 40N at time t."""
    return CoordinatePoint(
        latitude=40.0 + meters * DEG_PER_M,
        longitude=lon,
        timestamp_sec=t,
        altitude_m=alt,
        horizontal_accuracy_m=accuracy,
        speed_mps=speed,
    )


def straight_route(step_m: float, steps: int, dt: float, start_t: float = 0.0, altitudes=None):
    """steps+1 fixes spaced step_m apart, dt seconds apart."""
    pts = []
    for i in range(steps + 1):
        alt = altitudes[i] if altitudes is not None else None
        pts.append(point(i * step_m, start_t + i * dt, alt=alt))
    return pts


@pytest.fixture
def make_point():
    return point


@pytest.fixture
def make_route():
    return straight_route
