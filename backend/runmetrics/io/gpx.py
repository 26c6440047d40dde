import logging
from datetime import timezone
from typing import Optional

import gpxpy
import gpxpy.gpx

from runmetrics.core.config import settings
from runmetrics.io.errors import RouteImportError
from runmetrics.schemas.run import CoordinatePoint

logger = logging.getLogger(__name__)


def read_gpx_points(text: str, accuracy_m: Optional[float] = None) -> list[CoordinatePoint]:
    """Parse GPX track points into coordinate fixes.

    Points without a timestamp cannot be placed on the time axis and are
    skipped. GPX carries no horizontal accuracy, so every fix gets
    `accuracy_m` (settings.import_accuracy_m by default).
    """
    if accuracy_m is None:
        accuracy_m = settings.import_accuracy_m
    try:
        gpx = gpxpy.parse(text)
    except gpxpy.gpx.GPXException as e:
        raise RouteImportError(f"Invalid GPX: {e}") from e

    points: list[CoordinatePoint] = []
    untimed = 0
    for track in gpx.tracks:
        for segment in track.segments:
            for p in segment.points:
                if p.time is None:
                    untimed += 1
                    continue
                ts = p.time if p.time.tzinfo else p.time.replace(tzinfo=timezone.utc)
                points.append(
                    CoordinatePoint(
                        latitude=p.latitude,
                        longitude=p.longitude,
                        timestamp_sec=ts.timestamp(),
                        altitude_m=p.elevation,
                        horizontal_accuracy_m=accuracy_m,
                        speed_mps=p.speed,
                    )
                )

    logger.debug("gpx: %d points read, %d without time", len(points), untimed)
    return points
