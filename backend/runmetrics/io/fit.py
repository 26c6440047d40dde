import io
import logging
from datetime import timezone
from typing import Optional

from fitparse import FitFile, FitParseError

from runmetrics.core.config import settings
from runmetrics.io.errors import RouteImportError
from runmetrics.schemas.run import CoordinatePoint

logger = logging.getLogger(__name__)


def _semicircles_to_degrees(val):
    return val * (180 / 2**31) if val is not None else None


def read_fit_points(data: bytes, accuracy_m: Optional[float] = None) -> list[CoordinatePoint]:
    """Read positioned `record` messages from a FIT file.

    Prefers enhanced altitude/speed when present. Records without a position
    or timestamp (treadmill, indoor) are skipped.
    """
    if accuracy_m is None:
        accuracy_m = settings.import_accuracy_m
    try:
        ff = FitFile(io.BytesIO(data))
        records = list(ff.get_messages("record"))
    except FitParseError as e:
        raise RouteImportError(f"Invalid FIT: {e}") from e

    points: list[CoordinatePoint] = []
    for record in records:
        fields = {f.name: f.value for f in record}
        ts = fields.get("timestamp")
        lat = _semicircles_to_degrees(fields.get("position_lat"))
        lon = _semicircles_to_degrees(fields.get("position_long"))
        if ts is None or lat is None or lon is None:
            continue
        ele = fields.get("enhanced_altitude")
        if ele is None:
            ele = fields.get("altitude")
        speed = fields.get("enhanced_speed")  # m/s
        if speed is None:
            speed = fields.get("speed")
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        points.append(
            CoordinatePoint(
                latitude=lat,
                longitude=lon,
                timestamp_sec=ts.timestamp(),
                altitude_m=float(ele) if ele is not None else None,
                horizontal_accuracy_m=accuracy_m,
                speed_mps=float(speed) if speed is not None else None,
            )
        )

    logger.debug("fit: %d positioned records of %d", len(points), len(records))
    return points
