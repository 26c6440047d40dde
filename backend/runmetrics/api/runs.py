import logging
import os

from fastapi import APIRouter, File, HTTPException, Query, UploadFile

from runmetrics.core.config import Thresholds, settings
from runmetrics.engine.finalize import finalize_run
from runmetrics.engine.splits import synthetic_splits
from runmetrics.io.errors import RouteImportError
from runmetrics.io.fit import read_fit_points
from runmetrics.io.gpx import read_gpx_points
from runmetrics.schemas.run import RawRun, RunEntry, RunMode, RunSplit

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/runs", tags=["runs"])


@router.post("/finalize", response_model=RunEntry)
def finalize(payload: RawRun):
    """Finalize a stopped run (GPS or manual) into its canonical metrics."""
    return finalize_run(payload, Thresholds.from_settings(settings))


@router.post("/import", response_model=RunEntry)
def import_activity(
    file: UploadFile = File(...),
    notes: str = Query(""),
):
    """Finalize a recorded .gpx or .fit activity as a GPS run.

    Nothing is stored; the caller persists the returned entry.
    """
    filename = file.filename or "import"
    ext = os.path.splitext(filename)[1].lower()
    if ext not in [".gpx", ".fit"]:
        logger.warning("rejected upload %s: unsupported extension", filename)
        raise HTTPException(status_code=400, detail="Only .gpx or .fit files are supported")

    data = file.file.read()
    try:
        if ext == ".gpx":
            points = read_gpx_points(data.decode("utf-8"))
        else:
            points = read_fit_points(data)
    except (RouteImportError, UnicodeDecodeError) as e:
        logger.warning("rejected upload %s: %s", filename, e)
        raise HTTPException(status_code=400, detail=f"Invalid file: {e}")

    logger.info("imported %s with %d points", filename, len(points))
    raw = RawRun(mode=RunMode.gps, route=tuple(points), notes=notes)
    return finalize_run(raw, Thresholds.from_settings(settings))


@router.get("/splits", response_model=list[RunSplit])
def get_synthetic_splits(
    distance_mi: float = Query(..., ge=0),
    duration_seconds: int = Query(..., ge=0),
):
    """Uniform whole-mile splits for a manual entry (no route)."""
    return synthetic_splits(distance_mi, duration_seconds)
