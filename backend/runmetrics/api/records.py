from fastapi import APIRouter

from runmetrics.core.config import Thresholds, settings
from runmetrics.engine.records import detect_achievements, evaluate_running_prs
from runmetrics.schemas.session import (
    AchievementBadge,
    AchievementRequest,
    RunningPRRequest,
    RunningPRResponse,
)

router = APIRouter(prefix="/records", tags=["records"])


@router.post("/running", response_model=RunningPRResponse)
def running_records(payload: RunningPRRequest):
    """New mile / 5K / 10K records set by a finalized run.

    `records` is the caller's current record set; only strictly faster
    times come back as updates.
    """
    updates = evaluate_running_prs(
        payload.run,
        payload.session_id,
        payload.achieved_at,
        payload.records,
        Thresholds.from_settings(settings),
    )
    return RunningPRResponse(updates=updates)


@router.post("/achievements", response_model=list[AchievementBadge])
def session_achievements(payload: AchievementRequest):
    return detect_achievements(
        payload.session,
        payload.history,
        weight_unit=payload.weight_unit or settings.weight_unit,
    )
