from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException

from runmetrics.engine.load import TrainingLoadCalculator
from runmetrics.schemas.load import LoadRequest, WeekOverWeek, WeeklyTrainingLoad

router = APIRouter(prefix="/load", tags=["load"])


def _reference(payload: LoadRequest) -> datetime:
    # the calculator compares everything as naive UTC
    if payload.reference is not None:
        return payload.reference
    return datetime.now(timezone.utc)


@router.post("/weekly", response_model=WeekOverWeek)
def weekly_load(payload: LoadRequest):
    """This week's load, last week's load and the week-over-week delta."""
    calc = TrainingLoadCalculator(payload.sessions, payload.week_starts_on_monday)
    return calc.week_over_week(_reference(payload))


@router.post("/history", response_model=list[WeeklyTrainingLoad])
def load_history(payload: LoadRequest):
    """
    Weekly load for the last `weeks` weeks (including the reference week).

    Weeks are returned oldest -> newest; empty weeks appear with zero load.
    """
    if payload.weeks <= 0:
        raise HTTPException(status_code=422, detail="weeks must be > 0")
    calc = TrainingLoadCalculator(payload.sessions, payload.week_starts_on_monday)
    return calc.weekly_history(_reference(payload), payload.weeks)
