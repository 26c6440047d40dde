from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field

from runmetrics.schemas.session import WorkoutSession


class WeeklyTrainingLoad(BaseModel):
    """Load summed over [week_start, week_end). Computed on demand, never stored."""

    model_config = ConfigDict(frozen=True)

    week_start: datetime
    week_end: datetime
    session_count: int
    lifting_load: float
    running_load: float

    @computed_field  # type: ignore[misc]
    @property
    def total_load(self) -> float:
        return self.lifting_load + self.running_load


class WeekOverWeek(BaseModel):
    this_week: WeeklyTrainingLoad
    last_week: WeeklyTrainingLoad
    delta_percent: Optional[float] = None  # None = no data in either week


class LoadRequest(BaseModel):
    sessions: list[WorkoutSession] = []
    reference: Optional[datetime] = None  # defaults to now
    week_starts_on_monday: Optional[bool] = None  # defaults to settings
    weeks: int = 12
