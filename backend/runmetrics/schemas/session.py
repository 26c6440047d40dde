from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from runmetrics.schemas.run import RunEntry


class SetStyle(str, Enum):
    warmup = "warmup"
    working = "working"
    failure = "failure"
    drop_set = "dropSet"


class LoggedSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    reps: int
    weight: float
    style: SetStyle = SetStyle.working
    is_completed: bool = False


class LoggedExercise(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    notes: str = ""
    sets: tuple[LoggedSet, ...] = ()


class AchievementKind(str, Enum):
    heaviest_set = "heaviestSet"
    estimated_1rm = "estimated1RM"
    fastest_mile = "fastestMile"
    longest_run = "longestRun"


class AchievementBadge(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: AchievementKind
    subject_label: str  # exercise name, or "Run" for run badges
    display_value: str  # e.g. "205.0 lb", "7:05 /mi"
    occurred_at: datetime

    @property
    def title(self) -> str:
        if self.kind == AchievementKind.heaviest_set:
            return f"{self.subject_label}: Heaviest Set PR"
        if self.kind == AchievementKind.estimated_1rm:
            return f"{self.subject_label}: Estimated 1RM PR"
        if self.kind == AchievementKind.fastest_mile:
            return "Fastest Mile PR"
        return "Longest Run PR"


class WorkoutSession(BaseModel):
    """Completed session as kept by the session store."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = "Workout"
    started_at: datetime
    completed_at: datetime
    notes: str = ""
    elapsed_seconds: int = 0
    exercises: tuple[LoggedExercise, ...] = ()
    run: Optional[RunEntry] = None
    achievements: tuple[AchievementBadge, ...] = ()


class PRType(str, Enum):
    mile = "mile"
    five_k = "5k"
    ten_k = "10k"


class RunningPRRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: PRType
    best_seconds: float = Field(ge=0)
    achieved_at: datetime
    session_id: UUID


class RunningPRRequest(BaseModel):
    run: RunEntry
    session_id: UUID
    achieved_at: datetime
    records: list[RunningPRRecord] = []


class RunningPRResponse(BaseModel):
    updates: list[RunningPRRecord]


class AchievementRequest(BaseModel):
    session: WorkoutSession
    history: list[WorkoutSession] = []
    weight_unit: Optional[str] = None
