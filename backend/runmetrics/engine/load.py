from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, Optional, Union

from runmetrics.core.config import settings
from runmetrics.core.constants import RUNNING_LOAD_PER_MILE
from runmetrics.schemas.load import WeekOverWeek, WeeklyTrainingLoad
from runmetrics.schemas.session import WorkoutSession

MONDAY = 0
SUNDAY = 6


def as_naive_utc(d: datetime) -> datetime:
    """Aware datetimes are converted to UTC and stripped; naive ones are taken as UTC."""
    if d.tzinfo is None:
        return d
    return d.astimezone(timezone.utc).replace(tzinfo=None)


def lifting_load(session: WorkoutSession) -> float:
    """Sum of weight * reps over completed sets (negatives floored at 0)."""
    total = 0.0
    for exercise in session.exercises:
        for s in exercise.sets:
            if not s.is_completed:
                continue
            total += max(0.0, s.weight) * max(0, s.reps)
    return total


def running_load(session: WorkoutSession) -> float:
    miles = session.run.distance_miles if session.run is not None else 0.0
    return max(0.0, miles) * RUNNING_LOAD_PER_MILE


def total_load(session: WorkoutSession) -> float:
    return lifting_load(session) + running_load(session)


def week_over_week_delta_percent(this_week: float, last_week: float) -> Optional[float]:
    """Percent change vs last week; None when neither week has any load."""
    if this_week == 0 and last_week == 0:
        return None
    return ((this_week - last_week) / max(last_week, 1)) * 100


class TrainingLoadCalculator:
    """Weekly load over a read-only snapshot of completed sessions.

    Weeks start at midnight on the configured first weekday (Sunday unless
    week_starts_on_monday) and span seven days, end exclusive. Timestamps
    are compared as naive UTC, so aware and naive inputs can be mixed;
    week bounds come back naive.
    """

    def __init__(
        self,
        sessions: Iterable[WorkoutSession],
        week_starts_on_monday: Optional[bool] = None,
    ):
        self.sessions = tuple(sessions)
        self._completed_at = [as_naive_utc(s.completed_at) for s in self.sessions]
        if week_starts_on_monday is None:
            week_starts_on_monday = settings.week_starts_on_monday
        self.first_weekday = MONDAY if week_starts_on_monday else SUNDAY

    def start_of_week(self, d: Union[date, datetime]) -> datetime:
        if not isinstance(d, datetime):
            d = datetime.combine(d, time())
        d = as_naive_utc(d)
        days_back = (d.weekday() - self.first_weekday) % 7
        start = d - timedelta(days=days_back)
        return start.replace(hour=0, minute=0, second=0, microsecond=0)

    def end_of_week(self, d: Union[date, datetime]) -> datetime:
        return self.start_of_week(d) + timedelta(days=7)

    def sessions_in_week(self, d: Union[date, datetime]) -> list[WorkoutSession]:
        week_start = self.start_of_week(d)
        week_end = week_start + timedelta(days=7)
        return [
            s for s, completed in zip(self.sessions, self._completed_at)
            if week_start <= completed < week_end
        ]

    def weekly_load(self, d: Union[date, datetime]) -> WeeklyTrainingLoad:
        week_start = self.start_of_week(d)
        week_sessions = self.sessions_in_week(week_start)
        return WeeklyTrainingLoad(
            week_start=week_start,
            week_end=week_start + timedelta(days=7),
            session_count=len(week_sessions),
            lifting_load=sum(lifting_load(s) for s in week_sessions),
            running_load=sum(running_load(s) for s in week_sessions),
        )

    def week_over_week(self, reference: Union[date, datetime]) -> WeekOverWeek:
        this_week = self.weekly_load(reference)
        last_week = self.weekly_load(this_week.week_start - timedelta(days=7))
        return WeekOverWeek(
            this_week=this_week,
            last_week=last_week,
            delta_percent=week_over_week_delta_percent(this_week.total_load, last_week.total_load),
        )

    def weekly_history(self, reference: Union[date, datetime], weeks: int = 12) -> list[WeeklyTrainingLoad]:
        """
        Load for the last `weeks` weeks (including the reference week), oldest first.

        Weeks with no sessions still appear with zero load.
        """
        newest = self.start_of_week(reference)
        oldest = newest - timedelta(weeks=max(1, weeks) - 1)
        return [self.weekly_load(oldest + timedelta(weeks=i)) for i in range(max(1, weeks))]
