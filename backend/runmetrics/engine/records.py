"""
Personal record tracking.

Two independent mechanisms:
- Running PRs (mile / 5K / 10K best times). Route-backed runs are timed by
  interpolating along the route to the target distance; manual runs must sit
  within a tight tolerance of the target and are scaled to it.
- Session achievements (heaviest set, estimated 1RM, longest run, fastest
  mile), computed once per completed session against all prior sessions.

Ties never count: every comparison is strict, with a small epsilon on the
float-valued ones so rounding noise cannot mint a record.
"""
import logging
from collections.abc import Iterable
from datetime import datetime
from typing import Optional
from uuid import UUID

from runmetrics.core.config import Thresholds
from runmetrics.core.constants import (
    ACHIEVEMENT_EPSILON,
    BOUNDARY_TOLERANCE_MI,
    FULL_MILE_SPLIT_MI,
    MANUAL_PR_TOLERANCE_MI,
    MILE_M,
    PR_TARGET_MILES,
)
from runmetrics.core.time_utils import format_pace
from runmetrics.engine.interpolate import elapsed_at_distance
from runmetrics.engine.profile import build_profile
from runmetrics.schemas.run import DistanceSource, RunEntry
from runmetrics.schemas.session import (
    AchievementBadge,
    AchievementKind,
    LoggedSet,
    PRType,
    RunningPRRecord,
    WorkoutSession,
)

logger = logging.getLogger(__name__)


# --------- Running PRs --------- #

def running_pr_candidate(
    entry: RunEntry,
    pr_type: PRType,
    thresholds: Optional[Thresholds] = None,
) -> Optional[float]:
    """Seconds this run took to cover the PR distance, or None if it does not qualify."""
    target_mi = PR_TARGET_MILES[pr_type.value]
    if entry.distance_miles + BOUNDARY_TOLERANCE_MI < target_mi:
        return None

    candidate: Optional[float] = None
    if entry.distance_source == DistanceSource.gps and entry.route:
        t = thresholds or Thresholds()
        profile = build_profile(entry.route, t.min_segment_m, t.max_segment_m)
        if profile is not None:
            candidate = elapsed_at_distance(profile, target_mi * MILE_M)
    elif entry.distance_source == DistanceSource.manual:
        # self-reported distances are not route-verified; keep the window tight
        if abs(entry.distance_miles - target_mi) <= MANUAL_PR_TOLERANCE_MI and entry.distance_miles > 0:
            candidate = entry.elapsed_seconds * (target_mi / entry.distance_miles)

    if candidate is None or candidate <= 0:
        return None
    return candidate


def _records_by_type(records: Iterable[RunningPRRecord]) -> dict[PRType, RunningPRRecord]:
    best: dict[PRType, RunningPRRecord] = {}
    for r in records:
        cur = best.get(r.type)
        if cur is None or r.best_seconds < cur.best_seconds:
            best[r.type] = r
    return best


def evaluate_running_prs(
    entry: RunEntry,
    session_id: UUID,
    achieved_at: datetime,
    current_records: Iterable[RunningPRRecord] = (),
    thresholds: Optional[Thresholds] = None,
) -> list[RunningPRRecord]:
    """Return the records this run sets. Equal times do not replace a record."""
    existing = _records_by_type(current_records)
    updates: list[RunningPRRecord] = []
    for pr_type in PRType:
        candidate = running_pr_candidate(entry, pr_type, thresholds)
        if candidate is None:
            continue
        current = existing.get(pr_type)
        if current is not None and not candidate < current.best_seconds:
            continue
        logger.debug("new %s record: %.1f s", pr_type.value, candidate)
        updates.append(
            RunningPRRecord(
                type=pr_type,
                best_seconds=candidate,
                achieved_at=achieved_at,
                session_id=session_id,
            )
        )
    return updates


# --------- Session achievements --------- #

def estimated_one_rep_max(weight: float, reps: int) -> float:
    """Epley estimate: weight * (1 + reps / 30)."""
    return weight * (1 + reps / 30.0)


def _exercise_key(name: str) -> str:
    return name.strip().casefold()


def _completed_sets_by_exercise(sessions: Iterable[WorkoutSession]) -> dict[str, list[LoggedSet]]:
    out: dict[str, list[LoggedSet]] = {}
    for session in sessions:
        for exercise in session.exercises:
            sets = out.setdefault(_exercise_key(exercise.name), [])
            sets.extend(s for s in exercise.sets if s.is_completed)
    return out


def fastest_mile_pace(run: RunEntry) -> Optional[int]:
    """Best full-mile split pace, else the average pace of a run of at least a mile."""
    full_miles = [s.split_pace_sec_per_mile for s in run.splits if s.distance_miles >= FULL_MILE_SPLIT_MI]
    if full_miles:
        return min(full_miles)
    if run.distance_miles >= 1 and run.avg_pace_sec_per_mile is not None:
        return run.avg_pace_sec_per_mile
    return None


def detect_achievements(
    session: WorkoutSession,
    history: Iterable[WorkoutSession],
    weight_unit: str = "lb",
) -> list[AchievementBadge]:
    """Badges earned by a just-completed session relative to all prior sessions."""
    prior = [s for s in history if s.id != session.id]
    prior_sets = _completed_sets_by_exercise(prior)
    badges: list[AchievementBadge] = []

    # keep the first spelling of each exercise for the label
    labels: dict[str, str] = {}
    for exercise in session.exercises:
        labels.setdefault(_exercise_key(exercise.name), exercise.name.strip())
    current_sets = _completed_sets_by_exercise([session])

    for key, label in labels.items():
        sets = current_sets.get(key, [])
        previous = prior_sets.get(key, [])

        current_heaviest = max((max(0.0, s.weight) for s in sets), default=0.0)
        previous_heaviest = max((max(0.0, s.weight) for s in previous), default=0.0)
        if current_heaviest > previous_heaviest + ACHIEVEMENT_EPSILON:
            badges.append(
                AchievementBadge(
                    kind=AchievementKind.heaviest_set,
                    subject_label=label,
                    display_value=f"{current_heaviest:.1f} {weight_unit}",
                    occurred_at=session.completed_at,
                )
            )

        current_1rm = max((estimated_one_rep_max(s.weight, s.reps) for s in sets), default=0.0)
        previous_1rm = max((estimated_one_rep_max(s.weight, s.reps) for s in previous), default=0.0)
        if current_1rm > previous_1rm + ACHIEVEMENT_EPSILON:
            badges.append(
                AchievementBadge(
                    kind=AchievementKind.estimated_1rm,
                    subject_label=label,
                    display_value=f"{current_1rm:.1f} {weight_unit}",
                    occurred_at=session.completed_at,
                )
            )

    run = session.run
    if run is not None:
        previous_longest = max((s.run.distance_miles for s in prior if s.run is not None), default=0.0)
        if run.distance_miles > previous_longest + ACHIEVEMENT_EPSILON:
            badges.append(
                AchievementBadge(
                    kind=AchievementKind.longest_run,
                    subject_label="Run",
                    display_value=f"{run.distance_miles:.2f} mi",
                    occurred_at=session.completed_at,
                )
            )

        current_fastest = fastest_mile_pace(run)
        previous_paces = [p for p in (fastest_mile_pace(s.run) for s in prior if s.run is not None) if p is not None]
        if current_fastest is not None and (not previous_paces or current_fastest < min(previous_paces)):
            badges.append(
                AchievementBadge(
                    kind=AchievementKind.fastest_mile,
                    subject_label="Run",
                    display_value=format_pace(current_fastest),
                    occurred_at=session.completed_at,
                )
            )

    return badges


def achievement_timeline(history: Iterable[WorkoutSession]) -> list[AchievementBadge]:
    """Every badge in the history, newest first."""
    badges = [b for s in history for b in s.achievements]
    return sorted(badges, key=lambda b: b.occurred_at, reverse=True)
