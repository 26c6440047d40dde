#!/usr/bin/env python3
"""
Post a synthetic 16-week training history to the runmetrics API and print
the weekly load table it returns.

Pattern per week (Mon–Sun):
  - Mon: easy run + upper-body lift
  - Tue: easy
  - Wed: workout
  - Thu: easy + lower-body lift
  - Fri: easy
  - Sat: long run
  - Sun: rest

Weekly mileage plan (16 weeks total):
  [30,33,36,39,42,45,48,52,56,60,65,70,70,70,50,35]

Usage examples:
  - Against a local server:
      uvicorn runmetrics.main:app --app-dir backend &
      python scripts/load_report.py --base-url http://localhost:8000
  - Sunday-first weeks:
      python scripts/load_report.py --base-url http://localhost:8000 --sunday
"""

from __future__ import annotations

import argparse
import datetime as dt
import sys
import uuid
from typing import List, Tuple

try:
    import requests  # type: ignore
except Exception as exc:  # pragma: no cover
    print("This script requires the 'requests' package.\nInstall with: pip install requests", file=sys.stderr)
    raise


WEEKLY_MILES = [30, 33, 36, 39, 42, 45, 48, 52, 56, 60, 65, 70, 70, 70, 50, 35]


def monday_of_week(d: dt.date) -> dt.date:
    return d - dt.timedelta(days=d.weekday())


def round1(x: float) -> float:
    return round(x + 1e-9, 1)


def split_weekly_dist(total: float) -> Tuple[float, float, List[float]]:
    """Return long_run, workout, list_of_four_easy distances summing to total."""
    long_run = round1(total * 0.30)
    workout = round1(total * 0.20)
    easy_total = round1(total - long_run - workout)
    base = round1(easy_total / 4.0)
    easies = [base, base, base, base]
    # Fix rounding drift on the last day
    diff = round1(easy_total - round1(sum(easies)))
    easies[-1] = round1(easies[-1] + diff)
    easies = [max(0.1, e) for e in easies]
    return long_run, workout, easies


def lift(name: str, weight: float, reps: int, sets: int = 3) -> dict:
    return {
        "name": name,
        "sets": [{"reps": reps, "weight": weight, "is_completed": True} for _ in range(sets)],
    }


def session(day: dt.date, miles: float, pace_min: float, exercises: list | None = None) -> dict:
    started = dt.datetime.combine(day, dt.time(7, 0))
    duration = int(miles * pace_min * 60)
    completed = started + dt.timedelta(seconds=duration + 600)
    return {
        "id": str(uuid.uuid4()),
        "name": "Seed",
        "started_at": started.isoformat(),
        "completed_at": completed.isoformat(),
        "elapsed_seconds": duration + 600,
        "exercises": exercises or [],
        "run": {
            "mode": "manual",
            "distance_miles": round1(miles),
            "elapsed_seconds": duration,
            "moving_seconds": duration,
            "duration_seconds": duration,
            "distance_source": "manual",
        },
    }


def build_week(week_start: dt.date, target_mi: float) -> list[dict]:
    long_mi, workout_mi, easies = split_weekly_dist(target_mi)
    return [
        session(week_start, easies[0], 9.0, [lift("Bench Press", 185, 5)]),
        session(week_start + dt.timedelta(days=1), easies[1], 9.0),
        session(week_start + dt.timedelta(days=2), workout_mi, 7.0),
        session(week_start + dt.timedelta(days=3), easies[2], 9.0, [lift("Squat", 245, 5)]),
        session(week_start + dt.timedelta(days=4), easies[3], 9.0),
        session(week_start + dt.timedelta(days=5), long_mi, 8.5),
    ]


def main() -> None:
    ap = argparse.ArgumentParser(description="Print a 16-week load table from the runmetrics API")
    ap.add_argument("--base-url", required=True, help="API base URL (e.g., http://localhost:8000)")
    ap.add_argument("--sunday", action="store_true", help="Use Sunday-first weeks")
    args = ap.parse_args()

    this_monday = monday_of_week(dt.date.today())
    week_starts = [this_monday - dt.timedelta(weeks=15 - i) for i in range(16)]
    sessions: list[dict] = []
    for ws, miles in zip(week_starts, WEEKLY_MILES):
        sessions.extend(build_week(ws, float(miles)))

    url = f"{args.base_url.rstrip('/')}/load/history"
    payload = {"sessions": sessions, "weeks": 16, "week_starts_on_monday": not args.sunday}
    r = requests.post(url, json=payload, timeout=15)
    if r.status_code >= 300:
        raise RuntimeError(f"load/history -> HTTP {r.status_code}: {r.text}")

    print(f"{'week':<12}{'sessions':>9}{'lifting':>10}{'running':>10}{'total':>10}")
    for wk in r.json():
        print(
            f"{wk['week_start'][:10]:<12}{wk['session_count']:>9}"
            f"{wk['lifting_load']:>10.0f}{wk['running_load']:>10.0f}{wk['total_load']:>10.0f}"
        )


if __name__ == "__main__":
    main()
