"""Finalize a recorded .gpx or .fit activity locally and print its metrics.

Usage:
    python scripts/finalize_file.py path/to/run.gpx
    python scripts/finalize_file.py path/to/run.fit --json
    python scripts/finalize_file.py path/to/run.gpx --duration 00:45:32
"""
import argparse
import os
import sys

from runmetrics.core.config import Thresholds, settings
from runmetrics.core.constants import MILE_M
from runmetrics.core.time_utils import format_pace, hhmmss_to_seconds, seconds_to_hhmmss
from runmetrics.engine.finalize import finalize_run
from runmetrics.io.errors import RouteImportError
from runmetrics.io.fit import read_fit_points
from runmetrics.io.gpx import read_gpx_points
from runmetrics.schemas.run import RawRun, RunMode


def load_points(path: str):
    ext = os.path.splitext(path)[1].lower()
    if ext == ".gpx":
        with open(path, "r", encoding="utf-8") as f:
            return read_gpx_points(f.read())
    if ext == ".fit":
        with open(path, "rb") as f:
            return read_fit_points(f.read())
    raise RouteImportError(f"Unsupported file type: {ext or path}")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Finalize a GPX/FIT activity and print its metrics")
    ap.add_argument("path", help="Path to a .gpx or .fit file")
    ap.add_argument("--json", action="store_true", help="Print the full RunEntry as JSON")
    ap.add_argument(
        "--duration",
        type=hhmmss_to_seconds,
        help="Duration reported by the watch (HH:MM:SS); the route span wins when longer",
    )
    args = ap.parse_args(argv)

    try:
        points = load_points(args.path)
    except (OSError, RouteImportError) as e:
        print(f"Could not read {args.path}: {e}", file=sys.stderr)
        return 1

    raw = RawRun(mode=RunMode.gps, duration_seconds=args.duration, route=tuple(points))
    entry = finalize_run(raw, Thresholds.from_settings(settings))

    if args.json:
        print(entry.model_dump_json(indent=2, exclude={"route"}))
        return 0

    print(f"Source:    {entry.distance_source.value} ({len(points)} points)")
    if settings.measurement_system == "metric":
        print(f"Distance:  {entry.distance_miles * MILE_M / 1000:.2f} km")
    else:
        print(f"Distance:  {entry.distance_miles:.2f} mi")
    print(f"Elapsed:   {seconds_to_hhmmss(entry.elapsed_seconds)}")
    print(f"Moving:    {seconds_to_hhmmss(entry.moving_seconds)}")
    if entry.avg_pace_sec_per_mile is not None:
        print(f"Pace:      {format_pace(entry.avg_pace_sec_per_mile)}")
    if entry.elevation_gain_ft is not None:
        print(f"Elevation: +{entry.elevation_gain_ft:.0f} ft / -{entry.elevation_loss_ft:.0f} ft")
    for s in entry.splits:
        print(f"  mile {s.split_index:>2}: {format_pace(s.split_pace_sec_per_mile)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
