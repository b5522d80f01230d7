"""CLI para registrar corridas y mostrar estadisticas, objetivos e historial."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from datetime import date, datetime
from pathlib import Path

from runlog.config import load_config
from runlog.durations import format_duration, format_pace, parse_duration
from runlog.excel_writer import HistoryLayout, write_history_xlsx
from runlog.goals import goal_label
from runlog.log import setup_logger
from runlog.model import (
    FEET_PER_METER,
    STANDARD_INDOOR_TRACK_M,
    DistanceInput,
    Kilometers,
    Laps,
    Miles,
    Run,
    standard_outdoor_track_length_ft,
)
from runlog.service import RunService
from runlog.stats import RunStats
from runlog.storage import RunStore, StoreError

HISTORY_LIMIT = 25
_WIDE = "=" * 46
_NARROW = "-" * 46


def _day(value: str) -> date:
    if value.strip().lower() in ("", "today"):
        return date.today()
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            "use 'today' or yyyy-mm-dd (e.g. 2025-04-20)"
        ) from exc


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")
    return number


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a whole number: {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")
    return number


def _non_negative_int(value: str) -> int:
    if value == "0":
        return 0
    return _positive_int(value)


def _duration(value: str) -> int:
    try:
        return parse_duration(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per action."""
    parser = argparse.ArgumentParser(
        prog="runlog", description="Personal run log with stats and goals."
    )
    parser.add_argument(
        "--store",
        default=None,
        help="Run log file (default: $RUNLOG_STORE or ./runs.csv).",
    )
    parser.add_argument("--log-level", default=None, help="Default: WARNING.")
    parser.add_argument("--log-file", default=None, help="Optional log file.")
    sub = parser.add_subparsers(dest="command", required=True)

    runs_left = argparse.ArgumentParser(add_help=False)
    runs_left.add_argument(
        "--runs-left",
        type=_non_negative_int,
        default=0,
        help="Runs left this week (default: one per remaining day).",
    )

    log = sub.add_parser("log", parents=[runs_left], help="Log a run.")
    log.add_argument("--date", type=_day, default="today", help="today or yyyy-mm-dd.")
    distance = log.add_mutually_exclusive_group(required=True)
    distance.add_argument("--miles", type=_positive_float)
    distance.add_argument("--km", type=_positive_float)
    distance.add_argument("--laps", type=_positive_int)
    track = log.add_mutually_exclusive_group()
    track.add_argument(
        "--track",
        choices=["outdoor", "indoor"],
        default="outdoor",
        help="Standard outdoor (1320 ft) or indoor (200 m) track.",
    )
    track.add_argument("--track-feet", type=_positive_float)
    track.add_argument("--track-meters", type=_positive_float)
    log.add_argument(
        "--duration",
        type=_duration,
        default=0,
        help="hh:mm:ss or mm:ss (optional).",
    )

    sub.add_parser("stats", parents=[runs_left], help="Show stats and goals.")
    sub.add_parser("goals", parents=[runs_left], help="Show goals.")

    history = sub.add_parser("history", help="Show recent runs.")
    history.add_argument("--limit", type=_positive_int, default=HISTORY_LIMIT)

    export = sub.add_parser("export", help="Export history to Excel.")
    export.add_argument("out", help="Output .xlsx path.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    return build_parser().parse_args(argv)


def track_feet(ns: argparse.Namespace) -> float:
    """Track length in feet from the --track* options."""
    if ns.track_feet is not None:
        return float(ns.track_feet)
    if ns.track_meters is not None:
        return float(ns.track_meters) * FEET_PER_METER
    if ns.track == "indoor":
        return STANDARD_INDOOR_TRACK_M * FEET_PER_METER
    return standard_outdoor_track_length_ft()


def distance_input(ns: argparse.Namespace) -> DistanceInput:
    if ns.miles is not None:
        return Miles(ns.miles)
    if ns.km is not None:
        return Kilometers(ns.km)
    return Laps(ns.laps, track_feet(ns))


def print_run_summary(run: Run) -> None:
    print("--- Run Summary -------------------")
    print(f"  Date:       {run.day.isoformat()}")
    print(f"  Distance:   {run.distance_mi:.2f} mi ({run.distance_km:.2f} km)")
    if run.duration_s > 0:
        print(f"  Duration:   {format_duration(run.duration_s)}")
        print(f"  Pace:       {format_pace(RunService.pace_min_per_mile(run))}")
    print(f"  Entered as: {run.input_type.value}")
    print("-----------------------------------")


def print_stat_block(label: str, s: RunStats) -> None:
    print(f"  [ {label} ]")
    print(
        f"    Runs: {s.total_runs:<5d}  Total: {s.total_miles:<6.2f} mi  "
        f"Avg: {s.avg_miles:<5.2f} mi"
    )
    print(f"    Best single day: {s.highest_day_miles:.2f} mi")
    print(_NARROW)


def print_goals(service: RunService, runs_left: int) -> None:
    next_run = service.next_run_goal_miles()
    label = goal_label(next_run)
    suffix = f"   {label}!" if label else ""
    print(f"Next run goal:  {next_run:.2f} mi{suffix}")

    wb = service.weekly_goal_breakdown(runs_left)
    print()
    print("Weekly Goal Breakdown")
    print("-" * 42)
    print(f"  Week target:      {wb.weekly_goal_miles:.2f} mi")
    print(f"  Already run:      {wb.miles_completed_this_week:.2f} mi")
    print(f"  Miles remaining:  {wb.miles_remaining:.2f} mi")
    print(f"  Runs planned:     {wb.runs_remaining}")
    print(f"  Miles per run:    {wb.miles_per_run:.2f} mi")
    print("-" * 42)


def print_history(service: RunService, limit: int) -> None:
    runs = service.all_runs()
    if not runs:
        print("No runs logged yet.")
        return

    print("Run History (most recent first)")
    print("-" * 58)
    print(f"{'Date':<12}  {'Miles':<10}  {'Duration':<10}  {'Pace/mi':<10}  Type")
    print("-" * 58)
    for r in service.recent_runs(limit):
        dur = format_duration(r.duration_s) if r.duration_s > 0 else "-"
        pace = format_pace(r.pace_min_per_mile)
        print(
            f"{r.day.isoformat():<12}  {r.distance_mi:<10.2f}  {dur:<10}  "
            f"{pace:<10}  {r.input_type.value}"
        )
    if len(runs) > limit:
        print(f"  ... and {len(runs) - limit} more in file.")
    print("-" * 58)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        Exit code (0 on success, 1 if the run log could not be saved).
    """
    ns = parse_args(argv)
    config = load_config(ns.store, ns.log_level, ns.log_file)
    setup_logger(config.log_level, config.log_file)

    service = RunService(RunStore(config.store_path))

    if ns.command == "log":
        run = Run.create(ns.date, distance_input(ns), ns.duration)
        try:
            service.add_run(run)
        except StoreError as exc:
            print(f"WARNING: run not saved: {exc}")
            return 1
        print("Run saved!")
        print_run_summary(run)
        print()
        print_goals(service, ns.runs_left)
    elif ns.command == "stats":
        print(_WIDE)
        print("               ** YOUR STATS **")
        print(_WIDE)
        for window, s in service.all_windows().items():
            print_stat_block(window.value, s)
        print()
        print_goals(service, ns.runs_left)
    elif ns.command == "goals":
        print_goals(service, ns.runs_left)
    elif ns.command == "history":
        print_history(service, ns.limit)
    elif ns.command == "export":
        out_path = Path(ns.out).expanduser()
        write_history_xlsx(service.all_runs(), out_path, HistoryLayout())
        print(f"OK: {len(service.all_runs())} runs exported to {out_path}")
    return 0
