"""Objetivos progresivos por corrida y semanales."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from runlog.model import Run
from runlog.stats import stats_for, week_end, week_start

HALF_MARATHON = 13.1
MARATHON = 26.2

HALF_MARATHON_THRESHOLD = 10.0
MARATHON_THRESHOLD = 23.0

# (limite superior exclusivo, incremento) para el objetivo de la proxima corrida.
RUN_INCREMENTS: tuple[tuple[float, float], ...] = (
    (1.5, 0.25),
    (3.0, 0.50),
    (10.0, 1.00),
)
LONG_RUN_INCREMENT = 2.00

WEEKLY_STEP_THRESHOLD = 25.0
WEEKLY_SMALL_INCREMENT = 3.0
WEEKLY_LARGE_INCREMENT = 5.0


@dataclass(frozen=True)
class WeeklyGoalBreakdown:
    """How the rest of this week's goal splits across the remaining runs."""

    weekly_goal_miles: float
    miles_completed_this_week: float
    miles_remaining: float
    runs_remaining: int
    miles_per_run: float


def round_miles(value: float) -> float:
    """Round to 2 decimals, halves away from zero for positive values."""
    return math.floor(value * 100.0 + 0.5) / 100.0


def last_run(runs: Sequence[Run]) -> Run | None:
    """Most recently dated run; the first in file order wins a tie."""
    if not runs:
        return None
    return max(runs, key=lambda r: r.day)


def _run_increment(last: float) -> float:
    for upper, increment in RUN_INCREMENTS:
        if last < upper:
            return increment
    return LONG_RUN_INCREMENT


def next_run_goal_miles(runs: Sequence[Run]) -> float:
    """Distance to aim for on the next run.

    Steps up from the latest run by a bracketed increment and snaps to the
    half marathon or marathon once the step would cross 10 or 23 miles.
    """
    latest = last_run(runs)
    last = latest.distance_mi if latest is not None else 0.0

    if last >= MARATHON_THRESHOLD:
        return MARATHON
    if last >= HALF_MARATHON_THRESHOLD:
        return HALF_MARATHON

    goal = last + _run_increment(last)
    if goal >= HALF_MARATHON_THRESHOLD and last < HALF_MARATHON_THRESHOLD:
        return HALF_MARATHON
    if goal >= MARATHON_THRESHOLD and last < MARATHON_THRESHOLD:
        return MARATHON
    return round_miles(goal)


def last_week_miles(runs: Sequence[Run], today: date) -> float:
    """Total of the previous Sunday-Saturday week."""
    this_sunday = week_start(today)
    start = this_sunday - timedelta(weeks=1)
    end = this_sunday - timedelta(days=1)
    return stats_for(runs, start, end).total_miles


def next_weekly_goal_miles(runs: Sequence[Run], today: date) -> float:
    last_total = last_week_miles(runs, today)
    if last_total < WEEKLY_STEP_THRESHOLD:
        increment = WEEKLY_SMALL_INCREMENT
    else:
        increment = WEEKLY_LARGE_INCREMENT
    return round_miles(last_total + increment)


def remaining_days_in_week(today: date) -> int:
    """Days left after today through Saturday (0 on a Saturday)."""
    return max(0, (week_end(today) - today).days)


def weekly_goal_breakdown(
    runs: Sequence[Run], today: date, planned_runs_remaining: int = 0
) -> WeeklyGoalBreakdown:
    """Split what is left of this week's goal across the remaining runs.

    Args:
        runs: Full run history.
        today: Date the week is anchored on.
        planned_runs_remaining: Runs the athlete still plans this week; 0 or
            less means one run per remaining day (at least one).

    Returns:
        Breakdown with ``runs_remaining`` always at least 1.
    """
    weekly_goal = next_weekly_goal_miles(runs, today)
    done = stats_for(runs, week_start(today), week_end(today)).total_miles
    remaining = max(0.0, weekly_goal - done)

    if planned_runs_remaining > 0:
        runs_to_use = planned_runs_remaining
    else:
        runs_to_use = max(1, remaining_days_in_week(today))

    return WeeklyGoalBreakdown(
        weekly_goal_miles=weekly_goal,
        miles_completed_this_week=done,
        miles_remaining=remaining,
        runs_remaining=runs_to_use,
        miles_per_run=round_miles(remaining / runs_to_use),
    )


def pace_min_per_mile(run: Run) -> float:
    """Minutes per mile; 0.0 when duration or distance was not recorded."""
    return run.pace_min_per_mile


def goal_label(goal: float) -> str | None:
    """Name of the race a milestone goal corresponds to."""
    if goal == HALF_MARATHON:
        return "Half Marathon"
    if goal == MARATHON:
        return "Marathon"
    return None
