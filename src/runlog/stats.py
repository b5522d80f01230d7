"""Estadisticas agregadas sobre ventanas de fechas del registro."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

import pandas as pd
from dateutil.relativedelta import SA, SU, relativedelta

from runlog.model import Run

FRAME_COLUMNS = [
    "date",
    "distance_mi",
    "distance_km",
    "duration_s",
    "pace_min_per_mile",
    "input_type",
]


@dataclass(frozen=True)
class RunStats:
    """Totals for the runs inside one date range."""

    total_runs: int
    total_miles: float
    avg_miles: float
    highest_day_miles: float

    @classmethod
    def empty(cls) -> RunStats:
        return cls(total_runs=0, total_miles=0.0, avg_miles=0.0, highest_day_miles=0.0)


class StatWindow(Enum):
    """Named rolling windows, all anchored on today."""

    THIS_WEEK = "This Week (Sun-Sat)"
    LAST_7_DAYS = "Last 7 Days"
    LAST_30_DAYS = "Last 30 Days"
    LAST_365_DAYS = "Last 365 Days"
    CALENDAR_YEAR = "Calendar Year"
    ALL_TIME = "All Time"


_ROLLING_DAYS = {
    StatWindow.LAST_7_DAYS: 7,
    StatWindow.LAST_30_DAYS: 30,
    StatWindow.LAST_365_DAYS: 365,
}


def runs_to_frame(runs: Sequence[Run]) -> pd.DataFrame:
    """Convert runs to a DataFrame, keeping file order."""
    rows = [
        {
            "date": r.day,
            "distance_mi": r.distance_mi,
            "distance_km": r.distance_km,
            "duration_s": r.duration_s,
            "pace_min_per_mile": r.pace_min_per_mile,
            "input_type": r.input_type.value,
        }
        for r in runs
    ]
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def stats_for(runs: Sequence[Run], start: date, end: date) -> RunStats:
    """Stats for runs dated within ``[start, end]``, both ends inclusive.

    ``highest_day_miles`` is the longest single run in the range.
    """
    df = runs_to_frame(runs)
    if df.empty:
        return RunStats.empty()

    days = pd.to_datetime(df["date"])
    selected = df.loc[days.between(pd.Timestamp(start), pd.Timestamp(end))]
    if selected.empty:
        return RunStats.empty()

    total_runs = len(selected)
    total_miles = float(selected["distance_mi"].sum())
    return RunStats(
        total_runs=total_runs,
        total_miles=total_miles,
        avg_miles=total_miles / total_runs,
        highest_day_miles=float(selected["distance_mi"].max()),
    )


def week_start(today: date) -> date:
    """Sunday on or before ``today``."""
    return today + relativedelta(weekday=SU(-1))


def week_end(today: date) -> date:
    """Saturday on or after ``today``."""
    return today + relativedelta(weekday=SA(+1))


def earliest_day(runs: Sequence[Run]) -> date | None:
    if not runs:
        return None
    return min(r.day for r in runs)


def window_bounds(
    window: StatWindow, today: date, earliest: date | None = None
) -> tuple[date, date] | None:
    """Inclusive date range of a named window.

    Returns None for ``ALL_TIME`` when there are no runs to anchor it.
    """
    if window is StatWindow.THIS_WEEK:
        return week_start(today), week_end(today)
    if window in _ROLLING_DAYS:
        return today - timedelta(days=_ROLLING_DAYS[window]), today
    if window is StatWindow.CALENDAR_YEAR:
        return date(today.year, 1, 1), today
    if earliest is None:
        return None
    return earliest, today


def window_stats(runs: Sequence[Run], window: StatWindow, today: date) -> RunStats:
    bounds = window_bounds(window, today, earliest_day(runs))
    if bounds is None:
        return RunStats.empty()
    return stats_for(runs, *bounds)


def all_windows(runs: Sequence[Run], today: date) -> dict[StatWindow, RunStats]:
    """Stats for every named window, in display order."""
    return {window: window_stats(runs, window, today) for window in StatWindow}
