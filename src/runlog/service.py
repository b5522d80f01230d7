"""Servicio del registro: mantiene el historial en memoria y responde consultas."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from loguru import logger

from runlog import goals, stats
from runlog.goals import WeeklyGoalBreakdown
from runlog.model import Run, standard_outdoor_track_length_ft
from runlog.stats import RunStats, StatWindow
from runlog.storage import RunStore


class RunService:
    """Single owner of the run history for the lifetime of the process.

    The store is read once on construction; every added run is appended in
    memory and the whole file is rewritten. Queries are computed fresh from
    the in-memory list on each call.
    """

    def __init__(
        self, store: RunStore, today: Callable[[], date] = date.today
    ) -> None:
        """Create the service and load existing history.

        Args:
            store: Backing flat-file store.
            today: Clock used to anchor rolling windows.
        """
        self._store = store
        self._today = today
        self._runs: list[Run] = store.load()
        logger.debug(f"Loaded {len(self._runs)} runs from {store.path}")

    def add_run(self, run: Run) -> None:
        """Append a run and persist the full history.

        Raises:
            StoreError: If the history could not be written. The run stays
                in memory.
        """
        self._runs.append(run)
        self._store.save(self._runs)
        logger.info(f"Logged {run.distance_mi:.2f} mi on {run.day.isoformat()}")

    def all_runs(self) -> tuple[Run, ...]:
        return tuple(self._runs)

    def recent_runs(self, limit: int) -> list[Run]:
        """Newest-first runs for display."""
        ordered = sorted(self._runs, key=lambda r: r.day, reverse=True)
        return ordered[:limit]

    def stats_for(self, start: date, end: date) -> RunStats:
        return stats.stats_for(self._runs, start, end)

    def window(self, window: StatWindow) -> RunStats:
        return stats.window_stats(self._runs, window, self._today())

    def this_calendar_week(self) -> RunStats:
        return self.window(StatWindow.THIS_WEEK)

    def last_7_days(self) -> RunStats:
        return self.window(StatWindow.LAST_7_DAYS)

    def last_30_days(self) -> RunStats:
        return self.window(StatWindow.LAST_30_DAYS)

    def last_365_days(self) -> RunStats:
        return self.window(StatWindow.LAST_365_DAYS)

    def calendar_year(self) -> RunStats:
        return self.window(StatWindow.CALENDAR_YEAR)

    def all_time(self) -> RunStats:
        return self.window(StatWindow.ALL_TIME)

    def all_windows(self) -> dict[StatWindow, RunStats]:
        return stats.all_windows(self._runs, self._today())

    def week_start(self) -> date:
        return stats.week_start(self._today())

    def week_end(self) -> date:
        return stats.week_end(self._today())

    def remaining_days_in_week(self) -> int:
        return goals.remaining_days_in_week(self._today())

    def next_run_goal_miles(self) -> float:
        return goals.next_run_goal_miles(self._runs)

    def next_weekly_goal_miles(self) -> float:
        return goals.next_weekly_goal_miles(self._runs, self._today())

    def weekly_goal_breakdown(
        self, planned_runs_remaining: int = 0
    ) -> WeeklyGoalBreakdown:
        return goals.weekly_goal_breakdown(
            self._runs, self._today(), planned_runs_remaining
        )

    @staticmethod
    def pace_min_per_mile(run: Run) -> float:
        return goals.pace_min_per_mile(run)

    @staticmethod
    def standard_outdoor_track_length_ft() -> float:
        return standard_outdoor_track_length_ft()
