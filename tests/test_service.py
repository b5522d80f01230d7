from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from runlog.goals import HALF_MARATHON
from runlog.model import Run
from runlog.service import RunService
from runlog.stats import StatWindow
from runlog.storage import RunStore, StoreError

TODAY = date(2025, 1, 15)


def _service(path: Path) -> RunService:
    return RunService(RunStore(path), today=lambda: TODAY)


def test_add_run_persists_immediately(tmp_path: Path) -> None:
    path = tmp_path / "runs.csv"
    service = _service(path)
    service.add_run(Run.from_miles(date(2025, 1, 13), 3.0, 1500))
    service.add_run(Run.from_kilometers(date(2025, 1, 14), 5.0))

    reloaded = _service(path)
    assert len(reloaded.all_runs()) == 2
    assert reloaded.all_runs()[1].distance_mi == pytest.approx(3.106855, abs=1e-4)


def test_add_run_propagates_store_error(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    service = _service(blocker / "runs.csv")
    with pytest.raises(StoreError):
        service.add_run(Run.from_miles(TODAY, 1.0))
    assert len(service.all_runs()) == 1


def test_all_runs_keeps_insertion_order(tmp_path: Path) -> None:
    service = _service(tmp_path / "runs.csv")
    service.add_run(Run.from_miles(date(2025, 1, 10), 1.0))
    service.add_run(Run.from_miles(date(2025, 1, 2), 2.0))
    assert [r.day for r in service.all_runs()] == [date(2025, 1, 10), date(2025, 1, 2)]
    assert [r.day for r in service.recent_runs(1)] == [date(2025, 1, 10)]


def test_queries_are_computed_fresh(tmp_path: Path) -> None:
    service = _service(tmp_path / "runs.csv")
    assert service.this_calendar_week().total_runs == 0
    assert service.next_run_goal_miles() == 0.25

    service.add_run(Run.from_miles(date(2025, 1, 13), 9.5))
    assert service.this_calendar_week().total_miles == 9.5
    assert service.last_7_days().total_runs == 1
    assert service.last_30_days().total_runs == 1
    assert service.last_365_days().total_runs == 1
    assert service.calendar_year().total_runs == 1
    assert service.all_time().total_runs == 1
    assert service.next_run_goal_miles() == HALF_MARATHON


def test_stats_for_and_windows(tmp_path: Path) -> None:
    service = _service(tmp_path / "runs.csv")
    service.add_run(Run.from_miles(date(2025, 1, 1), 3.0))
    service.add_run(Run.from_miles(date(2025, 1, 8), 4.0))
    s = service.stats_for(date(2025, 1, 1), date(2025, 1, 8))
    assert (s.total_runs, s.total_miles, s.avg_miles, s.highest_day_miles) == (
        2,
        7.0,
        3.5,
        4.0,
    )
    windows = service.all_windows()
    assert windows[StatWindow.ALL_TIME].total_miles == 7.0
    assert windows[StatWindow.THIS_WEEK].total_runs == 0


def test_weekly_goal_queries(tmp_path: Path) -> None:
    service = _service(tmp_path / "runs.csv")
    service.add_run(Run.from_miles(date(2025, 1, 6), 26.0))
    assert service.week_start() == date(2025, 1, 12)
    assert service.week_end() == date(2025, 1, 18)
    assert service.remaining_days_in_week() == 3
    assert service.next_weekly_goal_miles() == 31.0
    wb = service.weekly_goal_breakdown()
    assert wb.runs_remaining == 3
    assert wb.miles_per_run == pytest.approx(10.33)


def test_static_helpers() -> None:
    assert RunService.standard_outdoor_track_length_ft() == 1320.0
    assert RunService.pace_min_per_mile(Run.from_miles(TODAY, 0.0, 600)) == 0.0


def test_goals_ignore_non_finite_and_negative_lines(tmp_path: Path) -> None:
    path = tmp_path / "runs.csv"
    path.write_text(
        "2025-01-13,4.0000,0,MILES\n"
        "2025-01-14,nan,0,MILES\n"
        "2025-01-14,-5.0,-60,MILES\n",
        encoding="utf-8",
    )
    service = _service(path)
    assert len(service.all_runs()) == 1
    assert service.next_run_goal_miles() == 5.0
    assert service.next_weekly_goal_miles() == 3.0
