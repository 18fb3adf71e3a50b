import datetime

import pytest

from conftest import MONDAY, SUNDAY, TUESDAY, WEDNESDAY
from habitflow.core.errors import ValidationError
from habitflow.models import DailyProgress, ProgressPoint, ProgressSummary
from habitflow.services import (
    HabitRepository,
    LogStore,
    daily_progress,
    last_n_days,
    percentage,
    progress_insight,
    progress_series,
    summarize_progress,
)


@pytest.mark.parametrize(
    "completed, total, expected",
    [(1, 2, 50), (2, 3, 67), (1, 3, 33), (0, 0, 0), (3, 3, 100), (1, 200, 1), (0, 5, 0)],
)
def test_percentage_rounds_half_up(completed, total, expected):
    assert percentage(completed, total) == expected


def test_meditate_monday_scenario(storage):
    habit_id = HabitRepository(storage).create("Meditate", "Health", [1, 3, 5])

    assert daily_progress(storage, MONDAY, 1) == DailyProgress(completed=0, total=1)
    assert LogStore(storage).upsert_toggle(habit_id, MONDAY, 0) == 1

    progress = daily_progress(storage, MONDAY, 1)
    assert progress == DailyProgress(completed=1, total=1)
    assert progress.percentage == 100


def test_daily_progress_with_nothing_due_is_zero(storage):
    HabitRepository(storage).create("Weekend walk", "Physical", [0, 6])

    progress = daily_progress(storage, TUESDAY)
    assert progress == DailyProgress(completed=0, total=0)
    assert progress.percentage == 0


def test_pending_log_counts_as_not_completed(storage):
    habit_id = HabitRepository(storage).create("Read", "Academic", [1])
    logs = LogStore(storage)
    logs.toggle(habit_id, MONDAY)
    logs.toggle(habit_id, MONDAY)

    assert daily_progress(storage, "2026-10-19") == DailyProgress(completed=0, total=1)


def test_three_day_series_includes_zero_habit_day(storage):
    repo = HabitRepository(storage)
    first = repo.create("Run", "Physical", [1, 3])
    second = repo.create("Read", "Academic", [1, 3])
    logs = LogStore(storage)
    logs.toggle(first, MONDAY)
    logs.toggle(second, MONDAY)
    logs.toggle(first, WEDNESDAY)

    series = progress_series(storage, MONDAY, WEDNESDAY)
    assert [point.progress for point in series] == [100, 0, 50]
    assert [point.date for point in series] == [MONDAY, TUESDAY, WEDNESDAY]


def test_single_day_series_matches_daily_progress(storage):
    habit_id = HabitRepository(storage).create("Floss", "Health", [1])
    HabitRepository(storage).create("Vitamins", "Health", [1])
    LogStore(storage).toggle(habit_id, MONDAY)

    series = progress_series(storage, MONDAY, MONDAY)
    assert series == [ProgressPoint(date=MONDAY, progress=daily_progress(storage, MONDAY, 1).percentage)]
    assert series[0].progress == 50


def test_series_is_contiguous_beyond_thirty_days(storage):
    HabitRepository(storage).create("Water", "Health", [0])
    start = datetime.date(2026, 9, 1)

    series = progress_series(storage, start, MONDAY)
    assert len(series) == (MONDAY - start).days + 1
    assert all(
        later.date - earlier.date == datetime.timedelta(days=1)
        for earlier, later in zip(series, series[1:])
    )
    assert all(point.progress == 0 for point in series)


def test_series_uses_schedule_of_each_day(storage):
    habit_id = HabitRepository(storage).create("Church", "Personal", [0])
    LogStore(storage).toggle(habit_id, SUNDAY)

    series = progress_series(storage, "2026-10-18", "2026-10-19")
    assert [(p.date.isoformat(), p.progress) for p in series] == [("2026-10-18", 100), ("2026-10-19", 0)]


def test_series_with_reversed_range_is_empty(storage):
    assert progress_series(storage, TUESDAY, MONDAY) == []


def test_backends_agree_on_aggregates(sql_storage, blob_storage):
    results = []
    for backend in (sql_storage, blob_storage):
        repo = HabitRepository(backend)
        logs = LogStore(backend)
        ids = [
            repo.create("Run", "Physical", [1, 3, 5]),
            repo.create("Read", "Academic", [0, 1, 2, 3, 4, 5, 6]),
            repo.create("Idle", "Personal", []),
        ]
        for offset in range(0, 10, 3):
            logs.toggle(ids[offset % 2], MONDAY + datetime.timedelta(days=offset))
        logs.upsert_toggle(ids[0], WEDNESDAY, 0)
        results.append(
            (
                progress_series(backend, SUNDAY, MONDAY + datetime.timedelta(days=10)),
                daily_progress(backend, WEDNESDAY),
                [h.name for h in repo.list_due_on(3)],
            )
        )
    assert results[0] == results[1]


def test_last_n_days_window():
    assert last_n_days(14, MONDAY) == (datetime.date(2026, 10, 6), MONDAY)
    assert last_n_days(1, MONDAY) == (MONDAY, MONDAY)
    with pytest.raises(ValidationError):
        last_n_days(0, MONDAY)


def test_summarize_progress():
    series = [
        ProgressPoint(date=SUNDAY, progress=100),
        ProgressPoint(date=MONDAY, progress=0),
        ProgressPoint(date=TUESDAY, progress=50),
        ProgressPoint(date=WEDNESDAY, progress=60),
    ]
    summary = summarize_progress(series)
    assert summary.average == 53
    assert summary.best_day == series[0]
    assert summary.current_streak == 2


def test_summarize_empty_series():
    summary = summarize_progress([])
    assert (summary.average, summary.best_day, summary.current_streak) == (0, None, 0)


@pytest.mark.parametrize(
    "average, streak, expected",
    [
        (20, 7, "Amazing 7-day streak!"),
        (80, 0, "Excellent performance!"),
        (50, 6, "You're on the right track."),
        (1, 0, "Every small step counts."),
        (0, 0, "Start your habit journey."),
    ],
)
def test_progress_insight_picks_message_by_streak_then_average(average, streak, expected):
    summary = ProgressSummary(average=average, best_day=None, current_streak=streak)
    assert progress_insight(summary).startswith(expected)
