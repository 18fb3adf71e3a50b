"""Daily and date-range progress aggregation."""

from __future__ import annotations

import datetime
from typing import List, Sequence, Tuple

from habitflow.core.errors import ValidationError
from habitflow.models import (
    STATUS_COMPLETED,
    DailyProgress,
    ProgressPoint,
    ProgressSummary,
    percentage,
)
from habitflow.storage.base import DateLike, HabitStorage, iso_date

from .schedule_service import day_of_week, habits_due_on

# 日本語: 連続記録とみなす最低達成率 / English: Minimum progress for a day to extend the streak
STREAK_THRESHOLD = 50


def _as_date(value: DateLike) -> datetime.date:
    return datetime.date.fromisoformat(iso_date(value))


def daily_progress(storage: HabitStorage, date: DateLike, day: int | None = None) -> DailyProgress:
    """Completed/total counts for the habits due on ``date``."""
    date_key = iso_date(date)
    if day is None:
        day = day_of_week(_as_date(date_key))
    due = habits_due_on(storage.list_habits(), day)
    statuses = storage.log_statuses_between(date_key, date_key)
    completed = sum(1 for habit in due if statuses.get((habit.id, date_key)) == STATUS_COMPLETED)
    return DailyProgress(completed=completed, total=len(due))


def progress_series(storage: HabitStorage, start: DateLike, end: DateLike) -> List[ProgressPoint]:
    """One point per calendar day in [start, end], zero-habit days included."""
    start_date, end_date = _as_date(start), _as_date(end)
    if start_date > end_date:
        return []

    habits = storage.list_habits()
    statuses = storage.log_statuses_between(start_date, end_date)

    # 日本語: 曜日ごとの対象習慣は7通りしかないので先に計算 / English: Only seven distinct due sets exist, compute them once
    due_by_day = {day: habits_due_on(habits, day) for day in range(7)}

    series = []
    current = start_date
    while current <= end_date:
        date_key = current.isoformat()
        due = due_by_day[day_of_week(current)]
        completed = sum(
            1 for habit in due if statuses.get((habit.id, date_key)) == STATUS_COMPLETED
        )
        series.append(ProgressPoint(date=current, progress=percentage(completed, len(due))))
        current += datetime.timedelta(days=1)
    return series


def last_n_days(days: int, today: datetime.date | None = None) -> Tuple[datetime.date, datetime.date]:
    """Inclusive window of ``days`` days ending today."""
    if days < 1:
        raise ValidationError(f"days must be at least 1 (got {days}).")
    end = today or datetime.date.today()
    return end - datetime.timedelta(days=days - 1), end


def summarize_progress(series: Sequence[ProgressPoint]) -> ProgressSummary:
    if not series:
        return ProgressSummary(average=0, best_day=None, current_streak=0)

    average = percentage(sum(point.progress for point in series), 100 * len(series))
    best_day = series[0]
    for point in series[1:]:
        if point.progress > best_day.progress:
            best_day = point

    streak = 0
    for point in reversed(series):
        if point.progress < STREAK_THRESHOLD:
            break
        streak += 1

    return ProgressSummary(average=average, best_day=best_day, current_streak=streak)


def progress_insight(summary: ProgressSummary) -> str:
    """Short encouragement for the stats screen, streaks taking precedence."""
    if summary.current_streak >= 7:
        return (
            f"Amazing {summary.current_streak}-day streak! Keep the pace and keep building positive habits."
        )
    if summary.average >= 80:
        return "Excellent performance! Your consistency is paying off. Consider adding a new habit."
    if summary.average >= 50:
        return "You're on the right track. Try completing your habits earlier in the day for better consistency."
    if summary.average > 0:
        return "Every small step counts. Focus on one or two key habits before adding more."
    return "Start your habit journey. Consistency matters more than perfection."


__all__ = [
    "STREAK_THRESHOLD",
    "progress_insight",
    "daily_progress",
    "progress_series",
    "last_n_days",
    "summarize_progress",
    "percentage",
]
