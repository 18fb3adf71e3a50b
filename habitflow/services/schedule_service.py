"""Schedule evaluation: which habits are due on a given weekday."""

from __future__ import annotations

import datetime
from typing import Iterable, List, Tuple

from habitflow.core.errors import ValidationError
from habitflow.models import Habit


def day_of_week(date_obj: datetime.date) -> int:
    """Weekday number with Sunday=0 ... Saturday=6."""
    # 日本語: Python の weekday() は月曜=0 なので日曜起点へずらす / English: Python's weekday() is Monday=0, shift to Sunday-first
    return (date_obj.weekday() + 1) % 7


def category_name_key(habit: Habit) -> Tuple[str, str]:
    return (habit.category, habit.name)


def _check_day(day: int) -> int:
    if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
        raise ValidationError(f"Weekday must be an integer between 0 and 6 (got {day!r}).")
    return day


def is_due(habit: Habit, day: int) -> bool:
    return _check_day(day) in habit.schedule


def habits_due_on(habits: Iterable[Habit], day: int) -> List[Habit]:
    _check_day(day)
    matched = [habit for habit in habits if day in habit.schedule]
    return sorted(matched, key=category_name_key)


__all__ = ["category_name_key", "day_of_week", "is_due", "habits_due_on"]
