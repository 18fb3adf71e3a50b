"""Derived, non-persisted views over habits and logs."""

from __future__ import annotations

import datetime
from dataclasses import dataclass

from .habit_models import STATUS_COMPLETED, Habit


def percentage(completed: int, total: int) -> int:
    """Whole-number completion percentage, 0 when nothing is due."""
    if total <= 0:
        return 0
    # 日本語: 整数演算で四捨五入（0.5 は切り上げ） / English: Exact integer rounding, halves go up
    return (200 * completed + total) // (2 * total)


@dataclass(frozen=True)
class HabitStatus:
    habit: Habit
    status: int
    log_id: int | None = None

    @property
    def done(self) -> bool:
        return self.status == STATUS_COMPLETED


@dataclass(frozen=True)
class DailyProgress:
    completed: int
    total: int

    @property
    def percentage(self) -> int:
        return percentage(self.completed, self.total)


@dataclass(frozen=True)
class ProgressPoint:
    date: datetime.date
    progress: int


@dataclass(frozen=True)
class ProgressSummary:
    average: int
    best_day: ProgressPoint | None
    current_streak: int
