"""Completion log operations."""

from __future__ import annotations

import datetime
import logging
from typing import List

from habitflow.models import STATUS_PENDING, HabitLog, HabitStatus
from habitflow.storage.base import DateLike, HabitStorage, flip_status, iso_date

from .schedule_service import day_of_week, habits_due_on

logger = logging.getLogger(__name__)


class LogStore:
    """One status per (habit, date), created lazily on first toggle."""

    def __init__(self, storage: HabitStorage):
        self.storage = storage

    def upsert_toggle(self, habit_id: int, date: DateLike, current_status: int) -> int:
        """Store ``1 - current_status`` for (habit_id, date) and return it.

        The caller vouches for ``current_status``; a stale value overwrites
        whatever is stored. Prefer :meth:`toggle` when the stored state is the
        source of truth.
        """
        new_status = flip_status(current_status)
        return self.storage.upsert_log(habit_id, date, new_status)

    def toggle(self, habit_id: int, date: DateLike) -> int:
        """Flip the stored status atomically inside the store."""
        new_status = self.storage.toggle_log(habit_id, date)
        logger.debug("Habit %s on %s toggled to %s", habit_id, iso_date(date), new_status)
        return new_status

    def clear_all(self) -> int:
        removed = self.storage.clear_logs()
        logger.info("Cleared %d log entries", removed)
        return removed

    def list_logs(self, habit_id: int) -> List[HabitLog]:
        return self.storage.list_logs(habit_id)

    def habits_with_status(self, date: DateLike, day: int | None = None) -> List[HabitStatus]:
        """Habits due on ``date`` paired with that day's status (0 when unlogged)."""
        date_key = iso_date(date)
        if day is None:
            day = day_of_week(datetime.date.fromisoformat(date_key))
        logs = {log.habit_id: log for log in self.storage.list_logs_on(date_key)}
        result = []
        for habit in habits_due_on(self.storage.list_habits(), day):
            log = logs.get(habit.id)
            result.append(
                HabitStatus(
                    habit=habit,
                    status=log.status if log else STATUS_PENDING,
                    log_id=log.id if log else None,
                )
            )
        return result
