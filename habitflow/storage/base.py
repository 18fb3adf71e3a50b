"""Abstract storage contract shared by every HabitFlow backend."""

from __future__ import annotations

import abc
import datetime
from typing import Dict, List, Tuple

from dateutil import parser as date_parser

from habitflow.core.errors import ValidationError
from habitflow.models import STATUS_COMPLETED, STATUS_PENDING, Category, Habit, HabitLog

DateLike = datetime.date | str


def iso_date(value: DateLike) -> str:
    """Normalize a date or ISO string to ``YYYY-MM-DD``."""
    if isinstance(value, datetime.datetime):
        return value.date().isoformat()
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return date_parser.isoparse(value.strip()).date().isoformat()
        except (ValueError, OverflowError) as exc:
            raise ValidationError(f"Date must be YYYY-MM-DD (got {value!r}).") from exc
    raise ValidationError(f"Unsupported date value: {value!r}")


def flip_status(current_status: int) -> int:
    if current_status not in (STATUS_PENDING, STATUS_COMPLETED):
        raise ValidationError(f"Status must be 0 or 1 (got {current_status!r}).")
    return 1 - current_status


def recent_first_key(habit: Habit) -> Tuple[datetime.datetime, int]:
    return (habit.created_at, habit.id or 0)


class HabitStorage(abc.ABC):
    """Persistence contract for habits, logs and categories.

    Implementations are explicitly opened and closed and must return the
    same results for the same sequence of calls. Every failure of the
    underlying store surfaces as ``StorageError``.
    """

    backend_name = "abstract"

    def __enter__(self) -> "HabitStorage":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @abc.abstractmethod
    def open(self) -> None:
        """Prepare the store (schema, default categories)."""

    @abc.abstractmethod
    def close(self) -> None:
        ...

    # -------- Habits --------
    @abc.abstractmethod
    def create_habit(
        self,
        name: str,
        category: str,
        frequency: str,
        color: str,
        icon: str,
        created_at: datetime.datetime | None = None,
    ) -> int:
        ...

    @abc.abstractmethod
    def update_habit(
        self, habit_id: int, name: str, category: str, frequency: str, color: str, icon: str
    ) -> int:
        """Return the number of rows changed (0 when the id is unknown)."""

    @abc.abstractmethod
    def delete_habit(self, habit_id: int) -> int:
        """Delete a habit together with its logs in one store operation."""

    @abc.abstractmethod
    def delete_all_habits(self) -> int:
        ...

    @abc.abstractmethod
    def get_habit(self, habit_id: int) -> Habit | None:
        ...

    @abc.abstractmethod
    def list_habits(self) -> List[Habit]:
        """All habits, most recently created first."""

    # -------- Logs --------
    @abc.abstractmethod
    def upsert_log(self, habit_id: int, date: DateLike, status: int) -> int:
        """Insert or overwrite the status for (habit_id, date)."""

    @abc.abstractmethod
    def toggle_log(self, habit_id: int, date: DateLike) -> int:
        """Flip the stored status for (habit_id, date) atomically and return it."""

    @abc.abstractmethod
    def list_logs(self, habit_id: int) -> List[HabitLog]:
        ...

    @abc.abstractmethod
    def list_logs_between(self, start: DateLike, end: DateLike) -> List[HabitLog]:
        """Logs whose date falls in [start, end], ordered by date then habit id."""

    @abc.abstractmethod
    def clear_logs(self) -> int:
        ...

    # -------- Categories --------
    @abc.abstractmethod
    def list_categories(self) -> List[Category]:
        ...

    @abc.abstractmethod
    def create_category(self, name: str, color: str, icon: str) -> int:
        ...

    @abc.abstractmethod
    def delete_category(self, category_id: int) -> int:
        ...

    # -------- Shared helpers --------
    def list_logs_on(self, date: DateLike) -> List[HabitLog]:
        return self.list_logs_between(date, date)

    def log_statuses_between(self, start: DateLike, end: DateLike) -> Dict[Tuple[int, str], int]:
        return {(log.habit_id, log.date): log.status for log in self.list_logs_between(start, end)}
