"""Habit and category repositories."""

from __future__ import annotations

import logging
from typing import Iterable, List

from habitflow.core.errors import NotFoundError, ValidationError
from habitflow.models import (
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_CATEGORY_ICON,
    DEFAULT_HABIT_COLOR,
    DEFAULT_HABIT_ICON,
    Category,
    Habit,
    Schedule,
)
from habitflow.storage.base import HabitStorage

from .schedule_service import habits_due_on

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 50


def _clean_name(value: str, label: str = "Habit name") -> str:
    name = (value or "").strip() if isinstance(value, str) else ""
    if not name:
        raise ValidationError(f"{label} must not be empty.")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"{label} must be at most {MAX_NAME_LENGTH} characters.")
    return name


class HabitRepository:
    """CRUD for habit definitions.

    An empty schedule is accepted: such a habit is simply never due. Missing
    ids are reported through row counts and ``None`` rather than exceptions.
    """

    def __init__(self, storage: HabitStorage):
        self.storage = storage

    def _clean_category(self, value: str) -> str:
        category = _clean_name(value, "Category")
        # 日本語: 作成・更新時のみ既存カテゴリを要求 / English: Only enforced on create/update, deletes never cascade
        known = {item.name for item in self.storage.list_categories()}
        if category not in known:
            raise ValidationError(f"Unknown category: {category!r}")
        return category

    def create(
        self,
        name: str,
        category: str,
        schedule: Iterable[int],
        color: str | None = None,
        icon: str | None = None,
    ) -> int:
        habit_id = self.storage.create_habit(
            _clean_name(name),
            self._clean_category(category),
            Schedule(schedule).to_json(),
            color or DEFAULT_HABIT_COLOR,
            icon or DEFAULT_HABIT_ICON,
        )
        logger.info("Created habit %s", habit_id)
        return habit_id

    def update(
        self,
        habit_id: int,
        name: str,
        category: str,
        schedule: Iterable[int],
        color: str | None = None,
        icon: str | None = None,
    ) -> int:
        """Return the number of habits changed; 0 means the id was not found."""
        changed = self.storage.update_habit(
            habit_id,
            _clean_name(name),
            self._clean_category(category),
            Schedule(schedule).to_json(),
            color or DEFAULT_HABIT_COLOR,
            icon or DEFAULT_HABIT_ICON,
        )
        if not changed:
            logger.warning("Update skipped, habit %s not found", habit_id)
        return changed

    def delete(self, habit_id: int) -> int:
        removed = self.storage.delete_habit(habit_id)
        if removed:
            logger.info("Deleted habit %s and its logs", habit_id)
        return removed

    def delete_all(self) -> int:
        removed = self.storage.delete_all_habits()
        logger.info("Deleted all %d habits and their logs", removed)
        return removed

    def get(self, habit_id: int) -> Habit | None:
        return self.storage.get_habit(habit_id)

    def require(self, habit_id: int) -> Habit:
        habit = self.storage.get_habit(habit_id)
        if habit is None:
            raise NotFoundError(f"Habit {habit_id} does not exist.")
        return habit

    def list_recent(self) -> List[Habit]:
        return self.storage.list_habits()

    def list_due_on(self, day: int) -> List[Habit]:
        return habits_due_on(self.storage.list_habits(), day)


class CategoryRepository:
    def __init__(self, storage: HabitStorage):
        self.storage = storage

    def list_all(self) -> List[Category]:
        return self.storage.list_categories()

    def create(self, name: str, color: str | None = None, icon: str | None = None) -> int:
        return self.storage.create_category(
            _clean_name(name, "Category name"),
            color or DEFAULT_CATEGORY_COLOR,
            icon or DEFAULT_CATEGORY_ICON,
        )

    def delete(self, category_id: int) -> int:
        return self.storage.delete_category(category_id)
