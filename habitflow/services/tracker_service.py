"""Cached tracker state mirrored from the store for a UI layer."""

from __future__ import annotations

import dataclasses
import datetime
import logging
from typing import Callable, Iterable, List

from habitflow.core.config import get_chart_days
from habitflow.core.errors import StorageError
from habitflow.models import (
    STATUS_COMPLETED,
    Category,
    DailyProgress,
    HabitStatus,
    ProgressPoint,
)
from habitflow.storage.base import HabitStorage

from .habit_service import CategoryRepository, HabitRepository
from .log_service import LogStore
from .progress_service import daily_progress, last_n_days, progress_series
from .schedule_service import day_of_week

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class TrackerState:
    habits: List[HabitStatus] = dataclasses.field(default_factory=list)
    categories: List[Category] = dataclasses.field(default_factory=list)
    daily_progress: DailyProgress = DailyProgress(completed=0, total=0)
    chart_data: List[ProgressPoint] = dataclasses.field(default_factory=list)
    selected_category: str | None = None
    # 日本語: True の間はキャッシュを信用せず再読込が必要 / English: While True the cache must be reloaded before use
    stale: bool = True


class HabitTracker:
    """Keeps today's habits, progress and chart in sync with the store.

    Every write either updates the cache from the store's answer or reloads
    it; when neither is possible the state is flagged ``stale``.
    """

    def __init__(
        self,
        storage: HabitStorage,
        today_fn: Callable[[], datetime.date] = datetime.date.today,
        chart_days: int | None = None,
    ):
        self.storage = storage
        self.today_fn = today_fn
        self.chart_days = chart_days or get_chart_days()
        self.habits = HabitRepository(storage)
        self.categories = CategoryRepository(storage)
        self.logs = LogStore(storage)
        self.state = TrackerState()

    # -------- Loading --------
    def load_habits_for_today(self) -> None:
        today = self.today_fn()
        day = day_of_week(today)
        self.state.habits = self.logs.habits_with_status(today, day)
        self.state.daily_progress = daily_progress(self.storage, today, day)

    def load_categories(self) -> None:
        self.state.categories = self.categories.list_all()

    def load_chart_data(self, days: int | None = None) -> None:
        start, end = last_n_days(days or self.chart_days, self.today_fn())
        self.state.chart_data = progress_series(self.storage, start, end)

    def refresh_all(self) -> TrackerState:
        self.load_habits_for_today()
        self.load_categories()
        self.load_chart_data()
        self.state.stale = False
        return self.state

    def _reload_after_failure(self) -> None:
        logger.info("Reloading tracker state from storage")
        try:
            self.refresh_all()
        except StorageError:
            logger.exception("Reload failed, tracker state marked stale")
            self.state.stale = True

    # -------- Writes --------
    def toggle_habit(self, habit_id: int) -> int:
        """Flip today's status for ``habit_id`` and return the stored result."""
        today = self.today_fn()
        previous = self.state.habits
        # 日本語: 楽観的更新を先に反映 / English: Apply the optimistic update first
        self.state.habits = [self._flipped(item) if item.habit.id == habit_id else item for item in previous]
        self._recount()

        try:
            new_status = self.logs.toggle(habit_id, today)
        except StorageError:
            logger.exception("Toggle failed for habit %s", habit_id)
            self._reload_after_failure()
            raise

        # 日本語: ストアの結果でキャッシュを確定 / English: Settle the cache on the store's answer
        self.state.habits = [
            dataclasses.replace(item, status=new_status) if item.habit.id == habit_id else item
            for item in self.state.habits
        ]
        self._recount()
        self._refresh_chart_best_effort()
        return new_status

    def add_habit(
        self,
        name: str,
        category: str,
        schedule: Iterable[int],
        color: str | None = None,
        icon: str | None = None,
    ) -> int:
        return self._write(lambda: self.habits.create(name, category, schedule, color, icon))

    def edit_habit(
        self,
        habit_id: int,
        name: str,
        category: str,
        schedule: Iterable[int],
        color: str | None = None,
        icon: str | None = None,
    ) -> int:
        return self._write(lambda: self.habits.update(habit_id, name, category, schedule, color, icon))

    def remove_habit(self, habit_id: int) -> int:
        return self._write(lambda: self.habits.delete(habit_id))

    def clear_history(self) -> int:
        return self._write(self.logs.clear_all)

    def delete_all_data(self) -> int:
        return self._write(self.habits.delete_all)

    def set_selected_category(self, category: str | None) -> None:
        self.state.selected_category = category

    def visible_habits(self) -> List[HabitStatus]:
        selected = self.state.selected_category
        if selected is None:
            return list(self.state.habits)
        return [item for item in self.state.habits if item.habit.category == selected]

    # -------- Internals --------
    def _write(self, operation):
        """Run a store write, then reload the cache.

        A failed write propagates. A failed reload after a committed write
        does not: the write's result is returned and the state is marked
        ``stale`` so the next read reloads it.
        """
        try:
            result = operation()
        except StorageError:
            self.state.stale = True
            raise
        try:
            self.refresh_all()
        except StorageError:
            logger.warning("Reload after write failed, tracker state marked stale", exc_info=True)
            self.state.stale = True
        return result

    @staticmethod
    def _flipped(item: HabitStatus) -> HabitStatus:
        return dataclasses.replace(item, status=STATUS_COMPLETED - item.status)

    def _recount(self) -> None:
        completed = sum(1 for item in self.state.habits if item.done)
        self.state.daily_progress = DailyProgress(completed=completed, total=len(self.state.habits))

    def _refresh_chart_best_effort(self) -> None:
        try:
            self.load_chart_data()
        except StorageError:
            # 日本語: グラフ更新の失敗は呼び出し元へ伝えない / English: Chart refresh failures are logged, never surfaced
            logger.warning("Chart refresh after toggle failed", exc_info=True)
            self.state.stale = True
