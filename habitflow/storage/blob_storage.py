"""In-memory storage backend persisted as a single JSON blob."""

from __future__ import annotations

import contextlib
import copy
import datetime
import json
import logging
import os
from typing import Any, Dict, Iterator, List

from habitflow.core.errors import StorageError, ValidationError
from habitflow.models import (
    DEFAULT_CATEGORIES,
    STATUS_COMPLETED,
    STATUS_PENDING,
    Category,
    Habit,
    HabitLog,
)

from .base import DateLike, HabitStorage, iso_date, recent_first_key

logger = logging.getLogger(__name__)


def _empty_blob() -> Dict[str, Any]:
    return {
        "data": {"habits": [], "habit_logs": [], "categories": []},
        "next_ids": {"habits": 1, "habit_logs": 1, "categories": 1},
    }


class BlobHabitStorage(HabitStorage):
    """Collections kept in memory and written back as one JSON document.

    ``path=None`` keeps everything in memory, which is handy for tests and
    previews. Every mutation rewrites the whole blob atomically; if the write
    fails the in-memory collections are restored to their previous state.
    """

    backend_name = "blob"

    def __init__(self, path: str | os.PathLike | None = None):
        self.path = os.fspath(path) if path is not None else None
        self._blob: Dict[str, Any] | None = None

    # -------- Lifecycle / persistence --------
    def open(self) -> None:
        if self._blob is not None:
            return
        blob = self._read()
        if blob is None:
            self._blob = _empty_blob()
            try:
                self._seed_default_categories()
            except StorageError:
                self._blob = None
                raise
        else:
            self._blob = blob
        logger.info("Opened %s storage at %s", self.backend_name, self.path or "<memory>")

    def close(self) -> None:
        if self._blob is None:
            return
        self._blob = None
        logger.info("Closed %s storage", self.backend_name)

    @property
    def _state(self) -> Dict[str, Any]:
        if self._blob is None:
            raise StorageError("Storage is not open. Call open() first.")
        return self._blob

    @property
    def _data(self) -> Dict[str, List[Dict[str, Any]]]:
        return self._state["data"]

    def _next_id(self, collection: str) -> int:
        next_ids = self._state["next_ids"]
        value = next_ids[collection]
        next_ids[collection] = value + 1
        return value

    def _read(self) -> Dict[str, Any] | None:
        if self.path is None or not os.path.exists(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                blob = json.load(f)
        except (OSError, ValueError) as exc:
            logger.exception("Failed to read blob %s", self.path)
            raise StorageError(f"Could not read {self.path}: {exc}") from exc
        if not isinstance(blob, dict) or "data" not in blob or "next_ids" not in blob:
            raise StorageError(f"Malformed blob in {self.path}")
        return blob

    def _save(self) -> None:
        if self.path is None:
            return
        # 日本語: 一時ファイルへ書いてから置き換える / English: Write to a temp file, then swap it in
        tmp = self.path + ".tmp"
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as f:
                json.dump(self._blob, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except OSError as exc:
            logger.exception("Failed to write blob %s", self.path)
            raise StorageError(f"Could not write {self.path}: {exc}") from exc

    @contextlib.contextmanager
    def _transaction(self) -> Iterator[Dict[str, List[Dict[str, Any]]]]:
        # 日本語: 書き込み失敗時は変更前の状態へ戻す / English: Memory only keeps a change once it is on disk
        snapshot = copy.deepcopy(self._state)
        try:
            yield self._data
            self._save()
        except Exception:
            self._blob = snapshot
            raise

    def _seed_default_categories(self) -> None:
        with self._transaction() as data:
            for name, color, icon in DEFAULT_CATEGORIES:
                data["categories"].append(
                    {"id": self._next_id("categories"), "name": name, "color": color, "icon": icon}
                )

    # -------- Row conversion --------
    @staticmethod
    def _to_habit(row: Dict[str, Any]) -> Habit:
        return Habit(
            id=row["id"],
            name=row["name"],
            category=row["category"],
            frequency=row["frequency"],
            color=row["color"],
            icon=row["icon"],
            created_at=datetime.datetime.fromisoformat(row["created_at"]),
        )

    @staticmethod
    def _to_log(row: Dict[str, Any]) -> HabitLog:
        return HabitLog(id=row["id"], habit_id=row["habit_id"], date=row["date"], status=row["status"])

    @staticmethod
    def _to_category(row: Dict[str, Any]) -> Category:
        return Category(id=row["id"], name=row["name"], color=row["color"], icon=row["icon"])

    def _find_habit(self, habit_id: int) -> Dict[str, Any] | None:
        for row in self._data["habits"]:
            if row["id"] == habit_id:
                return row
        return None

    def _find_log(self, habit_id: int, date_key: str) -> Dict[str, Any] | None:
        for row in self._data["habit_logs"]:
            if row["habit_id"] == habit_id and row["date"] == date_key:
                return row
        return None

    def _require_habit(self, habit_id: int) -> None:
        # 日本語: 外部キー制約の代わり / English: Stand-in for the relational foreign key
        if self._find_habit(habit_id) is None:
            raise StorageError(f"Habit {habit_id} does not exist.")

    # -------- Habits --------
    def create_habit(
        self,
        name: str,
        category: str,
        frequency: str,
        color: str,
        icon: str,
        created_at: datetime.datetime | None = None,
    ) -> int:
        with self._transaction() as data:
            habit_id = self._next_id("habits")
            data["habits"].append(
                {
                    "id": habit_id,
                    "name": name,
                    "category": category,
                    "frequency": frequency,
                    "color": color,
                    "icon": icon,
                    "created_at": (created_at or datetime.datetime.now()).isoformat(),
                }
            )
        return habit_id

    def update_habit(
        self, habit_id: int, name: str, category: str, frequency: str, color: str, icon: str
    ) -> int:
        if self._find_habit(habit_id) is None:
            return 0
        with self._transaction():
            self._find_habit(habit_id).update(
                name=name, category=category, frequency=frequency, color=color, icon=icon
            )
        return 1

    def delete_habit(self, habit_id: int) -> int:
        if self._find_habit(habit_id) is None:
            return 0
        with self._transaction() as data:
            data["habits"] = [row for row in data["habits"] if row["id"] != habit_id]
            data["habit_logs"] = [row for row in data["habit_logs"] if row["habit_id"] != habit_id]
        return 1

    def delete_all_habits(self) -> int:
        with self._transaction() as data:
            count = len(data["habits"])
            data["habits"] = []
            data["habit_logs"] = []
        return count

    def get_habit(self, habit_id: int) -> Habit | None:
        row = self._find_habit(habit_id)
        return self._to_habit(row) if row is not None else None

    def list_habits(self) -> List[Habit]:
        habits = [self._to_habit(row) for row in self._data["habits"]]
        return sorted(habits, key=recent_first_key, reverse=True)

    # -------- Logs --------
    def upsert_log(self, habit_id: int, date: DateLike, status: int) -> int:
        date_key = iso_date(date)
        self._require_habit(habit_id)
        with self._transaction() as data:
            existing = self._find_log(habit_id, date_key)
            if existing is not None:
                existing["status"] = status
            else:
                data["habit_logs"].append(
                    {"id": self._next_id("habit_logs"), "habit_id": habit_id, "date": date_key, "status": status}
                )
        return status

    def toggle_log(self, habit_id: int, date: DateLike) -> int:
        existing = self._find_log(habit_id, iso_date(date))
        current = existing["status"] if existing is not None else STATUS_PENDING
        return self.upsert_log(habit_id, date, STATUS_COMPLETED - current)

    def list_logs(self, habit_id: int) -> List[HabitLog]:
        rows = [row for row in self._data["habit_logs"] if row["habit_id"] == habit_id]
        return [self._to_log(row) for row in sorted(rows, key=lambda row: row["date"])]

    def list_logs_between(self, start: DateLike, end: DateLike) -> List[HabitLog]:
        start_key, end_key = iso_date(start), iso_date(end)
        rows = [row for row in self._data["habit_logs"] if start_key <= row["date"] <= end_key]
        rows.sort(key=lambda row: (row["date"], row["habit_id"]))
        return [self._to_log(row) for row in rows]

    def clear_logs(self) -> int:
        with self._transaction() as data:
            count = len(data["habit_logs"])
            data["habit_logs"] = []
        return count

    # -------- Categories --------
    def list_categories(self) -> List[Category]:
        categories = [self._to_category(row) for row in self._data["categories"]]
        return sorted(categories, key=lambda category: category.name)

    def create_category(self, name: str, color: str, icon: str) -> int:
        if any(row["name"] == name for row in self._data["categories"]):
            raise ValidationError(f"Category {name!r} already exists.")
        with self._transaction() as data:
            category_id = self._next_id("categories")
            data["categories"].append({"id": category_id, "name": name, "color": color, "icon": icon})
        return category_id

    def delete_category(self, category_id: int) -> int:
        categories = self._data["categories"]
        if not any(row["id"] == category_id for row in categories):
            return 0
        with self._transaction() as data:
            data["categories"] = [row for row in data["categories"] if row["id"] != category_id]
        return 1
