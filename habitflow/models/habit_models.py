"""Habit domain SQLModel models."""

from __future__ import annotations

import datetime

from sqlalchemy import Column, ForeignKey, Integer, UniqueConstraint
from sqlmodel import Field, SQLModel

from .schedule import Schedule

DEFAULT_HABIT_COLOR = "#6366F1"
DEFAULT_HABIT_ICON = "checkmark-circle"
DEFAULT_CATEGORY_COLOR = "#6366F1"
DEFAULT_CATEGORY_ICON = "folder"

# 日本語: 初期化時に投入する既定カテゴリ / English: Categories seeded when a store is initialized
DEFAULT_CATEGORIES = (
    ("Health", "#10B981", "heart"),
    ("Academic", "#6366F1", "school"),
    ("Physical", "#F59E0B", "fitness"),
    ("Personal", "#EC4899", "person"),
    ("Work", "#3B82F6", "briefcase"),
)

STATUS_PENDING = 0
STATUS_COMPLETED = 1


# 日本語: 週次で繰り返す習慣 / English: Recurring habit with a weekly schedule
class Habit(SQLModel, table=True):
    __tablename__ = "habits"

    # 日本語: frequency は曜日番号の JSON 配列 / English: frequency is a JSON array of weekday numbers
    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=50)
    category: str = Field(max_length=50)
    frequency: str = Field(default="[]", max_length=50)
    color: str = Field(default=DEFAULT_HABIT_COLOR, max_length=20)
    icon: str = Field(default=DEFAULT_HABIT_ICON, max_length=50)
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.now)

    @property
    def schedule(self) -> Schedule:
        return Schedule.from_json(self.frequency)


# 日本語: 習慣ごと・日付ごとの達成状況 / English: Per-day completion status for one habit
class HabitLog(SQLModel, table=True):
    __tablename__ = "habit_logs"
    __table_args__ = (UniqueConstraint("habit_id", "date", name="uq_habit_logs_habit_id_date"),)

    id: int | None = Field(default=None, primary_key=True)
    habit_id: int = Field(
        sa_column=Column(Integer, ForeignKey("habits.id", ondelete="CASCADE"), nullable=False)
    )
    date: str = Field(max_length=10)
    status: int = Field(default=STATUS_PENDING)


# 日本語: 表示・グルーピング用のカテゴリ / English: Display and grouping category
class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=50, sa_column_kwargs={"unique": True})
    color: str = Field(default=DEFAULT_CATEGORY_COLOR, max_length=20)
    icon: str = Field(default=DEFAULT_CATEGORY_ICON, max_length=50)
