"""Service-layer exports."""

from .habit_service import CategoryRepository, HabitRepository
from .log_service import LogStore
from .progress_service import (
    daily_progress,
    last_n_days,
    percentage,
    progress_insight,
    progress_series,
    summarize_progress,
)
from .schedule_service import day_of_week, habits_due_on, is_due
from .tracker_service import HabitTracker, TrackerState

__all__ = [
    "HabitRepository",
    "CategoryRepository",
    "LogStore",
    "daily_progress",
    "progress_series",
    "last_n_days",
    "percentage",
    "summarize_progress",
    "progress_insight",
    "day_of_week",
    "habits_due_on",
    "is_due",
    "HabitTracker",
    "TrackerState",
]
