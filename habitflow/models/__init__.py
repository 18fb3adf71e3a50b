"""Model exports for HabitFlow."""

from .habit_models import (
    DEFAULT_CATEGORIES,
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_CATEGORY_ICON,
    DEFAULT_HABIT_COLOR,
    DEFAULT_HABIT_ICON,
    STATUS_COMPLETED,
    STATUS_PENDING,
    Category,
    Habit,
    HabitLog,
)
from .schedule import DAY_NAMES, Schedule, describe_schedule
from .views import DailyProgress, HabitStatus, ProgressPoint, ProgressSummary, percentage

__all__ = [
    "Habit",
    "HabitLog",
    "Category",
    "Schedule",
    "describe_schedule",
    "DAY_NAMES",
    "HabitStatus",
    "DailyProgress",
    "ProgressPoint",
    "ProgressSummary",
    "percentage",
    "DEFAULT_CATEGORIES",
    "DEFAULT_CATEGORY_COLOR",
    "DEFAULT_CATEGORY_ICON",
    "DEFAULT_HABIT_COLOR",
    "DEFAULT_HABIT_ICON",
    "STATUS_COMPLETED",
    "STATUS_PENDING",
]
