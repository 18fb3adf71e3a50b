"""Core package exports."""

from .config import (
    BASE_DIR,
    DATABASE_URL,
    STORAGE_BACKEND,
    get_blob_path,
    get_chart_days,
    get_database_url,
    get_log_level,
    get_storage_backend,
)
from .db import build_engine, normalize_database_url
from .errors import HabitFlowError, NotFoundError, StorageError, ValidationError
from .logging_setup import configure_logging

__all__ = [
    "BASE_DIR",
    "DATABASE_URL",
    "STORAGE_BACKEND",
    "get_blob_path",
    "get_chart_days",
    "get_database_url",
    "get_log_level",
    "get_storage_backend",
    "build_engine",
    "normalize_database_url",
    "configure_logging",
    "HabitFlowError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
