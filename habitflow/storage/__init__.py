"""Storage backends and factory."""

from __future__ import annotations

from habitflow.core.config import get_blob_path, get_database_url, get_storage_backend
from habitflow.core.errors import ValidationError

from .base import HabitStorage, iso_date
from .blob_storage import BlobHabitStorage
from .sql_storage import SqlHabitStorage


def build_storage(backend: str | None = None) -> HabitStorage:
    """Construct (but do not open) the configured backend."""
    # 日本語: 引数未指定時は環境設定に従う / English: Fall back to environment configuration
    selected = backend or get_storage_backend()
    if selected == "blob":
        return BlobHabitStorage(get_blob_path())
    if selected == "sql":
        return SqlHabitStorage(get_database_url())
    raise ValidationError(f"Unknown storage backend: {selected}")


def open_storage(backend: str | None = None) -> HabitStorage:
    storage = build_storage(backend)
    storage.open()
    return storage


__all__ = [
    "HabitStorage",
    "BlobHabitStorage",
    "SqlHabitStorage",
    "build_storage",
    "open_storage",
    "iso_date",
]
