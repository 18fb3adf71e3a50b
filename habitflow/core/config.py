"""Core configuration for HabitFlow."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from habitflow.core.errors import ValidationError

# 日本語: ルート直下の habitflow.env を起動時に読み込む / English: Load root-level habitflow.env on startup
load_dotenv("habitflow.env")

# 日本語: プロジェクトルート基準パス / English: Project root directory
BASE_DIR = Path(__file__).resolve().parents[2]
INSTANCE_DIR = BASE_DIR / "instance"

SUPPORTED_BACKENDS = ("sql", "blob")

# 日本語: 既定のストレージ種別 / English: Default storage backend
STORAGE_BACKEND = os.getenv("HABITFLOW_STORAGE_BACKEND", "sql")

# 日本語: SQLite ファイルを既定の接続先とする / English: Default to a local SQLite file
DATABASE_URL = os.getenv(
    "HABITFLOW_DATABASE_URL",
    f"sqlite:///{INSTANCE_DIR / 'habitflow.db'}",
)

DEFAULT_CHART_DAYS = 14


def get_storage_backend() -> str:
    """Backend name selected for this process."""
    backend = (os.getenv("HABITFLOW_STORAGE_BACKEND") or STORAGE_BACKEND).strip().lower()
    if backend not in SUPPORTED_BACKENDS:
        raise ValidationError(
            f"HABITFLOW_STORAGE_BACKEND must be one of {', '.join(SUPPORTED_BACKENDS)} (got {backend!r})."
        )
    return backend


def get_database_url() -> str:
    # 日本語: 実行時環境変数を優先 / English: Prefer runtime environment override
    return os.getenv("HABITFLOW_DATABASE_URL") or DATABASE_URL


def get_blob_path() -> str:
    return os.getenv("HABITFLOW_BLOB_PATH") or str(INSTANCE_DIR / "habitflow_db.json")


def get_chart_days() -> int:
    """Number of days shown by the progress chart."""
    # 日本語: 不正値は既定値へ、範囲は 1〜366 にクランプ / English: Fall back on invalid values and clamp to 1-366
    raw_value = os.getenv("HABITFLOW_CHART_DAYS", str(DEFAULT_CHART_DAYS))
    try:
        parsed = int(raw_value)
    except (TypeError, ValueError):
        parsed = DEFAULT_CHART_DAYS
    return max(1, min(parsed, 366))


def get_log_level() -> str:
    return (os.getenv("HABITFLOW_LOG_LEVEL") or "INFO").upper()
