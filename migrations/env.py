"""Alembic migration environment for HabitFlow."""

from __future__ import annotations

from alembic import context
from sqlalchemy import pool
from sqlmodel import SQLModel

from habitflow import models as _models  # noqa: F401
from habitflow.core.db import build_engine, normalize_database_url

config = context.config
target_metadata = SQLModel.metadata


def _database_url() -> str:
    # 日本語: 実行時に habitflow.core.migrations が URL を設定する / English: URL is injected at runtime by habitflow.core.migrations
    database_url = config.get_main_option("sqlalchemy.url")
    if not database_url:
        raise ValueError("sqlalchemy.url must be configured for HabitFlow migrations.")
    return normalize_database_url(database_url)


def _configure_options(**kwargs) -> dict:
    # 日本語: SQLite は ALTER 制限があるため batch モードで生成 / English: SQLite needs batch mode for ALTER-style autogenerate
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": _database_url().startswith("sqlite"),
        **kwargs,
    }


def run_migrations_offline() -> None:
    """Emit SQL for the schema without connecting."""
    context.configure(
        **_configure_options(
            url=_database_url(),
            literal_binds=True,
            dialect_opts={"paramstyle": "named"},
        )
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply the schema through a short-lived engine."""
    engine = build_engine(_database_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(**_configure_options(connection=connection))
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
