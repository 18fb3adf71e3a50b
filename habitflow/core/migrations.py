"""Alembic migration helpers."""

from __future__ import annotations

import logging

from habitflow.core.config import BASE_DIR

logger = logging.getLogger(__name__)


def _alembic_config(database_url: str):
    try:
        from alembic.config import Config
    except ModuleNotFoundError as exc:  # pragma: no cover - dependency error path
        raise RuntimeError("Alembic is required. Install dependencies and retry.") from exc

    config = Config(str(BASE_DIR / "alembic.ini"))
    config.set_main_option("script_location", str(BASE_DIR / "migrations"))
    # 日本語: ConfigParser の % 展開を避ける / English: Escape % so ConfigParser interpolation keeps the URL intact
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return config


def upgrade_to_head(database_url: str) -> None:
    """Create or upgrade the habits schema, seeding default categories on first run."""
    from alembic import command

    logger.info("Applying HabitFlow migrations")
    command.upgrade(_alembic_config(database_url), "head")


def head_revision() -> str | None:
    from alembic.script import ScriptDirectory

    return ScriptDirectory.from_config(_alembic_config("sqlite://")).get_current_head()


def current_revision(database_url: str) -> str | None:
    """Revision stamped in the database, ``None`` before the first upgrade."""
    from alembic.runtime.migration import MigrationContext

    from habitflow.core.db import build_engine

    engine = build_engine(database_url)
    try:
        with engine.connect() as connection:
            return MigrationContext.configure(connection).get_current_revision()
    finally:
        engine.dispose()
