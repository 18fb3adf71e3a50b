"""Database engine helpers."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlmodel import create_engine

from habitflow.core.errors import ValidationError


def normalize_database_url(database_url: str) -> str:
    # 日本語: 旧 postgres:// を SQLAlchemy 推奨形式へ正規化 / English: Normalize legacy postgres:// URL to SQLAlchemy-friendly form
    normalized_url = (database_url or "").strip()
    if normalized_url.startswith("postgres://"):
        normalized_url = normalized_url.replace("postgres://", "postgresql+psycopg2://", 1)
    if not normalized_url.startswith(("postgresql", "sqlite")):
        raise ValidationError("HABITFLOW_DATABASE_URL must be SQLite or PostgreSQL.")
    return normalized_url


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # 日本語: SQLite は接続ごとに外部キー制約を有効化する必要がある / English: SQLite enforces foreign keys per connection only when asked
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, **engine_kwargs) -> Engine:
    # 日本語: URL検証後にエンジン生成 / English: Build engine after URL validation
    normalized_url = normalize_database_url(database_url)
    engine = create_engine(normalized_url, **engine_kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def ensure_sqlite_directory(database_url: str) -> None:
    # 日本語: SQLite ファイルの親ディレクトリを事前作成 / English: Create the parent directory of a SQLite file up front
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
        return
    Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
