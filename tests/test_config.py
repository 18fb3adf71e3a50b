import pytest

from habitflow.core import config
from habitflow.core.db import normalize_database_url
from habitflow.core.errors import ValidationError
from habitflow.core.migrations import current_revision, head_revision
from habitflow.storage import BlobHabitStorage, SqlHabitStorage, build_storage, open_storage


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 14), ("30", 30), ("0", 1), ("1000", 366), ("abc", 14)],
)
def test_chart_days_is_clamped(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("HABITFLOW_CHART_DAYS", raising=False)
    else:
        monkeypatch.setenv("HABITFLOW_CHART_DAYS", raw)
    assert config.get_chart_days() == expected


def test_unknown_backend_is_rejected(monkeypatch):
    monkeypatch.setenv("HABITFLOW_STORAGE_BACKEND", "redis")
    with pytest.raises(ValidationError):
        config.get_storage_backend()


def test_build_storage_follows_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("HABITFLOW_STORAGE_BACKEND", "Blob")
    monkeypatch.setenv("HABITFLOW_BLOB_PATH", str(tmp_path / "data.json"))

    storage = build_storage()
    assert isinstance(storage, BlobHabitStorage)
    assert storage.path == str(tmp_path / "data.json")


def test_open_storage_opens_sql_backend(monkeypatch, tmp_path):
    monkeypatch.setenv("HABITFLOW_DATABASE_URL", f"sqlite:///{tmp_path / 'nested' / 'habitflow.db'}")

    storage = open_storage("sql")
    try:
        assert isinstance(storage, SqlHabitStorage)
        assert len(storage.list_categories()) == 5
        assert (tmp_path / "nested" / "habitflow.db").exists()
    finally:
        storage.close()


def test_normalize_database_url():
    assert normalize_database_url("postgres://u:p@db/habits") == "postgresql+psycopg2://u:p@db/habits"
    assert normalize_database_url("sqlite:///habits.db") == "sqlite:///habits.db"
    with pytest.raises(ValidationError):
        normalize_database_url("mysql://u:p@db/habits")


def test_log_level_defaults_to_info(monkeypatch):
    monkeypatch.delenv("HABITFLOW_LOG_LEVEL", raising=False)
    assert config.get_log_level() == "INFO"
    monkeypatch.setenv("HABITFLOW_LOG_LEVEL", "debug")
    assert config.get_log_level() == "DEBUG"


def test_sql_storage_is_migrated_to_head(sql_storage):
    assert head_revision() == "20261019_000001"
    assert current_revision(sql_storage.database_url) == head_revision()
