import datetime
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from habitflow.storage import BlobHabitStorage, SqlHabitStorage  # noqa: E402

# 2026-10-19 is a Monday.
MONDAY = datetime.date(2026, 10, 19)
TUESDAY = MONDAY + datetime.timedelta(days=1)
WEDNESDAY = MONDAY + datetime.timedelta(days=2)
SUNDAY = MONDAY - datetime.timedelta(days=1)


def sqlite_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'habitflow.db'}"


def build_backend(name, tmp_path):
    if name == "sql":
        return SqlHabitStorage(sqlite_url(tmp_path))
    return BlobHabitStorage(tmp_path / "habitflow_db.json")


@pytest.fixture()
def sql_storage(tmp_path):
    with SqlHabitStorage(sqlite_url(tmp_path)) as storage:
        yield storage


@pytest.fixture()
def blob_storage(tmp_path):
    with BlobHabitStorage(tmp_path / "habitflow_db.json") as storage:
        yield storage


@pytest.fixture()
def memory_storage():
    with BlobHabitStorage() as storage:
        yield storage


@pytest.fixture(params=["sql", "blob"])
def storage(request, tmp_path):
    with build_backend(request.param, tmp_path) as backend:
        yield backend
