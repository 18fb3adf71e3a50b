"""Relational storage backend built on SQLModel."""

from __future__ import annotations

import contextlib
import datetime
import logging
from typing import Iterator, List

from sqlalchemy import delete, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from habitflow.core.db import build_engine, ensure_sqlite_directory, normalize_database_url
from habitflow.core.errors import StorageError, ValidationError
from habitflow.core.migrations import upgrade_to_head
from habitflow.models import STATUS_COMPLETED, STATUS_PENDING, Category, Habit, HabitLog

from .base import DateLike, HabitStorage, iso_date

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class SqlHabitStorage(HabitStorage):
    """Store backed by SQLite or PostgreSQL, schema managed by Alembic."""

    backend_name = "sql"

    def __init__(self, database_url: str, *, run_migrations: bool = True):
        self.database_url = normalize_database_url(database_url)
        self.run_migrations = run_migrations
        self._engine: Engine | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StorageError("Storage is not open. Call open() first.")
        return self._engine

    def open(self) -> None:
        if self._engine is not None:
            return
        try:
            # 日本語: マイグレーション適用後にエンジンを保持 / English: Apply migrations, then keep the engine
            ensure_sqlite_directory(self.database_url)
            if self.run_migrations:
                upgrade_to_head(self.database_url)
            self._engine = build_engine(self.database_url)
        except SQLAlchemyError as exc:
            logger.exception("Failed to open database %s", self.database_url)
            raise StorageError(f"Could not open database: {exc}") from exc
        logger.info("Opened %s storage at %s", self.backend_name, self.database_url)

    def close(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        logger.info("Closed %s storage", self.backend_name)

    @contextlib.contextmanager
    def _session(self) -> Iterator[Session]:
        # 日本語: 1操作=1トランザクション、失敗時はロールバックして StorageError / English: One transaction per operation, rolled back and wrapped on failure
        session = Session(self.engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Storage operation failed")
            raise StorageError(str(exc)) from exc
        finally:
            session.close()

    def _insert(self, session: Session):
        dialect_name = session.get_bind().dialect.name
        try:
            return _DIALECT_INSERTS[dialect_name]
        except KeyError as exc:
            raise StorageError(f"Unsupported dialect for upsert: {dialect_name}") from exc

    # -------- Habits --------
    def create_habit(
        self,
        name: str,
        category: str,
        frequency: str,
        color: str,
        icon: str,
        created_at: datetime.datetime | None = None,
    ) -> int:
        habit = Habit(name=name, category=category, frequency=frequency, color=color, icon=icon)
        if created_at is not None:
            habit.created_at = created_at
        with self._session() as session:
            session.add(habit)
            session.flush()
            return habit.id

    def update_habit(
        self, habit_id: int, name: str, category: str, frequency: str, color: str, icon: str
    ) -> int:
        statement = (
            update(Habit)
            .where(Habit.id == habit_id)
            .values(name=name, category=category, frequency=frequency, color=color, icon=icon)
        )
        with self._session() as session:
            return session.exec(statement).rowcount

    def delete_habit(self, habit_id: int) -> int:
        with self._session() as session:
            # 日本語: ログ削除と習慣削除を同一トランザクションで実行 / English: Logs and habit go in the same transaction
            session.exec(delete(HabitLog).where(HabitLog.habit_id == habit_id))
            return session.exec(delete(Habit).where(Habit.id == habit_id)).rowcount

    def delete_all_habits(self) -> int:
        with self._session() as session:
            session.exec(delete(HabitLog))
            return session.exec(delete(Habit)).rowcount

    def get_habit(self, habit_id: int) -> Habit | None:
        with self._session() as session:
            return session.get(Habit, habit_id)

    def list_habits(self) -> List[Habit]:
        statement = select(Habit).order_by(Habit.created_at.desc(), Habit.id.desc())
        with self._session() as session:
            return list(session.exec(statement).all())

    # -------- Logs --------
    def upsert_log(self, habit_id: int, date: DateLike, status: int) -> int:
        table = HabitLog.__table__
        with self._session() as session:
            statement = self._insert(session)(table).values(
                habit_id=habit_id, date=iso_date(date), status=status
            )
            statement = statement.on_conflict_do_update(
                index_elements=[table.c.habit_id, table.c.date],
                set_={"status": status},
            )
            session.exec(statement)
        return status

    def toggle_log(self, habit_id: int, date: DateLike) -> int:
        table = HabitLog.__table__
        date_key = iso_date(date)
        with self._session() as session:
            # 日本語: 保存済みの状態を基準に反転（呼び出し側の値は信用しない） / English: Flip relative to the stored status, not a caller-supplied one
            statement = self._insert(session)(table).values(
                habit_id=habit_id, date=date_key, status=STATUS_COMPLETED
            )
            statement = statement.on_conflict_do_update(
                index_elements=[table.c.habit_id, table.c.date],
                set_={"status": STATUS_COMPLETED - table.c.status},
            )
            session.exec(statement)
            stored = session.exec(
                select(HabitLog.status).where(HabitLog.habit_id == habit_id, HabitLog.date == date_key)
            ).first()
        return STATUS_PENDING if stored is None else stored

    def list_logs(self, habit_id: int) -> List[HabitLog]:
        statement = select(HabitLog).where(HabitLog.habit_id == habit_id).order_by(HabitLog.date)
        with self._session() as session:
            return list(session.exec(statement).all())

    def list_logs_between(self, start: DateLike, end: DateLike) -> List[HabitLog]:
        statement = (
            select(HabitLog)
            .where(HabitLog.date >= iso_date(start), HabitLog.date <= iso_date(end))
            .order_by(HabitLog.date, HabitLog.habit_id)
        )
        with self._session() as session:
            return list(session.exec(statement).all())

    def clear_logs(self) -> int:
        with self._session() as session:
            return session.exec(delete(HabitLog)).rowcount

    # -------- Categories --------
    def list_categories(self) -> List[Category]:
        with self._session() as session:
            return list(session.exec(select(Category).order_by(Category.name)).all())

    def create_category(self, name: str, color: str, icon: str) -> int:
        category = Category(name=name, color=color, icon=icon)
        with self._session() as session:
            session.add(category)
            try:
                session.flush()
            except IntegrityError as exc:
                # 日本語: 名前の重複は入力エラーとして扱う / English: A duplicate name is a caller error, not a storage failure
                session.rollback()
                raise ValidationError(f"Category {name!r} already exists.") from exc
            return category.id

    def delete_category(self, category_id: int) -> int:
        with self._session() as session:
            return session.exec(delete(Category).where(Category.id == category_id)).rowcount
