"""
Relational Question Store.

SQLAlchemy-backed store, SQLite by default. Ids come from the engine's
auto-increment. Writes inside batch() share one session and commit or roll
back together; every other call runs in its own short transaction.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import ClassVar

from loguru import logger
from sqlalchemy import Engine, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from promptquest.core.errors import StorageError
from promptquest.db.database import create_session_factory, init_db, session_scope
from promptquest.db.models import QuestionRecord

from .base import QuestionStore
from .models import Question, QuestionFilters


def _record_to_question(record: QuestionRecord) -> Question:
    return Question(
        id=record.id,
        text=record.question,
        options={
            "A": record.option_a,
            "B": record.option_b,
            "C": record.option_c,
            "D": record.option_d,
        },
        correct_answer=record.correct_answer,
        explanation=record.explanation,
        difficulty=record.difficulty,
        area=record.area,
        skill=record.skill,
        degree=record.degree,
    )


class RelationalQuestionStore(QuestionStore):
    """Question store on an embedded transactional database."""

    name: ClassVar[str] = "relational"
    transactional: ClassVar[bool] = True

    def __init__(self, engine: Engine, create_tables: bool = True):
        """
        Initialize store.

        Args:
            engine: SQLAlchemy engine (see promptquest.db.database.create_db_engine)
            create_tables: Create the questions table if it is missing
        """
        self.engine = engine
        self._session_factory: sessionmaker[Session] = create_session_factory(engine)
        self._local = threading.local()

        if create_tables:
            try:
                init_db(engine)
            except SQLAlchemyError as e:
                raise StorageError(f"Failed to initialize questions table: {e}") from e

    # ========================================
    # Session handling
    # ========================================

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Reuse the batch session when one is open on this thread."""
        active = getattr(self._local, "session", None)
        if active is not None:
            yield active
            return
        with session_scope(self._session_factory) as session:
            yield session

    @contextmanager
    def batch(self) -> Iterator[None]:
        """One transaction for every save made inside the block."""
        if getattr(self._local, "session", None) is not None:
            # Nested batch joins the outer transaction
            yield
            return

        session = self._session_factory()
        self._local.session = session
        try:
            yield
            session.commit()
            logger.debug("Relational batch committed")
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Relational batch rolled back: {e}")
            raise StorageError(f"Batch commit failed: {e}") from e
        except Exception:  # Intentionally broad - rollback on any error before re-raising
            session.rollback()
            logger.warning("Relational batch rolled back")
            raise
        finally:
            self._local.session = None
            session.close()

    # ========================================
    # Writes
    # ========================================

    def save(self, question: Question) -> int:
        row = question.to_row()
        if row["id"] is None:
            row.pop("id")
        try:
            with self._session() as session:
                record = QuestionRecord(**row)
                session.add(record)
                session.flush()
                question.id = record.id
        except SQLAlchemyError as e:
            raise StorageError(f"Error saving question: {e}") from e

        logger.debug(f"Saved question id={question.id}")
        return question.id

    def delete_all(self) -> None:
        try:
            with self._session() as session:
                result = session.execute(delete(QuestionRecord))
        except SQLAlchemyError as e:
            raise StorageError(f"Error deleting questions: {e}") from e
        logger.info(f"Deleted {result.rowcount} questions")

    # ========================================
    # Reads
    # ========================================

    def find_all(self) -> list[Question]:
        return self._fetch(select(QuestionRecord).order_by(QuestionRecord.id))

    def find_by_id(self, question_id: int) -> Question | None:
        try:
            with self._session() as session:
                record = session.get(QuestionRecord, question_id)
                return _record_to_question(record) if record else None
        except SQLAlchemyError as e:
            raise StorageError(f"Error loading question {question_id}: {e}") from e

    def find_random(self, limit: int, filters: QuestionFilters | None = None) -> list[Question]:
        if limit <= 0:
            return []

        query = select(QuestionRecord)
        filters = filters or QuestionFilters()
        for name, value in filters.string_filters().items():
            column = getattr(QuestionRecord, name)
            query = query.where(func.lower(column) == value.lower())
        if filters.difficulty is not None:
            query = query.where(QuestionRecord.difficulty == filters.difficulty)

        query = query.order_by(func.random()).limit(limit)
        return self._fetch(query)

    def count_all(self) -> int:
        try:
            with self._session() as session:
                return session.scalar(select(func.count()).select_from(QuestionRecord)) or 0
        except SQLAlchemyError as e:
            raise StorageError(f"Error counting questions: {e}") from e

    def distinct_values(self, field: str) -> list[str]:
        column = getattr(QuestionRecord, self._check_distinct_field(field))
        query = (
            select(column)
            .distinct()
            .where(column.is_not(None), column != "")
            .order_by(column)
        )
        try:
            with self._session() as session:
                return list(session.scalars(query))
        except SQLAlchemyError as e:
            raise StorageError(f"Error getting distinct {field} values: {e}") from e

    def difficulty_distribution(self) -> dict[int, int]:
        query = (
            select(QuestionRecord.difficulty, func.count())
            .where(QuestionRecord.difficulty.is_not(None))
            .group_by(QuestionRecord.difficulty)
            .order_by(QuestionRecord.difficulty)
        )
        try:
            with self._session() as session:
                return {int(difficulty): int(count) for difficulty, count in session.execute(query)}
        except SQLAlchemyError as e:
            raise StorageError(f"Error getting difficulty distribution: {e}") from e

    def _fetch(self, query) -> list[Question]:
        try:
            with self._session() as session:
                return [_record_to_question(record) for record in session.scalars(query)]
        except SQLAlchemyError as e:
            raise StorageError(f"Error executing query: {e}") from e
