from __future__ import annotations

from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from loguru import logger
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from promptquest.db.models.base import Base

SQLITE_FILE_PREFIX = "sqlite:///"


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine for the relational store.

    SQLite files get their parent directory created on demand, and
    connections may cross threads (FastAPI runs sync endpoints in a
    thread pool).
    """
    connect_args: dict = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        _ensure_sqlite_directory(database_url)

    return create_engine(database_url, echo=echo, pool_pre_ping=True, connect_args=connect_args)


def _ensure_sqlite_directory(database_url: str) -> None:
    if not database_url.startswith(SQLITE_FILE_PREFIX):
        return
    raw = database_url[len(SQLITE_FILE_PREFIX):]
    if not raw or raw == ":memory:":
        return
    parent = Path(raw).parent
    if not parent.exists():
        parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created database directory: {parent.resolve()}")


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Initialize database tables."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables initialized")


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Provide a transactional scope around a series of operations."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:  # Intentionally broad - rollback on any error before re-raising
        session.rollback()
        raise
    finally:
        session.close()
