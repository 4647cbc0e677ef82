"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from localstore.core.config import get_settings

Base = declarative_base()


def _use_explicit_sqlite_transactions(engine) -> None:
    # pysqlite's implicit BEGIN handling commits on RELEASE of an outermost
    # SAVEPOINT; let SQLAlchemy emit BEGIN itself instead
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


@lru_cache
def get_engine():
    settings = get_settings()
    url = (settings.database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    if url.startswith("sqlite"):
        # sessions may be closed from a worker thread other than the one that opened them
        engine = create_engine(url, future=True, connect_args={"check_same_thread": False})
        _use_explicit_sqlite_transactions(engine)
        return engine
    return create_engine(url, future=True, pool_pre_ping=True)


@lru_cache
def _get_sessionmaker():
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, future=True)


@contextmanager
def get_session() -> Session:
    session: Session = _get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()
