"""Storage context backed by a SQLAlchemy session."""
from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import Iterator, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from localstore.core.config import get_settings
from localstore.core.errors import DuplicateKeyError, PersistenceError, RecordLookupError
from localstore.db.models import Record
from localstore.db.session import get_session

logger = logging.getLogger(__name__)


class SQLStorageContext:
    """find/insert/save over one session; the caller owns the session lifetime."""

    def __init__(self, session: Session, *, enforce_unique: Optional[bool] = None) -> None:
        self.session = session
        if enforce_unique is None:
            enforce_unique = get_settings().unique_keys
        self.enforce_unique = enforce_unique

    def find(self, key: str) -> Optional[Record]:
        stmt = select(Record).where(Record.key == key).limit(1)
        try:
            return self.session.execute(stmt).scalars().first()
        except SQLAlchemyError as exc:
            raise RecordLookupError(f"Lookup for key {key!r} failed: {exc}") from exc

    def insert(self, record: Record) -> None:
        # the session does not autoflush, so flush here to make the record
        # visible to later lookups in the same transaction
        if not self.enforce_unique:
            self.session.add(record)
            self.session.flush()
            return
        try:
            with self.session.begin_nested():
                self.session.add(record)
        except IntegrityError as exc:
            logger.debug("Insert of key %r rejected by unique index", record.key)
            raise DuplicateKeyError(record.key) from exc

    def save(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(f"Commit failed: {exc}") from exc


@contextmanager
def open_context(*, enforce_unique: Optional[bool] = None) -> Iterator[SQLStorageContext]:
    """Yield a context over a fresh session from the configured engine."""
    with get_session() as session:
        yield SQLStorageContext(session, enforce_unique=enforce_unique)
