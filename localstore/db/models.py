"""SQLAlchemy model for the key/value records."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, Index, Integer, LargeBinary, String, func

from .session import Base

KEY_INDEX_NAME = "ix_local_data_store_key"


class Record(Base):
    """A persisted key plus its opaque serialized value.

    The same class is used by the in-memory context, where instances simply
    never get attached to a session.
    """

    __tablename__ = "local_data_store"
    __table_args__ = (Index(KEY_INDEX_NAME, "key", unique=True),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(255), nullable=False)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"Record(key={self.key!r}, value={len(self.value or b'')} bytes)"
