"""
Storage context contract and the in-memory implementation.

A context owns the records: the facade only asks it to find a record by key,
register a new one and commit. Contexts report query failures as
RecordLookupError and refused duplicates as DuplicateKeyError.
"""
from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from localstore.core.errors import DuplicateKeyError, RecordLookupError
from localstore.db.models import Record


@runtime_checkable
class StorageContext(Protocol):
    def find(self, key: str) -> Optional[Record]:
        """Return the record stored under ``key``, or None."""
        ...

    def insert(self, record: Record) -> None:
        """Register a new record with the context (not yet committed)."""
        ...

    def save(self) -> None:
        """Durably commit pending inserts and mutations."""
        ...


class MemoryStorageContext:
    """List-backed context for tests and embedding without a database."""

    def __init__(self, *, enforce_unique: bool = True) -> None:
        self.enforce_unique = enforce_unique
        self.fail_lookups = False
        self.save_count = 0
        self._records: List[Record] = []

    def find(self, key: str) -> Optional[Record]:
        if self.fail_lookups:
            raise RecordLookupError(f"Lookup for key {key!r} failed")
        for record in self._records:
            if record.key == key:
                return record
        return None

    def insert(self, record: Record) -> None:
        if self.enforce_unique and any(r.key == record.key for r in self._records):
            raise DuplicateKeyError(record.key)
        self._records.append(record)

    def save(self) -> None:
        self.save_count += 1

    def records(self, key: Optional[str] = None) -> List[Record]:
        if key is None:
            return list(self._records)
        return [r for r in self._records if r.key == key]
