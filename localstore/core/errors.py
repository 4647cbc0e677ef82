"""Exceptions raised by the codec, the storage contexts and the store facade."""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for the local data store."""


class EncodingError(StoreError, ValueError):
    """Raised when a value cannot be serialized into a record payload."""


class DecodingError(StoreError, ValueError):
    """Raised when a payload does not match the requested type or is corrupt."""


class RecordLookupError(StoreError, LookupError):
    """Raised when the storage context fails to query records."""


class DuplicateKeyError(StoreError):
    """Raised when a context refuses a second record for an existing key."""

    def __init__(self, key: str) -> None:
        super().__init__(f"A record with key {key!r} already exists")
        self.key = key


class PersistenceError(StoreError):
    """Raised when the storage context fails to commit pending changes."""
