"""Typed key/value persistence with lazily created records."""

from localstore.core.errors import (
    DecodingError,
    DuplicateKeyError,
    EncodingError,
    PersistenceError,
    RecordLookupError,
    StoreError,
)
from localstore.domain.bindings import StoreBinding
from localstore.repositories import MemoryStorageContext, SQLStorageContext, StorageContext, open_context
from localstore.services.bindings import ValueBinding, ValueView
from localstore.services.events import ChangeNotifier
from localstore.services.store import (
    DataStore,
    exists,
    get_or_create,
    get_or_create_typed,
    get_value,
    get_value_bytes,
    write_value,
    write_value_bytes,
)

__all__ = [
    "ChangeNotifier",
    "DataStore",
    "DecodingError",
    "DuplicateKeyError",
    "EncodingError",
    "MemoryStorageContext",
    "PersistenceError",
    "RecordLookupError",
    "SQLStorageContext",
    "StorageContext",
    "StoreBinding",
    "StoreError",
    "ValueBinding",
    "ValueView",
    "exists",
    "get_or_create",
    "get_or_create_typed",
    "get_value",
    "get_value_bytes",
    "open_context",
    "write_value",
    "write_value_bytes",
]
