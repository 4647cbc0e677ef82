"""
Persistence adapters.

Storage contexts encapsulate how records are found, registered and committed
(in memory or through SQLAlchemy). The store facade depends only on the
StorageContext protocol.
"""

from .context import MemoryStorageContext, StorageContext
from .sql_context import SQLStorageContext, open_context

__all__ = ["MemoryStorageContext", "SQLStorageContext", "StorageContext", "open_context"]
