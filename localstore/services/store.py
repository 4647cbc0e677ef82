"""
Typed key/value operations over an injected storage context.

Every operation takes the context first, then either ``key, default`` or a
StoreBinding in their place::

    get_value(ctx, "volume", 0.5)
    get_value(ctx, VOLUME)          # VOLUME = StoreBinding("volume", 0.5)

Records are created lazily with the default on first access. Reads never
commit; writes replace the whole payload and call ``context.save()``.

Lookup-then-insert is not atomic. When the context rejects a duplicate key
(unique index, or MemoryStorageContext with enforce_unique), the lookup is
re-run once and the existing record wins; with uniqueness disabled two
concurrent creators can both insert.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Union

from localstore.core.codec import decode, encode, infer_type
from localstore.core.config import get_settings
from localstore.core.errors import DuplicateKeyError, RecordLookupError
from localstore.db.models import Record
from localstore.domain.bindings import MISSING, StoreBinding, resolve, resolve_key
from localstore.repositories.context import StorageContext

from .events import ChangeNotifier, Subscriber

logger = logging.getLogger(__name__)

KeyOrBinding = Union[str, StoreBinding]


def _fetch_or_create(context: StorageContext, key: str, default_bytes: bytes) -> Record:
    record = context.find(key)
    if record is not None:
        return record
    record = Record(key=key, value=bytes(default_bytes))
    try:
        context.insert(record)
    except DuplicateKeyError:
        if not get_settings().resolve_create_conflicts:
            raise
        existing = context.find(key)
        if existing is None:
            raise
        logger.info("Record %r was created concurrently; using the existing one", key)
        return existing
    logger.debug("Created record %r with %d default bytes", key, len(record.value))
    return record


def get_or_create(context: StorageContext, key: KeyOrBinding, default_bytes: Any = MISSING) -> Record:
    """Return the record for ``key``, registering one holding ``default_bytes`` on a miss.

    Given a binding, its default is encoded to form the fallback payload.
    Nothing is committed here.
    """
    if isinstance(key, StoreBinding):
        if default_bytes is not MISSING:
            raise TypeError("default_bytes must not be given together with a StoreBinding")
        return _fetch_or_create(context, key.key, encode(key.default, key.value_type))
    if default_bytes is MISSING:
        raise TypeError(f"default_bytes is required for key {key!r}")
    return _fetch_or_create(context, key, default_bytes)


def get_or_create_typed(
    context: StorageContext,
    key: KeyOrBinding,
    default: Any = MISSING,
    *,
    as_type: Optional[Any] = None,
) -> Record:
    key, default, value_type = resolve(key, default, as_type)
    return _fetch_or_create(context, key, encode(default, value_type))


def get_value_bytes(context: StorageContext, key: KeyOrBinding, default_bytes: Any = MISSING) -> bytes:
    return bytes(get_or_create(context, key, default_bytes).value)


def get_value(
    context: StorageContext,
    key: KeyOrBinding,
    default: Any = MISSING,
    *,
    as_type: Optional[Any] = None,
    strict: Optional[bool] = None,
) -> Any:
    """Decode the stored value, creating the record with ``default`` if absent.

    The payload is decoded as ``as_type``, or the binding's value type, or
    the type of ``default``. Raises DecodingError when the stored payload has
    another shape (e.g. the key was used for an incompatible type).
    """
    key, default, value_type = resolve(key, default, as_type)
    record = get_or_create_typed(context, key, default, as_type=value_type)
    target = value_type if value_type is not None else infer_type(default)
    return decode(record.value, target, strict=strict)


def write_value_bytes(context: StorageContext, key: KeyOrBinding, new_bytes: bytes) -> None:
    key = resolve_key(key)
    data = bytes(new_bytes)
    record = _fetch_or_create(context, key, data)
    record.value = data
    context.save()
    logger.debug("Wrote %d bytes to %r", len(data), key)


def encode_for(key: KeyOrBinding, value: Any, as_type: Optional[Any] = None) -> bytes:
    """Encode a value about to be written under ``key`` (a binding supplies its value type)."""
    if isinstance(key, StoreBinding) and as_type is None:
        as_type = key.value_type
    return encode(value, as_type)


def write_value(
    context: StorageContext,
    key: KeyOrBinding,
    new_value: Any,
    *,
    as_type: Optional[Any] = None,
) -> None:
    write_value_bytes(context, key, encode_for(key, new_value, as_type))


def exists(context: StorageContext, key: KeyOrBinding) -> bool:
    """Whether a record exists for ``key``; never creates one.

    A failing lookup counts as "not found".
    """
    key = resolve_key(key)
    try:
        return context.find(key) is not None
    except RecordLookupError as exc:
        logger.warning("Existence check for %r failed: %s", key, exc)
        return False


class DataStore:
    """The operations above bound to one context, publishing writes to subscribers."""

    def __init__(self, context: StorageContext, notifier: Optional[ChangeNotifier] = None) -> None:
        self.context = context
        self.notifier = notifier if notifier is not None else ChangeNotifier()

    def get_or_create(self, key: KeyOrBinding, default_bytes: Any = MISSING) -> Record:
        return get_or_create(self.context, key, default_bytes)

    def get_or_create_typed(self, key: KeyOrBinding, default: Any = MISSING, *, as_type: Optional[Any] = None) -> Record:
        return get_or_create_typed(self.context, key, default, as_type=as_type)

    def get(
        self,
        key: KeyOrBinding,
        default: Any = MISSING,
        *,
        as_type: Optional[Any] = None,
        strict: Optional[bool] = None,
    ) -> Any:
        return get_value(self.context, key, default, as_type=as_type, strict=strict)

    def get_bytes(self, key: KeyOrBinding, default_bytes: Any = MISSING) -> bytes:
        return get_value_bytes(self.context, key, default_bytes)

    def write(self, key: KeyOrBinding, value: Any, *, as_type: Optional[Any] = None) -> None:
        self.write_bytes(key, encode_for(key, value, as_type))

    def write_bytes(self, key: KeyOrBinding, data: bytes) -> None:
        key = resolve_key(key)
        data = bytes(data)
        write_value_bytes(self.context, key, data)
        self.notifier.publish(key, data)

    def exists(self, key: KeyOrBinding) -> bool:
        return exists(self.context, key)

    def subscribe(self, key: KeyOrBinding, callback: Subscriber) -> Callable[[], None]:
        return self.notifier.subscribe(resolve_key(key), callback)
