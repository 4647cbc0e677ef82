"""
JSON codec between typed values and record payloads.

Values go out through ``json.dumps`` (non-finite floats and cycles rejected);
anything the json module does not know natively (dataclasses, pydantic
models, datetimes, enums, sets...) is first lowered to JSON data by a pydantic
``TypeAdapter``. Decoding validates the payload against the requested type.
"""
from __future__ import annotations

from functools import lru_cache
import json
from typing import Any, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

from .config import get_settings
from .errors import DecodingError, EncodingError

T = TypeVar("T")


@lru_cache(maxsize=256)
def _cached_adapter(tp: Any) -> TypeAdapter:
    return TypeAdapter(tp)


def _adapter(tp: Any) -> TypeAdapter:
    try:
        hash(tp)
    except TypeError:
        return TypeAdapter(tp)
    return _cached_adapter(tp)


def _to_jsonable(obj: Any) -> Any:
    return _adapter(type(obj)).dump_python(obj, mode="json")


def infer_type(value: Any) -> Any:
    """Target type used when the caller does not name one."""
    if value is None:
        return Any
    return type(value)


def encode(value: Any, as_type: Optional[Any] = None) -> bytes:
    """Serialize ``value`` into compact UTF-8 JSON bytes.

    With ``as_type`` the value is strictly validated first, so a value of
    another type is rejected instead of being stored and failing every read.
    """
    try:
        if as_type is None:
            payload = value
        else:
            adapter = _adapter(as_type)
            payload = adapter.dump_python(adapter.validate_python(value, strict=True), mode="json")
        text = json.dumps(
            payload,
            default=_to_jsonable,
            allow_nan=False,
            ensure_ascii=False,
            separators=(",", ":"),
        )
    except (ValueError, TypeError, RecursionError) as exc:
        # pydantic serialization/schema errors subclass ValueError or TypeError
        raise EncodingError(f"Cannot encode value of type {type(value).__name__}: {exc}") from exc
    return text.encode("utf-8")


def decode(data: bytes, as_type: Any = Any, strict: Optional[bool] = None) -> Any:
    """Parse ``data`` and validate it as ``as_type``.

    ``strict`` defaults to the configured ``strict_decoding`` flag; in strict
    mode a payload of another JSON type (e.g. a string for an int) is rejected
    instead of coerced.
    """
    if strict is None:
        strict = get_settings().strict_decoding
    try:
        return _adapter(as_type).validate_json(bytes(data), strict=strict)
    except ValidationError as exc:
        raise DecodingError(
            f"Payload does not match {getattr(as_type, '__name__', as_type)!s}: "
            f"{exc.error_count()} validation error(s)"
        ) from exc
    except (ValueError, TypeError) as exc:
        raise DecodingError(f"Cannot decode payload: {exc}") from exc
