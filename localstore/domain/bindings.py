"""Store binding descriptors: reusable (key, default) pairs.

Declare bindings once and pass them wherever a key and a default would go::

    THEME = StoreBinding("theme", "light")
    LAST_OPENED = StoreBinding.optional("last-opened", datetime)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, Tuple, TypeVar, Union

from localstore.core.codec import infer_type

T = TypeVar("T")

MISSING: Any = object()


@dataclass(frozen=True)
class StoreBinding(Generic[T]):
    key: str
    default: T
    value_type: Optional[Any] = None

    @classmethod
    def optional(cls, key: str, value_type: Optional[Any] = None) -> "StoreBinding[Optional[T]]":
        """Binding whose default is ``None``; decodes as ``Optional[value_type]``."""
        target = Optional[value_type] if value_type is not None else None
        return cls(key, None, target)

    @property
    def target_type(self) -> Any:
        """Type the stored payload is decoded as."""
        if self.value_type is not None:
            return self.value_type
        return infer_type(self.default)


def resolve(
    key_or_binding: Union[str, StoreBinding],
    default: Any = MISSING,
    as_type: Optional[Any] = None,
) -> Tuple[str, Any, Optional[Any]]:
    """Normalize ``(key, default, as_type)`` or a binding into one triple.

    The third item is the explicitly requested type, or None when it should be
    inferred from the default. Bindings carry their own default; passing one
    explicitly as well is an error.
    """
    if isinstance(key_or_binding, StoreBinding):
        if default is not MISSING:
            raise TypeError("default must not be given together with a StoreBinding")
        return key_or_binding.key, key_or_binding.default, as_type or key_or_binding.value_type
    if default is MISSING:
        raise TypeError(f"a default value is required for key {key_or_binding!r}")
    return key_or_binding, default, as_type


def resolve_key(key_or_binding: Union[str, StoreBinding]) -> str:
    if isinstance(key_or_binding, StoreBinding):
        return key_or_binding.key
    return key_or_binding
