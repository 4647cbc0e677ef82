"""
Observable views over a single stored key.

ValueView reads a key (creating it with the default on first access);
ValueBinding adds writes and change subscriptions. UI layers hold one of
these instead of touching records, so writes always go through the store.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from localstore.core.codec import decode, infer_type
from localstore.core.errors import DecodingError
from localstore.domain.bindings import MISSING, resolve

from .store import DataStore, KeyOrBinding

logger = logging.getLogger(__name__)


class ValueView:
    def __init__(
        self,
        store: DataStore,
        key: KeyOrBinding,
        default: Any = MISSING,
        *,
        as_type: Optional[Any] = None,
    ) -> None:
        self.store = store
        self.key, self.default, self.value_type = resolve(key, default, as_type)

    @property
    def target_type(self) -> Any:
        if self.value_type is not None:
            return self.value_type
        return infer_type(self.default)

    @property
    def value(self) -> Any:
        return self.store.get(self.key, self.default, as_type=self.value_type)

    def value_or_default(self) -> Any:
        """Like ``value`` but falls back to the default when the payload cannot be decoded."""
        try:
            return self.value
        except DecodingError as exc:
            logger.warning("Falling back to default for %r: %s", self.key, exc)
            return self.default


class ValueBinding(ValueView):
    @property
    def value(self) -> Any:
        return ValueView.value.fget(self)

    @value.setter
    def value(self, new_value: Any) -> None:
        self.store.write(self.key, new_value, as_type=self.value_type)

    def subscribe(self, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Call ``callback`` with the decoded value after every write to this key."""
        target = self.target_type

        def _on_change(_key: str, data: bytes) -> None:
            callback(decode(data, target))

        return self.store.subscribe(self.key, _on_change)
