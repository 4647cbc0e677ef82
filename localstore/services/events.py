"""Change notifications for stored keys."""
from __future__ import annotations

from collections import defaultdict
import logging
import threading
from typing import Callable, DefaultDict, List

logger = logging.getLogger(__name__)

Subscriber = Callable[[str, bytes], None]


class ChangeNotifier:
    """Per-key subscriber registry.

    Share one notifier between the DataStore instances of an application so
    subscriptions outlive the per-request contexts.
    """

    def __init__(self) -> None:
        self._subscribers: DefaultDict[str, List[Subscriber]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, key: str, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for ``key``; returns a function that unsubscribes it."""
        with self._lock:
            self._subscribers[key].append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(key)
                if callbacks and callback in callbacks:
                    callbacks.remove(callback)
                    if not callbacks:
                        del self._subscribers[key]

        return unsubscribe

    def subscriber_count(self, key: str) -> int:
        with self._lock:
            return len(self._subscribers.get(key, ()))

    def publish(self, key: str, data: bytes) -> None:
        with self._lock:
            callbacks = list(self._subscribers.get(key, ()))
        for callback in callbacks:
            try:
                callback(key, data)
            except Exception:
                logger.exception("Subscriber for key %r failed", key)
