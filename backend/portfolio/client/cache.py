"""
Client-side query cache keyed by collection
"""
import threading
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from portfolio.core.logging_config import LoggingConfig

logger = LoggingConfig.get_logger(__name__)

_MISSING = object()


class QueryCache:
    """
    Cached read results grouped by collection (``skills``, ``profile``, ...).

    One collection can hold several queries (the list and individual items);
    invalidating the collection drops all of them and notifies subscribers.
    """

    def __init__(self):
        self._entries: Dict[str, Dict[str, Any]] = defaultdict(dict)
        self._subscribers: Dict[str, List[Callable[[str], None]]] = defaultdict(list)
        self._lock = threading.RLock()

    def get(self, collection: str, query: Optional[str] = None, default: Any = None) -> Any:
        with self._lock:
            return self._entries.get(collection, {}).get(query or collection, default)

    def has(self, collection: str, query: Optional[str] = None) -> bool:
        return self.get(collection, query, _MISSING) is not _MISSING

    def set(self, collection: str, value: Any, query: Optional[str] = None):
        with self._lock:
            self._entries[collection][query or collection] = value

    def invalidate(self, collection: str) -> int:
        """Drop every cached query of a collection; returns how many were dropped"""
        with self._lock:
            dropped = len(self._entries.pop(collection, {}))
            callbacks = list(self._subscribers.get(collection, ()))

        logger.debug(f"Invalidated '{collection}' ({dropped} entries)")
        for callback in callbacks:
            callback(collection)
        return dropped

    def clear(self):
        with self._lock:
            collections = list(self._entries)
        for collection in collections:
            self.invalidate(collection)

    def subscribe(self, collection: str, callback: Callable[[str], None]) -> Callable[[], None]:
        """
        Call ``callback(collection)`` whenever the collection is invalidated

        Returns:
            Function that removes the subscription
        """
        with self._lock:
            self._subscribers[collection].append(callback)

        def unsubscribe():
            with self._lock:
                callbacks = self._subscribers.get(collection, [])
                if callback in callbacks:
                    callbacks.remove(callback)

        return unsubscribe
