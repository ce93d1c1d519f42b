"""Registry of Shopify order ids already pushed to WebStock."""

import threading
from typing import Protocol, Set


class SentOrderRegistry(Protocol):
    """
    Store of order ids that were sent. Ids are only ever added, never removed.

    A persistent implementation can replace the in-memory one to survive restarts.
    """

    def __contains__(self, order_id: str) -> bool:
        ...

    def add_if_absent(self, order_id: str) -> bool:
        """Atomically add `order_id`; return False if it was already present."""
        ...


class InMemorySentOrderRegistry:
    """Process-local registry. Empty at start, lost on restart."""

    def __init__(self):
        self._ids: Set[str] = set()
        self._lock = threading.Lock()

    def __contains__(self, order_id: str) -> bool:
        with self._lock:
            return order_id in self._ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)

    def add_if_absent(self, order_id: str) -> bool:
        with self._lock:
            if order_id in self._ids:
                return False
            self._ids.add(order_id)
            return True
