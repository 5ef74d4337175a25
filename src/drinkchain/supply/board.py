"""In-memory supply board: an append-only collection of listings."""
from __future__ import annotations

import threading
from collections.abc import Iterable

from drinkchain.domain.models import SupplyItem


class SupplyBoard:
    """Newest listings first. Nothing is ever removed; expiry is a read-time filter."""

    def __init__(self) -> None:
        self._items: list[SupplyItem] = []
        self._lock = threading.Lock()

    def add(self, item: SupplyItem) -> None:
        with self._lock:
            self._items.insert(0, item)

    def add_batch(self, items: Iterable[SupplyItem]) -> None:
        batch = list(items)
        with self._lock:
            self._items[:0] = batch

    def all(self) -> list[SupplyItem]:
        with self._lock:
            return list(self._items)

    def __len__(self) -> int:
        return len(self._items)
