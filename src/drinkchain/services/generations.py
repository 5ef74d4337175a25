"""Per-view request generations.

Every triggering event takes a new token; a response is only applied if its
token is still the latest one issued for that view. An older request that
resolves after a newer one is discarded instead of overwriting it.
"""
from __future__ import annotations

import threading
from collections import defaultdict


class RequestGenerations:
    def __init__(self) -> None:
        self._latest: dict[str, int] = defaultdict(int)
        self._lock = threading.Lock()

    def issue(self, view: str) -> int:
        with self._lock:
            self._latest[view] += 1
            return self._latest[view]

    def is_current(self, view: str, token: int) -> bool:
        with self._lock:
            return self._latest[view] == token

    def latest(self, view: str) -> int:
        with self._lock:
            return self._latest[view]
