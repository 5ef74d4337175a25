"""Persisted collection of user-defined strategies.

The whole ordered collection lives under one namespaced key as a JSON array
and is rewritten on every create/delete. Storage failures never propagate:
a bad read starts the session empty (or with whatever entries were still
readable), a failed write keeps the in-memory collection for the session.
"""
from __future__ import annotations

import json
import logging
import threading
import uuid
from collections.abc import Sequence

from pydantic import ValidationError

from drinkchain.config import settings
from drinkchain.domain.exceptions import PersistenceError
from drinkchain.domain.models import CustomStrategy
from drinkchain.infra.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class StrategyStore:
    def __init__(self, storage: KeyValueStorage, key: str | None = None) -> None:
        self._storage = storage
        self._key = key or settings.STRATEGY_STORE_KEY
        self._lock = threading.Lock()
        self._strategies: list[CustomStrategy] = self._load()

    @property
    def key(self) -> str:
        return self._key

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list(self) -> list[CustomStrategy]:
        with self._lock:
            return list(self._strategies)

    def get(self, strategy_id: str) -> CustomStrategy | None:
        with self._lock:
            return next((s for s in self._strategies if s.id == strategy_id), None)

    def __contains__(self, strategy_id: object) -> bool:
        return isinstance(strategy_id, str) and self.get(strategy_id) is not None

    def __len__(self) -> int:
        return len(self._strategies)

    # ------------------------------------------------------------------
    # Mutations (write-through)
    # ------------------------------------------------------------------

    def create(self, name: str, factors: Sequence[str]) -> CustomStrategy:
        """Validate, append and persist a new strategy.

        Raises ``ValueError`` (pydantic ``ValidationError``) for a blank name,
        a blank first factor or more than three factors.
        """
        strategy = CustomStrategy(id=uuid.uuid4().hex, name=name, factors=list(factors))
        with self._lock:
            self._strategies.append(strategy)
            self._save()
        logger.info("Created strategy %s (%s)", strategy.id, strategy.name)
        return strategy

    def delete(self, strategy_id: str) -> bool:
        """Remove *strategy_id*; returns False when it was not stored."""
        with self._lock:
            remaining = [s for s in self._strategies if s.id != strategy_id]
            if len(remaining) == len(self._strategies):
                return False
            self._strategies = remaining
            self._save()
        logger.info("Deleted strategy %s", strategy_id)
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _load(self) -> list[CustomStrategy]:
        try:
            raw = self._storage.read(self._key)
        except PersistenceError as exc:
            logger.warning("Strategy storage unavailable, starting empty: %s", exc.message)
            return []
        if not raw:
            return []

        try:
            records = json.loads(raw)
        except ValueError as exc:
            logger.warning("Stored strategies under %r are corrupt, starting empty: %s", self._key, exc)
            return []
        if not isinstance(records, list):
            logger.warning("Stored strategies under %r are not a list, starting empty", self._key)
            return []

        strategies: list[CustomStrategy] = []
        for record in records:
            try:
                strategies.append(CustomStrategy.model_validate(record))
            except ValidationError as exc:
                logger.warning("Skipping unreadable stored strategy: %s", exc)
        return strategies

    def _save(self) -> None:
        payload = json.dumps(
            [s.model_dump(mode="json") for s in self._strategies], ensure_ascii=False,
        )
        try:
            self._storage.write(self._key, payload)
        except PersistenceError as exc:
            logger.warning("Could not persist strategies, keeping them for this session: %s", exc.message)
