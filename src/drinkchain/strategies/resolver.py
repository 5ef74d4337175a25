"""Canonical active-strategy state.

Exactly one selection is active at a time: a system strategy, a saved custom
strategy, or an ephemeral (never persisted) custom context. The only
transition not triggered by the user is the reset to DEFAULT when the active
saved strategy is deleted.
"""
from __future__ import annotations

import logging
import threading

from drinkchain.domain.models import (
    ActiveSelection,
    EphemeralSelection,
    SavedSelection,
    StrategyLens,
    StrategyType,
    SystemSelection,
)
from drinkchain.strategies.store import StrategyStore
from drinkchain.synthesis.directives import format_factors

logger = logging.getLogger(__name__)


class StrategyResolver:
    def __init__(self, store: StrategyStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._active: ActiveSelection = SystemSelection(strategy=StrategyType.DEFAULT)

    @property
    def active(self) -> ActiveSelection:
        return self._active

    def select(
        self,
        base_type: StrategyType,
        context: str | None = None,
        strategy_id: str | None = None,
    ) -> ActiveSelection:
        """Apply a selection event and return the new active selection."""
        base_type = StrategyType(base_type)
        if strategy_id is not None and strategy_id in self._store:
            selection: ActiveSelection = SavedSelection(strategy_id=strategy_id)
        elif base_type is StrategyType.CUSTOM:
            selection = EphemeralSelection(context=context)
        else:
            selection = SystemSelection(strategy=base_type)
        with self._lock:
            self._active = selection
        logger.debug("Active strategy is now %r", selection)
        return selection

    def strategy_deleted(self, strategy_id: str) -> ActiveSelection:
        """Fall back to DEFAULT if *strategy_id* was the active saved strategy."""
        with self._lock:
            if isinstance(self._active, SavedSelection) and self._active.strategy_id == strategy_id:
                self._active = SystemSelection(strategy=StrategyType.DEFAULT)
                logger.info("Active strategy %s was deleted; reset to DEFAULT", strategy_id)
            return self._active

    def lens(self) -> StrategyLens:
        """Strategy and context the directive builder should use."""
        active = self._active
        if isinstance(active, SystemSelection):
            return StrategyLens(strategy=active.strategy)
        if isinstance(active, EphemeralSelection):
            return StrategyLens(strategy=StrategyType.CUSTOM, context=active.context)
        strategy = self._store.get(active.strategy_id)
        if strategy is None:
            return StrategyLens(strategy=StrategyType.DEFAULT)
        return StrategyLens(strategy=StrategyType.CUSTOM, context=format_factors(strategy.factors))
