"""Strategy use-case service: store lifecycle plus the resolver's active selection."""
from __future__ import annotations

from collections.abc import Sequence

from drinkchain.domain.exceptions import NotFoundError
from drinkchain.domain.models import ActiveSelection, CustomStrategy, StrategyLens, StrategyType
from drinkchain.strategies.resolver import StrategyResolver
from drinkchain.strategies.store import StrategyStore
from drinkchain.synthesis.directives import format_factors


class StrategyService:
    def __init__(self, store: StrategyStore, resolver: StrategyResolver | None = None) -> None:
        self._store = store
        self._resolver = resolver or StrategyResolver(store)

    @property
    def active(self) -> ActiveSelection:
        return self._resolver.active

    def lens(self) -> StrategyLens:
        return self._resolver.lens()

    def list(self) -> list[CustomStrategy]:
        return self._store.list()

    def select(
        self, base_type: StrategyType, context: str | None = None, strategy_id: str | None = None,
    ) -> ActiveSelection:
        return self._resolver.select(base_type, context, strategy_id)

    def save_and_activate(self, name: str, factors: Sequence[str]) -> CustomStrategy:
        """Persist a new strategy and make it the active selection."""
        strategy = self._store.create(name, factors)
        self._resolver.select(StrategyType.CUSTOM, format_factors(strategy.factors), strategy.id)
        return strategy

    def apply_ephemeral(self, factors: Sequence[str]) -> ActiveSelection:
        """Run unsaved factors as a one-off CUSTOM lens."""
        context = format_factors(factors)
        if not context:
            raise ValueError("at least one factor is required")
        return self._resolver.select(StrategyType.CUSTOM, context)

    def delete(self, strategy_id: str) -> ActiveSelection:
        """Delete a stored strategy; resets the active selection if it pointed at it."""
        if not self._store.delete(strategy_id):
            raise NotFoundError(f"Strategy {strategy_id} not found")
        return self._resolver.strategy_deleted(strategy_id)
