"""FastAPI dependencies."""
from __future__ import annotations

from dataclasses import dataclass

from drinkchain.infra.storage import KeyValueStorage, SQLiteKeyValueStorage
from drinkchain.services.chat_service import ChatService
from drinkchain.services.strategy_service import StrategyService
from drinkchain.services.supply_service import SupplyService
from drinkchain.services.trends_service import TrendService
from drinkchain.strategies.store import StrategyStore
from drinkchain.synthesis.client import SynthesisClient
from drinkchain.synthesis.llm_protocol import LLMClient


@dataclass
class AppContainer:
    """Process-wide service graph; one writer per state slice."""

    strategies: StrategyService
    trends: TrendService
    supply: SupplyService
    chat: ChatService


def build_container(
    *,
    storage: KeyValueStorage | None = None,
    llm_client: LLMClient | None = None,
) -> AppContainer:
    client = SynthesisClient(llm_client)
    store = StrategyStore(storage or SQLiteKeyValueStorage())
    return AppContainer(
        strategies=StrategyService(store),
        trends=TrendService(client),
        supply=SupplyService(client),
        chat=ChatService(client),
    )


_container: AppContainer | None = None


def get_container() -> AppContainer:
    """Return the shared container, building it on first request."""
    global _container
    if _container is None:
        _container = build_container()
    return _container
