"""Typed HTTP client for Streamlit pages.

Only imports from ``drinkchain.api.schemas`` and ``drinkchain.domain``;
never services, storage or the synthesis layer.
Instantiate via ``get_client()`` which caches per Streamlit session.
"""
from __future__ import annotations

from typing import Any

import httpx
import streamlit as st

from drinkchain.api.schemas.chat import ChatTranscript
from drinkchain.api.schemas.strategies import ActiveStrategyRead, StrategyList
from drinkchain.api.schemas.supply import SupplyList
from drinkchain.api.schemas.trends import TrendAnalysisRead
from drinkchain.config import settings
from drinkchain.domain.models import ChatMessage, CustomStrategy, StrategyType, SupplyItem


class APIError(Exception):
    """Raised when the backend returns a 4xx/5xx response."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"[{status_code}] {detail}")


class DrinkChainClient:
    """One method per backend endpoint.  All return pure Pydantic DTOs."""

    def __init__(self, base_url: str | None = None, *, transport: httpx.BaseTransport | None = None) -> None:
        self._client = httpx.Client(
            base_url=base_url or settings.API_BASE_URL,
            timeout=settings.OPENAI_TIMEOUT + 30.0,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        try:
            detail = resp.json().get("detail", resp.text)
        except Exception:
            detail = resp.text
        raise APIError(resp.status_code, str(detail))

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def health(self) -> dict:
        resp = self._client.get("/health")
        self._raise_for_status(resp)
        return resp.json()

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def list_strategies(self) -> StrategyList:
        resp = self._client.get("/strategies")
        self._raise_for_status(resp)
        return StrategyList.model_validate(resp.json())

    def create_strategy(self, name: str, factors: list[str]) -> CustomStrategy:
        resp = self._client.post("/strategies", json={"name": name, "factors": factors})
        self._raise_for_status(resp)
        return CustomStrategy.model_validate(resp.json())

    def delete_strategy(self, strategy_id: str) -> ActiveStrategyRead:
        resp = self._client.delete(f"/strategies/{strategy_id}")
        self._raise_for_status(resp)
        return ActiveStrategyRead.model_validate(resp.json())

    def get_active_strategy(self) -> ActiveStrategyRead:
        resp = self._client.get("/strategies/active")
        self._raise_for_status(resp)
        return ActiveStrategyRead.model_validate(resp.json())

    def select_strategy(
        self, strategy: StrategyType, *, context: str | None = None, strategy_id: str | None = None,
    ) -> ActiveStrategyRead:
        payload: dict[str, Any] = {"strategy": StrategyType(strategy).value}
        if context is not None:
            payload["context"] = context
        if strategy_id is not None:
            payload["strategyId"] = strategy_id
        resp = self._client.put("/strategies/active", json=payload)
        self._raise_for_status(resp)
        return ActiveStrategyRead.model_validate(resp.json())

    def apply_ephemeral(self, factors: list[str]) -> ActiveStrategyRead:
        resp = self._client.post("/strategies/ephemeral", json={"factors": factors})
        self._raise_for_status(resp)
        return ActiveStrategyRead.model_validate(resp.json())

    # ------------------------------------------------------------------
    # Trends
    # ------------------------------------------------------------------

    def get_trends(self) -> TrendAnalysisRead:
        resp = self._client.get("/trends")
        self._raise_for_status(resp)
        return TrendAnalysisRead.model_validate(resp.json())

    # ------------------------------------------------------------------
    # Supply
    # ------------------------------------------------------------------

    def list_supply(self, type_filter: str = "ALL") -> SupplyList:
        resp = self._client.get("/supply", params={"type": type_filter})
        self._raise_for_status(resp)
        return SupplyList.model_validate(resp.json())

    def refresh_supply(self, category: str = "general") -> SupplyList:
        resp = self._client.post("/supply/refresh", json={"category": category})
        self._raise_for_status(resp)
        return SupplyList.model_validate(resp.json())

    def publish_supply(self, payload: dict[str, Any]) -> SupplyItem:
        resp = self._client.post("/supply", json=payload)
        self._raise_for_status(resp)
        return SupplyItem.model_validate(resp.json())

    # ------------------------------------------------------------------
    # Chat
    # ------------------------------------------------------------------

    def get_transcript(self, session_id: str) -> ChatTranscript:
        resp = self._client.get(f"/chat/{session_id}")
        self._raise_for_status(resp)
        return ChatTranscript.model_validate(resp.json())

    def send_chat_message(self, session_id: str, text: str) -> ChatMessage:
        resp = self._client.post(f"/chat/{session_id}/messages", json={"text": text})
        self._raise_for_status(resp)
        return ChatMessage.model_validate(resp.json())


def get_client() -> DrinkChainClient:
    """Return a client cached in the Streamlit session."""
    if "api_client" not in st.session_state:
        st.session_state["api_client"] = DrinkChainClient()
    return st.session_state["api_client"]
