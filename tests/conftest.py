"""Shared test fixtures.

  fake_llm       : factory for an LLMClient double with queued replies.
  memory_storage : in-memory key-value storage for the strategy store.
  fixed_now      : a fixed aware UTC timestamp.
  trend_payload  : a valid decoded trend payload (fresh dict per test).
  supply_payload : a valid decoded supply payload (bare list).
  container      : service graph wired to fakes.
  client         : FastAPI TestClient on that container.
"""
import os
from datetime import datetime, timezone
from typing import Any

import pytest


def pytest_configure(config):
    """Keep tests away from real credentials and the real data directory."""
    os.environ.setdefault("OPENAI_API_KEY", "sk-test-dummy-for-tests")
    os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")


class FakeLLMClient:
    """Returns queued replies in order; an Exception in the queue is raised instead."""

    def __init__(self, replies: list[Any] | None = None) -> None:
        self.replies = list(replies or [])
        self.calls: list[dict[str, Any]] = []

    def chat_completions_create(
        self,
        *,
        model: str,
        messages: list[dict[str, Any]],
        response_format: dict[str, Any] | None = None,
    ) -> str:
        self.calls.append(
            {"model": model, "messages": messages, "response_format": response_format}
        )
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def fake_llm():
    def _make(*replies: Any) -> FakeLLMClient:
        return FakeLLMClient(list(replies))
    return _make


@pytest.fixture
def memory_storage():
    from drinkchain.infra.storage import InMemoryStorage
    return InMemoryStorage()


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 6, 1, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def trend_payload() -> dict:
    return {
        "marketAnalysis": "低糖果茶持续增长，下沉市场对高性价比产品需求旺盛。",
        "strategicConclusion": "优先布局平价鲜果茶与轻乳茶。",
        "source": {"type": "AI", "name": "趋势模型", "factors": ["社交声量增长", "季节性因素"]},
        "items": [
            {
                "id": "t1",
                "title": "桂花拿铁",
                "description": "秋季限定风味回归",
                "growthRate": "+15%",
                "category": "咖啡",
                "source": {"type": "WEB", "name": "36氪"},
            },
            {
                "id": "t2",
                "title": "油柑",
                "description": "小众果味进入主流",
                "growthRate": "+32%",
                "category": "茶饮",
                "imageUrl": "yougan",
                "source": {"type": "DB", "name": "内部销售数据"},
            },
        ],
    }


@pytest.fixture
def supply_payload() -> list:
    return [
        {
            "id": "s1",
            "companyName": "云南咖啡庄园",
            "product": "小粒咖啡豆",
            "price": "¥50/kg",
            "location": "普洱",
            "type": "SUPPLY",
            "verified": True,
        },
        {
            "id": "s2",
            "companyName": "上海茶饮连锁",
            "product": "冷冻芒果浆",
            "price": "¥18/kg",
            "location": "上海",
            "type": "DEMAND",
            "verified": False,
            "validityDays": 5,
        },
    ]


@pytest.fixture
def container(memory_storage, fake_llm):
    from drinkchain.api.deps import build_container
    llm = fake_llm()
    c = build_container(storage=memory_storage, llm_client=llm)
    c.llm = llm  # test handle for queueing replies
    return c


@pytest.fixture
def client(container):
    """FastAPI TestClient backed by the fake container."""
    from fastapi.testclient import TestClient
    from drinkchain.api.app import create_app
    from drinkchain.api.deps import get_container

    app = create_app()
    app.dependency_overrides[get_container] = lambda: container
    with TestClient(app) as c:
        yield c
