"""Strategy DTOs: pure Pydantic, no storage imports."""
from __future__ import annotations

from pydantic import Field, field_validator

from drinkchain.domain.models import (
    FACTOR_SLOTS,
    ActiveSelection,
    CustomStrategy,
    StrategyLens,
    StrategyType,
    WireModel,
)


class StrategyCreate(WireModel):
    name: str
    factors: list[str] = Field(min_length=1, max_length=FACTOR_SLOTS)

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be empty")
        return v

    @field_validator("factors")
    @classmethod
    def first_factor_required(cls, v: list[str]) -> list[str]:
        if not v[0].strip():
            raise ValueError("the first priority factor must not be empty")
        return v


class EphemeralStrategyRequest(WireModel):
    factors: list[str] = Field(min_length=1, max_length=FACTOR_SLOTS)


class SelectionRequest(WireModel):
    strategy: StrategyType
    context: str | None = None
    strategy_id: str | None = None


class StrategyList(WireModel):
    items: list[CustomStrategy]
    total: int


class ActiveStrategyRead(WireModel):
    selection: ActiveSelection
    lens: StrategyLens
