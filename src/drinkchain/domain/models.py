"""Core records shared by the pipeline, the API and the UI.

Wire payloads use camelCase (``growthRate``, ``companyName``); attributes are
snake_case. Both spellings are accepted on input.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

FACTOR_SLOTS = 3


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class StrategyType(str, Enum):
    DEFAULT = "DEFAULT"
    COST = "COST"
    UNIQUE = "UNIQUE"
    QUALITY = "QUALITY"
    CUSTOM = "CUSTOM"


class CustomStrategy(WireModel):
    id: str
    name: str
    factors: list[str]

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be empty")
        return v.strip()

    @field_validator("factors", mode="before")
    @classmethod
    def pad_factors(cls, v: object) -> object:
        if isinstance(v, (list, tuple)):
            if len(v) > FACTOR_SLOTS:
                raise ValueError(f"at most {FACTOR_SLOTS} factors are allowed")
            return ["" if f is None else str(f).strip() for f in v] + [""] * (FACTOR_SLOTS - len(v))
        return v

    @field_validator("factors")
    @classmethod
    def first_factor_required(cls, v: list[str]) -> list[str]:
        if not v or not v[0]:
            raise ValueError("the first priority factor must not be empty")
        return v


class SystemSelection(WireModel):
    kind: Literal["system"] = "system"
    strategy: StrategyType

    @field_validator("strategy")
    @classmethod
    def not_custom(cls, v: StrategyType) -> StrategyType:
        if v is StrategyType.CUSTOM:
            raise ValueError("CUSTOM is selected through a saved or ephemeral strategy")
        return v


class SavedSelection(WireModel):
    kind: Literal["saved"] = "saved"
    strategy_id: str


class EphemeralSelection(WireModel):
    kind: Literal["ephemeral"] = "ephemeral"
    context: str | None = None


ActiveSelection = Annotated[
    Union[SystemSelection, SavedSelection, EphemeralSelection],
    Field(discriminator="kind"),
]


class StrategyLens(WireModel):
    """The analytical lens a directive is built from."""

    strategy: StrategyType = StrategyType.DEFAULT
    context: str | None = None


# ---------------------------------------------------------------------------
# Data sources
# ---------------------------------------------------------------------------


class WebSource(WireModel):
    type: Literal["WEB"] = "WEB"
    name: str

    @property
    def label(self) -> str:
        return "全网数据"


class DbSource(WireModel):
    type: Literal["DB"] = "DB"
    name: str

    @property
    def label(self) -> str:
        return "数据库"


class AiSource(WireModel):
    type: Literal["AI"] = "AI"
    name: str
    factors: list[str] = Field(default_factory=list)

    @field_validator("factors", mode="before")
    @classmethod
    def usable_factors(cls, v: object) -> list[str]:
        """Unusable factors (null, not a list) degrade to an empty list; non-string entries are dropped."""
        if not isinstance(v, (list, tuple)):
            return []
        return [f for f in v if isinstance(f, str)]

    @property
    def label(self) -> str:
        return "AI 推理"


DataSource = Annotated[Union[WebSource, DbSource, AiSource], Field(discriminator="type")]


# ---------------------------------------------------------------------------
# Trends
# ---------------------------------------------------------------------------


class TrendItem(WireModel):
    id: str
    title: str
    description: str
    growth_rate: str
    category: str
    image_url: str = ""
    source: DataSource


class TrendAnalysisResult(WireModel):
    market_analysis: str
    strategic_conclusion: str
    source: DataSource
    items: list[TrendItem]


# ---------------------------------------------------------------------------
# Supply board
# ---------------------------------------------------------------------------


class ListingType(str, Enum):
    SUPPLY = "SUPPLY"
    DEMAND = "DEMAND"


class SupplyDraft(WireModel):
    """A listing as the backend returns it, before timestamps are stamped."""

    id: str
    type: ListingType
    product: str
    company_name: str
    price: str
    location: str
    verified: bool
    validity_days: int | None = None

    @field_validator("validity_days", mode="before")
    @classmethod
    def non_positive_is_missing(cls, v: object) -> object:
        if isinstance(v, (int, float)) and not isinstance(v, bool) and v <= 0:
            return None
        return v


class SupplyItem(WireModel):
    model_config = ConfigDict(frozen=True)

    id: str
    type: ListingType
    product: str
    company_name: str
    price: str
    location: str
    verified: bool = False
    created_at: datetime
    expires_at: datetime

    @model_validator(mode="after")
    def expires_after_creation(self) -> SupplyItem:
        if self.expires_at <= self.created_at:
            raise ValueError("expires_at must be later than created_at")
        return self


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------


class ChatMessage(WireModel):
    model_config = ConfigDict(frozen=True)

    id: str
    role: Literal["user", "model"]
    text: str
    timestamp: datetime
