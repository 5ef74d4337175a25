"""Supply board DTOs."""
from __future__ import annotations

from pydantic import Field, field_validator

from drinkchain.domain.models import ListingType, SupplyItem, WireModel


class SupplyPublish(WireModel):
    type: ListingType
    product: str
    company_name: str
    price: str
    location: str
    validity_days: int = Field(default=7, gt=0)

    @field_validator("product", "company_name", "price", "location")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v


class SupplyRefreshRequest(WireModel):
    category: str = "general"


class SupplyListingRead(WireModel):
    item: SupplyItem
    remaining_days: int


class SupplyList(WireModel):
    items: list[SupplyListingRead]
    total: int
    recommendation: str = ""
