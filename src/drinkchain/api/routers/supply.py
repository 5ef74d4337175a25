"""Supply board endpoints."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from drinkchain.api.deps import AppContainer, get_container
from drinkchain.api.schemas.supply import (
    SupplyList,
    SupplyListingRead,
    SupplyPublish,
    SupplyRefreshRequest,
)
from drinkchain.domain.models import StrategyLens, SupplyItem
from drinkchain.supply.lifecycle import TypeFilter, remaining_days
from drinkchain.synthesis.directives import recommendation_text

router = APIRouter(prefix="/supply", tags=["supply"])


def _listing_page(items: list[SupplyItem], now: datetime, lens: StrategyLens) -> SupplyList:
    return SupplyList(
        items=[SupplyListingRead(item=i, remaining_days=remaining_days(i, now)) for i in items],
        total=len(items),
        recommendation=recommendation_text(lens),
    )


@router.get("", response_model=SupplyList)
def list_supply(
    type: TypeFilter = TypeFilter.ALL, container: AppContainer = Depends(get_container),
) -> SupplyList:
    """Visible listings; synthesizes a batch first when the active lens changed."""
    lens = container.strategies.lens()
    container.supply.ensure_current(lens)
    now = datetime.now(timezone.utc)
    return _listing_page(container.supply.listings(type, now=now), now, lens)


@router.post("/refresh", response_model=SupplyList)
def refresh_supply(
    payload: SupplyRefreshRequest, container: AppContainer = Depends(get_container),
) -> SupplyList:
    lens = container.strategies.lens()
    batch = container.supply.refresh(lens, payload.category)
    return _listing_page(batch, datetime.now(timezone.utc), lens)


@router.post("", response_model=SupplyItem, status_code=201)
def publish_supply(
    payload: SupplyPublish, container: AppContainer = Depends(get_container),
) -> SupplyItem:
    return container.supply.publish(
        type=payload.type,
        product=payload.product,
        company_name=payload.company_name,
        price=payload.price,
        location=payload.location,
        validity_days=payload.validity_days,
    )
