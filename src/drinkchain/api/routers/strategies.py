"""Strategy endpoints."""
from fastapi import APIRouter, Depends

from drinkchain.api.deps import AppContainer, get_container
from drinkchain.api.schemas.strategies import (
    ActiveStrategyRead,
    EphemeralStrategyRequest,
    SelectionRequest,
    StrategyCreate,
    StrategyList,
)
from drinkchain.domain.models import CustomStrategy

router = APIRouter(prefix="/strategies", tags=["strategies"])


def _active(container: AppContainer) -> ActiveStrategyRead:
    service = container.strategies
    return ActiveStrategyRead(selection=service.active, lens=service.lens())


@router.get("", response_model=StrategyList)
def list_strategies(container: AppContainer = Depends(get_container)) -> StrategyList:
    items = container.strategies.list()
    return StrategyList(items=items, total=len(items))


@router.post("", response_model=CustomStrategy, status_code=201)
def create_strategy(
    payload: StrategyCreate, container: AppContainer = Depends(get_container),
) -> CustomStrategy:
    return container.strategies.save_and_activate(payload.name, payload.factors)


@router.delete("/{strategy_id}", response_model=ActiveStrategyRead)
def delete_strategy(
    strategy_id: str, container: AppContainer = Depends(get_container),
) -> ActiveStrategyRead:
    container.strategies.delete(strategy_id)
    return _active(container)


@router.get("/active", response_model=ActiveStrategyRead)
def get_active(container: AppContainer = Depends(get_container)) -> ActiveStrategyRead:
    return _active(container)


@router.put("/active", response_model=ActiveStrategyRead)
def select_strategy(
    payload: SelectionRequest, container: AppContainer = Depends(get_container),
) -> ActiveStrategyRead:
    container.strategies.select(payload.strategy, payload.context, payload.strategy_id)
    return _active(container)


@router.post("/ephemeral", response_model=ActiveStrategyRead)
def apply_ephemeral(
    payload: EphemeralStrategyRequest, container: AppContainer = Depends(get_container),
) -> ActiveStrategyRead:
    container.strategies.apply_ephemeral(payload.factors)
    return _active(container)
