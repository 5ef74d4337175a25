"""Trend analysis endpoints."""
from fastapi import APIRouter, Depends

from drinkchain.api.deps import AppContainer, get_container
from drinkchain.api.schemas.trends import TrendAnalysisRead

router = APIRouter(prefix="/trends", tags=["trends"])


@router.get("", response_model=TrendAnalysisRead)
def get_trends(container: AppContainer = Depends(get_container)) -> TrendAnalysisRead:
    lens = container.strategies.lens()
    return TrendAnalysisRead(lens=lens, result=container.trends.refresh(lens))
