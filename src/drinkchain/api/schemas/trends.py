"""Trend DTOs."""
from __future__ import annotations

from drinkchain.domain.models import StrategyLens, TrendAnalysisResult, WireModel


class TrendAnalysisRead(WireModel):
    lens: StrategyLens
    result: TrendAnalysisResult
