"""Trend analysis use-case: directive → backend → contract → normalizer."""
from __future__ import annotations

import logging

from drinkchain.domain.exceptions import UnparseableError
from drinkchain.domain.models import DbSource, StrategyLens, TrendAnalysisResult
from drinkchain.services.generations import RequestGenerations
from drinkchain.synthesis.client import SynthesisClient
from drinkchain.synthesis.contract import parse_trend_payload
from drinkchain.synthesis.directives import lens_directive
from drinkchain.synthesis.normalizer import normalize_trends

logger = logging.getLogger(__name__)

VIEW = "trends"


def recovery_result() -> TrendAnalysisResult:
    """Schema-valid result shown whenever synthesis fails."""
    return TrendAnalysisResult(
        market_analysis="暂时无法获取市场分析。",
        strategic_conclusion="请稍后重试。",
        source=DbSource(name="System Recovery"),
        items=[],
    )


class TrendService:
    def __init__(
        self,
        client: SynthesisClient,
        *,
        generations: RequestGenerations | None = None,
    ) -> None:
        self._client = client
        self._generations = generations or RequestGenerations()
        self._current: TrendAnalysisResult | None = None

    @property
    def current(self) -> TrendAnalysisResult | None:
        """The result currently displayed by the trends view."""
        return self._current

    def analyze(self, lens: StrategyLens) -> TrendAnalysisResult:
        """Synthesize an analysis for *lens*; never raises."""
        reply = self._client.synthesize_trends(lens_directive(lens))
        if not reply.ok:
            logger.error("Trend synthesis failed (%s): %s", reply.status.value, reply.error)
            return recovery_result()
        try:
            result = parse_trend_payload(reply.payload)
        except UnparseableError as exc:
            logger.error("Trend payload rejected: %s", exc.message)
            return recovery_result()
        return normalize_trends(result)

    def refresh(self, lens: StrategyLens) -> TrendAnalysisResult:
        """Analyze and publish to the view unless a newer request superseded this one."""
        token = self._generations.issue(VIEW)
        result = self.analyze(lens)
        if not self._generations.is_current(VIEW, token):
            logger.info("Discarding stale trend result (generation %d)", token)
            return self._current if self._current is not None else result
        self._current = result
        return result
