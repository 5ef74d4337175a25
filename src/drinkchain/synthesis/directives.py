"""Strategy → directive text.

Directives are pure functions of the strategy so they can be checked without
touching the generative backend. Only CUSTOM depends on its context.
"""
from __future__ import annotations

from collections.abc import Sequence

from drinkchain.domain.models import StrategyLens, StrategyType

GENERAL_CONTEXT = "通用"

_FIXED_DIRECTIVES: dict[StrategyType, str] = {
    StrategyType.COST: "重点关注：低成本替代品、高性价比原料、下沉市场、高利润率产品。忽略昂贵的小众原料。",
    StrategyType.UNIQUE: "重点关注：猎奇口味、创新搭配、高颜值、社交媒体打卡属性、稀有原料。",
    StrategyType.QUALITY: "重点关注：有机认证、单一产地、健康无添加、顶级口感、高端市场。",
    StrategyType.DEFAULT: "关注全品类综合表现。",
}

_CUSTOM_TEMPLATE = "严格按照用户自定义的三个优先级指标（按重要性排序）进行筛选和推荐：{context}。"


def directive(strategy: StrategyType, context: str | None = None) -> str:
    """Return the directive text for *strategy*.

    ``context`` is only read for CUSTOM; blank context falls back to
    ``GENERAL_CONTEXT``.
    """
    strategy = StrategyType(strategy)
    if strategy is StrategyType.CUSTOM:
        return _CUSTOM_TEMPLATE.format(context=(context or "").strip() or GENERAL_CONTEXT)
    return _FIXED_DIRECTIVES[strategy]


def format_factors(factors: Sequence[str]) -> str:
    """``["甜度", "", "包装"]`` → ``"1. 甜度, 2. 包装"``."""
    kept = [f.strip() for f in factors if f and f.strip()]
    return ", ".join(f"{i}. {f}" for i, f in enumerate(kept, start=1))


def lens_directive(lens: StrategyLens) -> str:
    return directive(lens.strategy, lens.context)


_RECOMMENDATIONS: dict[StrategyType, str] = {
    StrategyType.COST: "基于您的“成本优先”偏好，为您精选高性价比货源",
    StrategyType.UNIQUE: "基于您的“独特性”偏好，为您寻找稀缺小众原料",
    StrategyType.QUALITY: "基于您的“品质优先”偏好，为您筛选高端优质供应商",
    StrategyType.DEFAULT: "热门供需推荐",
}

_CUSTOM_RECOMMENDATION = "基于自定义因子 ({excerpt}...) 智能匹配"
RECOMMENDATION_EXCERPT_CHARS = 20


def recommendation_text(lens: StrategyLens) -> str:
    """Supply board caption for *lens*; CUSTOM quotes the first 20 characters of its context."""
    if lens.strategy is StrategyType.CUSTOM:
        excerpt = (lens.context or "")[:RECOMMENDATION_EXCERPT_CHARS]
        return _CUSTOM_RECOMMENDATION.format(excerpt=excerpt)
    return _RECOMMENDATIONS[lens.strategy]
