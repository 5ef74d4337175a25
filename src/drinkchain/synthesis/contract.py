"""Structural contract for backend payloads.

Two shapes are accepted: the trend analysis object and the supply listing
array. Validation is all-or-nothing: a missing required field or an unknown
enum value anywhere rejects the whole payload with ``UnparseableError``.

The one soft rule: ``AI`` sources are asked for ``factors`` but a source
without usable ones (missing, null, not a list) is kept with an empty factor
list and a logged warning. Non-text entries are dropped.
"""
from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from drinkchain.domain.exceptions import UnparseableError
from drinkchain.domain.models import SupplyDraft, TrendAnalysisResult

logger = logging.getLogger(__name__)

SUPPLY_WRAPPER_KEY = "listings"

# ---------------------------------------------------------------------------
# JSON schemas sent to the backend as structured-output hints
# ---------------------------------------------------------------------------

_DATA_SOURCE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "type": {
            "type": "string",
            "enum": ["WEB", "DB", "AI"],
            "description": "数据来源类型: WEB(网络/公开数据), DB(数据库/历史统计), AI(AI推理/预测)",
        },
        "name": {
            "type": "string",
            "description": "来源名称 (例如: '36氪', '内部销售数据', 'Gemini趋势模型')",
        },
        "factors": {
            "type": "array",
            "items": {"type": "string"},
            "description": "如果是AI推理，列出3个关键影响因子 (例如: '社交媒体热度', '季节性因素', '成本波动')",
        },
    },
    "required": ["type", "name"],
}

_TREND_ITEM_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "title": {"type": "string", "description": "趋势名称 (中文, 例如: '桂花拿铁')"},
        "description": {"type": "string", "description": "趋势的简短说明 (中文)"},
        "growthRate": {"type": "string", "description": "增长率 (例如: '+15%')"},
        "category": {"type": "string", "description": "分类 (中文, 例如: '茶饮', '咖啡', '小料')"},
        "imageUrl": {"type": "string", "description": "A placeholder image keyword related to the drink"},
        "source": _DATA_SOURCE_SCHEMA,
    },
    "required": ["id", "title", "description", "growthRate", "category", "source"],
}

TREND_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "marketAnalysis": {"type": "string", "description": "基于选定策略的市场现状深度分析 (中文，约50-80字)"},
        "strategicConclusion": {"type": "string", "description": "基于分析得出的关键结论或行动建议 (中文，约30-50字)"},
        "source": _DATA_SOURCE_SCHEMA,
        "items": {"type": "array", "items": _TREND_ITEM_SCHEMA},
    },
    "required": ["marketAnalysis", "strategicConclusion", "items", "source"],
}

_SUPPLY_ITEM_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "companyName": {"type": "string", "description": "公司名称 (中文)"},
        "product": {"type": "string", "description": "产品名称 (中文)"},
        "price": {"type": "string", "description": "价格 (中文格式, 例如: '¥25/kg')"},
        "location": {"type": "string", "description": "地点 (中文)"},
        "type": {"type": "string", "enum": ["SUPPLY", "DEMAND"]},
        "verified": {"type": "boolean"},
        "validityDays": {"type": "integer", "description": "信息有效天数 (可选)"},
    },
    "required": ["id", "companyName", "product", "price", "location", "type", "verified"],
}

SUPPLY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {SUPPLY_WRAPPER_KEY: {"type": "array", "items": _SUPPLY_ITEM_SCHEMA}},
    "required": [SUPPLY_WRAPPER_KEY],
}


def _response_format(name: str, schema: dict[str, Any]) -> dict[str, Any]:
    # Not strict: optional fields (factors, imageUrl, validityDays) are not
    # expressible under OpenAI strict mode.
    return {
        "type": "json_schema",
        "json_schema": {"name": name, "strict": False, "schema": schema},
    }


def trend_response_format() -> dict[str, Any]:
    return _response_format("TrendAnalysis", TREND_SCHEMA)


def supply_response_format() -> dict[str, Any]:
    return _response_format("SupplyListings", SUPPLY_SCHEMA)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def parse_trend_payload(data: Any) -> TrendAnalysisResult:
    """Validate a decoded trend payload into a ``TrendAnalysisResult``."""
    if not isinstance(data, dict):
        raise UnparseableError(f"Trend payload must be an object, got {type(data).__name__}")

    _flag_ai_sources_without_factors(data.get("source"), "analysis")
    items = data.get("items")
    if isinstance(items, list):
        for index, item in enumerate(items):
            if isinstance(item, dict):
                _flag_ai_sources_without_factors(item.get("source"), f"items[{index}]")

    try:
        return TrendAnalysisResult.model_validate(data)
    except ValidationError as exc:
        raise UnparseableError(f"Trend payload failed validation: {exc}") from exc


def parse_supply_payload(data: Any) -> list[SupplyDraft]:
    """Validate a decoded supply payload (bare array or ``{"listings": [...]}``)."""
    if isinstance(data, dict) and SUPPLY_WRAPPER_KEY in data:
        data = data[SUPPLY_WRAPPER_KEY]
    if not isinstance(data, list):
        raise UnparseableError(f"Supply payload must be an array, got {type(data).__name__}")

    drafts: list[SupplyDraft] = []
    for index, raw in enumerate(data):
        try:
            drafts.append(SupplyDraft.model_validate(raw))
        except ValidationError as exc:
            raise UnparseableError(f"Supply listing {index} failed validation: {exc}") from exc
    return drafts


def _flag_ai_sources_without_factors(source: Any, where: str) -> None:
    if not isinstance(source, dict) or source.get("type") != "AI":
        return
    factors = source.get("factors")
    if not isinstance(factors, list) or not factors:
        logger.warning("AI source at %s carries no factors; keeping it without factors", where)
    elif not all(isinstance(f, str) for f in factors):
        logger.warning("AI source at %s has non-text factors; dropping them", where)
