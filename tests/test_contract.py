"""Structural validation of backend payloads."""
import logging

import pytest

from drinkchain.domain.exceptions import UnparseableError
from drinkchain.domain.models import AiSource, DbSource, ListingType, WebSource
from drinkchain.synthesis.contract import (
    parse_supply_payload,
    parse_trend_payload,
    supply_response_format,
    trend_response_format,
)


class TestTrendPayload:
    def test_valid_payload(self, trend_payload):
        result = parse_trend_payload(trend_payload)
        assert result.market_analysis.startswith("低糖果茶")
        assert isinstance(result.source, AiSource)
        assert result.source.factors == ["社交声量增长", "季节性因素"]
        assert [i.id for i in result.items] == ["t1", "t2"]
        assert isinstance(result.items[0].source, WebSource)
        assert isinstance(result.items[1].source, DbSource)
        assert result.items[0].growth_rate == "+15%"

    @pytest.mark.parametrize("field", ["marketAnalysis", "strategicConclusion", "source", "items"])
    def test_missing_top_level_field_rejects_everything(self, trend_payload, field):
        del trend_payload[field]
        with pytest.raises(UnparseableError):
            parse_trend_payload(trend_payload)

    @pytest.mark.parametrize("field", ["id", "title", "description", "growthRate", "category", "source"])
    def test_missing_item_field_rejects_everything(self, trend_payload, field):
        del trend_payload["items"][1][field]
        with pytest.raises(UnparseableError):
            parse_trend_payload(trend_payload)

    def test_image_url_is_optional(self, trend_payload):
        assert "imageUrl" not in trend_payload["items"][0]
        assert parse_trend_payload(trend_payload).items[0].image_url == ""

    def test_unknown_source_type_rejected(self, trend_payload):
        trend_payload["items"][0]["source"]["type"] = "RSS"
        with pytest.raises(UnparseableError):
            parse_trend_payload(trend_payload)

    def test_source_without_name_rejected(self, trend_payload):
        del trend_payload["source"]["name"]
        with pytest.raises(UnparseableError):
            parse_trend_payload(trend_payload)

    def test_ai_source_without_factors_is_downgraded(self, trend_payload, caplog):
        trend_payload["items"][0]["source"] = {"type": "AI", "name": "Gemini"}
        with caplog.at_level(logging.WARNING, logger="drinkchain.synthesis.contract"):
            result = parse_trend_payload(trend_payload)
        assert isinstance(result.items[0].source, AiSource)
        assert result.items[0].source.factors == []
        assert "items[0]" in caplog.text

    def test_null_factors_are_downgraded_everywhere(self, trend_payload, caplog):
        trend_payload["source"]["factors"] = None
        trend_payload["items"][1]["source"] = {"type": "AI", "name": "模型", "factors": None}
        with caplog.at_level(logging.WARNING, logger="drinkchain.synthesis.contract"):
            result = parse_trend_payload(trend_payload)
        assert result.source.factors == []
        assert result.items[1].source.factors == []
        assert len(result.items) == 2
        assert "analysis" in caplog.text
        assert "items[1]" in caplog.text

    @pytest.mark.parametrize("factors", ["社交声量", {"a": 1}, 7])
    def test_non_list_factors_are_downgraded(self, trend_payload, factors):
        trend_payload["source"]["factors"] = factors
        assert parse_trend_payload(trend_payload).source.factors == []

    def test_non_text_factors_are_dropped(self, trend_payload):
        trend_payload["source"]["factors"] = ["季节性", None, 3, "社交声量"]
        assert parse_trend_payload(trend_payload).source.factors == ["季节性", "社交声量"]

    def test_factors_on_web_source_are_ignored(self, trend_payload):
        trend_payload["items"][0]["source"]["factors"] = ["ignored"]
        source = parse_trend_payload(trend_payload).items[0].source
        assert isinstance(source, WebSource)
        assert not hasattr(source, "factors")

    @pytest.mark.parametrize("payload", [None, [], "text", 3])
    def test_non_object_rejected(self, payload):
        with pytest.raises(UnparseableError):
            parse_trend_payload(payload)


class TestSupplyPayload:
    def test_bare_array(self, supply_payload):
        drafts = parse_supply_payload(supply_payload)
        assert [d.type for d in drafts] == [ListingType.SUPPLY, ListingType.DEMAND]
        assert drafts[0].company_name == "云南咖啡庄园"
        assert drafts[0].validity_days is None
        assert drafts[1].validity_days == 5

    def test_wrapped_array(self, supply_payload):
        assert len(parse_supply_payload({"listings": supply_payload})) == 2

    def test_empty_array_is_valid(self):
        assert parse_supply_payload([]) == []

    @pytest.mark.parametrize(
        "field", ["id", "companyName", "product", "price", "location", "type", "verified"],
    )
    def test_missing_required_field(self, supply_payload, field):
        del supply_payload[1][field]
        with pytest.raises(UnparseableError):
            parse_supply_payload(supply_payload)

    def test_unknown_listing_type(self, supply_payload):
        supply_payload[0]["type"] = "RENT"
        with pytest.raises(UnparseableError):
            parse_supply_payload(supply_payload)

    @pytest.mark.parametrize("days", [0, -3])
    def test_non_positive_validity_treated_as_missing(self, supply_payload, days):
        supply_payload[0]["validityDays"] = days
        drafts = parse_supply_payload(supply_payload)
        assert drafts[0].validity_days is None
        assert drafts[1].validity_days == 5

    def test_object_without_wrapper_rejected(self):
        with pytest.raises(UnparseableError):
            parse_supply_payload({"items": []})


def test_response_formats_describe_required_fields():
    trend = trend_response_format()["json_schema"]["schema"]
    assert set(trend["required"]) == {"marketAnalysis", "strategicConclusion", "items", "source"}
    supply = supply_response_format()["json_schema"]["schema"]
    item = supply["properties"]["listings"]["items"]
    assert item["properties"]["type"]["enum"] == ["SUPPLY", "DEMAND"]
