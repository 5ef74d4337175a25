import random
from datetime import timedelta

from drinkchain.synthesis.contract import parse_supply_payload, parse_trend_payload
from drinkchain.synthesis.normalizer import normalize_supply, normalize_trends, placeholder_image


def test_placeholder_image_is_keyed_by_position():
    assert placeholder_image(0) == "https://picsum.photos/400/300?random=10"
    assert placeholder_image(2) == "https://picsum.photos/400/300?random=12"


def test_trend_images_replace_backend_values(trend_payload):
    result = normalize_trends(parse_trend_payload(trend_payload))
    assert [i.image_url for i in result.items] == [
        "https://picsum.photos/400/300?random=10",
        "https://picsum.photos/400/300?random=11",
    ]
    assert result.market_analysis == trend_payload["marketAnalysis"]


def test_trend_normalization_does_not_mutate_input(trend_payload):
    parsed = parse_trend_payload(trend_payload)
    normalize_trends(parsed)
    assert parsed.items[1].image_url == "yougan"


def test_supply_explicit_validity_is_exact(supply_payload, fixed_now):
    items = normalize_supply(parse_supply_payload(supply_payload), fixed_now, random.Random(1))
    demand = items[1]
    assert demand.created_at == fixed_now
    assert demand.expires_at - demand.created_at == timedelta(days=5)


def test_supply_fallback_validity_in_range(supply_payload, fixed_now):
    drafts = parse_supply_payload(supply_payload)
    rng = random.Random(42)
    for _ in range(50):
        item = normalize_supply(drafts, fixed_now, rng)[0]
        days = (item.expires_at - item.created_at).days
        assert 3 <= days <= 13
        assert item.expires_at > item.created_at


def test_supply_preserves_backend_fields(supply_payload, fixed_now):
    first = normalize_supply(parse_supply_payload(supply_payload), fixed_now)[0]
    assert first.id == "s1"
    assert first.verified is True
    assert first.company_name == "云南咖啡庄园"


def test_non_positive_validity_uses_fallback(supply_payload, fixed_now):
    supply_payload[1]["validityDays"] = 0
    item = normalize_supply(parse_supply_payload(supply_payload), fixed_now, random.Random(3))[1]
    assert 3 <= (item.expires_at - item.created_at).days <= 13
