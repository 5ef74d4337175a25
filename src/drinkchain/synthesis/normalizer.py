"""Enrichment of payloads that already passed the contract."""
from __future__ import annotations

import random
from collections.abc import Sequence
from datetime import datetime, timedelta

from drinkchain.domain.models import SupplyDraft, SupplyItem, TrendAnalysisResult

PLACEHOLDER_IMAGE_URL = "https://picsum.photos/400/300?random={seed}"
IMAGE_SEED_OFFSET = 10

MIN_FALLBACK_VALIDITY_DAYS = 3
MAX_FALLBACK_VALIDITY_DAYS = 13


def placeholder_image(position: int) -> str:
    return PLACEHOLDER_IMAGE_URL.format(seed=position + IMAGE_SEED_OFFSET)


def normalize_trends(result: TrendAnalysisResult) -> TrendAnalysisResult:
    """Assign each item an image keyed by its ordinal position in the response."""
    items = [
        item.model_copy(update={"image_url": placeholder_image(index)})
        for index, item in enumerate(result.items)
    ]
    return result.model_copy(update={"items": items})


def normalize_supply(
    drafts: Sequence[SupplyDraft],
    now: datetime,
    rng: random.Random | None = None,
) -> list[SupplyItem]:
    """Stamp ``created_at``/``expires_at``.

    Listings without an explicit validity period decay after a random
    3-13 days so synthetic listings never live forever.
    """
    rng = rng or random.Random()
    items: list[SupplyItem] = []
    for draft in drafts:
        days = draft.validity_days or rng.randint(MIN_FALLBACK_VALIDITY_DAYS, MAX_FALLBACK_VALIDITY_DAYS)
        items.append(
            SupplyItem(
                **draft.model_dump(exclude={"validity_days"}),
                created_at=now,
                expires_at=now + timedelta(days=days),
            )
        )
    return items
