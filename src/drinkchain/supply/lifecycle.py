"""Read-time visibility of supply listings.

Listings are never deleted; an expired listing simply stops being returned.
The predicate is evaluated fresh on every read.
"""
from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime
from enum import Enum

from drinkchain.domain.models import SupplyItem

_DAY_SECONDS = 86400


class TypeFilter(str, Enum):
    ALL = "ALL"
    SUPPLY = "SUPPLY"
    DEMAND = "DEMAND"


def is_visible(item: SupplyItem, now: datetime, type_filter: TypeFilter = TypeFilter.ALL) -> bool:
    type_filter = TypeFilter(type_filter)
    if now > item.expires_at:
        return False
    return type_filter is TypeFilter.ALL or item.type.value == type_filter.value


def visible_listings(
    items: Iterable[SupplyItem],
    now: datetime,
    type_filter: TypeFilter = TypeFilter.ALL,
) -> list[SupplyItem]:
    type_filter = TypeFilter(type_filter)
    return [item for item in items if is_visible(item, now, type_filter)]


def remaining_days(item: SupplyItem, now: datetime) -> int:
    """Whole days left before expiry, rounded up; 0 once expired."""
    seconds = (item.expires_at - now).total_seconds()
    return max(0, math.ceil(seconds / _DAY_SECONDS))
