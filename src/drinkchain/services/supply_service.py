"""Supply board use-case: synthesized and published listings with lazy expiry."""
from __future__ import annotations

import logging
import random
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from drinkchain.domain.exceptions import UnparseableError
from drinkchain.domain.models import ListingType, StrategyLens, SupplyItem
from drinkchain.services.generations import RequestGenerations
from drinkchain.supply.board import SupplyBoard
from drinkchain.supply.lifecycle import TypeFilter, visible_listings
from drinkchain.synthesis.client import SynthesisClient
from drinkchain.synthesis.contract import parse_supply_payload
from drinkchain.synthesis.directives import lens_directive
from drinkchain.synthesis.normalizer import normalize_supply

logger = logging.getLogger(__name__)

VIEW = "supply"
VALIDITY_CHOICES = (7, 15, 30)
DEFAULT_CATEGORY = "general"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SupplyService:
    def __init__(
        self,
        client: SynthesisClient,
        board: SupplyBoard | None = None,
        *,
        generations: RequestGenerations | None = None,
        clock: Callable[[], datetime] = _utcnow,
        rng: random.Random | None = None,
    ) -> None:
        self._client = client
        self._board = board or SupplyBoard()
        self._generations = generations or RequestGenerations()
        self._clock = clock
        self._rng = rng or random.Random()
        self._last_lens: StrategyLens | None = None

    @property
    def board(self) -> SupplyBoard:
        return self._board

    @property
    def last_lens(self) -> StrategyLens | None:
        """Lens of the last refresh that reached the board, if any."""
        return self._last_lens

    def synthesize(self, lens: StrategyLens, category: str = DEFAULT_CATEGORY) -> list[SupplyItem]:
        """One synthesized batch for *lens*; empty on any failure."""
        reply = self._client.synthesize_supply(category, lens_directive(lens))
        if not reply.ok:
            logger.error("Supply synthesis failed (%s): %s", reply.status.value, reply.error)
            return []
        try:
            drafts = parse_supply_payload(reply.payload)
        except UnparseableError as exc:
            logger.error("Supply payload rejected: %s", exc.message)
            return []
        return normalize_supply(drafts, self._clock(), self._rng)

    def refresh(self, lens: StrategyLens, category: str = DEFAULT_CATEGORY) -> list[SupplyItem]:
        """Synthesize a batch and add it to the board unless it went stale."""
        token = self._generations.issue(VIEW)
        batch = self.synthesize(lens, category)
        if not self._generations.is_current(VIEW, token):
            logger.info("Discarding stale supply batch (generation %d)", token)
            return []
        self._board.add_batch(batch)
        self._last_lens = lens
        return batch

    def ensure_current(self, lens: StrategyLens, category: str = DEFAULT_CATEGORY) -> list[SupplyItem]:
        """Refresh when nothing was synthesized yet or *lens* differs from the last refresh."""
        if self._last_lens == lens:
            return []
        logger.info("Supply board lens changed to %s; refreshing", lens.strategy.value)
        return self.refresh(lens, category)

    def publish(
        self,
        *,
        type: ListingType,
        product: str,
        company_name: str,
        price: str,
        location: str,
        validity_days: int = VALIDITY_CHOICES[0],
    ) -> SupplyItem:
        """Publish a user listing; it expires exactly ``validity_days`` after now."""
        if validity_days <= 0:
            raise ValueError("validity_days must be positive")
        for field_name, value in (
            ("product", product), ("company_name", company_name), ("price", price), ("location", location),
        ):
            if not value or not value.strip():
                raise ValueError(f"{field_name} must not be empty")

        now = self._clock()
        item = SupplyItem(
            id=uuid.uuid4().hex,
            type=ListingType(type),
            product=product.strip(),
            company_name=company_name.strip(),
            price=price.strip(),
            location=location.strip(),
            verified=False,
            created_at=now,
            expires_at=now + timedelta(days=validity_days),
        )
        self._board.add(item)
        logger.info("Published %s listing %s (%d days)", item.type.value, item.id, validity_days)
        return item

    def listings(
        self, type_filter: TypeFilter = TypeFilter.ALL, now: datetime | None = None,
    ) -> list[SupplyItem]:
        return visible_listings(self._board.all(), now or self._clock(), type_filter)
