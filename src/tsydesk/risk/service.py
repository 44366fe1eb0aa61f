"""Risk service: PV01 per product and per risk bucket."""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal

from tsydesk.constants import ListenerErrorPolicy
from tsydesk.core.service import KeyedStore, ServiceListener
from tsydesk.positions.models import Position
from tsydesk.reference.products import Bond
from tsydesk.reference.static_data import get_bucket, get_pv01
from tsydesk.risk.models import PV01, BucketedSector

logger = logging.getLogger(__name__)


class RiskListener(ServiceListener[Position]):
    """Subscribes the risk service to positions."""

    def __init__(self, service: RiskService):
        self.service = service

    def process_add(self, data: Position) -> None:
        self.service.add_position(data)


class RiskService:
    """
    Keyed on ticker.

    PV01 of a product is its per-unit PV01 times its aggregate position.
    Bucket PV01 sums the latest PV01 of every member of the product's
    bucket; members without a position yet count as zero.
    """

    def __init__(
        self,
        pv01_lookup: Callable[[str], Decimal] = get_pv01,
        bucket_lookup: Callable[[str], tuple[str, tuple[str, ...]]] = get_bucket,
        error_policy: ListenerErrorPolicy = ListenerErrorPolicy.PROPAGATE,
    ):
        self.pv01_lookup = pv01_lookup
        self.bucket_lookup = bucket_lookup
        self.store: KeyedStore[PV01[Bond]] = KeyedStore(
            "risk",
            key_fn=lambda r: r.ticker,
            default_factory=PV01.empty,
            error_policy=error_policy,
        )
        self.listener = RiskListener(self)

    def get_data(self, key: str) -> PV01[Bond]:
        return self.store.get_data(key)

    def on_message(self, risk: PV01[Bond]) -> None:
        self.store.publish(risk)

    def add_listener(self, listener: ServiceListener[PV01[Bond]]) -> None:
        self.store.add_listener(listener)

    def get_listeners(self) -> tuple[ServiceListener[PV01[Bond]], ...]:
        return self.store.get_listeners()

    def add_position(self, position: Position) -> PV01[Bond]:
        """Recompute PV01 for position's product and publish it with its bucket total."""
        ticker = position.ticker
        quantity = position.aggregate_position
        pv01 = self.pv01_lookup(ticker) * quantity

        bucket_name, members = self.bucket_lookup(ticker)
        bucket_pv01 = sum(
            (pv01 if member == ticker else self.store.get_data(member).pv01 for member in members),
            Decimal("0"),
        )

        risk = PV01(position.product, pv01, quantity, bucket_name, bucket_pv01)
        logger.debug(f"Risk {ticker}: {pv01} ({bucket_name} {bucket_pv01})")
        self.on_message(risk)
        return risk

    def get_bucketed_risk(self, sector: BucketedSector) -> PV01[BucketedSector]:
        """Sum the stored PV01 over sector's products. Read-only, no fan-out."""
        total = sum((self.store.get_data(p.ticker).pv01 for p in sector.products), Decimal("0"))
        return PV01(sector, total, 1, sector.name, total)
