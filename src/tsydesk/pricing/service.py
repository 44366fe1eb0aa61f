"""Pricing service: latest internal price per ticker."""

from __future__ import annotations

from tsydesk.constants import ListenerErrorPolicy
from tsydesk.core.service import KeyedStore, ServiceListener
from tsydesk.pricing.models import Price


class PricingService:
    """
    Keyed on ticker. Every ingested price is stored and pushed to listeners
    unchanged.
    """

    def __init__(self, error_policy: ListenerErrorPolicy = ListenerErrorPolicy.PROPAGATE):
        self.store: KeyedStore[Price] = KeyedStore(
            "pricing", key_fn=lambda p: p.ticker, default_factory=Price.empty, error_policy=error_policy
        )

    def get_data(self, key: str) -> Price:
        return self.store.get_data(key)

    def on_message(self, price: Price) -> None:
        self.store.publish(price)

    def add_listener(self, listener: ServiceListener[Price]) -> None:
        self.store.add_listener(listener)

    def get_listeners(self) -> tuple[ServiceListener[Price], ...]:
        return self.store.get_listeners()
