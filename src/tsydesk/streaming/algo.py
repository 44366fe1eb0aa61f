"""Algo streaming: turns internal prices into sized two-way quotes."""

from __future__ import annotations

import logging

from tsydesk.constants import (
    DEFAULT_HIDDEN_MULTIPLIER,
    DEFAULT_VISIBLE_QUANTITY_UNIT,
    ListenerErrorPolicy,
    PricingSide,
)
from tsydesk.core.service import KeyedStore, ServiceListener
from tsydesk.pricing.models import Price
from tsydesk.streaming.models import AlgoStream, PriceStream, PriceStreamOrder

logger = logging.getLogger(__name__)


class AlgoStreamingListener(ServiceListener[Price]):
    """Subscribes the algo to the pricing service."""

    def __init__(self, service: AlgoStreamingService):
        self.service = service

    def process_add(self, data: Price) -> None:
        self.service.publish_price(data)


class AlgoStreamingService:
    """
    Keyed on ticker.

    Quote size alternates between one and two units of visible quantity on
    every price, whatever the ticker. Hidden quantity is a fixed multiple of
    the visible quantity.
    """

    def __init__(
        self,
        visible_quantity_unit: int = DEFAULT_VISIBLE_QUANTITY_UNIT,
        hidden_multiplier: int = DEFAULT_HIDDEN_MULTIPLIER,
        error_policy: ListenerErrorPolicy = ListenerErrorPolicy.PROPAGATE,
    ):
        self.visible_quantity_unit = visible_quantity_unit
        self.hidden_multiplier = hidden_multiplier
        self.store: KeyedStore[AlgoStream] = KeyedStore(
            "algo_streaming",
            key_fn=lambda s: s.ticker,
            default_factory=AlgoStream.empty,
            error_policy=error_policy,
        )
        self.listener = AlgoStreamingListener(self)

        self.visible_is_single_unit = True

    def get_data(self, key: str) -> AlgoStream:
        return self.store.get_data(key)

    def on_message(self, stream: AlgoStream) -> None:
        self.store.publish(stream)

    def add_listener(self, listener: ServiceListener[AlgoStream]) -> None:
        self.store.add_listener(listener)

    def get_listeners(self) -> tuple[ServiceListener[AlgoStream], ...]:
        return self.store.get_listeners()

    def publish_price(self, price: Price) -> AlgoStream:
        """Build a quote around price.mid and publish it."""
        units = 1 if self.visible_is_single_unit else 2
        visible = units * self.visible_quantity_unit
        hidden = visible * self.hidden_multiplier
        self.visible_is_single_unit = not self.visible_is_single_unit

        stream = AlgoStream(
            PriceStream(
                price.product,
                PriceStreamOrder(price.bid, visible, hidden, PricingSide.BID),
                PriceStreamOrder(price.offer, visible, hidden, PricingSide.OFFER),
            )
        )
        logger.debug(f"Quoting {price.ticker} visible={visible} hidden={hidden}")
        self.on_message(stream)
        return stream
