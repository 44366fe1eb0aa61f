"""Position service: aggregates booked trades per product and book."""

from __future__ import annotations

import logging
from collections.abc import Callable

from tsydesk.booking.models import Trade
from tsydesk.constants import ListenerErrorPolicy
from tsydesk.core.service import KeyedStore, ServiceListener
from tsydesk.positions.models import Position
from tsydesk.reference.products import Bond
from tsydesk.reference.static_data import get_bond

logger = logging.getLogger(__name__)


class PositionListener(ServiceListener[Trade]):
    """Subscribes the position service to trade booking."""

    def __init__(self, service: PositionService):
        self.service = service

    def process_add(self, data: Trade) -> None:
        self.service.add_trade(data)


class PositionService:
    """
    Keyed on ticker.

    Book totals are running sums of every trade ever booked; nothing resets them.
    """

    def __init__(
        self,
        product_lookup: Callable[[str], Bond] = get_bond,
        error_policy: ListenerErrorPolicy = ListenerErrorPolicy.PROPAGATE,
    ):
        self.product_lookup = product_lookup
        self.store: KeyedStore[Position] = KeyedStore(
            "position",
            key_fn=lambda p: p.ticker,
            default_factory=Position.empty,
            error_policy=error_policy,
        )
        self.listener = PositionListener(self)

    def get_data(self, key: str) -> Position:
        return self.store.get_data(key)

    def on_message(self, position: Position) -> None:
        self.store.publish(position)

    def add_listener(self, listener: ServiceListener[Position]) -> None:
        self.store.add_listener(listener)

    def get_listeners(self) -> tuple[ServiceListener[Position], ...]:
        return self.store.get_listeners()

    def add_trade(self, trade: Trade) -> Position:
        """Apply trade to its product's position and publish the result."""
        ticker = trade.ticker
        if ticker in self.store:
            position = self.store.get_data(ticker)
        else:
            position = Position(self.product_lookup(ticker))

        position.add_position(trade.book, trade.signed_quantity)
        logger.debug(f"Position {ticker} {trade.book} -> {position.get_position(trade.book)}")
        self.on_message(position)
        return position
