"""Trade booking service."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tsydesk.constants import DEFAULT_BOOKS, ListenerErrorPolicy, PricingSide, TradeSide
from tsydesk.core.service import KeyedStore, ServiceListener
from tsydesk.booking.models import Trade
from tsydesk.execution.models import ExecutionOrder

logger = logging.getLogger(__name__)


class TradeBookingListener(ServiceListener[ExecutionOrder]):
    """
    Books executions as trades.

    The house takes the other side of what it executed against: a BID
    execution books a SELL, an OFFER execution books a BUY. Books are
    assigned round-robin in the order executions arrive.
    """

    def __init__(self, service: TradeBookingService, books: Sequence[str] = DEFAULT_BOOKS):
        if not books:
            raise ValueError("At least one book is required")
        self.service = service
        self.books = tuple(books)
        self.count = 0

    def next_book(self) -> str:
        book = self.books[self.count % len(self.books)]
        self.count += 1
        return book

    def process_add(self, data: ExecutionOrder) -> None:
        side = TradeSide.SELL if data.side == PricingSide.BID else TradeSide.BUY
        trade = Trade(
            product=data.product,
            trade_id=data.order_id,
            price=data.price,
            book=self.next_book(),
            quantity=data.total_quantity,
            side=side,
        )
        self.service.book_trade(trade)


class TradeBookingService:
    """Keyed on trade id."""

    def __init__(
        self,
        books: Sequence[str] = DEFAULT_BOOKS,
        error_policy: ListenerErrorPolicy = ListenerErrorPolicy.PROPAGATE,
    ):
        self.store: KeyedStore[Trade] = KeyedStore(
            "trade_booking",
            key_fn=lambda t: t.trade_id,
            default_factory=Trade.empty,
            error_policy=error_policy,
        )
        self.listener = TradeBookingListener(self, books)

    def get_data(self, key: str) -> Trade:
        return self.store.get_data(key)

    def on_message(self, trade: Trade) -> None:
        self.store.publish(trade)

    def add_listener(self, listener: ServiceListener[Trade]) -> None:
        self.store.add_listener(listener)

    def get_listeners(self) -> tuple[ServiceListener[Trade], ...]:
        return self.store.get_listeners()

    def book_trade(self, trade: Trade) -> None:
        """Book trade and publish it."""
        logger.debug(f"Booking {trade.trade_id}: {trade.side.value} {trade.quantity} {trade.ticker} in {trade.book}")
        self.on_message(trade)
