"""Market data service distributing order books."""

from __future__ import annotations

from tsydesk.constants import ListenerErrorPolicy
from tsydesk.core.service import KeyedStore, ServiceListener
from tsydesk.marketdata.models import BidOffer, OrderBook


class MarketDataService:
    """Keyed on ticker."""

    def __init__(self, error_policy: ListenerErrorPolicy = ListenerErrorPolicy.PROPAGATE):
        self.store: KeyedStore[OrderBook] = KeyedStore(
            "market_data",
            key_fn=lambda b: b.ticker,
            default_factory=OrderBook.empty,
            error_policy=error_policy,
        )

    def get_data(self, key: str) -> OrderBook:
        return self.store.get_data(key)

    def on_message(self, book: OrderBook) -> None:
        self.store.publish(book)

    def add_listener(self, listener: ServiceListener[OrderBook]) -> None:
        self.store.add_listener(listener)

    def get_listeners(self) -> tuple[ServiceListener[OrderBook], ...]:
        return self.store.get_listeners()

    def get_best_bid_offer(self, ticker: str) -> BidOffer | None:
        """Best bid/offer of the latest book for ticker, None without liquidity."""
        return self.store.get_data(ticker).best_bid_offer()
