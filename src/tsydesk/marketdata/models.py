"""Order book market data types."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from operator import attrgetter

from tsydesk.constants import PricingSide
from tsydesk.reference.products import Bond


@dataclass(frozen=True)
class Order:
    """Market data order with price, quantity and side."""

    price: Decimal
    quantity: int
    side: PricingSide


@dataclass(frozen=True)
class BidOffer:
    """Best bid and best offer of a book."""

    bid_order: Order
    offer_order: Order

    @property
    def spread(self) -> Decimal:
        return self.offer_order.price - self.bid_order.price


@dataclass(frozen=True)
class OrderBook:
    """Bid and offer stacks for a product."""

    product: Bond
    bid_stack: tuple[Order, ...]
    offer_stack: tuple[Order, ...]

    @classmethod
    def empty(cls, ticker: str) -> OrderBook:
        return cls(Bond.placeholder(ticker), (), ())

    @property
    def ticker(self) -> str:
        return self.product.ticker

    def best_bid_offer(self) -> BidOffer | None:
        """
        Highest bid and lowest offer, first occurrence winning ties.

        Returns None when either side of the book has no orders.
        """
        if not self.bid_stack or not self.offer_stack:
            return None
        # max()/min() keep the first element among equals
        best_bid = max(self.bid_stack, key=attrgetter("price"))
        best_offer = min(self.offer_stack, key=attrgetter("price"))
        return BidOffer(best_bid, best_offer)
