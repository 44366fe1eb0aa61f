"""Internal price types."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from tsydesk.reference.products import Bond
from tsydesk.utils.price_format import format_price


@dataclass(frozen=True)
class Price:
    """Mid price and bid/offer spread for a product."""

    product: Bond
    mid: Decimal
    bid_offer_spread: Decimal

    @classmethod
    def empty(cls, ticker: str) -> Price:
        return cls(Bond.placeholder(ticker), Decimal("0"), Decimal("0"))

    @property
    def ticker(self) -> str:
        return self.product.ticker

    @property
    def bid(self) -> Decimal:
        return self.mid - self.bid_offer_spread / 2

    @property
    def offer(self) -> Decimal:
        return self.mid + self.bid_offer_spread / 2

    def __str__(self) -> str:
        return (
            f"{self.ticker}: mid price {format_price(self.mid)}, "
            f"spread {float(self.bid_offer_spread):.6f}"
        )
