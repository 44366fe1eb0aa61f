"""Two-way quote types published by the streaming services."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from tsydesk.constants import PricingSide
from tsydesk.reference.products import Bond
from tsydesk.utils.price_format import format_price


@dataclass(frozen=True)
class PriceStreamOrder:
    """One side of a quote with visible and hidden (reserve) size."""

    price: Decimal
    visible_quantity: int
    hidden_quantity: int
    side: PricingSide

    def __str__(self) -> str:
        return (
            f"{self.side.value.capitalize()}: {format_price(self.price)} "
            f"visibleQ {self.visible_quantity} hiddenQ {self.hidden_quantity}"
        )


@dataclass(frozen=True)
class PriceStream:
    """Two-way market for a product."""

    product: Bond
    bid_order: PriceStreamOrder
    offer_order: PriceStreamOrder

    @classmethod
    def empty(cls, ticker: str) -> PriceStream:
        zero = Decimal("0")
        return cls(
            Bond.placeholder(ticker),
            PriceStreamOrder(zero, 0, 0, PricingSide.BID),
            PriceStreamOrder(zero, 0, 0, PricingSide.OFFER),
        )

    @property
    def ticker(self) -> str:
        return self.product.ticker

    def __str__(self) -> str:
        return f"{self.ticker}, {self.bid_order}, {self.offer_order}"


@dataclass(frozen=True)
class AlgoStream:
    """Price stream generated by the streaming algo."""

    price_stream: PriceStream

    @classmethod
    def empty(cls, ticker: str) -> AlgoStream:
        return cls(PriceStream.empty(ticker))

    @property
    def ticker(self) -> str:
        return self.price_stream.ticker
