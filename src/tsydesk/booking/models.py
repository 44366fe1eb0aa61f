"""Trade types."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from tsydesk.constants import TradeSide
from tsydesk.reference.products import Bond
from tsydesk.utils.price_format import format_price


@dataclass(frozen=True)
class Trade:
    """Trade booked against a book."""

    product: Bond
    trade_id: str
    price: Decimal
    book: str
    quantity: int
    side: TradeSide

    @classmethod
    def empty(cls, trade_id: str) -> Trade:
        return cls(Bond.placeholder(""), trade_id, Decimal("0"), "", 0, TradeSide.BUY)

    @property
    def ticker(self) -> str:
        return self.product.ticker

    @property
    def signed_quantity(self) -> int:
        """Quantity with BUY positive and SELL negative."""
        return self.quantity if self.side == TradeSide.BUY else -self.quantity

    def __str__(self) -> str:
        return (
            f"{self.ticker} {self.trade_id} {self.side.value} {format_price(self.price)} "
            f"{self.quantity} {self.book}"
        )
