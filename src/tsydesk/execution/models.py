"""Execution order types."""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from uuid import uuid4

from tsydesk.constants import Market, OrderType, PricingSide
from tsydesk.reference.products import Bond
from tsydesk.utils.price_format import format_price


def generate_order_id() -> str:
    """Generate a short random order id."""
    return uuid4().hex[:8].upper()


@dataclass(frozen=True)
class ExecutionOrder:
    """Order placed on a venue. The venue is assigned once, at execution."""

    product: Bond
    side: PricingSide
    order_id: str
    order_type: OrderType
    price: Decimal
    visible_quantity: int
    hidden_quantity: int
    parent_order_id: str = ""
    is_child_order: bool = False
    market: Market | None = None

    @classmethod
    def empty(cls, ticker: str) -> ExecutionOrder:
        return cls(Bond.placeholder(ticker), PricingSide.BID, "", OrderType.MARKET, Decimal("0"), 0, 0)

    @property
    def ticker(self) -> str:
        return self.product.ticker

    @property
    def total_quantity(self) -> int:
        return self.visible_quantity + self.hidden_quantity

    def with_market(self, market: Market) -> ExecutionOrder:
        """
        Return a copy routed to market.

        Raises:
            ValueError: If the order already has a venue.
        """
        if self.market is not None:
            raise ValueError(f"Order {self.order_id} already routed to {self.market.value}")
        return replace(self, market=market)

    def __str__(self) -> str:
        market = self.market.value if self.market else ""
        child = "IsChildOrder" if self.is_child_order else "NotChildOrder"
        return (
            f"{self.ticker} {self.order_id} {market} {self.side.value} {self.order_type.value} "
            f"{format_price(self.price)} {self.visible_quantity} {self.hidden_quantity} "
            f"{self.parent_order_id} {child}"
        )


@dataclass(frozen=True)
class AlgoExecution:
    """Execution order generated by the execution algo."""

    execution_order: ExecutionOrder

    @classmethod
    def empty(cls, ticker: str) -> AlgoExecution:
        return cls(ExecutionOrder.empty(ticker))

    @property
    def ticker(self) -> str:
        return self.execution_order.ticker
