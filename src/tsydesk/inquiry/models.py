"""Customer inquiry types."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from tsydesk.constants import InquiryState, TradeSide
from tsydesk.reference.products import Bond
from tsydesk.utils.price_format import format_price


@dataclass(frozen=True)
class Inquiry:
    """Customer request for a quote. Keyed by inquiry id, not product."""

    inquiry_id: str
    product: Bond
    side: TradeSide
    quantity: int
    price: Decimal
    state: InquiryState

    @classmethod
    def empty(cls, inquiry_id: str) -> Inquiry:
        return cls(inquiry_id, Bond.placeholder(""), TradeSide.BUY, 0, Decimal("0"), InquiryState.RECEIVED)

    @property
    def ticker(self) -> str:
        return self.product.ticker

    def __str__(self) -> str:
        return (
            f"{self.ticker} {self.inquiry_id} {self.side.value} {format_price(self.price)} "
            f"{self.quantity} {self.state.value}"
        )
