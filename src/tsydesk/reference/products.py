"""Product master types."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from tsydesk.constants import BondIdType


@dataclass(frozen=True)
class Bond:
    """US Treasury bond identified by ticker."""

    product_id: str
    bond_id_type: BondIdType
    ticker: str
    coupon: Decimal
    maturity_date: date | None

    @classmethod
    def placeholder(cls, ticker: str) -> Bond:
        """Zero-valued bond used for keys a service has not seen yet."""
        return cls(
            product_id="",
            bond_id_type=BondIdType.CUSIP,
            ticker=ticker,
            coupon=Decimal("0"),
            maturity_date=None,
        )

    def __str__(self) -> str:
        maturity = self.maturity_date.strftime("%m/%d/%Y") if self.maturity_date else ""
        return f"{self.ticker} {self.coupon} {maturity}"
