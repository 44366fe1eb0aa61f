"""Risk types: PV01 and bucketed sectors."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Generic, TypeVar

from tsydesk.reference.products import Bond
from tsydesk.reference.static_data import BUCKETS, get_bond

P = TypeVar("P")


@dataclass(frozen=True)
class BucketedSector:
    """Named group of products whose risk is aggregated together."""

    products: tuple[Bond, ...]
    name: str

    @classmethod
    def from_bucket(cls, name: str) -> BucketedSector:
        """Build the sector for one of the static risk buckets."""
        if name not in BUCKETS:
            raise KeyError(f"Unknown bucket: {name!r}")
        return cls(tuple(get_bond(ticker) for ticker in BUCKETS[name]), name)

    @property
    def ticker(self) -> str:
        return self.name


@dataclass(frozen=True)
class PV01(Generic[P]):
    """PV01 risk of a product or sector, with its bucket aggregate."""

    product: P
    pv01: Decimal
    quantity: int
    bucket_name: str = ""
    bucket_pv01: Decimal = Decimal("0")

    @classmethod
    def empty(cls, ticker: str) -> PV01[Bond]:
        return cls(Bond.placeholder(ticker), Decimal("0"), 0)

    @property
    def ticker(self) -> str:
        return self.product.ticker

    def __str__(self) -> str:
        return (
            f"{self.ticker}, risk: {float(self.pv01):.6f}, Quantity: {self.quantity}, "
            f"Bucket {self.bucket_name} risk: {float(self.bucket_pv01):.6f}"
        )
