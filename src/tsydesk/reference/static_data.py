"""Static reference data: bond master, PV01 per unit, risk buckets.

Lookups are pure functions over module-level tables. Unknown tickers raise
UnknownTickerError instead of falling back to a default.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from tsydesk.constants import BondIdType
from tsydesk.errors import UnknownTickerError
from tsydesk.reference.products import Bond

BOND_MASTER: dict[str, Bond] = {
    bond.ticker: bond
    for bond in (
        Bond("91282CFX4", BondIdType.CUSIP, "T2Y", Decimal("0.045"), date(2024, 11, 30)),
        Bond("91282CFW6", BondIdType.CUSIP, "T3Y", Decimal("0.045"), date(2025, 11, 15)),
        Bond("91282CFZ9", BondIdType.CUSIP, "T5Y", Decimal("0.03875"), date(2027, 11, 30)),
        Bond("91282CFY2", BondIdType.CUSIP, "T7Y", Decimal("0.03875"), date(2029, 11, 30)),
        Bond("91282CFV8", BondIdType.CUSIP, "T10Y", Decimal("0.04125"), date(2032, 11, 15)),
        Bond("912810TM0", BondIdType.CUSIP, "T20Y", Decimal("0.04"), date(2042, 11, 15)),
        Bond("912810TL2", BondIdType.CUSIP, "T30Y", Decimal("0.04"), date(2052, 11, 15)),
    )
}

# PV01 per unit of face
PV01_PER_UNIT: dict[str, Decimal] = {
    "T2Y": Decimal("0.01879"),
    "T3Y": Decimal("0.02761"),
    "T5Y": Decimal("0.04526"),
    "T7Y": Decimal("0.06170"),
    "T10Y": Decimal("0.08598"),
    "T20Y": Decimal("0.14420"),
    "T30Y": Decimal("0.19917"),
}

# Bucket name -> member tickers, in curve order
BUCKETS: dict[str, tuple[str, ...]] = {
    "FrontEnd": ("T2Y", "T3Y"),
    "Belly": ("T5Y", "T7Y", "T10Y"),
    "LongEnd": ("T20Y", "T30Y"),
}

_TICKER_TO_BUCKET = {ticker: name for name, members in BUCKETS.items() for ticker in members}


def all_tickers() -> list[str]:
    return list(BOND_MASTER)


def get_bond(ticker: str) -> Bond:
    """Look up the bond master record for ticker."""
    try:
        return BOND_MASTER[ticker]
    except KeyError:
        raise UnknownTickerError(ticker) from None


def get_pv01(ticker: str) -> Decimal:
    """Look up the per-unit PV01 for ticker."""
    try:
        return PV01_PER_UNIT[ticker]
    except KeyError:
        raise UnknownTickerError(ticker) from None


def get_bucket(ticker: str) -> tuple[str, tuple[str, ...]]:
    """Return (bucket name, member tickers) for the bucket containing ticker."""
    try:
        name = _TICKER_TO_BUCKET[ticker]
    except KeyError:
        raise UnknownTickerError(ticker) from None
    return name, BUCKETS[name]
