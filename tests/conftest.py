"""Shared test helpers."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from tsydesk.constants import PricingSide
from tsydesk.marketdata.models import Order, OrderBook
from tsydesk.reference.static_data import get_bond
from tsydesk.utils.price_format import parse_price


def make_book(ticker: str, bids: Sequence[tuple[str, int]], offers: Sequence[tuple[str, int]]) -> OrderBook:
    """Build a book from (handle price, quantity) pairs."""
    return OrderBook(
        get_bond(ticker),
        tuple(Order(parse_price(px), qty, PricingSide.BID) for px, qty in bids),
        tuple(Order(parse_price(px), qty, PricingSide.OFFER) for px, qty in offers),
    )


@pytest.fixture
def tight_book() -> OrderBook:
    """T2Y book whose best offer is exactly 1/128 above its best bid."""
    return make_book(
        "T2Y",
        bids=[("99-160", 10_000_000), ("99-157", 20_000_000)],
        offers=[("99-162", 15_000_000), ("99-165", 20_000_000)],
    )


@pytest.fixture
def wide_book() -> OrderBook:
    """T2Y book with a 1/64 spread."""
    return make_book(
        "T2Y",
        bids=[("99-160", 10_000_000)],
        offers=[("99-164", 10_000_000)],
    )


@pytest.fixture
def book_factory():
    return make_book
