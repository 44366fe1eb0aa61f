"""Tests for static reference data."""

from datetime import date
from decimal import Decimal

import pytest

from tsydesk.errors import UnknownTickerError
from tsydesk.reference.products import Bond
from tsydesk.reference.static_data import BUCKETS, all_tickers, get_bond, get_bucket, get_pv01


def test_all_tickers_in_curve_order():
    assert all_tickers() == ["T2Y", "T3Y", "T5Y", "T7Y", "T10Y", "T20Y", "T30Y"]


def test_get_bond():
    bond = get_bond("T10Y")
    assert bond.ticker == "T10Y"
    assert bond.product_id == "91282CFV8"
    assert bond.maturity_date == date(2032, 11, 15)


def test_bond_str():
    assert str(get_bond("T2Y")) == "T2Y 0.045 11/30/2024"


def test_placeholder_bond():
    bond = Bond.placeholder("T5Y")
    assert bond.ticker == "T5Y"
    assert bond.coupon == Decimal("0")
    assert bond.maturity_date is None


def test_every_ticker_has_pv01_and_bucket():
    for ticker in all_tickers():
        assert get_pv01(ticker) > 0
        name, members = get_bucket(ticker)
        assert ticker in members
        assert BUCKETS[name] == members


def test_buckets_partition_tickers():
    members = [t for tickers in BUCKETS.values() for t in tickers]
    assert sorted(members) == sorted(all_tickers())


def test_get_bucket():
    assert get_bucket("T7Y") == ("Belly", ("T5Y", "T7Y", "T10Y"))


@pytest.mark.parametrize("lookup", [get_bond, get_pv01, get_bucket])
def test_unknown_ticker_raises(lookup):
    with pytest.raises(UnknownTickerError) as exc_info:
        lookup("T99Y")
    assert exc_info.value.ticker == "T99Y"
    assert isinstance(exc_info.value, KeyError)
    assert str(exc_info.value) == "Unknown ticker: 'T99Y'"
