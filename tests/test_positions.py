"""Tests for position keeping."""

from decimal import Decimal

import pytest

from tsydesk.booking.models import Trade
from tsydesk.booking.service import TradeBookingService
from tsydesk.constants import TradeSide
from tsydesk.core.service import CallbackListener
from tsydesk.positions.models import Position
from tsydesk.positions.service import PositionService
from tsydesk.reference.static_data import get_bond


def make_trade(trade_id: str, ticker: str, side: TradeSide, quantity: int, book: str) -> Trade:
    return Trade(get_bond(ticker), trade_id, Decimal("100"), book, quantity, side)


@pytest.fixture
def positions():
    booking = TradeBookingService()
    service = PositionService()
    booking.add_listener(service.listener)
    return booking, service


class TestPosition:
    def test_unknown_book_is_flat(self):
        assert Position.empty("T2Y").get_position("TRSY1") == 0

    def test_add_and_aggregate(self):
        position = Position(get_bond("T2Y"))
        position.add_position("TRSY1", 10)
        position.add_position("TRSY2", -4)
        position.add_position("TRSY1", 5)

        assert position.get_position("TRSY1") == 15
        assert position.get_position("TRSY2") == -4
        assert position.aggregate_position == 11

    def test_str(self):
        position = Position(get_bond("T2Y"))
        position.add_position("TRSY2", -4)
        position.add_position("TRSY1", 10)
        assert str(position) == "T2Y, TRSY1: 10, TRSY2: -4, Total: 6"


class TestPositionService:
    def test_aggregate_is_signed_sum_of_trades(self, positions):
        booking, service = positions
        trades = [
            make_trade("1", "T5Y", TradeSide.BUY, 1_000_000, "TRSY1"),
            make_trade("2", "T5Y", TradeSide.SELL, 3_000_000, "TRSY2"),
            make_trade("3", "T5Y", TradeSide.BUY, 5_000_000, "TRSY3"),
            make_trade("4", "T5Y", TradeSide.SELL, 2_000_000, "TRSY1"),
            make_trade("5", "T2Y", TradeSide.BUY, 9_000_000, "TRSY1"),
        ]
        for trade in trades:
            booking.book_trade(trade)

        t5y = service.get_data("T5Y")
        assert t5y.aggregate_position == 1_000_000
        assert t5y.get_position("TRSY1") == -1_000_000
        assert t5y.get_position("TRSY2") == -3_000_000
        assert t5y.get_position("TRSY3") == 5_000_000
        assert service.get_data("T2Y").aggregate_position == 9_000_000

    def test_publishes_every_update(self, positions):
        booking, service = positions
        published = []
        service.add_listener(CallbackListener(lambda p: published.append(p.aggregate_position)))

        booking.book_trade(make_trade("1", "T7Y", TradeSide.BUY, 2, "TRSY1"))
        booking.book_trade(make_trade("2", "T7Y", TradeSide.SELL, 5, "TRSY2"))

        assert published == [2, -3]

    def test_new_position_carries_bond_master_product(self, positions):
        booking, service = positions
        booking.book_trade(make_trade("1", "T30Y", TradeSide.BUY, 1, "TRSY1"))
        assert service.get_data("T30Y").product == get_bond("T30Y")

    def test_unseen_ticker_is_flat(self):
        assert PositionService().get_data("T10Y").aggregate_position == 0
