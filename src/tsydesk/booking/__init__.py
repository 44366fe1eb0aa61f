"""Trade Booking Module."""

from tsydesk.booking.models import Trade
from tsydesk.booking.service import TradeBookingListener, TradeBookingService

__all__ = [
    "Trade",
    "TradeBookingListener",
    "TradeBookingService",
]
