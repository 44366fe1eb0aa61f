"""Market Data Module."""

from tsydesk.marketdata.models import BidOffer, Order, OrderBook
from tsydesk.marketdata.service import MarketDataService

__all__ = [
    "BidOffer",
    "MarketDataService",
    "Order",
    "OrderBook",
]
