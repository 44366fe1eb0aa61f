"""Feed ingestion and sample feed generation."""

from tsydesk.feeds.connectors import (
    FeedConnector,
    FeedStats,
    InquiryConnector,
    MarketDataConnector,
    PriceConnector,
    TradeConnector,
)
from tsydesk.feeds.generator import FeedGenerator, generate_feeds

__all__ = [
    "FeedConnector",
    "FeedGenerator",
    "FeedStats",
    "InquiryConnector",
    "MarketDataConnector",
    "PriceConnector",
    "TradeConnector",
    "generate_feeds",
]
