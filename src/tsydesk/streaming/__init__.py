"""Streaming Module - algo quoting and price stream publication."""

from tsydesk.streaming.algo import AlgoStreamingService
from tsydesk.streaming.models import AlgoStream, PriceStream, PriceStreamOrder
from tsydesk.streaming.service import StreamingService

__all__ = [
    "AlgoStream",
    "AlgoStreamingService",
    "PriceStream",
    "PriceStreamOrder",
    "StreamingService",
]
