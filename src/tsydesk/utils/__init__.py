"""Formatting helpers."""

from tsydesk.utils.price_format import format_price, parse_price
from tsydesk.utils.timestamps import current_timestamp, epoch_millis

__all__ = [
    "current_timestamp",
    "epoch_millis",
    "format_price",
    "parse_price",
]
