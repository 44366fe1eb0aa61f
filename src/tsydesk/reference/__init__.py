"""Reference data: product master, PV01 table and risk buckets."""

from tsydesk.reference.products import Bond
from tsydesk.reference.static_data import all_tickers, get_bond, get_bucket, get_pv01

__all__ = [
    "Bond",
    "all_tickers",
    "get_bond",
    "get_bucket",
    "get_pv01",
]
