"""Historical data and GUI sinks."""

from tsydesk.history.service import GUIService, HistoricalDataService

__all__ = [
    "GUIService",
    "HistoricalDataService",
]
