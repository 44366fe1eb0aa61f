"""Position Module."""

from tsydesk.positions.models import Position
from tsydesk.positions.service import PositionService

__all__ = [
    "Position",
    "PositionService",
]
