"""Risk Module."""

from tsydesk.risk.models import PV01, BucketedSector
from tsydesk.risk.service import RiskService

__all__ = [
    "PV01",
    "BucketedSector",
    "RiskService",
]
