"""Pricing Module."""

from tsydesk.pricing.models import Price
from tsydesk.pricing.service import PricingService

__all__ = [
    "Price",
    "PricingService",
]
