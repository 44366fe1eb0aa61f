"""Customer Inquiry Module."""

from tsydesk.inquiry.models import Inquiry
from tsydesk.inquiry.service import InquiryService

__all__ = [
    "Inquiry",
    "InquiryService",
]
