"""Customer inquiry service and its lifecycle."""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal

from tsydesk.constants import DEFAULT_QUOTE_PRICE, InquiryState, ListenerErrorPolicy
from tsydesk.core.service import KeyedStore, ServiceListener
from tsydesk.errors import UnknownInquiryError
from tsydesk.inquiry.models import Inquiry

logger = logging.getLogger(__name__)


class InquiryService:
    """
    Keyed on inquiry id.

    Lifecycle:
        RECEIVED -> QUOTED -> DONE
        RECEIVED/QUOTED -> REJECTED | CUSTOMER_REJECTED

    An incoming inquiry is stored first, then its own state (not the
    previously stored one) picks the transition. A RECEIVED inquiry is
    quoted at quote_price and walked through QUOTED to DONE within the
    same call. Only DONE inquiries are published to listeners.
    """

    def __init__(
        self,
        quote_price: Decimal = DEFAULT_QUOTE_PRICE,
        error_policy: ListenerErrorPolicy = ListenerErrorPolicy.PROPAGATE,
    ):
        self.quote_price = quote_price
        self.store: KeyedStore[Inquiry] = KeyedStore(
            "inquiry",
            key_fn=lambda i: i.inquiry_id,
            default_factory=Inquiry.empty,
            error_policy=error_policy,
        )

    def get_data(self, key: str) -> Inquiry:
        return self.store.get_data(key)

    def on_message(self, inquiry: Inquiry) -> Inquiry:
        """Store inquiry and advance it according to its state."""
        self.store.on_message(inquiry)
        return self._transition(inquiry)

    def add_listener(self, listener: ServiceListener[Inquiry]) -> None:
        self.store.add_listener(listener)

    def get_listeners(self) -> tuple[ServiceListener[Inquiry], ...]:
        return self.store.get_listeners()

    def send_quote(self, inquiry_id: str, price: Decimal) -> Inquiry:
        """
        Quote a stored inquiry back to the customer.

        Raises:
            UnknownInquiryError: If no inquiry with inquiry_id has been received.
        """
        inquiry = replace(self._require(inquiry_id), price=price)
        logger.debug(f"Quoting inquiry {inquiry_id} at {price}")
        return self._transition(self._store_as(inquiry, InquiryState.QUOTED))

    def reject_inquiry(self, inquiry_id: str) -> Inquiry:
        """Mark an inquiry REJECTED. Listeners are not notified."""
        return self._store_as(self._require(inquiry_id), InquiryState.REJECTED)

    def customer_reject_inquiry(self, inquiry_id: str) -> Inquiry:
        """Mark an inquiry CUSTOMER_REJECTED. Listeners are not notified."""
        return self._store_as(self._require(inquiry_id), InquiryState.CUSTOMER_REJECTED)

    def _transition(self, inquiry: Inquiry) -> Inquiry:
        if inquiry.state == InquiryState.RECEIVED:
            return self.send_quote(inquiry.inquiry_id, self.quote_price)

        if inquiry.state == InquiryState.QUOTED:
            done = replace(inquiry, state=InquiryState.DONE)
            logger.debug(f"Inquiry {done.inquiry_id} done")
            self.store.publish(done)
            return done

        # Terminal states are stored as-is
        return inquiry

    def _store_as(self, inquiry: Inquiry, state: InquiryState) -> Inquiry:
        updated = replace(inquiry, state=state)
        self.store.on_message(updated)
        return updated

    def _require(self, inquiry_id: str) -> Inquiry:
        if inquiry_id not in self.store:
            raise UnknownInquiryError(inquiry_id)
        return self.store.get_data(inquiry_id)
