"""Tests for the customer inquiry lifecycle."""

from decimal import Decimal

import pytest

from tsydesk.constants import InquiryState, TradeSide
from tsydesk.core.service import CallbackListener
from tsydesk.errors import UnknownInquiryError
from tsydesk.inquiry.models import Inquiry
from tsydesk.inquiry.service import InquiryService
from tsydesk.reference.static_data import get_bond


def make_inquiry(inquiry_id: str = "INQ1", state: InquiryState = InquiryState.RECEIVED) -> Inquiry:
    return Inquiry(inquiry_id, get_bond("T5Y"), TradeSide.BUY, 1_000_000, Decimal("99"), state)


@pytest.fixture
def inquiries():
    service = InquiryService()
    published = []
    service.add_listener(CallbackListener(published.append))
    return service, published


class TestLifecycle:
    def test_received_is_quoted_and_done(self, inquiries):
        service, published = inquiries

        result = service.on_message(make_inquiry())

        assert result.state == InquiryState.DONE
        assert result.price == Decimal("100")
        assert service.get_data("INQ1") == result
        assert published == [result]

    def test_quoted_goes_straight_to_done(self, inquiries):
        service, published = inquiries

        service.on_message(make_inquiry(state=InquiryState.QUOTED))

        stored = service.get_data("INQ1")
        assert stored.state == InquiryState.DONE
        assert stored.price == Decimal("99")
        assert published == [stored]

    @pytest.mark.parametrize(
        "state", [InquiryState.DONE, InquiryState.REJECTED, InquiryState.CUSTOMER_REJECTED]
    )
    def test_terminal_states_stored_without_fan_out(self, inquiries, state):
        service, published = inquiries

        service.on_message(make_inquiry(state=state))

        assert service.get_data("INQ1").state == state
        assert published == []

    def test_incoming_state_drives_transition(self, inquiries):
        service, published = inquiries
        service.on_message(make_inquiry())
        published.clear()

        # A fresh RECEIVED event for a DONE id is quoted again
        service.on_message(make_inquiry())

        assert service.get_data("INQ1").state == InquiryState.DONE
        assert len(published) == 1

    def test_inquiries_keyed_by_id(self, inquiries):
        service, published = inquiries
        service.on_message(make_inquiry("A"))
        service.on_message(make_inquiry("B"))

        assert [i.inquiry_id for i in published] == ["A", "B"]

    def test_custom_quote_price(self):
        service = InquiryService(quote_price=Decimal("101.5"))
        assert service.on_message(make_inquiry()).price == Decimal("101.5")


class TestExplicitActions:
    def test_reject_forces_rejected_without_notification(self, inquiries):
        service, published = inquiries
        service.on_message(make_inquiry())
        published.clear()

        result = service.reject_inquiry("INQ1")

        assert result.state == InquiryState.REJECTED
        assert service.get_data("INQ1").state == InquiryState.REJECTED
        assert published == []

    def test_customer_reject(self, inquiries):
        service, published = inquiries
        service.on_message(make_inquiry(state=InquiryState.REJECTED))

        service.customer_reject_inquiry("INQ1")

        assert service.get_data("INQ1").state == InquiryState.CUSTOMER_REJECTED
        assert published == []

    def test_send_quote_reprices_and_completes(self, inquiries):
        service, published = inquiries
        service.on_message(make_inquiry(state=InquiryState.REJECTED))

        result = service.send_quote("INQ1", Decimal("99.75"))

        assert result.price == Decimal("99.75")
        assert result.state == InquiryState.DONE
        assert published == [result]

    @pytest.mark.parametrize("action", ["reject_inquiry", "customer_reject_inquiry"])
    def test_unknown_inquiry(self, inquiries, action):
        service, _ = inquiries
        with pytest.raises(UnknownInquiryError):
            getattr(service, action)("NOPE")

    def test_send_quote_unknown_inquiry(self, inquiries):
        service, _ = inquiries
        with pytest.raises(UnknownInquiryError):
            service.send_quote("NOPE", Decimal("100"))


def test_inquiry_str():
    inquiry = make_inquiry()
    assert str(inquiry) == "T5Y INQ1 BUY 99-000 1000000 RECEIVED"
