"""Flat-file feed connectors.

Each connector turns one comma-separated record into one typed event and
hands it to its service. Bad records are logged and skipped; failures
raised downstream of the service are not caught here.
"""

from __future__ import annotations

import csv
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, TypeVar

from tsydesk.booking.models import Trade
from tsydesk.booking.service import TradeBookingService
from tsydesk.constants import BOOK_DEPTH, InquiryState, PricingSide, TradeSide
from tsydesk.errors import MalformedRecordError, UnknownTickerError
from tsydesk.inquiry.models import Inquiry
from tsydesk.inquiry.service import InquiryService
from tsydesk.marketdata.models import Order, OrderBook
from tsydesk.marketdata.service import MarketDataService
from tsydesk.pricing.models import Price
from tsydesk.pricing.service import PricingService
from tsydesk.reference.static_data import get_bond
from tsydesk.utils.price_format import parse_price

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRADE_SIDES = {"Buy": TradeSide.BUY, "Sell": TradeSide.SELL}


@dataclass
class FeedStats:
    """Counts for one pass over a feed."""

    read: int = 0
    ingested: int = 0
    skipped: int = 0


def parse_trade_side(text: str) -> TradeSide:
    try:
        return _TRADE_SIDES[text]
    except KeyError:
        raise ValueError(f"Invalid side: {text!r}") from None


def parse_quantity(text: str) -> int:
    quantity = int(text)
    if quantity < 0:
        raise ValueError(f"Negative quantity: {text!r}")
    return quantity


class FeedConnector(ABC, Generic[T]):
    """Reads a feed file and delivers each parsed record to a service."""

    name = "feed"
    field_count = 0

    @abstractmethod
    def parse(self, fields: list[str]) -> T:
        """Build an event from one record's fields."""

    @abstractmethod
    def deliver(self, event: T) -> None:
        """Hand an event to the service."""

    def parse_record(self, line_no: int, line: str) -> T:
        """
        Parse one raw line.

        Raises:
            MalformedRecordError: If the line cannot be turned into an event.
        """
        fields = [f.strip() for f in next(csv.reader([line]))]
        if len(fields) != self.field_count:
            raise MalformedRecordError(
                line_no, line, f"expected {self.field_count} fields, got {len(fields)}"
            )
        try:
            return self.parse(fields)
        except UnknownTickerError as e:
            raise MalformedRecordError(line_no, line, str(e)) from e
        except (ValueError, ArithmeticError) as e:
            raise MalformedRecordError(line_no, line, str(e)) from e

    def consume_lines(self, lines: Iterable[str]) -> FeedStats:
        """Parse and deliver lines in order, skipping malformed ones."""
        stats = FeedStats()
        for line_no, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r\n")
            if not line.strip():
                continue

            stats.read += 1
            try:
                event = self.parse_record(line_no, line)
            except MalformedRecordError as e:
                logger.warning(f"{self.name}: skipping record: {e}")
                stats.skipped += 1
                continue

            self.deliver(event)
            stats.ingested += 1

        return stats

    def consume(self, path: str | Path) -> FeedStats:
        """
        Consume a whole feed file.

        Raises:
            FileNotFoundError: If the feed file doesn't exist.
        """
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Feed file not found: {file_path}")

        logger.info(f"{self.name}: consuming {file_path}")
        with open(file_path, encoding="utf-8", newline="") as f:
            stats = self.consume_lines(f)

        logger.info(
            f"{self.name}: read {stats.read}, ingested {stats.ingested}, skipped {stats.skipped}"
        )
        return stats


class PriceConnector(FeedConnector[Price]):
    """`ticker,bid,offer`"""

    name = "prices"
    field_count = 3

    def __init__(self, service: PricingService):
        self.service = service

    def parse(self, fields: list[str]) -> Price:
        ticker, bid_text, offer_text = fields
        bid = parse_price(bid_text)
        offer = parse_price(offer_text)
        if offer < bid:
            raise ValueError(f"Offer {offer_text} below bid {bid_text}")
        return Price(get_bond(ticker), (bid + offer) / 2, offer - bid)

    def deliver(self, event: Price) -> None:
        self.service.on_message(event)


class TradeConnector(FeedConnector[Trade]):
    """`ticker,tradeId,Buy|Sell,price,quantity,book`"""

    name = "trades"
    field_count = 6

    def __init__(self, service: TradeBookingService):
        self.service = service

    def parse(self, fields: list[str]) -> Trade:
        ticker, trade_id, side, price, quantity, book = fields
        if not trade_id or not book:
            raise ValueError("Trade id and book are required")
        return Trade(
            product=get_bond(ticker),
            trade_id=trade_id,
            price=parse_price(price),
            book=book,
            quantity=parse_quantity(quantity),
            side=parse_trade_side(side),
        )

    def deliver(self, event: Trade) -> None:
        self.service.book_trade(event)


class MarketDataConnector(FeedConnector[OrderBook]):
    """`ticker` followed by five `bidPrice,bidQty` then five `offerPrice,offerQty` pairs."""

    name = "market_data"

    def __init__(self, service: MarketDataService, depth: int = BOOK_DEPTH):
        self.service = service
        self.depth = depth
        self.field_count = 1 + 4 * depth

    def _stack(self, fields: list[str], side: PricingSide) -> tuple[Order, ...]:
        return tuple(
            Order(parse_price(fields[i]), parse_quantity(fields[i + 1]), side)
            for i in range(0, len(fields), 2)
        )

    def parse(self, fields: list[str]) -> OrderBook:
        ticker = fields[0]
        split = 1 + 2 * self.depth
        return OrderBook(
            get_bond(ticker),
            self._stack(fields[1:split], PricingSide.BID),
            self._stack(fields[split:], PricingSide.OFFER),
        )

    def deliver(self, event: OrderBook) -> None:
        self.service.on_message(event)


class InquiryConnector(FeedConnector[Inquiry]):
    """`ticker,inquiryId,Buy|Sell,price,quantity,state`"""

    name = "inquiries"
    field_count = 6

    def __init__(self, service: InquiryService):
        self.service = service

    def parse(self, fields: list[str]) -> Inquiry:
        ticker, inquiry_id, side, price, quantity, state = fields
        if not inquiry_id:
            raise ValueError("Inquiry id is required")
        return Inquiry(
            inquiry_id=inquiry_id,
            product=get_bond(ticker),
            side=parse_trade_side(side),
            quantity=parse_quantity(quantity),
            price=parse_price(price),
            state=InquiryState(state),
        )

    def deliver(self, event: Inquiry) -> None:
        self.service.on_message(event)
