"""Sample feed generator.

Writes the four input feeds in the layouts the connectors read, seeded so
the same arguments always produce the same files.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

from tsydesk.constants import BOOK_DEPTH, DEFAULT_BOOKS, PRICE_TICK, InquiryState
from tsydesk.reference.static_data import all_tickers
from tsydesk.utils.price_format import format_price

logger = logging.getLogger(__name__)

# Prices oscillate between 99 and 101 in 1/256 steps
LOW_PRICE = Decimal("99")
HIGH_PRICE = Decimal("101")

# Spreads cycle through 1/128, 1/64, 3/128, 1/32 and back
SPREAD_TICKS = (2, 4, 6, 8, 6, 4)

TRADE_QUANTITIES = (1_000_000, 2_000_000, 3_000_000, 4_000_000, 5_000_000)


@dataclass
class GeneratedFeeds:
    """Paths of the feed files written by generate_feeds()."""

    prices: Path
    trades: Path
    market_data: Path
    inquiries: Path


class FeedGenerator:
    """Generates realistic sample feeds for every ticker in the bond master."""

    def __init__(self, seed: int = 0, tickers: list[str] | None = None):
        self.rng = random.Random(seed)
        self.tickers = tickers or all_tickers()

    def _walk(self, count: int) -> list[Decimal]:
        """Mid prices bouncing between LOW_PRICE and HIGH_PRICE."""
        mids = []
        mid = LOW_PRICE + PRICE_TICK * self.rng.randint(1, 255)
        step = PRICE_TICK
        for _ in range(count):
            mids.append(mid)
            if mid + step >= HIGH_PRICE or mid + step <= LOW_PRICE:
                step = -step
            mid += step
        return mids

    def price_lines(self, per_ticker: int) -> list[str]:
        """`ticker,bid,offer` records."""
        lines = []
        for ticker in self.tickers:
            for i, mid in enumerate(self._walk(per_ticker)):
                half = PRICE_TICK * (1 if i % 2 == 0 else 2)
                lines.append(f"{ticker},{format_price(mid - half)},{format_price(mid + half)}")
        return lines

    def trade_lines(self, per_ticker: int) -> list[str]:
        """`ticker,tradeId,Buy|Sell,price,quantity,book` records."""
        lines = []
        for ticker in self.tickers:
            for i in range(per_ticker):
                side = "Buy" if i % 2 == 0 else "Sell"
                price = Decimal("99") if side == "Buy" else Decimal("100")
                trade_id = "".join(self.rng.choices("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789", k=12))
                quantity = TRADE_QUANTITIES[i % len(TRADE_QUANTITIES)]
                book = DEFAULT_BOOKS[i % len(DEFAULT_BOOKS)]
                lines.append(f"{ticker},{trade_id},{side},{format_price(price)},{quantity},{book}")
        return lines

    def market_data_lines(self, per_ticker: int) -> list[str]:
        """`ticker` then BOOK_DEPTH bid levels then BOOK_DEPTH offer levels."""
        lines = []
        for ticker in self.tickers:
            for i, mid in enumerate(self._walk(per_ticker)):
                half = PRICE_TICK * SPREAD_TICKS[i % len(SPREAD_TICKS)] / 2
                bids = []
                offers = []
                for level in range(BOOK_DEPTH):
                    size = 10_000_000 * (level + 1)
                    bids.append(f"{format_price(mid - half - PRICE_TICK * level)},{size}")
                    offers.append(f"{format_price(mid + half + PRICE_TICK * level)},{size}")
                lines.append(",".join([ticker, *bids, *offers]))
        return lines

    def inquiry_lines(self, per_ticker: int) -> list[str]:
        """`ticker,inquiryId,Buy|Sell,price,quantity,state` records, all RECEIVED."""
        lines = []
        for ticker in self.tickers:
            for i in range(per_ticker):
                side = "Buy" if i % 2 == 0 else "Sell"
                price = Decimal("99") if side == "Buy" else Decimal("100")
                inquiry_id = "".join(self.rng.choices("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789", k=12))
                quantity = TRADE_QUANTITIES[i % len(TRADE_QUANTITIES)]
                lines.append(
                    f"{ticker},{inquiry_id},{side},{format_price(price)},{quantity},"
                    f"{InquiryState.RECEIVED.value}"
                )
        return lines


def _write_lines(path: Path, lines: list[str]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    logger.info(f"Wrote {len(lines)} records to {path}")
    return path


def generate_feeds(
    data_dir: str | Path,
    *,
    prices: int = 100,
    trades: int = 10,
    market_data: int = 100,
    inquiries: int = 10,
    seed: int = 0,
    file_names: dict[str, str] | None = None,
) -> GeneratedFeeds:
    """
    Write all four sample feeds under data_dir.

    Args:
        data_dir: Output directory, created if missing.
        prices: Price records per ticker.
        trades: Trade records per ticker.
        market_data: Order book records per ticker.
        inquiries: Inquiry records per ticker.
        seed: Random seed for ids and starting prices.
        file_names: Optional overrides keyed by prices/trades/market_data/inquiries.

    Returns:
        Paths of the written files.
    """
    names = {
        "prices": "prices.txt",
        "trades": "trades.txt",
        "market_data": "marketdata.txt",
        "inquiries": "inquiries.txt",
    }
    names.update(file_names or {})

    root = Path(data_dir)
    generator = FeedGenerator(seed=seed)
    return GeneratedFeeds(
        prices=_write_lines(root / names["prices"], generator.price_lines(prices)),
        trades=_write_lines(root / names["trades"], generator.trade_lines(trades)),
        market_data=_write_lines(root / names["market_data"], generator.market_data_lines(market_data)),
        inquiries=_write_lines(root / names["inquiries"], generator.inquiry_lines(inquiries)),
    )
