"""TSYDesk main application: builds the service graph and replays the feeds."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from tsydesk.booking.service import TradeBookingService
from tsydesk.config_loader import AppConfig
from tsydesk.constants import LOG_FORMAT
from tsydesk.execution.algo import AlgoExecutionService
from tsydesk.execution.models import ExecutionOrder
from tsydesk.execution.service import ExecutionService
from tsydesk.feeds.connectors import (
    FeedConnector,
    FeedStats,
    InquiryConnector,
    MarketDataConnector,
    PriceConnector,
    TradeConnector,
)
from tsydesk.history.service import GUIService, HistoricalDataService
from tsydesk.inquiry.models import Inquiry
from tsydesk.inquiry.service import InquiryService
from tsydesk.marketdata.service import MarketDataService
from tsydesk.positions.models import Position
from tsydesk.positions.service import PositionService
from tsydesk.pricing.service import PricingService
from tsydesk.risk.models import PV01
from tsydesk.risk.service import RiskService
from tsydesk.streaming.algo import AlgoStreamingService
from tsydesk.streaming.models import PriceStream
from tsydesk.streaming.service import StreamingService

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Per-feed stats for one run. Feeds whose file is missing are absent."""

    feeds: dict[str, FeedStats] = field(default_factory=dict)

    @property
    def ingested(self) -> int:
        return sum(s.ingested for s in self.feeds.values())

    @property
    def skipped(self) -> int:
        return sum(s.skipped for s in self.feeds.values())


class TradingSystem:
    """
    Main application orchestrator.

    Wiring:
        prices:      Pricing -> AlgoStreaming -> Streaming -> history(streaming)
                     Pricing -> GUI
        trades:      TradeBooking -> Position -> history(positions)
                                     Position -> Risk -> history(risk)
        market data: MarketData -> AlgoExecution -> Execution -> history(executions)
                                                    Execution -> TradeBooking
        inquiries:   Inquiry -> history(inquiries)
    """

    def __init__(self, config: AppConfig | None = None):
        self.config = config or AppConfig()
        cfg = self.config
        policy = cfg.framework.listener_errors
        out = cfg.output_path

        # Services
        self.pricing = PricingService(error_policy=policy)
        self.algo_streaming = AlgoStreamingService(
            visible_quantity_unit=cfg.streaming.visible_quantity_unit,
            hidden_multiplier=cfg.streaming.hidden_multiplier,
            error_policy=policy,
        )
        self.streaming = StreamingService(error_policy=policy)
        self.market_data = MarketDataService(error_policy=policy)
        self.algo_execution = AlgoExecutionService(
            aggressiveness_threshold=cfg.algo_execution.aggressiveness_threshold,
            spread_tolerance=cfg.algo_execution.spread_tolerance,
            error_policy=policy,
        )
        self.execution = ExecutionService(venue=cfg.execution.venue, error_policy=policy)
        self.trade_booking = TradeBookingService(books=cfg.booking.books, error_policy=policy)
        self.positions = PositionService(error_policy=policy)
        self.risk = RiskService(error_policy=policy)
        self.inquiries = InquiryService(quote_price=cfg.inquiry.quote_price, error_policy=policy)

        # Sinks
        self.streaming_history = HistoricalDataService(
            out / cfg.history.streaming, PriceStream.empty, error_policy=policy
        )
        self.position_history = HistoricalDataService(
            out / cfg.history.positions, Position.empty, error_policy=policy
        )
        self.risk_history = HistoricalDataService(out / cfg.history.risk, PV01.empty, error_policy=policy)
        self.execution_history = HistoricalDataService(
            out / cfg.history.executions, ExecutionOrder.empty, error_policy=policy
        )
        self.inquiry_history = HistoricalDataService(
            out / cfg.history.inquiries,
            Inquiry.empty,
            key_fn=lambda i: i.inquiry_id,
            error_policy=policy,
        )
        self.gui = GUIService(
            out / cfg.gui.file_name,
            throttle_ms=cfg.gui.throttle_ms,
            max_updates=cfg.gui.max_updates,
        )

        self._wire()

        # Connectors
        self.connectors: dict[str, FeedConnector] = {
            "prices": PriceConnector(self.pricing),
            "trades": TradeConnector(self.trade_booking),
            "market_data": MarketDataConnector(self.market_data),
            "inquiries": InquiryConnector(self.inquiries),
        }

    def _wire(self) -> None:
        self.pricing.add_listener(self.algo_streaming.listener)
        self.algo_streaming.add_listener(self.streaming.listener)
        self.streaming.add_listener(self.streaming_history.listener)
        self.pricing.add_listener(self.gui.listener)

        self.trade_booking.add_listener(self.positions.listener)
        self.positions.add_listener(self.position_history.listener)
        self.positions.add_listener(self.risk.listener)
        self.risk.add_listener(self.risk_history.listener)

        self.market_data.add_listener(self.algo_execution.listener)
        self.algo_execution.add_listener(self.execution.listener)
        self.execution.add_listener(self.execution_history.listener)
        self.execution.add_listener(self.trade_booking.listener)

        self.inquiries.add_listener(self.inquiry_history.listener)

    def setup_logging(self) -> None:
        logging.basicConfig(level=self.config.environment.log_level.value, format=LOG_FORMAT)

    def feed_paths(self) -> dict[str, Path]:
        """Input file per feed, in replay order."""
        feeds = self.config.feeds
        root = self.config.data_path
        return {
            "prices": root / feeds.prices,
            "trades": root / feeds.trades,
            "market_data": root / feeds.market_data,
            "inquiries": root / feeds.inquiries,
        }

    def run(self) -> RunSummary:
        """Replay prices, trades, market data and inquiries, in that order."""
        summary = RunSummary()
        for name, path in self.feed_paths().items():
            if not path.exists():
                logger.warning(f"{name}: feed file {path} not found, skipping")
                continue
            summary.feeds[name] = self.connectors[name].consume(path)

        logger.info(f"Run complete: {summary.ingested} records ingested, {summary.skipped} skipped")
        return summary
