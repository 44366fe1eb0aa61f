"""Algo execution: crosses the spread when the book is tight enough."""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal

from tsydesk.constants import (
    DEFAULT_AGGRESSIVENESS_THRESHOLD,
    ListenerErrorPolicy,
    OrderType,
    PricingSide,
)
from tsydesk.core.service import KeyedStore, ServiceListener
from tsydesk.execution.models import AlgoExecution, ExecutionOrder, generate_order_id
from tsydesk.marketdata.models import OrderBook

logger = logging.getLogger(__name__)


class AlgoExecutionListener(ServiceListener[OrderBook]):
    """Subscribes the algo to the market data service."""

    def __init__(self, service: AlgoExecutionService):
        self.service = service

    def process_add(self, data: OrderBook) -> None:
        self.service.algo_execute_order(data)


class AlgoExecutionService:
    """
    Keyed on ticker.

    When best offer minus best bid equals the aggressiveness threshold, sends
    a market order for the full size at the top of one side. The side
    alternates bid, offer, bid... across firings for all tickers.

    With spread_tolerance == 0 the comparison is exact. Prices are Decimals
    parsed from 1/256 handle notation, so the difference is exact too.
    """

    def __init__(
        self,
        aggressiveness_threshold: Decimal = DEFAULT_AGGRESSIVENESS_THRESHOLD,
        spread_tolerance: Decimal = Decimal("0"),
        id_factory: Callable[[], str] = generate_order_id,
        error_policy: ListenerErrorPolicy = ListenerErrorPolicy.PROPAGATE,
    ):
        self.aggressiveness_threshold = aggressiveness_threshold
        self.spread_tolerance = spread_tolerance
        self.id_factory = id_factory
        self.store: KeyedStore[AlgoExecution] = KeyedStore(
            "algo_execution",
            key_fn=lambda a: a.ticker,
            default_factory=AlgoExecution.empty,
            error_policy=error_policy,
        )
        self.listener = AlgoExecutionListener(self)

        self.is_bid = True

    def get_data(self, key: str) -> AlgoExecution:
        return self.store.get_data(key)

    def on_message(self, execution: AlgoExecution) -> None:
        self.store.publish(execution)

    def add_listener(self, listener: ServiceListener[AlgoExecution]) -> None:
        self.store.add_listener(listener)

    def get_listeners(self) -> tuple[ServiceListener[AlgoExecution], ...]:
        return self.store.get_listeners()

    def is_aggressive(self, spread: Decimal) -> bool:
        if self.spread_tolerance == 0:
            return spread == self.aggressiveness_threshold
        return abs(spread - self.aggressiveness_threshold) <= self.spread_tolerance

    def algo_execute_order(self, book: OrderBook) -> AlgoExecution | None:
        """Fire an execution for book if its spread triggers the algo."""
        bid_offer = book.best_bid_offer()
        if bid_offer is None:
            logger.debug(f"No liquidity on {book.ticker}, skipping")
            return None

        if not self.is_aggressive(bid_offer.spread):
            return None

        top = bid_offer.bid_order if self.is_bid else bid_offer.offer_order
        side = PricingSide.BID if self.is_bid else PricingSide.OFFER
        self.is_bid = not self.is_bid

        execution = AlgoExecution(
            ExecutionOrder(
                product=book.product,
                side=side,
                order_id=self.id_factory(),
                order_type=OrderType.MARKET,
                price=top.price,
                visible_quantity=top.quantity,
                hidden_quantity=0,
            )
        )
        logger.debug(
            f"Algo execution {execution.execution_order.order_id}: {book.ticker} "
            f"{side.value} {top.quantity} @ {top.price}"
        )
        self.on_message(execution)
        return execution
