"""Execution service: routes algo orders to a venue."""

from __future__ import annotations

import logging

from tsydesk.constants import DEFAULT_VENUE, ListenerErrorPolicy, Market
from tsydesk.core.service import KeyedStore, ServiceListener
from tsydesk.execution.models import AlgoExecution, ExecutionOrder

logger = logging.getLogger(__name__)


class ExecutionListener(ServiceListener[AlgoExecution]):
    """Subscribes the execution service to the algo."""

    def __init__(self, service: ExecutionService):
        self.service = service

    def process_add(self, data: AlgoExecution) -> None:
        self.service.execute_order(data.execution_order, self.service.venue)


class ExecutionService:
    """Keyed on ticker."""

    def __init__(
        self,
        venue: Market = DEFAULT_VENUE,
        error_policy: ListenerErrorPolicy = ListenerErrorPolicy.PROPAGATE,
    ):
        self.venue = venue
        self.store: KeyedStore[ExecutionOrder] = KeyedStore(
            "execution",
            key_fn=lambda o: o.ticker,
            default_factory=ExecutionOrder.empty,
            error_policy=error_policy,
        )
        self.listener = ExecutionListener(self)

    def get_data(self, key: str) -> ExecutionOrder:
        return self.store.get_data(key)

    def on_message(self, order: ExecutionOrder) -> None:
        self.store.publish(order)

    def add_listener(self, listener: ServiceListener[ExecutionOrder]) -> None:
        self.store.add_listener(listener)

    def get_listeners(self) -> tuple[ServiceListener[ExecutionOrder], ...]:
        return self.store.get_listeners()

    def execute_order(self, order: ExecutionOrder, market: Market) -> ExecutionOrder:
        """Route order to market and publish it."""
        routed = order.with_market(market)
        logger.debug(f"Executing {routed.order_id} on {market.value}")
        self.on_message(routed)
        return routed
