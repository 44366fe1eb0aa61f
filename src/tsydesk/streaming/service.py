"""Streaming service: publishes two-way prices produced by the algo."""

from __future__ import annotations

from tsydesk.constants import ListenerErrorPolicy
from tsydesk.core.service import KeyedStore, ServiceListener
from tsydesk.streaming.models import AlgoStream, PriceStream


class StreamingListener(ServiceListener[AlgoStream]):
    """Unwraps algo streams into the streaming service."""

    def __init__(self, service: StreamingService):
        self.service = service

    def process_add(self, data: AlgoStream) -> None:
        self.service.publish_price(data.price_stream)


class StreamingService:
    """Keyed on ticker. Pass-through stage between the algo and the sinks."""

    def __init__(self, error_policy: ListenerErrorPolicy = ListenerErrorPolicy.PROPAGATE):
        self.store: KeyedStore[PriceStream] = KeyedStore(
            "streaming",
            key_fn=lambda s: s.ticker,
            default_factory=PriceStream.empty,
            error_policy=error_policy,
        )
        self.listener = StreamingListener(self)

    def get_data(self, key: str) -> PriceStream:
        return self.store.get_data(key)

    def on_message(self, stream: PriceStream) -> None:
        self.store.publish(stream)

    def add_listener(self, listener: ServiceListener[PriceStream]) -> None:
        self.store.add_listener(listener)

    def get_listeners(self) -> tuple[ServiceListener[PriceStream], ...]:
        return self.store.get_listeners()

    def publish_price(self, stream: PriceStream) -> None:
        """Publish a two-way price."""
        self.on_message(stream)
