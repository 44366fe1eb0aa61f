"""Keyed store and listener fan-out shared by every service."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum
from typing import Generic, TypeVar

from tsydesk.constants import ListenerErrorPolicy

logger = logging.getLogger(__name__)

V = TypeVar("V")


class EventKind(str, Enum):
    """Kind of change a listener is notified about."""

    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"


class ServiceListener(ABC, Generic[V]):
    """
    Receives events from a service.

    Only add events carry behaviour; remove and update default to no-ops.
    """

    @abstractmethod
    def process_add(self, data: V) -> None:
        """Handle a newly stored value."""

    def process_remove(self, data: V) -> None:
        pass

    def process_update(self, data: V) -> None:
        pass

    def process(self, kind: EventKind, data: V) -> None:
        """Dispatch an event of the given kind."""
        if kind == EventKind.ADD:
            self.process_add(data)
        elif kind == EventKind.REMOVE:
            self.process_remove(data)
        else:
            self.process_update(data)


class CallbackListener(ServiceListener[V]):
    """Adapts a plain callable into a listener."""

    def __init__(self, callback: Callable[[V], None]):
        self.callback = callback

    def process_add(self, data: V) -> None:
        self.callback(data)

    def __repr__(self) -> str:
        name = getattr(self.callback, "__qualname__", repr(self.callback))
        return f"CallbackListener({name})"


class KeyedStore(Generic[V]):
    """
    Latest-value store keyed by string, with ordered synchronous fan-out.

    A key always maps to the last value delivered for it. Listeners are
    notified in registration order, one after the other, before publish()
    returns.
    """

    def __init__(
        self,
        name: str,
        key_fn: Callable[[V], str],
        default_factory: Callable[[str], V],
        error_policy: ListenerErrorPolicy = ListenerErrorPolicy.PROPAGATE,
    ):
        self.name = name
        self.key_fn = key_fn
        self.default_factory = default_factory
        self.error_policy = error_policy
        self._data: dict[str, V] = {}
        self._listeners: list[ServiceListener[V]] = []

    def get_data(self, key: str) -> V:
        """Return the stored value for key, or a default value if unseen."""
        value = self._data.get(key)
        if value is None:
            return self.default_factory(key)
        return value

    def on_message(self, data: V) -> str:
        """Store data under its key, overwriting any previous value."""
        key = self.key_fn(data)
        self._data[key] = data
        return key

    def publish(self, data: V) -> None:
        """Store data, then notify every listener of the add."""
        key = self.on_message(data)
        logger.debug(f"{self.name}: stored {key}, notifying {len(self._listeners)} listener(s)")
        self.notify(EventKind.ADD, data)

    def notify(self, kind: EventKind, data: V) -> None:
        """Deliver an event to every listener in registration order."""
        for listener in self._listeners:
            if self.error_policy == ListenerErrorPolicy.PROPAGATE:
                listener.process(kind, data)
                continue

            try:
                listener.process(kind, data)
            except Exception as e:
                logger.error(
                    f"{self.name}: listener {listener!r} failed on {kind.value} event: {e}",
                    exc_info=True,
                )

    def add_listener(self, listener: ServiceListener[V]) -> None:
        """Register listener; notification order follows registration order."""
        self._listeners.append(listener)

    def get_listeners(self) -> tuple[ServiceListener[V], ...]:
        return tuple(self._listeners)

    def keys(self) -> list[str]:
        return list(self._data)

    def values(self) -> list[V]:
        return list(self._data.values())

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)
