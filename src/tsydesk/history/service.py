"""Append-only sinks: historical persistence and the throttled GUI feed."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, Generic, TypeVar

from tsydesk.constants import DEFAULT_GUI_MAX_UPDATES, DEFAULT_GUI_THROTTLE_MS, ListenerErrorPolicy
from tsydesk.core.service import KeyedStore, ServiceListener
from tsydesk.utils.timestamps import current_timestamp, epoch_millis

logger = logging.getLogger(__name__)

V = TypeVar("V")


def _ticker_key(data: Any) -> str:
    return data.ticker


def append_record(path: Path, record: str) -> None:
    """Append one `timestamp, record` line to path, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        f.write(f"{current_timestamp()}, {record}\n")


class HistoricalDataListener(ServiceListener[V]):
    """Persists everything its upstream service publishes."""

    def __init__(self, service: HistoricalDataService[V]):
        self.service = service

    def process_add(self, data: V) -> None:
        self.service.persist_data(data)


class HistoricalDataService(Generic[V]):
    """
    Keeps the latest value per key and appends every value to a file.

    Lines are written in call order, one per value, with no batching.
    """

    def __init__(
        self,
        file_path: str | Path,
        default_factory: Callable[[str], V],
        key_fn: Callable[[V], str] = _ticker_key,
        error_policy: ListenerErrorPolicy = ListenerErrorPolicy.PROPAGATE,
    ):
        self.file_path = Path(file_path)
        self.store: KeyedStore[V] = KeyedStore(
            f"history:{self.file_path.name}",
            key_fn=key_fn,
            default_factory=default_factory,
            error_policy=error_policy,
        )
        self.listener = HistoricalDataListener(self)
        self.records_written = 0

    def get_data(self, key: str) -> V:
        return self.store.get_data(key)

    def on_message(self, data: V) -> None:
        self.store.on_message(data)

    def add_listener(self, listener: ServiceListener[V]) -> None:
        self.store.add_listener(listener)

    def get_listeners(self) -> tuple[ServiceListener[V], ...]:
        return self.store.get_listeners()

    def persist_data(self, data: V) -> None:
        """Record data as the latest for its key and append it to the file."""
        self.on_message(data)
        append_record(self.file_path, str(data))
        self.records_written += 1


class GUIListener(ServiceListener[V]):
    """Forwards at most one update per throttle interval, up to a fixed count."""

    def __init__(self, service: GUIService[V], clock: Callable[[], int] = epoch_millis):
        self.service = service
        self.clock = clock
        self.last_accepted_ms: int | None = None

    def process_add(self, data: V) -> None:
        if self.service.is_full:
            return

        now = self.clock()
        # The first update is always accepted
        if self.last_accepted_ms is not None:
            if now - self.last_accepted_ms < self.service.throttle_ms:
                return

        self.last_accepted_ms = now
        self.service.persist_data(data)


class GUIService(Generic[V]):
    """Snapshot file for a display, fed through a throttling listener."""

    def __init__(
        self,
        file_path: str | Path,
        throttle_ms: int = DEFAULT_GUI_THROTTLE_MS,
        max_updates: int = DEFAULT_GUI_MAX_UPDATES,
        clock: Callable[[], int] = epoch_millis,
    ):
        self.file_path = Path(file_path)
        self.throttle_ms = throttle_ms
        self.max_updates = max_updates
        self.listener = GUIListener(self, clock)
        self.updates_written = 0

    @property
    def is_full(self) -> bool:
        return self.updates_written >= self.max_updates

    def persist_data(self, data: V) -> None:
        append_record(self.file_path, str(data))
        self.updates_written += 1
        if self.is_full:
            logger.info(f"GUI feed reached {self.max_updates} updates, further updates dropped")
