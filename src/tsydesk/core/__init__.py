"""Service framework: keyed stores and listener fan-out."""

from tsydesk.core.service import CallbackListener, EventKind, KeyedStore, ServiceListener

__all__ = [
    "CallbackListener",
    "EventKind",
    "KeyedStore",
    "ServiceListener",
]
