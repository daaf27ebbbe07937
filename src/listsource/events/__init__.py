from .bus import Event, EventBus, Subscription
from .source_events import (
    LoadCompletedEvent,
    LoadFailedEvent,
    ReloadRequestedEvent,
)

__all__ = [
    "Event",
    "EventBus",
    "LoadCompletedEvent",
    "LoadFailedEvent",
    "ReloadRequestedEvent",
    "Subscription",
]
