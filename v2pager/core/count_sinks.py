# v2pager/core/count_sinks.py

import logging
from typing import List, Optional

from ..events import EventType
from ..interfaces.count_sink import CountSink
from ..interfaces.event_bus import EventBus as EventBusInterface

logger = logging.getLogger(__name__)


class NullCountSink(CountSink):
    """Discards counts. Used when a listing reports nothing worth keeping."""

    def update(self, count: int) -> None:
        pass


class RecordingCountSink(CountSink):
    """Keeps the counts it was given; the last one is the current value."""

    def __init__(self):
        self.history: List[int] = []

    @property
    def last(self) -> Optional[int]:
        return self.history[-1] if self.history else None

    def update(self, count: int) -> None:
        self.history.append(count)


class EventBusCountSink(CountSink):
    """Publishes each count as an UNREAD_COUNT_UPDATED event."""

    def __init__(self, event_bus: EventBusInterface, listing: str = "notifications"):
        self.event_bus = event_bus
        self.listing = listing

    def update(self, count: int) -> None:
        logger.debug(f"Unread count from '{self.listing}': {count}")
        self.event_bus.publish(EventType.UNREAD_COUNT_UPDATED, count=count, listing=self.listing)
