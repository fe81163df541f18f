# v2pager/core/event_bus.py

import logging
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Set
from ..interfaces.event_bus import EventBus as EventBusInterface
from ..events import EventType

logger = logging.getLogger(__name__)


class Subscription(NamedTuple):
    callback: Callable[..., Any]
    listing: Optional[str]

    def wants(self, data: Dict[str, Any]) -> bool:
        return self.listing is None or data.get("listing") == self.listing


class EventBus(EventBusInterface):
    """
    In-process event bus used by the sequencer, sessions and count sinks.

    Every paging event carries the ``listing`` it came from. A subscription
    made with ``listing=`` only sees that listing's events, so one bus can be
    shared by several sequencers. Listener errors are logged and never reach
    the publisher, so a broken UI callback cannot fail a page load.
    """

    def __init__(self, debug_logging: bool = False):
        """
        Args:
            debug_logging: Whether to log every published event
        """
        self.subscriptions: Dict[EventType, List[Subscription]] = {}
        self.debug_logging = debug_logging

    def subscribe(self, event_type: EventType, callback: Callable[..., Any], listing: Optional[str] = None) -> None:
        subscription = Subscription(callback, listing)
        subscriptions = self.subscriptions.setdefault(event_type, [])
        if subscription not in subscriptions:
            subscriptions.append(subscription)
            scope = f" for listing '{listing}'" if listing else ""
            logger.debug(f"Subscribed to event '{event_type.name}'{scope}")

    def unsubscribe(self, event_type: EventType, callback: Callable[..., Any], listing: Optional[str] = None) -> bool:
        subscription = Subscription(callback, listing)
        if subscription in self.subscriptions.get(event_type, []):
            self.subscriptions[event_type].remove(subscription)
            logger.debug(f"Unsubscribed from event '{event_type.name}'")
            return True
        return False

    def publish(self, event_type: EventType, **data: Any) -> None:
        if self.debug_logging:
            logger.debug(f"Event published: {event_type.name} - {data}")

        event_data = {"event_type": event_type, **data}

        # Copy so a callback may unsubscribe itself while being notified
        for subscription in list(self.subscriptions.get(event_type, [])):
            if not subscription.wants(data):
                continue
            try:
                subscription.callback(**event_data)
            except Exception as e:
                logger.error(f"Error in event handler for '{event_type.name}': {e}")

    def get_event_types(self) -> Set[EventType]:
        return {event_type for event_type, subscriptions in self.subscriptions.items() if subscriptions}

    def get_subscriber_count(self, event_type: EventType, listing: Optional[str] = None) -> int:
        subscriptions = self.subscriptions.get(event_type, [])
        if listing is None:
            return len(subscriptions)
        return sum(1 for s in subscriptions if s.listing in (None, listing))

    def clear_all_subscriptions(self) -> None:
        self.subscriptions.clear()
        logger.debug("Cleared all event subscriptions")
