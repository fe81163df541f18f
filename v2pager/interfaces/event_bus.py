# v2pager/interfaces/event_bus.py

from typing import Any, Callable, Optional, Set
from ..events import EventType

class EventBus:
    """Interface for publishing paging events to interested listeners."""

    def subscribe(self, event_type: EventType, callback: Callable[..., Any], listing: Optional[str] = None) -> None:
        """
        Register a callback for an event type.

        Args:
            event_type: Type of event to subscribe to (EventType enum)
            callback: Function called with the event data as keyword arguments
            listing: Only deliver events published for this listing; None for all
        """
        raise NotImplementedError("Subclasses must implement this method")

    def unsubscribe(self, event_type: EventType, callback: Callable[..., Any], listing: Optional[str] = None) -> bool:
        """
        Remove a callback registered with the same ``listing``.

        Returns:
            True if the callback was registered, False otherwise
        """
        raise NotImplementedError("Subclasses must implement this method")

    def publish(self, event_type: EventType, **data: Any) -> None:
        """
        Publish an event to every subscriber of its type.

        Args:
            event_type: Type of event to publish (EventType enum)
            **data: Data associated with the event
        """
        raise NotImplementedError("Subclasses must implement this method")

    def get_event_types(self) -> Set[EventType]:
        """Event types that currently have subscribers."""
        raise NotImplementedError("Subclasses must implement this method")

    def get_subscriber_count(self, event_type: EventType, listing: Optional[str] = None) -> int:
        """Subscribers of ``event_type`` that would see an event for ``listing``."""
        raise NotImplementedError("Subclasses must implement this method")

    def clear_all_subscriptions(self) -> None:
        """Drop every subscription, e.g. when a paging session is closed."""
        raise NotImplementedError("Subclasses must implement this method")
