# v2pager/events.py

from enum import Enum


class EventType(Enum):
    """Events published while paging a listing."""

    # Page loading
    PAGE_LOAD_STARTED = "page_load_started"
    PAGE_LOADED = "page_loaded"
    PAGE_LOAD_FAILED = "page_load_failed"

    # Side channel reported by the server alongside a page
    UNREAD_COUNT_UPDATED = "unread_count_updated"

    # Session lifecycle
    SESSION_REFRESHED = "session_refreshed"
    SESSION_INVALIDATED = "session_invalidated"
