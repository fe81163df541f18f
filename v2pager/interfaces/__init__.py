# v2pager/interfaces/__init__.py
from .paging_source import (
    FIRST_PAGE,
    FetchCapability,
    ListingPage,
    LoadResult,
    PageKey,
    PageWindow,
)
from .count_sink import CountSink
from .event_bus import EventBus

__all__ = [
    "FIRST_PAGE",
    "FetchCapability",
    "ListingPage",
    "LoadResult",
    "PageKey",
    "PageWindow",
    "CountSink",
    "EventBus",
]
