# v2pager/core/__init__.py
from .event_bus import EventBus
from .count_sinks import EventBusCountSink, NullCountSink, RecordingCountSink
from .loaded_state import LoadedState
from .page_sequencer import PageSequencer
from .paging_session import PagingSession
from .html_sanitizer import HtmlSanitizer, ImageSize, decode_cloaked_email, encode_cloaked_email
from .v2ex_listings import V2exListingClient

__all__ = [
    "EventBus",
    "EventBusCountSink",
    "NullCountSink",
    "RecordingCountSink",
    "LoadedState",
    "PageSequencer",
    "PagingSession",
    "HtmlSanitizer",
    "ImageSize",
    "decode_cloaked_email",
    "encode_cloaked_email",
    "V2exListingClient",
]

"""
Core components for the v2pager package.
"""
