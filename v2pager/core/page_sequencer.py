# File: v2pager/core/page_sequencer.py

import asyncio
import inspect
import logging
from typing import Generic, Optional, TypeVar

from ..config import PagingOptions
from ..errors import FetchError
from ..events import EventType
from ..interfaces.count_sink import CountSink
from ..interfaces.event_bus import EventBus as EventBusInterface
from ..interfaces.paging_source import (
    FetchCapability,
    ListingPage,
    LoadResult,
    PageKey,
    PageWindow,
)
from .loaded_state import LoadedState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PageSequencer(Generic[T]):
    """
    Turns a page-oriented listing API into keyed pages with continuation keys.

    One sequencer wraps one fetch capability (notifications, member topics,
    search results, ...). It keeps no page cache of its own: the caller owns
    the LoadedState and passes it back in for refresh-key derivation.
    """

    def __init__(
        self,
        fetch: FetchCapability,
        options: Optional[PagingOptions] = None,
        count_sink: Optional[CountSink] = None,
        event_bus: Optional[EventBusInterface] = None,
        name: str = "listing",
    ):
        """
        Args:
            fetch: Callable taking a page key and returning a ListingPage,
                either directly or as an awaitable. Plain callables run in a
                worker thread so they don't block the event loop.
            options: Page size and first page; defaults to PagingOptions()
            count_sink: Receives the side-channel count of successful fetches
            event_bus: Optional bus for load progress events
            name: Listing name used in logs and events
        """
        self.fetch = fetch
        self.options = options or PagingOptions()
        self.count_sink = count_sink
        self.event_bus = event_bus
        self.name = name
        logger.debug(f"PageSequencer for '{name}' initialized with {self.options}")

    @property
    def first_page(self) -> PageKey:
        return self.options.first_page

    def page_count(self, total_item_count: int) -> int:
        """Number of pages needed for ``total_item_count`` items, rounded up."""
        if total_item_count <= 0:
            return 0
        return -(-total_item_count // self.options.items_per_page)

    def window_for(self, page: PageKey, listing: ListingPage[T]) -> PageWindow[T]:
        """Build the PageWindow for ``page`` from a fetched listing page."""
        page_count = self.page_count(listing.total_item_count)
        previous_key = page - 1 if page > self.first_page else None
        next_key = page + 1 if page < page_count else None
        return PageWindow(items=list(listing.items), previous_key=previous_key, next_key=next_key)

    async def _call_fetch(self, page: PageKey) -> ListingPage[T]:
        if inspect.iscoroutinefunction(self.fetch):
            return await self.fetch(page)
        result = await asyncio.to_thread(self.fetch, page)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _publish(self, event_type: EventType, **data) -> None:
        if self.event_bus:
            self.event_bus.publish(event_type, listing=self.name, **data)

    async def load(self, key: Optional[PageKey] = None) -> LoadResult:
        """
        Fetch one page and derive its previous/next keys.

        A missing key loads the first page. Every failure of the fetch path
        is logged and returned as a FetchError; nothing but cancellation
        escapes. A cancelled load forwards no count and publishes nothing.
        """
        page = key if key is not None else self.first_page
        self._publish(EventType.PAGE_LOAD_STARTED, page=page)

        try:
            listing = await self._call_fetch(page)
            if not isinstance(listing, ListingPage):
                raise TypeError(f"Fetch returned {type(listing).__name__}, expected ListingPage")
            window = self.window_for(page, listing)
        except Exception as e:
            logger.error(f"Failed to load page {page} of '{self.name}': {e}", exc_info=True)
            error = FetchError(page, e)
            self._publish(EventType.PAGE_LOAD_FAILED, page=page, error=str(error))
            return error

        if listing.side_channel_count is not None:
            self._forward_count(listing.side_channel_count)

        logger.info(
            f"Loaded page {page} of '{self.name}': {len(window.items)} items, "
            f"prev={window.previous_key}, next={window.next_key}"
        )
        self._publish(
            EventType.PAGE_LOADED,
            page=page,
            items=len(window.items),
            previous_key=window.previous_key,
            next_key=window.next_key,
        )
        return window

    def load_sync(self, key: Optional[PageKey] = None) -> LoadResult:
        """Blocking wrapper around load() for scripts and the CLI."""
        return asyncio.run(self.load(key))

    def _forward_count(self, count: int) -> None:
        if self.count_sink is None:
            return
        try:
            self.count_sink.update(count)
        except Exception as e:
            # The count is a side channel; the page itself loaded fine
            logger.warning(f"Count sink rejected count {count} for '{self.name}': {e}")

    def refresh_key(self, loaded: LoadedState[T], anchor: Optional[int]) -> Optional[PageKey]:
        """
        Key to reload from after the visible list was invalidated.

        Picks the loaded page closest to ``anchor`` and recovers that page's
        own key from its neighbours: previous_key + 1 when it has a previous
        page, else next_key - 1. Returns None without an anchor, without a
        loaded page near it, or when that page is the only page.
        """
        if anchor is None:
            return None

        window = loaded.closest_page_to_position(anchor)
        if window is None:
            return None

        if window.previous_key is not None:
            return window.previous_key + 1
        if window.next_key is not None:
            return window.next_key - 1
        return None
