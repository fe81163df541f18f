# File: v2pager/core/paging_session.py

import logging
from typing import Generic, List, Optional, TypeVar

from ..errors import FetchError
from ..events import EventType
from ..interfaces.paging_source import LoadResult, PageKey, PageWindow
from .loaded_state import LoadedState
from .page_sequencer import PageSequencer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PagingSession(Generic[T]):
    """
    Drives a PageSequencer for one screen's worth of infinite scrolling.

    The session owns the LoadedState: forward loads append, backward loads
    prepend, so ``items()`` is always in display order. A failed or
    cancelled load leaves the state exactly as it was.
    """

    def __init__(self, sequencer: PageSequencer[T]):
        self.sequencer = sequencer
        self.state: LoadedState[T] = LoadedState()
        self.last_error: Optional[FetchError] = None

    @property
    def has_next(self) -> bool:
        last = self.state.last()
        return last is not None and last[1].next_key is not None

    @property
    def has_previous(self) -> bool:
        first = self.state.first()
        return first is not None and first[1].previous_key is not None

    def items(self) -> List[T]:
        return self.state.items()

    async def _load_into_state(self, key: Optional[PageKey], prepend: bool = False) -> LoadResult:
        page = key if key is not None else self.sequencer.first_page
        result = await self.sequencer.load(page)
        if isinstance(result, FetchError):
            self.last_error = result
            return result

        self.last_error = None
        self.state.insert(page, result, prepend=prepend)
        return result

    async def load_initial(self, key: Optional[PageKey] = None) -> LoadResult:
        """Start the session at ``key`` (first page when omitted)."""
        return await self._reload(key)

    async def load_next(self) -> Optional[LoadResult]:
        """Append the page after the last loaded one. None at the end of the listing."""
        last = self.state.last()
        if last is None:
            return await self.load_initial()
        next_key = last[1].next_key
        if next_key is None:
            logger.debug(f"'{self.sequencer.name}' has no page after {last[0]}")
            return None
        return await self._load_into_state(next_key)

    async def load_previous(self) -> Optional[LoadResult]:
        """Prepend the page before the first loaded one. None at the start of the listing."""
        first = self.state.first()
        if first is None:
            return None
        previous_key = first[1].previous_key
        if previous_key is None:
            return None
        return await self._load_into_state(previous_key, prepend=True)

    async def refresh(self, anchor: Optional[int] = None) -> LoadResult:
        """
        Reload around the page the user is looking at.

        The key comes from PageSequencer.refresh_key, so it is derived
        before the current pages are dropped. The old pages are kept if the
        reload fails.
        """
        key = self.sequencer.refresh_key(self.state, anchor)
        logger.info(f"Refreshing '{self.sequencer.name}' at anchor={anchor} -> key={key}")

        result = await self._reload(key)
        if not isinstance(result, FetchError) and self.sequencer.event_bus:
            self.sequencer.event_bus.publish(
                EventType.SESSION_REFRESHED,
                listing=self.sequencer.name,
                page=key if key is not None else self.sequencer.first_page,
            )
        return result

    async def _reload(self, key: Optional[PageKey]) -> LoadResult:
        page = key if key is not None else self.sequencer.first_page
        result = await self.sequencer.load(page)
        if isinstance(result, FetchError):
            self.last_error = result
            return result

        self.last_error = None
        self.state.clear()
        self.state.insert(page, result)
        return result

    def invalidate(self) -> None:
        """Forget every loaded page, e.g. when the screen is closed."""
        self.state.clear()
        self.last_error = None
        if self.sequencer.event_bus:
            self.sequencer.event_bus.publish(EventType.SESSION_INVALIDATED, listing=self.sequencer.name)

    def window(self, key: PageKey) -> Optional[PageWindow[T]]:
        return self.state.get(key)
