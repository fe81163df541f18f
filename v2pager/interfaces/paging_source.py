# v2pager/interfaces/paging_source.py

"""Types shared by everything that pages a remote listing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, Sequence, TypeVar, Union

from ..errors import FetchError

T = TypeVar("T")

FIRST_PAGE = 1

# Listings on the forum are 1-based integer pages.
PageKey = int


@dataclass(frozen=True, slots=True)
class ListingPage(Generic[T]):
    """What one remote fetch returns, before any key derivation."""

    items: Sequence[T]
    total_item_count: int
    # Out-of-band count reported with the page (e.g. unread notifications)
    side_channel_count: Optional[int] = None


@dataclass(frozen=True, slots=True)
class PageWindow(Generic[T]):
    """A loaded page of items plus its continuation keys."""

    items: Sequence[T]
    previous_key: Optional[PageKey]    # None only on the first page
    next_key: Optional[PageKey]        # None only on the last page

    # ------------- helpers -------------
    def own_key(self) -> Optional[PageKey]:
        """Key this window was loaded with, recovered from its neighbours."""
        if self.previous_key is not None:
            return self.previous_key + 1
        if self.next_key is not None:
            return self.next_key - 1
        return None

    def is_first(self) -> bool:
        return self.previous_key is None

    def is_last(self) -> bool:
        return self.next_key is None


# A fetch capability returns the listing page for a key, either directly or
# as an awaitable.
FetchCapability = Callable[[PageKey], Union[ListingPage, Awaitable[ListingPage]]]

LoadResult = Union[PageWindow, FetchError]
