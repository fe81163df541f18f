# v2pager/core/loaded_state.py

import logging
from typing import Generic, Iterator, List, Optional, Tuple, TypeVar

from ..interfaces.paging_source import PageKey, PageWindow

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LoadedState(Generic[T]):
    """
    The pages loaded so far in one paging session, in display order.

    Each window is stored with the key that fetched it. Inserting a key that
    is already present replaces that window where it stands.
    """

    def __init__(self, leading_placeholders: int = 0):
        self._entries: List[Tuple[PageKey, PageWindow[T]]] = []
        # Items the UI shows before the first loaded page (unloaded rows)
        self.leading_placeholders = leading_placeholders

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Tuple[PageKey, PageWindow[T]]]:
        return iter(list(self._entries))

    def _index_of(self, key: PageKey) -> Optional[int]:
        for index, (entry_key, _) in enumerate(self._entries):
            if entry_key == key:
                return index
        return None

    def insert(self, key: PageKey, window: PageWindow[T], prepend: bool = False) -> None:
        """Add a window, or replace the existing window for ``key`` in place."""
        index = self._index_of(key)
        if index is not None:
            self._entries[index] = (key, window)
            logger.debug(f"Replaced page {key} in loaded state")
        elif prepend:
            self._entries.insert(0, (key, window))
        else:
            self._entries.append((key, window))

    def get(self, key: PageKey) -> Optional[PageWindow[T]]:
        index = self._index_of(key)
        return self._entries[index][1] if index is not None else None

    def keys(self) -> List[PageKey]:
        return [key for key, _ in self._entries]

    def windows(self) -> List[PageWindow[T]]:
        return [window for _, window in self._entries]

    def first(self) -> Optional[Tuple[PageKey, PageWindow[T]]]:
        return self._entries[0] if self._entries else None

    def last(self) -> Optional[Tuple[PageKey, PageWindow[T]]]:
        return self._entries[-1] if self._entries else None

    def items(self) -> List[T]:
        """All loaded items flattened in display order."""
        return [item for _, window in self._entries for item in window.items]

    def item_count(self) -> int:
        return sum(len(window.items) for _, window in self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self.leading_placeholders = 0

    def closest_page_to_position(self, anchor: int) -> Optional[PageWindow[T]]:
        """
        Find the loaded page whose items contain ``anchor``, or the nearest one.

        ``anchor`` indexes the UI's list, which starts with
        ``leading_placeholders`` rows that belong to no loaded page. Positions
        before the first item resolve to the first non-empty page and positions
        past the last item to the last non-empty page. Returns None when no
        loaded page has any items.
        """
        non_empty = [window for _, window in self._entries if window.items]
        if not non_empty:
            return None

        index = anchor - self.leading_placeholders
        if index < 0:
            return non_empty[0]

        for _, window in self._entries:
            if index < len(window.items):
                return window
            index -= len(window.items)

        return non_empty[-1]
