# File: v2pager/core/v2ex_listings.py

import logging
from typing import Callable, Mapping, Optional
from urllib.parse import quote, urljoin

from ..config import AppConfig, ClientOptions, LISTING_NAMES, LISTING_PAGE_SIZES
from ..errors import ConfigError
from ..interfaces.paging_source import ListingPage, PageKey
from ..utils import http_utils
from ..utils.html_parser import (
    NotificationItem,
    ReplyItem,
    TopicItem,
    parse_member_replies,
    parse_member_topics,
    parse_notifications,
)

logger = logging.getLogger(__name__)


class V2exListingClient:
    """
    Fetch capabilities for the forum's paged listings.

    Each method fetches one page and parses it into a ListingPage, so any of
    them can be handed to a PageSequencer. ``page_fetcher`` is injectable for
    tests and for callers with their own HTTP stack; it receives a URL and
    returns the page HTML. ``page_sizes`` overrides the site's page size per
    listing and must agree with the sequencer paging that listing.
    """

    def __init__(
        self,
        options: Optional[ClientOptions] = None,
        page_fetcher: Optional[Callable[[str], str]] = None,
        page_sizes: Optional[Mapping[str, int]] = None,
    ):
        self.options = options or ClientOptions()
        self.page_sizes = {**LISTING_PAGE_SIZES, **(page_sizes or {})}
        for name, size in self.page_sizes.items():
            if size < 1:
                raise ConfigError(f"Page size for '{name}' must be at least 1, got {size}")
        if not self.options.base_url.startswith(("http://", "https://")):
            raise ConfigError(f"base_url must be an http(s) URL, got {self.options.base_url!r}")
        self.page_fetcher = page_fetcher or self._fetch_with_curl
        logger.info(f"V2exListingClient initialized for {self.options.base_url}")

    @classmethod
    def from_config(cls, config: AppConfig, page_fetcher: Optional[Callable[[str], str]] = None) -> "V2exListingClient":
        """Build a client whose page sizes match ``config.paging_for``."""
        sizes = {name: config.paging_for(name).items_per_page for name in LISTING_NAMES}
        return cls(config.client, page_fetcher=page_fetcher, page_sizes=sizes)

    def _fetch_with_curl(self, url: str) -> str:
        return http_utils.fetch_page_content(
            url,
            cookie_file=self.options.cookie_file,
            max_retries=self.options.max_retries,
            retry_delay=self.options.retry_delay,
            timeout=self.options.timeout,
            impersonate=self.options.impersonate,
            referer=self.options.base_url,
        )

    def url_for(self, path: str, page: PageKey) -> str:
        return f"{urljoin(self.options.base_url.rstrip('/') + '/', path.lstrip('/'))}?p={page}"

    def notifications(self, page: PageKey) -> ListingPage[NotificationItem]:
        """Notifications of the signed-in account; reports the unread count."""
        html = self.page_fetcher(self.url_for("/notifications", page))
        return parse_notifications(html, self.page_sizes["notifications"])

    def member_topics(self, username: str) -> Callable[[PageKey], ListingPage[TopicItem]]:
        """Fetch capability for the topics created by ``username``."""
        path = f"/member/{quote(username)}/topics"
        per_page = self.page_sizes["topics"]

        def fetch(page: PageKey) -> ListingPage[TopicItem]:
            return parse_member_topics(self.page_fetcher(self.url_for(path, page)), per_page)

        return fetch

    def member_replies(self, username: str) -> Callable[[PageKey], ListingPage[ReplyItem]]:
        """Fetch capability for the replies written by ``username``."""
        path = f"/member/{quote(username)}/replies"
        per_page = self.page_sizes["replies"]

        def fetch(page: PageKey) -> ListingPage[ReplyItem]:
            return parse_member_replies(self.page_fetcher(self.url_for(path, page)), per_page)

        return fetch
