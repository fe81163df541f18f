# File: v2pager/utils/html_parser.py

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup

from ..errors import ParseError
from ..interfaces.paging_source import ListingPage

logger = logging.getLogger(__name__)

TOPIC_ID_RE = re.compile(r"/t/(\d+)")
REPLY_FLOOR_RE = re.compile(r"#reply(\d+)")
DIGITS_RE = re.compile(r"\d+")


@dataclass(frozen=True)
class NotificationItem:
    notification_id: str
    member: str
    avatar: Optional[str]
    title: str
    link: str
    action: str          # e.g. "在 ... 里回复了你", whitespace-normalised
    time: str
    content: str         # payload HTML, may be empty


@dataclass(frozen=True)
class TopicItem:
    topic_id: Optional[str]
    title: str
    link: str
    node: Optional[str]
    node_link: Optional[str]
    member: Optional[str]
    reply_count: int
    time: Optional[str]


@dataclass(frozen=True)
class ReplyItem:
    topic_id: Optional[str]
    title: str
    link: str
    floor: Optional[int]
    time: Optional[str]
    content: str         # reply HTML


# --- Small helpers ---

def _first_int(text: Optional[str]) -> Optional[int]:
    if not text:
        return None
    match = DIGITS_RE.search(text)
    return int(match.group()) if match else None


def _clean_text(tag) -> str:
    return " ".join(tag.get_text(" ", strip=True).split()) if tag else ""


def _topic_id(link: Optional[str]) -> Optional[str]:
    match = TOPIC_ID_RE.search(link or "")
    return match.group(1) if match else None


def _member_from_link(link: Optional[str]) -> Optional[str]:
    if link and link.startswith("/member/"):
        return link[len("/member/"):].split("/")[0] or None
    return None


def _page_max(soup: BeautifulSoup) -> Optional[int]:
    page_input = soup.select_one("input.page_input")
    return _first_int(page_input.get("max")) if page_input else None


def _total_from_page_max(soup: BeautifulSoup, item_count: int, items_per_page: int) -> int:
    """
    Item total for listings that only expose their page count.

    Without a pager the listing fits on one page, so the items on it are the
    whole listing.
    """
    page_max = _page_max(soup)
    if page_max is None:
        return item_count
    return page_max * items_per_page


def _soup(html: str, what: str) -> BeautifulSoup:
    if not isinstance(html, str):
        raise ParseError(f"Expected HTML text for {what}, got {type(html).__name__}")
    return BeautifulSoup(html, 'html.parser')


# --- Notifications (/notifications?p=N) ---

def parse_unread_count(soup: BeautifulSoup) -> Optional[int]:
    """Unread notification count shown in the sidebar, if the user is signed in."""
    link = soup.select_one('a[href="/notifications"]')
    return _first_int(link.get_text()) if link else None


def parse_notifications(html: str, items_per_page: int = 50) -> ListingPage[NotificationItem]:
    soup = _soup(html, "notifications")

    items: List[NotificationItem] = []
    for cell in soup.select('div.cell[id^="n_"]'):
        try:
            fade = cell.select_one("span.fade")
            if fade is None:
                logger.debug(f"Notification cell {cell.get('id')} has no summary, skipping")
                continue
            member_tag = fade.select_one('a[href^="/member/"]')
            topic_tag = fade.select_one('a[href^="/t/"]')
            avatar_tag = cell.select_one("img.avatar")
            time_tag = cell.select_one("span.snow")
            payload = cell.select_one("div.payload")

            items.append(NotificationItem(
                notification_id=cell["id"][len("n_"):],
                member=_clean_text(member_tag),
                avatar=avatar_tag.get("src") if avatar_tag else None,
                title=_clean_text(topic_tag),
                link=topic_tag.get("href", "") if topic_tag else "",
                action=_clean_text(fade),
                time=_clean_text(time_tag),
                content=payload.decode_contents().strip() if payload else "",
            ))
        except (KeyError, AttributeError) as e:
            logger.warning(f"Skipping malformed notification cell {cell.get('id')}: {e}")

    total_tag = soup.select_one("div.fr.f12 strong.gray") or soup.select_one("strong.gray")
    total = _first_int(total_tag.get_text()) if total_tag else None
    if total is None:
        if items or soup.select_one("#Main") is not None:
            total = _total_from_page_max(soup, len(items), items_per_page)
        else:
            raise ParseError("Page does not look like a notifications listing")

    logger.debug(f"Parsed {len(items)} notifications, total={total}")
    return ListingPage(items=items, total_item_count=total, side_channel_count=parse_unread_count(soup))


# --- Member topics (/member/<name>/topics?p=N) ---

def parse_member_topics(html: str, items_per_page: int = 20) -> ListingPage[TopicItem]:
    soup = _soup(html, "member topics")

    items: List[TopicItem] = []
    for cell in soup.select("div.cell.item"):
        title_link = cell.select_one("span.item_title a")
        if title_link is None:
            logger.debug("Topic cell without a title, skipping")
            continue
        link = title_link.get("href", "")
        node_tag = cell.select_one("a.node")
        member_tag = cell.select_one('strong a[href^="/member/"]') or cell.select_one('a[href^="/member/"]')
        count_tag = cell.select_one('a[class^="count_"]')
        time_tag = cell.select_one("span.topic_info span[title]")

        items.append(TopicItem(
            topic_id=_topic_id(link),
            title=_clean_text(title_link),
            link=link,
            node=_clean_text(node_tag) or None,
            node_link=node_tag.get("href") if node_tag else None,
            member=_member_from_link(member_tag.get("href")) if member_tag else None,
            reply_count=_first_int(_clean_text(count_tag)) or 0,
            time=_clean_text(time_tag) or None,
        ))

    if not items and soup.select_one("#Main") is None:
        raise ParseError("Page does not look like a member topics listing")

    total = _total_from_page_max(soup, len(items), items_per_page)
    logger.debug(f"Parsed {len(items)} member topics, total={total}")
    return ListingPage(items=items, total_item_count=total)


# --- Member replies (/member/<name>/replies?p=N) ---

def parse_member_replies(html: str, items_per_page: int = 20) -> ListingPage[ReplyItem]:
    soup = _soup(html, "member replies")

    items: List[ReplyItem] = []
    # Each reply is a dock_area header followed by the reply body
    for dock in soup.select("div.dock_area"):
        topic_link = dock.select_one('a[href^="/t/"]')
        if topic_link is None:
            logger.debug("Reply header without a topic link, skipping")
            continue
        link = topic_link.get("href", "")
        floor_match = REPLY_FLOOR_RE.search(link)
        time_tag = dock.select_one("span.fade")
        body = dock.find_next_sibling("div")
        content_tag = body.select_one("div.reply_content") if body else None

        items.append(ReplyItem(
            topic_id=_topic_id(link),
            title=_clean_text(topic_link),
            link=link,
            floor=int(floor_match.group(1)) if floor_match else None,
            time=_clean_text(time_tag) or None,
            content=content_tag.decode_contents().strip() if content_tag else "",
        ))

    if not items and soup.select_one("#Main") is None:
        raise ParseError("Page does not look like a member replies listing")

    total_tag = soup.select_one("div.header strong.gray")
    total = _first_int(total_tag.get_text()) if total_tag else None
    if total is None:
        total = _total_from_page_max(soup, len(items), items_per_page)

    logger.debug(f"Parsed {len(items)} member replies, total={total}")
    return ListingPage(items=items, total_item_count=total)
