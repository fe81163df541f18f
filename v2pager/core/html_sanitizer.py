# File: v2pager/core/html_sanitizer.py

"""
Fix-ups applied to forum HTML (topic bodies, replies) before it is rendered.

Two rewrites are done: ``<img>`` tags whose real size is already known get
explicit width/height attributes, and Cloudflare-protected email links
(``<a class="__cf_email__" data-cfemail="...">``) are replaced by the plain
address.
"""

import logging
from typing import Mapping, NamedTuple, Tuple, Union

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from ..errors import MalformedInput

logger = logging.getLogger(__name__)

DEFAULT_EMAIL_SELECTOR = "a.__cf_email__"
CFEMAIL_ATTR = "data-cfemail"


class SourceOrderFormatter(HTMLFormatter):
    """Minimal HTML formatter that writes attributes in document order."""

    def __init__(self):
        super().__init__(entity_substitution=EntitySubstitution.substitute_xml)

    def attributes(self, tag):
        if tag.attrs is None:
            return []
        return list(tag.attrs.items())


SOURCE_ORDER_FORMATTER = SourceOrderFormatter()


class ImageSize(NamedTuple):
    width: int
    height: int


SizeLike = Union[ImageSize, Tuple[int, int]]


def _hex_digit(c: str) -> int:
    if '0' <= c <= '9':
        return ord(c) - ord('0')
    if 'a' <= c <= 'f':
        return ord(c) - ord('a') + 10
    if 'A' <= c <= 'F':
        return ord(c) - ord('A') + 10
    raise MalformedInput(f"Unexpected hex digit: {c!r}")


def decode_hex(encoded: str) -> bytes:
    """Decode a hex string into bytes, accepting either case."""
    if len(encoded) % 2 != 0:
        raise MalformedInput(f"Unexpected hex string (odd length {len(encoded)}): {encoded!r}")
    return bytes(
        (_hex_digit(encoded[i]) << 4) + _hex_digit(encoded[i + 1])
        for i in range(0, len(encoded), 2)
    )


def decode_cloaked_email(encoded: str) -> str:
    """
    Reverse the ``data-cfemail`` obfuscation.

    The first byte is the XOR key for every byte after it. An empty payload
    has no key byte and is rejected like any other malformed input.
    """
    data = decode_hex(encoded)
    if not data:
        raise MalformedInput("Empty cloaked email payload")
    key = data[0]
    return "".join(chr(b ^ key) for b in data[1:])


def encode_cloaked_email(email: str, key: int) -> str:
    """Inverse of decode_cloaked_email, for building fixtures."""
    if not 0 <= key <= 0xFF:
        raise ValueError(f"key must fit in one byte, got {key}")
    payload = bytes([key]) + bytes(ord(c) ^ key for c in email)
    return payload.hex()


class HtmlSanitizer:
    """
    Rewrites image sizes and cloaked emails in an HTML fragment.

    ``process`` is pure: it keeps no state between calls, so one instance
    can be shared between threads.
    """

    def __init__(self, email_selector: str = DEFAULT_EMAIL_SELECTOR, parser: str = "html.parser"):
        self.email_selector = email_selector
        self.parser = parser

    def process(self, html: str, known_image_sizes: Mapping[str, SizeLike]) -> str:
        """
        Apply the fix-ups and return the resulting HTML.

        Args:
            html: Raw HTML fragment from the server
            known_image_sizes: Image ``src`` -> (width, height) already measured

        Returns:
            The input string itself when nothing had to change, otherwise the
            re-serialized fragment.
        """
        soup = BeautifulSoup(html, self.parser)

        images_resized = self._resize_images(soup, known_image_sizes or {})
        emails_fixed = self._fix_cloaked_emails(soup)

        if not images_resized and not emails_fixed:
            return html

        logger.debug(f"Rewrote {images_resized} image(s) and {emails_fixed} email(s)")
        return soup.decode(formatter=SOURCE_ORDER_FORMATTER)

    def _resize_images(self, soup: BeautifulSoup, known_image_sizes: Mapping[str, SizeLike]) -> int:
        if not known_image_sizes:
            return 0

        resized = 0
        for img in soup.select("img"):
            src = img.get("src")
            if src is None or src not in known_image_sizes:
                continue
            width, height = known_image_sizes[src]
            img["width"] = str(width)
            img["height"] = str(height)
            resized += 1
            logger.debug(f"Reset image size: {src} -> {width}x{height}")
        return resized

    def _fix_cloaked_emails(self, soup: BeautifulSoup) -> int:
        fixed = 0
        for element in soup.select(self.email_selector):
            encoded = element.get(CFEMAIL_ATTR)
            if encoded is None:
                continue
            try:
                email = decode_cloaked_email(encoded)
            except MalformedInput as e:
                logger.warning(f"Leaving cloaked email untouched: {e}")
                continue
            if email:
                element.replace_with(email)
                fixed += 1
        return fixed
