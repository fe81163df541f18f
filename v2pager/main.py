#!/usr/bin/env python3
# File: v2pager/main.py

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import DEFAULT_CONFIG_FILE, DEFAULT_LOGS_DIR, AppConfig, load_config
from .core.count_sinks import EventBusCountSink
from .core.event_bus import EventBus
from .core.html_sanitizer import HtmlSanitizer, ImageSize, decode_cloaked_email
from .core.page_sequencer import PageSequencer
from .core.v2ex_listings import V2exListingClient
from .errors import ConfigError, FetchError, MalformedInput
from .events import EventType

logger = logging.getLogger("v2pager.main")

console = Console()
err_console = Console(stderr=True)


def setup_logging_config(log_level_str: str, log_file_path: Path):
    numeric_log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(
        level=numeric_log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.FileHandler(log_file_path, mode='a', encoding='utf-8')]
    )
    logger.info(f"Logging configured. Level: {log_level_str}. File: {log_file_path}")


def parse_image_sizes(specs: Optional[List[str]]) -> Dict[str, ImageSize]:
    """Turn ``SRC=WIDTHxHEIGHT`` arguments into a src -> ImageSize mapping."""
    sizes: Dict[str, ImageSize] = {}
    for spec in specs or []:
        src, sep, dims = spec.rpartition("=")
        width, x, height = dims.lower().partition("x")
        if not sep or not src or not x or not width.isdigit() or not height.isdigit():
            raise argparse.ArgumentTypeError(f"Invalid image size '{spec}', expected SRC=WIDTHxHEIGHT")
        sizes[src] = ImageSize(int(width), int(height))
    return sizes


def cmd_decode_email(args, config: AppConfig) -> int:
    try:
        console.print(decode_cloaked_email(args.hex), markup=False, highlight=False)
    except MalformedInput as e:
        err_console.print(f"[red]ERROR:[/red] {escape(str(e))}")
        return 1
    return 0


def cmd_sanitize(args, config: AppConfig) -> int:
    try:
        html = args.file.read_text(encoding="utf-8")
    except OSError as e:
        err_console.print(f"[red]ERROR:[/red] Could not read {args.file}: {escape(str(e))}")
        return 1

    try:
        sizes = parse_image_sizes(args.image)
    except argparse.ArgumentTypeError as e:
        err_console.print(f"[red]ERROR:[/red] {escape(str(e))}")
        return 2

    result = HtmlSanitizer().process(html, sizes)
    # Print verbatim: Rich markup would mangle the HTML
    console.print(result, markup=False, highlight=False, soft_wrap=True)
    return 0


def _listing_fetch(client: V2exListingClient, listing: str, user: Optional[str]):
    if listing == "notifications":
        return client.notifications
    if not user:
        raise ConfigError(f"--user is required for the '{listing}' listing")
    if listing == "topics":
        return client.member_topics(user)
    return client.member_replies(user)


def _render_window(listing: str, page: int, window) -> Table:
    table = Table(title=f"{listing} - page {page}", caption=f"previous: {window.previous_key}  next: {window.next_key}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title")
    table.add_column("Link", style="cyan")
    table.add_column("Time", style="green")
    for index, item in enumerate(window.items, start=1):
        table.add_row(str(index), escape(item.title), escape(item.link), escape(getattr(item, "time", "") or ""))
    return table


def cmd_list(args, config: AppConfig) -> int:
    event_bus = EventBus(debug_logging=(args.log_level == 'DEBUG'))
    event_bus.subscribe(
        EventType.UNREAD_COUNT_UPDATED,
        lambda count, **_: console.print(f"[yellow]{count}[/yellow] unread notifications"),
        listing=args.listing,
    )

    try:
        client = V2exListingClient.from_config(config)
        fetch = _listing_fetch(client, args.listing, args.user)
    except ConfigError as e:
        err_console.print(f"[red]ERROR:[/red] {escape(str(e))}")
        return 2

    sequencer = PageSequencer(
        fetch,
        options=config.paging_for(args.listing),
        count_sink=EventBusCountSink(event_bus, listing=args.listing),
        event_bus=event_bus,
        name=args.listing,
    )
    result = sequencer.load_sync(args.page)
    if isinstance(result, FetchError):
        err_console.print(f"[red]ERROR:[/red] {escape(str(result))}")
        return 1

    console.print(_render_window(args.listing, args.page or sequencer.first_page, result))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Page V2EX listings and clean up forum HTML")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_FILE, help=f"Configuration JSON file. Default: {DEFAULT_CONFIG_FILE}")
    parser.add_argument("--log_file", type=Path, default=DEFAULT_LOGS_DIR / "v2pager.log", help=f"Log file path. Default: {DEFAULT_LOGS_DIR / 'v2pager.log'}")
    parser.add_argument("--log_level", choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], default='INFO', help="Logging level. Default: INFO")

    subparsers = parser.add_subparsers(dest="command", required=True)

    decode = subparsers.add_parser("decode-email", help="Decode a data-cfemail value")
    decode.add_argument("hex", help="Hex payload from the data-cfemail attribute")
    decode.set_defaults(handler=cmd_decode_email)

    sanitize = subparsers.add_parser("sanitize", help="Fix image sizes and cloaked emails in an HTML file")
    sanitize.add_argument("file", type=Path, help="HTML fragment to process")
    sanitize.add_argument("--image", action="append", metavar="SRC=WxH", help="Known image size (repeatable)")
    sanitize.set_defaults(handler=cmd_sanitize)

    listing = subparsers.add_parser("list", help="Fetch one page of a listing")
    listing.add_argument("listing", choices=["notifications", "topics", "replies"])
    listing.add_argument("--user", help="Member name for the topics/replies listings")
    listing.add_argument("--page", type=int, help="Page to load. Default: first page")
    listing.set_defaults(handler=cmd_list)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging_config(args.log_level, args.log_file)
    logger.info(f"v2pager starting with arguments: {args}")

    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.critical(f"Failed to load configuration: {e}", exc_info=True)
        err_console.print(f"[red]ERROR:[/red] Configuration problem - {escape(str(e))}")
        return 1

    return args.handler(args, config)


if __name__ == "__main__":
    sys.exit(main())
