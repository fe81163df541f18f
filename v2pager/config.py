# File: v2pager/config.py

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import ConfigError
from .interfaces.paging_source import FIRST_PAGE

logger = logging.getLogger(__name__)

# --- Default Paths and Constants ---

PROJECT_ROOT_DIR = Path(__file__).resolve().parent.parent

DEFAULT_CONFIG_DIR = PROJECT_ROOT_DIR / "config"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "v2pager.json"
DEFAULT_LOGS_DIR = PROJECT_ROOT_DIR / "logs"
DEFAULT_COOKIE_FILE = PROJECT_ROOT_DIR / "private" / "www.v2ex.com_cookies.json"

DEFAULT_BASE_URL = "https://www.v2ex.com"
DEFAULT_ITEMS_PER_PAGE = 50

# Page sizes the site uses for the listings the client knows how to fetch
LISTING_PAGE_SIZES = {
    "notifications": 50,
    "topics": 20,
    "replies": 20,
}
LISTING_NAMES = tuple(LISTING_PAGE_SIZES)


@dataclass
class PagingOptions:
    """How a listing is split into pages."""
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
    first_page: int = FIRST_PAGE

    def __post_init__(self):
        if not isinstance(self.items_per_page, int) or self.items_per_page < 1:
            raise ConfigError(f"items_per_page must be a positive integer, got {self.items_per_page!r}")
        if not isinstance(self.first_page, int) or self.first_page < 0:
            raise ConfigError(f"first_page must be a non-negative integer, got {self.first_page!r}")


@dataclass
class ClientOptions:
    """Settings for the HTTP client behind the listing fetchers."""
    base_url: str = DEFAULT_BASE_URL
    cookie_file: Optional[str] = None
    timeout: int = 30
    max_retries: int = 3
    retry_delay: int = 5
    impersonate: str = "chrome110"


@dataclass
class AppConfig:
    paging: PagingOptions = field(default_factory=PagingOptions)
    client: ClientOptions = field(default_factory=ClientOptions)
    listings: Dict[str, PagingOptions] = field(default_factory=dict)

    def paging_for(self, listing: str) -> PagingOptions:
        """
        Paging options for one listing.

        An explicit "listings" entry wins. Known listings otherwise use the
        page size the site serves them with; anything else gets "paging".
        """
        if listing in self.listings:
            return self.listings[listing]
        if listing in LISTING_PAGE_SIZES:
            return PagingOptions(items_per_page=LISTING_PAGE_SIZES[listing], first_page=self.paging.first_page)
        return self.paging


def _build_options(cls, data: Any, section: str):
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ConfigError(f"Section '{section}' must be an object, got {type(data).__name__}")

    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        logger.warning(f"Ignoring unknown keys in '{section}': {', '.join(sorted(unknown))}")

    try:
        return cls(**{k: v for k, v in data.items() if k in known})
    except TypeError as e:
        raise ConfigError(f"Invalid '{section}' section: {e}") from e


def config_from_dict(raw: Dict[str, Any]) -> AppConfig:
    """Build an AppConfig from already-decoded JSON data."""
    if not isinstance(raw, dict):
        raise ConfigError("Configuration root must be a JSON object")

    paging = _build_options(PagingOptions, raw.get("paging"), "paging")
    client = _build_options(ClientOptions, raw.get("client"), "client")

    listings: Dict[str, PagingOptions] = {}
    for name, listing_cfg in (raw.get("listings") or {}).items():
        if name not in LISTING_NAMES:
            logger.warning(f"Unknown listing '{name}' in configuration, keeping it anyway")
        if listing_cfg is not None and not isinstance(listing_cfg, dict):
            raise ConfigError(f"Section 'listings.{name}' must be an object")
        merged = {
            "items_per_page": LISTING_PAGE_SIZES.get(name, paging.items_per_page),
            "first_page": paging.first_page,
            **(listing_cfg or {}),
        }
        listings[name] = _build_options(PagingOptions, merged, f"listings.{name}")

    return AppConfig(paging=paging, client=client, listings=listings)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load the application configuration from a JSON file.

    A missing file is not an error: defaults are returned and a warning is
    logged. Unreadable JSON or invalid values raise ConfigError.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_FILE

    if not path.exists():
        logger.warning(f"Configuration file not found: {path}. Using defaults.")
        return AppConfig()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read configuration file {path}: {e}") from e

    config = config_from_dict(raw)
    logger.info(f"Loaded configuration from {path}")
    return config
