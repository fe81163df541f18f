# File: v2pager/utils/http_utils.py

import json
import logging
import random
import time
from pathlib import Path
from typing import Dict, Optional

from curl_cffi import requests

from ..errors import NetworkError, AuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_SECONDS = 5
DEFAULT_TIMEOUT_SECONDS = 30
DEFAULT_IMPERSONATE_BROWSER = "chrome110"
MAX_BACKOFF_SECONDS = 60

USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.0 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36",
]


def get_random_user_agent() -> str:
    return random.choice(USER_AGENTS)


def load_cookies(cookie_file_path: Optional[Path]) -> Dict[str, str]:
    """
    Load cookies exported from a browser (list of {name, value} dicts, or a
    plain name -> value object). Missing or unreadable files yield no cookies.
    """
    if not cookie_file_path or not cookie_file_path.exists():
        logger.debug(f"Cookie file not provided or not found at: {cookie_file_path}")
        return {}

    try:
        with open(cookie_file_path, 'r', encoding='utf-8') as f:
            cookies_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error loading cookies from {cookie_file_path}: {e}")
        return {}

    if isinstance(cookies_data, list):
        cookies = {
            item['name']: item['value']
            for item in cookies_data
            if isinstance(item, dict) and 'name' in item and 'value' in item
        }
    elif isinstance(cookies_data, dict):
        cookies = {str(k): str(v) for k, v in cookies_data.items()}
    else:
        logger.warning(f"Unexpected cookie file format in {cookie_file_path}. Expected list or dict.")
        return {}

    logger.info(f"Loaded {len(cookies)} cookies from {cookie_file_path}")
    return cookies


def _default_headers(base_url: Optional[str] = None) -> Dict[str, str]:
    headers = {
        "User-Agent": get_random_user_agent(),
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "zh-CN,zh;q=0.9,en;q=0.8",
        "Connection": "keep-alive",
    }
    if base_url:
        headers["Referer"] = base_url.rstrip("/") + "/"
    return headers


def _looks_like_signin(response) -> bool:
    return "/signin" in str(response.url)


def fetch_page_content(
    url: str,
    cookie_file: Optional[str | Path] = None,
    max_retries: int = DEFAULT_MAX_RETRIES,
    retry_delay: int = DEFAULT_RETRY_DELAY_SECONDS,
    timeout: int = DEFAULT_TIMEOUT_SECONDS,
    impersonate: str = DEFAULT_IMPERSONATE_BROWSER,
    referer: Optional[str] = None,
) -> str:
    """
    GET a forum page with curl_cffi and return its HTML.

    Retries request errors, 429 and 5xx responses with exponential backoff
    and jitter. 401/403 and redirects to the sign-in page are not retried.

    Raises:
        AuthenticationError: The page needs a (valid) login
        NetworkError: Every attempt failed
    """
    cookie_path = Path(cookie_file) if cookie_file else None
    cookies = load_cookies(cookie_path)

    last_problem = "no attempt made"
    for attempt in range(max_retries + 1):
        if attempt > 0:
            sleep_time = min(retry_delay * (2 ** (attempt - 1)) * random.uniform(0.8, 1.2), MAX_BACKOFF_SECONDS)
            logger.info(f"Waiting {sleep_time:.2f} seconds before retry {attempt}/{max_retries} for {url}")
            time.sleep(sleep_time)

        logger.info(f"Fetching {url} (Attempt {attempt + 1}/{max_retries + 1})")
        try:
            response = requests.get(
                url,
                headers=_default_headers(referer),
                cookies=cookies,
                impersonate=impersonate,
                timeout=timeout,
                allow_redirects=True,
            )
        except requests.RequestsError as e:
            last_problem = f"request error: {e}"
            logger.warning(f"Request failed for {url} (Attempt {attempt + 1}): {e}")
            continue

        if response.status_code in (401, 403) or _looks_like_signin(response):
            logger.error(f"Authentication required for {url}. Status: {response.status_code}, final URL: {response.url}")
            raise AuthenticationError(f"Authentication required for {url} (status {response.status_code}). Check cookies.")

        if response.status_code == 200:
            logger.info(f"Fetched {url}. Length: {len(response.content)} bytes.")
            return response.text

        last_problem = f"status {response.status_code}"
        if response.status_code == 429 or response.status_code >= 500:
            logger.warning(f"Retryable status {response.status_code} for {url}")
            continue

        logger.error(f"Failed to fetch {url}. Status: {response.status_code}. Content preview: {response.text[:200]}")
        raise NetworkError(f"Failed to fetch {url}: status {response.status_code}")

    raise NetworkError(f"All {max_retries + 1} attempts failed for {url}; last problem: {last_problem}")
