"""HTTP fetch with deadline, single retry, freshness window and file caching."""

import json
import logging
import threading
import time
from pathlib import Path
from urllib.parse import urljoin

import requests

from beachdata.util import FetchError

logger = logging.getLogger(__name__)

BASE_URL = "https://fivb.12ndr.at"
HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; beachdata/0.1)",
    "Accept": "text/html, application/json, text/plain, */*",
}
DEFAULT_TIMEOUT = 30  # seconds, per request
MAX_ATTEMPTS = 2
BACKOFF_BASE = 1  # seconds: 1
REVALIDATE_SECONDS = 60


def resolve_url(href: str) -> str:
    return urljoin(BASE_URL + "/", href)


def season_url(season: int) -> str:
    return f"{BASE_URL}/?season={season}&international=all"


def livescore_feed_url() -> str:
    return f"{BASE_URL}/cache/scripts/livescore.json"


def ranking_feed_url(gender: str) -> str:
    return f"{BASE_URL}/scripts/entry_ranking_new.php?gender={gender}"


def tournament_cache_url(tcode: str) -> str:
    return f"{BASE_URL}/cache/scripts/tournament_html_{tcode}.html"


def tournament_live_url(tcode: str) -> str:
    return f"{BASE_URL}/scripts/tournament.php?tcode={tcode}"


def _is_transient(status_code: int) -> bool:
    return status_code >= 500 or status_code == 429


def _get(url: str) -> requests.Response:
    """GET with retry and backoff for transient failures only."""
    last_error = None
    for attempt in range(1, MAX_ATTEMPTS + 1):
        try:
            logger.debug("Fetching %s (attempt %d/%d)", url, attempt, MAX_ATTEMPTS)
            resp = requests.get(url, headers=HEADERS, timeout=DEFAULT_TIMEOUT)
            if 200 <= resp.status_code < 300:
                logger.debug("OK %s", url)
                return resp
            last_error = FetchError(f"HTTP {resp.status_code} for {url}")
            if not _is_transient(resp.status_code):
                logger.warning("HTTP %d for %s, not retrying", resp.status_code, url)
                raise last_error
            logger.warning(
                "HTTP %d for %s (attempt %d/%d)",
                resp.status_code, url, attempt, MAX_ATTEMPTS,
            )
        except requests.RequestException as e:
            logger.warning(
                "Connection error for %s (attempt %d/%d): %s",
                url, attempt, MAX_ATTEMPTS, e,
            )
            last_error = FetchError(f"Connection error for {url}: {e}")

        if attempt < MAX_ATTEMPTS:
            backoff = BACKOFF_BASE * (2 ** (attempt - 1))
            logger.debug("Backoff %ds before retry", backoff)
            time.sleep(backoff)

    raise last_error  # type: ignore[misc]


# url -> (fetched_at, body); shared by request-scoped fetches
_responses: dict[str, tuple[float, str]] = {}
_responses_lock = threading.Lock()


def clear_response_cache() -> None:
    with _responses_lock:
        _responses.clear()


def fetch_page(url: str, max_age: float = REVALIDATE_SECONDS) -> str:
    """Fetch a page as text, reusing a body fetched within ``max_age`` seconds.

    ``max_age=0`` always goes upstream. Only successful bodies are kept.
    """
    now = time.time()
    if max_age > 0:
        with _responses_lock:
            hit = _responses.get(url)
        if hit and now - hit[0] <= max_age:
            logger.debug("Fresh response for %s", url)
            return hit[1]

    text = _get(url).text
    with _responses_lock:
        _responses[url] = (now, text)
    return text


def fetch_json(url: str, max_age: float = REVALIDATE_SECONDS):
    """Fetch and decode a JSON document."""
    text = fetch_page(url, max_age)
    try:
        return json.loads(text)
    except ValueError as e:
        raise FetchError(f"Invalid JSON from {url}: {e}") from e


def _is_fresh(path: Path, max_age: float | None) -> bool:
    if not path.exists():
        return False
    if max_age is None:
        return True
    return time.time() - path.stat().st_mtime <= max_age


def fetch_with_cache(
    url: str,
    cache_path: Path | None,
    use_cache: bool,
    max_age: float | None = None,
) -> str:
    """Fetch a page, optionally using/saving cache.

    A cached copy older than ``max_age`` seconds is refetched; ``None``
    means cached copies never expire.
    """
    if use_cache and cache_path and _is_fresh(cache_path, max_age):
        logger.info("Cache hit: %s", cache_path)
        return cache_path.read_text(encoding="utf-8")

    html = fetch_page(url, max_age=0)

    if use_cache and cache_path:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(html, encoding="utf-8")
        logger.debug("Cached to %s", cache_path)

    return html
