"""Request-scoped endpoints: rankings, live score, tournament detail."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict
from datetime import datetime, timezone

from beachdata.calendar import find_tournament
from beachdata.fetch import (
    BASE_URL,
    fetch_json,
    fetch_page,
    livescore_feed_url,
    ranking_feed_url,
    tournament_cache_url,
    tournament_live_url,
)
from beachdata.models import RawTournamentRecord
from beachdata.parse_livescore import parse_livescore_feed
from beachdata.rankings import normalize_ranking
from beachdata.sanitize import extract_tcode, sanitize_tournament_html
from beachdata.util import (
    BeachdataError,
    FetchError,
    MissingParameterError,
    ParseError,
    TcodeUnavailableError,
    TournamentNotFoundError,
)

logger = logging.getLogger(__name__)

RANKINGS_SOURCE = f"{BASE_URL}/rankings/entry-men"
LIVESCORE_SOURCE = f"{BASE_URL}/livescore"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _expect_list(data, url: str) -> list:
    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array from {url}")
    return data


def get_rankings() -> dict:
    """Men's and women's entry rankings, fetched concurrently."""
    men_url = ranking_feed_url("m")
    women_url = ranking_feed_url("w")
    with ThreadPoolExecutor(max_workers=2) as ex:
        men_future = ex.submit(fetch_json, men_url)
        women_future = ex.submit(fetch_json, women_url)
        men_raw = _expect_list(men_future.result(), men_url)
        women_raw = _expect_list(women_future.result(), women_url)

    return {
        "men": [asdict(r) for r in normalize_ranking(men_raw)],
        "women": [asdict(r) for r in normalize_ranking(women_raw)],
        "source": RANKINGS_SOURCE,
        "updatedAt": _now_iso(),
    }


def get_livescore() -> dict:
    matches = parse_livescore_feed(fetch_json(livescore_feed_url()))
    return {
        "matches": [m.to_dict() for m in matches],
        "source": LIVESCORE_SOURCE,
        "updatedAt": _now_iso(),
    }


def load_tournament_html(tcode: str) -> str:
    """Cached mirror first, live endpoint on failure."""
    try:
        return fetch_page(tournament_cache_url(tcode))
    except FetchError as e:
        logger.info("Cached detail for %s unavailable (%s), trying live", tcode, e)
        return fetch_page(tournament_live_url(tcode))


def get_tournament_detail(
    records: list[RawTournamentRecord],
    tournament_id: str | None,
) -> dict:
    if not tournament_id:
        raise MissingParameterError("Missing id parameter")

    tournament = find_tournament(records, tournament_id)
    if tournament is None:
        raise TournamentNotFoundError("Tournament not found")

    tcode = extract_tcode(tournament.women_url) or extract_tcode(tournament.men_url)
    if not tcode:
        raise TcodeUnavailableError("Tournament tcode not available")

    html = load_tournament_html(tcode)
    return {
        "id": tournament_id,
        "tcode": tcode,
        "html": sanitize_tournament_html(html),
        "updatedAt": _now_iso(),
    }


def error_payload(exc: BeachdataError) -> tuple[dict, int]:
    return {"error": str(exc) or type(exc).__name__}, exc.status
