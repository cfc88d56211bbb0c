"""Live-score fragment parser."""

import logging
import re

from bs4 import BeautifulSoup

from beachdata.fetch import resolve_url
from beachdata.models import LiveMatch
from beachdata.text import decode, node_text
from beachdata.util import ParseError

logger = logging.getLogger(__name__)

_MATCH_HREF_PATTERN = re.compile(r"/match\?match=")
_START_PATTERN = re.compile(r"Start:\s*([^<&]+)", re.IGNORECASE)
_COURT_PATTERN = re.compile(r"Court:\s*([^<&]+)", re.IGNORECASE)

DEFAULT_TITLE = "Live match"
DEFAULT_TEAMS = ("Team A", "Team B")
DEFAULT_CLOCK = "Live"
DEFAULT_COURT = "Court"


def parse_live_match(html: str) -> LiveMatch:
    """Parse one live match fragment."""
    soup = BeautifulSoup(html, "html.parser")

    title = DEFAULT_TITLE
    for h6 in soup.find_all("h6"):
        link = h6.find("a")
        if link is not None:
            title = node_text(link)
            break

    detail_url = None
    link = soup.find("a", href=_MATCH_HREF_PATTERN)
    if link is not None:
        detail_url = resolve_url(link["href"])

    teams = _extract_teams(soup)
    clock = _marker_text(_START_PATTERN, html, DEFAULT_CLOCK)
    court = _marker_text(_COURT_PATTERN, html, DEFAULT_COURT)

    return LiveMatch(
        id=detail_url or f"{title}-{court}",
        tournament=title,
        teams=teams,
        clock=clock,
        court=court,
        detail_url=detail_url,
    )


def _extract_teams(soup: BeautifulSoup) -> tuple[str, str]:
    """First-cell text of the first two team rows, padded with placeholders."""
    found: list[str] = []
    for tr in soup.find_all("tr"):
        cells = tr.find_all("td")
        # team rows carry the name cell followed by score cells
        if len(cells) < 2:
            continue
        text = node_text(cells[0])
        if text:
            found.append(text)
        if len(found) == 2:
            break
    padded = found + list(DEFAULT_TEAMS[len(found):])
    return padded[0], padded[1]


def _marker_text(pattern: re.Pattern, html: str, default: str) -> str:
    m = pattern.search(html)
    if not m:
        return default
    return decode(m.group(1)) or default


def parse_livescore_feed(rows: list) -> list[LiveMatch]:
    """Parse every fragment of the live-score feed."""
    if not isinstance(rows, list):
        raise ParseError(f"Live-score feed is not a list: {type(rows).__name__}")

    matches: list[LiveMatch] = []
    for row in rows:
        fragment = row.get("LiveScore") if isinstance(row, dict) else None
        if not isinstance(fragment, str) or not fragment:
            continue
        matches.append(parse_live_match(fragment))

    logger.info("Parsed %d live matches from %d feed rows", len(matches), len(rows))
    return matches
