"""Season listing page parser."""

import logging
import re

from bs4 import BeautifulSoup, Tag

from beachdata.fetch import resolve_url
from beachdata.models import RawTournamentRecord
from beachdata.text import node_text

logger = logging.getLogger(__name__)

_TCODE_PATTERN = re.compile(r"[?&]tcode=([^&]+)")
_DATE_PATTERN = re.compile(r"(\d{2})\.(\d{2})\.-")
_NAME_HEADER = {"data-field": "Name"}


def locate_tournament_rows(html: str) -> list[Tag] | None:
    """Return the body rows of the tournament table, or None if absent."""
    soup = BeautifulSoup(html, "html.parser")
    header = soup.find(attrs=_NAME_HEADER)
    if header is None:
        return None
    tbody = header.find_next("tbody")
    if tbody is None:
        return None
    return tbody.find_all("tr")


def parse_tournament_table(html: str, season: int) -> list[RawTournamentRecord]:
    """Parse a season listing page and return its tournaments in row order."""
    rows = locate_tournament_rows(html)
    if rows is None:
        logger.info("No tournament table for season %d", season)
        return []

    records: list[RawTournamentRecord] = []
    for row_no, tr in enumerate(rows, start=1):
        cells = tr.find_all("td")
        if len(cells) < 5:
            logger.debug("Skipping row %d (%d cells)", row_no, len(cells))
            continue
        try:
            records.append(_parse_row(cells[:5], season, len(records) + 1))
        except Exception as e:
            logger.warning("Failed to parse row %d of season %d: %s", row_no, season, e)

    logger.info("Parsed %d tournaments for season %d", len(records), season)
    return records


def _parse_row(cells: list[Tag], season: int, ordinal: int) -> RawTournamentRecord:
    """Parse one 5-cell row: type, name, men's date, women's date, country."""
    type_cell, name_cell, men_cell, women_cell, country_cell = cells

    men_href = _first_href(men_cell)
    women_href = _first_href(women_cell)

    tcode = (
        extract_listing_tcode(men_href)
        or extract_listing_tcode(women_href)
        or f"season-{season}-{ordinal}"
    )

    men_date = node_text(men_cell)
    women_date = node_text(women_cell)
    start_day, start_month = parse_date_parts(men_date or women_date)

    return RawTournamentRecord(
        id=f"{season}-{tcode.lower()}",
        season=season,
        type=node_text(type_cell),
        name=node_text(name_cell),
        men_date=men_date or None,
        women_date=women_date or None,
        country=node_text(country_cell),
        men_url=resolve_url(men_href) if men_href else None,
        women_url=resolve_url(women_href) if women_href else None,
        start_day=start_day,
        start_month=start_month,
    )


def _first_href(cell: Tag) -> str | None:
    link = cell.find("a", href=True)
    if link is None:
        return None
    return link["href"] or None


def extract_listing_tcode(href: str | None) -> str | None:
    """Tournament code from a listing link, case preserved."""
    if not href:
        return None
    m = _TCODE_PATTERN.search(href)
    return m.group(1) if m else None


def parse_date_parts(date_text: str) -> tuple[int | None, int | None]:
    """(start_day, start_month) from a ``DD.MM.-`` prefixed date range."""
    m = _DATE_PATTERN.search(date_text or "")
    if not m:
        return None, None
    return int(m.group(1)), int(m.group(2))
