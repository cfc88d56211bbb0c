"""Ranking feed row normalization."""

import logging
import math
import re

from beachdata.models import RankingRow
from beachdata.text import strip_tags

logger = logging.getLogger(__name__)

_NON_NUMERIC = re.compile(r"[^\d.-]")


def to_number(value) -> float:
    """Loose numeric coercion: keep digits, '.' and '-', else 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else 0
    if not value:
        return 0
    try:
        num = float(_NON_NUMERIC.sub("", str(value)))
    except ValueError:
        return 0
    return num if math.isfinite(num) else 0


def _whole(num: float) -> float:
    """Return an int for integral values so JSON output stays clean."""
    if isinstance(num, float) and num.is_integer():
        return int(num)
    return num


def normalize_row(item: dict, index: int) -> RankingRow:
    position = to_number(item.get("Position"))
    rank = int(position) if position > 0 else index + 1

    points_raw = item.get("EntryPointsTeam")
    if points_raw is None:
        points_raw = item.get("Points")
    points = max(to_number(points_raw), 0)

    team = item.get("TeamName")
    country = item.get("TeamCountryCode")
    if country is None:
        country = item.get("Federation")
    if country is None:
        country = "-"

    return RankingRow(
        rank=rank,
        team=strip_tags(str(team) if team is not None else "-"),
        country=str(country).strip(),
        points=_whole(points),
    )


def normalize_ranking(rows: list) -> list[RankingRow]:
    """One RankingRow per source row, in source order."""
    result = [
        normalize_row(item if isinstance(item, dict) else {}, i)
        for i, item in enumerate(rows)
    ]
    logger.debug("Normalized %d ranking rows", len(result))
    return result
