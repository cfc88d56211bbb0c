"""Calendar classification of the persisted tournament dataset.

Everything here is a pure function of the records and "today"; the
derived fields are recomputed on every read and never persisted.
"""

from datetime import date, datetime, timedelta, timezone

from beachdata.models import ClassifiedTournament, RawTournamentRecord

SEASONS = (2024, 2025, 2026, 2027, 2028)

_PRO_KEYWORDS = ("elite16", "challenger", "future", "bpt")
_CEV_KEYWORDS = ("cev", "eurobeach", "nations cup")
WEEK_WINDOW_DAYS = 7


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def infer_tour(type_: str, name: str) -> str:
    """Tour category; first match wins."""
    text = f"{type_} {name}".lower()
    if "snow" in text:
        return "snow"
    if any(k in text for k in _PRO_KEYWORDS):
        return "pro"
    if any(k in text for k in _CEV_KEYWORDS):
        return "cev"
    if "NT" in type_.upper():
        return "nt"
    return "int"


def event_date(season: int, start_month: int | None, start_day: int | None) -> date | None:
    """Start date of an event, or None if it cannot be dated.

    Out-of-range values roll over the way a UTC date constructor does:
    31.04 -> 1 May, month 13 -> January of the next year.
    """
    if not start_month or not start_day:
        return None
    year = season + (start_month - 1) // 12
    month = (start_month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=start_day - 1)


def infer_week(
    season: int,
    start_month: int | None,
    start_day: int | None,
    today: date | None = None,
) -> str:
    """Week bucket of an event relative to today (UTC)."""
    start = event_date(season, start_month, start_day)
    if start is None:
        return "all"
    if today is None:
        today = utc_today()
    diff_days = (start - today).days
    if diff_days < -WEEK_WINDOW_DAYS:
        return "last"
    if diff_days <= WEEK_WINDOW_DAYS:
        return "this"
    return "next"


def infer_status(week: str) -> str:
    # Scheduled this week, not an actual live-match signal.
    return "live" if week == "this" else "upcoming"


def classify(record: RawTournamentRecord, today: date | None = None) -> ClassifiedTournament:
    week = infer_week(record.season, record.start_month, record.start_day, today)
    return ClassifiedTournament(
        id=record.id,
        tier=record.type,
        name=record.name,
        season=record.season,
        country=record.country,
        men_date=record.men_date,
        women_date=record.women_date,
        men_url=record.men_url,
        women_url=record.women_url,
        tour=infer_tour(record.type, record.name),
        week=week,
        status=infer_status(week),
    )


def classify_all(
    records: list[RawTournamentRecord],
    today: date | None = None,
) -> list[ClassifiedTournament]:
    if today is None:
        today = utc_today()
    return [classify(r, today) for r in records]


def filter_tournaments(
    items: list[ClassifiedTournament],
    season: int,
    tour: str = "all",
    week: str = "all",
) -> list[ClassifiedTournament]:
    return [
        t for t in items
        if t.season == season
        and (tour == "all" or t.tour == tour)
        and (week == "all" or t.week == week)
    ]


def find_tournament(
    records: list[RawTournamentRecord],
    tournament_id: str,
) -> RawTournamentRecord | None:
    for r in records:
        if r.id == tournament_id:
            return r
    return None
