"""Build calendar JSON for the beach volleyball dashboard.

Usage:
    uv run python scripts/build_site_data.py
"""

from __future__ import annotations

import json
from collections import Counter
from datetime import date
from pathlib import Path

from beachdata.calendar import SEASONS, classify_all, utc_today
from beachdata.io_json import read_dataset
from beachdata.models import TOURS, WEEKS, ClassifiedTournament

ROOT = Path(__file__).resolve().parent.parent
DATASET = ROOT / "data" / "tournaments.json"
OUT_DIR = ROOT / "docs" / "data"


def write_json(filename: str, data: object) -> None:
    OUT_DIR.mkdir(parents=True, exist_ok=True)
    path = OUT_DIR / filename
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.write("\n")
    print(f"  wrote {path.relative_to(ROOT)}")


def build_season(items: list[ClassifiedTournament], season: int) -> dict:
    """Tournaments of one season with per-tour and per-week counts."""
    in_season = [t for t in items if t.season == season]
    tours = Counter(t.tour for t in in_season)
    weeks = Counter(t.week for t in in_season)
    return {
        "season": season,
        "total": len(in_season),
        "live": sum(1 for t in in_season if t.status == "live"),
        "tours": {k: tours.get(k, 0) for k in TOURS},
        "weeks": {k: weeks.get(k, 0) for k in WEEKS if k != "all"},
        "tournaments": [t.to_dict() for t in in_season],
    }


def build_calendar(items: list[ClassifiedTournament], today: date) -> dict:
    return {
        "generatedFor": today.isoformat(),
        "seasons": [build_season(items, s) for s in SEASONS],
    }


def main() -> None:
    today = utc_today()
    records = read_dataset(DATASET)
    print(f"Loaded {len(records)} tournaments from {DATASET.relative_to(ROOT)}")
    items = classify_all(records, today)
    write_json("calendar.json", build_calendar(items, today))


if __name__ == "__main__":
    main()
