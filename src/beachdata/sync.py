"""Season sync: fetch every listing page, parse, persist the union."""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from beachdata.fetch import fetch_with_cache, season_url
from beachdata.io_json import write_dataset
from beachdata.models import RawTournamentRecord, SeasonResult
from beachdata.parse_tournaments import parse_tournament_table
from beachdata.util import BeachdataError

logger = logging.getLogger(__name__)


def sync_season(
    season: int,
    cache_dir: Path | None = None,
    max_age: float | None = None,
) -> SeasonResult:
    """Fetch and parse one season. Upstream failures are captured, not raised."""
    url = season_url(season)
    cache_path = cache_dir / f"season_{season}.html" if cache_dir else None
    try:
        html = fetch_with_cache(url, cache_path, cache_dir is not None, max_age)
    except BeachdataError as e:
        logger.error("Season %d failed: %s", season, e)
        return SeasonResult(season=season, url=url, error=str(e))

    records = parse_tournament_table(html, season)
    return SeasonResult(season=season, url=url, records=records)


def run_sync(
    seasons: list[int],
    output_path: Path,
    cache_dir: Path | None = None,
    max_workers: int | None = None,
    max_age: float | None = None,
) -> list[SeasonResult]:
    """Sync all seasons concurrently and overwrite the dataset.

    Successful seasons are persisted even if a sibling season failed.
    The dataset is left untouched when every season failed.
    """
    workers = max_workers or max(1, len(seasons))
    with ThreadPoolExecutor(max_workers=workers) as ex:
        results = list(ex.map(lambda s: sync_season(s, cache_dir, max_age), seasons))

    ok = [r for r in results if r.ok]
    failed = [r for r in results if not r.ok]
    for r in ok:
        logger.info("Season %d: %d tournaments", r.season, len(r.records))

    if not ok:
        logger.error("All %d seasons failed, dataset not written", len(results))
        return results

    all_records: list[RawTournamentRecord] = []
    for r in ok:
        all_records.extend(r.records)
    write_dataset(all_records, output_path)

    if failed:
        logger.warning(
            "Failed seasons: %s", ", ".join(str(r.season) for r in failed),
        )
    return results
