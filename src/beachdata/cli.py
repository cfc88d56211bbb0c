"""CLI entry point and main processing flow."""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from beachdata.calendar import SEASONS, classify_all, filter_tournaments
from beachdata.io_json import read_dataset
from beachdata.models import TOURS, WEEKS
from beachdata.service import (
    error_payload,
    get_livescore,
    get_rankings,
    get_tournament_detail,
)
from beachdata.sync import run_sync
from beachdata.util import BeachdataError

logger = logging.getLogger("beachdata")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="beachdata",
        description="Scrape beach volleyball tournaments, rankings and live scores.",
    )
    parser.add_argument(
        "--log-level", choices=["INFO", "DEBUG"], default="INFO",
        help="Logging level (default: INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_sync = sub.add_parser("sync", help="Fetch season listings and rewrite the dataset")
    p_sync.add_argument(
        "--season", type=int, action="append", dest="seasons",
        help=f"Season to sync, repeatable (default: {', '.join(map(str, SEASONS))})",
    )
    p_sync.add_argument("--output", type=Path, help="Dataset path (default: data/tournaments.json)")
    p_sync.add_argument(
        "--raw-cache", choices=["on", "off"], default="off",
        help="HTML cache mode (default: off)",
    )
    p_sync.add_argument(
        "--cache-max-age", type=float, default=None,
        help="Refetch cached pages older than this many seconds",
    )

    p_cal = sub.add_parser("calendar", help="Classified tournaments for a season")
    p_cal.add_argument("--season", type=int, required=True)
    p_cal.add_argument("--tour", choices=("all",) + TOURS, default="all")
    p_cal.add_argument("--week", choices=WEEKS, default="all")
    p_cal.add_argument("--dataset", type=Path, help="Dataset path")

    sub.add_parser("rankings", help="Men's and women's entry rankings")
    sub.add_parser("livescore", help="Current live matches")

    p_detail = sub.add_parser("tournament", help="Sanitized tournament detail page")
    p_detail.add_argument("--id", dest="tournament_id", default="")
    p_detail.add_argument("--dataset", type=Path, help="Dataset path")
    return parser


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


def _project_root() -> Path:
    """Find project root (directory containing pyproject.toml or data/)."""
    p = Path.cwd()
    for _ in range(10):
        if (p / "pyproject.toml").exists():
            return p
        if (p / "data").is_dir():
            return p
        parent = p.parent
        if parent == p:
            break
        p = parent
    return Path.cwd()


def _emit(payload: object) -> None:
    json.dump(payload, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def _cmd_sync(args: argparse.Namespace, root: Path) -> int:
    seasons = args.seasons or list(SEASONS)
    output = args.output or root / "data" / "tournaments.json"
    cache_dir = root / "data" / "raw" if args.raw_cache == "on" else None
    logger.info("Syncing seasons %s -> %s", seasons, output)

    start_time = time.time()
    results = run_sync(seasons, output, cache_dir=cache_dir, max_age=args.cache_max_age)
    failed = [r for r in results if not r.ok]

    logger.info("=== Summary ===")
    logger.info("Tournaments: %d", sum(len(r.records) for r in results))
    logger.info("Failed seasons: %d", len(failed))
    logger.info("Elapsed: %.1fs", time.time() - start_time)
    _emit({
        "saved": sum(len(r.records) for r in results if r.ok),
        "failed": [{"season": r.season, "error": r.error} for r in failed],
    })
    return 1 if failed else 0


def _cmd_calendar(args: argparse.Namespace, root: Path) -> int:
    records = read_dataset(args.dataset or root / "data" / "tournaments.json")
    items = filter_tournaments(classify_all(records), args.season, args.tour, args.week)
    _emit({
        "season": args.season,
        "tournaments": [t.to_dict() for t in items],
        "live": sum(1 for t in items if t.status == "live"),
    })
    return 0


def _cmd_tournament(args: argparse.Namespace, root: Path) -> int:
    records = read_dataset(args.dataset or root / "data" / "tournaments.json")
    _emit(get_tournament_detail(records, args.tournament_id))
    return 0


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    _setup_logging(args.log_level)
    root = _project_root()

    try:
        if args.command == "sync":
            code = _cmd_sync(args, root)
        elif args.command == "calendar":
            code = _cmd_calendar(args, root)
        elif args.command == "rankings":
            _emit(get_rankings())
            code = 0
        elif args.command == "livescore":
            _emit(get_livescore())
            code = 0
        else:
            code = _cmd_tournament(args, root)
    except BeachdataError as e:
        payload, status = error_payload(e)
        logger.error("Request failed (%d): %s", status, e)
        _emit({**payload, "status": status})
        sys.exit(1)
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=True)
        sys.exit(1)

    sys.exit(code)
