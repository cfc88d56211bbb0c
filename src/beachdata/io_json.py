"""JSON dataset read/write with atomic full replace."""

import json
import logging
import os
import tempfile
from pathlib import Path

from beachdata.models import RawTournamentRecord

logger = logging.getLogger(__name__)

DATASET_KEYS = [
    "id", "season", "type", "name", "menDate", "womenDate", "country",
    "menUrl", "womenUrl", "startDay", "startMonth",
]


def _write_json_atomic(path: Path, data: object) -> None:
    """Write JSON to a temp file beside ``path`` and move it into place."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_dataset(records: list[RawTournamentRecord], path: Path) -> None:
    """Overwrite the tournament dataset wholesale."""
    rows = [r.to_dict() for r in records]
    _write_json_atomic(path, rows)
    logger.info("Wrote %d tournaments to %s", len(rows), path)


def read_dataset(path: Path) -> list[RawTournamentRecord]:
    """Read the tournament dataset. Empty list if missing."""
    if not path.exists():
        logger.warning("Dataset %s does not exist", path)
        return []
    with open(path, "r", encoding="utf-8") as f:
        rows = json.load(f)
    return [RawTournamentRecord.from_dict(r) for r in rows]
