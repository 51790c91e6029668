"""JSON persistence of the export records."""
import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from .constants import JSON_DB, JSON_OUTPUT
from .reconcile import ExportRecord

log = logging.getLogger(__name__)

# JSON key -> ExportRecord attribute
RECORD_KEYS = {
    "ID": "id",
    "Name": "name",
    "ImageLink": "image_link",
    "Crc32": "crc32",
    "Size": "size",
    "FullPath": "full_path",
}


def record_to_dict(record: ExportRecord) -> dict:
    return {key: getattr(record, attr) for key, attr in RECORD_KEYS.items()}


def record_from_dict(data: dict) -> ExportRecord:
    return ExportRecord(**{attr: data[key] for key, attr in RECORD_KEYS.items()})


def load_records(text: Optional[str]) -> list[ExportRecord]:
    """Parse a JSON database. Blank or missing text means no records."""
    if not text or not text.strip():
        return []
    return [record_from_dict(entry) for entry in json.loads(text)]


def load_db(path: Path) -> list[ExportRecord]:
    """Load the record set from ``path`` if it exists."""
    if not path.exists():
        log.debug(f"No database at {path}, exporting everything")
        return []
    return load_records(path.read_text(encoding="utf-8"))


def dump_db(records: Iterable[ExportRecord]) -> str:
    return json.dumps([record_to_dict(r) for r in records], indent=2)


def long_date(when: datetime) -> str:
    """Format like 'Monday, October 19, 2026'."""
    return f"{when:%A}, {when:%B} {when.day}, {when:%Y}"


def dump_basic(records: Iterable[ExportRecord], now: Optional[datetime] = None) -> str:
    """Reduced projection for consumers that only need names and images."""
    now = now or datetime.now(timezone.utc)
    info = [{"Name": r.name, "ImageLink": r.image_link} for r in records]
    return json.dumps({"info": info, "dbDate": long_date(now)}, indent=2)


def _write_atomic(path: Path, text: str):
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    os.replace(tmp, path)


def save_db(dest: Path, records: list[ExportRecord]):
    """Write the full database and the basic listing into ``dest``."""
    _write_atomic(dest / JSON_DB, dump_db(records))
    _write_atomic(dest / JSON_OUTPUT, dump_basic(records))
    log.debug(f"Saved {len(records)} records to {dest / JSON_DB}")
