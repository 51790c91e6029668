"""Decide which loading screens need exporting.

An exported image is identified by the (crc32, size, full path) of the archive
entry it was made from. Items whose entry is already recorded are skipped, so
running the export twice against an unchanged archive does no work the second
time, while a content update (new CRC or size) or a moved asset is exported
again.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Sequence

from .constants import IMAGE_DIR_PREFIX, limit_string
from .item_db import DotaItem

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetEntry:
    """Metadata of one archive entry."""
    full_path: str
    crc32: int
    length: int

    @property
    def identity(self) -> tuple[int, int, str]:
        return (self.crc32, self.length, self.full_path)


@dataclass(frozen=True)
class ExportRecord:
    """Persisted proof that an archive entry was exported to ``image_link``."""
    id: int
    name: str
    image_link: str
    crc32: int
    size: int
    full_path: str

    @property
    def identity(self) -> tuple[int, int, str]:
        return (self.crc32, self.size, self.full_path)

    @classmethod
    def from_export(cls, item: DotaItem, entry: AssetEntry, image_link: str) -> "ExportRecord":
        return cls(
            id=item.id,
            name=item.name,
            image_link=image_link,
            crc32=entry.crc32,
            size=entry.length,
            full_path=entry.full_path,
        )


class Status(Enum):
    EXPORT = "export"
    SKIP = "skip"
    NOT_FOUND = "not_found"


@dataclass
class ExportPlan:
    """Items to export, each paired with its archive entry, plus counters."""
    work: list[tuple[DotaItem, AssetEntry]] = field(default_factory=list)
    skipped: int = 0
    not_found: int = 0
    missing: list[DotaItem] = field(default_factory=list)


def _relative_path(entry: AssetEntry, prefix: str) -> str:
    if entry.full_path.startswith(prefix):
        return entry.full_path[len(prefix):]
    return entry.full_path


def find_asset(item: DotaItem, entries: Iterable[AssetEntry],
               prefix: str = IMAGE_DIR_PREFIX) -> Optional[AssetEntry]:
    """Find the entry whose path, without ``prefix``, starts with the item's path.

    When several entries match, the shortest path wins, then the lowest in
    ordinal order. Items without a path match nothing.
    """
    if not item.path:
        return None
    candidates = [e for e in entries if _relative_path(e, prefix).startswith(item.path)]
    if not candidates:
        return None
    if len(candidates) > 1:
        log.debug(f"{item.name}: {len(candidates)} assets match '{item.path}'")
    return min(candidates, key=lambda e: (len(e.full_path), e.full_path))


def classify(item: DotaItem, entries: Sequence[AssetEntry],
             known: set[tuple[int, int, str]]) -> tuple[Status, Optional[AssetEntry]]:
    """Classify one item against the entries and the identities already exported."""
    entry = find_asset(item, entries)
    if entry is None:
        return Status.NOT_FOUND, None
    if entry.identity in known:
        return Status.SKIP, entry
    return Status.EXPORT, entry


def plan_exports(items: Iterable[DotaItem], entries: Sequence[AssetEntry],
                 records: Iterable[ExportRecord]) -> ExportPlan:
    """Work out which items need exporting.

    Items are taken in (name, id) order, so the work list is sorted by name. An
    entry claimed by one item is not exported again for a later item.
    """
    known = {r.identity for r in records}
    plan = ExportPlan()
    claimed = set()

    for item in sorted(items, key=lambda i: (i.name, i.id)):
        status, entry = classify(item, entries, known)
        if status is Status.NOT_FOUND:
            log.warning(f"Error : {limit_string(item.name)} not found!")
            plan.not_found += 1
            plan.missing.append(item)
        elif status is Status.SKIP or entry.identity in claimed:
            plan.skipped += 1
        else:
            claimed.add(entry.identity)
            plan.work.append((item, entry))

    return plan


def complete(records: Iterable[ExportRecord], exported: Iterable[ExportRecord]) -> list[ExportRecord]:
    """Return the previous records followed by the newly exported ones.

    Existing records are kept untouched. A new record whose identity is
    already present is dropped.
    """
    result = list(records)
    known = {r.identity for r in result}
    for record in exported:
        if record.identity in known:
            continue
        known.add(record.identity)
        result.append(record)
    return result
