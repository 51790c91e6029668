"""Valve pak (VPK) archive handling."""
import logging
import posixpath
from pathlib import Path
from typing import Callable, Optional

import vpk

from .constants import VPK_PATH
from .reconcile import AssetEntry

log = logging.getLogger(__name__)

EntryPredicate = Callable[[AssetEntry], bool]


def entry_directory(entry: AssetEntry) -> str:
    return posixpath.dirname(entry.full_path)


class Dota2Archive:
    """Wrapper for the Dota 2 pak01_dir.vpk archive."""

    def __init__(self, dota_dir: Path, vpk_sub_path: str = VPK_PATH):
        self.path = dota_dir / vpk_sub_path
        log.debug(f"Opening archive {self.path}...")
        self.pak = vpk.open(str(self.path))
        log.debug(f"Opened archive with {len(self.pak)} entries.")

    def fetch_entries(self, kind: str, predicate: Optional[EntryPredicate] = None) -> list[AssetEntry]:
        """All entries with extension ``kind`` that match predicate."""
        entries = []
        for path in self.pak:
            if not path.endswith("." + kind):
                continue
            meta = self.pak.get_file_meta(path)
            entry = AssetEntry(full_path=path, crc32=meta["crc32"], length=meta["file_length"])
            if predicate is None or predicate(entry):
                entries.append(entry)
        return entries

    def read_entry(self, path: str) -> bytes:
        """Read the full contents of an entry. Raises FileNotFoundError if absent."""
        try:
            pak_file = self.pak.get_file(path)
        except KeyError:
            raise FileNotFoundError(f"{path} not found in {self.path}") from None
        with pak_file:
            return pak_file.read()
