"""Main export logic for Dota 2 loading screens."""
import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from itertools import chain, count
from pathlib import Path
from typing import Optional

from PIL import Image
from tqdm import tqdm

from .asset import entry_directory
from .config import Config, get_config
from .constants import (
    TEXTURE_KIND,
    LOADING_SCREEN_DIR,
    LOADING_SCREEN_TYPE,
    JSON_DB,
    IMAGE_SUBDIR,
    IMAGE_FORMATS,
    INVALID_FILE_CHARS,
)
from .database import load_db, save_db
from .item_db import DotaItem, get_items
from .reconcile import AssetEntry, ExportPlan, ExportRecord, plan_exports, complete
from .styles import fixup_styles

log = logging.getLogger(__name__)


@dataclass
class ExportResult:
    """Outcome of one export run."""
    plan: ExportPlan
    records: list[ExportRecord]
    exported: list[ExportRecord] = field(default_factory=list)
    failed: list[DotaItem] = field(default_factory=list)
    elapsed: float = 0.0


def is_loading_screen(item: DotaItem) -> bool:
    return item.type == LOADING_SCREEN_TYPE


def is_loading_screen_asset(entry: AssetEntry) -> bool:
    return entry_directory(entry).startswith(LOADING_SCREEN_DIR)


def collect_loading_screens(archive) -> tuple[list[DotaItem], list[AssetEntry]]:
    """Registered loading screen items (display names fixed up) and their textures."""
    log.debug("Collecting loading screens information...")
    items = [fixup_styles(item) for item in get_items(archive, is_loading_screen)]
    entries = archive.fetch_entries(TEXTURE_KIND, is_loading_screen_asset)
    log.debug(f"Found {len(items)} registered loading screen items.")
    log.debug(f"Found {len(entries)} loading screen assets.")
    return items, entries


def file_stem(item: DotaItem) -> str:
    return INVALID_FILE_CHARS.sub("", item.name).strip()


def assign_file_names(work: list[tuple[DotaItem, AssetEntry]], records: list[ExportRecord],
                      image_format: str) -> list[str]:
    """Pick an image file name for each work item, unique in the output directory.

    Style loading screens of one hero share a display name. A name already
    recorded for the same archive path is reused, so an updated texture
    replaces its old image. Any other clash gets the item id appended, then a
    counter. Names are compared case-insensitively.
    """
    ext = image_format.lower()
    owners = {r.image_link.lower(): r.full_path for r in records}
    names = []
    for item, entry in work:
        stem = file_stem(item)
        candidates = chain(
            [f"{stem}.{ext}", f"{stem}_{item.id}.{ext}"],
            (f"{stem}_{item.id}_{n}.{ext}" for n in count(2)),
        )
        for name in candidates:
            owner = owners.get(name.lower())
            if owner is None or owner == entry.full_path:
                break
        if name != f"{stem}.{ext}":
            log.debug(f"{item.name} ({item.id}): file name taken, using {name}")
        owners[name.lower()] = entry.full_path
        names.append(name)
    return names


def save_image(image: Image.Image, path: Path, image_format: str):
    pil_format = IMAGE_FORMATS[image_format.lower()]
    if pil_format == "JPEG" and image.mode != "RGB":
        image = image.convert("RGB")
    image.save(path, pil_format)


def export_one(item: DotaItem, entry: AssetEntry, decoder, img_out_dir: Path,
               file_name: str, image_format: str) -> ExportRecord:
    """Decode, resize and save one loading screen as file_name. Returns its record."""
    image = decoder.decode_and_resize(entry)
    save_image(image, img_out_dir / file_name, image_format)
    log.debug(f"Exported {file_name}")
    return ExportRecord.from_export(item, entry, file_name)


def run_exports(plan: ExportPlan, decoder, img_out_dir: Path, image_format: str,
                exported: list[ExportRecord], failed: list[DotaItem], max_workers: int,
                records: Optional[list[ExportRecord]] = None):
    """Export every item of the plan concurrently.

    Finished records are appended to ``exported`` as they complete, so the
    caller keeps every success even if the run stops part way.
    """
    if not plan.work:
        return

    file_names = assign_file_names(plan.work, records or [], image_format)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(export_one, item, entry, decoder, img_out_dir, file_name, image_format): item
            for (item, entry), file_name in zip(plan.work, file_names)
        }
        for future in tqdm(as_completed(futures), total=len(futures), desc="Exporting"):
            item = futures[future]
            try:
                exported.append(future.result())
            except Exception as e:
                log.error(f"Exporting {item.name}: {e}")
                failed.append(item)


def export_loading_screens(archive, decoder, config: Optional[Config] = None) -> ExportResult:
    """Export new or changed loading screens into ``config.output_dir``.

    Items and assets are read first; a parse or naming error aborts before
    anything is written. The database is rewritten even when an export fails
    or the run is interrupted, keeping every image finished so far.
    """
    config = config or get_config()
    start = time.perf_counter()
    dest = config.output_dir

    records = load_db(dest / JSON_DB)
    if records:
        log.info(f"{len(records)} loading screens in db.")

    items, entries = collect_loading_screens(archive)

    img_out_dir = dest / IMAGE_SUBDIR
    img_out_dir.mkdir(parents=True, exist_ok=True)

    plan = plan_exports(items, entries, records)
    log.debug(f"Exporting {len(plan.work)} loading screens...")

    result = ExportResult(plan=plan, records=records)
    try:
        run_exports(plan, decoder, img_out_dir, config.image_format,
                    result.exported, result.failed, config.jobs, records)
    finally:
        result.records = complete(records, sorted(result.exported, key=lambda r: (r.name, r.id)))
        save_db(dest, result.records)

    result.elapsed = time.perf_counter() - start
    log.info(f"Finished exporting {len(result.exported)} loading screens in {result.elapsed:.2f}s")
    log.info(f"{plan.not_found} not found and {plan.skipped} skipped.")
    if result.failed:
        log.warning(f"{len(result.failed)} loading screens failed to export.")
    return result
