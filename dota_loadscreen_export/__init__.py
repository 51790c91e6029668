"""
Dota 2 Loading Screen Exporter Package

Exports loading screen images from the Dota 2 VPK archive with support for:
- Item definitions parsed from items_game.txt
- Style loading screens named by localization key
- Incremental exports tracked by a JSON database
"""
from .config import Config, setup_logging, get_config
from .errors import ExportError, ParseError, NamingError
from .tokenizer import tokenize, classify_line
from .item_db import DotaItem, get_items, parse_items, read_items, isolate_collection
from .styles import fixup_styles
from .reconcile import AssetEntry, ExportRecord, ExportPlan, Status, find_asset, classify, plan_exports, complete
from .database import load_db, save_db
from .asset import Dota2Archive
from .texture import TextureDecoder
from .extractor import export_loading_screens, ExportResult

__version__ = "1.0.0"
__all__ = [
    "Config",
    "setup_logging",
    "get_config",
    "ExportError",
    "ParseError",
    "NamingError",
    "tokenize",
    "classify_line",
    "DotaItem",
    "get_items",
    "parse_items",
    "read_items",
    "isolate_collection",
    "fixup_styles",
    "AssetEntry",
    "ExportRecord",
    "ExportPlan",
    "Status",
    "find_asset",
    "classify",
    "plan_exports",
    "complete",
    "load_db",
    "save_db",
    "Dota2Archive",
    "TextureDecoder",
    "export_loading_screens",
    "ExportResult",
]
