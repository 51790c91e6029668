"""Constant definitions and helper utilities."""
import re

# Archive layout
VPK_PATH = "game/dota/pak01_dir.vpk"
ITEMS_GAME_PATH = "scripts/items/items_game.txt"
TEXTURE_KIND = "vtex_c"
LOADING_SCREEN_DIR = "panorama/images/loadingscreens"
IMAGE_DIR_PREFIX = "panorama/images/"  # Stripped before matching item asset paths

# items_game.txt
ITEMS_KEY = '"items"'
RESERVED_KEYS = frozenset({"default"})
LOADING_SCREEN_TYPE = "loading_screen"
FIELD_KEYS = {"name": "name", "prefab": "type", "asset": "path"}

# Localized style names, e.g. "#DOTA_Item_Axe_Loading_Screen_Style1"
LOCALIZATION_MARKER = "#"
CONSOLE_PREFIX = "console/"
STYLE_NAME_RE = re.compile(r'^#DOTA_Item_(\w+?)(?:_Loading_Screen)?(?:_[^\W_]*)?$')

# Output
JSON_DB = "loadingscreens-db.json"
JSON_OUTPUT = "loadingscreens.json"
IMAGE_SUBDIR = "out"
IMAGE_SIZE = (1920, 1080)
IMAGE_FORMATS = {"jpeg": "JPEG", "png": "PNG"}
INVALID_FILE_CHARS = re.compile(r'[<>:"/\\|?*]')
DEFAULT_DECODER = 'Source2Viewer-CLI -i "{input}" -o "{output}"'
NAME_LIMIT = 30


def limit_string(text: str, limit: int = NAME_LIMIT) -> str:
    """Truncate text to limit characters, marking the cut with '...'."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
