"""Display names for loading screens registered through item styles."""
from dataclasses import replace

from .constants import LOCALIZATION_MARKER, STYLE_NAME_RE, CONSOLE_PREFIX
from .errors import NamingError
from .item_db import DotaItem


def fixup_styles(item: DotaItem) -> DotaItem:
    """Turn a localization key name into a display name.

    Styled loading screens are named after their localization key, e.g.
    ``#DOTA_Item_Axe_Loading_Screen_Style1`` becomes ``Axe``, and their
    asset may live under the console variant directory. Items without the
    marker are returned unchanged.
    """
    if not item.name.startswith(LOCALIZATION_MARKER):
        return item

    match = STYLE_NAME_RE.match(item.name)
    if not match:
        raise NamingError(f"Unexpected localization key {item.name!r} for item {item.id}")

    path = item.path
    if path.startswith(CONSOLE_PREFIX):
        path = path[len(CONSOLE_PREFIX):]
    return replace(item, name=match.group(1).replace("_", " "), path=path)
