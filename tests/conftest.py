"""Shared fakes for the archive and texture collaborators."""

from typing import Callable, Dict, List, Optional

import pytest
from PIL import Image

from dota_loadscreen_export.constants import ITEMS_GAME_PATH
from dota_loadscreen_export.reconcile import AssetEntry


ITEMS_GAME = """"items_game"
{
	"game_info"
	{
		"first_valid_class"		"2"
	}
	"items"
	{
		"default"
		{
			"name"		"default"
			"prefab"		"default"
		}
		"100"
		{
			"name"		"Axe Loading Screen"
			"prefab"		"loading_screen"
			"asset"		"loadingscreens/axe/axe"
		}
		"101"
		{
			"name"		"Wooden Ward"
			"prefab"		"ward"
		}

		"102"
		{
			"name"		"Frost Loading Screen"
			"prefab"		"loading_screen"
			"visuals"
			{
				"styles"
				{
					"0"
					{
						"name"		"#DOTA_Item_Crystal_Maiden_Loading_Screen_Style1"
					}
				}
			}
			"asset"		"console/loadingscreens/cm/cm"
		}
		"103"
		{
			"name"		"Lost Loading Screen"
			"prefab"		"loading_screen"
			"asset"		"loadingscreens/lost/lost"
		}
	}
	"item_sets"
	{
		"set"
		{
			"name"		"not an item"
		}
	}
}
"""


class FakeArchive:
    """In-memory stand-in for Dota2Archive."""

    def __init__(self, entries: List[AssetEntry], items_game: str = ITEMS_GAME):
        self.entries = entries
        self.files: Dict[str, bytes] = {ITEMS_GAME_PATH: items_game.encode("ascii")}

    def fetch_entries(self, kind: str, predicate: Optional[Callable] = None) -> List[AssetEntry]:
        return [
            e for e in self.entries
            if e.full_path.endswith("." + kind) and (predicate is None or predicate(e))
        ]

    def read_entry(self, path: str) -> bytes:
        if path not in self.files:
            raise FileNotFoundError(path)
        return self.files[path]


class FakeDecoder:
    """Texture decoder returning blank images, failing for chosen paths."""

    def __init__(self, fail_paths=()):
        self.fail_paths = set(fail_paths)
        self.decoded: List[str] = []

    def decode_and_resize(self, entry: AssetEntry) -> Image.Image:
        if entry.full_path in self.fail_paths:
            raise RuntimeError(f"cannot decode {entry.full_path}")
        self.decoded.append(entry.full_path)
        return Image.new("RGBA", (16, 9), (255, 0, 0, 255))


@pytest.fixture
def loading_screen_entries() -> List[AssetEntry]:
    return [
        AssetEntry("panorama/images/loadingscreens/axe/axe.vtex_c", 111, 50),
        AssetEntry("panorama/images/loadingscreens/cm/cm.vtex_c", 222, 60),
        AssetEntry("panorama/images/heroes/axe.vtex_c", 333, 70),
    ]
