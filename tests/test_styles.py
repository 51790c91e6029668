"""Tests for styles module."""

import pytest

from dota_loadscreen_export.errors import NamingError
from dota_loadscreen_export.item_db import DotaItem
from dota_loadscreen_export.styles import fixup_styles


class TestFixupStyles:
    """Test display names of styled loading screens."""

    def test_style_name_and_console_path(self) -> None:
        """Test the localization key is turned into a name and the console prefix dropped."""
        item = DotaItem(5, "#DOTA_Item_Axe_Loading_Screen_Style1", "loading_screen", "console/foo/bar")
        assert fixup_styles(item) == DotaItem(5, "Axe", "loading_screen", "foo/bar")

    @pytest.mark.parametrize("name, expected", [
        ("#DOTA_Item_Crystal_Maiden_Loading_Screen_Style2", "Crystal Maiden"),
        ("#DOTA_Item_Crystal_Maiden_Loading_Screen", "Crystal Maiden"),
        ("#DOTA_Item_Dark_Willow_Style1", "Dark Willow"),
        ("#DOTA_Item_Axe", "Axe"),
    ])
    def test_name_variants(self, name, expected) -> None:
        """Test the suffix and the trailing style segment are optional."""
        assert fixup_styles(DotaItem(1, name, "loading_screen", "p")).name == expected

    def test_id_is_kept(self) -> None:
        """Test that normalizing never changes the item id."""
        item = DotaItem(9001, "#DOTA_Item_Axe_Loading_Screen_Style1", "loading_screen", "x")
        assert fixup_styles(item).id == 9001

    def test_path_without_console_prefix(self) -> None:
        """Test that other paths are left alone."""
        item = DotaItem(1, "#DOTA_Item_Axe_Loading_Screen_Style1", "loading_screen", "loadingscreens/axe")
        assert fixup_styles(item).path == "loadingscreens/axe"

    def test_plain_names_unchanged(self) -> None:
        """Test that items without the marker pass through, console path included."""
        item = DotaItem(1, "Axe Loading Screen", "loading_screen", "console/foo")
        assert fixup_styles(item) is item

    @pytest.mark.parametrize("name", ["#", "#DOTA_Item_", "#DOTA_Hero_Axe", "#DOTA_Item_Axe-Style"])
    def test_malformed_key(self, name) -> None:
        """Test that marked names of an unexpected shape are rejected."""
        with pytest.raises(NamingError, match="Unexpected localization key"):
            fixup_styles(DotaItem(1, name, "loading_screen", "p"))
