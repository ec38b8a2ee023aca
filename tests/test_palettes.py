import logging

from item_sprites.palettes import (
    DEFAULT_MATERIAL,
    LEATHER_MATERIALS,
    MATERIAL_PALETTES,
    METAL_MATERIALS,
    get_palette,
)


def test_lookup_is_case_insensitive():
    """Material names resolve regardless of case or surrounding whitespace."""
    assert get_palette("gold") is MATERIAL_PALETTES["GOLD"]
    assert get_palette("  Dark_Steel ") is MATERIAL_PALETTES["DARK_STEEL"]


def test_unknown_material_falls_back_to_iron(caplog):
    """A miss logs a warning and hands back the default swatch instead of failing."""
    caplog.set_level(logging.WARNING, logger="item_sprites")
    palette = get_palette("MITHRIL")

    assert palette is MATERIAL_PALETTES[DEFAULT_MATERIAL]
    assert "MITHRIL" in caplog.text


def test_empty_material_falls_back_to_iron():
    assert get_palette("") is MATERIAL_PALETTES["IRON"]
    assert get_palette(None) is MATERIAL_PALETTES["IRON"]


def test_table_covers_every_family():
    """
    Every material family the generators draw from must exist in the table,
    otherwise a generator would silently render in iron.
    """
    assert len(MATERIAL_PALETTES) == 40
    for name in LEATHER_MATERIALS + METAL_MATERIALS:
        assert name in MATERIAL_PALETTES

    for palette in MATERIAL_PALETTES.values():
        assert palette.base.startswith("#")
        assert palette.shadow.startswith("#")
        assert palette.highlight.startswith("#")


def test_as_dict_exposes_all_tones():
    colors = get_palette("bronze").as_dict()
    assert set(colors) == {"name", "base", "shadow", "highlight", "outline"}
    assert colors["base"] == "#CD7F32"
