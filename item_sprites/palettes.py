"""
Material palettes: named base/shadow/highlight/outline swatches for every
material an item can be made of.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass

logger = logging.getLogger(__name__)

DEFAULT_MATERIAL = "IRON"


@dataclass(frozen=True)
class Palette:
    name: str
    base: str
    shadow: str
    highlight: str
    outline: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return asdict(self)


def _palette(name: str, base: str, shadow: str, highlight: str, outline: str) -> Palette:
    return Palette(name=name, base=base, shadow=shadow, highlight=highlight, outline=outline)


MATERIAL_PALETTES: dict[str, Palette] = {
    # metals
    "IRON": _palette("Iron", "#8A8A8A", "#6B6B6B", "#A9A9A9", "#4D4D4D"),
    "STEEL": _palette("Steel", "#B0C4DE", "#778899", "#E6E6FA", "#46505A"),
    "DARK_STEEL": _palette("Dark Steel", "#5A5A6A", "#3E3E48", "#7E7E8C", "#2C2C33"),
    "GOLD": _palette("Gold", "#FFD700", "#B8860B", "#FFFACD", "#806000"),
    "BRONZE": _palette("Bronze", "#CD7F32", "#8C5A23", "#D2A679", "#5D3A1A"),
    "SILVER": _palette("Silver", "#C0C0C0", "#A0A0A0", "#E0E0E0", "#707070"),
    "COPPER": _palette("Copper", "#B87333", "#8C5828", "#D9904A", "#5A3A1A"),
    # organics
    "WOOD": _palette("Wood", "#8B4513", "#5C2E0D", "#A0522D", "#3E1F09"),
    "BONE": _palette("Bone", "#F5F5DC", "#D2B48C", "#FFFFF0", "#A08C78"),
    "IVORY": _palette("Ivory", "#FFFFF0", "#E0E0D1", "#FFFFFF", "#B0B0A1"),
    "GREEN_LEAF": _palette("Green Leaf", "#2E8B57", "#1E5638", "#3CB371", "#143D24"),
    "PAPER": _palette("Paper", "#FEFDF4", "#EAE8D8", "#FFFFFF", "#C0B8A8"),
    "PARCHMENT": _palette("Parchment", "#F5EAAA", "#D2B48C", "#FFF8DC", "#A08C78"),
    # leathers
    "LEATHER": _palette("Leather", "#A0522D", "#5F341A", "#CD853F", "#4A2914"),
    "BLACK_LEATHER": _palette("Black Leather", "#3A3A3A", "#202020", "#555555", "#101010"),
    "WHITE_LEATHER": _palette("White Leather", "#F0EBE0", "#D4CCC0", "#FFFFFF", "#B0A89F"),
    "DARK_BROWN_LEATHER": _palette("Dark Brown Leather", "#5D3A1A", "#3E1F09", "#7B4F2E", "#2C1505"),
    "RED_LEATHER": _palette("Red Leather", "#8B0000", "#5E0000", "#B22222", "#400000"),
    "GREEN_LEATHER": _palette("Green Leather", "#006400", "#004D00", "#228B22", "#002A00"),
    "BLUE_LEATHER": _palette("Blue Leather", "#00008B", "#00005E", "#4169E1", "#000040"),
    # stone and glass-like
    "OBSIDIAN": _palette("Obsidian", "#201A23", "#0D0C0F", "#3A3042", "#000000"),
    "STONE": _palette("Stone", "#808080", "#5A5A5A", "#A9A9A9", "#404040"),
    # paints
    "RED_PAINT": _palette("Red Paint", "#B22222", "#800000", "#DC143C", "#500000"),
    "GREEN_PAINT": _palette("Green Paint", "#228B22", "#006400", "#3CB371", "#003300"),
    "BLUE_PAINT": _palette("Blue Paint", "#4682B4", "#000080", "#5F9EA0", "#000050"),
    "BLACK_PAINT": _palette("Black Paint", "#2F4F4F", "#1C1C1C", "#556B2F", "#000000"),
    "WHITE_PAINT": _palette("White Paint", "#F5F5F5", "#D3D3D3", "#FFFFFF", "#A9A9A9"),
    "YELLOW_PAINT": _palette("Yellow Paint", "#FFD700", "#DAA520", "#FFFFE0", "#B8860B"),
    "PURPLE_PAINT": _palette("Purple Paint", "#8A2BE2", "#4B0082", "#9932CC", "#3A005A"),
    # gems
    "GEM_RED": _palette("Red Gem", "#FF0000", "#8B0000", "#FFC0CB", "#4D0000"),
    "GEM_BLUE": _palette("Blue Gem", "#0000FF", "#00008B", "#ADD8E6", "#00004D"),
    "GEM_GREEN": _palette("Green Gem", "#008000", "#006400", "#90EE90", "#003300"),
    "GEM_PURPLE": _palette("Purple Gem", "#800080", "#4B0082", "#DA70D6", "#300030"),
    "GEM_YELLOW": _palette("Yellow Gem", "#FFDB58", "#B8860B", "#FFFFE0", "#A07400"),
    "GEM_ORANGE": _palette("Orange Gem", "#FFA500", "#CC8400", "#FFDAB9", "#A66300"),
    "GEM_CYAN": _palette("Cyan Gem", "#00FFFF", "#008B8B", "#E0FFFF", "#006060"),
    "GEM_WHITE": _palette("White Gem", "#F0F8FF", "#B0C4DE", "#FFFFFF", "#778899"),
    "PEARL": _palette("Pearl", "#FDF5E6", "#E0D8C9", "#FFFFFF", "#C0B8AB"),
    "OPAL": _palette("Opal", "#E6E6FA", "#B0C4DE", "#FFFFFF", "#A0A0C0"),
    # magic
    "ENCHANTED": _palette("Enchanted", "#7B68EE", "#483D8B", "#AFEEEE", "#2F2074"),
}

LEATHER_MATERIALS = (
    "LEATHER",
    "BLACK_LEATHER",
    "WHITE_LEATHER",
    "DARK_BROWN_LEATHER",
    "RED_LEATHER",
    "GREEN_LEATHER",
    "BLUE_LEATHER",
)

METAL_MATERIALS = (
    "STEEL",
    "IRON",
    "DARK_STEEL",
    "BRONZE",
    "SILVER",
    "GOLD",
    "ENCHANTED",
    "OBSIDIAN",
)


def get_palette(name: str | None) -> Palette:
    """Look a material up case-insensitively, falling back to iron."""
    if not name:
        logger.warning("palette name is empty, using %s", DEFAULT_MATERIAL)
        return MATERIAL_PALETTES[DEFAULT_MATERIAL]

    palette = MATERIAL_PALETTES.get(str(name).strip().upper())
    if palette is None:
        logger.warning("palette %r not found, using %s", name, DEFAULT_MATERIAL)
        return MATERIAL_PALETTES[DEFAULT_MATERIAL]
    return palette
