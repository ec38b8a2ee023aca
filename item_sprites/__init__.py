"""Procedural pixel-art sprites for axes, bows, armor and boots."""
from .api import CATEGORIES, generate_item, list_categories, list_sub_types
from .apparel import generate_armor, generate_boots
from .canvas import SurfaceError
from .items import ItemDescription
from .logging_config import setup_logging
from .palettes import MATERIAL_PALETTES, Palette, get_palette
from .weapons import generate_axe, generate_bow

__all__ = [
    "CATEGORIES",
    "ItemDescription",
    "MATERIAL_PALETTES",
    "Palette",
    "SurfaceError",
    "generate_armor",
    "generate_axe",
    "generate_boots",
    "generate_bow",
    "generate_item",
    "get_palette",
    "list_categories",
    "list_sub_types",
    "setup_logging",
]
