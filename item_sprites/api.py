"""Category registry over the four item generators."""
from __future__ import annotations

import logging
from typing import Callable

from .apparel import ARMOR_SUB_TYPES, BOOT_SUB_TYPES, generate_armor, generate_boots
from .items import ItemDescription, error_item
from .rng import new_seed
from .weapons import AXE_SUB_TYPES, BOW_SUB_TYPES, generate_axe, generate_bow

logger = logging.getLogger(__name__)

Generator = Callable[..., ItemDescription]

CATEGORIES: dict[str, tuple[Generator, tuple[str, ...]]] = {
    "axe": (generate_axe, tuple(AXE_SUB_TYPES)),
    "bow": (generate_bow, tuple(BOW_SUB_TYPES)),
    "armor": (generate_armor, tuple(ARMOR_SUB_TYPES)),
    "boots": (generate_boots, tuple(BOOT_SUB_TYPES)),
}


def list_categories() -> list[str]:
    return list(CATEGORIES)


def list_sub_types(category: str) -> list[str]:
    entry = CATEGORIES.get(str(category).strip().lower())
    return list(entry[1]) if entry else []


def generate_item(
    category: str,
    sub_type: str | None = None,
    seed: int | str | None = None,
) -> ItemDescription:
    key = str(category).strip().lower()
    entry = CATEGORIES.get(key)
    if entry is None:
        logger.warning("unknown item category %r", category)
        return error_item(key or "item", new_seed() if seed is None else seed,
                          f"unknown category: {category}")
    generator, _ = entry
    return generator(sub_type=sub_type, seed=seed)
