from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Mapping, TypeVar

from .canvas import LOGICAL_GRID_HEIGHT, LOGICAL_GRID_WIDTH, error_data_url
from .rng import pick

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass
class ItemDescription:
    type: str
    name: str
    seed: int | str
    item_data: dict[str, Any] = field(default_factory=dict)
    image_data_url: str = ""

    @property
    def failed(self) -> bool:
        return "error" in self.item_data

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "seed": self.seed,
            "item_data": self.item_data,
            "image_data_url": self.image_data_url,
        }


def display_name(token: str) -> str:
    """``"hand_axe"`` -> ``"Hand Axe"``."""
    return " ".join(part.capitalize() for part in str(token).replace("_", " ").split())


def error_item(
    item_type: str,
    seed: int | str,
    error: str,
    width: int = LOGICAL_GRID_WIDTH,
    height: int = LOGICAL_GRID_HEIGHT,
) -> ItemDescription:
    return ItemDescription(
        type=item_type,
        name=f"Error {display_name(item_type)}",
        seed=seed,
        item_data={"error": error},
        image_data_url=error_data_url("CTX Fail", width, height),
    )


def resolve_variant(
    category: str,
    variants: Mapping[str, V],
    requested: str | None,
    rng: random.Random,
) -> tuple[str, V]:
    """Map a requested sub-type onto a known variant, picking one at random on a miss.

    A style token is accepted in place of the sub-type name. When a variant
    is a tuple of styles, matching one member narrows the variant to it.
    """
    if requested:
        key = str(requested).strip().lower()
        for name, variant in variants.items():
            if key == name:
                return name, variant
            if isinstance(variant, tuple):
                matches = tuple(member for member in variant if key == str(member))
                if matches:
                    return name, matches  # type: ignore[return-value]
            elif key == str(variant):
                return name, variant
        logger.warning("unknown %s sub-type %r, choosing a random variant", category, requested)

    name = pick(rng, list(variants))
    return name, variants[name]
