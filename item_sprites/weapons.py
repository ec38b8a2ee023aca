"""
Axe and bow generators.

Each generator rolls its structural parameters from a seeded RNG, draws the
spine of the item first (haft, limbs) and hangs the remaining parts off the
geometry the spine reports back.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from . import canvas
from .axe_head import BladeParams, rasterize_axe_head
from .bow_parts import (
    ArrowParams,
    GripParams,
    LimbParams,
    StringParams,
    rasterize_arrow,
    rasterize_grip,
    rasterize_limbs,
    rasterize_string,
)
from .canvas import LOGICAL_GRID_HEIGHT, LOGICAL_GRID_WIDTH, SurfaceError
from .items import ItemDescription, display_name, error_item, resolve_variant
from .palettes import get_palette
from .rng import chance, new_seed, pick, rand_int, rand_range, rng_for
from .shaft import PommelParams, ShaftParams, rasterize_shaft
from .styles import (
    ArrowheadShape,
    AxeType,
    BladeShape,
    BowType,
    EdgeProfile,
    FletchingStyle,
    PommelShape,
    ShaftStyle,
    TipStyle,
)

logger = logging.getLogger(__name__)

# axe layout
AXE_PADDING_X = 8
AXE_PADDING_Y = 4
MIN_SHAFT_LENGTH = 20
MAX_SHAFT_LENGTH = LOGICAL_GRID_HEIGHT - AXE_PADDING_Y * 2 - 10
MIN_BLADE_LENGTH = 8
MIN_BLADE_HEIGHT = 10

AXE_SUB_TYPES = {
    "hand_axe": AxeType.HAND_AXE,
    "battle_axe": AxeType.BATTLE_AXE,
    "double_axe": AxeType.DOUBLE_AXE,
}

SHAFT_MATERIALS = ("WOOD", "DARK_STEEL", "BONE")
WOOD_SHAFT_CHANCE = 0.85
GRIP_MATERIALS = ("LEATHER", "DARK_STEEL", "IRON")
RING_MATERIALS = ("IRON", "STEEL", "BRONZE", "GOLD")
POMMEL_CHANCE = 0.75
HEAD_MATERIALS = ("STEEL", "IRON", "DARK_STEEL", "BRONZE", "OBSIDIAN", "ENCHANTED")

# bow layout
BOW_PADDING = 4
ARROW_OFFSET_X = 10

BOW_SUB_TYPES = {bow_type.value: bow_type for bow_type in BowType}

BOW_MATERIALS = ("WOOD", "BONE", "DARK_STEEL", "OBSIDIAN", "ENCHANTED", "RED_PAINT", "BLUE_PAINT")
WRAP_CHANCE = 0.6
WRAP_MATERIALS = ("LEATHER", "ENCHANTED", "IRON", "STEEL")
REINFORCED_GRIP_CHANCE = 0.3
REINFORCED_GRIP_MATERIALS = ("IRON", "STEEL", "BRONZE")
STRING_MATERIALS = ("LEATHER", "SILVER", "IRON", "BLACK_PAINT")
ARROW_SHAFT_MATERIALS = ("WOOD", "BONE")
ARROWHEAD_MATERIALS = ("IRON", "STEEL", "OBSIDIAN", "BRONZE")
FLETCHING_MATERIALS = ("WHITE_PAINT", "RED_PAINT", "BLUE_PAINT", "GREEN_PAINT", "LEATHER")


@dataclass(frozen=True)
class AxeProportions:
    shaft_length: tuple[float, float]
    blade_length: tuple[float, float]
    blade_height: tuple[float, float]
    spike_chance: float
    spike_length: tuple[float, float] = (0.0, 0.0)


AXE_PROPORTIONS = {
    AxeType.HAND_AXE: AxeProportions(
        shaft_length=(MIN_SHAFT_LENGTH, math.floor(MAX_SHAFT_LENGTH * 0.6)),
        blade_length=(math.floor(LOGICAL_GRID_WIDTH * 0.18), math.floor(LOGICAL_GRID_WIDTH * 0.25)),
        blade_height=(0.7, 1.2),
        spike_chance=0.4,
        spike_length=(0.3, 0.6),
    ),
    AxeType.BATTLE_AXE: AxeProportions(
        shaft_length=(math.floor(MAX_SHAFT_LENGTH * 0.75), MAX_SHAFT_LENGTH),
        blade_length=(math.floor(LOGICAL_GRID_WIDTH * 0.25), math.floor(LOGICAL_GRID_WIDTH * 0.4)),
        blade_height=(0.6, 1.1),
        spike_chance=0.6,
        spike_length=(0.4, 0.8),
    ),
    AxeType.DOUBLE_AXE: AxeProportions(
        shaft_length=(math.floor(MAX_SHAFT_LENGTH * 0.7), MAX_SHAFT_LENGTH - 2),
        blade_length=(math.floor(LOGICAL_GRID_WIDTH * 0.22), math.floor(LOGICAL_GRID_WIDTH * 0.35)),
        blade_height=(0.75, 1.2),
        spike_chance=0.0,
    ),
}


@dataclass(frozen=True)
class BowProportions:
    length: tuple[float, float]
    curve: tuple[int, int]
    thickness: tuple[int, int]


BOW_PROPORTIONS = {
    BowType.LONGBOW: BowProportions(
        length=(LOGICAL_GRID_HEIGHT * 0.7, LOGICAL_GRID_HEIGHT - BOW_PADDING * 2.5),
        curve=(5, 8),
        thickness=(2, 3),
    ),
    BowType.SHORTBOW: BowProportions(
        length=(LOGICAL_GRID_HEIGHT * 0.45, LOGICAL_GRID_HEIGHT * 0.65),
        curve=(7, 11),
        thickness=(2, 4),
    ),
    BowType.RECURVE: BowProportions(
        length=(LOGICAL_GRID_HEIGHT * 0.55, LOGICAL_GRID_HEIGHT * 0.75),
        curve=(8, 13),
        thickness=(2, 3),
    ),
}


def _pommel_shape(requested: PommelShape | str | None, rng) -> PommelShape | None:
    if requested is None:
        return pick(rng, list(PommelShape)) if chance(rng, POMMEL_CHANCE) else None
    try:
        return PommelShape(str(requested).strip().lower())
    except ValueError:
        logger.warning("unknown pommel shape %r, choosing a random one", requested)
        return pick(rng, list(PommelShape))


def generate_axe(
    sub_type: str | None = None,
    seed: int | str | None = None,
    pommel_shape: PommelShape | str | None = None,
) -> ItemDescription:
    seed = new_seed() if seed is None else seed
    rng = rng_for(seed)
    sub_type, axe_type = resolve_variant("axe", AXE_SUB_TYPES, sub_type, rng)
    proportions = AXE_PROPORTIONS[axe_type]

    shaft_material = "WOOD" if chance(rng, WOOD_SHAFT_CHANCE) else pick(rng, SHAFT_MATERIALS)
    shaft_palette = get_palette(shaft_material)
    shaft_thickness = rand_int(rng, 2, 3)
    shaft_style = pick(rng, list(ShaftStyle))
    accent_material = None
    ring_count = 0
    if shaft_style is ShaftStyle.WRAPPED_GRIP:
        accent_material = pick(rng, GRIP_MATERIALS)
    elif shaft_style is ShaftStyle.RINGED_SHAFT:
        accent_material = pick(rng, RING_MATERIALS)
        ring_count = rand_int(rng, 1, 2)

    pommel = None
    pommel_material = None
    shape = _pommel_shape(pommel_shape, rng)
    if shape is not None:
        pommel_material = pick(rng, ("IRON", "STEEL", "BRONZE", shaft_material, "GOLD"))
        pommel = PommelParams(shape=shape, palette=get_palette(pommel_material))

    shaft_length = rand_int(rng, *proportions.shaft_length)
    shaft = ShaftParams(
        length=shaft_length,
        thickness=shaft_thickness,
        palette=shaft_palette,
        grained=shaft_material == "WOOD",
        style=shaft_style,
        accent_palette=get_palette(accent_material) if accent_material else None,
        ring_count=ring_count,
        pommel=pommel,
    )

    head_material = pick(rng, HEAD_MATERIALS)
    head_palette = get_palette(head_material)
    blade_length = max(MIN_BLADE_LENGTH, rand_int(rng, *proportions.blade_length))
    blade_height = max(MIN_BLADE_HEIGHT, math.floor(blade_length * rand_range(rng, *proportions.blade_height)))
    spike_length = 0
    if chance(rng, proportions.spike_chance):
        spike_length = max(1, math.floor(blade_length * rand_range(rng, *proportions.spike_length)))
    blade = BladeParams(
        shape=pick(rng, list(BladeShape)),
        edge_profile=pick(rng, list(EdgeProfile)),
        curve_intensity=rand_range(rng, 0.25, 0.85),
        length=blade_length,
        height=blade_height,
        palette=head_palette,
        connection_width=rand_int(rng, 3, 4),
        spike_length=spike_length,
    )
    side = pick(rng, (-1, 1))

    try:
        surface = canvas.create_surface(LOGICAL_GRID_WIDTH, LOGICAL_GRID_HEIGHT)
    except SurfaceError as exc:
        logger.error("axe surface unavailable: %s", exc)
        return error_item("axe", seed, str(exc))

    total_height = shaft_length + blade_height * 0.15
    top_y = LOGICAL_GRID_HEIGHT // 2 - math.floor(total_height / 2)
    shaft_top_y = top_y + math.floor(blade_height * 0.05)
    # keep the top blade row on the canvas
    shaft_top_y = max(shaft_top_y, blade_height // 2 - math.floor(blade_height * 0.1))
    shaft_x = LOGICAL_GRID_WIDTH // 2

    shaft_facts = rasterize_shaft(surface, shaft, shaft_x, shaft_top_y, rng)
    head_facts = rasterize_axe_head(surface, axe_type, blade, shaft_x, shaft_top_y, shaft_facts.thickness, side)

    name_parts = [f"{head_palette.name} {blade.shape.label}"]
    if blade.edge_profile is not EdgeProfile.STRAIGHT:
        name_parts.append(f"({blade.edge_profile.label})")
    name_parts.append(display_name(sub_type))
    if shaft_style is not ShaftStyle.PLAIN:
        name_parts.append(f"with {shaft_style.label}")
    if pommel is not None:
        name_parts.append(f"and {pommel.shape.label} Pommel")
    if spike_length and axe_type is not AxeType.DOUBLE_AXE:
        name_parts.append("with Spike Poll")
    name_parts.append(f"(Shaft: {shaft_palette.name})")
    name = " ".join(name_parts)

    pommel_facts = shaft_facts.pommel
    item_data = {
        "axe_type": axe_type.value,
        "sub_type": sub_type,
        "shaft": {
            "material": shaft_material.lower(),
            "length": shaft_length,
            "thickness": shaft_facts.thickness,
            "style": shaft_style.value,
            "accent_material": accent_material.lower() if accent_material else None,
            "ring_count": ring_count,
            "has_pommel": pommel is not None,
            "pommel": {
                "shape": pommel.shape.value,
                "material": pommel_material.lower(),
                "width": pommel_facts.width,
                "height": pommel_facts.height,
                "colors": pommel.palette.as_dict(),
            } if pommel is not None and pommel_facts is not None else None,
            "colors": shaft_palette.as_dict(),
        },
        "head": {
            "material": head_material.lower(),
            "blade_shape": blade.shape.value,
            "edge_profile": blade.edge_profile.value,
            "curve_intensity": round(blade.curve_intensity, 3),
            "blade_length": blade_length,
            "blade_height": blade_height,
            "has_spike_poll": bool(spike_length) and axe_type is not AxeType.DOUBLE_AXE,
            "spike_length": spike_length if axe_type is not AxeType.DOUBLE_AXE else 0,
            "sides": [facts.side for facts in head_facts.blades],
            "top_y": min(facts.min_y for facts in head_facts.blades),
            "bottom_y": max(facts.max_y for facts in head_facts.blades),
            "min_segment": min(facts.min_segment for facts in head_facts.blades),
            "colors": head_palette.as_dict(),
        },
    }
    logger.debug("generated axe %r (seed %s)", name, seed)
    return ItemDescription(type="axe", name=name, seed=seed, item_data=item_data,
                           image_data_url=surface.to_data_url())


def generate_bow(sub_type: str | None = None, seed: int | str | None = None) -> ItemDescription:
    seed = new_seed() if seed is None else seed
    rng = rng_for(seed)
    sub_type, bow_type = resolve_variant("bow", BOW_SUB_TYPES, sub_type, rng)
    proportions = BOW_PROPORTIONS[bow_type]

    material = pick(rng, BOW_MATERIALS)
    palette = get_palette(material)
    length = rand_int(rng, *proportions.length)
    max_curve = rand_int(rng, *proportions.curve)
    thickness = rand_int(rng, *proportions.thickness)
    tip_style = pick(rng, list(TipStyle))

    grip_length = math.floor(length * rand_range(rng, 0.15, 0.25))
    grip_thickness = thickness + rand_int(rng, 1, 2)
    wrapped = chance(rng, WRAP_CHANCE)
    grip_material = material
    if wrapped:
        grip_material = pick(rng, WRAP_MATERIALS)
    elif chance(rng, REINFORCED_GRIP_CHANCE) and material not in ("DARK_STEEL", "OBSIDIAN"):
        grip_material = pick(rng, REINFORCED_GRIP_MATERIALS)
    grip = GripParams(length=grip_length, thickness=grip_thickness, palette=get_palette(grip_material),
                      wrapped=wrapped)

    string_material = pick(rng, STRING_MATERIALS)
    string = StringParams(palette=get_palette(string_material))

    arrow_shaft_material = pick(rng, ARROW_SHAFT_MATERIALS)
    arrowhead_material = pick(rng, ARROWHEAD_MATERIALS)
    fletching_material = pick(rng, FLETCHING_MATERIALS)
    arrow = ArrowParams(
        shaft_length=math.floor(length * rand_range(rng, 0.65, 0.75)),
        shaft_palette=get_palette(arrow_shaft_material),
        head_shape=pick(rng, list(ArrowheadShape)),
        head_palette=get_palette(arrowhead_material),
        head_length=rand_int(rng, 3, 5),
        head_width=rand_int(rng, 2, 3),
        fletching_style=pick(rng, list(FletchingStyle)),
        fletching_palette=get_palette(fletching_material),
        fletching_length=rand_int(rng, 5, 8),
        fletching_width=rand_int(rng, 1, 2),
    )
    limbs = LimbParams(bow_type=bow_type, length=length, max_curve=max_curve, thickness=thickness,
                       palette=palette, tip_style=tip_style)

    try:
        surface = canvas.create_surface(LOGICAL_GRID_WIDTH, LOGICAL_GRID_HEIGHT)
    except SurfaceError as exc:
        logger.error("bow surface unavailable: %s", exc)
        return error_item("bow", seed, str(exc))

    string_x = LOGICAL_GRID_WIDTH // 3
    center_y = LOGICAL_GRID_HEIGHT // 2
    half = length // 2

    rasterize_string(surface, string, string_x, center_y - half, center_y + half, center_y)
    limb_facts = rasterize_limbs(surface, limbs, string_x, center_y)
    belly = limb_facts.rows.get(center_y)
    grip_x = belly.x_start + belly.width // 2 if belly is not None else string_x - max_curve
    grip_span = rasterize_grip(surface, grip, grip_x, center_y)
    arrow_x = string_x + max_curve + ARROW_OFFSET_X
    arrow_facts = rasterize_arrow(surface, arrow, arrow_x, center_y - arrow.shaft_length // 2)

    name = f"{palette.name} {display_name(sub_type)}"
    if tip_style is TipStyle.NOCKED:
        name += " (Nocked)"
    if grip_material != material:
        name += f" with {get_palette(grip_material).name} Grip"
    name += " & Arrow"

    item_data = {
        "bow_type": bow_type.value,
        "sub_type": sub_type,
        "material": material.lower(),
        "length": length,
        "curve": max_curve,
        "limb_thickness": thickness,
        "tip_style": tip_style.value,
        "top_y": limb_facts.top_y,
        "bottom_y": limb_facts.bottom_y,
        "colors": palette.as_dict(),
        "grip": {
            "length": grip_length,
            "thickness": grip_thickness,
            "x": grip_span.x_start,
            "material": grip_material.lower(),
            "wrapped": wrapped,
            "colors": grip.palette.as_dict(),
        },
        "string": {
            "material": string_material.lower(),
            "thickness": string.thickness,
            "x": string_x,
            "colors": string.palette.as_dict(),
        },
        "arrow": {
            "shaft_material": arrow_shaft_material.lower(),
            "shaft_length": arrow.shaft_length,
            "arrowhead_material": arrowhead_material.lower(),
            "arrowhead_shape": arrow.head_shape.value,
            "fletching_material": fletching_material.lower(),
            "fletching_style": arrow.fletching_style.value,
            "x": arrow_facts.x,
            "tip_y": arrow_facts.tip_y,
            "bottom_y": arrow_facts.bottom_y,
        },
    }
    logger.debug("generated bow %r (seed %s)", name, seed)
    return ItemDescription(type="bow", name=name, seed=seed, item_data=item_data,
                           image_data_url=surface.to_data_url())
