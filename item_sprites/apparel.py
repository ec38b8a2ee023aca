"""
Armor and boots generators.
"""
from __future__ import annotations

import logging
import math

from . import canvas
from .boot_parts import BOOT_AREA_HEIGHT, BOOT_AREA_WIDTH, BootParams, rasterize_boot
from .canvas import LOGICAL_GRID_HEIGHT, LOGICAL_GRID_WIDTH, SurfaceError
from .items import ItemDescription, display_name, error_item, resolve_variant
from .palettes import LEATHER_MATERIALS, METAL_MATERIALS, get_palette
from .pauldrons import PauldronParams, fit_pauldron_size, rasterize_pauldrons
from .rng import chance, new_seed, pick, rand_int, rand_range, rng_for
from .styles import (
    ArmorStyle,
    BootType,
    Decoration,
    HeelStyle,
    Neckline,
    PauldronStyle,
    ToeShape,
)
from .torso import DecorationParams, TorsoParams, rasterize_decoration, rasterize_torso, torso_width

logger = logging.getLogger(__name__)

# armor
ARMOR_PADDING = 4

ARMOR_SUB_TYPES = {
    "plate_armor": (ArmorStyle.SMOOTH_PLATE, ArmorStyle.MUSCLED_PLATE),
    "leather_armor": (ArmorStyle.LEATHER_VEST,),
}

LEATHER_PAULDRON_NONE_CHANCE = 0.6
PLATE_PAULDRON_REROLL_CHANCE = 0.7
PLATE_PAULDRON_MATERIALS = ("STEEL", "IRON", "DARK_STEEL", "BRONZE")
DECORATION_MATERIALS = (
    "GOLD", "SILVER", "BRONZE", "ENCHANTED", "RED_PAINT", "BLUE_PAINT", "BLACK_PAINT", "WHITE_PAINT",
)
LEATHER_DECORATION_MATERIALS = ("RED_PAINT", "BLUE_PAINT", "BLACK_PAINT", "WHITE_PAINT") + LEATHER_MATERIALS

# boots
PAIR_SPACING = 2
BOOTS_CANVAS_WIDTH = BOOT_AREA_WIDTH * 2 + PAIR_SPACING + 4
BOOTS_CANVAS_HEIGHT = BOOT_AREA_HEIGHT
BOOTS_PADDING_Y = 2

BOOT_SUB_TYPES = {boot_type.value: boot_type for boot_type in BootType}

BOOT_MATERIALS = (
    "LEATHER", "DARK_STEEL", "IRON", "BRONZE", "BLACK_PAINT", "RED_PAINT",
    "BONE", "BLUE_PAINT", "GREEN_PAINT", "OBSIDIAN", "ENCHANTED",
)
SOLE_MATERIALS = ("LEATHER", "WOOD", "IRON", "BLACK_PAINT", "DARK_STEEL", "STONE", "OBSIDIAN")
CUFF_CHANCE = 0.65
# fur cuffs borrow the nearest existing swatch
CUFF_MATERIALS = {
    "LEATHER": "LEATHER",
    "GOLD": "GOLD",
    "SILVER": "SILVER",
    "WHITE_PAINT": "WHITE_PAINT",
    "WOOD": "WOOD",
    "BONE": "BONE",
    "FUR_WHITE": "BONE",
    "FUR_BROWN": "WOOD",
}
BUCKLE_CHANCE = 0.5
BUCKLE_MATERIALS = ("IRON", "STEEL", "BRONZE", "SILVER", "GOLD")
HEEL_HEIGHTS = {
    HeelStyle.NONE: (0, 0),
    HeelStyle.LOW_BLOCK: (2, 3),
    HeelStyle.MEDIUM_BLOCK: (3, 5),
}


def _pauldron_style(armor_style: ArmorStyle, rng) -> PauldronStyle:
    styles = list(PauldronStyle)
    if armor_style is ArmorStyle.LEATHER_VEST and chance(rng, LEATHER_PAULDRON_NONE_CHANCE):
        return PauldronStyle.NONE
    style = pick(rng, styles)
    if armor_style.is_plate and style is PauldronStyle.NONE and chance(rng, PLATE_PAULDRON_REROLL_CHANCE):
        style = pick(rng, [s for s in styles if s is not PauldronStyle.NONE])
    return style


def generate_armor(sub_type: str | None = None, seed: int | str | None = None) -> ItemDescription:
    seed = new_seed() if seed is None else seed
    rng = rng_for(seed)
    sub_type, styles = resolve_variant("armor", ARMOR_SUB_TYPES, sub_type, rng)
    armor_style = pick(rng, styles)

    family = LEATHER_MATERIALS if armor_style is ArmorStyle.LEATHER_VEST else METAL_MATERIALS
    material = pick(rng, family)
    palette = get_palette(material)

    base_width = rand_int(rng, math.floor(LOGICAL_GRID_WIDTH * 0.45), math.floor(LOGICAL_GRID_WIDTH * 0.65))
    torso = TorsoParams(
        height=rand_int(rng, math.floor(LOGICAL_GRID_HEIGHT * 0.6), math.floor(LOGICAL_GRID_HEIGHT * 0.85)),
        base_width=base_width,
        waist_taper=rand_int(rng, math.floor(base_width * 0.15), math.floor(base_width * 0.30)),
        palette=palette,
        style=armor_style,
        neckline=pick(rng, list(Neckline)),
        neckline_depth=rand_int(rng, math.floor(LOGICAL_GRID_HEIGHT * 0.08), math.floor(LOGICAL_GRID_HEIGHT * 0.15)),
        neckline_width=rand_int(rng, math.floor(LOGICAL_GRID_WIDTH * 0.2), math.floor(LOGICAL_GRID_WIDTH * 0.35)),
    )

    pauldron_style = _pauldron_style(armor_style, rng)
    pauldrons = None
    pauldron_material = None
    if pauldron_style is not PauldronStyle.NONE:
        if armor_style is ArmorStyle.LEATHER_VEST:
            pauldron_material = pick(rng, LEATHER_MATERIALS)
        else:
            pauldron_material = pick(rng, [m for m in PLATE_PAULDRON_MATERIALS if m != material] or [material])
        pauldrons = PauldronParams(
            style=pauldron_style,
            size=fit_pauldron_size(rand_range(rng, 0.25, 0.40), torso_width(torso, 0), LOGICAL_GRID_WIDTH),
            palette=get_palette(pauldron_material),
            layers=rand_int(rng, 2, 3) if pauldron_style is PauldronStyle.LAYERED_PLATE else 1,
            spike_size=rand_int(rng, math.floor(LOGICAL_GRID_HEIGHT * 0.05), math.floor(LOGICAL_GRID_HEIGHT * 0.10))
            if pauldron_style is PauldronStyle.SPIKED_PLATE else 0,
        )

    decoration = None
    decoration_material = None
    kind = Decoration.NONE if armor_style is ArmorStyle.MUSCLED_PLATE else pick(rng, list(Decoration))
    if kind is not Decoration.NONE:
        choices = LEATHER_DECORATION_MATERIALS if armor_style is ArmorStyle.LEATHER_VEST else DECORATION_MATERIALS
        decoration_material = pick(rng, [m for m in choices if m != material] or [material])
        decoration = DecorationParams(kind=kind, palette=get_palette(decoration_material),
                                      thickness=rand_int(rng, 2, 4))

    try:
        surface = canvas.create_surface(LOGICAL_GRID_WIDTH, LOGICAL_GRID_HEIGHT)
    except SurfaceError as exc:
        logger.error("armor surface unavailable: %s", exc)
        return error_item("armor", seed, str(exc))

    center_x = LOGICAL_GRID_WIDTH // 2
    top_y = (LOGICAL_GRID_HEIGHT - torso.height) // 2 + ARMOR_PADDING
    torso_facts = rasterize_torso(surface, torso, center_x, top_y)
    if decoration is not None:
        rasterize_decoration(surface, torso_facts, decoration)
    pauldron_facts = rasterize_pauldrons(surface, pauldrons, torso_facts)

    name = f"{palette.name} {display_name(sub_type)}"
    if sub_type == "plate_armor":
        name += f" ({armor_style.label})"
    if decoration is not None:
        name += f" with {decoration.palette.name} {kind.label}"
    if pauldrons is not None:
        name += f" and {pauldrons.palette.name} {pauldron_style.label} Pauldrons"
    name += f" ({torso.neckline.label})"

    item_data = {
        "sub_type": sub_type,
        "style": armor_style.value,
        "material": material.lower(),
        "colors": palette.as_dict(),
        "torso": {
            "height": torso.height,
            "base_width": torso.base_width,
            "waist_taper": torso.waist_taper,
            "shoulder_width": torso_facts.shoulder_width,
            "waist_width": torso_facts.waist_width,
            "neckline": torso.neckline.value,
            "neckline_depth": torso.neckline_depth,
            "neckline_width": torso.neckline_width,
            "decoration": {
                "type": kind.value,
                "material": decoration_material.lower(),
                "thickness": decoration.thickness,
                "colors": decoration.palette.as_dict(),
            } if decoration is not None else None,
        },
        "pauldrons": {
            "style": pauldron_style.value,
            "material": pauldron_material.lower(),
            "size_ratio": round(pauldrons.size, 3),
            "layers": pauldrons.layers,
            "spike_size": pauldrons.spike_size,
            "width": pauldron_facts[0].width,
            "height": pauldron_facts[0].height,
            "colors": pauldrons.palette.as_dict(),
        } if pauldrons is not None else None,
    }
    logger.debug("generated armor %r (seed %s)", name, seed)
    return ItemDescription(type="armor", name=name, seed=seed, item_data=item_data,
                           image_data_url=surface.to_data_url())


def _leg_height(boot_type: BootType, foot_height: int, rng) -> int:
    if boot_type is BootType.ANKLE_BOOT:
        height = rand_int(rng, foot_height, foot_height + 4)
    elif boot_type is BootType.CALF_HIGH:
        height = rand_int(rng, math.floor(BOOT_AREA_HEIGHT * 0.25), math.floor(BOOT_AREA_HEIGHT * 0.45))
    else:
        height = rand_int(rng, math.floor(BOOT_AREA_HEIGHT * 0.4),
                          BOOT_AREA_HEIGHT - foot_height - BOOTS_PADDING_Y - 2)
    return max(4, height)


def generate_boots(sub_type: str | None = None, seed: int | str | None = None) -> ItemDescription:
    seed = new_seed() if seed is None else seed
    rng = rng_for(seed)
    sub_type, boot_type = resolve_variant("boots", BOOT_SUB_TYPES, sub_type, rng)

    toe_shape = pick(rng, list(ToeShape))
    main_material = pick(rng, BOOT_MATERIALS)
    sole_material = pick(rng, SOLE_MATERIALS)

    cuff_material = None
    if chance(rng, CUFF_CHANCE):
        cuff_material = pick(rng, [m for m in CUFF_MATERIALS if m != main_material])

    heel_style = pick(rng, list(HeelStyle))
    heel_height = rand_int(rng, *HEEL_HEIGHTS[heel_style])

    buckle_material = None
    buckle_count = 0
    if chance(rng, BUCKLE_CHANCE):
        buckle_count = rand_int(rng, 1, 2)
        buckle_material = pick(rng, BUCKLE_MATERIALS)

    foot_length = rand_int(rng, math.floor(BOOT_AREA_WIDTH * 0.7), BOOT_AREA_WIDTH - 2)
    foot_height = rand_int(rng, 4, 7) + heel_height
    leg_initial_width = max(4, min(math.floor(foot_length * rand_range(rng, 0.35, 0.55)), 8))
    heel_extension = max(1, math.floor(foot_length * rand_range(rng, 0.05, 0.15)))
    toe_extension = max(math.floor(foot_length * 0.3), foot_length - leg_initial_width - heel_extension)
    leg_height = _leg_height(boot_type, foot_height, rng)
    leg_top_width = max(3, math.floor(leg_initial_width * rand_range(rng, 0.95, 1.25)))

    params = BootParams(
        style=boot_type,
        toe_shape=toe_shape,
        leg_height=leg_height,
        foot_height=foot_height,
        leg_top_width=leg_top_width,
        leg_initial_width=leg_initial_width,
        heel_extension=heel_extension,
        toe_extension=toe_extension,
        main_palette=get_palette(main_material),
        sole_palette=get_palette(sole_material),
        heel_style=heel_style,
        heel_height=heel_height,
        cuff_palette=get_palette(CUFF_MATERIALS[cuff_material]) if cuff_material else None,
        buckle_palette=get_palette(buckle_material) if buckle_material else None,
        buckle_count=buckle_count,
    )

    try:
        surface = canvas.create_surface(BOOTS_CANVAS_WIDTH, BOOTS_CANVAS_HEIGHT)
    except SurfaceError as exc:
        logger.error("boots surface unavailable: %s", exc)
        return error_item("boots", seed, str(exc), BOOTS_CANVAS_WIDTH, BOOTS_CANVAS_HEIGHT)

    padding_x = (BOOTS_CANVAS_WIDTH - (BOOT_AREA_WIDTH * 2 + PAIR_SPACING)) // 2
    total_height = leg_height + foot_height
    top_y = max(BOOTS_PADDING_Y, (BOOT_AREA_HEIGHT - total_height) // 2 + BOOTS_PADDING_Y)
    left = rasterize_boot(surface, params, padding_x, top_y, mirrored=False)
    rasterize_boot(surface, params, padding_x + BOOT_AREA_WIDTH + PAIR_SPACING, top_y, mirrored=True)

    name = f"{params.main_palette.name} {toe_shape.label} {display_name(sub_type)}"
    if heel_style is not HeelStyle.NONE:
        name += f" ({heel_style.label} Heel)"
    if cuff_material:
        name += f" with {display_name(cuff_material.replace('FUR_', '').lower())}"
        name += " Fur Cuff" if cuff_material.startswith("FUR_") else " Cuff"
    if buckle_count:
        name += f" with {buckle_count} Buckle{'s' if buckle_count > 1 else ''}"

    item_data = {
        "sub_type": sub_type,
        "style": boot_type.value,
        "toe_shape": toe_shape.value,
        "main_material": main_material.lower(),
        "sole_material": sole_material.lower(),
        "cuff_material": cuff_material.lower() if cuff_material else None,
        "has_cuff": cuff_material is not None,
        "foot_total_length": params.foot_length,
        "foot_height": foot_height,
        "leg_height": leg_height,
        "leg_initial_width": leg_initial_width,
        "leg_top_width": leg_top_width,
        "heel_extension_length": heel_extension,
        "toe_extension_length": toe_extension,
        "heel_style": heel_style.value,
        "heel_height": heel_height,
        "has_buckles": buckle_count > 0,
        "num_buckles": buckle_count,
        "buckle_material": buckle_material.lower() if buckle_material else None,
        "top_y": top_y,
        "bottom_y": left.bottom_y,
        "colors": {
            "main": params.main_palette.as_dict(),
            "sole": params.sole_palette.as_dict(),
            "cuff": params.cuff_palette.as_dict() if params.cuff_palette else None,
            "buckle": params.buckle_palette.as_dict() if params.buckle_palette else None,
        },
    }
    logger.debug("generated boots %r (seed %s)", name, seed)
    return ItemDescription(type="boots", name=name, seed=seed, item_data=item_data,
                           image_data_url=surface.to_data_url())
