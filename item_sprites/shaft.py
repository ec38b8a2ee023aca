"""Haft rasterizer with grip overlays and the pommel family."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Callable

from .canvas import Surface
from .palettes import Palette
from .profiles import in_disc, on_rim, rim_is_lit
from .rng import rand_int, rand_range
from .styles import PommelShape, ShaftStyle

MIN_POMMEL_WIDTH = 3
GRIP_BAND_EVERY = 3
RING_POSITIONS = (0.25, 0.75)


@dataclass(frozen=True)
class PommelParams:
    shape: PommelShape
    palette: Palette


@dataclass(frozen=True)
class ShaftParams:
    length: int
    thickness: int
    palette: Palette
    grained: bool = False
    style: ShaftStyle = ShaftStyle.PLAIN
    accent_palette: Palette | None = None
    ring_count: int = 0
    pommel: PommelParams | None = None


@dataclass(frozen=True)
class PommelFacts:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class ShaftFacts:
    center_x: int
    top_y: int
    bottom_y: int
    left_x: int
    thickness: int
    pommel: PommelFacts | None = None


def _shade_row(surface: Surface, x: int, y: int, width: int, palette: Palette) -> None:
    surface.block(x, y, width, 1, palette.base)
    surface.block(x, y, 1, 1, palette.highlight)
    if width > 1:
        surface.block(x + width - 1, y, 1, 1, palette.shadow)


def _wrapped_grip(surface: Surface, params: ShaftParams, left: int, top_y: int, rng: random.Random) -> None:
    grip = params.accent_palette or params.palette
    start = params.length // 2
    for i in range(params.length - start):
        y = top_y + start + i
        if i % GRIP_BAND_EVERY == 0:
            surface.block(left, y, params.thickness, 1, grip.shadow)
        else:
            _shade_row(surface, left, y, params.thickness, grip)


def _ringed_shaft(surface: Surface, params: ShaftParams, left: int, top_y: int, rng: random.Random) -> None:
    ring = params.accent_palette or params.palette
    width = params.thickness + 2
    ring_x = left + params.thickness // 2 - width // 2
    for position in RING_POSITIONS[: max(0, params.ring_count)]:
        ring_y = top_y + int(params.length * position) - 1
        for row in range(rand_int(rng, 1, 2)):
            color = ring.highlight if row == 0 else ring.shadow
            surface.block(ring_x, ring_y + row, width, 1, color)


_STYLE_OVERLAYS: dict[ShaftStyle, Callable[[Surface, ShaftParams, int, int, random.Random], None]] = {
    ShaftStyle.WRAPPED_GRIP: _wrapped_grip,
    ShaftStyle.RINGED_SHAFT: _ringed_shaft,
}


def rasterize_shaft(
    surface: Surface,
    params: ShaftParams,
    center_x: int,
    top_y: int,
    rng: random.Random,
) -> ShaftFacts:
    thickness = max(1, params.thickness)
    length = max(1, params.length)
    left = center_x - thickness // 2
    palette = params.palette

    for i in range(length):
        y = top_y + i
        _shade_row(surface, left, y, thickness, palette)
        if params.grained and i % rand_int(rng, 4, 7) == 0:
            surface.block(left + rand_int(rng, 0, thickness - 1), y, 1, 1, palette.shadow)

    overlay = _STYLE_OVERLAYS.get(params.style)
    if overlay is not None:
        overlay(surface, params, left, top_y, rng)

    bottom_y = top_y + length
    pommel = None
    if params.pommel is not None:
        pommel = rasterize_pommel(surface, params.pommel, center_x, bottom_y, thickness, rng)

    return ShaftFacts(
        center_x=center_x,
        top_y=top_y,
        bottom_y=bottom_y,
        left_x=left,
        thickness=thickness,
        pommel=pommel,
    )


def _round_pommel(surface: Surface, palette: Palette, center_x: int, top_y: int, thickness: int,
                  rng: random.Random) -> PommelFacts:
    size = max(MIN_POMMEL_WIDTH, thickness + rand_int(rng, 1, 3))
    radius = size // 2
    cy = top_y + radius
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            if not in_disc(dx, dy, radius):
                continue
            color = palette.base
            if on_rim(dx, dy, radius):
                color = palette.highlight if rim_is_lit(dx, dy) else palette.shadow
            surface.block(center_x + dx, cy + dy, 1, 1, color)
    return PommelFacts(x=center_x - radius, y=top_y, width=2 * radius + 1, height=2 * radius + 1)


def _square_pommel(surface: Surface, palette: Palette, center_x: int, top_y: int, thickness: int,
                   rng: random.Random) -> PommelFacts:
    width = max(MIN_POMMEL_WIDTH, thickness + rand_int(rng, 0, 2))
    height = max(1, int(width * rand_range(rng, 0.5, 1.0)))
    x = center_x - width // 2

    surface.block(x, top_y, width, height, palette.base)
    surface.block(x, top_y + height - 1, width, 1, palette.shadow)
    if width > 1 and height > 1:
        surface.block(x, top_y, 1, height - 1, palette.highlight)
        surface.block(x + width - 1, top_y, 1, height - 1, palette.shadow)
    surface.block(x, top_y, width, 1, palette.highlight)
    return PommelFacts(x=x, y=top_y, width=width, height=height)


def _finial_pommel(surface: Surface, palette: Palette, center_x: int, top_y: int, thickness: int,
                   rng: random.Random) -> PommelFacts:
    block = _square_pommel(surface, palette, center_x, top_y, thickness, rng)
    knob = max(1, block.width - 2)
    knob_y = top_y + block.height
    surface.block(center_x - knob // 2, knob_y, knob, 1, palette.shadow)
    return PommelFacts(x=block.x, y=top_y, width=block.width, height=block.height + 1)


def _pointed_pommel(surface: Surface, palette: Palette, center_x: int, top_y: int, thickness: int,
                    rng: random.Random) -> PommelFacts:
    height = rand_int(rng, 3, 5)
    width = max(thickness, rand_int(rng, thickness, thickness + 1))
    for i in range(height):
        reduction = (width - 1) * (i / (height - 1 or 1))
        current = max(1, math.ceil(width - reduction))
        x = center_x - current // 2
        _shade_row(surface, x, top_y + i, current, palette)
    return PommelFacts(x=center_x - width // 2, y=top_y, width=width, height=height)


def _flared_pommel(surface: Surface, palette: Palette, center_x: int, top_y: int, thickness: int,
                   rng: random.Random) -> PommelFacts:
    height = rand_int(rng, 2, 3)
    flare = rand_int(rng, 1, 2)
    widest = thickness + flare * 2
    for i in range(height):
        current = widest if i == height - 1 else thickness + flare
        x = center_x - current // 2
        color = palette.highlight if i == 0 else palette.shadow
        surface.block(x, top_y + i, current, 1, color)
    return PommelFacts(x=center_x - widest // 2, y=top_y, width=widest, height=height)


POMMEL_RASTERIZERS = {
    PommelShape.ROUND: _round_pommel,
    PommelShape.DISC: _round_pommel,
    PommelShape.SQUARE: _square_pommel,
    PommelShape.FINIAL: _finial_pommel,
    PommelShape.POINTED: _pointed_pommel,
    PommelShape.FLARED: _flared_pommel,
}


def rasterize_pommel(
    surface: Surface,
    params: PommelParams,
    center_x: int,
    top_y: int,
    thickness: int,
    rng: random.Random,
) -> PommelFacts:
    renderer = POMMEL_RASTERIZERS.get(params.shape, _square_pommel)
    return renderer(surface, params.palette, center_x, top_y, max(1, thickness), rng)
