"""Bow limbs, tips, grip and string, plus the nocked arrow drawn beside them."""
from __future__ import annotations

import math
from dataclasses import dataclass

from .canvas import Surface
from .palettes import Palette
from .profiles import RowSpan, progress
from .styles import ArrowheadShape, BowType, FletchingStyle, TipStyle

RECURVE_START = 0.7
RECURVE_FLICK = 0.5
LIMB_TAPER = 0.85
TIP_ZONE = 0.95
ARROW_HIGHLIGHT_EVERY = 5
FLETCHING_SLANT = 0.3


@dataclass(frozen=True)
class LimbParams:
    bow_type: BowType
    length: int
    max_curve: int
    thickness: int
    palette: Palette
    tip_style: TipStyle = TipStyle.SIMPLE


@dataclass(frozen=True)
class LimbFacts:
    center_y: int
    half_length: int
    rows: dict[int, RowSpan]

    @property
    def top_y(self) -> int:
        return self.center_y - self.half_length

    @property
    def bottom_y(self) -> int:
        return self.center_y + self.half_length


@dataclass(frozen=True)
class GripParams:
    length: int
    thickness: int
    palette: Palette
    wrapped: bool = False


@dataclass(frozen=True)
class StringParams:
    palette: Palette
    thickness: int = 1


@dataclass(frozen=True)
class ArrowParams:
    shaft_length: int
    shaft_palette: Palette
    head_shape: ArrowheadShape
    head_palette: Palette
    head_length: int
    head_width: int
    fletching_style: FletchingStyle
    fletching_palette: Palette
    fletching_length: int
    fletching_width: int


@dataclass(frozen=True)
class ArrowFacts:
    x: int
    tip_y: int
    bottom_y: int


def limb_offset(bow_type: BowType, max_curve: int, thickness: int, distance: float) -> int:
    """How far the limb belly sits from the string at a normalized distance from the grip."""
    offset = math.floor(max_curve * math.sqrt(max(0.0, 1.0 - distance * distance)))
    if bow_type is BowType.RECURVE and distance > RECURVE_START:
        flick = (distance - RECURVE_START) / (1 - RECURVE_START)
        offset -= math.floor(max_curve * RECURVE_FLICK * math.sin(flick * math.pi))
    if distance > TIP_ZONE:
        offset = max(0, offset - 1)
        if bow_type is not BowType.RECURVE:
            offset = thickness // 2
    return offset


def limb_thickness(base: int, distance: float) -> int:
    return max(1, math.ceil(base * (1 - distance * LIMB_TAPER)))


def rasterize_limbs(surface: Surface, params: LimbParams, string_x: int, center_y: int) -> LimbFacts:
    half = params.length // 2
    rows: dict[int, RowSpan] = {}
    if half <= 0:
        return LimbFacts(center_y=center_y, half_length=0, rows=rows)

    palette = params.palette
    for y in range(center_y - half, center_y + half + 1):
        distance = abs(y - center_y) / half
        thickness = limb_thickness(params.thickness, distance)
        offset = limb_offset(params.bow_type, params.max_curve, thickness, distance)
        x = string_x - offset - thickness // 2
        rows[y] = RowSpan(x_start=x, width=thickness)

        if thickness == 1:
            surface.block(x, y, 1, 1, palette.base)
            continue
        surface.block(x, y, 1, 1, palette.highlight)
        surface.block(x + thickness - 1, y, 1, 1, palette.shadow)
        surface.block(x + 1, y, thickness - 2, 1, palette.base)

    _rasterize_tips(surface, params, string_x, center_y, half)
    return LimbFacts(center_y=center_y, half_length=half, rows=rows)


def _rasterize_tips(surface: Surface, params: LimbParams, string_x: int, center_y: int, half: int) -> None:
    palette = params.palette
    nocked = params.tip_style is TipStyle.NOCKED
    tip_base = limb_thickness(params.thickness, 1.0)
    width = tip_base + (2 if nocked else 1)
    height = 3 if nocked else 2
    x = string_x - width // 2

    top_y = center_y - half - height // 2
    bottom_y = center_y + half - height // 2 + (0 if nocked else 1)
    for y in (top_y, bottom_y):
        if not nocked:
            surface.block(x, y, width, height, palette.shadow)
            continue
        post = palette.outline or palette.shadow
        surface.block(x, y, 1, height, post)
        surface.block(x + width - 1, y, 1, height, post)
        surface.block(x + 1, y, width - 2, 1, palette.base)
        surface.block(x + 1, y + height - 1, width - 2, 1, palette.base)


def rasterize_grip(surface: Surface, params: GripParams, center_x: int, center_y: int) -> RowSpan:
    start_y = center_y - params.length // 2
    x = center_x - params.thickness // 2
    palette = params.palette
    for i in range(params.length):
        y = start_y + i
        if params.wrapped and i % 2 == 0:
            surface.block(x, y, params.thickness, 1, palette.shadow)
            continue
        surface.block(x, y, params.thickness, 1, palette.base)
        surface.block(x, y, 1, 1, palette.highlight)
        if params.thickness > 1:
            surface.block(x + params.thickness - 1, y, 1, 1, palette.shadow)
    return RowSpan(x_start=x, width=params.thickness)


def rasterize_string(surface: Surface, params: StringParams, string_x: int, top_y: int, bottom_y: int,
                     nock_y: int) -> None:
    x = string_x - params.thickness // 2
    surface.block(x, top_y, params.thickness, bottom_y - top_y + 1, params.palette.base)

    nock_width = params.thickness + 2
    surface.block(string_x - nock_width // 2, nock_y - 1, nock_width, 3, params.palette.shadow)


def _triangle_head(surface: Surface, params: ArrowParams, x: int, base_y: int) -> None:
    palette = params.head_palette
    for i in range(params.head_length):
        width = max(1, math.ceil(params.head_width * (1 - progress(i, params.head_length))))
        left = x - width // 2
        y = base_y - params.head_length + i
        surface.block(left, y, width, 1, palette.base)
        if i == 0:
            surface.block(left + width // 2, y, 1, 1, palette.highlight)


def _leaf_head(surface: Surface, params: ArrowParams, x: int, base_y: int) -> None:
    palette = params.head_palette
    for i in range(params.head_length):
        width = max(1, math.ceil(params.head_width * math.sin(progress(i, params.head_length) * math.pi)))
        left = x - width // 2
        y = base_y - params.head_length + i
        surface.block(left, y, width, 1, palette.base)
        if i < params.head_length // 2:
            surface.block(left, y, 1, 1, palette.highlight)


ARROWHEAD_RASTERIZERS = {
    ArrowheadShape.TRIANGLE: _triangle_head,
    ArrowheadShape.LEAF: _leaf_head,
}


def rasterize_arrow(surface: Surface, params: ArrowParams, x: int, top_y: int) -> ArrowFacts:
    shaft = params.shaft_palette
    for i in range(params.shaft_length):
        color = shaft.highlight if i % ARROW_HIGHLIGHT_EVERY == 0 else shaft.base
        surface.block(x, top_y + i, 1, 1, color)

    ARROWHEAD_RASTERIZERS.get(params.head_shape, _triangle_head)(surface, params, x, top_y)

    fletch = params.fletching_palette
    reach = params.fletching_width
    start_y = top_y + params.shaft_length - params.fletching_length
    angled = params.fletching_style is FletchingStyle.CLASSIC_ANGLED
    for i in range(params.fletching_length):
        slant = math.floor(i * FLETCHING_SLANT) if angled else 0
        surface.block(x - reach + slant, start_y + i, reach, 1, fletch.base)
        surface.block(x + 1 - slant, start_y + i, reach, 1, fletch.base)

    return ArrowFacts(x=x, tip_y=top_y - params.head_length, bottom_y=top_y + params.shaft_length - 1)
