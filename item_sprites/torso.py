"""Torso silhouette with a neckline cut-out, plate musculature and surface decorations."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from .canvas import Surface
from .palettes import Palette
from .profiles import Occupancy, RowSpan, even, is_boundary, is_inside, progress, round_half_up
from .styles import ArmorStyle, Decoration, Neckline

MIN_TORSO_WIDTH = 2


@dataclass(frozen=True)
class TorsoParams:
    height: int
    base_width: int
    waist_taper: int
    palette: Palette
    style: ArmorStyle
    neckline: Neckline
    neckline_depth: int
    neckline_width: int


@dataclass(frozen=True)
class TorsoFacts:
    center_x: int
    top_y: int
    bottom_y: int
    shoulder_width: int
    waist_width: int
    neckline_width: int
    neckline_depth: int
    occupancy: Occupancy

    @property
    def shoulder_left(self) -> int:
        return self.center_x - self.shoulder_width // 2

    @property
    def shoulder_right(self) -> int:
        return self.center_x + self.shoulder_width // 2 - 1

    def contains(self, x: int, y: int) -> bool:
        return is_inside(self.occupancy, x, y)


@dataclass(frozen=True)
class DecorationParams:
    kind: Decoration
    palette: Palette
    thickness: int = 2


def torso_width(params: TorsoParams, row: int) -> int:
    t = progress(row, params.height)
    return even(max(MIN_TORSO_WIDTH, round_half_up(params.base_width - params.waist_taper * t)))


def neck_opening(params: TorsoParams, row: int, row_width: int) -> int:
    if row >= params.neckline_depth:
        return 0
    t = progress(row, params.neckline_depth, degenerate=1.0)
    if params.neckline is Neckline.V_NECK:
        opening = math.floor(params.neckline_width * (1 - t))
    elif params.neckline is Neckline.ROUND_NECK:
        opening = math.floor(params.neckline_width * math.sqrt(max(0.0, 1 - t * t)))
    else:
        opening = params.neckline_width
    opening = min(max(0, opening), max(0, row_width - 2))
    return even(opening) if opening > 1 else opening


def rasterize_torso(surface: Surface, params: TorsoParams, center_x: int, top_y: int) -> TorsoFacts:
    palette = params.palette
    occupancy: Occupancy = {}
    widths = []

    for row in range(params.height):
        y = top_y + row
        width = torso_width(params, row)
        widths.append(width)
        x = center_x - width // 2
        right = x + width - 1
        surface.block(x, y, width, 1, palette.base)

        opening = neck_opening(params, row, width)
        if opening > 0:
            neck_x = center_x - opening // 2
            neck_end = neck_x + opening - 1
            surface.clear(neck_x, y, opening, 1)
            occupancy[y] = RowSpan(x, width, is_cutout=True, cutout_start=neck_x, cutout_width=opening)
            if x < neck_x:
                surface.block(x, y, 1, 1, palette.highlight)
                surface.block(neck_x - 1, y, 1, 1, palette.shadow)
            if right > neck_end:
                surface.block(neck_end + 1, y, 1, 1, palette.highlight)
                surface.block(right, y, 1, 1, palette.shadow)
            continue

        occupancy[y] = RowSpan(x, width)
        surface.block(x, y, 1, 1, palette.highlight)
        if width > 1:
            surface.block(right, y, 1, 1, palette.shadow)

    facts = TorsoFacts(
        center_x=center_x,
        top_y=top_y,
        bottom_y=top_y + params.height - 1,
        shoulder_width=widths[0] if widths else 0,
        waist_width=widths[-1] if widths else 0,
        neckline_width=params.neckline_width,
        neckline_depth=params.neckline_depth,
        occupancy=occupancy,
    )
    if params.style is ArmorStyle.MUSCLED_PLATE:
        rasterize_musculature(surface, facts, palette)
    return facts


def rasterize_musculature(surface: Surface, torso: TorsoFacts, palette: Palette) -> None:
    """Pectoral outlines, ab lines and a centre line over an already drawn torso."""
    height = torso.bottom_y - torso.top_y + 1
    pecs_top = torso.top_y + torso.neckline_depth + 2
    pecs_end = torso.top_y + math.floor(height / 1.8)
    abs_start = pecs_end + 1
    abs_end = torso.top_y + height - height // 6
    ab_spacing = max(2, math.floor(((abs_end - abs_start + 1) // 3) * 0.8))
    cx = torso.center_x

    for y in range(pecs_top, pecs_end + 1):
        span = torso.occupancy.get(y)
        if span is None or span.is_cutout:
            continue
        outer = math.floor(span.width * 0.15)
        inner = math.floor(span.width * 0.4)
        pec_width = inner - outer
        if pec_width < 1:
            continue
        left_pec = span.x_start + outer
        right_pec = span.x_start + span.width - inner
        if y in (pecs_top, pecs_end):
            surface.block(left_pec, y, pec_width, 1, palette.highlight)
            surface.block(right_pec, y, pec_width, 1, palette.highlight)
            continue
        surface.block(left_pec, y, 1, 1, palette.highlight)
        surface.block(left_pec + pec_width - 1, y, 1, 1, palette.shadow)
        surface.block(right_pec, y, 1, 1, palette.shadow)
        surface.block(right_pec + pec_width - 1, y, 1, 1, palette.highlight)

    for y in range(abs_start, abs_end + 1):
        span = torso.occupancy.get(y)
        if span is None or span.is_cutout:
            continue
        if (y - abs_start) % ab_spacing == 0 and y < abs_end - 1:
            surface.block(span.x_start + 2, y, span.width - 4, 1, palette.shadow)
            if torso.contains(cx, y + 1):
                surface.block(span.x_start + 2, y + 1, span.width - 4, 1, palette.highlight)
        if span.width > 4:
            surface.block(cx - 1, y, 1, 1, palette.shadow)
            surface.block(cx, y, 1, 1, palette.highlight)


def _border(surface: Surface, torso: TorsoFacts, params: DecorationParams) -> None:
    reach = max(1, params.thickness // 2)
    for y, span in torso.occupancy.items():
        for x in range(span.x_start, span.x_start + span.width):
            if is_boundary(torso.occupancy, x, y, reach):
                surface.block(x, y, 1, 1, params.palette.base)


def _vertical_stripe(surface: Surface, torso: TorsoFacts, params: DecorationParams) -> None:
    width = max(2, params.thickness)
    start = torso.center_x - width // 2
    for y in range(torso.top_y, torso.bottom_y + 1):
        for i in range(width):
            x = start + i
            if not torso.contains(x, y):
                continue
            color = params.palette.base
            if i == 0:
                color = params.palette.highlight
            elif i == width - 1:
                color = params.palette.shadow
            surface.block(x, y, 1, 1, color)


def _horizontal_band(surface: Surface, torso: TorsoFacts, params: DecorationParams) -> None:
    height = max(2, params.thickness)
    span_rows = torso.bottom_y - torso.top_y + 1
    band_y = torso.top_y + (span_rows - height) // 2
    for i in range(height):
        y = band_y + i
        span = torso.occupancy.get(y)
        if span is None:
            continue
        color = params.palette.base
        if i == 0:
            color = params.palette.highlight
        elif i == height - 1:
            color = params.palette.shadow
        for x in range(span.x_start, span.x_start + span.width):
            if torso.contains(x, y):
                surface.block(x, y, 1, 1, color)


def _cross(surface: Surface, torso: TorsoFacts, params: DecorationParams) -> None:
    arm = max(2, params.thickness)
    span_rows = torso.bottom_y - torso.top_y + 1
    vertical_len = math.floor((torso.bottom_y - torso.top_y) * 0.5)
    horizontal_len = math.floor(torso.shoulder_width * 0.4)

    cells = set()
    vx = torso.center_x - arm // 2
    vy = torso.top_y + (span_rows - vertical_len) // 2
    cells.update((vx + i, vy + j) for j in range(vertical_len) for i in range(arm))
    hx = torso.center_x - horizontal_len // 2
    hy = torso.top_y + (span_rows - arm) // 2
    cells.update((hx + i, hy + j) for i in range(horizontal_len) for j in range(arm))

    for x, y in cells:
        if torso.contains(x, y):
            surface.block(x, y, 1, 1, params.palette.base)


DECORATION_RASTERIZERS: dict[Decoration, Callable[[Surface, TorsoFacts, DecorationParams], None]] = {
    Decoration.BORDER: _border,
    Decoration.VERTICAL_STRIPE: _vertical_stripe,
    Decoration.HORIZONTAL_BAND: _horizontal_band,
    Decoration.CROSS: _cross,
}


def rasterize_decoration(surface: Surface, torso: TorsoFacts, params: DecorationParams) -> None:
    renderer = DECORATION_RASTERIZERS.get(params.kind)
    if renderer is not None:
        renderer(surface, torso, params)
