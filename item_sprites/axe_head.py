"""Axe head: blade profiles, spike poll and the socket around the haft."""
from __future__ import annotations

import math
from dataclasses import dataclass

from .canvas import MirrorFrame, Surface
from .palettes import Palette
from .profiles import TAPER_EXPONENTS, clamp_extent, power_taper, progress, round_half_up
from .styles import AxeType, BladeShape, EdgeProfile

MIN_BLADE_CONNECTION_WIDTH = 3
CONVEX_BULGE = 0.15
CONCAVE_HOLLOW = 0.20
BEARD_DROP = 0.30
BEARD_CAP = 1.25
EDGE_BAND = 0.85
SHAFT_SHADOW = 0.2


@dataclass(frozen=True)
class BladeParams:
    shape: BladeShape
    edge_profile: EdgeProfile
    curve_intensity: float
    length: int
    height: int
    palette: Palette
    connection_width: int = MIN_BLADE_CONNECTION_WIDTH
    spike_length: int = 0


@dataclass(frozen=True)
class BladeFacts:
    side: int
    min_y: int
    max_y: int
    segments: dict[int, int]
    pixels: frozenset[tuple[int, int]]

    @property
    def min_segment(self) -> int:
        return min(self.segments.values()) if self.segments else 0


@dataclass(frozen=True)
class AxeHeadFacts:
    socket_y: int
    socket_x: int
    socket_width: int
    socket_height: int
    blades: tuple[BladeFacts, ...]


def blade_reach(params: BladeParams, row_progress: float) -> int:
    """Horizontal length of the blade segment on a row at ``row_progress`` (0 top, 1 bottom)."""
    length = params.length
    connection = max(MIN_BLADE_CONNECTION_WIDTH, params.connection_width)
    distance = abs(row_progress - 0.5) * 2
    exponent = TAPER_EXPONENTS.get(params.shape, 1.0)
    reach = power_taper(distance, connection, length, exponent)

    if params.edge_profile is EdgeProfile.CONVEX:
        reach += math.floor(length * CONVEX_BULGE * (1 - distance) * params.curve_intensity)
    elif params.edge_profile is EdgeProfile.CONCAVE:
        reach -= math.floor(length * CONCAVE_HOLLOW * (1 - distance) * params.curve_intensity)
    reach = clamp_extent(reach, connection)

    if params.shape is BladeShape.BEARDED and row_progress > 0.5:
        beard = (row_progress - 0.5) / 0.5
        bonus = math.floor(length * BEARD_DROP * math.sin(beard * math.pi * 0.9))
        reach = clamp_extent(min(length * BEARD_CAP, reach + bonus), connection)

    return clamp_extent(reach, MIN_BLADE_CONNECTION_WIDTH)


def rasterize_blade(
    surface: Surface,
    params: BladeParams,
    socket_x: int,
    socket_y: int,
    shaft_thickness: int,
    side: int,
) -> BladeFacts:
    """Draw one blade growing away from the haft on ``side`` (-1 left, 1 right).

    Each row is a segment anchored at the cutting edge, so the edge stays a
    clean silhouette while the inner end retreats toward the haft on the
    wider rows.
    """
    frame = MirrorFrame(surface, socket_x + side * (shaft_thickness // 2), side)
    height = max(1, params.height)
    min_y = socket_y - height // 2
    max_y = socket_y + math.ceil(height / 2) - 1
    palette = params.palette

    segments: dict[int, int] = {}
    pixels: set[tuple[int, int]] = set()
    for y in range(min_y, max_y + 1):
        row_progress = progress(y - min_y, height, degenerate=0.5)
        segment = blade_reach(params, row_progress)
        segments[y] = segment
        inner_shadow = max(MIN_BLADE_CONNECTION_WIDTH, math.floor(segment * SHAFT_SHADOW))

        for k in range(segment):
            u = params.length - segment + k
            x = frame.x(u)
            if not surface.contains(x, y):
                continue

            if k == segment - 1:
                color = palette.highlight
            elif y == min_y and k < segment * EDGE_BAND:
                color = palette.highlight
            elif y == max_y and height > 1 and k < segment * EDGE_BAND:
                color = palette.shadow
            elif k < inner_shadow:
                color = palette.shadow
            else:
                color = palette.base
            frame.block(u, y, 1, 1, color)
            pixels.add((x, y))

    return BladeFacts(side=frame.side, min_y=min_y, max_y=max_y, segments=segments, pixels=frozenset(pixels))


def rasterize_spike_poll(
    surface: Surface,
    palette: Palette,
    length: int,
    socket_x: int,
    socket_y: int,
    shaft_thickness: int,
    side: int,
) -> None:
    if length <= 0:
        return
    frame = MirrorFrame(surface, socket_x + side * (shaft_thickness // 2), side)
    base_height = max(1, math.floor(shaft_thickness * 1.2))
    for i in range(length):
        height = max(1, round_half_up(base_height * (1 - progress(i, length) * 0.5)))
        top = socket_y - height // 2
        for row in range(height):
            color = palette.base
            if row == 0:
                color = palette.highlight
            elif row == height - 1:
                color = palette.shadow
            frame.block(1 + i, top + row, 1, 1, color)


def rasterize_socket(
    surface: Surface,
    palette: Palette,
    socket_x: int,
    socket_y: int,
    shaft_thickness: int,
    blade_height: int,
) -> tuple[int, int, int, int]:
    height = max(3, math.floor(shaft_thickness * 1.7 + blade_height * 0.1))
    width = shaft_thickness + 3
    x = socket_x - width // 2
    y = socket_y - height // 2

    surface.block(x, y, width, height, palette.shadow)
    surface.block(x, y, width, 1, palette.base)
    surface.block(x, y + height - 1, width, 1, palette.base)
    surface.block(x, y + 1, 1, height - 2, palette.highlight)
    surface.block(x + width - 1, y + 1, 1, height - 2, palette.base)
    surface.block(x + 1, y + 1, width - 2, height - 2, palette.base)
    return x, y, width, height


def rasterize_axe_head(
    surface: Surface,
    axe_type: AxeType,
    params: BladeParams,
    shaft_x: int,
    shaft_top_y: int,
    shaft_thickness: int,
    side: int = 1,
) -> AxeHeadFacts:
    socket_y = shaft_top_y + math.floor(params.height * 0.1)

    if axe_type is AxeType.DOUBLE_AXE:
        blades = tuple(
            rasterize_blade(surface, params, shaft_x, socket_y, shaft_thickness, blade_side)
            for blade_side in (-1, 1)
        )
    else:
        blades = (rasterize_blade(surface, params, shaft_x, socket_y, shaft_thickness, side),)
        rasterize_spike_poll(
            surface, params.palette, params.spike_length, shaft_x, socket_y, shaft_thickness, -side
        )

    x, y, width, height = rasterize_socket(
        surface, params.palette, shaft_x, socket_y, shaft_thickness, params.height
    )
    return AxeHeadFacts(
        socket_y=socket_y,
        socket_x=x,
        socket_width=width,
        socket_height=height,
        blades=blades,
    )
