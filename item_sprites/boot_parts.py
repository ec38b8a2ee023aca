"""
Side-profile boot rasterizer.

A boot is laid out in its own local strip, toe pointing to local x = 0 and
the heel pointing inward. The right boot of a pair is the same strip drawn
through a reversed ``MirrorFrame``, so toes point outward on both sides.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from .canvas import MirrorFrame, Surface
from .palettes import Palette
from .profiles import linear_taper, progress
from .styles import BootType, HeelStyle, ToeShape

BOOT_AREA_WIDTH = 22
BOOT_AREA_HEIGHT = 36
BUCKLE_WIDTH = 3
BUCKLE_HEIGHT = 2


@dataclass(frozen=True)
class BootParams:
    style: BootType
    toe_shape: ToeShape
    leg_height: int
    foot_height: int
    leg_top_width: int
    leg_initial_width: int
    heel_extension: int
    toe_extension: int
    main_palette: Palette
    sole_palette: Palette
    heel_style: HeelStyle = HeelStyle.NONE
    heel_height: int = 0
    cuff_palette: Palette | None = None
    buckle_palette: Palette | None = None
    buckle_count: int = 0

    @property
    def sole_height(self) -> int:
        return max(1, self.foot_height // 6) + 1

    @property
    def upper_height(self) -> int:
        return max(1, self.foot_height - self.sole_height - self.heel_height)

    @property
    def foot_length(self) -> int:
        return self.toe_extension + self.leg_initial_width + self.heel_extension


@dataclass(frozen=True)
class BootFacts:
    mirrored: bool
    top_y: int
    ankle_y: int
    sole_y: int
    bottom_y: int
    toe_x: int
    heel_x: int


def leg_width_at(params: BootParams, row: int) -> int:
    t = progress(row, params.leg_height)
    return max(1, linear_taper(t, params.leg_top_width, params.leg_initial_width))


def leg_center(params: BootParams, area_width: int = BOOT_AREA_WIDTH) -> int:
    """Local column of the leg axis, shifted so the whole foot stays inside the strip."""
    half = params.leg_initial_width // 2
    lowest = params.toe_extension + half
    highest = area_width - params.heel_extension - params.leg_initial_width + half
    return max(lowest, min(area_width // 2, highest))


def toe_column_height(shape: ToeShape, upper_height: int, t: float) -> int:
    if shape is ToeShape.ROUNDED:
        height = upper_height * (1 - t ** 1.8 * 0.5)
    elif shape is ToeShape.POINTED:
        height = upper_height * (1 - t * 0.7)
    else:
        height = upper_height * 0.8
    return max(1, math.floor(height))


def rasterize_boot(
    surface: Surface,
    params: BootParams,
    area_x: int,
    top_y: int,
    mirrored: bool = False,
) -> BootFacts:
    if mirrored:
        frame = MirrorFrame(surface, area_x + BOOT_AREA_WIDTH - 1, -1)
    else:
        frame = MirrorFrame(surface, area_x, 1)

    main = params.main_palette
    center = leg_center(params)
    ankle_y = top_y + params.leg_height
    upper = params.upper_height
    sole_y = ankle_y + upper

    for row in range(params.leg_height):
        y = top_y + row
        width = leg_width_at(params, row)
        u = center - width // 2
        frame.block(u, y, width, 1, main.base)
        frame.block(u, y, 1, 1, main.highlight)
        if width > 1:
            frame.block(u + width - 1, y, 1, 1, main.shadow)

    instep_left = center - params.leg_initial_width // 2
    instep_right = instep_left + params.leg_initial_width - 1
    toe_tip = instep_left - params.toe_extension
    heel_tip = instep_right + params.heel_extension

    _sole(frame, params, toe_tip, heel_tip, sole_y)

    frame.block(instep_left, ankle_y, params.leg_initial_width, upper, main.base)
    frame.block(instep_left, ankle_y, params.leg_initial_width, 1, main.highlight)

    _heel_counter(frame, params, instep_right, ankle_y)
    _toe_box(frame, params, instep_left, ankle_y)

    if params.cuff_palette is not None:
        _cuff(frame, params, center, top_y)
    if params.buckle_palette is not None and params.buckle_count > 0:
        _buckles(frame, params, center, top_y)

    return BootFacts(
        mirrored=mirrored,
        top_y=top_y,
        ankle_y=ankle_y,
        sole_y=sole_y,
        bottom_y=sole_y + params.sole_height + params.heel_height - 1,
        toe_x=frame.x(toe_tip),
        heel_x=frame.x(heel_tip),
    )


def _sole(frame: MirrorFrame, params: BootParams, toe_tip: int, heel_tip: int, sole_y: int) -> None:
    sole = params.sole_palette
    length = heel_tip - toe_tip + 1
    height = params.sole_height
    frame.block(toe_tip, sole_y, length, height, sole.base)
    frame.block(toe_tip, sole_y + height - 1, length, 1, sole.shadow)
    frame.block(toe_tip, sole_y, 1, height, sole.highlight)
    frame.block(heel_tip, sole_y, 1, height, sole.shadow)

    if params.heel_style is HeelStyle.NONE or params.heel_height <= 0:
        return
    block_width = max(2, math.floor(params.leg_initial_width * 0.8))
    heel_x = heel_tip - block_width + 1
    heel_y = sole_y + height
    frame.block(heel_x, heel_y, block_width, params.heel_height, sole.base)
    frame.block(heel_x, heel_y, 1, params.heel_height, sole.highlight)
    frame.block(heel_tip, heel_y, 1, params.heel_height, sole.shadow)
    frame.block(heel_x, heel_y + params.heel_height - 1, block_width, 1, sole.shadow)


def _heel_counter(frame: MirrorFrame, params: BootParams, instep_right: int, ankle_y: int) -> None:
    main = params.main_palette
    upper = params.upper_height
    extension = params.heel_extension
    half = extension * 0.5
    for i in range(extension):
        u = instep_right + 1 + i
        height = upper
        if extension > 1 and i > extension * 0.3:
            lowered = math.floor(upper * 0.25 * ((i - half) / (half or 1)))
            height = max(1, upper - max(0, lowered))
        top = ankle_y + upper - height
        frame.block(u, top, 1, height, main.base)
        frame.block(u, top, 1, 1, main.highlight)
        if i == extension - 1:
            frame.block(u, top + 1, 1, height - 1, main.shadow)


def _toe_box(frame: MirrorFrame, params: BootParams, instep_left: int, ankle_y: int) -> None:
    main = params.main_palette
    upper = params.upper_height
    extension = params.toe_extension
    for i in range(extension):
        u = instep_left - 1 - i
        height = toe_column_height(params.toe_shape, upper, progress(i, extension, degenerate=1.0))
        top = ankle_y + upper - height
        if i == extension - 1:
            frame.block(u, top, 1, height, main.highlight)
            continue
        frame.block(u, top, 1, height, main.base)
        frame.block(u, top, 1, 1, main.highlight)


def _cuff(frame: MirrorFrame, params: BootParams, center: int, top_y: int) -> None:
    cuff = params.cuff_palette
    height = max(1, params.leg_height // 5) + 1
    width = params.leg_top_width + 2
    u = center - width // 2
    frame.block(u, top_y, width, height, cuff.base)
    frame.block(u, top_y, width, 1, cuff.highlight)
    if height > 1:
        frame.block(u, top_y + height - 1, width, 1, cuff.shadow)


def buckle_rows(params: BootParams) -> list[int]:
    rows = []
    cuff_clearance = (max(1, params.leg_height // 5) + 1 + 2) if params.cuff_palette is not None else 0
    for i in range(params.buckle_count):
        ratio = 0.65 if params.buckle_count == 1 else 0.4 + i * 0.35
        row = max(cuff_clearance, math.floor(params.leg_height * ratio))
        row = min(row, params.leg_height - BUCKLE_HEIGHT)
        if row >= 0 and row not in rows:
            rows.append(row)
    return rows


def _buckles(frame: MirrorFrame, params: BootParams, center: int, top_y: int) -> None:
    main = params.main_palette
    buckle = params.buckle_palette
    for row in buckle_rows(params):
        y = top_y + row
        width = leg_width_at(params, row)
        left = center - width // 2
        frame.block(left, y, width, 1, main.shadow)

        u = left + width - 1
        frame.block(u, y, BUCKLE_WIDTH, BUCKLE_HEIGHT, buckle.base)
        frame.block(u, y, 1, 1, buckle.highlight)
        frame.block(u + BUCKLE_WIDTH - 1, y + BUCKLE_HEIGHT - 1, 1, 1, buckle.shadow)
