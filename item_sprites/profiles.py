"""
Width profiles and occupancy helpers shared by every rasterizer.

Rounding here is always half-up so that tapers computed for a left and a right
half of a symmetric part land on the same integers.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from .styles import BladeShape

TAPER_EXPONENTS: dict[BladeShape, float] = {
    BladeShape.EXPANDING_STRAIGHT: 1.0,
    BladeShape.BEARDED: 1.0,
    BladeShape.FLARED: 0.6,
    BladeShape.POINTED_TAPER: 1.7,
}


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))


def progress(index: int, length: int, degenerate: float = 0.0) -> float:
    if length <= 1:
        return degenerate
    return index / (length - 1)


def linear_taper(t: float, start: float, end: float) -> int:
    return round_half_up(start + (end - start) * clamp_unit(t))


def power_taper(distance: float, start: float, end: float, exponent: float) -> float:
    """Extent that is ``end`` at distance 0 and falls back to ``start`` at distance 1.

    Exponents below 1 keep the extent wide for longer (flared), above 1 pull
    it in early (pointed).
    """
    return start + (end - start) * (1.0 - clamp_unit(distance) ** exponent)


def clamp_extent(value: float, minimum: int = 1) -> int:
    return max(minimum, math.floor(value))


def even(value: int) -> int:
    return value - value % 2


def in_disc(dx: int, dy: int, radius: int) -> bool:
    return dx * dx + dy * dy <= radius * radius


def on_rim(dx: int, dy: int, radius: int) -> bool:
    return in_disc(dx, dy, radius) and dx * dx + dy * dy > (radius - 1) * (radius - 1)


def rim_is_lit(dx: int, dy: int) -> bool:
    return dy < 0 or (dy == 0 and dx < 0)


def angled_drop(distance: int, slope: float) -> int:
    return math.floor(distance * slope)


def sloped_row(base_y: int, distance: int, slope: float) -> int:
    """Row of a column ``distance`` cells away from where a slope starts."""
    return base_y + angled_drop(distance, slope)


@dataclass(frozen=True)
class RowSpan:
    x_start: int
    width: int
    is_cutout: bool = False
    cutout_start: int = 0
    cutout_width: int = 0

    @property
    def x_end(self) -> int:
        return self.x_start + self.width - 1

    def covers(self, x: int) -> bool:
        return self.x_start <= x <= self.x_end

    def in_cutout(self, x: int) -> bool:
        return self.is_cutout and self.cutout_start <= x < self.cutout_start + self.cutout_width


Occupancy = dict[int, RowSpan]


def is_inside(occupancy: Occupancy, x: int, y: int) -> bool:
    span = occupancy.get(y)
    if span is None or span.is_cutout:
        return False
    return span.covers(x)


def is_boundary(occupancy: Occupancy, x: int, y: int, reach: int = 1) -> bool:
    """True for inside cells with an outside cell within ``reach`` 4-connected steps."""
    if not is_inside(occupancy, x, y):
        return False
    for step in range(1, max(1, reach) + 1):
        for dx, dy in ((step, 0), (-step, 0), (0, step), (0, -step)):
            if not is_inside(occupancy, x + dx, y + dy):
                return True
    return False
