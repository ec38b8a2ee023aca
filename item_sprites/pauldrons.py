"""Shoulder guards seated on the torso's sloping shoulders.

Both guards are drawn in local coordinates measured outward from the torso's
shoulder edge, then placed through a ``MirrorFrame`` so the left guard is an
exact reflection of the right one.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field

from .canvas import MirrorFrame, Surface
from .palettes import Palette
from .profiles import progress, round_half_up, sloped_row
from .styles import PauldronStyle
from .torso import TorsoFacts

SHOULDER_SLOPE = 0.55
SHOULDER_OVERLAP = 1
RISE_ABOVE_TORSO = 0.30
MIN_PAULDRON_SIZE = 0.05
SIZE_STEP = 0.01


@dataclass(frozen=True)
class PauldronParams:
    style: PauldronStyle
    size: float
    palette: Palette
    layers: int = 1
    spike_size: int = 0


@dataclass(frozen=True)
class PauldronFacts:
    side: int
    width: int
    height: int
    top_y: int
    pixels: frozenset[tuple[int, int]] = field(default_factory=frozenset)


def pauldron_size(size: float, shoulder_width: int) -> tuple[int, int]:
    height = max(3, math.floor(shoulder_width * size * 0.8))
    width = max(4, math.floor(height * 1.3))
    return width, height


def fit_pauldron_size(size: float, shoulder_width: int, room: int) -> float:
    """Shrink ``size`` until a guard on each shoulder fits within ``room`` columns."""
    while size > MIN_PAULDRON_SIZE and shoulder_width + 2 * pauldron_size(size, shoulder_width)[0] > room:
        size -= SIZE_STEP
    return max(size, MIN_PAULDRON_SIZE)


class _Plotter:
    def __init__(self, frame: MirrorFrame, torso: TorsoFacts) -> None:
        self.frame = frame
        self.torso = torso
        self.pixels: set[tuple[int, int]] = set()
        neck_half = torso.neckline_width // 2
        self.neck_left = torso.center_x - neck_half
        self.neck_right = torso.center_x + neck_half - 1
        self.neck_bottom = torso.top_y + torso.neckline_depth + 1

    def over_neckline(self, x: int, y: int) -> bool:
        if y >= self.neck_bottom:
            return False
        if self.frame.side < 0:
            return x >= self.neck_left
        return x <= self.neck_right

    def plot(self, u: int, y: int, color: str) -> None:
        x = self.frame.x(u)
        if self.over_neckline(x, y):
            return
        self.frame.block(u, y, 1, 1, color)
        self.pixels.add((x, y))


def _round_cap(plot: _Plotter, params: PauldronParams, width: int, height: int, top_y: int) -> None:
    palette = params.palette
    for row in range(height):
        t = progress(row, height, degenerate=0.5)
        if t < 0.25:
            segment = width
        else:
            segment = math.floor(width * (1.0 - ((t - 0.25) / 0.75) ** 1.6 * 0.7))
        segment = max(1, segment)
        offset = (width - segment) // 2

        for k in range(segment):
            u = offset + k
            if t < 0.35:
                color = palette.highlight if progress(u, width) >= 0.4 else palette.base
            else:
                color = palette.shadow if t > 0.8 else palette.base
                outward = segment - 1 - k
                if segment > 1:
                    if outward < math.floor(segment * 0.2):
                        color = palette.highlight
                    elif outward > math.floor(segment * 0.8):
                        color = palette.shadow
            plot.plot(u, sloped_row(top_y + row, u, SHOULDER_SLOPE), color)


def _layered_plate(plot: _Plotter, params: PauldronParams, width: int, height: int, top_y: int) -> None:
    palette = params.palette
    layers = max(1, params.layers)
    layer_height = max(1, height // layers)
    layer_overlap = max(0, math.floor(layer_height * 0.15))

    for layer in range(layers):
        inset = math.floor(layer * (width / (layers * 1.8)))
        layer_width = max(2, width - inset)
        layer_top = top_y + layer * (layer_height - layer_overlap)
        for k in range(layer_width):
            u = min(width - 1, inset + k)
            for row in range(layer_height):
                color = palette.base
                if row == 0:
                    color = palette.highlight
                elif row == layer_height - 1:
                    color = palette.shadow
                elif k == layer_width - 1:
                    color = palette.highlight
                elif k == 0:
                    color = palette.shadow
                plot.plot(u, sloped_row(layer_top + row, u, SHOULDER_SLOPE), color)


def _spiked_plate(plot: _Plotter, params: PauldronParams, width: int, height: int, top_y: int) -> None:
    _layered_plate(plot, PauldronParams(params.style, params.size, params.palette, 1, 0), width, height, top_y)
    if params.spike_size <= 0:
        return

    palette = params.palette
    tip_u = width // 2
    base_y = sloped_row(top_y, tip_u, SHOULDER_SLOPE)
    widest = max(1, width // 5)
    for i in range(params.spike_size):
        y = base_y - 1 - i
        t = progress(i, params.spike_size, degenerate=1.0)
        spike_width = max(1, round_half_up(1 + (widest - 1) * (1 - t)))
        start = tip_u - spike_width // 2
        for k in range(spike_width):
            color = palette.highlight if k == spike_width - 1 else palette.base
            plot.plot(start + k, y, color)


PAULDRON_RASTERIZERS = {
    PauldronStyle.ROUND_CAP: _round_cap,
    PauldronStyle.LAYERED_PLATE: _layered_plate,
    PauldronStyle.SPIKED_PLATE: _spiked_plate,
}


def rasterize_pauldron(surface: Surface, params: PauldronParams, torso: TorsoFacts, side: int) -> PauldronFacts:
    width, height = pauldron_size(params.size, torso.shoulder_width)
    top_y = torso.top_y - math.floor(height * RISE_ABOVE_TORSO)
    inner_x = torso.shoulder_left if side < 0 else torso.shoulder_right
    inner_x += (SHOULDER_OVERLAP - 1) * (1 if side < 0 else -1)
    plot = _Plotter(MirrorFrame(surface, inner_x, side), torso)

    renderer = PAULDRON_RASTERIZERS.get(params.style)
    if renderer is not None:
        renderer(plot, params, width, height, top_y)
    return PauldronFacts(side=plot.frame.side, width=width, height=height, top_y=top_y,
                         pixels=frozenset(plot.pixels))


def rasterize_pauldrons(surface: Surface, params: PauldronParams | None,
                        torso: TorsoFacts) -> tuple[PauldronFacts, ...]:
    if params is None or params.style is PauldronStyle.NONE:
        return ()
    return tuple(rasterize_pauldron(surface, params, torso, side) for side in (-1, 1))
