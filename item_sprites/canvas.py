"""
Logical-grid drawing surface over a Pillow RGBA image.

All item geometry is computed on a coarse logical grid. Every logical unit is
written to the image as a solid ``scale x scale`` block, so sprites stay crisp
with no smoothing at any display size.
"""
from __future__ import annotations

import base64
import io
import logging
import math

from PIL import Image, ImageColor, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

LOGICAL_GRID_WIDTH = 64
LOGICAL_GRID_HEIGHT = 64
DISPLAY_SCALE = 4

TRANSPARENT = (0, 0, 0, 0)
ERROR_FILL = "#FF0000"
ERROR_ALPHA = 178
ERROR_TEXT = "#FFFFFF"
DATA_URL_PREFIX = "data:image/png;base64,"

# 5x5 red dot, used when even the placeholder cannot be drawn
FALLBACK_DATA_URL = (
    DATA_URL_PREFIX
    + "iVBORw0KGgoAAAANSUhEUgAAAAUAAAAFCAYAAACNbyblAAAAHElEQVQI12P4//8/w38GIAXDIBKE0DHxgljNBAAO9TXL0Y4OHwAAAABJRU5ErkJggg=="
)


class SurfaceError(RuntimeError):
    """Raised when a drawing surface cannot be created."""


def _rgba(color: str | tuple[int, ...], alpha: int = 255) -> tuple[int, int, int, int]:
    if isinstance(color, tuple):
        if len(color) == 4:
            return color  # type: ignore[return-value]
        r, g, b = color[:3]
        return r, g, b, alpha
    r, g, b = ImageColor.getrgb(color)[:3]
    return r, g, b, max(0, min(255, int(alpha)))


def draw_block(
    image: Image.Image,
    x: float,
    y: float,
    width: float,
    height: float,
    color: str | tuple[int, ...],
    scale: int = DISPLAY_SCALE,
) -> None:
    """Fill a logical rectangle with a solid color.

    Coordinates are floored onto the grid, non-positive extents draw nothing
    and anything past the image edge is clipped.
    """
    lx = math.floor(x)
    ly = math.floor(y)
    lw = math.floor(width)
    lh = math.floor(height)
    if lw <= 0 or lh <= 0:
        return

    x0 = max(0, lx * scale)
    y0 = max(0, ly * scale)
    x1 = min(image.width, (lx + lw) * scale) - 1
    y1 = min(image.height, (ly + lh) * scale) - 1
    if x1 < x0 or y1 < y0:
        return

    ImageDraw.Draw(image).rectangle((x0, y0, x1, y1), fill=_rgba(color))


class Surface:
    def __init__(self, image: Image.Image, scale: int = DISPLAY_SCALE) -> None:
        self.image = image
        self.scale = scale

    @property
    def width(self) -> int:
        return self.image.width // self.scale

    @property
    def height(self) -> int:
        return self.image.height // self.scale

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def block(self, x: float, y: float, width: float, height: float, color: str | tuple[int, ...]) -> None:
        draw_block(self.image, x, y, width, height, color, self.scale)

    def clear(self, x: float, y: float, width: float, height: float) -> None:
        draw_block(self.image, x, y, width, height, TRANSPARENT, self.scale)

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        if not self.contains(x, y):
            return TRANSPARENT
        return self.image.getpixel((x * self.scale, y * self.scale))

    def is_filled(self, x: int, y: int) -> bool:
        return self.pixel(x, y)[3] > 0

    def filled_pixels(self) -> set[tuple[int, int]]:
        return {
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if self.is_filled(x, y)
        }

    def to_data_url(self) -> str:
        return _png_data_url(self.image)


class MirrorFrame:
    """Writes a component in local coordinates along a horizontal direction.

    Local offset ``u`` lands on ``origin + side * u``. A span of width ``w``
    starting at ``u`` covers the same local cells on either side, so a part
    drawn once through a frame with ``side=1`` and once with ``side=-1`` is an
    exact reflection, shading included.
    """

    def __init__(self, surface: Surface, origin: int, side: int) -> None:
        self.surface = surface
        self.origin = origin
        self.side = 1 if side >= 0 else -1

    def x(self, u: int) -> int:
        return self.origin + self.side * u

    def block(self, u: int, y: int, width: int, height: int, color: str | tuple[int, ...]) -> None:
        if width <= 0:
            return
        start = self.x(u) if self.side > 0 else self.x(u + width - 1)
        self.surface.block(start, y, width, height, color)


def create_surface(
    width: int = LOGICAL_GRID_WIDTH,
    height: int = LOGICAL_GRID_HEIGHT,
    scale: int = DISPLAY_SCALE,
) -> Surface:
    if width <= 0 or height <= 0 or scale <= 0:
        raise SurfaceError(f"invalid surface size {width}x{height} at scale {scale}")
    try:
        image = Image.new("RGBA", (width * scale, height * scale), TRANSPARENT)
    except (ValueError, MemoryError) as exc:
        raise SurfaceError(f"could not allocate {width}x{height} surface: {exc}") from exc
    return Surface(image, scale)


def _png_data_url(image: Image.Image) -> str:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return DATA_URL_PREFIX + base64.b64encode(buffer.getvalue()).decode("ascii")


def error_data_url(
    message: str = "CTX Fail",
    width: int = LOGICAL_GRID_WIDTH,
    height: int = LOGICAL_GRID_HEIGHT,
    scale: int = DISPLAY_SCALE,
) -> str:
    """Placeholder image for items whose rendering failed."""
    try:
        image = Image.new("RGBA", (max(1, width * scale), max(1, height * scale)), TRANSPARENT)
        draw = ImageDraw.Draw(image)
        draw.rectangle((0, 0, image.width - 1, image.height - 1), fill=_rgba(ERROR_FILL, ERROR_ALPHA))

        font = ImageFont.load_default()
        left, top, right, bottom = draw.textbbox((0, 0), message, font=font)
        tx = (image.width - (right - left)) // 2 - left
        ty = (image.height - (bottom - top)) // 2 - top
        draw.text((tx, ty), message, fill=_rgba(ERROR_TEXT), font=font)
        return _png_data_url(image)
    except (ValueError, MemoryError, OSError) as exc:
        logger.error("could not render error placeholder: %s", exc)
        return FALLBACK_DATA_URL
