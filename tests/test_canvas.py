import base64
import io

import pytest
from PIL import Image

from item_sprites.canvas import (
    DATA_URL_PREFIX,
    DISPLAY_SCALE,
    TRANSPARENT,
    MirrorFrame,
    SurfaceError,
    create_surface,
    error_data_url,
)

RED = (255, 0, 0, 255)


def _decode(data_url):
    assert data_url.startswith(DATA_URL_PREFIX)
    raw = base64.b64decode(data_url[len(DATA_URL_PREFIX):])
    return Image.open(io.BytesIO(raw))


def test_surface_is_scaled_logical_grid():
    surface = create_surface(10, 8)
    assert (surface.width, surface.height) == (10, 8)
    assert surface.image.size == (10 * DISPLAY_SCALE, 8 * DISPLAY_SCALE)
    assert surface.image.mode == "RGBA"
    assert surface.filled_pixels() == set()


def test_invalid_surface_raises():
    with pytest.raises(SurfaceError):
        create_surface(0, 8)
    with pytest.raises(SurfaceError):
        create_surface(8, -1)


def test_block_fills_whole_display_cells():
    """One logical unit covers a full scale x scale block of display pixels."""
    surface = create_surface(4, 4)
    surface.block(1, 1, 1, 1, "#FF0000")

    assert surface.pixel(1, 1) == RED
    s = DISPLAY_SCALE
    assert surface.image.getpixel((s, s)) == RED
    assert surface.image.getpixel((2 * s - 1, 2 * s - 1)) == RED
    assert surface.image.getpixel((2 * s, 2 * s)) == TRANSPARENT


def test_block_clips_at_edges():
    surface = create_surface(4, 4)
    surface.block(-2, -2, 4, 4, "#FF0000")
    surface.block(3, 3, 10, 10, "#FF0000")

    assert surface.filled_pixels() == {(0, 0), (1, 0), (0, 1), (1, 1), (3, 3)}


def test_block_floors_and_skips_empty_extents():
    surface = create_surface(4, 4)
    surface.block(1.7, 2.2, 1.9, 1.0, "#FF0000")
    surface.block(0, 0, 0, 3, "#FF0000")
    surface.block(0, 0, 3, -1, "#FF0000")

    assert surface.filled_pixels() == {(1, 2)}


def test_clear_restores_transparency():
    surface = create_surface(4, 4)
    surface.block(0, 0, 4, 4, "#FF0000")
    surface.clear(1, 1, 2, 2)
    assert not surface.is_filled(1, 1)
    assert not surface.is_filled(2, 2)
    assert surface.is_filled(0, 0)
    assert surface.pixel(9, 9) == TRANSPARENT


def test_mirror_frame_reflects_spans():
    """
    The same local span drawn through frames of opposite sides lands
    on mirrored columns around the two origins.
    """
    surface = create_surface(12, 2)
    MirrorFrame(surface, 6, 1).block(0, 0, 3, 1, "#FF0000")
    left = MirrorFrame(surface, 5, -1)
    left.block(0, 1, 3, 1, "#FF0000")

    assert {x for x, y in surface.filled_pixels() if y == 0} == {6, 7, 8}
    assert {x for x, y in surface.filled_pixels() if y == 1} == {3, 4, 5}
    assert left.x(2) == 3


def test_data_url_is_png_of_display_size():
    surface = create_surface(5, 3)
    surface.block(0, 0, 1, 1, "#00FF00")
    image = _decode(surface.to_data_url())

    assert image.format == "PNG"
    assert image.size == (5 * DISPLAY_SCALE, 3 * DISPLAY_SCALE)


def test_error_placeholder_is_translucent_red():
    image = _decode(error_data_url("CTX Fail", 16, 8)).convert("RGBA")

    assert image.size == (16 * DISPLAY_SCALE, 8 * DISPLAY_SCALE)
    r, g, b, a = image.getpixel((0, 0))
    assert (r, g, b) == (255, 0, 0)
    assert a == 178
