import itertools
import math

import pytest
from PIL import ImageColor

from item_sprites.axe_head import BladeParams, rasterize_axe_head, rasterize_blade
from item_sprites.boot_parts import BootParams, buckle_rows, leg_width_at, rasterize_boot
from item_sprites.bow_parts import LimbParams, limb_offset, rasterize_limbs
from item_sprites.canvas import create_surface
from item_sprites.palettes import get_palette
from item_sprites.pauldrons import (
    SHOULDER_SLOPE,
    PauldronParams,
    fit_pauldron_size,
    pauldron_size,
    rasterize_pauldrons,
)
from item_sprites.profiles import is_inside
from item_sprites.rng import rng_for
from item_sprites.shaft import PommelParams, ShaftParams, rasterize_pommel, rasterize_shaft
from item_sprites.styles import (
    ArmorStyle,
    AxeType,
    BladeShape,
    BootType,
    BowType,
    Decoration,
    EdgeProfile,
    HeelStyle,
    Neckline,
    PauldronStyle,
    PommelShape,
    ShaftStyle,
    TipStyle,
    ToeShape,
)
from item_sprites.torso import DecorationParams, TorsoParams, rasterize_decoration, rasterize_torso

STEEL = get_palette("STEEL")


def _blade(shape, edge, length=14, height=16):
    return BladeParams(
        shape=shape,
        edge_profile=edge,
        curve_intensity=0.8,
        length=length,
        height=height,
        palette=STEEL,
        connection_width=3,
    )


@pytest.mark.parametrize("shape,edge", list(itertools.product(BladeShape, EdgeProfile)))
def test_blade_rows_never_thinner_than_connection(shape, edge):
    """Every blade row reaches at least three cells so the head never detaches from the haft."""
    surface = create_surface()
    facts = rasterize_blade(surface, _blade(shape, edge), 32, 32, 3, 1)

    assert facts.min_segment >= 3
    assert len(facts.segments) == 16
    assert facts.max_y - facts.min_y + 1 == 16


@pytest.mark.parametrize("shape,edge", list(itertools.product(BladeShape, EdgeProfile)))
def test_blade_sides_are_mirror_images(shape, edge):
    """
    WHAT IS THIS TEST?
    ==================
    A blade drawn to the left of the haft must be the exact reflection of
    the one drawn to the right, colours included. With the haft centred on
    x = 32, column x on the right maps to 64 - x on the left.
    """
    params = _blade(shape, edge)
    right_surface, left_surface = create_surface(), create_surface()
    right = rasterize_blade(right_surface, params, 32, 32, 3, 1)
    left = rasterize_blade(left_surface, params, 32, 32, 3, -1)

    assert {(64 - x, y) for x, y in right.pixels} == set(left.pixels)
    for x, y in right.pixels:
        assert right_surface.pixel(x, y) == left_surface.pixel(64 - x, y)


def test_double_axe_has_two_blades_and_no_spike():
    surface = create_surface()
    params = BladeParams(BladeShape.BEARDED, EdgeProfile.CONVEX, 0.5, 14, 16, STEEL, spike_length=5)
    facts = rasterize_axe_head(surface, AxeType.DOUBLE_AXE, params, 32, 12, 3)

    assert [blade.side for blade in facts.blades] == [-1, 1]
    assert facts.socket_y == 12 + 1


def test_single_axe_spike_sits_opposite_the_blade():
    surface = create_surface()
    params = BladeParams(BladeShape.FLARED, EdgeProfile.STRAIGHT, 0.5, 12, 14, STEEL, spike_length=5)
    facts = rasterize_axe_head(surface, AxeType.HAND_AXE, params, 32, 12, 3, side=1)

    assert [blade.side for blade in facts.blades] == [1]
    assert all(x > 32 for x, _ in facts.blades[0].pixels)
    # spike pokes out past the socket, away from the blade
    assert surface.is_filled(32 - 1 - 3, facts.socket_y)


@pytest.mark.parametrize("thickness", [1, 2, 3, 4])
@pytest.mark.parametrize("seed", range(5))
def test_round_pommel_is_as_tall_as_it_is_wide(thickness, seed):
    surface = create_surface()
    facts = rasterize_pommel(surface, PommelParams(PommelShape.ROUND, STEEL), 32, 40, thickness, rng_for(seed))

    assert facts.width == facts.height
    assert facts.width % 2 == 1
    filled = surface.filled_pixels()
    assert min(x for x, _ in filled) == facts.x
    assert max(y for _, y in filled) == facts.y + facts.height - 1


@pytest.mark.parametrize("shape", list(PommelShape))
def test_pommel_hangs_below_the_shaft(shape):
    surface = create_surface()
    params = ShaftParams(
        length=30,
        thickness=3,
        palette=get_palette("WOOD"),
        style=ShaftStyle.RINGED_SHAFT,
        accent_palette=get_palette("GOLD"),
        ring_count=2,
        pommel=PommelParams(shape, get_palette("IRON")),
    )
    facts = rasterize_shaft(surface, params, 32, 10, rng_for(3))

    assert facts.bottom_y == 40
    assert facts.pommel is not None
    assert facts.pommel.y == 40
    assert surface.is_filled(32, 40)
    assert surface.is_filled(32, 10)


def _torso_params(style=ArmorStyle.SMOOTH_PLATE, neckline=Neckline.V_NECK):
    return TorsoParams(
        height=40,
        base_width=32,
        waist_taper=6,
        palette=get_palette("IRON"),
        style=style,
        neckline=neckline,
        neckline_depth=7,
        neckline_width=16,
    )


@pytest.mark.parametrize("neckline", list(Neckline))
@pytest.mark.parametrize("style", list(ArmorStyle))
def test_neckline_cutout_stays_transparent(style, neckline):
    """Shading, musculature and decoration never paint inside the neck opening."""
    surface = create_surface()
    torso = rasterize_torso(surface, _torso_params(style, neckline), 32, 14)
    rasterize_decoration(surface, torso, DecorationParams(Decoration.BORDER, get_palette("GOLD"), 3))
    rasterize_decoration(surface, torso, DecorationParams(Decoration.CROSS, get_palette("GOLD"), 2))

    cutouts = [span for span in torso.occupancy.values() if span.is_cutout]
    assert cutouts
    for y, span in torso.occupancy.items():
        for x in range(span.x_start, span.x_end + 1):
            if span.in_cutout(x):
                assert not surface.is_filled(x, y)
            else:
                assert surface.is_filled(x, y)


def test_torso_rows_are_centred_and_even():
    surface = create_surface()
    torso = rasterize_torso(surface, _torso_params(), 32, 14)

    assert torso.shoulder_width == 32
    assert torso.waist_width < torso.shoulder_width
    for span in torso.occupancy.values():
        assert span.width % 2 == 0
        assert span.x_start + span.x_end == 63


@pytest.mark.parametrize("style", [PauldronStyle.ROUND_CAP, PauldronStyle.LAYERED_PLATE, PauldronStyle.SPIKED_PLATE])
def test_pauldrons_are_mirror_images(style):
    """
    WHAT IS THIS TEST?
    ==================
    Both shoulder guards come from one local drawing, so the left guard is
    the right guard reflected about the torso's centre line
    (x -> 2 * 32 - 1 - x), colours included.
    """
    torso = rasterize_torso(create_surface(), _torso_params(), 32, 14)
    surface = create_surface()
    params = PauldronParams(style, 0.35, get_palette("BRONZE"), layers=3, spike_size=4)
    left, right = rasterize_pauldrons(surface, params, torso)

    assert (left.side, right.side) == (-1, 1)
    assert left.width == right.width and left.height == right.height
    assert left.pixels
    assert {(63 - x, y) for x, y in left.pixels} == set(right.pixels)
    for x, y in right.pixels:
        assert surface.pixel(x, y) == surface.pixel(63 - x, y)


def test_no_pauldrons_draws_nothing():
    torso = rasterize_torso(create_surface(), _torso_params(), 32, 14)
    surface = create_surface()

    assert rasterize_pauldrons(surface, None, torso) == ()
    none = PauldronParams(PauldronStyle.NONE, 0.3, get_palette("IRON"))
    assert rasterize_pauldrons(surface, none, torso) == ()
    assert surface.filled_pixels() == set()


def test_pauldrons_skip_the_neck_opening():
    torso = rasterize_torso(create_surface(), _torso_params(), 32, 14)
    surface = create_surface()
    params = PauldronParams(PauldronStyle.LAYERED_PLATE, 0.4, get_palette("BRONZE"), layers=2)
    for facts in rasterize_pauldrons(surface, params, torso):
        for x, y in facts.pixels:
            span = torso.occupancy.get(y)
            assert span is None or not span.in_cutout(x)


def _boot_params(toe_shape=ToeShape.POINTED):
    return BootParams(
        style=BootType.CALF_HIGH,
        toe_shape=toe_shape,
        leg_height=14,
        foot_height=9,
        leg_top_width=7,
        leg_initial_width=6,
        heel_extension=2,
        toe_extension=8,
        main_palette=get_palette("LEATHER"),
        sole_palette=get_palette("WOOD"),
        heel_style=HeelStyle.LOW_BLOCK,
        heel_height=3,
        cuff_palette=get_palette("BONE"),
        buckle_palette=get_palette("IRON"),
        buckle_count=2,
    )


@pytest.mark.parametrize("toe_shape", list(ToeShape))
def test_boot_pair_is_mirrored(toe_shape):
    """
    WHAT IS THIS TEST?
    ==================
    The left boot occupies a 22-column strip from x = 2, the right boot the
    strip from x = 26. Column u of the left strip must match column 21 - u
    of the right strip pixel for pixel.
    """
    surface = create_surface(50, 36)
    params = _boot_params(toe_shape)
    rasterize_boot(surface, params, 2, 4, mirrored=False)
    rasterize_boot(surface, params, 26, 4, mirrored=True)

    assert surface.filled_pixels()
    for y in range(36):
        for u in range(22):
            assert surface.pixel(2 + u, y) == surface.pixel(26 + 21 - u, y)


def test_boot_stays_inside_its_strip():
    surface = create_surface(50, 36)
    facts = rasterize_boot(surface, _boot_params(), 2, 4)

    assert facts.toe_x >= 2
    assert facts.heel_x <= 2 + 21
    assert all(x < 24 for x, _ in surface.filled_pixels())


def test_heel_block_sits_below_the_sole():
    surface = create_surface(50, 36)
    params = _boot_params()
    facts = rasterize_boot(surface, params, 2, 4)

    assert facts.bottom_y == 4 + params.leg_height + params.foot_height - 1
    assert facts.sole_y + params.sole_height + params.heel_height - 1 == facts.bottom_y
    assert surface.is_filled(facts.heel_x, facts.bottom_y)
    assert not surface.is_filled(facts.toe_x, facts.bottom_y)


def test_leg_tapers_from_top_to_ankle():
    params = _boot_params()
    assert leg_width_at(params, 0) == params.leg_top_width
    assert leg_width_at(params, params.leg_height - 1) == params.leg_initial_width


def test_buckles_clear_the_cuff():
    params = _boot_params()
    rows = buckle_rows(params)
    assert len(rows) == 2
    assert min(rows) >= params.leg_height // 5 + 1
    assert max(rows) <= params.leg_height - 2


@pytest.mark.parametrize("bow_type", list(BowType))
def test_limbs_bow_away_from_the_string(bow_type):
    surface = create_surface()
    params = LimbParams(bow_type, 44, 9, 3, get_palette("WOOD"), TipStyle.NOCKED)
    facts = rasterize_limbs(surface, params, 21, 32)

    assert facts.top_y == 10 and facts.bottom_y == 54
    belly = facts.rows[32]
    assert belly.x_end < 21
    assert limb_offset(bow_type, 9, 3, 0.0) == 9
    assert all(span.width >= 1 for span in facts.rows.values())
    assert is_inside(facts.rows, belly.x_start, 32)


def _color(hex_color):
    return ImageColor.getrgb(hex_color) + (255,)


@pytest.mark.parametrize("seed", range(5))
def test_round_pommel_rim_is_lit_from_above(seed):
    """
    WHAT IS THIS TEST?
    ==================
    Circular parts are lit from the top left: rim cells above the centre
    (and left of it on the centre row) take the highlight, the rest of the
    rim takes the shadow.
    """
    surface = create_surface()
    facts = rasterize_pommel(surface, PommelParams(PommelShape.ROUND, STEEL), 32, 40, 4, rng_for(seed))
    radius = facts.width // 2
    cy = facts.y + radius

    assert radius >= 2
    assert surface.pixel(32, facts.y) == _color(STEEL.highlight)
    assert surface.pixel(32 - radius, cy) == _color(STEEL.highlight)
    assert surface.pixel(32, cy + radius) == _color(STEEL.shadow)
    assert surface.pixel(32 + radius, cy) == _color(STEEL.shadow)
    assert surface.pixel(32, cy) == _color(STEEL.base)


def test_pauldron_follows_the_shoulder_slope():
    """Each column of a guard starts lower the further it sits from the neck."""
    torso = rasterize_torso(create_surface(), _torso_params(), 32, 14)
    surface = create_surface()
    palette = get_palette("BRONZE")
    params = PauldronParams(PauldronStyle.LAYERED_PLATE, 0.35, palette, layers=1)
    left, right = rasterize_pauldrons(surface, params, torso)

    for facts, inner_x in ((right, torso.shoulder_right), (left, torso.shoulder_left)):
        for u in range(facts.width):
            x = inner_x + facts.side * u
            top = min(y for px, y in facts.pixels if px == x)
            assert top == facts.top_y + math.floor(u * SHOULDER_SLOPE)
            assert surface.pixel(x, top) == _color(palette.highlight)


def test_pauldron_size_shrinks_to_fit_the_canvas():
    size = fit_pauldron_size(0.40, 40, 64)
    width, _ = pauldron_size(size, 40)

    assert size < 0.40
    assert 40 + 2 * width <= 64
    assert fit_pauldron_size(0.25, 28, 64) == 0.25
