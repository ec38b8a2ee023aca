import base64
import io
import logging

import pytest
from PIL import Image

from item_sprites import canvas
from item_sprites.apparel import ARMOR_SUB_TYPES, generate_armor, generate_boots
from item_sprites.canvas import DATA_URL_PREFIX, DISPLAY_SCALE, LOGICAL_GRID_WIDTH, SurfaceError
from item_sprites.items import resolve_variant
from item_sprites.palettes import LEATHER_MATERIALS, METAL_MATERIALS
from item_sprites.rng import rng_for
from item_sprites.styles import ArmorStyle, AxeType, BowType
from item_sprites.weapons import MAX_SHAFT_LENGTH, MIN_SHAFT_LENGTH, generate_axe, generate_bow

LEATHERS = {name.lower() for name in LEATHER_MATERIALS}
METALS = {name.lower() for name in METAL_MATERIALS}


def _image(item):
    assert item.image_data_url.startswith(DATA_URL_PREFIX)
    raw = base64.b64decode(item.image_data_url[len(DATA_URL_PREFIX):])
    return Image.open(io.BytesIO(raw))


def test_hand_axe_fits_the_hand_proportions():
    item = generate_axe("hand_axe", seed=7)

    assert item.type == "axe"
    assert not item.failed
    assert item.item_data["axe_type"] == AxeType.HAND_AXE.value
    assert MIN_SHAFT_LENGTH <= item.item_data["shaft"]["length"] < MAX_SHAFT_LENGTH
    assert item.item_data["head"]["min_segment"] >= 3
    assert _image(item).size == (64 * DISPLAY_SCALE, 64 * DISPLAY_SCALE)


@pytest.mark.parametrize("seed", range(10))
def test_double_axe_has_both_blades(seed):
    item = generate_axe("double_axe", seed=seed)
    head = item.item_data["head"]

    assert item.item_data["axe_type"] == "double_blade_axe"
    assert head["sides"] == [-1, 1]
    assert not head["has_spike_poll"]


@pytest.mark.parametrize("seed", range(10))
def test_battle_axe_has_a_long_haft(seed):
    item = generate_axe("battle_axe", seed=seed)
    assert item.item_data["axe_type"] == "single_blade_battleaxe"
    assert len(item.item_data["head"]["sides"]) == 1
    assert item.item_data["shaft"]["length"] <= MAX_SHAFT_LENGTH


@pytest.mark.parametrize("seed", range(10))
def test_forced_round_pommel_is_square_in_extent(seed):
    item = generate_axe("hand_axe", seed=seed, pommel_shape="round")
    pommel = item.item_data["shaft"]["pommel"]

    assert item.item_data["shaft"]["has_pommel"]
    assert pommel["shape"] == "round"
    assert pommel["width"] == pommel["height"]


@pytest.mark.parametrize("sub_type", ["longbow", "shortbow", "recurve"])
def test_bow_layout(sub_type):
    """Grip sits on the limb belly left of the string, the arrow stands to its right."""
    item = generate_bow(sub_type, seed=11)
    data = item.item_data

    assert data["bow_type"] == sub_type
    assert data["top_y"] < data["bottom_y"]
    assert data["grip"]["x"] < data["string"]["x"] < data["arrow"]["x"]
    assert data["arrow"]["tip_y"] < data["arrow"]["bottom_y"]
    assert item.name.endswith("& Arrow")


@pytest.mark.parametrize("seed", range(25))
def test_leather_armor_stays_in_the_leather_family(seed):
    """
    Leather armor never picks up metal: the torso, pauldrons and any
    decoration all come from leathers or paints.
    """
    data = generate_armor("leather_armor", seed=seed).item_data

    assert data["style"] == "leather_vest"
    assert data["material"] in LEATHERS
    if data["pauldrons"] is not None:
        assert data["pauldrons"]["material"] in LEATHERS
    decoration = data["torso"]["decoration"]
    if decoration is not None:
        assert decoration["material"] not in METALS


@pytest.mark.parametrize("seed", range(25))
def test_plate_armor_is_metal(seed):
    data = generate_armor("plate_armor", seed=seed).item_data

    assert data["style"] in ("smooth_plate", "muscled_plate")
    assert data["material"] in METALS
    if data["style"] == "muscled_plate":
        assert data["torso"]["decoration"] is None


@pytest.mark.parametrize("seed", range(20))
def test_knee_high_boots_have_tall_legs(seed):
    data = generate_boots("knee_high", seed=seed).item_data

    assert data["style"] == "knee_high"
    assert data["leg_height"] > data["foot_height"]
    assert data["bottom_y"] < 36


@pytest.mark.parametrize("seed", range(20))
def test_ankle_boots_fit_the_canvas(seed):
    item = generate_boots("ankle_boot", seed=seed)
    data = item.item_data

    assert data["leg_height"] >= data["foot_height"] - data["heel_height"]
    assert data["top_y"] >= 2
    assert data["bottom_y"] < 36
    assert data["has_buckles"] == (data["num_buckles"] > 0)
    assert _image(item).size == (50 * DISPLAY_SCALE, 36 * DISPLAY_SCALE)


def test_unknown_sub_type_falls_back_to_a_known_one(caplog):
    caplog.set_level(logging.WARNING, logger="item_sprites")
    item = generate_bow("crossbow", seed=3)

    assert not item.failed
    assert item.item_data["bow_type"] in {bow_type.value for bow_type in BowType}
    assert "crossbow" in caplog.text


def test_sub_type_accepts_style_token():
    item = generate_axe("single_blade_battleaxe", seed=2)
    assert item.item_data["sub_type"] == "battle_axe"


@pytest.mark.parametrize("generator", [generate_axe, generate_bow, generate_armor, generate_boots])
def test_same_seed_same_item(generator):
    first = generator(seed=1234)
    second = generator(seed=1234)

    assert first.to_dict() == second.to_dict()
    assert first.seed == 1234


def test_string_seeds_are_accepted():
    assert generate_armor(seed="knight").to_dict() == generate_armor(seed="knight").to_dict()


def test_missing_seed_is_recorded():
    item = generate_boots()
    assert isinstance(item.seed, int)
    assert generate_boots(seed=item.seed).to_dict() == item.to_dict()


@pytest.mark.parametrize(
    "generator,label,size",
    [
        (generate_axe, "Error Axe", (64, 64)),
        (generate_bow, "Error Bow", (64, 64)),
        (generate_armor, "Error Armor", (64, 64)),
        (generate_boots, "Error Boots", (50, 36)),
    ],
)
def test_surface_failure_returns_error_item(monkeypatch, caplog, generator, label, size):
    """Generators never raise: a missing surface becomes a placeholder item."""
    def boom(*args, **kwargs):
        raise SurfaceError("no context")

    monkeypatch.setattr(canvas, "create_surface", boom)
    caplog.set_level(logging.ERROR, logger="item_sprites")
    item = generator(seed=5)

    assert item.failed
    assert item.name == label
    assert item.item_data == {"error": "no context"}
    assert _image(item).size == (size[0] * DISPLAY_SCALE, size[1] * DISPLAY_SCALE)
    assert "no context" in caplog.text


@pytest.mark.parametrize("seed", range(10))
def test_bow_grip_is_centred_on_the_limb_belly(seed):
    data = generate_bow(seed=seed).item_data
    grip_centre = data["grip"]["x"] + data["grip"]["thickness"] // 2

    assert grip_centre == data["string"]["x"] - data["curve"]


@pytest.mark.parametrize("seed", range(15))
def test_armor_style_token_selects_that_style(seed, caplog):
    caplog.set_level(logging.WARNING, logger="item_sprites")
    leather = generate_armor("leather_vest", seed=seed).item_data
    muscled = generate_armor("MUSCLED_PLATE", seed=seed).item_data

    assert leather["sub_type"] == "leather_armor"
    assert leather["style"] == "leather_vest"
    assert leather["material"] in LEATHERS
    assert muscled["sub_type"] == "plate_armor"
    assert muscled["style"] == "muscled_plate"
    assert "unknown" not in caplog.text


def test_style_alias_narrows_a_grouped_variant():
    name, styles = resolve_variant("armor", ARMOR_SUB_TYPES, "smooth_plate", rng_for(0))

    assert name == "plate_armor"
    assert styles == (ArmorStyle.SMOOTH_PLATE,)
    assert resolve_variant("armor", ARMOR_SUB_TYPES, "plate_armor", rng_for(0))[1] == ARMOR_SUB_TYPES["plate_armor"]


@pytest.mark.parametrize("seed", range(60))
def test_pauldrons_fit_beside_the_shoulders(seed):
    """Both guards stay on the canvas next to the widest shoulders."""
    for sub_type in ("plate_armor", "leather_armor"):
        data = generate_armor(sub_type, seed=seed).item_data
        if data["pauldrons"] is None:
            continue
        assert data["torso"]["shoulder_width"] + 2 * data["pauldrons"]["width"] <= LOGICAL_GRID_WIDTH


@pytest.mark.parametrize("sub_type", ["hand_axe", "battle_axe", "double_axe"])
@pytest.mark.parametrize("seed", range(40))
def test_axe_blade_stays_below_the_top_edge(sub_type, seed):
    head = generate_axe(sub_type, seed=seed).item_data["head"]

    assert head["top_y"] >= 0
    assert head["bottom_y"] < 64
