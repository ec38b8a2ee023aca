"""Closed sets of style tokens shared by the rasterizers and generators."""
from __future__ import annotations

from enum import Enum


class Token(str, Enum):
    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return " ".join(part.capitalize() for part in self.value.split("_"))


# axe

class AxeType(Token):
    HAND_AXE = "hand_axe"
    BATTLE_AXE = "single_blade_battleaxe"
    DOUBLE_AXE = "double_blade_axe"


class ShaftStyle(Token):
    PLAIN = "plain"
    WRAPPED_GRIP = "wrapped_grip"
    RINGED_SHAFT = "ringed_shaft"


class PommelShape(Token):
    ROUND = "round"
    SQUARE = "square"
    DISC = "disc"
    FINIAL = "finial"
    POINTED = "pointed_pommel"
    FLARED = "flared_pommel"


class BladeShape(Token):
    EXPANDING_STRAIGHT = "expanding_straight"
    BEARDED = "bearded"
    FLARED = "flared"
    POINTED_TAPER = "pointed_taper"


class EdgeProfile(Token):
    STRAIGHT = "straight_edge"
    CONVEX = "convex_edge"
    CONCAVE = "concave_edge"


# bow

class BowType(Token):
    LONGBOW = "longbow"
    SHORTBOW = "shortbow"
    RECURVE = "recurve"


class TipStyle(Token):
    SIMPLE = "simple"
    NOCKED = "nocked"


class ArrowheadShape(Token):
    TRIANGLE = "triangle"
    LEAF = "leaf"


class FletchingStyle(Token):
    CLASSIC_ANGLED = "classic_angled"
    STRAIGHT = "straight"


# armor

class ArmorStyle(Token):
    SMOOTH_PLATE = "smooth_plate"
    MUSCLED_PLATE = "muscled_plate"
    LEATHER_VEST = "leather_vest"

    @property
    def is_plate(self) -> bool:
        return self is not ArmorStyle.LEATHER_VEST


class Neckline(Token):
    V_NECK = "v_neck"
    ROUND_NECK = "round_neck"
    SQUARE_NECK = "square_neck"


class PauldronStyle(Token):
    NONE = "none"
    ROUND_CAP = "round_cap"
    LAYERED_PLATE = "layered_plate"
    SPIKED_PLATE = "spiked_plate"


class Decoration(Token):
    NONE = "none"
    BORDER = "border"
    VERTICAL_STRIPE = "vertical_stripe"
    HORIZONTAL_BAND = "horizontal_band"
    CROSS = "cross"


# boots

class BootType(Token):
    ANKLE_BOOT = "ankle_boot"
    CALF_HIGH = "calf_high"
    KNEE_HIGH = "knee_high"


class ToeShape(Token):
    ROUNDED = "rounded"
    SQUARE = "square"
    POINTED = "pointed"


class HeelStyle(Token):
    NONE = "none"
    LOW_BLOCK = "low_block"
    MEDIUM_BLOCK = "medium_block"
