"""Colors used to tint sprite backgrounds by elemental type."""

from enum import IntEnum

from pyrsistent import pmap
from pyrsistent.typing import PMap

from sprite_compositor.types import Color


class MoveType(IntEnum):
    NORMAL = 0
    FIGHTING = 1
    FLYING = 2
    POISON = 3
    GROUND = 4
    ROCK = 5
    BUG = 6
    GHOST = 7
    STEEL = 8
    FIRE = 9
    WATER = 10
    GRASS = 11
    ELECTRIC = 12
    PSYCHIC = 13
    ICE = 14
    DRAGON = 15
    DARK = 16
    FAIRY = 17


TERA_STELLAR = 99

TYPE_COLORS: PMap[MoveType, Color] = pmap(
    {
        MoveType.NORMAL: Color(159, 161, 159),
        MoveType.FIGHTING: Color(255, 128, 0),
        MoveType.FLYING: Color(129, 185, 239),
        MoveType.POISON: Color(143, 65, 203),
        MoveType.GROUND: Color(145, 81, 33),
        MoveType.ROCK: Color(175, 169, 129),
        MoveType.BUG: Color(145, 161, 25),
        MoveType.GHOST: Color(112, 65, 112),
        MoveType.STEEL: Color(96, 161, 184),
        MoveType.FIRE: Color(230, 40, 41),
        MoveType.WATER: Color(41, 128, 239),
        MoveType.GRASS: Color(63, 161, 41),
        MoveType.ELECTRIC: Color(250, 192, 0),
        MoveType.PSYCHIC: Color(239, 65, 121),
        MoveType.ICE: Color(63, 216, 255),
        MoveType.DRAGON: Color(80, 97, 225),
        MoveType.DARK: Color(80, 65, 63),
        MoveType.FAIRY: Color(239, 113, 239),
    }
)

STELLAR_COLOR = Color(255, 255, 224)  # light yellow


def type_color(elemental_type: int) -> Color:
    try:
        return TYPE_COLORS[MoveType(elemental_type)]
    except ValueError:
        raise ValueError(f"Unknown elemental type: {elemental_type}") from None


def tera_color(elemental_type: int) -> Color:
    if elemental_type == TERA_STELLAR:
        return STELLAR_COLOR
    return type_color(elemental_type)
