"""Held items that share a single "lump" icon instead of their own sprite."""

from enum import StrEnum, auto

from sprite_compositor.types import EntityContext, ItemID


class HeldItemLump(StrEnum):
    NONE = auto()
    TECHNICAL_MACHINE = auto()
    TECHNICAL_RECORD = auto()


def _in(item: ItemID, *ranges: tuple[int, int]) -> bool:
    return any(lo <= item <= hi for lo, hi in ranges)


def get_lump(item: ItemID, context: EntityContext) -> HeldItemLump:
    generation = context.generation
    if generation <= 4 and _in(item, (328, 419)):
        return HeldItemLump.TECHNICAL_MACHINE
    if generation == 8:
        if _in(item, (328, 427)):
            return HeldItemLump.TECHNICAL_MACHINE
        if _in(item, (1130, 1229)):
            return HeldItemLump.TECHNICAL_RECORD
    if generation == 9 and _in(item, (328, 419), (618, 620), (690, 693), (2160, 2289)):
        return HeldItemLump.TECHNICAL_MACHINE
    return HeldItemLump.NONE
