"""Sprite art sets.

An :class:`ArtSet` describes one family of pre-rendered sprites: canvas
dimensions, where held items and egg icons sit, and how resource keys are
named. Pick one from :data:`ART_SET_REGISTRY` at startup and hand it to the
:class:`~sprite_compositor.renderer.builder.SpriteBuilder`.

Resource keys look like ``"b_25-1f-3s"``: art-set prefix, species, then
``-form`` (nonzero forms), ``f`` (female sprites that differ), ``-formarg``
(nonzero form arguments) and ``s`` (shiny).
"""

from dataclasses import dataclass
from typing import Dict, Optional

from pyrsistent import pset
from pyrsistent.typing import PSet

from sprite_compositor.data.forms import MANAPHY
from sprite_compositor.types import ItemID, SpeciesID

SHINY_STAR_KEY = "rare_icon_alt"
SHINY_SQUARE_KEY = "rare_icon_alt_2"

# Species with a separate female sprite.
GENDERED_SPRITE_SPECIES: PSet[SpeciesID] = pset([521, 592, 593, 668, 902, 916])


def resource_suffix(
    species: SpeciesID, form: int, gender: int, formarg: int, shiny: bool
) -> str:
    key = f"_{species}"
    if form != 0:
        key += f"-{form}"
    elif gender == 1 and species in GENDERED_SPRITE_SPECIES:
        key += "f"
    if formarg != 0:
        key += f"-{formarg}"
    if shiny:
        key += "s"
    return key


@dataclass(frozen=True)
class ArtSet:
    """Per-platform sprite dimensions, placement constants and naming.

    Attributes:
        name: Registry name.
        width: Width of a generated sprite.
        height: Height of a generated sprite.
        item_shift_x: Minimum padding right of a held item icon.
        item_shift_y: Minimum padding below a held item icon.
        item_max_size: Largest width / height of an item icon.
        egg_item_shift_x: X offset of an egg drawn like a held item.
        egg_item_shift_y: Y offset of an egg drawn like a held item.
        primary_prefix: Key prefix of the primary naming scheme.
        secondary_prefix: Key prefix of the secondary scheme, if the set has one.
    """

    name: str
    width: int
    height: int
    item_shift_x: int
    item_shift_y: int
    item_max_size: int
    egg_item_shift_x: int
    egg_item_shift_y: int
    primary_prefix: str
    secondary_prefix: Optional[str] = None

    @property
    def has_secondary(self) -> bool:
        return self.secondary_prefix is not None

    @property
    def _asset_prefix(self) -> str:
        return self.secondary_prefix or self.primary_prefix

    def primary_key(
        self, species: SpeciesID, form: int, gender: int, formarg: int, shiny: bool
    ) -> str:
        return self.primary_prefix + resource_suffix(species, form, gender, formarg, shiny)

    def secondary_key(
        self, species: SpeciesID, form: int, gender: int, formarg: int, shiny: bool
    ) -> str:
        if self.secondary_prefix is None:
            raise ValueError(f"Art set {self.name!r} has no secondary naming scheme")
        return self.secondary_prefix + resource_suffix(
            species, form, gender, formarg, shiny
        )

    def species_only_key(self, species: SpeciesID) -> str:
        return f"{self._asset_prefix}_{species}"

    def item_key(self, item: ItemID) -> str:
        return f"{self._asset_prefix}item_{item}"

    def egg_key(self, species: SpeciesID) -> str:
        if species == MANAPHY:
            return f"{self._asset_prefix}_{MANAPHY}_e"
        return f"{self._asset_prefix}_egg"

    @property
    def unknown_key(self) -> str:
        return f"{self._asset_prefix}_unknown"

    @property
    def none_key(self) -> str:
        return f"{self._asset_prefix}_0"

    @property
    def unknown_item_key(self) -> str:
        return f"{self._asset_prefix}item_unk"

    @property
    def item_tm_key(self) -> str:
        return f"{self._asset_prefix}item_tm"

    @property
    def item_tr_key(self) -> str:
        return f"{self._asset_prefix}item_tr"


ART_SET_5668 = ArtSet(
    name="5668",
    width=68,
    height=56,
    item_shift_x=2,
    item_shift_y=2,
    item_max_size=32,
    egg_item_shift_x=18,
    egg_item_shift_y=1,
    primary_prefix="a",
    secondary_prefix="b",
)

ART_SET_3040 = ArtSet(
    name="3040",
    width=40,
    height=30,
    item_shift_x=0,
    item_shift_y=1,
    item_max_size=15,
    egg_item_shift_x=9,
    egg_item_shift_y=2,
    primary_prefix="c",
)

DEFAULT_ART_SET = ART_SET_5668

ART_SET_REGISTRY: Dict[str, ArtSet] = {
    "5668": ART_SET_5668,
    "3040": ART_SET_3040,
}
