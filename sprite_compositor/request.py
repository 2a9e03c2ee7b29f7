"""Sprite build request."""

from dataclasses import dataclass

from sprite_compositor.types import EntityContext, ItemID, Shiny, SpeciesID


@dataclass(frozen=True)
class SpriteRequest:
    """Everything about an entity that affects how its sprite looks.

    Attributes:
        species: Species number; 0 means an empty slot.
        form: Form index.
        gender: 0 male, 1 female, 2 genderless.
        formarg: Raw form argument value.
        held_item: Held item id, 0 for none.
        is_egg: True while the entity is still an egg.
        shiny: Requested shininess.
        context: Game context the sprite is drawn for.
    """

    species: SpeciesID
    form: int = 0
    gender: int = 0
    formarg: int = 0
    held_item: ItemID = 0
    is_egg: bool = False
    shiny: Shiny = Shiny.NEVER
    context: EntityContext = EntityContext.NONE
