"""Sprite assembly.

:func:`build_sprite` turns a :class:`SpriteRequest` into a finished image:

1. An empty slot (species 0) is the "none" placeholder.
2. The base image comes from :func:`resolve_base_image`.
3. Eggs either sit in the held-item spot over the untouched base, or cover a
   faded base entirely.
4. Held items go in the bottom-right corner.
5. Shiny entities get a star marker in the top-left corner.

Overlays are applied in exactly that order so later ones sit on top.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from sprite_compositor.buffer import PixelBuffer
from sprite_compositor.config import DEFAULT_DISPLAY_CONFIG, DisplayConfig
from sprite_compositor.data.forms import adjust_form
from sprite_compositor.data.items import HeldItemLump, get_lump
from sprite_compositor.renderer.art_set import (
    DEFAULT_ART_SET,
    SHINY_SQUARE_KEY,
    SHINY_STAR_KEY,
    ArtSet,
)
from sprite_compositor.renderer.loader import default_loader, load_fixed
from sprite_compositor.renderer.resolver import SpriteKey, resolve_base_image
from sprite_compositor.request import SpriteRequest
from sprite_compositor.types import (
    EntityContext,
    GameVersion,
    ImageLoader,
    ItemID,
    Shiny,
    SpeciesID,
)
from sprite_compositor.utils.layer import layer
from sprite_compositor.utils.pixels import scale_opacity

SHINY_OPACITY = 0.7
EGG_UNDERLAY_OPACITY = 0.33


def egg_sprite(species: SpeciesID, art_set: ArtSet, loader: ImageLoader) -> PixelBuffer:
    return load_fixed(loader, art_set.egg_key(species), art_set.width, art_set.height)


def item_sprite(
    item: ItemID, context: EntityContext, art_set: ArtSet, loader: ImageLoader
) -> PixelBuffer:
    size = art_set.item_max_size
    lump = get_lump(item, context)
    if lump is HeldItemLump.TECHNICAL_MACHINE:
        return load_fixed(loader, art_set.item_tm_key, size, size)
    if lump is HeldItemLump.TECHNICAL_RECORD:
        return load_fixed(loader, art_set.item_tr_key, size, size)
    image = loader(art_set.item_key(item))
    if image is None:
        return load_fixed(loader, art_set.unknown_item_key, size, size)
    return image


def shiny_marker(shiny: Shiny, art_set: ArtSet, loader: ImageLoader) -> PixelBuffer:
    key = SHINY_SQUARE_KEY if shiny is Shiny.ALWAYS_SQUARE else SHINY_STAR_KEY
    return load_fixed(loader, key, art_set.width, art_set.height)


def layer_egg(
    base: PixelBuffer,
    species: SpeciesID,
    has_item: bool,
    art_set: ArtSet,
    loader: ImageLoader,
    config: DisplayConfig,
) -> PixelBuffer:
    egg = egg_sprite(species, art_set, loader)
    if config.show_egg_sprite_as_item and not has_item:
        return layer(base, egg, art_set.egg_item_shift_x, art_set.egg_item_shift_y)
    faded = scale_opacity(base, EGG_UNDERLAY_OPACITY)
    return layer(faded, egg, 0, 0)


def item_position(
    base: PixelBuffer, item: PixelBuffer, art_set: ArtSet
) -> Tuple[int, int]:
    """Bottom-right placement, nudged inward for icons narrower than the maximum."""
    margin = int((art_set.item_max_size - item.width) / 4)
    x = base.width - item.width - margin - art_set.item_shift_x
    y = base.height - item.height - art_set.item_shift_y
    return x, y


def layer_item(
    base: PixelBuffer,
    item: ItemID,
    context: EntityContext,
    art_set: ArtSet,
    loader: ImageLoader,
) -> PixelBuffer:
    icon = item_sprite(item, context, art_set, loader)
    x, y = item_position(base, icon, art_set)
    return layer(base, icon, x, y)


def layer_shiny(
    base: PixelBuffer,
    shiny: Shiny,
    context: EntityContext,
    art_set: ArtSet,
    loader: ImageLoader,
) -> PixelBuffer:
    # Square markers only exist from Gen 8 on.
    if shiny is Shiny.ALWAYS_SQUARE and context.generation != 8:
        shiny = Shiny.ALWAYS
    marker = shiny_marker(shiny, art_set, loader)
    return layer(base, marker, 0, 0, SHINY_OPACITY)


def decorate(
    base: PixelBuffer,
    request: SpriteRequest,
    art_set: ArtSet,
    loader: ImageLoader,
    config: DisplayConfig = DEFAULT_DISPLAY_CONFIG,
) -> PixelBuffer:
    """Apply the egg, item and shiny overlays to an already resolved base."""
    image = base
    if request.is_egg:
        image = layer_egg(
            image, request.species, request.held_item != 0, art_set, loader, config
        )
    if request.held_item > 0:
        image = layer_item(image, request.held_item, request.context, art_set, loader)
    if request.shiny.is_shiny:
        image = layer_shiny(image, request.shiny, request.context, art_set, loader)
    return image


def build_sprite(
    request: SpriteRequest,
    art_set: ArtSet = DEFAULT_ART_SET,
    loader: Optional[ImageLoader] = None,
    config: DisplayConfig = DEFAULT_DISPLAY_CONFIG,
    game: GameVersion = GameVersion.ANY,
) -> PixelBuffer:
    """Build the complete sprite for ``request``."""
    if loader is None:
        loader = default_loader()
    if request.species == 0:
        return load_fixed(loader, art_set.none_key, art_set.width, art_set.height)

    form = adjust_form(request.species, request.form, request.context, game)
    key = SpriteKey(
        species=request.species,
        form=form,
        gender=request.gender,
        formarg=request.formarg,
        shiny=request.shiny.is_shiny,
        context=request.context,
    )
    base = resolve_base_image(key, art_set, loader).image
    return decorate(base, request, art_set, loader, config)


@dataclass(frozen=True)
class SpriteBuilder:
    """Sprite builder bound to one art set and resource loader.

    Attributes:
        art_set: Sprite family to draw with.
        loader: Resource provider.
        game: Active game, only consulted for version-dependent forms.
    """

    art_set: ArtSet = DEFAULT_ART_SET
    loader: ImageLoader = field(default_factory=default_loader)
    game: GameVersion = GameVersion.ANY

    @property
    def width(self) -> int:
        return self.art_set.width

    @property
    def height(self) -> int:
        return self.art_set.height

    def initialize(
        self, generation: int, version: GameVersion, fire_red: bool = True
    ) -> "SpriteBuilder":
        """Return a builder set up for a save file of ``version``.

        Only Gen 3 saves matter. A combined FR/LG version is narrowed with
        ``fire_red``, which the caller derives from the save's data tables.
        """
        if generation != 3:
            return self
        game = version
        if game is GameVersion.FRLG:
            game = GameVersion.FR if fire_red else GameVersion.LG
        return replace(self, game=game)

    def build(
        self, request: SpriteRequest, config: DisplayConfig = DEFAULT_DISPLAY_CONFIG
    ) -> PixelBuffer:
        return build_sprite(request, self.art_set, self.loader, config, self.game)

    def decorate(
        self,
        base: PixelBuffer,
        request: SpriteRequest,
        config: DisplayConfig = DEFAULT_DISPLAY_CONFIG,
    ) -> PixelBuffer:
        return decorate(base, request, self.art_set, self.loader, config)
