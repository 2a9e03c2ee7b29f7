"""Sprite compositing for game-entity records.

Typical use::

    from sprite_compositor import SpriteBuilder, SpriteRequest
    from sprite_compositor.renderer.loader import FileSystemImageLoader

    builder = SpriteBuilder(loader=FileSystemImageLoader("assets"))
    image = builder.build(SpriteRequest(species=25, held_item=1)).to_image()
"""

from .buffer import PixelBuffer
from .config import DisplayConfig, SpriteBackgroundType, apply_settings
from .renderer.builder import SpriteBuilder, build_sprite
from .request import SpriteRequest
from .types import Color, EntityContext, GameVersion, Shiny

__all__ = [
    "Color",
    "DisplayConfig",
    "EntityContext",
    "GameVersion",
    "PixelBuffer",
    "Shiny",
    "SpriteBackgroundType",
    "SpriteBuilder",
    "SpriteRequest",
    "apply_settings",
    "build_sprite",
]
