"""Type / encounter color backgrounds painted behind a sprite's silhouette."""

from typing import Optional

from sprite_compositor.buffer import BYTES_PER_PIXEL, PixelBuffer
from sprite_compositor.config import DisplayConfig, SpriteBackgroundType
from sprite_compositor.data.type_color import tera_color
from sprite_compositor.types import Color
from sprite_compositor.utils.pixels import blend_transparent


def apply_color(
    image: PixelBuffer,
    background: SpriteBackgroundType,
    color: Color,
    thickness: int,
    opacity_stripe: int,
    opacity_background: int,
) -> PixelBuffer:
    """Blend ``color`` into the non-opaque pixels of a stripe or the whole image.

    Stripe thickness is clamped to the image height.
    """
    if background is SpriteBackgroundType.NONE:
        return image
    if background is SpriteBackgroundType.FULL_BACKGROUND:
        return blend_transparent(image, color, opacity_background)

    stripe = min(max(thickness, 0), image.height)
    row = image.width * BYTES_PER_PIXEL
    if background is SpriteBackgroundType.BOTTOM_STRIPE:
        if stripe == 0:
            return image
        return blend_transparent(
            image, color, opacity_stripe, row * (image.height - stripe)
        )
    if stripe == 0:
        return image
    return blend_transparent(
        image, color, opacity_stripe, 0, row * stripe - BYTES_PER_PIXEL
    )


def apply_tera_color(
    image: PixelBuffer, elemental_type: int, config: DisplayConfig
) -> PixelBuffer:
    return apply_color(
        image,
        config.show_tera_type,
        tera_color(elemental_type),
        config.show_tera_thickness_stripe,
        config.show_tera_opacity_stripe,
        config.show_tera_opacity_background,
    )


def apply_encounter_color(
    image: PixelBuffer,
    color: Color,
    config: DisplayConfig,
    background: Optional[SpriteBackgroundType] = None,
) -> PixelBuffer:
    """Encounter highlight; ``background`` defaults to ``config.show_encounter_color``."""
    return apply_color(
        image,
        background if background is not None else config.show_encounter_color,
        color,
        config.show_encounter_thickness_stripe,
        config.show_encounter_opacity_stripe,
        config.show_encounter_opacity_background,
    )
