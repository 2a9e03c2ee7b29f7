"""Pixel-level operations over :class:`PixelBuffer` data.

Every public function copies its input and returns a new buffer of the same
dimensions. Arithmetic is done per byte exactly as the sprite assets were
tuned against: float products are truncated back to bytes unless stated
otherwise.

Byte ranges (``start`` / ``end``) are byte offsets into the flat BGRA data
and are expected to be multiples of 4.
"""

import numpy as np

from sprite_compositor.buffer import BYTES_PER_PIXEL, PixelBuffer, UInt8Array
from sprite_compositor.types import Color

ALPHA = 3
BLEND_AMOUNT = 0.2
GLOW_REACH = 3
GLOW_AMOUNT = 0.0777
# Color byte of a transparent pixel that accumulates glow intensity.
GLOW_DONOR_INDEX = 0


def _flat(px: UInt8Array) -> UInt8Array:
    return px.reshape((-1, BYTES_PER_PIXEL))


def _inclusive_range(buf: PixelBuffer, start: int, end: int) -> np.ndarray:
    """Pixel indices covered by the inclusive byte range ``[start, end]``."""
    if end == -1:
        end = len(buf.data) - BYTES_PER_PIXEL
    return np.arange(end, start - 1, -BYTES_PER_PIXEL) // BYTES_PER_PIXEL


def scale_opacity(buf: PixelBuffer, factor: float) -> PixelBuffer:
    """Multiply every alpha byte by ``factor``, truncating toward zero."""
    if not 0.0 <= factor <= 1.0:
        raise ValueError(f"Opacity factor must be within [0, 1], got {factor}")
    px = buf.pixels()
    px[..., ALPHA] = (px[..., ALPHA].astype(np.float64) * factor).astype(np.uint8)
    return PixelBuffer.from_pixels(px)


def fill_transparent(
    buf: PixelBuffer, color: Color, alpha: int, start: int = 0, end: int = -1
) -> PixelBuffer:
    """Replace fully transparent pixels in ``[start, end]`` with ``color`` at ``alpha``."""
    px = _flat(buf.pixels())
    idx = _inclusive_range(buf, start, end)
    idx = idx[px[idx, ALPHA] == 0]
    px[idx] = color.with_alpha(alpha).bgra()
    return PixelBuffer(buf.width, buf.height, px.tobytes())


def blend_transparent(
    buf: PixelBuffer, color: Color, alpha: int, start: int = 0, end: int = -1
) -> PixelBuffer:
    """Push non-opaque pixels in ``[start, end]`` toward ``color`` at ``alpha``.

    Transparent pixels take the target outright, fully opaque pixels are left
    alone, and partially transparent ones keep ``BLEND_AMOUNT`` of their own
    value on every byte (alpha included).
    """
    px = _flat(buf.pixels())
    idx = _inclusive_range(buf, start, end)
    target = np.array(color.with_alpha(alpha).bgra(), dtype=np.float64)

    pixel_alpha = px[idx, ALPHA]
    px[idx[pixel_alpha == 0]] = target.astype(np.uint8)

    partial = idx[(pixel_alpha != 0) & (pixel_alpha != 0xFF)]
    old = px[partial].astype(np.float64)
    px[partial] = (old * BLEND_AMOUNT + target * (1 - BLEND_AMOUNT)).astype(np.uint8)
    return PixelBuffer(buf.width, buf.height, px.tobytes())


def recolor_opaque(buf: PixelBuffer, color: Color) -> PixelBuffer:
    """Flat-fill the color bytes of every visible pixel, keeping alpha."""
    px = buf.pixels()
    visible = px[..., ALPHA] != 0
    px[visible, :ALPHA] = color.bgra()[:ALPHA]
    return PixelBuffer.from_pixels(px)


def to_grayscale(buf: PixelBuffer) -> PixelBuffer:
    """Replace the color bytes of every visible pixel with their luma.

    Weights apply to the stored byte order (byte2, byte1, byte0) and the
    result is rounded to the nearest byte, so gray input maps to itself.
    """
    px = buf.pixels()
    visible = px[..., ALPHA] != 0
    color = px[visible].astype(np.float64)
    luma = 0.3 * color[:, 2] + 0.59 * color[:, 1] + 0.11 * color[:, 0]
    gray = np.clip(np.floor(luma + 0.5), 0, 0xFF).astype(np.uint8)
    px[visible, :ALPHA] = gray[:, np.newaxis]
    return PixelBuffer.from_pixels(px)


def fill_range(buf: PixelBuffer, color: Color, start: int, end: int) -> PixelBuffer:
    """Overwrite every pixel in the half-open byte range ``[start, end)``."""
    px = _flat(buf.pixels())
    px[start // BYTES_PER_PIXEL : end // BYTES_PER_PIXEL] = color.bgra()
    return PixelBuffer(buf.width, buf.height, px.tobytes())


def clear_transparent(buf: PixelBuffer) -> PixelBuffer:
    """Zero the color bytes of every fully transparent pixel."""
    px = buf.pixels()
    px[px[..., ALPHA] == 0] = 0
    return PixelBuffer.from_pixels(px)


def set_used_pixels_opaque(buf: PixelBuffer) -> PixelBuffer:
    px = buf.pixels()
    px[px[..., ALPHA] != 0, ALPHA] = 0xFF
    return PixelBuffer.from_pixels(px)


def remove_pixels(buf: PixelBuffer, original: PixelBuffer) -> PixelBuffer:
    """Clear every pixel of ``buf`` that is visible in ``original``."""
    if buf.size != original.size:
        raise ValueError(f"Buffer sizes differ: {buf.size} != {original.size}")
    px = buf.pixels()
    px[original.pixels()[..., ALPHA] != 0] = 0
    return PixelBuffer.from_pixels(px)


def _pollute(px: UInt8Array, reach: int, amount: float) -> None:
    """Bleed intensity from visible pixels into the donor byte of their neighbors.

    Walking the visible pixels row-major, every pixel within Chebyshev
    distance ``reach`` (clipped to the buffer) has its donor byte raised by
    ``trunc(amount * (255 - byte))``. Each visit applies the same step to the
    current value, so the result of the sequential walk only depends on how
    many visible pixels reach a given byte; the step is applied that many
    times here.
    """
    height, width = px.shape[:2]
    visible = (px[..., ALPHA] != 0).astype(np.int32)
    padded = np.pad(visible, reach)
    visits = np.zeros((height, width), dtype=np.int32)
    for dy in range(2 * reach + 1):
        for dx in range(2 * reach + 1):
            visits += padded[dy : dy + height, dx : dx + width]

    donor = px[..., GLOW_DONOR_INDEX]
    for step in range(int(visits.max(initial=0))):
        hit = visits > step
        current = donor[hit].astype(np.float64)
        donor[hit] = (current + np.trunc(amount * (0xFF - current))).astype(np.uint8)


def _clean_polluted(px: UInt8Array, color: Color) -> None:
    """Turn polluted transparent pixels into ``color`` at the polluted intensity."""
    transparent = px[..., ALPHA] == 0
    glow = transparent & (px[..., GLOW_DONOR_INDEX] != 0)
    px[glow, ALPHA] = px[glow, GLOW_DONOR_INDEX]
    px[glow, :ALPHA] = color.bgra()[:ALPHA]


def _glow_edges(px: UInt8Array, color: Color, reach: int, amount: float) -> None:
    _pollute(px, reach, amount)
    _clean_polluted(px, color)


def glow_edges(
    buf: PixelBuffer,
    color: Color,
    reach: int = GLOW_REACH,
    amount: float = GLOW_AMOUNT,
) -> PixelBuffer:
    """Soft ``color`` halo around the visible silhouette, fading over ``reach`` pixels.

    Transparent pixels are expected to be all zero; a transparent pixel with a
    nonzero donor byte is treated as glow.
    """
    px = buf.pixels()
    _glow_edges(px, color, reach, amount)
    return PixelBuffer.from_pixels(px)


def sprite_glow(buf: PixelBuffer, color: Color, hollow: bool = False) -> PixelBuffer:
    """Glow layer for a sprite.

    With ``hollow`` set, partially transparent pixels are first made opaque so
    the halo does not bleed into them, and every pixel visible in the source
    is cleared afterwards, leaving only the halo itself.

    Stray color bytes under transparent pixels are cleared first so they are
    not mistaken for glow.
    """
    clean = clear_transparent(buf)
    if not hollow:
        return glow_edges(clean, color)
    glowed = glow_edges(set_used_pixels_opaque(clean), color)
    return remove_pixels(glowed, buf)
