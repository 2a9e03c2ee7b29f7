"""Layer compositing.

Overlays are drawn with Pillow's alpha-over compositing onto a fresh canvas the
size of the base. Overlays may hang off any edge of the base (including
negative offsets); whatever falls outside is clipped.
"""

from typing import Sequence, Tuple

from PIL import Image

from sprite_compositor.buffer import PixelBuffer
from sprite_compositor.utils.pixels import scale_opacity

# (overlay, x, y, opacity)
Layer = Tuple[PixelBuffer, int, int, float]


def _draw(canvas: Image.Image, overlay: PixelBuffer, x: int, y: int) -> None:
    src_x, src_y = max(0, -x), max(0, -y)
    if src_x >= overlay.width or src_y >= overlay.height:
        return
    if x >= canvas.width or y >= canvas.height:
        return
    canvas.alpha_composite(
        overlay.to_image(), dest=(max(0, x), max(0, y)), source=(src_x, src_y)
    )


def layer(
    base: PixelBuffer, overlay: PixelBuffer, x: int, y: int, opacity: float = 1.0
) -> PixelBuffer:
    """Return ``base`` with ``overlay`` drawn at ``(x, y)``.

    When ``opacity`` is below 1 the overlay's alpha is scaled first.
    """
    if opacity < 1.0:
        overlay = scale_opacity(overlay, opacity)
    canvas = base.to_image()
    _draw(canvas, overlay, x, y)
    return PixelBuffer.from_image(canvas)


def layer_all(base: PixelBuffer, layers: Sequence[Layer]) -> PixelBuffer:
    """Draw several overlays onto one canvas, in order."""
    canvas = base.to_image()
    for overlay, x, y, opacity in layers:
        if opacity < 1.0:
            overlay = scale_opacity(overlay, opacity)
        _draw(canvas, overlay, x, y)
    return PixelBuffer.from_image(canvas)
