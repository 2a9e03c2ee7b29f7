from typing import Dict, List, Optional, Tuple

import numpy as np

from sprite_compositor.buffer import PixelBuffer
from sprite_compositor.renderer.art_set import ArtSet
from sprite_compositor.types import Color

RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
WHITE = Color(255, 255, 255)


def solid(width: int, height: int, color: Color) -> PixelBuffer:
    """Buffer with every pixel set to ``color``."""
    px = np.zeros((height, width, 4), dtype=np.uint8)
    px[...] = color.bgra()
    return PixelBuffer.from_pixels(px)


def with_box(
    width: int,
    height: int,
    box: Tuple[int, int, int, int],
    color: Color,
) -> PixelBuffer:
    """Transparent (all-zero) buffer with ``color`` filling ``box`` = (x0, y0, x1, y1), exclusive."""
    px = np.zeros((height, width, 4), dtype=np.uint8)
    x0, y0, x1, y1 = box
    px[y0:y1, x0:x1] = color.bgra()
    return PixelBuffer.from_pixels(px)


def pixel(buf: PixelBuffer, x: int, y: int) -> Tuple[int, int, int, int]:
    """BGRA bytes of one pixel."""
    i = (y * buf.width + x) * 4
    b, g, r, a = buf.data[i : i + 4]
    return (b, g, r, a)


def sequential_glow(
    buf: PixelBuffer, color: Color, reach: int = 3, amount: float = 0.0777
) -> PixelBuffer:
    """Literal row-major pollute-then-clean walk, mutating as it goes."""
    data = bytearray(buf.data)
    width = buf.width
    stride = width * 4
    height = len(data) // stride
    for i in range(0, len(data), 4):
        if data[i + 3] == 0:
            continue
        x = (i % stride) // 4
        y = i // stride
        for ix in range(max(0, x - reach), min(width - 1, x + reach) + 1):
            for iy in range(max(0, y - reach), min(height - 1, y + reach) + 1):
                c = 4 * (ix + iy * width)
                data[c] = (data[c] + int(amount * (0xFF - data[c]))) & 0xFF
    b, g, r, _ = color.bgra()
    for i in range(0, len(data), 4):
        if data[i + 3] != 0 or data[i] == 0:
            continue
        data[i + 3] = data[i]
        data[i], data[i + 1], data[i + 2] = b, g, r
    return PixelBuffer(buf.width, buf.height, bytes(data))


class RecordingLoader:
    """In-memory loader that remembers every key it was asked for."""

    def __init__(self, images: Optional[Dict[str, PixelBuffer]] = None):
        self.images: Dict[str, PixelBuffer] = dict(images or {})
        self.requested: List[str] = []

    def __call__(self, key: str) -> Optional[PixelBuffer]:
        self.requested.append(key)
        return self.images.get(key)


def art_set_assets(art_set: ArtSet) -> Dict[str, PixelBuffer]:
    """Distinct placeholder assets for every fixed key of ``art_set``."""
    w, h = art_set.width, art_set.height
    size = art_set.item_max_size
    return {
        art_set.none_key: solid(w, h, Color(1, 1, 1)),
        art_set.unknown_key: with_box(w, h, (4, 4, 12, 12), Color(9, 9, 9)),
        art_set.egg_key(1): with_box(w, h, (20, 20, 30, 30), Color(200, 200, 100)),
        art_set.unknown_item_key: with_box(size, size, (0, 0, 8, 8), Color(7, 7, 7)),
        art_set.item_tm_key: with_box(size, size, (0, 0, 6, 6), Color(8, 8, 80)),
        art_set.item_tr_key: with_box(size, size, (0, 0, 5, 5), Color(80, 8, 8)),
        "rare_icon_alt": with_box(w, h, (0, 0, 5, 5), Color(255, 215, 0)),
        "rare_icon_alt_2": with_box(w, h, (0, 0, 4, 4), Color(255, 255, 0)),
    }
