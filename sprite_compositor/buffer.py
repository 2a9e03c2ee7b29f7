"""Immutable RGBA pixel buffer.

A :class:`PixelBuffer` is the unit every compositing step consumes and
produces. Pixels are stored row-major as four bytes each in ``B, G, R, A``
order (the little-endian packing of a 32-bit ARGB color). A pixel whose alpha
byte is zero is fully transparent and its color bytes carry no meaning; the
glow effect relies on this by parking intermediate values there.

Buffers are value objects: operations never mutate one in place, they build a
new buffer from a private NumPy copy (:meth:`PixelBuffer.pixels`).
"""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
from PIL import Image

UInt8Array = npt.NDArray[np.uint8]

BYTES_PER_PIXEL = 4


@dataclass(frozen=True)
class PixelBuffer:
    """Raw BGRA pixel data with its dimensions.

    Attributes:
        width: Width in pixels.
        height: Height in pixels.
        data: ``width * height * 4`` bytes, row-major, BGRA.
    """

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * BYTES_PER_PIXEL
        if len(self.data) != expected:
            raise ValueError(
                f"Pixel data length {len(self.data)} does not match "
                f"{self.width}x{self.height} ({expected} bytes)"
            )

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def stride(self) -> int:
        return self.width * BYTES_PER_PIXEL

    def pixels(self) -> UInt8Array:
        """Return a writable ``(height, width, 4)`` copy of the pixel data."""
        return (
            np.frombuffer(self.data, dtype=np.uint8)
            .reshape((self.height, self.width, BYTES_PER_PIXEL))
            .copy()
        )

    def to_image(self) -> Image.Image:
        """Convert to a new Pillow ``RGBA`` image."""
        return Image.frombytes("RGBA", self.size, self.data, "raw", "BGRA")

    @staticmethod
    def from_pixels(pixels: UInt8Array) -> "PixelBuffer":
        if pixels.ndim != 3 or pixels.shape[2] != BYTES_PER_PIXEL:
            raise ValueError(f"Expected (height, width, 4) pixels, got {pixels.shape}")
        height, width = pixels.shape[:2]
        return PixelBuffer(width, height, pixels.astype(np.uint8).tobytes())

    @staticmethod
    def from_image(image: Image.Image) -> "PixelBuffer":
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return PixelBuffer(image.width, image.height, image.tobytes("raw", "BGRA"))

    @staticmethod
    def blank(width: int, height: int) -> "PixelBuffer":
        """Fully transparent buffer (all bytes zero)."""
        return PixelBuffer(width, height, bytes(width * height * BYTES_PER_PIXEL))
