"""Resource loaders.

Anything matching :data:`~sprite_compositor.types.ImageLoader` can feed the
builder. Two are provided: one reading ``<root>/<key>.png`` files from disk and
one serving buffers from an in-memory mapping.

Decoded files have the color bytes of fully transparent pixels zeroed, so
every buffer a loader hands out treats transparent pixels as all zero.
"""

import functools
import logging
import os
from typing import Mapping, Optional

from PIL import Image

from sprite_compositor.buffer import PixelBuffer
from sprite_compositor.types import ImageLoader
from sprite_compositor.utils.pixels import clear_transparent

logger = logging.getLogger(__name__)

DEFAULT_ASSET_ROOT = "assets"
DEFAULT_EXTENSION = ".png"
DEFAULT_CACHE_SIZE = 1024


def load_image(path: str) -> Optional[PixelBuffer]:
    """Decode an image file, or ``None`` if it is missing or unreadable."""
    try:
        with Image.open(path) as image:
            buf = PixelBuffer.from_image(image.convert("RGBA"))
    except OSError as exc:
        logger.debug("could not load %s: %s", path, exc)
        return None
    return clear_transparent(buf)


class FileSystemImageLoader:
    """Loads ``<root>/<key><extension>``, keeping the most recent results, hit or miss."""

    root: str
    extension: str

    def __init__(
        self,
        root: str = DEFAULT_ASSET_ROOT,
        extension: str = DEFAULT_EXTENSION,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ):
        self.root = root
        self.extension = extension
        self._load = functools.lru_cache(maxsize=cache_size)(self._read)

    def path(self, key: str) -> str:
        return os.path.join(self.root, key + self.extension)

    def _read(self, key: str) -> Optional[PixelBuffer]:
        return load_image(self.path(key))

    def cache_info(self):
        return self._load.cache_info()

    def __call__(self, key: str) -> Optional[PixelBuffer]:
        return self._load(key)


@functools.cache
def default_loader() -> FileSystemImageLoader:
    """Shared loader for :data:`DEFAULT_ASSET_ROOT`, used when none is given."""
    return FileSystemImageLoader()


class MappingImageLoader:
    """Serves buffers from a mapping of resource key to buffer."""

    def __init__(self, images: Mapping[str, PixelBuffer]):
        self.images = dict(images)

    def __call__(self, key: str) -> Optional[PixelBuffer]:
        return self.images.get(key)


def load_fixed(loader: ImageLoader, key: str, width: int, height: int) -> PixelBuffer:
    """Load an asset that must always exist, substituting a blank canvas if absent."""
    image = loader(key)
    if image is None:
        logger.warning("missing fixed sprite asset %r, using a blank image", key)
        return PixelBuffer.blank(width, height)
    return image
