"""Common type aliases and enumerations.

``ImageLoader`` is the single extension point through which the compositor
reaches the outside world: it maps a resource key to a decoded
:class:`~sprite_compositor.buffer.PixelBuffer`, or ``None`` when no such
resource exists.
"""

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Callable, Optional, Tuple, TYPE_CHECKING

from pyrsistent import pmap
from pyrsistent.typing import PMap


# Forward declaration for ImageLoader typing to avoid circular imports:
if TYPE_CHECKING:
    from sprite_compositor.buffer import PixelBuffer

SpeciesID = int
ItemID = int

ImageLoader = Callable[[str], Optional["PixelBuffer"]]


@dataclass(frozen=True)
class Color:
    """Straight (non-premultiplied) color.

    Attributes:
        r: Red channel (0-255).
        g: Green channel (0-255).
        b: Blue channel (0-255).
        a: Alpha channel (0-255), opaque by default.
    """

    r: int
    g: int
    b: int
    a: int = 0xFF

    def bgra(self) -> Tuple[int, int, int, int]:
        """Channel values in pixel-buffer byte order."""
        return (self.b, self.g, self.r, self.a)

    def with_alpha(self, a: int) -> "Color":
        return Color(self.r, self.g, self.b, a)


class Shiny(StrEnum):
    """Requested shininess of the rendered entity."""

    NEVER = auto()
    ALWAYS = auto()
    ALWAYS_STAR = auto()
    ALWAYS_SQUARE = auto()
    RANDOM = auto()

    @property
    def is_shiny(self) -> bool:
        return self in (Shiny.ALWAYS, Shiny.ALWAYS_STAR, Shiny.ALWAYS_SQUARE)


class EntityContext(StrEnum):
    """Game generation / origin the sprite is drawn for."""

    NONE = auto()
    GEN1 = auto()
    GEN2 = auto()
    GEN3 = auto()
    GEN4 = auto()
    GEN5 = auto()
    GEN6 = auto()
    GEN7 = auto()
    GEN8 = auto()
    GEN9 = auto()
    GEN7B = auto()
    GEN8A = auto()
    GEN8B = auto()

    @property
    def generation(self) -> int:
        return _CONTEXT_GENERATION[self]


_CONTEXT_GENERATION: PMap[EntityContext, int] = pmap(
    {
        EntityContext.NONE: 0,
        EntityContext.GEN1: 1,
        EntityContext.GEN2: 2,
        EntityContext.GEN3: 3,
        EntityContext.GEN4: 4,
        EntityContext.GEN5: 5,
        EntityContext.GEN6: 6,
        EntityContext.GEN7: 7,
        EntityContext.GEN8: 8,
        EntityContext.GEN9: 9,
        EntityContext.GEN7B: 7,
        EntityContext.GEN8A: 8,
        EntityContext.GEN8B: 8,
    }
)


class GameVersion(StrEnum):
    """Game versions the compositor distinguishes between."""

    ANY = auto()
    FR = auto()
    LG = auto()
    FRLG = auto()
    E = auto()
    RS = auto()
