"""Display settings consumed at build time.

:class:`DisplayConfig` is an immutable snapshot handed to
:meth:`SpriteBuilder.build`; hosts produce a new one with
:func:`apply_settings` whenever their settings change.
"""

import json
import logging
from dataclasses import dataclass, fields, replace
from enum import StrEnum, auto
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)


class SpriteBackgroundType(StrEnum):
    """How a type / encounter color is painted behind a sprite."""

    NONE = auto()
    TOP_STRIPE = auto()
    BOTTOM_STRIPE = auto()
    FULL_BACKGROUND = auto()


@dataclass(frozen=True)
class DisplayConfig:
    """Sprite display settings.

    Attributes:
        show_egg_sprite_as_item: Draw eggs like a held item instead of fading the species.
        show_encounter_color: Background style for encounter-template slots.
        show_encounter_color_pkm: Background style for entity slots matching an encounter.
        show_tera_type: Background style for the Tera type color.
        show_tera_thickness_stripe: Tera stripe height in pixels.
        show_tera_opacity_stripe: Tera stripe alpha.
        show_tera_opacity_background: Tera full-background alpha.
        show_encounter_thickness_stripe: Encounter stripe height in pixels.
        show_encounter_opacity_stripe: Encounter stripe alpha.
        show_encounter_opacity_background: Encounter full-background alpha.
    """

    show_egg_sprite_as_item: bool = True
    show_encounter_color: SpriteBackgroundType = SpriteBackgroundType.FULL_BACKGROUND
    show_encounter_color_pkm: SpriteBackgroundType = SpriteBackgroundType.NONE
    show_tera_type: SpriteBackgroundType = SpriteBackgroundType.TOP_STRIPE
    show_tera_thickness_stripe: int = 4
    show_tera_opacity_stripe: int = 0xAF
    show_tera_opacity_background: int = 0xFF
    show_encounter_thickness_stripe: int = 4
    show_encounter_opacity_stripe: int = 0x5F
    show_encounter_opacity_background: int = 0x3F


DEFAULT_DISPLAY_CONFIG = DisplayConfig()

_BACKGROUND_FIELDS = ("show_encounter_color", "show_encounter_color_pkm", "show_tera_type")
_OPACITY_FIELDS = (
    "show_tera_opacity_stripe",
    "show_tera_opacity_background",
    "show_encounter_opacity_stripe",
    "show_encounter_opacity_background",
)
_THICKNESS_FIELDS = ("show_tera_thickness_stripe", "show_encounter_thickness_stripe")
_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0")


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        raise ValueError(f"Not a boolean setting: {value!r}")
    if value is None:
        raise TypeError("Boolean setting must not be null")
    return bool(value)


def _coerce(name: str, value: Any) -> Any:
    if name in _BACKGROUND_FIELDS:
        return SpriteBackgroundType(str(value).lower())
    if name in _OPACITY_FIELDS:
        return max(0, min(0xFF, int(value)))
    if name in _THICKNESS_FIELDS:
        return max(0, int(value))
    return _parse_bool(value)


def apply_settings(
    raw: Mapping[str, Any], base: DisplayConfig = DEFAULT_DISPLAY_CONFIG
) -> DisplayConfig:
    """Merge known keys of ``raw`` over ``base``; unknown keys are ignored."""
    known = {f.name for f in fields(DisplayConfig)}
    changes: dict[str, Any] = {}
    for name, value in raw.items():
        if name not in known:
            logger.debug("ignoring unknown display setting %r", name)
            continue
        changes[name] = _coerce(name, value)
    return replace(base, **changes)


def load_display_config(path: Path) -> DisplayConfig:
    """Read display settings from a JSON file, falling back to defaults."""
    if not path.exists():
        return DisplayConfig()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.warning("unreadable display settings at %s, using defaults", path)
        return DisplayConfig()
    if not isinstance(raw, dict):
        logger.warning("display settings at %s are not an object, using defaults", path)
        return DisplayConfig()
    try:
        return apply_settings(raw)
    except (ValueError, TypeError) as exc:
        logger.warning("invalid display settings at %s (%s), using defaults", path, exc)
        return DisplayConfig()
