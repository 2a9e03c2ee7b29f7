"""Base image resolution.

Finding the base sprite for a species/form is a small state machine. Each
state either produces a :class:`Resolution` or hands over to the next state::

    TOTEM_CHECK -> PRIMARY_LOOKUP -> SECONDARY_LOOKUP -> SHINY_RETRY
                -> SPECIES_ONLY_RETRY -> UNKNOWN

* ``TOTEM_CHECK``: totem forms are drawn from their regular form with an
  orange glow around the silhouette. If the regular form has no sprite the
  machine skips straight to ``SHINY_RETRY``.
* ``PRIMARY_LOOKUP`` / ``SECONDARY_LOOKUP``: the art set's naming schemes.
  The secondary one only runs for art sets that have it.
* ``SHINY_RETRY``: shiny requests retry both schemes as non-shiny, since many
  shiny sprites are not stored separately.
* ``SPECIES_ONLY_RETRY``: the form-less species sprite, dimmed under a
  half-transparent "unknown" placeholder to flag the unknown form.
* ``UNKNOWN``: the placeholder itself. Resolution always ends here at worst.

Missing resources are never an error.
"""

import logging
from dataclasses import dataclass, replace
from enum import StrEnum, auto
from typing import Callable, Dict, Optional, Tuple

from sprite_compositor.buffer import PixelBuffer
from sprite_compositor.data.forms import is_totem_form, totem_base_form
from sprite_compositor.renderer.art_set import ArtSet
from sprite_compositor.renderer.loader import load_fixed
from sprite_compositor.types import Color, EntityContext, ImageLoader, SpeciesID
from sprite_compositor.utils.layer import layer
from sprite_compositor.utils.pixels import sprite_glow

logger = logging.getLogger(__name__)

TOTEM_GLOW_COLOR = Color(r=255, g=165, b=0)
UNKNOWN_FORM_OPACITY = 0.5


class ResolveState(StrEnum):
    TOTEM_CHECK = auto()
    PRIMARY_LOOKUP = auto()
    SECONDARY_LOOKUP = auto()
    SHINY_RETRY = auto()
    SPECIES_ONLY_RETRY = auto()
    UNKNOWN = auto()


class ResolutionOutcome(StrEnum):
    """Which step produced the base image."""

    PRIMARY = auto()
    SECONDARY = auto()
    FALLBACK_NO_SHINY = auto()
    FALLBACK_NO_FORM = auto()
    FALLBACK_UNKNOWN = auto()


@dataclass(frozen=True)
class Resolution:
    """Result of base image resolution.

    Attributes:
        image: The base image.
        outcome: Which step produced it.
        totem: True if a totem glow was applied.
    """

    image: PixelBuffer
    outcome: ResolutionOutcome
    totem: bool = False

    @property
    def resolved(self) -> bool:
        return self.outcome in (ResolutionOutcome.PRIMARY, ResolutionOutcome.SECONDARY)


@dataclass(frozen=True)
class SpriteKey:
    """Everything that selects a base sprite."""

    species: SpeciesID
    form: int
    gender: int
    formarg: int
    shiny: bool
    context: EntityContext = EntityContext.NONE


@dataclass(frozen=True)
class _Machine:
    art_set: ArtSet
    loader: ImageLoader

    def unknown(self) -> PixelBuffer:
        return load_fixed(
            self.loader, self.art_set.unknown_key, self.art_set.width, self.art_set.height
        )

    def primary(self, key: SpriteKey) -> Optional[PixelBuffer]:
        return self.loader(
            self.art_set.primary_key(
                key.species, key.form, key.gender, key.formarg, key.shiny
            )
        )

    def secondary(self, key: SpriteKey) -> Optional[PixelBuffer]:
        if not self.art_set.has_secondary:
            return None
        return self.loader(
            self.art_set.secondary_key(
                key.species, key.form, key.gender, key.formarg, key.shiny
            )
        )

    def default(self, key: SpriteKey) -> Optional[Tuple[PixelBuffer, ResolutionOutcome]]:
        """Primary then secondary scheme."""
        image = self.primary(key)
        if image is not None:
            return image, ResolutionOutcome.PRIMARY
        image = self.secondary(key)
        if image is not None:
            return image, ResolutionOutcome.SECONDARY
        return None


Transition = Tuple[Optional[ResolveState], Optional[Resolution]]
StateHandler = Callable[[_Machine, SpriteKey], Transition]


def _totem_check(machine: _Machine, key: SpriteKey) -> Transition:
    if not is_totem_form(key.species, key.form, key.context):
        return ResolveState.PRIMARY_LOOKUP, None
    base_key = replace(key, form=totem_base_form(key.species, key.form))
    found = machine.default(base_key)
    if found is None:
        return ResolveState.SHINY_RETRY, None
    image, outcome = found
    glow = sprite_glow(image, TOTEM_GLOW_COLOR, hollow=True)
    return None, Resolution(layer(image, glow, 0, 0), outcome, totem=True)


def _primary_lookup(machine: _Machine, key: SpriteKey) -> Transition:
    image = machine.primary(key)
    if image is not None:
        return None, Resolution(image, ResolutionOutcome.PRIMARY)
    if machine.art_set.has_secondary:
        return ResolveState.SECONDARY_LOOKUP, None
    return ResolveState.SHINY_RETRY, None


def _secondary_lookup(machine: _Machine, key: SpriteKey) -> Transition:
    image = machine.secondary(key)
    if image is not None:
        return None, Resolution(image, ResolutionOutcome.SECONDARY)
    return ResolveState.SHINY_RETRY, None


def _shiny_retry(machine: _Machine, key: SpriteKey) -> Transition:
    if key.shiny:
        found = machine.default(replace(key, shiny=False))
        if found is not None:
            return None, Resolution(found[0], ResolutionOutcome.FALLBACK_NO_SHINY)
    return ResolveState.SPECIES_ONLY_RETRY, None


def _species_only_retry(machine: _Machine, key: SpriteKey) -> Transition:
    image = machine.loader(machine.art_set.species_only_key(key.species))
    if image is None:
        return ResolveState.UNKNOWN, None
    marked = layer(image, machine.unknown(), 0, 0, UNKNOWN_FORM_OPACITY)
    return None, Resolution(marked, ResolutionOutcome.FALLBACK_NO_FORM)


def _unknown(machine: _Machine, key: SpriteKey) -> Transition:
    return None, Resolution(machine.unknown(), ResolutionOutcome.FALLBACK_UNKNOWN)


TRANSITIONS: Dict[ResolveState, StateHandler] = {
    ResolveState.TOTEM_CHECK: _totem_check,
    ResolveState.PRIMARY_LOOKUP: _primary_lookup,
    ResolveState.SECONDARY_LOOKUP: _secondary_lookup,
    ResolveState.SHINY_RETRY: _shiny_retry,
    ResolveState.SPECIES_ONLY_RETRY: _species_only_retry,
    ResolveState.UNKNOWN: _unknown,
}


def resolve_base_image(
    key: SpriteKey, art_set: ArtSet, loader: ImageLoader
) -> Resolution:
    """Run the resolution state machine for ``key``."""
    machine = _Machine(art_set, loader)
    state: Optional[ResolveState] = ResolveState.TOTEM_CHECK
    while state is not None:
        next_state, resolution = TRANSITIONS[state](machine, key)
        if resolution is not None:
            logger.debug(
                "resolved %s at %s (%s)", key, state.value, resolution.outcome.value
            )
            return resolution
        logger.debug("%s missed for %s, trying %s", state.value, key, next_state)
        state = next_state
    raise RuntimeError(f"Base image resolution ended without a result for {key}")
