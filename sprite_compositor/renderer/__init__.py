"""Rendering subpackage.

Turns a :class:`~sprite_compositor.request.SpriteRequest` into a finished
sprite image. The pipeline focuses on:

* Resolving a base image through a fixed fallback chain that always ends in a
  placeholder (:mod:`sprite_compositor.renderer.resolver`).
* Layering egg, held item and shiny overlays in a fixed order
  (:mod:`sprite_compositor.renderer.builder`).
* Per-platform art sets describing sprite sizes, placements and resource
  naming (:mod:`sprite_compositor.renderer.art_set`).

Pixel math lives in :mod:`sprite_compositor.utils.pixels`, layering in
:mod:`sprite_compositor.utils.layer`.
"""
