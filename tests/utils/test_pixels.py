from typing import List, Tuple

import numpy as np
import pytest

from sprite_compositor.buffer import PixelBuffer
from sprite_compositor.types import Color
from sprite_compositor.utils.pixels import (
    blend_transparent,
    clear_transparent,
    fill_range,
    fill_transparent,
    glow_edges,
    recolor_opaque,
    remove_pixels,
    scale_opacity,
    set_used_pixels_opaque,
    sprite_glow,
    to_grayscale,
)
from tests.test_utils import BLUE, RED, pixel, sequential_glow, solid, with_box


def make_buffer(pixels: List[Tuple[int, int, int, int]], width: int) -> PixelBuffer:
    data = bytes(v for p in pixels for v in p)
    return PixelBuffer(width, len(pixels) // width, data)


def random_buffer(seed: int, width: int = 9, height: int = 7) -> PixelBuffer:
    rng = np.random.default_rng(seed)
    px = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
    alpha = px[..., 3]
    alpha[rng.random((height, width)) < 0.3] = 0
    alpha[rng.random((height, width)) < 0.3] = 0xFF
    return PixelBuffer.from_pixels(px)


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_scale_opacity_full_is_identity(seed: int) -> None:
    buf = random_buffer(seed)
    assert scale_opacity(buf, 1.0) == buf


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_scale_opacity_zero_clears_alpha_only(seed: int) -> None:
    buf = random_buffer(seed)
    out = scale_opacity(buf, 0.0)
    assert (out.pixels()[..., 3] == 0).all()
    assert (out.pixels()[..., :3] == buf.pixels()[..., :3]).all()


def test_scale_opacity_truncates() -> None:
    buf = make_buffer([(1, 2, 3, 255), (1, 2, 3, 201), (1, 2, 3, 3)], width=3)
    out = scale_opacity(buf, 0.7)
    assert [pixel(out, x, 0)[3] for x in range(3)] == [178, 140, 2]
    assert [pixel(scale_opacity(buf, 0.33), x, 0)[3] for x in range(3)] == [84, 66, 0]


def test_scale_opacity_does_not_mutate_input() -> None:
    buf = solid(2, 2, RED)
    scale_opacity(buf, 0.5)
    assert pixel(buf, 0, 0) == (0, 0, 255, 255)


@pytest.mark.parametrize("factor", [-0.1, 1.5])
def test_scale_opacity_rejects_out_of_range(factor: float) -> None:
    with pytest.raises(ValueError):
        scale_opacity(solid(1, 1, RED), factor)


def test_fill_transparent_only_touches_transparent_pixels() -> None:
    buf = make_buffer([(0, 0, 0, 0), (5, 6, 7, 128), (9, 9, 9, 0), (1, 1, 1, 255)], 4)
    out = fill_transparent(buf, Color(10, 20, 30), 0x40)
    assert pixel(out, 0, 0) == (30, 20, 10, 0x40)
    assert pixel(out, 1, 0) == (5, 6, 7, 128)
    assert pixel(out, 2, 0) == (30, 20, 10, 0x40)
    assert pixel(out, 3, 0) == (1, 1, 1, 255)


def test_fill_transparent_respects_inclusive_byte_range() -> None:
    buf = PixelBuffer.blank(4, 1)
    out = fill_transparent(buf, RED, 0xFF, start=4, end=8)
    assert pixel(out, 0, 0) == (0, 0, 0, 0)
    assert pixel(out, 1, 0) == (0, 0, 255, 255)
    assert pixel(out, 2, 0) == (0, 0, 255, 255)
    assert pixel(out, 3, 0) == (0, 0, 0, 0)


def test_blend_transparent_leaves_opaque_pixels() -> None:
    buf = make_buffer([(11, 21, 31, 255)], 1)
    assert blend_transparent(buf, Color(200, 100, 50), 100) == buf


def test_blend_transparent_matches_fill_on_transparent_pixels() -> None:
    buf = make_buffer([(0, 0, 0, 0), (3, 4, 5, 0)], 2)
    color = Color(200, 100, 50)
    assert blend_transparent(buf, color, 100) == fill_transparent(buf, color, 100)


def test_blend_transparent_weights_partial_pixels() -> None:
    buf = make_buffer([(11, 21, 31, 128)], 1)
    out = blend_transparent(buf, Color(r=200, g=100, b=50), 100)
    # trunc(old * 0.2 + new * 0.8) on every byte, alpha included
    assert pixel(out, 0, 0) == (42, 84, 166, 105)


def test_recolor_opaque_keeps_alpha_and_skips_transparent() -> None:
    buf = make_buffer([(1, 2, 3, 0), (1, 2, 3, 77)], 2)
    out = recolor_opaque(buf, Color(10, 20, 30))
    assert pixel(out, 0, 0) == (1, 2, 3, 0)
    assert pixel(out, 1, 0) == (30, 20, 10, 77)


def test_to_grayscale_weights_stored_bytes() -> None:
    buf = make_buffer([(10, 20, 30, 255), (10, 20, 30, 0)], 2)
    out = to_grayscale(buf)
    # 0.3 * 30 + 0.59 * 20 + 0.11 * 10 = 21.9
    assert pixel(out, 0, 0) == (22, 22, 22, 255)
    assert pixel(out, 1, 0) == (10, 20, 30, 0)


@pytest.mark.parametrize("seed", [3, 4, 5])
def test_to_grayscale_is_idempotent(seed: int) -> None:
    once = to_grayscale(random_buffer(seed))
    assert to_grayscale(once) == once


def test_fill_range_overwrites_half_open_range() -> None:
    buf = make_buffer([(1, 1, 1, 0), (2, 2, 2, 255), (3, 3, 3, 9), (4, 4, 4, 4)], 4)
    out = fill_range(buf, Color(10, 20, 30, 40), 4, 12)
    assert pixel(out, 0, 0) == (1, 1, 1, 0)
    assert pixel(out, 1, 0) == (30, 20, 10, 40)
    assert pixel(out, 2, 0) == (30, 20, 10, 40)
    assert pixel(out, 3, 0) == (4, 4, 4, 4)


def test_glow_without_visible_pixels_is_noop() -> None:
    buf = PixelBuffer.blank(6, 5)
    assert glow_edges(buf, BLUE) == buf


def test_glow_single_pixel_reach_one() -> None:
    buf = with_box(5, 5, (2, 2, 3, 3), RED)
    out = glow_edges(buf, BLUE, reach=1)
    # trunc(0.0777 * 255) == 19
    for x, y in [(1, 1), (2, 1), (3, 1), (1, 2), (3, 2), (1, 3), (2, 3), (3, 3)]:
        assert pixel(out, x, y) == (255, 0, 0, 19)
    assert pixel(out, 0, 0) == (0, 0, 0, 0)
    assert pixel(out, 4, 2) == (0, 0, 0, 0)
    # the visible pixel's donor byte is polluted too, alpha untouched
    assert pixel(out, 2, 2) == (19, 0, 255, 255)


def test_glow_accumulates_per_visit() -> None:
    buf = with_box(4, 1, (0, 0, 2, 1), RED)
    out = glow_edges(buf, BLUE, reach=1)
    # x=2 is reached once (by x=1); x=0 twice: 19, then 19 + trunc(0.0777 * 236)
    assert pixel(out, 2, 0) == (255, 0, 0, 19)
    assert pixel(out, 3, 0) == (0, 0, 0, 0)
    assert pixel(out, 0, 0) == (37, 0, 255, 255)


@pytest.mark.parametrize("reach", [1, 2, 3])
@pytest.mark.parametrize("seed", [6, 7])
def test_glow_matches_sequential_walk(reach: int, seed: int) -> None:
    rng = np.random.default_rng(seed)
    px = np.zeros((8, 10, 4), dtype=np.uint8)
    mask = rng.random((8, 10)) < 0.25
    px[mask] = (12, 34, 56, 200)
    buf = PixelBuffer.from_pixels(px)
    assert glow_edges(buf, BLUE, reach=reach) == sequential_glow(buf, BLUE, reach=reach)


def test_hollow_sprite_glow_keeps_only_halo() -> None:
    buf = with_box(9, 9, (3, 3, 6, 6), RED)
    out = sprite_glow(buf, BLUE, hollow=True)
    for x in range(3, 6):
        for y in range(3, 6):
            assert pixel(out, x, y) == (0, 0, 0, 0)
    assert pixel(out, 2, 4)[:3] == (255, 0, 0)
    assert pixel(out, 2, 4)[3] > 0


def test_sprite_glow_hollow_equals_manual_steps() -> None:
    px = np.zeros((7, 7, 4), dtype=np.uint8)
    px[2:5, 2:5] = (10, 10, 10, 90)
    buf = PixelBuffer.from_pixels(px)
    manual = remove_pixels(glow_edges(set_used_pixels_opaque(buf), BLUE), buf)
    assert sprite_glow(buf, BLUE, hollow=True) == manual


def test_set_used_pixels_opaque() -> None:
    buf = make_buffer([(1, 1, 1, 0), (1, 1, 1, 3)], 2)
    out = set_used_pixels_opaque(buf)
    assert pixel(out, 0, 0)[3] == 0
    assert pixel(out, 1, 0)[3] == 255


def test_remove_pixels_requires_matching_size() -> None:
    with pytest.raises(ValueError):
        remove_pixels(PixelBuffer.blank(2, 2), PixelBuffer.blank(3, 2))


def test_clear_transparent_zeroes_hidden_color() -> None:
    buf = make_buffer([(0, 0, 200, 0), (7, 8, 9, 1), (5, 5, 5, 255)], 3)
    out = clear_transparent(buf)
    assert pixel(out, 0, 0) == (0, 0, 0, 0)
    assert pixel(out, 1, 0) == (7, 8, 9, 1)
    assert pixel(out, 2, 0) == (5, 5, 5, 255)


@pytest.mark.parametrize("hollow", [False, True])
def test_sprite_glow_ignores_color_under_transparent_pixels(hollow: bool) -> None:
    px = np.zeros((20, 20, 4), dtype=np.uint8)
    px[...] = (200, 0, 0, 0)
    px[8:12, 8:12] = (10, 20, 30, 255)
    dirty = PixelBuffer.from_pixels(px)
    out = sprite_glow(dirty, BLUE, hollow=hollow)
    assert out == sprite_glow(clear_transparent(dirty), BLUE, hollow=hollow)
    assert pixel(out, 0, 0) == (0, 0, 0, 0)
