"""Tests for HSL conversion and the tint/desaturate transforms."""

import numpy as np
import pytest
from PIL import Image

from monsterid.image_processing.recolor import desaturate, tint, tint_color
from monsterid.image_processing.utils import create_canvas, hsl_to_rgb, rgb_to_hsl
from monsterid.models import CANVAS_SIZE, TRANSPARENT

EPSILON = 0.01


@pytest.mark.parametrize(
    "rgb, hsl",
    [
        ((1.0, 0.0, 0.0), (0.0, 1.0, 0.5)),
        ((0.0, 1.0, 0.0), (1 / 3, 1.0, 0.5)),
        ((0.0, 0.0, 1.0), (2 / 3, 1.0, 0.5)),
        ((1.0, 1.0, 1.0), (0.0, 0.0, 1.0)),
        ((0.0, 0.0, 0.0), (0.0, 0.0, 0.0)),
        ((0.5, 0.5, 0.5), (0.0, 0.0, 0.5)),
    ],
    ids=["red", "green", "blue", "white", "black", "gray"],
)
def test_rgb_to_hsl_fixed_points(rgb, hsl):
    assert rgb_to_hsl(*rgb) == pytest.approx(hsl, abs=EPSILON)


@pytest.mark.parametrize(
    "hsl, rgb",
    [
        ((0.0, 1.0, 0.5), (1.0, 0.0, 0.0)),
        ((1 / 3, 1.0, 0.5), (0.0, 1.0, 0.0)),
        ((2 / 3, 1.0, 0.5), (0.0, 0.0, 1.0)),
        ((0.0, 0.0, 1.0), (1.0, 1.0, 1.0)),
        ((0.0, 0.0, 0.0), (0.0, 0.0, 0.0)),
        ((0.0, 0.0, 0.5), (0.5, 0.5, 0.5)),
    ],
    ids=["red", "green", "blue", "white", "black", "gray"],
)
def test_hsl_to_rgb_fixed_points(hsl, rgb):
    assert hsl_to_rgb(*hsl) == pytest.approx(rgb, abs=EPSILON)


@pytest.mark.parametrize(
    "rgb",
    [
        (0.1, 0.2, 0.3),
        (0.5, 0.6, 0.7),
        (0.9, 0.8, 0.7),
        (0.2, 0.7, 0.9),
        (0.8, 0.1, 0.4),
        (0.3, 0.3, 0.9),
    ],
)
def test_rgb_hsl_roundtrip(rgb):
    assert hsl_to_rgb(*rgb_to_hsl(*rgb)) == pytest.approx(rgb, abs=EPSILON)


def test_red_hue_wraps_when_blue_exceeds_green():
    hue, _, _ = rgb_to_hsl(1.0, 0.0, 0.5)
    assert 5 / 6 < hue < 1.0


def make_image(*pixels):
    """One-row RGBA image from pixel tuples."""
    image = Image.new("RGBA", (len(pixels), 1))
    image.putdata(list(pixels))
    return image


def test_tint_applies_hue_and_keeps_lightness():
    source = (100, 50, 50, 255)
    result = tint(make_image(source), 1 / 3, 1.0).getpixel((0, 0))
    r, g, b, a = result

    assert a == 255
    assert g > r and g > b
    _, _, original_l = rgb_to_hsl(*(c / 255 for c in source[:3]))
    _, _, new_l = rgb_to_hsl(r / 255, g / 255, b / 255)
    assert new_l == pytest.approx(original_l, abs=EPSILON)


def test_tint_ignores_source_hue():
    reddish = tint(make_image((120, 40, 40, 255)), 0.6, 0.8).getpixel((0, 0))
    greenish = tint(make_image((40, 120, 40, 255)), 0.6, 0.8).getpixel((0, 0))
    assert reddish == greenish


def test_tint_skips_transparent_and_near_white_pixels():
    transparent = (90, 30, 30, 0)
    highlight = (250, 250, 250, 255)
    result = tint(make_image(transparent, highlight), 0.5, 1.0)
    assert result.getpixel((0, 0)) == transparent
    assert result.getpixel((1, 0)) == highlight


def test_tint_preserves_partial_alpha():
    result = tint(make_image((90, 30, 30, 128)), 0.5, 1.0).getpixel((0, 0))
    assert result[3] == 128
    assert result[:3] != (90, 30, 30)


def test_tint_color_truncates_to_channel_range():
    assert tint_color((255, 0, 0), 0.0, 1.0) == (255, 0, 0)
    assert all(0 <= c <= 255 for c in tint_color((10, 200, 90), 0.99, 1.0))


def test_tint_does_not_modify_input():
    source = make_image((100, 50, 50, 255))
    tint(source, 0.5, 1.0)
    assert source.getpixel((0, 0)) == (100, 50, 50, 255)


def test_desaturate_produces_grey_and_keeps_alpha():
    result = desaturate(make_image((200, 30, 90, 255), (10, 250, 10, 77)))
    for x, alpha in ((0, 255), (1, 77)):
        r, g, b, a = result.getpixel((x, 0))
        assert r == g == b
        assert a == alpha


def test_desaturate_uses_luminance_weights():
    r, _, _, _ = desaturate(make_image((255, 0, 0, 255))).getpixel((0, 0))
    assert r == round(0.299 * 255)
    white = desaturate(make_image((255, 255, 255, 255))).getpixel((0, 0))
    assert white == (255, 255, 255, 255)


def test_desaturate_skips_transparent_pixels():
    transparent = (200, 30, 90, 0)
    assert desaturate(make_image(transparent)).getpixel((0, 0)) == transparent


def test_create_canvas_fills_background():
    canvas = create_canvas((255, 0, 0, 255))
    assert canvas.size == CANVAS_SIZE
    assert canvas.mode == "RGBA"
    assert canvas.getpixel((0, 0)) == (255, 0, 0, 255)


def test_create_canvas_transparent_zeroes_all_channels():
    canvas = create_canvas((12, 34, 56, 0))
    pixels = np.array(canvas)
    assert not pixels.any()
    assert canvas.getpixel((5, 5)) == TRANSPARENT
