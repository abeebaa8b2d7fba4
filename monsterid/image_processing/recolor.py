"""Per-pixel recoloring of part assets.

AIDEV-NOTE: Both transforms skip effectively transparent pixels so that
recoloring never bleeds into the gaps around a part. The heavy lifting is
done on numpy arrays; the HSL math itself runs once per distinct color.
"""

import numpy as np
from PIL import Image

from .utils import get_lightness, hsl_to_rgb, rgb_to_hsl

# Pixels with alpha (0-255) below this are left untouched
ALPHA_THRESHOLD = 1

# Near-white pixels above this mean brightness keep their shading detail
TINT_LIGHTNESS_CEILING = 0.85

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114])


def tint(image: Image.Image, hue: float, saturation: float) -> Image.Image:
    """Replace hue and saturation of a part while keeping its lightness.

    Args:
        image: Part image (converted to RGBA if needed)
        hue: Target hue (0-1)
        saturation: Target saturation (0-1)

    Returns:
        New RGBA image with qualifying pixels recolored
    """
    pixels = np.array(image.convert("RGBA"), dtype=np.uint8)
    tint_pixels(pixels, hue, saturation)
    return Image.fromarray(pixels)


def desaturate(image: Image.Image) -> Image.Image:
    """Convert a part to greyscale using the luminance formula."""
    pixels = np.array(image.convert("RGBA"), dtype=np.uint8)
    desaturate_pixels(pixels)
    return Image.fromarray(pixels)


def tint_pixels(pixels: np.ndarray, hue: float, saturation: float) -> None:
    """Tint an (H, W, 4) uint8 RGBA array in place."""
    rgb = pixels[..., :3].astype(np.int32)
    mask = pixels[..., 3] >= ALPHA_THRESHOLD
    mask &= get_lightness(rgb[..., 0], rgb[..., 1], rgb[..., 2]) <= TINT_LIGHTNESS_CEILING
    if not mask.any():
        return

    # Parts use few colors, so convert each distinct color only once
    colors, inverse = np.unique(pixels[mask][:, :3], axis=0, return_inverse=True)
    recolored = np.array(
        [tint_color(color, hue, saturation) for color in colors],
        dtype=np.uint8,
    )
    pixels[mask, :3] = recolored[inverse.reshape(-1)]


def tint_color(
    color: "tuple[int, int, int]",
    hue: float,
    saturation: float,
) -> "tuple[int, int, int]":
    """Tint a single 8-bit RGB color.

    The source hue and saturation are discarded; only its lightness is
    carried over into the new color.
    """
    r, g, b = (int(c) / 255 for c in color)
    _, _, lightness = rgb_to_hsl(r, g, b)
    r2, g2, b2 = hsl_to_rgb(hue, saturation, lightness)
    return int(r2 * 255), int(g2 * 255), int(b2 * 255)


def desaturate_pixels(pixels: np.ndarray) -> None:
    """Desaturate an (H, W, 4) uint8 RGBA array in place, keeping alpha."""
    mask = pixels[..., 3] >= ALPHA_THRESHOLD
    if not mask.any():
        return
    grey = np.rint(pixels[..., :3].astype(np.float64) @ LUMA_WEIGHTS)
    grey = np.clip(grey, 0, 255).astype(np.uint8)
    pixels[mask, :3] = grey[mask][:, np.newaxis]
