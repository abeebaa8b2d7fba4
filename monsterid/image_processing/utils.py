"""Utility functions for color conversion and canvas setup.

AIDEV-NOTE: All HSL conversions work on normalized floats (0-1). Channel
values are only rescaled to 0-255 when pixels are written back.
"""

from PIL import Image

from monsterid.models import CANVAS_SIZE, TRANSPARENT


def rgb_to_hsl(r: float, g: float, b: float) -> "tuple[float, float, float]":
    """Convert a normalized RGB triple to HSL.

    Args:
        r: Red channel (0-1)
        g: Green channel (0-1)
        b: Blue channel (0-1)

    Returns:
        Tuple of (hue, saturation, lightness), each in 0-1
    """
    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2

    if high == low:
        # Achromatic, hue is undefined and reported as 0
        return 0.0, 0.0, lightness

    d = high - low
    if lightness > 0.5:
        saturation = d / (2 - high - low)
    else:
        saturation = d / (high + low)

    if high == r:
        hue = (g - b) / d
        if g < b:
            hue += 6
    elif high == g:
        hue = (b - r) / d + 2
    else:
        hue = (r - g) / d + 4

    return hue / 6, saturation, lightness


def hue_to_rgb(p: float, q: float, t: float) -> float:
    """Piecewise helper mapping a hue offset to one channel value."""
    if t < 0:
        t += 1
    if t > 1:
        t -= 1

    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> "tuple[float, float, float]":
    """Convert HSL (each 0-1) back to a normalized RGB triple."""
    if s == 0:
        return l, l, l

    if l < 0.5:
        q = l * (1 + s)
    else:
        q = l + s - l * s
    p = 2 * l - q

    return (
        hue_to_rgb(p, q, h + 1 / 3),
        hue_to_rgb(p, q, h),
        hue_to_rgb(p, q, h - 1 / 3),
    )


def get_lightness(r: int, g: int, b: int) -> float:
    """Mean brightness (0-1) of an 8-bit RGB pixel.

    AIDEV-NOTE: Used for the tint highlight cutoff. This is the channel
    mean, not HSL lightness.
    """
    return (r + g + b) / (3 * 255)


def create_canvas(
    background: "tuple[int, int, int, int]",
    size: "tuple[int, int]" = CANVAS_SIZE,
) -> Image.Image:
    """Create the RGBA canvas every part is composited onto.

    Args:
        background: RGBA fill; alpha 0 gives a fully transparent canvas
        size: Canvas (width, height) in pixels

    Returns:
        New PIL image in RGBA mode
    """
    if background[3] > 0:
        return Image.new("RGBA", size, tuple(background))
    # All channels zeroed, not just alpha
    return Image.new("RGBA", size, TRANSPARENT)
