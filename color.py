# color.py

import colorsys
from collections import namedtuple

import numpy as np

from constants import COLOR_CHANNEL_MAX

# Channel intensities are floats nominally in [0, 255). They are never clamped
# at creation; to_rgb() is the only place values are made display-safe.
Color = namedtuple('Color', ['r', 'g', 'b'])


def random_color(rng: np.random.Generator) -> Color:
    """Draws each channel independently and uniformly from [0, 255)."""
    r, g, b = rng.uniform(0.0, COLOR_CHANNEL_MAX, 3)
    return Color(float(r), float(g), float(b))


def color_from_hue(hue: float, lightness: float) -> Color:
    """
    Builds a fully saturated color from a hue in degrees and a lightness in
    percent, the way a CSS hsl() string would be interpreted.
    """
    r, g, b = colorsys.hls_to_rgb((hue % 360.0) / 360.0, lightness / 100.0, 1.0)
    return Color(r * COLOR_CHANNEL_MAX, g * COLOR_CHANNEL_MAX, b * COLOR_CHANNEL_MAX)


def to_rgb(color, alpha: float = 1.0) -> tuple:
    """
    Formats any three-channel color for rendering.

    Channels are scaled by alpha, NaN is treated as 0, and the result is clipped
    to [0, 255] and truncated to ints, so out-of-range input never raises.
    """
    channels = np.nan_to_num(np.asarray(color, dtype=float)[:3] * alpha, nan=0.0, posinf=255.0, neginf=0.0)
    channels = np.clip(channels, 0, 255)
    return tuple(int(c) for c in channels)
