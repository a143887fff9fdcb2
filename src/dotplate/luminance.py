"""
Perceptual luminance and the foreground mask built from it.
"""

import numpy as np

from .config import BooleanMask

# ITU BT.709 weights for linear R, G, B
BT709_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])


def srgb_to_linear(channel: np.ndarray) -> np.ndarray:
    """Undo the sRGB transfer curve for values in [0, 1]."""
    channel = np.asarray(channel, dtype=float)
    return np.where(
        channel <= 0.04045,
        channel / 12.92,
        ((channel + 0.055) / 1.055) ** 2.4,
    )


def relative_luminance(rgb) -> np.ndarray:
    """
    Luminance in [0, 1] of 8-bit RGB values.

    Accepts a single (r, g, b) triple or any array whose last axis holds
    the channels. Extra channels such as alpha are ignored.
    """
    rgb = np.asarray(rgb, dtype=float)[..., :3] / 255.0
    return srgb_to_linear(rgb) @ BT709_WEIGHTS


def classify(pixels: np.ndarray, threshold: float = 0.5) -> BooleanMask:
    """Mark pixels darker than `threshold` as foreground."""
    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] < 3:
        raise ValueError(f"Expected an (H, W, 3|4) pixel buffer, got shape {pixels.shape}")
    return relative_luminance(pixels) < threshold
