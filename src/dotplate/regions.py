"""
Color assignment: decide whether a circle sits on the text or the field.
"""

from typing import Optional, Tuple

import numpy as np

from .config import BooleanMask, Color

# Minimum grid divisions per radius
MIN_SAMPLES = 8


def sample_offsets(radius: float) -> Tuple[np.ndarray, np.ndarray]:
    """Grid offsets (dx, dy) inside a disk of the given radius."""
    if radius <= 0:
        return np.zeros(1), np.zeros(1)
    samples = max(MIN_SAMPLES, radius)
    step = radius / samples
    count = int(np.floor(2 * samples + 1e-9)) + 1
    axis = -radius + step * np.arange(count)
    dx, dy = np.meshgrid(axis, axis)
    inside = dx ** 2 + dy ** 2 <= radius ** 2
    return dx[inside], dy[inside]


def pick_color(ratio: float, tolerance: float, on_color: Color, off_color: Color) -> Optional[Color]:
    """Color for a foreground ratio, or None when the circle is too mixed."""
    if tolerance < ratio < 1 - tolerance:
        return None
    return on_color if ratio > 0.5 else off_color


def foreground_ratio(x: float, y: float, radius: float, mask: BooleanMask) -> Optional[float]:
    """Share of samples inside the circle that hit the foreground."""
    height, width = mask.shape
    dx, dy = sample_offsets(radius)
    px = np.floor(x + dx).astype(int)
    py = np.floor(y + dy).astype(int)

    in_bounds = (px >= 0) & (px < width) & (py >= 0) & (py < height)
    total = int(np.count_nonzero(in_bounds))
    if total == 0:
        return None

    hits = int(np.count_nonzero(mask[py[in_bounds], px[in_bounds]]))
    return hits / total


def circle_color(
    x: float,
    y: float,
    radius: float,
    mask: BooleanMask,
    tolerance: float = 0.1,
    on_color: Color = "#FF6B35",
    off_color: Color = "#4ECDC4",
) -> Optional[Color]:
    """
    Sample the mask under a circle and choose its color.

    Returns None when the circle lies outside the mask or straddles the
    text edge by more than `tolerance`.
    """
    ratio = foreground_ratio(x, y, radius, mask)
    if ratio is None:
        return None
    return pick_color(ratio, tolerance, on_color, off_color)
