"""
Text layout: choose a font size that fits the plate and rasterize the text.

The fitter only needs something with a `measure(word, font_size, font_family)`
method, so layout logic can be tested without real fonts. TextRasterizer is
the Pillow-backed implementation used for actual plates.
"""

import logging
from functools import lru_cache
from typing import Iterator, List, NamedTuple, Optional, Protocol, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .config import PlateConfig

logger = logging.getLogger(__name__)

MIN_FONT_SIZE = 20
SHRINK_FACTOR = 0.95
LINE_SPACING = 1.2

# Fallback glyph extents as a fraction of the font size
ASCENT_FALLBACK = 0.7
DESCENT_FALLBACK = 0.3

GENERIC_FAMILIES = {
    "sans-serif": "DejaVuSans.ttf",
    "serif": "DejaVuSerif.ttf",
    "monospace": "DejaVuSansMono.ttf",
}


class TextMetrics(NamedTuple):
    width: float
    ascent: float
    descent: float


class TextMeasurer(Protocol):
    def measure(self, word: str, font_size: float, font_family: str) -> TextMetrics: ...


def split_words(text: str) -> List[str]:
    return text.split()


def is_multi_line(text: str) -> bool:
    """Multi-word text is laid out one word per line."""
    return len(split_words(text)) > 1


def text_region(config: PlateConfig) -> Tuple[float, float]:
    """Maximum (width, height) the text block may occupy."""
    if config.circular:
        circle_radius = min(config.width, config.height) / 2 - config.margin
        text_radius = circle_radius * (0.92 if config.max_text_fit else 0.85)
        width_ratio = 0.95 if config.max_text_fit else 0.9
        height_ratio = 0.85 if config.max_text_fit else 0.8
        return text_radius * 2 * width_ratio, text_radius * 2 * height_ratio

    effective_width = config.width - 2 * config.margin
    effective_height = config.height - 2 * config.margin
    return effective_width * 0.8, effective_height * 0.8


def measure_block(text: str, font_size: float, font_family: str,
                  measurer: TextMeasurer) -> Tuple[float, float]:
    """Width and height of the laid-out text at a given size."""
    words = split_words(text)
    if len(words) > 1:
        width = max(measurer.measure(word, font_size, font_family).width for word in words)
        return width, len(words) * font_size * LINE_SPACING

    metrics = measurer.measure(text.strip(), font_size, font_family)
    ascent = metrics.ascent or font_size * ASCENT_FALLBACK
    descent = metrics.descent or font_size * DESCENT_FALLBACK
    return metrics.width, ascent + descent


def fit_font_size(text: str, max_width: float, max_height: float, initial_font_size: float,
                  font_family: str, measurer: TextMeasurer) -> float:
    """
    Shrink the font by 5% steps until the text fits.

    Stops at MIN_FONT_SIZE even if the text still overflows; the last size
    is returned either way.
    """
    font_size = initial_font_size
    while True:
        width, height = measure_block(text, font_size, font_family, measurer)
        if width <= max_width and height <= max_height:
            break
        font_size *= SHRINK_FACTOR
        if font_size <= MIN_FONT_SIZE:
            break
    return font_size


def line_positions(text: str, center_y: float, font_size: float) -> List[Tuple[str, float]]:
    """(word, y) pairs for each line, centered vertically on center_y."""
    words = split_words(text)
    if len(words) <= 1:
        return [(text.strip(), center_y)]

    line_height = font_size * LINE_SPACING
    start_y = center_y - len(words) * line_height / 2 + line_height / 2
    return [(word, start_y + i * line_height) for i, word in enumerate(words)]


def _font_candidates(font_family: str) -> Iterator[str]:
    for name in font_family.split(","):
        name = name.strip().strip("'\"")
        if not name:
            continue
        lowered = name.lower()
        if lowered in GENERIC_FAMILIES:
            yield GENERIC_FAMILIES[lowered]
        elif lowered.endswith((".ttf", ".otf", ".ttc")):
            yield name
        else:
            yield f"{name}.ttf"
            yield name


@lru_cache(maxsize=None)
def resolve_font_file(font_family: str) -> Optional[str]:
    """First font in the family list that FreeType can open, or None."""
    for candidate in _font_candidates(font_family):
        try:
            ImageFont.truetype(candidate, 12)
        except OSError:
            continue
        return candidate
    logger.warning("No font found for %r, using Pillow's default font", font_family)
    return None


class TextRasterizer:
    """Measures and draws text with Pillow."""

    def font(self, font_size: float, font_family: str):
        path = resolve_font_file(font_family)
        if path is None:
            return ImageFont.load_default(size=font_size)
        return ImageFont.truetype(path, font_size)

    def measure(self, word: str, font_size: float, font_family: str) -> TextMetrics:
        font = self.font(font_size, font_family)
        _, top, _, bottom = font.getbbox(word, anchor="ls")
        return TextMetrics(width=float(font.getlength(word)), ascent=float(-top), descent=float(bottom))

    def render(self, text: str, font_size: float, font_family: str, width: int, height: int,
               text_color: str = "#000000", background_color: str = "#FFFFFF") -> np.ndarray:
        """Draw the text centered on a fresh canvas and return its RGB pixels."""
        image = Image.new("RGB", (width, height), background_color)
        draw = ImageDraw.Draw(image)
        font = self.font(font_size, font_family)

        center_x = width / 2
        for line, y in line_positions(text, height / 2, font_size):
            draw.text((center_x, y), line, fill=text_color, font=font, anchor="mm")

        return np.asarray(image)
