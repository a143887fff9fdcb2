"""
Plate generation pipeline: fit text, rasterize, classify, pack, encode.

For demonstration and educational use only; the plates are not a medical
test for color vision deficiency.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

import numpy as np

from .config import GenerationResult, PlacementConstraints, Plate, PlateConfig, RunContext
from .luminance import classify
from .packer import CirclePacker
from .palettes import get_palette
from .render import encode, write_output
from .text import TextRasterizer, fit_font_size, split_words, text_region

logger = logging.getLogger(__name__)


class PlateGenerator:
    """Builds dot plates that hide text in two colors."""

    def __init__(self, config: Optional[PlateConfig] = None, rasterizer: Optional[TextRasterizer] = None):
        self.config = self._apply_palette(config or PlateConfig())
        self.rasterizer = rasterizer or TextRasterizer()

    @staticmethod
    def _apply_palette(config: PlateConfig) -> PlateConfig:
        if not config.palette:
            return config
        palette = get_palette(config.palette)
        if palette is None:
            logger.warning("Palette %r not found. Using configured colors.", config.palette)
            return config
        return replace(config, on_color=palette.on_color, off_color=palette.off_color)

    def _fit_text(self, text: str) -> RunContext:
        config = self.config
        max_width, max_height = text_region(config)
        font_size = fit_font_size(text, max_width, max_height, config.font_size,
                                  config.font_family, self.rasterizer)
        context = RunContext(
            text=text,
            words=tuple(split_words(text)),
            font_size=font_size,
            requested_font_size=config.font_size,
            constraints=PlacementConstraints.from_config(config),
        )
        self._log_layout(context)
        return context

    def _log_layout(self, context: RunContext) -> None:
        if context.font_adjusted:
            logger.info("Adjusted font size from %spx to %.1fpx to fit within margins",
                        context.requested_font_size, context.font_size)
        if context.multi_line:
            logger.info("Multi-word input detected: %r will be rendered as %d lines",
                        context.text, len(context.words))

        config = self.config
        c = context.constraints
        if c.circular:
            ratio = 0.92 if config.max_text_fit else 0.85
            logger.info("Circle: radius=%spx, text area radius=%.1fpx (%s fit)",
                        c.inscribed_radius, c.inscribed_radius * ratio,
                        "maximum" if config.max_text_fit else "balanced")
        else:
            logger.info("Rectangular mode: effective area=%sx%spx (margin=%spx)",
                        c.width - 2 * c.margin, c.height - 2 * c.margin, c.margin)

    def render_mask(self, context: RunContext) -> np.ndarray:
        """Rasterize the fitted text and mark its dark pixels."""
        config = self.config
        pixels = self.rasterizer.render(
            context.text, context.font_size, config.font_family,
            config.width, config.height,
            text_color=config.text_color, background_color=config.background_color,
        )
        return classify(pixels, config.luminance_threshold)

    def create_plate(self, text: str, rng: Optional[np.random.Generator] = None) -> Plate:
        """Run the pipeline up to the packed circles, without encoding."""
        context = self._fit_text(text)
        mask = self.render_mask(context)

        logger.info("Generating color vision test for text: %r", context.text)
        rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        circles = CirclePacker(mask, context.constraints, self.config, rng).pack()
        return Plate(context=context, mask=mask, circles=circles)

    def generate(self, text: str, output_path: Union[str, Path],
                 rng: Optional[np.random.Generator] = None) -> GenerationResult:
        """Generate a plate for `text` and write it to `output_path`."""
        plate = self.create_plate(text, rng)
        write_output(encode(plate.circles, self.config, output_path), output_path)

        logger.info("Generated color vision test with %d circles", len(plate.circles))
        return GenerationResult(
            circle_count=len(plate.circles),
            text=text,
            output_path=str(output_path),
            font_size_used=plate.context.font_size,
        )
