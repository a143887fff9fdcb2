"""
dotplate - Dot-pattern plates that hide text in two colors.

Usage:
    from dotplate import PlateGenerator, PlateConfig

    # Basic usage
    result = PlateGenerator().generate("8", "plate.png")

    # With configuration
    config = PlateConfig(circular=True, palette="protanopia", seed=7)
    result = PlateGenerator(config).generate("HELLO WORLD", "plate.svg")

    # Circles only, no file written
    plate = PlateGenerator(config).create_plate("5")
    for circle in plate.circles:
        print(circle.x, circle.y, circle.radius, circle.color)

Pipeline:
    - Text fitting: shrink the font until the text fills the plate
    - Luminance mask: dark text pixels become foreground
    - Circle packing: random placement with radius annealing
    - Color assignment: circles on the text get on_color, others off_color

Educational and artistic use only; not a diagnostic test.
"""

from .config import Circle, GenerationResult, GenerationState, PlacementConstraints, Plate, PlateConfig, RunContext
from .generator import PlateGenerator
from .luminance import classify, relative_luminance
from .packer import CirclePacker
from .palettes import COLOR_PALETTES, Palette, get_palette
from .regions import circle_color
from .render import render_png, render_svg
from .text import TextRasterizer, fit_font_size

__all__ = [
    "PlateGenerator",
    "PlateConfig",
    "CirclePacker",
    "Circle",
    "GenerationResult",
    "GenerationState",
    "PlacementConstraints",
    "Plate",
    "RunContext",
    "classify",
    "relative_luminance",
    "circle_color",
    "fit_font_size",
    "TextRasterizer",
    "COLOR_PALETTES",
    "Palette",
    "get_palette",
    "render_png",
    "render_svg",
]

__version__ = "1.0.0"
