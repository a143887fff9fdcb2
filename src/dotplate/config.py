"""
Configuration and type definitions for dot-plate generation.
"""

import math
import numbers
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple

import numpy as np

# Type aliases
BooleanMask = np.ndarray
Color = str

OUTPUT_FORMATS = ("png", "svg", "auto")
NUMERIC_OPTIONS = ("width", "height", "margin", "min_radius", "max_radius", "padding", "max_attempts",
                   "tolerance", "luminance_threshold", "font_size")


class Circle(NamedTuple):
    """A placed, colored circle."""
    x: float
    y: float
    radius: float
    color: Color


@dataclass
class PlateConfig:
    """
    Options for generating a dot plate.

    Canvas:
        width, height: Output size in pixels
        margin: Empty border kept around the pattern
        circular: Confine the pattern to the inscribed disk
        circular_background_color: Fill outside the disk in circular mode
        transparent: Leave the background unfilled

    Circles:
        min_radius, max_radius: Range of candidate radii
        padding: Minimum gap between circle edges
        max_attempts: Total number of placement attempts
        on_color, off_color: Colors for text and field circles
        tolerance: Fraction of mixed samples a circle may straddle
        palette: Named palette overriding on_color/off_color

    Text:
        font_size: Starting size before shrinking to fit
        font_family: CSS-like family list, e.g. "Arial, sans-serif"
        text_color, background_color: Colors of the rendered text mask
        luminance_threshold: Pixels darker than this become foreground
        max_text_fit: Use a larger text area in circular mode

    Output:
        format: "png", "svg" or "auto" (from the file extension)
        seed: Seed for the random source, None for fresh entropy
        verbose: Log packing progress
    """
    # Canvas
    width: int = 800
    height: int = 800
    margin: float = 50
    circular: bool = False
    circular_background_color: Color = "#F5F5F5"
    transparent: bool = False

    # Circles
    min_radius: float = 3
    max_radius: float = 20
    padding: float = 0
    max_attempts: int = 10000
    on_color: Color = "#FF6B35"
    off_color: Color = "#4ECDC4"
    tolerance: float = 0.1
    palette: Optional[str] = None

    # Text
    font_size: float = 300
    font_family: str = "Arial, sans-serif"
    text_color: Color = "#000000"
    background_color: Color = "#FFFFFF"
    luminance_threshold: float = 0.5
    max_text_fit: bool = False

    # Output
    format: str = "png"
    seed: Optional[int] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        for name in NUMERIC_OPTIONS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ValueError(f"{name} must be a number, got {value!r}")
        if not isinstance(self.format, str):
            raise ValueError(f"format must be a string, got {self.format!r}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas must be positive, got {self.width}x{self.height}")
        for name in ("margin", "min_radius", "max_radius", "padding", "max_attempts"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)}")
        if self.min_radius > self.max_radius:
            raise ValueError(f"min_radius {self.min_radius} is larger than max_radius {self.max_radius}")
        if not 0 <= self.luminance_threshold <= 1:
            raise ValueError(f"luminance_threshold must be in [0, 1], got {self.luminance_threshold}")
        if not 0 <= self.tolerance <= 1:
            raise ValueError(f"tolerance must be in [0, 1], got {self.tolerance}")
        if self.font_size <= 0:
            raise ValueError(f"font_size must be positive, got {self.font_size}")
        self.format = self.format.lower()
        if self.format not in OUTPUT_FORMATS:
            raise ValueError(f"Unknown format {self.format!r}, expected one of {', '.join(OUTPUT_FORMATS)}")

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "PlateConfig":
        """Build a config from snake_case or camelCase option keys."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in options.items():
            name = _snake_case(key)
            if name not in known:
                raise ValueError(f"Unknown option {key!r}")
            kwargs[name] = value
        return cls(**kwargs)


def _snake_case(key: str) -> str:
    return "".join("_" + c.lower() if c.isupper() else c for c in key)


@dataclass(frozen=True)
class PlacementConstraints:
    """Where circles may go on the canvas."""
    width: float
    height: float
    margin: float
    circular: bool
    center_x: float
    center_y: float
    padding: float

    @classmethod
    def from_config(cls, config: PlateConfig) -> "PlacementConstraints":
        return cls(
            width=config.width,
            height=config.height,
            margin=config.margin,
            circular=config.circular,
            center_x=config.width / 2,
            center_y=config.height / 2,
            padding=config.padding,
        )

    @property
    def inscribed_radius(self) -> float:
        """Radius of the placement disk in circular mode."""
        return min(self.width, self.height) / 2 - self.margin


@dataclass
class GenerationState:
    """Tracks the current state of the packing loop."""
    current_max_radius: float
    max_attempts: int
    attempts: int = 0
    failed_attempts: int = 0
    circles_placed: int = 0

    @property
    def progress_ratio(self) -> float:
        """Share of the attempt budget already spent."""
        return self.attempts / self.max_attempts if self.max_attempts > 0 else 1.0

    @property
    def exhausted(self) -> bool:
        return self.attempts >= self.max_attempts

    def __str__(self) -> str:
        return (f"Placed: {self.circles_placed} | Attempts: {self.attempts}/{self.max_attempts} "
                f"({self.progress_ratio:.0%}) | Max radius: {self.current_max_radius:.1f}")


@dataclass(frozen=True)
class RunContext:
    """Values shared by the phases of one generation run."""
    text: str
    words: Tuple[str, ...]
    font_size: float
    requested_font_size: float
    constraints: PlacementConstraints

    @property
    def multi_line(self) -> bool:
        return len(self.words) > 1

    @property
    def font_adjusted(self) -> bool:
        return not math.isclose(self.font_size, self.requested_font_size)


@dataclass
class Plate:
    """A generated pattern before encoding."""
    context: RunContext
    mask: BooleanMask
    circles: List[Circle]


@dataclass(frozen=True)
class GenerationResult:
    circle_count: int
    text: str
    output_path: str
    font_size_used: float
