"""
Named foreground/background color pairs.

The pairs are chosen to be easy or hard to tell apart for particular kinds
of color vision deficiency. They are for demonstration only and carry no
diagnostic meaning.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Palette:
    name: str
    description: str
    on_color: str
    off_color: str
    target_deficiency: str


COLOR_PALETTES: Dict[str, Palette] = {
    "default": Palette(
        "Default Orange/Cyan", "Good general contrast for most color vision types",
        "#FF6B35", "#4ECDC4", "general"),
    "protanopia": Palette(
        "Protanopia (Red-blind) Test", "Optimized for testing red color blindness",
        "#8B0000", "#90EE90", "protanopia"),
    "deuteranopia": Palette(
        "Deuteranopia (Green-blind) Test", "Optimized for testing green color blindness",
        "#D2691E", "#6B8E23", "deuteranopia"),
    "tritanopia": Palette(
        "Tritanopia (Blue-blind) Test", "Optimized for testing blue color blindness",
        "#FFD700", "#4169E1", "tritanopia"),
    "high-contrast-red": Palette(
        "High Contrast Red/Green", "Maximum contrast red/green combination",
        "#B22222", "#32CD32", "red-green"),
    "high-contrast-blue": Palette(
        "High Contrast Blue/Yellow", "Maximum contrast blue/yellow combination",
        "#000080", "#FFFF00", "blue-yellow"),
    "subtle-red-green": Palette(
        "Subtle Red/Green", "Subtle red-green difference for mild deficiencies",
        "#CD5C5C", "#228B22", "mild-red-green"),
    "subtle-brown-green": Palette(
        "Subtle Brown/Green", "Brown-green combination often confused by color blind individuals",
        "#A0522D", "#556B2F", "brown-green-confusion"),
    "monochrome": Palette(
        "Monochrome Compatible", "High luminance contrast for monochromacy",
        "#2F2F2F", "#D3D3D3", "monochromacy"),
    "scientific-red": Palette(
        "Scientific Red Standard", "Standard red used in color vision research",
        "#FF0000", "#00FF00", "research-standard"),
    "ishihara-classic": Palette(
        "Classic Ishihara Colors", "Colors inspired by traditional Ishihara plates",
        "#8B4513", "#9ACD32", "classic-test"),
}


def palette_names() -> List[str]:
    return list(COLOR_PALETTES)


def get_palette(name: str) -> Optional[Palette]:
    """Look up a palette by name, ignoring case."""
    return COLOR_PALETTES.get(name.lower())


def is_valid_palette(name: str) -> bool:
    return name.lower() in COLOR_PALETTES


def palettes_by_deficiency(deficiency: str) -> Dict[str, Palette]:
    return {key: p for key, p in COLOR_PALETTES.items() if p.target_deficiency == deficiency}


def palette_help_text() -> str:
    lines = [f"    {key:<20} - {p.description}" for key, p in COLOR_PALETTES.items()]
    return "Available color palettes:\n" + "\n".join(lines)
