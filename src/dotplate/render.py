"""
Turn packed circles into PNG bytes or SVG markup and write them to disk.
"""

import io
import logging
from pathlib import Path
from typing import List, Sequence, Union
from xml.sax.saxutils import quoteattr

from PIL import Image, ImageDraw

from .config import Circle, PlacementConstraints, PlateConfig

logger = logging.getLogger(__name__)

# Circles are drawn this many times larger, then downsampled for smooth edges
RENDER_SCALE = 4
PLATE_FILL = "#FFFFFF"
TRANSPARENT = (0, 0, 0, 0)


def resolve_format(fmt: str, output_path: Union[str, Path]) -> str:
    """Concrete output format; "auto" is decided by the file extension."""
    fmt = fmt.lower()
    if fmt == "auto":
        return "svg" if Path(output_path).suffix.lower() == ".svg" else "png"
    return fmt


def _box(x: float, y: float, radius: float, scale: float) -> List[float]:
    return [(x - radius) * scale, (y - radius) * scale, (x + radius) * scale, (y + radius) * scale]


def _draw_circles(image: Image.Image, circles: Sequence[Circle], scale: float) -> None:
    draw = ImageDraw.Draw(image)
    for circle in circles:
        draw.ellipse(_box(circle.x, circle.y, circle.radius, scale), fill=circle.color)


def render_image(circles: Sequence[Circle], config: PlateConfig) -> Image.Image:
    """
    Rasterize circles onto a canvas.

    In circular mode the canvas is filled with the circular background
    color and the circles are clipped to a white disk. With `transparent`
    neither fill is drawn and an RGBA image is returned.
    """
    scale = RENDER_SCALE
    size = (config.width * scale, config.height * scale)
    transparent = config.transparent

    if config.circular:
        base = Image.new("RGBA", size, TRANSPARENT if transparent else config.circular_background_color)
        layer = Image.new("RGBA", size, TRANSPARENT if transparent else PLATE_FILL)
        _draw_circles(layer, circles, scale)

        constraints = PlacementConstraints.from_config(config)
        disk = Image.new("L", size, 0)
        if constraints.inscribed_radius > 0:
            ImageDraw.Draw(disk).ellipse(
                _box(constraints.center_x, constraints.center_y, constraints.inscribed_radius, scale),
                fill=255,
            )
        base.paste(layer, (0, 0), disk)
    else:
        base = Image.new("RGBA", size, TRANSPARENT if transparent else PLATE_FILL)
        _draw_circles(base, circles, scale)

    image = base.resize((config.width, config.height), Image.Resampling.LANCZOS)
    return image if transparent else image.convert("RGB")


def render_png(circles: Sequence[Circle], config: PlateConfig) -> bytes:
    buffer = io.BytesIO()
    render_image(circles, config).save(buffer, format="PNG")
    return buffer.getvalue()


def _num(value: float) -> str:
    return f"{value:.4f}".rstrip("0").rstrip(".")


def render_svg(circles: Sequence[Circle], config: PlateConfig) -> str:
    """Serialize circles as SVG, one <circle> element each."""
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg width="{config.width}" height="{config.height}" xmlns="http://www.w3.org/2000/svg">',
    ]
    circle_lines = [
        f'  <circle cx="{_num(c.x)}" cy="{_num(c.y)}" r="{_num(c.radius)}" fill={quoteattr(c.color)}/>'
        for c in circles
    ]

    if config.circular:
        constraints = PlacementConstraints.from_config(config)
        disk = (f'cx="{_num(constraints.center_x)}" cy="{_num(constraints.center_y)}" '
                f'r="{_num(max(constraints.inscribed_radius, 0))}"')
        if not config.transparent:
            lines.append(f'  <rect width="100%" height="100%" fill={quoteattr(config.circular_background_color)}/>')
        lines.append(f'  <defs><clipPath id="plate"><circle {disk}/></clipPath></defs>')
        if not config.transparent:
            lines.append(f'  <circle {disk} fill="{PLATE_FILL}"/>')
        lines.append('  <g clip-path="url(#plate)">')
        lines.extend("  " + line for line in circle_lines)
        lines.append('  </g>')
    else:
        if not config.transparent:
            lines.append(f'  <rect width="100%" height="100%" fill="{PLATE_FILL}"/>')
        lines.extend(circle_lines)

    lines.append('</svg>')
    return "\n".join(lines) + "\n"


def encode(circles: Sequence[Circle], config: PlateConfig, output_path: Union[str, Path]) -> Union[bytes, str]:
    """PNG bytes or SVG text, depending on the configured format."""
    if resolve_format(config.format, output_path) == "svg":
        return render_svg(circles, config)
    return render_png(circles, config)


def write_output(data: Union[bytes, str], output_path: Union[str, Path]) -> Path:
    """Write encoded output, creating parent directories as needed."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, bytes):
        path.write_bytes(data)
    else:
        path.write_text(data, encoding="utf-8")
    logger.info("Saved to: %s", path)
    return path
