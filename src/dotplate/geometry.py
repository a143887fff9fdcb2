"""
Geometry utilities for circle placement.

Contains:
- random_position: candidate centers for rectangular and circular canvases
- within_bounds: margin and inscribed-disk checks
- SpatialIndex: grid-based spatial indexing for collision detection
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

import numpy as np

from .config import PlacementConstraints

# Type aliases
GridKey = Tuple[int, int]


def random_position(constraints: PlacementConstraints, rng: np.random.Generator) -> Tuple[float, float]:
    """
    Draw a candidate center.

    In circular mode the distance from the center is uniform in
    [0, inscribed_radius], so candidates cluster towards the middle.
    """
    c = constraints
    if c.circular:
        angle = rng.uniform(0, 2 * math.pi)
        distance = rng.uniform(0, max(c.inscribed_radius, 0))
        return (c.center_x + math.cos(angle) * distance,
                c.center_y + math.sin(angle) * distance)

    effective_width = c.width - 2 * c.margin
    effective_height = c.height - 2 * c.margin
    return (c.margin + rng.uniform(0, 1) * effective_width,
            c.margin + rng.uniform(0, 1) * effective_height)


def within_bounds(x: float, y: float, radius: float, constraints: PlacementConstraints) -> bool:
    """Check the margin-adjusted canvas and, if circular, the inscribed disk."""
    c = constraints
    if (x - radius < c.margin or x + radius > c.width - c.margin or
            y - radius < c.margin or y + radius > c.height - c.margin):
        return False

    if c.circular:
        distance = math.hypot(x - c.center_x, y - c.center_y)
        if distance + radius > c.inscribed_radius:
            return False

    return True


@dataclass
class SpatialIndex:
    """
    Grid-based spatial index for collision detection.

    `cell_size` must be at least twice the largest radius plus the padding,
    so that any circle close enough to collide lies in the 3x3 neighbourhood.
    """
    cell_size: float
    grid: Dict[GridKey, List[int]] = field(default_factory=dict)

    _centers: List[Tuple[float, float]] = field(default_factory=list)
    _radii: List[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self._radii)

    def add_circle(self, x: float, y: float, radius: float) -> None:
        """Add a circle to the spatial index."""
        index = len(self._radii)
        self._centers.append((x, y))
        self._radii.append(radius)
        self.grid.setdefault(self._get_cell_key(x, y), []).append(index)

    def get_nearby_indices(self, x: float, y: float) -> Iterator[int]:
        """Yield indices of circles that might be near a point, in insertion order per cell."""
        cx, cy = self._get_cell_key(x, y)
        for dx in range(-1, 2):
            for dy in range(-1, 2):
                neighbor_key = (cx + dx, cy + dy)
                if neighbor_key in self.grid:
                    yield from self.grid[neighbor_key]

    def overlaps(self, x: float, y: float, radius: float, padding: float = 0.0) -> bool:
        """True if a circle at (x, y) would come closer than `padding` to any indexed circle."""
        for i in self.get_nearby_indices(x, y):
            ox, oy = self._centers[i]
            if math.hypot(x - ox, y - oy) < radius + self._radii[i] + padding:
                return True
        return False

    def _get_cell_key(self, x: float, y: float) -> GridKey:
        """Convert a point to its grid cell coordinates."""
        return (int(x // self.cell_size), int(y // self.cell_size))
