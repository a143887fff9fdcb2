import logging
from typing import Iterator, List, Optional

import numpy as np

from .config import BooleanMask, Circle, GenerationState, PlacementConstraints, PlateConfig
from .geometry import SpatialIndex, random_position, within_bounds
from .regions import circle_color

logger = logging.getLogger(__name__)

# Consecutive failures tolerated before the radius ceiling shrinks
ANNEAL_AFTER_FAILURES = 1000
ANNEAL_FACTOR = 0.98
PROGRESS_EVERY = 100


class CirclePacker:
    """
    Fills a canvas with non-overlapping circles colored by a foreground mask.

    Candidates are drawn at random, rejected if they leave the canvas,
    overlap a placed circle or straddle the text edge, and accepted
    otherwise. When placement keeps failing the largest candidate radius
    is reduced so that the remaining gaps can still be filled.
    """

    def __init__(
        self,
        mask: BooleanMask,
        constraints: PlacementConstraints,
        config: Optional[PlateConfig] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        self.config = config or PlateConfig()
        self.mask = mask
        self.constraints = constraints
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.circles: List[Circle] = []
        self.state = GenerationState(
            current_max_radius=self.config.max_radius,
            max_attempts=self.config.max_attempts,
        )

        cell_size = 2 * self.config.max_radius + constraints.padding
        self.spatial_index = SpatialIndex(cell_size=max(cell_size, 1.0))

    def _sample_radius(self) -> float:
        return float(self.rng.uniform(self.config.min_radius, self.state.current_max_radius))

    def _is_valid_placement(self, x: float, y: float, radius: float) -> bool:
        """Check if a circle placement is valid (inside the canvas, no overlaps)."""
        if not within_bounds(x, y, radius, self.constraints):
            return False
        return not self.spatial_index.overlaps(x, y, radius, self.constraints.padding)

    def _place_circle(self, circle: Circle) -> None:
        self.circles.append(circle)
        self.spatial_index.add_circle(circle.x, circle.y, circle.radius)
        self.state.circles_placed += 1
        self.state.failed_attempts = 0

    def _anneal(self) -> None:
        """Shrink the radius ceiling after a long run of failures."""
        state = self.state
        if (state.failed_attempts > ANNEAL_AFTER_FAILURES and
                state.current_max_radius > self.config.min_radius + 1):
            state.current_max_radius *= ANNEAL_FACTOR
            state.failed_attempts = 0
            logger.debug("Reducing max radius to %.1f", state.current_max_radius)

    def _try_candidate(self) -> Optional[Circle]:
        radius = self._sample_radius()
        x, y = random_position(self.constraints, self.rng)

        if not self._is_valid_placement(x, y, radius):
            return None

        color = circle_color(
            x, y, radius, self.mask,
            tolerance=self.config.tolerance,
            on_color=self.config.on_color,
            off_color=self.config.off_color,
        )
        if color is None:
            return None
        return Circle(float(x), float(y), radius, color)

    def generate(self) -> Iterator[Circle]:
        """
        Place circles until the attempt budget is spent.

        Yields:
            Each accepted Circle, in placement order.
        """
        state = self.state
        while not state.exhausted:
            state.attempts += 1
            circle = self._try_candidate()

            if circle is not None:
                self._place_circle(circle)
                if self.config.verbose and state.circles_placed % PROGRESS_EVERY == 0:
                    logger.info("Generated %d circles... %s", state.circles_placed, state)
                yield circle
            else:
                state.failed_attempts += 1

            self._anneal()

        if self.config.verbose:
            logger.info("Done! %s", state)

    def pack(self) -> List[Circle]:
        """Pack circles and return them as a list."""
        return list(self.generate())
