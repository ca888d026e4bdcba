"""Food placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from torus_snake.grid import Grid, Position

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Manages the single food item on the grid.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    Placement is uniform over the whole grid and may land on the snake.
    """

    def __init__(
        self,
        grid: Grid,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.rng = rng if rng is not None else np.random.default_rng()
        self.position: Position | None = None

    def spawn(self) -> Position:
        """Move the food to a fresh random position and return it."""
        self.position = self.grid.random_position(self.rng)
        logger.debug("Food placed at %s.", self.position)
        return self.position

    def is_at(self, position: Position) -> bool:
        return self.position == position

    def to_dict(self) -> dict:
        """Serialize food state to a dictionary."""
        return {
            "position": list(self.position) if self.position is not None else None,
        }
