"""Step-based game model composing grid, snake, and food logic."""

from __future__ import annotations

import logging

import numpy as np

from torus_snake.config import GameConfig
from torus_snake.food import FoodSpawner
from torus_snake.grid import Grid, Position, Role
from torus_snake.snake import Direction, Snake, is_reverse

logger = logging.getLogger(__name__)


class GridModel:
    """Single-snake, step-based game model on a toroidal grid.

    The model owns the grid, snake, food spawner and heading. Each call to
    :meth:`step` advances the game by one tick and returns the updated
    state dictionary. The game never ends: the snake may cross itself.
    """

    def __init__(
        self,
        width: int,
        height: int,
        direction: Direction = Direction.LEFT,
        seed: int | None = None,
        start: Position | None = None,
    ) -> None:
        self.grid = Grid(width=width, height=height)
        self.rng = np.random.default_rng(seed)

        start_x, start_y = start if start is not None else self.grid.center
        self.snake = Snake(start_x, start_y)
        self.direction = direction

        self.food = FoodSpawner(self.grid, rng=self.rng)
        self.food.spawn()

        self.score = 0
        self.tick = 0

    @classmethod
    def from_config(cls, config: GameConfig) -> GridModel:
        """Build a model sized to the display described by *config*."""
        config.validate()
        grid = Grid.from_surface(
            config.surface_width, config.surface_height, config.node_size,
        )
        return cls(
            width=grid.width,
            height=grid.height,
            direction=Direction[config.direction.upper()],
            seed=config.seed,
        )

    @property
    def food_position(self) -> Position:
        assert self.food.position is not None  # noqa: S101
        return self.food.position

    def set_direction(self, direction: Direction) -> bool:
        """Change heading, ignoring 180° reversals.

        Returns True if the heading was updated.
        """
        if not isinstance(direction, Direction):
            raise TypeError(f"Expected a Direction, got {direction!r}.")
        if is_reverse(self.direction, direction):
            return False
        self.direction = direction
        return True

    def next_head(self) -> Position:
        """Compute the wrapped next head position without moving."""
        dx, dy = self.direction.value
        x, y = self.snake.head
        return self.grid.wrap(x + dx, y + dy)

    def step(self) -> dict:
        """Advance the game by one tick.

        Returns the full game state as a serializable dict.
        """
        candidate = self.next_head()

        if self.food.is_at(candidate):
            # Growth and food relocation happen within the same tick.
            self.snake.grow(candidate)
            self.food.spawn()
            self.score += 1
            logger.debug(
                "Food eaten at %s on tick %d; length now %d.",
                candidate, self.tick + 1, len(self.snake),
            )
        else:
            self.snake.shift(candidate)

        self.tick += 1
        return self.get_state()

    def segments(self) -> list[tuple[Role, Position]]:
        """Return the snake's ``(role, position)`` pairs, head first."""
        return self.snake.segments()

    def render(self) -> np.ndarray:
        """Return the current frame as a grid of :class:`Role` codes."""
        return self.grid.render(self.segments(), self.food.position)

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "score": self.score,
            "direction": self.direction.name.lower(),
            "grid": self.grid.to_dict(),
            "snake": self.snake.to_dict(),
            "food": self.food.to_dict(),
        }
