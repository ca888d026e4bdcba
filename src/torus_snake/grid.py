"""Toroidal grid geometry for the snake game."""

from __future__ import annotations

import enum
from collections.abc import Iterable

import numpy as np

from torus_snake.config import InitializationError

Position = tuple[int, int]


class Role(enum.IntEnum):
    """Role tags for grid cells, also used as codes in rendered frames."""

    EMPTY = 0
    HEAD = 1
    BODY = 2
    FOOD = 3


class Grid:
    """Grid dimensions and wrap rules.

    ``width`` and ``height`` are the largest valid coordinates, not cell
    counts: positions range over ``[0, width] x [0, height]``, so the grid
    is ``width + 1`` by ``height + 1`` cells. Coordinates use (x, y)
    ordering with y growing downwards.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise InitializationError(
                f"Grid bounds must be at least 1x1, got {width}x{height}.",
            )
        self.width = width
        self.height = height

    @classmethod
    def from_surface(
        cls,
        surface_width: float,
        surface_height: float,
        node_size: float,
    ) -> Grid:
        """Build a grid from display metrics and the pixel size of a node."""
        if node_size <= 0:
            raise InitializationError("node_size must be positive.")
        if surface_width <= 0 or surface_height <= 0:
            raise InitializationError("Surface dimensions must be positive.")
        return cls(int(surface_width / node_size), int(surface_height / node_size))

    @property
    def center(self) -> Position:
        return self.width // 2, self.height // 2

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the inclusive bounds."""
        return 0 <= x <= self.width and 0 <= y <= self.height

    def wrap(self, x: int, y: int) -> Position:
        """Wrap a coordinate that stepped at most one cell off an edge."""
        if x < 0:
            x = self.width
        elif x > self.width:
            x = 0
        if y < 0:
            y = self.height
        elif y > self.height:
            y = 0
        return x, y

    def random_position(self, rng: np.random.Generator) -> Position:
        """Pick a uniformly random position anywhere on the grid."""
        x = int(rng.integers(0, self.width + 1))
        y = int(rng.integers(0, self.height + 1))
        return x, y

    def render(
        self,
        segments: Iterable[tuple[Role, Position]],
        food: Position | None,
    ) -> np.ndarray:
        """Return an ``int8`` frame of :class:`Role` codes indexed ``[y, x]``.

        Snake cells are painted over food, and the head over body.
        """
        frame = np.full((self.height + 1, self.width + 1), Role.EMPTY, dtype=np.int8)
        if food is not None:
            frame[food[1], food[0]] = Role.FOOD
        head: Position | None = None
        for role, (x, y) in segments:
            if role == Role.HEAD:
                head = (x, y)
            else:
                frame[y, x] = role
        if head is not None:
            frame[head[1], head[0]] = Role.HEAD
        return frame

    def to_dict(self) -> dict:
        """Serialize grid bounds to a dictionary."""
        return {"width": self.width, "height": self.height}
