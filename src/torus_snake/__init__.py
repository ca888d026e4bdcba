"""Torus Snake — grid movement and growth simulation."""

from torus_snake.config import GameConfig, InitializationError
from torus_snake.engine import GridModel
from torus_snake.grid import Grid, Position, Role
from torus_snake.input import direction_from_point, parse_direction
from torus_snake.loop import GameLoop
from torus_snake.render import Renderer, TextRenderer
from torus_snake.snake import Direction, Snake

__all__ = [
    "Direction",
    "GameConfig",
    "GameLoop",
    "Grid",
    "GridModel",
    "InitializationError",
    "Position",
    "Renderer",
    "Role",
    "Snake",
    "TextRenderer",
    "direction_from_point",
    "parse_direction",
]
