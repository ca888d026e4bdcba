"""Translation of raw pointer input into snake directions."""

from __future__ import annotations

from torus_snake.snake import Direction

_DIRECTION_MAP: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def parse_direction(name: str) -> Direction | None:
    """Look up a direction by case-insensitive name."""
    return _DIRECTION_MAP.get(name.strip().lower())


def direction_from_point(
    x: float, y: float, width: float, height: float,
) -> Direction | None:
    """Map a touch point to a direction using a 3x3 split of the surface.

    Only the four edge-centre regions map to a direction. Corners, the
    centre, and points lying exactly on a third line yield ``None``.
    """
    if width <= 0 or height <= 0:
        raise ValueError("Surface dimensions must be positive.")

    left, right = width / 3, width * 2 / 3
    top, bottom = height / 3, height * 2 / 3
    mid_x = left < x < right
    mid_y = top < y < bottom

    if x < left and mid_y:
        return Direction.LEFT
    if y < top and mid_x:
        return Direction.UP
    if x > right and mid_y:
        return Direction.RIGHT
    if y > bottom and mid_x:
        return Direction.DOWN
    return None
