"""Tests for touch-to-direction mapping."""

import pytest

from torus_snake.input import direction_from_point, parse_direction
from torus_snake.snake import Direction

W, H = 300, 600


class TestDirectionFromPoint:
    @pytest.mark.parametrize(
        ("x", "y", "expected"),
        [
            (10, 300, Direction.LEFT),
            (150, 10, Direction.UP),
            (290, 300, Direction.RIGHT),
            (150, 590, Direction.DOWN),
        ],
    )
    def test_edge_centres(self, x, y, expected):
        assert direction_from_point(x, y, W, H) == expected

    @pytest.mark.parametrize(
        ("x", "y"),
        [(10, 10), (290, 10), (10, 590), (290, 590)],
    )
    def test_corners_ignored(self, x, y):
        assert direction_from_point(x, y, W, H) is None

    def test_centre_ignored(self):
        assert direction_from_point(150, 300, W, H) is None

    def test_third_lines_ignored(self):
        assert direction_from_point(100, 300, W, H) is None
        assert direction_from_point(150, 200, W, H) is None
        assert direction_from_point(200, 300, W, H) is None
        assert direction_from_point(150, 400, W, H) is None

    def test_invalid_surface(self):
        with pytest.raises(ValueError, match="positive"):
            direction_from_point(1, 1, 0, 100)


class TestParseDirection:
    def test_names(self):
        assert parse_direction("up") == Direction.UP
        assert parse_direction(" Left ") == Direction.LEFT
        assert parse_direction("RIGHT") == Direction.RIGHT

    def test_unknown(self):
        assert parse_direction("sideways") is None
