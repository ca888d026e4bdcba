"""Snake body model and movement logic."""

from __future__ import annotations

import enum
from collections import deque

from torus_snake.grid import Position, Role


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def is_reverse(current: Direction, requested: Direction) -> bool:
    """Return True if *requested* points straight back along *current*."""
    return _OPPOSITES[current] is requested


class Snake:
    """A snake represented as an ordered deque of (x, y) segments.

    The head is ``body[0]``; the tail is ``body[-1]``. Segments may overlap:
    the game has no self-collision rule.
    """

    def __init__(self, x: int, y: int) -> None:
        self.body: deque[Position] = deque([(x, y)])

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Position:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Position:
        return self.body[-1]

    def segments(self) -> list[tuple[Role, Position]]:
        """Return ``(role, position)`` pairs ordered head to tail."""
        return [
            (Role.HEAD if i == 0 else Role.BODY, pos)
            for i, pos in enumerate(self.body)
        ]

    def grow(self, new_head: Position) -> None:
        """Move the head to *new_head*, leaving a new body segment behind it.

        Only the head moves; the new segment takes the head's old position
        and every other segment stays where it was.
        """
        self.body.insert(1, self.body[0])
        self.body[0] = new_head

    def shift(self, new_head: Position) -> Position:
        """Move the head to *new_head* and pull every segment forward.

        Each segment takes the position its predecessor held before the
        move. Returns the vacated tail position.
        """
        self.body.appendleft(new_head)
        return self.body.pop()

    def occupies(self, x: int, y: int) -> bool:
        """Check whether any segment sits on a given cell."""
        return (x, y) in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "length": len(self.body),
        }
