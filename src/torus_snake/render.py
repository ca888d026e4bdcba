"""Renderer boundary: anything that consumes a state after each step."""

from __future__ import annotations

import sys
from typing import Protocol, TextIO

import numpy as np

from torus_snake.grid import Grid, Role

_GLYPHS: dict[int, str] = {
    Role.EMPTY: ".",
    Role.HEAD: "@",
    Role.BODY: "o",
    Role.FOOD: "*",
}


class Renderer(Protocol):
    """Callable invoked with the game state dict after every step."""

    def __call__(self, state: dict) -> None: ...


def frame_from_state(state: dict) -> np.ndarray:
    """Rebuild the :class:`Role` frame from a serialized state dict."""
    grid = Grid(state["grid"]["width"], state["grid"]["height"])
    body = state["snake"]["body"]
    segments = [
        (Role.HEAD if i == 0 else Role.BODY, (x, y))
        for i, (x, y) in enumerate(body)
    ]
    food = state["food"]["position"]
    return grid.render(segments, tuple(food) if food is not None else None)


def frame_to_text(frame: np.ndarray) -> str:
    return "\n".join(
        "".join(_GLYPHS[int(cell)] for cell in row) for row in frame
    )


class TextRenderer:
    """Writes each frame as a block of characters to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.frames = 0

    def __call__(self, state: dict) -> None:
        text = frame_to_text(frame_from_state(state))
        self.stream.write(
            f"tick {state['tick']}  score {state['score']}\n{text}\n\n",
        )
        self.stream.flush()
        self.frames += 1
