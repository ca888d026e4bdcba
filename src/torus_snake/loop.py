"""Fixed-rate async tick loop driving a :class:`GridModel`."""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging

from torus_snake.engine import GridModel
from torus_snake.input import direction_from_point
from torus_snake.render import Renderer
from torus_snake.snake import Direction

logger = logging.getLogger(__name__)

_DEFAULT_TICK_RATE_MS = 500


class GameLoop:
    """Drives ``model.step()`` on a timer and feeds it input.

    Every mutation of the model runs on the event loop that called
    :meth:`start`, serialized by :attr:`lock`. Input arriving from other
    threads goes through :meth:`post_touch` / :meth:`post_direction`.
    Ticks that fire late are not made up for.
    """

    def __init__(
        self,
        model: GridModel,
        tick_rate_ms: int = _DEFAULT_TICK_RATE_MS,
        surface: tuple[float, float] | None = None,
    ) -> None:
        if tick_rate_ms <= 0:
            raise ValueError("tick_rate_ms must be positive.")
        self.model = model
        self.tick_rate_ms = tick_rate_ms
        self.surface = surface
        self.lock = asyncio.Lock()
        self._renderers: list[Renderer] = []
        self._task: asyncio.Task | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def add_renderer(self, renderer: Renderer) -> None:
        self._renderers.append(renderer)

    def remove_renderer(self, renderer: Renderer) -> None:
        if renderer in self._renderers:
            self._renderers.remove(renderer)

    def start(self) -> None:
        """Start ticking. Must be called from inside a running event loop."""
        if self.running:
            raise RuntimeError("Game loop is already running.")
        self._loop = asyncio.get_running_loop()
        self._task = asyncio.create_task(self._tick_loop())
        logger.info("Game loop started (tick every %d ms).", self.tick_rate_ms)

    async def stop(self) -> None:
        """Stop ticking; no step runs after this returns."""
        task, self._task = self._task, None
        if task is None:
            return
        if not task.done():
            task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        logger.info("Game loop stopped at tick %d.", self.model.tick)

    async def _tick_loop(self) -> None:
        """Step the model once per interval and notify renderers."""
        interval = self.tick_rate_ms / 1000.0
        try:
            while True:
                await asyncio.sleep(interval)
                await self.tick()
        except asyncio.CancelledError:
            logger.debug("Tick loop cancelled.")
            raise

    async def tick(self) -> dict:
        """Run exactly one step and deliver the state to renderers."""
        async with self.lock:
            state = self.model.step()
        self._notify(state)
        return state

    def _notify(self, state: dict) -> None:
        for renderer in list(self._renderers):
            try:
                renderer(state)
            except Exception:
                logger.exception("Renderer %r failed on tick %d.", renderer, state["tick"])

    async def set_direction(self, direction: Direction) -> bool:
        """Request a heading change; reversals are ignored."""
        async with self.lock:
            return self.model.set_direction(direction)

    async def touch(self, x: float, y: float) -> Direction | None:
        """Map a surface point to a direction and apply it.

        Returns the mapped direction, or ``None`` for dead zones.
        """
        if self.surface is None:
            raise RuntimeError("No surface size configured for touch input.")
        direction = direction_from_point(x, y, *self.surface)
        if direction is not None:
            await self.set_direction(direction)
        return direction

    def post_direction(self, direction: Direction) -> None:
        """Thread-safe variant of :meth:`set_direction`; fire-and-forget."""
        self._post(self.set_direction(direction))

    def post_touch(self, x: float, y: float) -> None:
        """Thread-safe variant of :meth:`touch`; fire-and-forget."""
        if self.surface is None:
            raise RuntimeError("No surface size configured for touch input.")
        self._post(self.touch(x, y))

    def _post(self, coro) -> None:
        if self._loop is None:
            coro.close()
            raise RuntimeError("Game loop has not been started.")
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        future.add_done_callback(_log_post_failure)


def _log_post_failure(future: concurrent.futures.Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("Posted input failed.", exc_info=exc)
