"""Game configuration and startup validation."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_DIRECTION_NAMES = ("up", "down", "left", "right")


class InitializationError(ValueError):
    """Raised once at startup when the game cannot be set up."""


@dataclass(frozen=True)
class GameConfig:
    """Display metrics, tick cadence and seeding for a game.

    Supports JSON serialization for reproducibility.
    """

    # Display
    surface_width: float = 480.0
    surface_height: float = 800.0
    node_size: float = 16.0

    # Simulation
    tick_rate_ms: int = 500
    direction: str = "left"
    seed: int | None = None

    def validate(self) -> None:
        """Raise :class:`InitializationError` if the config is unusable."""
        if self.node_size <= 0:
            raise InitializationError("node_size must be positive.")
        if self.surface_width < self.node_size or self.surface_height < self.node_size:
            raise InitializationError(
                "Surface must be at least one node wide and tall.",
            )
        if self.tick_rate_ms <= 0:
            raise InitializationError("tick_rate_ms must be positive.")
        if self.direction not in _DIRECTION_NAMES:
            raise InitializationError(f"Unknown direction {self.direction!r}.")

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load and validate config from a JSON file."""
        try:
            raw = json.loads(Path(path).read_text())
            config = cls(**raw)
        except (OSError, json.JSONDecodeError, TypeError) as exc:
            raise InitializationError(f"Cannot load config {path}: {exc}") from exc
        config.validate()
        return config
