"""Command-line launcher for Torus Snake."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace

from torus_snake.config import GameConfig, InitializationError
from torus_snake.engine import GridModel
from torus_snake.loop import GameLoop
from torus_snake.render import TextRenderer

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="torus-snake",
        description="Torus Snake headless runner and config tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- play ---
    play_p = sub.add_parser("play", help="Run a headless game in the terminal.")
    play_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    play_p.add_argument(
        "--ticks", type=int, default=10,
        help="Number of ticks to run before stopping.",
    )
    play_p.add_argument("--tick-rate-ms", type=int, default=None)
    play_p.add_argument("--seed", type=int, default=None)
    play_p.add_argument("--surface-width", type=float, default=None)
    play_p.add_argument("--surface-height", type=float, default=None)
    play_p.add_argument("--node-size", type=float, default=None)
    play_p.add_argument(
        "--direction", type=str, default=None,
        choices=["up", "down", "left", "right"],
    )

    # --- config ---
    config_p = sub.add_parser("config", help="Write the default config.")
    config_p.add_argument(
        "--output", type=str, default="torus_snake.json",
        help="Where to write the JSON config.",
    )

    return parser


def _resolve_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()

    flag_map = {
        "tick_rate_ms": "tick_rate_ms",
        "seed": "seed",
        "surface_width": "surface_width",
        "surface_height": "surface_height",
        "node_size": "node_size",
        "direction": "direction",
    }
    overrides = {
        cfg_name: getattr(args, cli_name)
        for cli_name, cfg_name in flag_map.items()
        if getattr(args, cli_name, None) is not None
    }
    if overrides:
        config = replace(config, **overrides)
    config.validate()
    return config


async def _play(config: GameConfig, ticks: int, renderer: TextRenderer) -> dict:
    model = GridModel.from_config(config)
    loop = GameLoop(
        model,
        tick_rate_ms=config.tick_rate_ms,
        surface=(config.surface_width, config.surface_height),
    )
    done = asyncio.Event()

    def _count(state: dict) -> None:
        if state["tick"] >= ticks:
            done.set()

    loop.add_renderer(renderer)
    loop.add_renderer(_count)
    loop.start()
    try:
        await done.wait()
    finally:
        await loop.stop()
    return model.get_state()


def _run_play(args: argparse.Namespace) -> int:
    if args.ticks < 1:
        logger.error("--ticks must be at least 1.")
        return 1
    config = _resolve_config(args)
    state = asyncio.run(_play(config, args.ticks, TextRenderer()))
    logger.info(
        "Finished after %d ticks: length %d, score %d.",
        state["tick"], state["snake"]["length"], state["score"],
    )
    return 0


def _run_config(args: argparse.Namespace) -> int:
    GameConfig().save(args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``torus-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "play": _run_play,
        "config": _run_config,
    }
    try:
        return handlers[args.command](args)
    except InitializationError as exc:
        logger.error("Initialization failed: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
