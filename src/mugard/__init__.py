"""The Legend of Mugard: an interactive-fiction interpreter."""

import asyncio
import sys

from .app import create_session, load_configured_world
from .config import Config
from .engine.loader import WorldLoadError
from .logging import configure_logging, get_logger
from .session import GameSession

__all__ = ["main", "create_session", "load_configured_world", "Config", "GameSession"]


def main() -> None:
    """Entry point for the console game."""
    config = Config.from_env()

    configure_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        json_logs=config.json_logs,
        text_limit=config.log_text_limit,
    )

    logger = get_logger(__name__)
    logger.info("application_starting", event_delay=config.event_delay)

    try:
        world = load_configured_world(config)
    except (OSError, WorldLoadError) as exc:
        logger.error("world_load_failed", error=str(exc))
        print(f"Error loading game data: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from .console import play

    asyncio.run(play(world, config))
