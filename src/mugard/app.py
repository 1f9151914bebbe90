"""Application factory for Mugard."""

from importlib import resources
from pathlib import Path

from .config import Config
from .engine.display import Presenter
from .engine.loader import load_world
from .engine.world import World
from .logging import get_logger
from .scheduler import Scheduler
from .session import GameSession

logger = get_logger(__name__)


def _get_data_path() -> Path:
    """Locate the bundled world.json via importlib.resources."""
    return resources.files("mugard").joinpath("data").joinpath("world.json")


def load_configured_world(config: Config | None = None) -> World:
    """Load the world document named by the config (or the bundled one)."""
    config = config or Config.from_env()
    data_path = config.world_path or _get_data_path()

    world = load_world(data_path)
    logger.info(
        "world_loaded",
        path=str(data_path),
        rooms=len(world.rooms),
        objects=len(world.objects),
        characters=len(world.characters),
        events=len(world.events),
    )
    return world


def create_session(
    world: World,
    presenter: Presenter,
    scheduler: Scheduler,
    config: Config | None = None,
) -> GameSession:
    """Create a game session wired up according to the config."""
    config = config or Config.from_env()
    return GameSession(
        world,
        presenter,
        scheduler,
        event_delay=config.event_delay,
        cue_language=config.cue_language,
    )
