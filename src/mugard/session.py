"""Session layer bridging the presentation layer and the game engine."""

import uuid

from .engine.commands import Context, execute, show_room
from .engine.display import Output, Presenter
from .engine.events import Mode, Sequencer
from .engine.parser import parse
from .engine.state import GameState, new_game_state
from .engine.world import World
from .logging import get_logger
from .scheduler import Scheduler

logger = get_logger(__name__)


class GameSession:
    """One player's game: a private world copy plus the input router.

    Input goes to the command parser while the sequencer is idle, and to
    the sequencer (whatever was typed) while an event is playing.
    """

    def __init__(
        self,
        world: World,
        presenter: Presenter,
        scheduler: Scheduler,
        event_delay: float = 0.5,
        cue_language: str | None = None,
    ):
        self.id = uuid.uuid4().hex[:12]
        self.world = world
        self.state: GameState = new_game_state(world)
        self.out = Output(presenter, cue_language=cue_language)
        self.events = Sequencer(
            world, self.state, self.out, scheduler, delay=event_delay
        )
        self.ctx = Context(state=self.state, out=self.out, events=self.events)

    @property
    def mode(self) -> Mode:
        return self.events.mode

    def start(self) -> None:
        """Begin play by showing the opening room."""
        if self.state.started:
            return
        self.state.started = True
        self.state.set_flag("gameStarted")
        logger.info(
            "session_started", session=self.id, room=self.state.player.location
        )
        show_room(self.ctx, arrival=True)

    def submit_input(self, text: str) -> None:
        """Handle one line of player input."""
        text = text.strip()

        if not self.state.started:
            self.start()
            return

        if self.events.mode is Mode.IN_SEQUENCE:
            self.events.advance()
            return

        if not text:
            return

        self.out.echo(text)
        execute(self.ctx, parse(text, self.world.vocabulary))

    def restart(self) -> None:
        """Throw the current game away and set up a pristine one."""
        self.state = new_game_state(self.world)
        self.events.reset(self.state)
        self.ctx.state = self.state
        self.out.inventory_changed(self.state.player.inventory)
        logger.info("session_restarted", session=self.id)
