"""Plain-text terminal presenter and play loop."""

import asyncio
import sys
from typing import TextIO

from .app import create_session
from .config import Config
from .engine.display import DisplayKind, DisplayLine, Presenter
from .engine.world import World
from .logging import get_logger

logger = get_logger(__name__)

QUIT_WORDS = ("quit", "exit")
RESTART_WORD = "restart"


class ConsolePresenter(Presenter):
    """Writes display lines to a text stream."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdout

    def _write(self, text: str) -> None:
        self.stream.write(text + "\n")
        self.stream.flush()

    def on_display(self, line: DisplayLine) -> None:
        match line.kind:
            case DisplayKind.ERROR:
                self._write(f"! {line.text}")
            case DisplayKind.PLAYER_ECHO:
                pass  # the terminal already shows what was typed
            case _:
                self._write(line.text)

    def on_dialogue(self, line: DisplayLine) -> None:
        marker = "♪ " if line.audio_cue else ""
        self._write(f'{marker}{line.speaker}: "{line.text}"')


async def play(world: World, config: Config, stream: TextIO | None = None) -> None:
    """Run one console game until end of input or a quit word."""
    loop = asyncio.get_running_loop()
    session = create_session(world, ConsolePresenter(stream), loop, config)
    session.start()

    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line:
            break
        word = line.strip().lower()
        if word in QUIT_WORDS:
            break
        if word == RESTART_WORD:
            session.restart()
            session.start()
            continue
        session.submit_input(line)

    logger.info("session_ended", session=session.id)
