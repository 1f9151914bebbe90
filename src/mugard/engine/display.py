"""Display requests emitted by the interpreter.

The interpreter decides what kind of line something is (narration,
dialogue, error, echo) and in which language dialogue is spoken. How lines
are rendered, styled or voiced is entirely up to the Presenter.
"""

from dataclasses import dataclass
from enum import Enum

from ..logging import get_logger

logger = get_logger(__name__)


class DisplayKind(str, Enum):
    NARRATION = "narration"
    DIALOGUE = "dialogue"
    ERROR = "error"
    PLAYER_ECHO = "player_echo"


@dataclass(frozen=True)
class DisplayLine:
    """A single user-visible line."""

    kind: DisplayKind
    text: str
    speaker: str | None = None
    language: str | None = None
    audio_cue: bool = False


class Presenter:
    """Receives display requests. Subclass and override what you need.

    ``on_dialogue`` defaults to ``on_display`` so a presenter that does not
    care about audio cues only needs one method.
    """

    def on_display(self, line: DisplayLine) -> None:
        pass

    def on_dialogue(self, line: DisplayLine) -> None:
        self.on_display(line)

    def on_inventory_changed(self, held: list[str]) -> None:
        pass

    def on_inventory_reveal(self) -> None:
        pass


class Transcript(Presenter):
    """A presenter that records everything, for tests and replays."""

    def __init__(self):
        self.lines: list[DisplayLine] = []
        self.inventory_updates: list[list[str]] = []
        self.reveals = 0

    def on_display(self, line: DisplayLine) -> None:
        self.lines.append(line)

    def on_inventory_changed(self, held: list[str]) -> None:
        self.inventory_updates.append(list(held))

    def on_inventory_reveal(self) -> None:
        self.reveals += 1

    def texts(self, kind: DisplayKind | None = None) -> list[str]:
        return [line.text for line in self.lines if kind is None or line.kind == kind]

    @property
    def last(self) -> DisplayLine:
        return self.lines[-1]

    def clear(self) -> None:
        self.lines.clear()
        self.inventory_updates.clear()
        self.reveals = 0


class Output:
    """Emits display requests for one session."""

    def __init__(self, presenter: Presenter, cue_language: str | None = None):
        self.presenter = presenter
        self.cue_language = cue_language

    def narrate(self, text: str) -> None:
        self.presenter.on_display(DisplayLine(DisplayKind.NARRATION, text))

    def error(self, text: str) -> None:
        self.presenter.on_display(DisplayLine(DisplayKind.ERROR, text))

    def echo(self, text: str) -> None:
        self.presenter.on_display(DisplayLine(DisplayKind.PLAYER_ECHO, text))

    def dialogue(self, speaker: str, text: str, language: str) -> None:
        line = DisplayLine(
            DisplayKind.DIALOGUE,
            text,
            speaker=speaker,
            language=language,
            audio_cue=language == self.cue_language,
        )
        logger.debug("dialogue", speaker=speaker, language=language, text=text)
        self.presenter.on_dialogue(line)

    def inventory_changed(self, held: list[str]) -> None:
        self.presenter.on_inventory_changed(list(held))

    def reveal_inventory(self) -> None:
        self.presenter.on_inventory_reveal()
