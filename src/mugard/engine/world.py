"""Data structures for the Mugard game world.

These are loaded once from the world document at startup and shared across
all sessions. A session never mutates them: it works on a deep copy (see
state.new_game_state).
"""

from dataclasses import dataclass, field

# Language used for dialogue when neither the step nor the character says
DEFAULT_LANGUAGE = "mugard"

# Location value for objects the player is carrying
INVENTORY = "inventory"


@dataclass
class Room:
    """A location in the game world."""

    id: str
    name: str = ""
    description: str = ""
    on_first_visit: str = ""
    exits: dict[str, str] = field(default_factory=dict)
    objects: list[str] = field(default_factory=list)
    characters: list[str] = field(default_factory=list)
    triggers_event: str | None = None
    first_visit: bool = True


@dataclass
class Item:
    """An object that can sit in a room or in the player's inventory."""

    id: str
    name: str = ""
    description: str = ""
    on_examine: str = ""
    on_take: str = ""
    on_use: str = ""
    can_take: bool = False
    location: str | None = None


@dataclass
class Character:
    """A character the player can look at and talk to."""

    id: str
    name: str = ""
    description: str = ""
    dialogue: dict[str, str] = field(default_factory=dict)
    language: str = DEFAULT_LANGUAGE


@dataclass(frozen=True)
class Step:
    """One beat of a scripted event: narration or a line of dialogue."""

    kind: str  # "narration" or "dialogue"
    text: str = ""
    character: str | None = None
    language: str | None = None


@dataclass(frozen=True)
class FollowOn:
    """An event to chain to once the owning event completes.

    ``when`` maps flag names to the value each must have.
    """

    event: str
    when: tuple[tuple[str, bool], ...] = ()

    def applies(self, flags: dict[str, bool]) -> bool:
        return all(flags.get(name, False) == value for name, value in self.when)


@dataclass(frozen=True)
class Event:
    """A named, ordered sequence of steps."""

    id: str
    steps: tuple[Step, ...] = ()
    set_flags: tuple[tuple[str, bool], ...] = ()
    next: tuple[FollowOn, ...] = ()


@dataclass(frozen=True)
class Vocabulary:
    """Static words shared by every session."""

    articles: frozenset[str] = frozenset()
    prepositions: frozenset[str] = frozenset()
    verbs: tuple[tuple[str, tuple[str, ...]], ...] = ()

    def verb_for(self, token: str) -> str | None:
        """Return the first verb key (in definition order) listing token."""
        for verb, synonyms in self.verbs:
            if token in synonyms:
                return verb
        return None


@dataclass
class PlayerStart:
    """Where the player begins and what they begin holding."""

    location: str
    inventory: list[str] = field(default_factory=list)


@dataclass
class World:
    """The complete game world template, loaded from the world document."""

    player: PlayerStart
    flags: dict[str, bool] = field(default_factory=dict)
    rooms: dict[str, Room] = field(default_factory=dict)
    objects: dict[str, Item] = field(default_factory=dict)
    characters: dict[str, Character] = field(default_factory=dict)
    vocabulary: Vocabulary = field(default_factory=Vocabulary)
    events: dict[str, Event] = field(default_factory=dict)
