"""Shared test fixtures for Mugard."""

import pytest

from mugard.app import _get_data_path
from mugard.engine.display import Transcript
from mugard.engine.loader import build_world, load_world
from mugard.engine.world import World
from mugard.scheduler import ManualScheduler
from mugard.session import GameSession


def small_world_document() -> dict:
    """A compact world covering every verb and event path."""
    return {
        "player": {"location": "start", "inventory": ["cloak"]},
        "flags": {
            "partyStarted": False,
            "revelationHeard": False,
            "visitedClearing": False,
        },
        "rooms": {
            "start": {
                "name": "Start",
                "description": "A plain start.",
                "exits": {"north": "clearing", "east": "hall"},
                "objects": ["pebble"],
            },
            "clearing": {
                "name": "Clearing",
                "description": "A quiet clearing.",
                "onFirstVisit": "You step into a clearing for the first time.",
                "exits": {"south": "start", "east": "grove"},
                "objects": ["rusty-sword", "boulder"],
                "characters": ["elder"],
            },
            "grove": {
                "name": "Grove",
                "description": "Old trees.",
                "exits": {"west": "clearing"},
                "objects": ["statue"],
                "characters": ["keeper"],
            },
            "hall": {
                "name": "Hall",
                "description": "A long hall.",
                "exits": {"west": "start"},
                "triggersEvent": "intro",
            },
        },
        "characters": {
            "elder": {
                "name": "Elder",
                "description": "An old man.",
                "dialogue": {"default": "Greetings.", "party": "The feast awaits!"},
                "language": "mugard",
            },
            "keeper": {
                "name": "Keeper",
                "description": "A silent keeper.",
                "dialogue": {"default": "Hm."},
                "language": "common",
            },
        },
        "objects": {
            "pebble": {"name": "pebble", "description": "Smooth.", "canTake": True},
            "rusty-sword": {
                "name": "rusty sword",
                "description": "An old sword.",
                "onExamine": "Rust flakes off.",
                "canTake": True,
            },
            "boulder": {"name": "boulder", "description": "Huge.", "canTake": False},
            "statue": {
                "name": "keeper statue",
                "description": "A statue of the keeper.",
                "canTake": False,
            },
            "cloak": {"name": "wool cloak", "description": "Warm.", "canTake": True},
        },
        "vocabulary": {
            "articles": ["the", "a", "an"],
            "prepositions": ["to", "at", "with", "on", "in", "up"],
            "verbs": {
                "go": ["go", "walk"],
                "look": ["look", "l", "examine", "x"],
                "take": ["take", "get", "pick"],
                "drop": ["drop"],
                "inventory": ["inventory", "i"],
                "talk": ["talk", "speak"],
                "use": ["use"],
                "help": ["help"],
            },
        },
        "events": {
            "intro": {
                "sequence": [
                    {"type": "narration", "text": "One."},
                    {
                        "type": "dialogue",
                        "character": "elder",
                        "text": "Two.",
                        "language": "mugard",
                    },
                    {"type": "narration", "text": "Three."},
                ],
                "setFlags": {"partyStarted": True},
                "next": [
                    {
                        "event": "coda",
                        "when": {"partyStarted": True, "revelationHeard": False},
                    }
                ],
            },
            "coda": {
                "sequence": [{"type": "narration", "text": "Coda."}],
                "setFlags": {"revelationHeard": True},
            },
            "broken": [
                {"type": "dialogue", "character": "nobody", "text": "Lost."},
                {"type": "narration", "text": "After."},
            ],
        },
    }


@pytest.fixture
def world() -> World:
    return load_world(_get_data_path())


@pytest.fixture
def small_world() -> World:
    return build_world(small_world_document())


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def transcript() -> Transcript:
    return Transcript()


@pytest.fixture
def session(small_world, transcript, scheduler) -> GameSession:
    """A started session on the small world, with the opening cleared."""
    game = GameSession(
        small_world, transcript, scheduler, event_delay=0.5, cue_language="mugard"
    )
    game.start()
    transcript.clear()
    return game


@pytest.fixture
def world_document() -> dict:
    return small_world_document()
