"""Tests for the application factory and console presenter."""

import io
import json
from pathlib import Path

from mugard.app import create_session, load_configured_world
from mugard.config import Config
from mugard.console import ConsolePresenter
from mugard.engine.display import DisplayKind, DisplayLine
from mugard.scheduler import ManualScheduler


def test_load_bundled_world():
    world = load_configured_world(Config())
    assert world.player.location == "square"


def test_load_world_from_config(tmp_path: Path, world_document: dict):
    path = tmp_path / "custom.json"
    path.write_text(json.dumps(world_document))
    world = load_configured_world(Config(world_path=path))
    assert world.player.location == "start"


def test_create_session_uses_config(small_world):
    config = Config(event_delay=2.0, cue_language="common")
    game = create_session(small_world, ConsolePresenter(io.StringIO()), ManualScheduler(), config)
    assert game.events.delay == 2.0
    assert game.out.cue_language == "common"


def test_console_presenter_formats_lines():
    stream = io.StringIO()
    presenter = ConsolePresenter(stream)
    presenter.on_display(DisplayLine(DisplayKind.NARRATION, "A quiet clearing."))
    presenter.on_display(DisplayLine(DisplayKind.ERROR, "You can't go that way."))
    presenter.on_display(DisplayLine(DisplayKind.PLAYER_ECHO, "go west"))
    presenter.on_dialogue(
        DisplayLine(
            DisplayKind.DIALOGUE, "Vel ashan.", speaker="Elder", language="mugard",
            audio_cue=True,
        )
    )
    presenter.on_dialogue(
        DisplayLine(DisplayKind.DIALOGUE, "Hello.", speaker="Tobin", language="common")
    )
    assert stream.getvalue().splitlines() == [
        "A quiet clearing.",
        "! You can't go that way.",
        '♪ Elder: "Vel ashan."',
        'Tobin: "Hello."',
    ]


def test_console_game_through_factory(small_world):
    stream = io.StringIO()
    game = create_session(small_world, ConsolePresenter(stream), ManualScheduler(), Config())
    game.start()
    game.submit_input("north")
    game.submit_input("talk to elder")
    output = stream.getvalue().splitlines()
    assert output[0] == "Start"
    assert output[-1] == '♪ Elder: "Greetings."'
