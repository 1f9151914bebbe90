"""Tests for the session layer."""

from mugard.engine.display import DisplayKind, Transcript
from mugard.engine.events import Mode
from mugard.engine.world import World
from mugard.scheduler import ManualScheduler
from mugard.session import GameSession


def test_first_input_starts_the_game(small_world: World):
    transcript = Transcript()
    game = GameSession(small_world, transcript, ManualScheduler())
    game.submit_input("take pebble")

    assert game.state.started
    assert game.state.flags["gameStarted"] is True
    assert game.state.player.inventory == ["cloak"]
    assert transcript.texts() == [
        "Start",
        "A plain start.",
        "You notice a pebble here.",
        "Exits: north, east",
    ]


def test_start_is_idempotent(session: GameSession, transcript: Transcript):
    session.start()
    assert transcript.lines == []


def test_empty_input_is_ignored(session: GameSession, transcript: Transcript):
    session.submit_input("   ")
    assert transcript.lines == []


def test_restart_gives_pristine_world(session: GameSession, small_world: World):
    session.submit_input("take pebble")
    session.submit_input("north")
    session.state.set_flag("partyStarted")

    session.restart()
    state = session.state
    assert not state.started
    assert state.player.location == "start"
    assert state.player.inventory == ["cloak"]
    assert state.rooms["start"].objects == ["pebble"]
    assert state.rooms["clearing"].first_visit is True
    assert state.flags["partyStarted"] is False
    assert session.ctx.state is state
    assert session.events.state is state


def test_template_is_never_touched(session: GameSession, small_world: World):
    session.submit_input("take pebble")
    session.submit_input("north")
    session.submit_input("take sword")

    assert small_world.rooms["start"].objects == ["pebble"]
    assert small_world.rooms["clearing"].objects == ["rusty-sword", "boulder"]
    assert small_world.rooms["clearing"].first_visit is True
    assert small_world.objects["rusty-sword"].location == "clearing"
    assert small_world.player.inventory == ["cloak"]
    assert "gameStarted" not in small_world.flags


def test_sessions_are_isolated(small_world: World):
    scheduler = ManualScheduler()
    first = GameSession(small_world, Transcript(), scheduler)
    second = GameSession(small_world, Transcript(), scheduler)
    first.start()
    second.start()

    first.submit_input("take pebble")
    first.submit_input("east")

    assert first.mode is Mode.IN_SEQUENCE
    assert second.mode is Mode.IDLE
    assert second.state.rooms["start"].objects == ["pebble"]
    assert second.state.rooms["hall"].triggers_event == "intro"
    assert first.id != second.id


def test_dialogue_reaches_presenter_hook(small_world: World):
    class Recorder(Transcript):
        def __init__(self):
            super().__init__()
            self.cues = []

        def on_dialogue(self, line):
            self.cues.append(line.audio_cue)
            super().on_dialogue(line)

    recorder = Recorder()
    game = GameSession(small_world, recorder, ManualScheduler(), cue_language="mugard")
    game.start()
    game.submit_input("north")
    game.submit_input("talk to elder")

    assert recorder.cues == [True]
    assert recorder.last.kind == DisplayKind.DIALOGUE
