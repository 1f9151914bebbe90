"""Scripted event sequencer.

A sequencer is either IDLE or IN_SEQUENCE. Triggering an event enters
IN_SEQUENCE and schedules the first step after a short delay; from then on
every player input advances one step until the event runs out. When an
event completes its flags are applied and its follow-on links are checked.
"""

from collections import deque
from enum import Enum

from ..logging import get_logger
from ..scheduler import Cancellable, Scheduler
from .display import Output
from .state import GameState
from .world import Event, FollowOn, Step, World

logger = get_logger(__name__)

CONTINUE_PROMPT = "(Press Enter to continue...)"


class Mode(str, Enum):
    IDLE = "idle"
    IN_SEQUENCE = "in_sequence"


class Sequencer:
    """Runs one event at a time for a single session."""

    def __init__(
        self,
        world: World,
        state: GameState,
        out: Output,
        scheduler: Scheduler,
        delay: float = 0.5,
    ):
        self.world = world
        self.state = state
        self.out = out
        self.scheduler = scheduler
        self.delay = delay
        self.mode = Mode.IDLE
        self._event: Event | None = None
        self._cursor = 0
        self._queue: deque[str] = deque()
        self._start_timer: Cancellable | None = None
        self._follow_timers: list[Cancellable] = []

    @property
    def active_event(self) -> str | None:
        return self._event.id if self._event else None

    @property
    def cursor(self) -> int:
        return self._cursor

    def trigger(self, event_id: str) -> bool:
        """Start an event, or queue it behind the one already running.

        Returns False if no such event is defined.
        """
        event = self.world.events.get(event_id)
        if event is None:
            logger.warning("event_missing", event_id=event_id)
            return False

        if self.mode is Mode.IN_SEQUENCE:
            self._queue.append(event_id)
            logger.info("event_queued", event_id=event_id, behind=self.active_event)
            return True

        self._begin(event)
        return True

    def advance(self) -> None:
        """Show the next step, or finish the event if none are left."""
        if self.mode is not Mode.IN_SEQUENCE:
            return
        self._cancel_start_timer()

        steps = self._event.steps
        if self._cursor >= len(steps):
            self._finish()
            return

        rendered = False
        while self._cursor < len(steps) and not rendered:
            step = steps[self._cursor]
            self._cursor += 1
            rendered = self._render(step)

        if self._cursor < len(steps):
            self.out.narrate(CONTINUE_PROMPT)
        else:
            self._finish()

    def reset(self, state: GameState) -> None:
        """Drop any running or pending event and attach to a new state."""
        self._cancel_start_timer()
        for timer in self._follow_timers:
            timer.cancel()
        self._follow_timers.clear()
        self._queue.clear()
        self._event = None
        self._cursor = 0
        self.mode = Mode.IDLE
        self.state = state

    def _begin(self, event: Event) -> None:
        self.mode = Mode.IN_SEQUENCE
        self._event = event
        self._cursor = 0
        logger.info("event_started", event_id=event.id, steps=len(event.steps))
        self._start_timer = self.scheduler.call_later(self.delay, self._first_step)

    def _first_step(self) -> None:
        self._start_timer = None
        self.advance()

    def _cancel_start_timer(self) -> None:
        if self._start_timer is not None:
            self._start_timer.cancel()
            self._start_timer = None

    def _render(self, step: Step) -> bool:
        if step.kind == "narration":
            self.out.narrate(step.text)
            return True

        character = self.state.characters.get(step.character)
        if character is None:
            logger.warning(
                "event_step_skipped",
                event_id=self.active_event,
                reason="unknown_character",
                character=step.character,
            )
            return False
        language = step.language or character.language
        self.out.dialogue(character.name, step.text, language)
        return True

    def _finish(self) -> None:
        event = self._event
        self.mode = Mode.IDLE
        self._event = None
        self._cursor = 0

        for name, value in event.set_flags:
            self.state.set_flag(name, value)
        logger.info("event_finished", event_id=event.id)

        for follow_on in event.next:
            if follow_on.applies(self.state.flags):
                logger.info("follow_on_scheduled", event_id=event.id, next=follow_on.event)
                self._schedule_follow_on(follow_on)
                break

        if self._queue:
            self.trigger(self._queue.popleft())

    def _schedule_follow_on(self, follow_on: FollowOn) -> None:
        def fire() -> None:
            self._follow_timers.remove(timer)
            self._follow_on(follow_on)

        timer = self.scheduler.call_later(self.delay, fire)
        self._follow_timers.append(timer)

    def _follow_on(self, follow_on: FollowOn) -> None:
        # Flags may have moved on while we waited
        if not follow_on.applies(self.state.flags):
            logger.info("follow_on_dropped", next=follow_on.event)
            return
        self.trigger(follow_on.event)
