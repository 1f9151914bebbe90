"""Command dispatch and handler functions.

execute(ctx, command) is the main entry point. It looks the verb up in the
dispatch table and hands the noun to a handler. Handlers mutate the session
state in place and report through ctx.out; user mistakes become error lines,
never exceptions.
"""

from collections.abc import Callable
from dataclasses import dataclass

from ..logging import get_logger
from .display import Output
from .events import Sequencer
from .parser import Command
from .resolver import find_character, find_in_inventory, resolve
from .state import DIRECTION_ABBREVIATIONS, DIRECTIONS, GameState
from .world import INVENTORY, Character

logger = get_logger(__name__)

# Dialogue contexts tried before "default", each gated by a flag
DIALOGUE_CONTEXTS = (("party", "partyStarted"),)

HELP_LINES = (
    "Available Commands",
    "Movement: go north, south, east, west (or just n, s, e, w)",
    "Look: look (examine room) or look at [something]",
    "Take: take [object] or get [object]",
    "Drop: drop [object]",
    "Inventory: inventory or i (see what you're carrying)",
    "Talk: talk to [character]",
    "Use: use [object]",
    "Help: help (this list)",
)

NOT_UNDERSTOOD = "I don't understand. Type help for a list of commands."
NOT_SUPPORTED = "I don't know how to do that. Type help for a list of commands."


@dataclass
class Context:
    """Everything a handler may touch during one command."""

    state: GameState
    out: Output
    events: Sequencer


def _visit_flag(room_id: str) -> str:
    return f"visited{room_id[:1].upper()}{room_id[1:]}"


def show_room(ctx: Context, arrival: bool) -> None:
    """Describe the current room.

    An arrival consumes the room's first visit, calls out what is here and
    fires the room's pending event. A quiet redisplay (plain "look") only
    repeats the name, description and exits.
    """
    state = ctx.state
    room = state.current_room

    ctx.out.narrate(room.name)

    if arrival and room.first_visit:
        room.first_visit = False
        ctx.out.narrate(room.on_first_visit or room.description)
        flag = _visit_flag(room.id)
        if flag in state.flags:
            state.set_flag(flag)
    else:
        ctx.out.narrate(room.description)

    if arrival:
        names = [state.objects[i].name for i in room.objects if i in state.objects]
        if len(names) == 1:
            ctx.out.narrate(f"You notice a {names[0]} here.")
        elif names:
            ctx.out.narrate(f"You notice: {', '.join(names)}.")

        for char_id in room.characters:
            character = state.characters.get(char_id)
            if character:
                ctx.out.narrate(
                    character.dialogue.get("default") or f"{character.name} is here."
                )

    if room.exits:
        ctx.out.narrate(f"Exits: {', '.join(room.exits)}")

    if arrival and room.triggers_event:
        event_id = room.triggers_event
        room.triggers_event = None
        ctx.events.trigger(event_id)


def select_dialogue(character: Character, flags: dict[str, bool]) -> str:
    """Pick what a character says given the story so far."""
    for context, flag in DIALOGUE_CONTEXTS:
        if flags.get(flag) and character.dialogue.get(context):
            return character.dialogue[context]
    if character.dialogue.get("default"):
        return character.dialogue["default"]
    logger.warning("dialogue_missing", character=character.id)
    return f"{character.name} has nothing to say."


def _refresh_inventory(ctx: Context) -> None:
    ctx.out.inventory_changed(ctx.state.player.inventory)


def _cmd_go(ctx: Context, noun: str | None = None) -> None:
    """Handle GO and bare compass words."""
    direction = DIRECTION_ABBREVIATIONS.get(noun, noun) if noun else None
    if not direction:
        ctx.out.error("Which direction? Try north, south, east, or west.")
        return

    state = ctx.state
    destination = state.current_room.exits.get(direction)
    if destination is None:
        ctx.out.error("You can't go that way.")
        return

    logger.info(
        "player_moved",
        origin=state.player.location,
        destination=destination,
        direction=direction,
    )
    state.player.location = destination
    show_room(ctx, arrival=True)


def _cmd_look(ctx: Context, noun: str | None = None) -> None:
    """Handle LOOK, with or without something to look at."""
    if not noun:
        show_room(ctx, arrival=False)
        return

    target = resolve(noun, ctx.state)
    if target is None:
        ctx.out.error("You don't see that here.")
        return

    ctx.out.narrate(target.entity.description)
    if target.kind == "object" and target.entity.on_examine:
        ctx.out.narrate(target.entity.on_examine)


def _cmd_take(ctx: Context, noun: str | None = None) -> None:
    """Handle TAKE/GET."""
    if not noun:
        ctx.out.error("Take what?")
        return

    state = ctx.state
    room = state.current_room
    target = resolve(noun, state)
    if target is None or target.kind != "object" or target.entity.id not in room.objects:
        ctx.out.error("You don't see that here.")
        return

    item = target.entity
    if not item.can_take:
        ctx.out.error("You can't take that.")
        return

    room.objects.remove(item.id)
    state.player.inventory.append(item.id)
    item.location = INVENTORY
    logger.info("item_taken", item=item.id, room=room.id)

    ctx.out.narrate(item.on_take or f"You take the {item.name}.")
    _refresh_inventory(ctx)


def _cmd_drop(ctx: Context, noun: str | None = None) -> None:
    """Handle DROP. Only ever considers what the player is holding."""
    if not noun:
        ctx.out.error("Drop what?")
        return

    state = ctx.state
    item = find_in_inventory(noun, state)
    if item is None:
        ctx.out.error("You're not carrying that.")
        return

    room = state.current_room
    state.player.inventory.remove(item.id)
    room.objects.append(item.id)
    item.location = room.id
    logger.info("item_dropped", item=item.id, room=room.id)

    ctx.out.narrate(f"You drop the {item.name}.")
    _refresh_inventory(ctx)


def _cmd_inventory(ctx: Context, noun: str | None = None) -> None:
    """Handle INVENTORY."""
    items = ctx.state.held_items()
    if not items:
        ctx.out.narrate("You're not carrying anything.")
        return

    ctx.out.narrate(f"You are carrying: {', '.join(item.name for item in items)}")
    ctx.out.reveal_inventory()


def _cmd_talk(ctx: Context, noun: str | None = None) -> None:
    """Handle TALK TO."""
    if not noun:
        ctx.out.error("Talk to whom?")
        return

    character = find_character(noun, ctx.state)
    if character is None:
        ctx.out.error("You don't see anyone like that here.")
        return

    text = select_dialogue(character, ctx.state.flags)
    ctx.out.dialogue(character.name, text, character.language)


def _cmd_use(ctx: Context, noun: str | None = None) -> None:
    """Handle USE. Objects without their own use text get the stock reply."""
    if not noun:
        ctx.out.error("Use what?")
        return

    target = resolve(noun, ctx.state)
    if target is not None and target.kind == "object" and target.entity.on_use:
        ctx.out.narrate(target.entity.on_use)
        return

    ctx.out.narrate("You're not sure how to use that right now.")


def _cmd_help(ctx: Context, noun: str | None = None) -> None:
    """Handle HELP."""
    for line in HELP_LINES:
        ctx.out.narrate(line)


_VERB_DISPATCH: dict[str, Callable[[Context, str | None], None]] = {
    "go": _cmd_go,
    "look": _cmd_look,
    "take": _cmd_take,
    "drop": _cmd_drop,
    "inventory": _cmd_inventory,
    "talk": _cmd_talk,
    "use": _cmd_use,
    "help": _cmd_help,
}


def execute(ctx: Context, command: Command) -> None:
    """Run a parsed command against the session."""
    verb = command.verb
    logger.debug("command_parsed", verb=verb, noun=command.noun, raw=command.raw)

    if verb is None:
        ctx.out.error(NOT_UNDERSTOOD)
        return

    # A vocabulary may list compass words as verbs of their own
    if verb in DIRECTIONS:
        _cmd_go(ctx, verb)
        return

    handler = _VERB_DISPATCH.get(verb)
    if handler is None:
        ctx.out.error(NOT_SUPPORTED)
        return

    handler(ctx, command.noun)
