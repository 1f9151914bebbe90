"""Mutable per-session game state.

Each session gets its own deep copy of the world's rooms, objects,
characters, player and flags, so nothing a player does can leak into the
template or into another session.
"""

import copy
from dataclasses import dataclass, field

from .world import INVENTORY, Character, Item, Room, World

# Compass words accepted as a bare command, and their abbreviations
DIRECTION_ABBREVIATIONS = {"n": "north", "s": "south", "e": "east", "w": "west"}
DIRECTIONS = frozenset(DIRECTION_ABBREVIATIONS) | frozenset(
    DIRECTION_ABBREVIATIONS.values()
)


@dataclass
class Player:
    """Where the player is and what they hold, in the order taken."""

    location: str
    inventory: list[str] = field(default_factory=list)


@dataclass
class GameState:
    """All mutable per-session state."""

    player: Player
    rooms: dict[str, Room] = field(default_factory=dict)
    objects: dict[str, Item] = field(default_factory=dict)
    characters: dict[str, Character] = field(default_factory=dict)
    flags: dict[str, bool] = field(default_factory=dict)
    started: bool = False

    @property
    def current_room(self) -> Room:
        return self.rooms[self.player.location]

    def set_flag(self, name: str, value: bool = True) -> None:
        self.flags[name] = value

    def held_items(self) -> list[Item]:
        return [self.objects[obj_id] for obj_id in self.player.inventory]


def new_game_state(world: World) -> GameState:
    """Create a fresh game state from the world template."""
    return GameState(
        player=Player(
            location=world.player.location,
            inventory=list(world.player.inventory),
        ),
        rooms=copy.deepcopy(world.rooms),
        objects=copy.deepcopy(world.objects),
        characters=copy.deepcopy(world.characters),
        flags=dict(world.flags),
    )


def verify_locations(state: GameState) -> list[str]:
    """Return every disagreement between object locations and their holders.

    An object must be listed by exactly the holder its location names: the
    room's object list, or the inventory. An empty result means the state is
    consistent.
    """
    problems = []
    listed: dict[str, list[str]] = {}
    for room in state.rooms.values():
        for obj_id in room.objects:
            listed.setdefault(obj_id, []).append(room.id)
    for obj_id in state.player.inventory:
        listed.setdefault(obj_id, []).append(INVENTORY)

    for obj_id, item in state.objects.items():
        holders = listed.get(obj_id, [])
        if item.location is None:
            if holders:
                problems.append(f"{obj_id} has no location but is in {holders}")
        elif holders != [item.location]:
            problems.append(f"{obj_id} is at {item.location!r} but listed in {holders}")
    return problems
