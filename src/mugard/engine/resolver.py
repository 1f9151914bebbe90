"""Noun phrase to a concrete object or character in scope."""

from dataclasses import dataclass
from typing import Literal

from .state import GameState
from .world import Character, Item


@dataclass(frozen=True)
class Target:
    kind: Literal["object", "character"]
    entity: Item | Character


def matches(name: str, noun: str) -> bool:
    """Check whether a noun phrase refers to a display name.

    Accepts an exact match, the noun appearing anywhere in the name
    ("sword" for "rusty sword"), or the noun being one word of the name.
    All comparisons ignore case.
    """
    name = name.lower()
    noun = noun.lower()
    return name == noun or noun in name or noun in name.split()


def resolve(noun: str, state: GameState) -> Target | None:
    """Find what a noun refers to.

    Room objects are searched first, then the inventory, then characters in
    the room. The first match wins, so a room object shadows a character of
    the same name.
    """
    room = state.current_room

    for obj_id in room.objects:
        item = state.objects.get(obj_id)
        if item and matches(item.name, noun):
            return Target("object", item)

    for obj_id in state.player.inventory:
        item = state.objects.get(obj_id)
        if item and matches(item.name, noun):
            return Target("object", item)

    for char_id in room.characters:
        character = state.characters.get(char_id)
        if character and matches(character.name, noun):
            return Target("character", character)

    return None


def find_in_inventory(noun: str, state: GameState) -> Item | None:
    """Like resolve, but only ever returns something the player holds."""
    for obj_id in state.player.inventory:
        item = state.objects.get(obj_id)
        if item and matches(item.name, noun):
            return item
    return None


def find_character(noun: str, state: GameState) -> Character | None:
    """Only characters in the current room; objects never get in the way."""
    for char_id in state.current_room.characters:
        character = state.characters.get(char_id)
        if character and matches(character.name, noun):
            return character
    return None
