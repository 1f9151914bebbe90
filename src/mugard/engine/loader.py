"""Parse a world document (JSON) into a World object.

The document has the top-level sections player, flags, rooms, characters,
objects, vocabulary and events. Keys inside sections use the document's
camelCase names (onFirstVisit, canTake, triggersEvent, ...).
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..logging import get_logger
from .world import (
    DEFAULT_LANGUAGE,
    INVENTORY,
    Character,
    Event,
    FollowOn,
    Item,
    PlayerStart,
    Room,
    Step,
    Vocabulary,
    World,
)

logger = get_logger(__name__)

REQUIRED_SECTIONS = ("player", "rooms", "vocabulary")
STEP_KINDS = ("narration", "dialogue")


class WorldLoadError(ValueError):
    """The world document is structurally unusable."""


def _section(document: Mapping, name: str) -> Mapping:
    value = document.get(name) or {}
    if not isinstance(value, Mapping):
        raise WorldLoadError(f"Section {name!r} must be a mapping")
    return value


def _mapping(data: Mapping, key: str, owner: str) -> Mapping:
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise WorldLoadError(f"{owner}: {key!r} must be a mapping")
    return value


def _parse_room(room_id: str, data: Mapping) -> Room:
    exits = _mapping(data, "exits", f"Room {room_id!r}")
    return Room(
        id=room_id,
        name=data.get("name", room_id),
        description=data.get("description", ""),
        on_first_visit=data.get("onFirstVisit") or "",
        exits={str(d).lower(): str(dest) for d, dest in exits.items()},
        objects=list(data.get("objects") or []),
        characters=list(data.get("characters") or []),
        triggers_event=data.get("triggersEvent") or None,
        first_visit=bool(data.get("firstVisit", True)),
    )


def _parse_item(item_id: str, data: Mapping) -> Item:
    return Item(
        id=item_id,
        name=data.get("name", item_id),
        description=data.get("description", ""),
        on_examine=data.get("onExamine") or "",
        on_take=data.get("onTake") or "",
        on_use=data.get("onUse") or "",
        can_take=bool(data.get("canTake", False)),
        location=data.get("location"),
    )


def _parse_character(char_id: str, data: Mapping) -> Character:
    return Character(
        id=char_id,
        name=data.get("name", char_id),
        description=data.get("description", ""),
        dialogue=dict(_mapping(data, "dialogue", f"Character {char_id!r}")),
        language=data.get("language") or DEFAULT_LANGUAGE,
    )


def _parse_step(event_id: str, data: Mapping) -> Step | None:
    kind = data.get("type")
    if kind not in STEP_KINDS:
        logger.warning("event_step_skipped", event_id=event_id, kind=kind)
        return None
    return Step(
        kind=kind,
        text=data.get("text", ""),
        character=data.get("character"),
        language=data.get("language"),
    )


def _flag_pairs(data: Mapping | None) -> tuple[tuple[str, bool], ...]:
    return tuple((str(name), bool(value)) for name, value in (data or {}).items())


def _parse_event(event_id: str, data: Any) -> Event:
    """Parse an event: either a bare step list or a mapping with a sequence."""
    if isinstance(data, list):
        data = {"sequence": data}
    follow_ons = []
    for entry in data.get("next") or []:
        if not isinstance(entry, Mapping) or not entry.get("event"):
            raise WorldLoadError(f"Event {event_id!r} has a follow-on without an event")
        follow_ons.append(
            FollowOn(event=entry["event"], when=_flag_pairs(entry.get("when")))
        )
    steps = (_parse_step(event_id, step) for step in data.get("sequence") or [])
    return Event(
        id=event_id,
        steps=tuple(step for step in steps if step is not None),
        set_flags=_flag_pairs(data.get("setFlags")),
        next=tuple(follow_ons),
    )


def _parse_vocabulary(data: Mapping) -> Vocabulary:
    return Vocabulary(
        articles=frozenset(w.lower() for w in data.get("articles", [])),
        prepositions=frozenset(w.lower() for w in data.get("prepositions", [])),
        verbs=tuple(
            (verb, tuple(s.lower() for s in synonyms))
            for verb, synonyms in data.get("verbs", {}).items()
        ),
    )


def _drop_unknown(ids: list[str], known: Mapping, kind: str, holder: str) -> list[str]:
    kept = []
    for entity_id in ids:
        if entity_id in known:
            kept.append(entity_id)
        else:
            logger.warning("unknown_reference", kind=kind, id=entity_id, holder=holder)
    return kept


def _place_objects(world: World) -> None:
    """Make object locations agree with room lists and the start inventory.

    Room lists and the inventory win; an object listed nowhere is placed
    according to its own location field.
    """
    holders: dict[str, str] = {}

    def claim(obj_id: str, holder: str) -> None:
        if obj_id in holders:
            raise WorldLoadError(
                f"Object {obj_id!r} is in both {holders[obj_id]!r} and {holder!r}"
            )
        holders[obj_id] = holder

    for room in world.rooms.values():
        room.objects = _drop_unknown(room.objects, world.objects, "object", room.id)
        room.characters = _drop_unknown(
            room.characters, world.characters, "character", room.id
        )
        for obj_id in room.objects:
            claim(obj_id, room.id)

    world.player.inventory = _drop_unknown(
        world.player.inventory, world.objects, "object", INVENTORY
    )
    for obj_id in world.player.inventory:
        claim(obj_id, INVENTORY)

    for obj_id, item in world.objects.items():
        if obj_id in holders:
            item.location = holders[obj_id]
        elif item.location == INVENTORY:
            world.player.inventory.append(obj_id)
        elif item.location in world.rooms:
            world.rooms[item.location].objects.append(obj_id)
        else:
            logger.warning("object_unplaced", id=obj_id, location=item.location)
            item.location = None


def _check_references(world: World) -> None:
    if world.player.location not in world.rooms:
        raise WorldLoadError(
            f"Player starts in unknown room {world.player.location!r}"
        )
    for room in world.rooms.values():
        for direction, destination in room.exits.items():
            if destination not in world.rooms:
                raise WorldLoadError(
                    f"Room {room.id!r} exit {direction!r} leads to unknown "
                    f"room {destination!r}"
                )
        if room.triggers_event and room.triggers_event not in world.events:
            logger.warning("unknown_reference", kind="event", id=room.triggers_event,
                           holder=room.id)


def build_world(document: Mapping) -> World:
    """Build a World from an already-decoded world document."""
    if not isinstance(document, Mapping):
        raise WorldLoadError("World document must be a mapping")
    for name in REQUIRED_SECTIONS:
        if name not in document:
            raise WorldLoadError(f"World document is missing section {name!r}")

    player = _section(document, "player")
    if "location" not in player:
        raise WorldLoadError("Section 'player' needs a location")

    world = World(
        player=PlayerStart(
            location=player["location"],
            inventory=list(player.get("inventory", [])),
        ),
        flags={k: bool(v) for k, v in _section(document, "flags").items()},
        rooms={k: _parse_room(k, v) for k, v in _section(document, "rooms").items()},
        objects={
            k: _parse_item(k, v) for k, v in _section(document, "objects").items()
        },
        characters={
            k: _parse_character(k, v)
            for k, v in _section(document, "characters").items()
        },
        vocabulary=_parse_vocabulary(_section(document, "vocabulary")),
        events={k: _parse_event(k, v) for k, v in _section(document, "events").items()},
    )

    _place_objects(world)
    _check_references(world)
    return world


def load_world(data_path: Path) -> World:
    """Read a world document from disk and return a populated World."""
    try:
        with open(data_path, encoding="utf-8") as fh:
            document = json.load(fh)
    except json.JSONDecodeError as exc:
        raise WorldLoadError(f"{data_path} is not valid JSON: {exc}") from exc
    return build_world(document)
