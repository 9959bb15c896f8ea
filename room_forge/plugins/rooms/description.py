"""
Prose + HTML rendering for resolved rooms, doors and keys.

Every function here is a pure read of already-resolved data: the same input
always renders the same text. Functions that have nothing to say return
``None`` (or an empty string for the small "detail" helpers that are spliced
into larger sentences).
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence

from .doors import Door, Key, doors_for_room
from .errors import ConfigError, DomainViolation
from .generator import Room, RoomConfig
from .tables import (
    APPEND_DOORWAY_TYPES, APPEND_ROOM_TYPES, CELL_FEET, HIDDEN_DOOR_TYPES,
    INDICATED_RARITIES, LOCKABLE_DOOR_TYPES, QUANTITIES, RANDOM,
)

logger = logging.getLogger(__name__)

FURNITURE_DETAILS = {
    "minimum": "minimal furnishings",
    "sparse": "sparse furnishings",
    "average": "an assortment of furniture",
    "furnished": "plenty of furniture",
}

_CAMEL_HUMP = re.compile(r"([a-z0-9])([A-Z])")


# ---------------- small text helpers ----------------

def _words(*parts: Optional[str]) -> str:
    return " ".join(p for p in parts if p)


def _article(phrase: str) -> str:
    return "an" if phrase[:1].lower() in "aeiou" else "a"


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def _sentence(text: str) -> str:
    return _capitalize(text) + "."


def _list_sentence(clauses: Sequence[str]) -> str:
    if len(clauses) == 1:
        return _sentence(clauses[0])
    if len(clauses) == 2:
        return _sentence(" and ".join(clauses))
    return _sentence(", ".join(clauses[:-1]) + ", and " + clauses[-1])


# ---------------- labels / details ----------------

def room_type_label(room_type: str) -> str:
    """``"great_hall"`` / ``"greatHall"`` -> ``"great hall"``; ``"throne"`` -> ``"throne room"``."""
    label = " ".join(_CAMEL_HUMP.sub(r"\1 \2", room_type).replace("_", " ").lower().split())
    if room_type in APPEND_ROOM_TYPES:
        label = f"{label} room"
    return label


def content_rarity_detail(rarity: Optional[str]) -> str:
    if rarity == RANDOM:
        return ""
    if rarity in INDICATED_RARITIES:
        return rarity
    return "ordinary"


def furniture_detail(quantity: Optional[str]) -> str:
    if quantity in (None, "none", RANDOM):
        return ""
    try:
        return FURNITURE_DETAILS[quantity]
    except KeyError:
        raise DomainViolation(f'invalid room_furniture_quantity "{quantity}" in furniture_detail()') from None


def key_detail(door_type: str) -> str:
    if door_type == "mechanical":
        return "Mechanical leaver"
    if door_type in LOCKABLE_DOOR_TYPES:
        return f"{_capitalize(door_type)} key"
    return "Key"


def room_dimensions_description(width: int, height: int) -> str:
    return f"{width * CELL_FEET} x {height * CELL_FEET} feet"


# ---------------- room sentences ----------------

def room_description(config: RoomConfig) -> str:
    """Topical sentence: size, emptiness, type and (unless average) condition."""
    size = config.room_size if config.room_size != RANDOM else None
    if size == "medium":
        size = "medium sized"

    empty = "empty" if config.item_quantity == "zero" else None
    noun = room_type_label(config.room_type) if config.room_type else "room"
    phrase = _words(size, empty, noun)

    text = f"you enter {_article(phrase)} {phrase}"
    if config.room_condition and config.room_condition not in ("average", RANDOM):
        text += f" in {config.room_condition} condition"
    return _sentence(text)


def content_description(config: RoomConfig) -> Optional[str]:
    if not config.room_type:
        raise ConfigError("room_type is required in content_description()")
    if config.item_quantity is None:
        raise ConfigError("item_quantity is required in content_description()")
    if config.item_quantity not in QUANTITIES:
        raise DomainViolation(f'invalid item_quantity "{config.item_quantity}" in content_description()')

    quantity = config.item_quantity
    if quantity == "zero":
        return None

    room = room_type_label(config.room_type)
    rarity = content_rarity_detail(config.item_rarity)

    if quantity == "one":
        text = _words("a single", rarity, "item lies within the", room)
    elif quantity == "couple":
        text = _words("a couple of", rarity, "items can be found in the", room)
    elif quantity == "several":
        text = _words("several", rarity, "items are scattered about the", room)
    elif quantity == "numerous":
        text = _words("numerous", rarity, "items fill the", room)
    else:
        text = _words("the", room, "is cluttered with an abundance of", rarity, "items")

    furniture = furniture_detail(config.room_furniture_quantity)
    if furniture:
        text += f", along with {furniture}"
    return _sentence(text)


def item_condition_description(config: RoomConfig) -> Optional[str]:
    quantity = config.item_quantity
    condition = config.item_condition
    if not quantity or quantity == "zero":
        return None
    if condition in (None, "average", RANDOM):
        return None
    if quantity == "one":
        return f"The item is in {condition} condition."
    return f"The items are in {condition} condition."


# ---------------- doors ----------------

def doorway_description(door: Door) -> str:
    """Noun phrase for a single doorway, e.g. ``"double wide locked iron doorway"``."""
    if door.locked and door.type not in LOCKABLE_DOOR_TYPES:
        raise ConfigError(
            f'invalid locked setting for non-lockable door type "{door.type}" in doorway_description()'
        )

    append_doorway = door.type in APPEND_DOORWAY_TYPES

    size = None
    if door.size == 2:
        size = "double wide" if append_doorway else "wide"
    elif door.size == 3:
        size = "large"
    elif door.size > 3:
        size = "massive"

    return _words(
        size,
        "locked" if door.locked else None,
        door.type,
        "doorway" if append_doorway else None,
    )


def room_doorway_description(doors: Iterable[Door], room_number: Optional[int]) -> Optional[str]:
    """
    Narrative sentence listing the ways out of a room. Secret and concealed
    doors are left out; if nothing else remains there is nothing to say.
    """
    if room_number is None:
        raise ConfigError("room_number is required in room_doorway_description()")

    connected = doors_for_room(doors, room_number)
    if not connected:
        raise ConfigError("invalid door connections for room_number in room_doorway_description()")

    clauses: List[str] = []
    for door in connected:
        if door.type in HIDDEN_DOOR_TYPES:
            continue

        leg = door.connections[room_number]
        if leg.leads_outside and len(door.connections) > 1:
            logger.warning(
                "Exterior door from room %s carries %d connection legs; expected one",
                room_number, len(door.connections),
            )

        clause = f"{doorway_description(door)} leads {leg.direction}"
        if leg.leads_outside:
            clause += " out of the dungeon"
        clauses.append(clause)

    if not clauses:
        return None

    if len(clauses) == 1:
        clauses = [f"single {clauses[0]}"]

    return _list_sentence([f"{_article(c)} {c}" for c in clauses])


def doorway_list(doors: Iterable[Door], room_number: int) -> str:
    """GM reference list of every doorway in the room, hidden ones in bold."""
    items: List[str] = []
    for door in doors_for_room(doors, room_number):
        leg = door.connections[room_number]
        direction = _capitalize(leg.direction)

        if leg.leads_outside:
            text = f"{direction} leading out of the dungeon"
        else:
            text = f"{direction} to Room {leg.to}"
        text += f" (<em>{door.type}</em>)"

        if door.type in HIDDEN_DOOR_TYPES:
            text = f"<strong>{text}</strong>"
        items.append(f"<li>{text}</li>")

    return f"<h3>Doorways ({len(items)})</h3><ul>{''.join(items)}</ul>"


def key_description(keys: Sequence[Key]) -> str:
    items: List[str] = []
    for key in keys:
        rooms = list(key.connections)
        if len(rooms) < 2:
            raise ConfigError("a key must join two rooms in key_description()")
        items.append(f"<li>{key_detail(key.type)} to room {rooms[0]} / {rooms[1]}</li>")

    return f"<h3>Keys ({len(items)})</h3><ul>{''.join(items)}</ul>"


def map_description() -> str:
    return "<h3>Map</h3><ul><li>Dungeon map</li></ul>"


# ---------------- full room ----------------

def room_title(room: Room) -> str:
    settings = room.settings
    title = "Room"
    if settings.room_count and settings.room_count > 1 and room.room_number is not None:
        title += f" {room.room_number}"
    if settings.room_type and settings.room_type != "room":
        title += f" - {room_type_label(settings.room_type).title()}"
    return title


def room_body_text(room: Room, doors: Optional[Sequence[Door]] = None) -> str:
    """The prose paragraph of a room, without markup."""
    settings = room.settings
    sentences = [
        room_description(settings),
        content_description(settings),
        item_condition_description(settings),
    ]
    if doors is not None and room.room_number is not None:
        sentences.append(room_doorway_description(doors, room.room_number))

    return " ".join(s for s in sentences if s)


def room_description_full(room: Room, doors: Optional[Sequence[Door]] = None) -> str:
    header = f"<h2>{room_title(room)}</h2>"
    if room.size:
        width, height = room.size
        header += f"<span>{room_dimensions_description(width, height)}</span>"

    body = room_body_text(room, doors)
    return f"<header>{header}</header><h3>Description</h3><p>{body}</p>"
