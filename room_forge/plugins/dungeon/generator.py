from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence, Tuple
import logging
import random

# Dungeons are made of the same rooms, doors and descriptions the rooms plugin
# produces; only the dungeon-level sizing lives here.
from room_forge.plugins.rooms.contents import generate_item_set
from room_forge.plugins.rooms.description import (
    doorway_list, key_description, map_description, room_description_full,
)
from room_forge.plugins.rooms.doors import Door, Key, doors_for_room, keys_for_doors, validate_door
from room_forge.plugins.rooms.errors import ConfigError
from room_forge.plugins.rooms.generator import (
    DEFAULT_RNG, DungeonConfig, ItemGenerator, ResolverOptions, Room, generate_rooms,
)

logger = logging.getLogger(__name__)

COMPLEXITY_ROOM_COUNT_MULTIPLIER = 6
COMPLEXITY_MULTIPLIER_MIN_XY = 5
COMPLEXITY_MULTIPLIER_MAX_XY = 6

# (rooms, grid width, grid height, rng) -> (placed rooms, doors)
MapLayout = Callable[[List[Room], int, int, random.Random], Tuple[List[Room], List[Door]]]


@dataclass(frozen=True)
class Dungeon:
    width: int
    height: int
    rooms: Tuple[Room, ...]
    doors: Tuple[Door, ...] = ()
    keys: Tuple[Key, ...] = ()


def max_room_count(complexity: int) -> int:
    return complexity * COMPLEXITY_ROOM_COUNT_MULTIPLIER


def map_dimensions(complexity: int, rng: Optional[random.Random] = None) -> Tuple[int, int]:
    rng = rng or DEFAULT_RNG
    lo = complexity * COMPLEXITY_MULTIPLIER_MIN_XY
    hi = complexity * COMPLEXITY_MULTIPLIER_MAX_XY
    return rng.randint(lo, hi), rng.randint(lo, hi)


def number_rooms(rooms: Sequence[Room], width: int, height: int, rng: random.Random) -> Tuple[List[Room], List[Door]]:
    """Fallback layout: number the rooms in order and place no doors."""
    return [replace(room, room_number=i) for i, room in enumerate(rooms, start=1)], []


def generate_dungeon(
    config: DungeonConfig,
    options: Optional[ResolverOptions] = None,
    rng: Optional[random.Random] = None,
    item_generator: Optional[ItemGenerator] = None,
    layout: Optional[MapLayout] = None,
) -> Dungeon:
    """
    Size a dungeon from its complexity, generate its rooms and hand them to the
    map layout for placement. Doors coming back from the layout are validated
    before keys are cut for the locked ones.
    """
    if not config.dungeon_complexity:
        raise ConfigError("dungeon_complexity is required in generate_dungeon()")

    rng = rng or DEFAULT_RNG
    complexity = int(config.dungeon_complexity)

    sized = replace(config, room_count=max_room_count(complexity))
    rooms = generate_rooms(sized, options, rng, item_generator or generate_item_set)

    width, height = map_dimensions(complexity, rng)
    placed, doors = (layout or number_rooms)(rooms, width, height, rng)

    for door in doors:
        validate_door(door)

    dungeon = Dungeon(
        width=width,
        height=height,
        rooms=tuple(placed),
        doors=tuple(doors),
        keys=tuple(keys_for_doors(doors)),
    )
    logger.debug(
        "Generated dungeon %dx%d rooms=%d doors=%d keys=%d",
        width, height, len(dungeon.rooms), len(dungeon.doors), len(dungeon.keys),
    )
    return dungeon


def dungeon_description(dungeon: Dungeon) -> str:
    """Whole-dungeon HTML: map, every room (with its doorways), then keys."""
    parts = [f"<section>{map_description()}</section>"]

    doors = list(dungeon.doors)
    for room in dungeon.rooms:
        room_doors = doors_for_room(doors, room.room_number) if room.room_number is not None else []
        html = room_description_full(room, room_doors or None)
        if room_doors:
            html += doorway_list(room_doors, room.room_number)
        parts.append(f"<section>{html}</section>")

    if dungeon.keys:
        parts.append(f"<section>{key_description(dungeon.keys)}</section>")
    return "\n".join(parts)
