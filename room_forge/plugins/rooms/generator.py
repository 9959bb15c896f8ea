from __future__ import annotations
from dataclasses import dataclass, asdict, field, fields, replace
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging
import random

from .contents import ItemSet, generate_item_set
from .errors import ConfigError, DomainViolation
from .tables import (
    CONDITIONS, FIELD_DOMAINS, FURNITURE_QUANTITIES, ITEM_TYPES, QUANTITIES,
    RANDOM, RARITIES, ROOM_TYPES, ROOM_TYPE_SIZES,
)

logger = logging.getLogger(__name__)

# Process-wide source used whenever a caller does not hand in its own rng.
DEFAULT_RNG = random.Random()

REQUIRED_ROOM_FIELDS = ("room_condition", "room_count", "room_size", "room_type")


@dataclass(frozen=True)
class RoomConfig:
    item_condition: Optional[str] = None
    item_quantity: Optional[str] = None
    item_rarity: Optional[str] = None
    item_type: Optional[str] = None
    room_condition: Optional[str] = None
    room_count: Optional[int] = None
    room_furniture_quantity: Optional[str] = None
    room_size: Optional[str] = None
    room_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in (data or {}).items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DungeonConfig(RoomConfig):
    dungeon_complexity: Optional[int] = None
    dungeon_connections: Optional[int] = None
    dungeon_maps: Optional[int] = None
    dungeon_traps: Optional[int] = None


@dataclass(frozen=True)
class ResolverOptions:
    is_random_item_condition_uniform: bool = False
    is_random_item_rarity_uniform: bool = False


@dataclass(frozen=True)
class Room:
    settings: RoomConfig
    item_set: ItemSet = field(default_factory=ItemSet)
    room_number: Optional[int] = None
    size: Optional[Tuple[int, int]] = None  # (width, height) in grid cells


ItemGenerator = Callable[[RoomConfig, random.Random], ItemSet]


def resolver_options_from_settings(settings: Optional[Dict[str, Any]]) -> ResolverOptions:
    """Read the resolver flags out of a project settings dict (``settings["rooms"]``)."""
    section = (settings or {}).get("rooms", {}) or {}
    return ResolverOptions(
        is_random_item_condition_uniform=bool(section.get("is_random_item_condition_uniform", False)),
        is_random_item_rarity_uniform=bool(section.get("is_random_item_rarity_uniform", False)),
    )


def _check_domain(field_name: str, value: Optional[str]) -> None:
    if value is None or value == RANDOM:
        return
    if value not in FIELD_DOMAINS[field_name]:
        raise DomainViolation(f'invalid {field_name} "{value}"')


def _roll(rng: random.Random, value: Optional[str], domain) -> Optional[str]:
    if value == RANDOM:
        return rng.choice(domain)
    return value


def roll_room_type(room_type: Optional[str], rng: Optional[random.Random] = None) -> Optional[str]:
    return _roll(rng or DEFAULT_RNG, room_type, ROOM_TYPES)


def roll_room_size(room_type: str, rng: Optional[random.Random] = None) -> str:
    """Pick a size that makes sense for the (already resolved) room type."""
    sizes = ROOM_TYPE_SIZES.get(room_type)
    if not sizes:
        raise DomainViolation(f'invalid room_type "{room_type}" in roll_room_size()')
    return (rng or DEFAULT_RNG).choice(sizes)


def resolve_room_config(
    config: RoomConfig,
    options: Optional[ResolverOptions] = None,
    rng: Optional[random.Random] = None,
) -> RoomConfig:
    """
    Replace "random" placeholders with concrete values.

    Explicit values pass through untouched. A random item condition or rarity
    is rolled once here only when its uniform flag is set; otherwise it stays
    "random" and the item generator rolls it for each item. Works for
    DungeonConfig too; the dungeon fields are carried over as-is.
    """
    options = options or ResolverOptions()
    rng = rng or DEFAULT_RNG

    for name in FIELD_DOMAINS:
        _check_domain(name, getattr(config, name))

    item_condition = config.item_condition
    if options.is_random_item_condition_uniform:
        item_condition = _roll(rng, item_condition, CONDITIONS)

    item_rarity = config.item_rarity
    if options.is_random_item_rarity_uniform:
        item_rarity = _roll(rng, item_rarity, RARITIES)

    room_type = roll_room_type(config.room_type, rng)

    room_size = config.room_size
    if room_size == RANDOM:
        if room_type is None:
            raise ConfigError("room_type is required to roll a random room_size")
        room_size = roll_room_size(room_type, rng)

    item_quantity = _roll(rng, config.item_quantity, QUANTITIES)
    if room_type == "hallway" and item_quantity == "numerous":
        # A hallway has no room for more than a handful of things.
        item_quantity = "several"

    resolved = replace(
        config,
        item_condition=item_condition,
        item_quantity=item_quantity,
        item_rarity=item_rarity,
        item_type=_roll(rng, config.item_type, ITEM_TYPES),
        room_condition=_roll(rng, config.room_condition, CONDITIONS),
        room_furniture_quantity=_roll(rng, config.room_furniture_quantity, FURNITURE_QUANTITIES),
        room_size=room_size,
        room_type=room_type,
    )
    logger.debug("Resolved room config %s -> %s", config, resolved)
    return resolved


def generate_rooms(
    config: RoomConfig,
    options: Optional[ResolverOptions] = None,
    rng: Optional[random.Random] = None,
    item_generator: Optional[ItemGenerator] = None,
) -> List[Room]:
    """Resolve ``room_count`` independent rooms and fill each with an item set."""
    for name in REQUIRED_ROOM_FIELDS:
        if getattr(config, name, None) is None:
            raise ConfigError(f"{name} is required in generate_rooms()")

    rng = rng or DEFAULT_RNG
    item_generator = item_generator or generate_item_set

    rooms: List[Room] = []
    for _ in range(int(config.room_count)):
        settings = resolve_room_config(config, options, rng)
        rooms.append(Room(settings=settings, item_set=item_generator(settings, rng)))

    logger.debug("Generated %d rooms", len(rooms))
    return rooms
