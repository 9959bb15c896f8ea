from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .errors import ConfigError, DomainViolation
from .tables import DIRECTIONS, DOOR_TYPES, LOCKABLE_DOOR_TYPES, OPPOSITE_DIRECTIONS

# Connection target for the dungeon exterior. Room numbers start at 1, so this
# can never collide with a real room.
OUTSIDE = 0


@dataclass(frozen=True)
class Connection:
    direction: str  # compass heading from the owning room
    to: int         # room number or OUTSIDE

    @property
    def leads_outside(self) -> bool:
        return self.to == OUTSIDE


@dataclass(frozen=True)
class Door:
    """
    A doorway as produced by map layout.

    ``connections`` is keyed by room number; each value is that room's view of
    the door. Interior doors carry two legs, exterior doors a single leg whose
    target is OUTSIDE.
    """
    type: str
    connections: Dict[int, Connection] = field(default_factory=dict)
    size: int = 1
    locked: bool = False


@dataclass(frozen=True)
class Key:
    type: str
    connections: Dict[int, Connection] = field(default_factory=dict)


def is_connected(door: Door, room_number: int) -> bool:
    return room_number in door.connections


def doors_for_room(doors: Iterable[Door], room_number: int) -> List[Door]:
    return [door for door in doors if is_connected(door, room_number)]


def validate_door(door: Door) -> None:
    """Raise if the door breaks a structural invariant of the door model."""
    if door.type not in DOOR_TYPES:
        raise DomainViolation(f'invalid door type "{door.type}"')
    if door.size < 1:
        raise ConfigError(f"invalid door size {door.size}")
    if door.locked and door.type not in LOCKABLE_DOOR_TYPES:
        raise ConfigError(f'invalid locked setting for non-lockable door type "{door.type}"')

    legs = door.connections
    for room_number, leg in legs.items():
        if leg.direction not in DIRECTIONS:
            raise DomainViolation(f'invalid direction "{leg.direction}" for room {room_number}')
        if room_number == OUTSIDE:
            raise ConfigError("OUTSIDE cannot own a connection leg")

    outside_legs = [leg for leg in legs.values() if leg.leads_outside]
    if outside_legs:
        if len(legs) != 1:
            raise ConfigError(f"exterior door must have exactly one connection leg, found {len(legs)}")
        return

    if len(legs) != 2:
        raise ConfigError(f"interior door must have exactly two connection legs, found {len(legs)}")
    (a, leg_a), (b, leg_b) = legs.items()
    if leg_a.to != b or leg_b.to != a:
        raise ConfigError(f"door legs for rooms {a} and {b} do not point at each other")
    if leg_b.direction != OPPOSITE_DIRECTIONS[leg_a.direction]:
        raise ConfigError(
            f"door legs for rooms {a} and {b} face {leg_a.direction} and {leg_b.direction}, not opposite ways"
        )


def is_interior(door: Door) -> bool:
    return len(door.connections) == 2 and not any(leg.leads_outside for leg in door.connections.values())


def keys_for_doors(doors: Iterable[Door]) -> List[Key]:
    """One key per locked interior door, joining the same two rooms as the door."""
    return [
        Key(type=door.type, connections=dict(door.connections))
        for door in doors
        if door.locked and is_interior(door)
    ]
