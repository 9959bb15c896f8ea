"""Tests for room_forge.plugins.rooms.doors."""

import pytest

from room_forge.plugins.rooms.doors import (
    OUTSIDE, Connection, Door, doors_for_room, is_connected, keys_for_doors, validate_door,
)
from room_forge.plugins.rooms.errors import ConfigError, DomainViolation


def interior(door_type="wooden", a=1, b=2, **kwargs) -> Door:
    return Door(
        type=door_type,
        connections={a: Connection("south", b), b: Connection("north", a)},
        **kwargs,
    )


def exterior(door_type="archway", room=3) -> Door:
    return Door(type=door_type, connections={room: Connection("west", OUTSIDE)})


class TestConnections:
    def test_outside_is_not_a_room_number(self) -> None:
        assert OUTSIDE < 1

    def test_leads_outside(self) -> None:
        assert Connection("north", OUTSIDE).leads_outside
        assert not Connection("north", 4).leads_outside

    def test_is_connected(self) -> None:
        door = interior()
        assert is_connected(door, 1)
        assert is_connected(door, 2)
        assert not is_connected(door, 3)

    def test_doors_for_room(self) -> None:
        a, b = interior(a=1, b=2), interior(a=2, b=3)
        assert doors_for_room([a, b], 1) == [a]
        assert doors_for_room([a, b], 2) == [a, b]
        assert doors_for_room([a, b], 9) == []


class TestValidateDoor:
    def test_interior_door_ok(self) -> None:
        validate_door(interior(locked=True, size=2))

    def test_exterior_door_ok(self) -> None:
        validate_door(exterior())

    def test_unknown_type(self) -> None:
        with pytest.raises(DomainViolation):
            validate_door(interior(door_type="glass"))

    def test_locked_archway(self) -> None:
        with pytest.raises(ConfigError, match="non-lockable"):
            validate_door(interior(door_type="archway", locked=True))

    def test_zero_size(self) -> None:
        with pytest.raises(ConfigError):
            validate_door(interior(size=0))

    def test_bad_direction(self) -> None:
        door = Door(type="hole", connections={1: Connection("up", 2), 2: Connection("down", 1)})
        with pytest.raises(DomainViolation):
            validate_door(door)

    def test_legs_must_point_at_each_other(self) -> None:
        door = Door(type="hole", connections={1: Connection("south", 2), 2: Connection("north", 3)})
        with pytest.raises(ConfigError, match="do not point at each other"):
            validate_door(door)

    def test_legs_must_face_opposite_ways(self) -> None:
        door = Door(type="archway", connections={1: Connection("north", 2), 2: Connection("north", 1)})
        with pytest.raises(ConfigError, match="not opposite ways"):
            validate_door(door)

    def test_east_west_legs_ok(self) -> None:
        validate_door(Door(type="archway", connections={1: Connection("east", 2), 2: Connection("west", 1)}))

    def test_interior_door_needs_two_legs(self) -> None:
        with pytest.raises(ConfigError, match="exactly two"):
            validate_door(Door(type="hole", connections={1: Connection("south", 2)}))

    def test_exterior_door_with_partner_leg_rejected(self) -> None:
        door = Door(type="passageway", connections={
            4: Connection("south", OUTSIDE),
            5: Connection("north", 4),
        })
        with pytest.raises(ConfigError, match="exactly one"):
            validate_door(door)

    def test_outside_cannot_own_a_leg(self) -> None:
        door = Door(type="hole", connections={OUTSIDE: Connection("south", 2), 2: Connection("north", OUTSIDE)})
        with pytest.raises(ConfigError):
            validate_door(door)


class TestKeysForDoors:
    def test_one_key_per_locked_door(self) -> None:
        doors = [interior(locked=True), interior(a=2, b=3), interior("iron", a=3, b=4, locked=True)]
        keys = keys_for_doors(doors)
        assert [k.type for k in keys] == ["wooden", "iron"]
        assert list(keys[1].connections) == [3, 4]

    def test_no_locked_doors(self) -> None:
        assert keys_for_doors([interior(), exterior()]) == []

    def test_locked_exterior_door_has_no_key(self) -> None:
        locked_exit = Door(type="wooden", connections={1: Connection("south", OUTSIDE)}, locked=True)
        validate_door(locked_exit)
        assert keys_for_doors([locked_exit, interior("iron", locked=True)])[0].type == "iron"
        assert keys_for_doors([locked_exit]) == []
