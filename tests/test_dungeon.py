"""Tests for room_forge.plugins.dungeon."""

from dataclasses import replace
import json

import pytest

from room_forge.plugins.dungeon.exports import dungeon_to_payload, write_dungeon_pack
from room_forge.plugins.dungeon.generator import (
    COMPLEXITY_MULTIPLIER_MAX_XY, COMPLEXITY_MULTIPLIER_MIN_XY, Dungeon, dungeon_description,
    generate_dungeon, map_dimensions, max_room_count, number_rooms,
)
from room_forge.plugins.rooms.doors import OUTSIDE, Connection, Door
from room_forge.plugins.rooms.errors import ConfigError, DomainViolation
from room_forge.plugins.rooms.generator import DungeonConfig, Room

CONFIG = DungeonConfig(
    dungeon_complexity=2,
    item_condition="random",
    item_quantity="random",
    item_rarity="random",
    item_type="random",
    room_condition="random",
    room_furniture_quantity="random",
    room_size="random",
    room_type="random",
)


def corridor_layout(rooms, width, height, rng):
    """Rooms in a row, each joined to the next, the first one open to the outside."""
    placed = [replace(room, room_number=i, size=(3, 2)) for i, room in enumerate(rooms, start=1)]
    doors = [Door("archway", {1: Connection("west", OUTSIDE)})]
    for a in range(1, len(placed)):
        b = a + 1
        doors.append(Door(
            "iron",
            {a: Connection("east", b), b: Connection("west", a)},
            locked=(a == 1),
        ))
    return placed, doors


class TestSizing:
    def test_max_room_count(self) -> None:
        assert max_room_count(3) == 18

    @pytest.mark.parametrize("complexity", [1, 2, 5, 10])
    def test_map_dimensions(self, complexity, rng) -> None:
        w, h = map_dimensions(complexity, rng)
        lo, hi = complexity * COMPLEXITY_MULTIPLIER_MIN_XY, complexity * COMPLEXITY_MULTIPLIER_MAX_XY
        assert lo <= w <= hi
        assert lo <= h <= hi


class TestNumberRooms:
    def test_numbers_from_one_without_doors(self, room_config, rng) -> None:
        rooms, doors = number_rooms([Room(room_config)] * 3, 10, 12, rng)
        assert [r.room_number for r in rooms] == [1, 2, 3]
        assert doors == []


class TestGenerateDungeon:
    def test_requires_complexity(self, rng) -> None:
        with pytest.raises(ConfigError, match="dungeon_complexity is required"):
            generate_dungeon(DungeonConfig(room_type="random"), rng=rng)

    def test_default_layout_numbers_rooms(self, rng) -> None:
        dungeon = generate_dungeon(CONFIG, rng=rng)
        assert len(dungeon.rooms) == 12
        assert [r.room_number for r in dungeon.rooms] == list(range(1, 13))
        assert dungeon.doors == ()
        assert dungeon.keys == ()

    def test_rooms_share_room_count(self, rng) -> None:
        dungeon = generate_dungeon(CONFIG, rng=rng)
        assert {r.settings.room_count for r in dungeon.rooms} == {12}

    def test_layout_doors_and_keys(self, rng) -> None:
        dungeon = generate_dungeon(CONFIG, rng=rng, layout=corridor_layout)
        assert len(dungeon.doors) == 12
        assert len(dungeon.keys) == 1
        assert list(dungeon.keys[0].connections) == [1, 2]

    def test_bad_layout_door_rejected(self, rng) -> None:
        def layout(rooms, width, height, rng):
            return list(rooms), [Door("archway", {1: Connection("north", 2), 2: Connection("south", 1)}, locked=True)]

        with pytest.raises(ConfigError):
            generate_dungeon(CONFIG, rng=rng, layout=layout)

    def test_unknown_door_type_rejected(self, rng) -> None:
        def layout(rooms, width, height, rng):
            return list(rooms), [Door("glass", {1: Connection("north", OUTSIDE)})]

        with pytest.raises(DomainViolation):
            generate_dungeon(CONFIG, rng=rng, layout=layout)


class TestDungeonDescription:
    def test_sections(self, rng) -> None:
        dungeon = generate_dungeon(CONFIG, rng=rng, layout=corridor_layout)
        html = dungeon_description(dungeon)
        assert html.startswith("<section><h3>Map</h3>")
        assert html.count("<h3>Doorways (") == 12
        assert "<h3>Keys (1)</h3>" in html
        assert "<li>Iron key to room 1 / 2</li>" in html
        assert "out of the dungeon" in html
        assert "<span>15 x 10 feet</span>" in html

    def test_no_doors_no_keys(self, rng) -> None:
        html = dungeon_description(generate_dungeon(CONFIG, rng=rng))
        assert "Doorways" not in html
        assert "Keys" not in html

    def test_empty_dungeon(self) -> None:
        assert dungeon_description(Dungeon(width=5, height=5, rooms=())) == (
            "<section><h3>Map</h3><ul><li>Dungeon map</li></ul></section>"
        )


    def test_locked_exterior_door_cuts_no_key(self, rng) -> None:
        def layout(rooms, width, height, rng):
            placed, _ = number_rooms(rooms, width, height, rng)
            return placed, [Door("wooden", {1: Connection("south", OUTSIDE)}, locked=True)]

        dungeon = generate_dungeon(CONFIG, rng=rng, layout=layout)
        assert dungeon.keys == ()
        html = dungeon_description(dungeon)
        assert "locked wooden doorway" in html
        assert "Keys" not in html

class TestDungeonExports:
    def test_payload(self, rng) -> None:
        dungeon = generate_dungeon(CONFIG, rng=rng, layout=corridor_layout)
        payload = dungeon_to_payload(dungeon, seed=3)
        assert payload["width"] == dungeon.width
        assert len(payload["rooms"]) == 12
        assert len(payload["keys"]) == 1
        json.dumps(payload)

    def test_write_pack(self, ctx, rng) -> None:
        dungeon = generate_dungeon(CONFIG, rng=rng, layout=corridor_layout)
        pack_dir = write_dungeon_pack(ctx, dungeon, seed=3)
        assert (pack_dir / "dungeon.html").exists()
        assert (pack_dir / "dungeon.md").read_text(encoding="utf-8").startswith("## Room 1")
        assert json.loads((pack_dir / "dungeon.json").read_text(encoding="utf-8"))["seed"] == 3
