"""Tests for room_forge.plugins.rooms.exports."""

import json

from room_forge.plugins.rooms.doors import OUTSIDE, Connection, Door
from room_forge.plugins.rooms.exports import (
    rooms_to_html, rooms_to_markdown, rooms_to_payload, write_session_pack,
)
from room_forge.plugins.rooms.generator import Room, RoomConfig


def make_rooms():
    settings = RoomConfig(room_count=2, room_type="study", room_size="small",
                          room_condition="good", item_quantity="one", item_rarity="rare")
    return [Room(settings, room_number=1, size=(2, 3)), Room(settings, room_number=2)]


DOORS = [Door(type="archway", connections={1: Connection("south", OUTSIDE)})]


class TestRoomsToHtml:
    def test_one_section_per_room(self) -> None:
        html = rooms_to_html(make_rooms())
        assert html.count("<section>") == 2
        assert "<h2>Room 1 - Study</h2>" in html
        assert "<span>10 x 15 feet</span>" in html

    def test_doors_only_spoken_for_connected_rooms(self) -> None:
        html = rooms_to_html(make_rooms(), DOORS)
        assert html.count("out of the dungeon") == 1


class TestRoomsToMarkdown:
    def test_empty(self) -> None:
        assert rooms_to_markdown([]) == "(No rooms generated)"

    def test_headings_and_prose(self) -> None:
        text = rooms_to_markdown(make_rooms(), DOORS)
        assert "## Room 1 - Study" in text
        assert "*10 x 15 feet*" in text
        assert "A single rare item lies within the study." in text
        assert "An archway leads south out of the dungeon." not in text
        assert "A single archway leads south out of the dungeon." in text
        assert "<" not in text


class TestRoomsToPayload:
    def test_payload(self) -> None:
        payload = rooms_to_payload(make_rooms(), seed=42)
        assert payload["version"] == 1
        assert payload["seed"] == 42
        assert payload["rooms"][0]["settings"]["room_type"] == "study"
        assert payload["rooms"][1]["room_number"] == 2
        json.dumps(payload)


class TestWriteSessionPack:
    def test_writes_all_files(self, ctx) -> None:
        pack_dir = write_session_pack(ctx, make_rooms(), DOORS, title="Crypt Level", seed=7)
        assert pack_dir.parent == ctx.project_dir / "exports" / "session_packs"
        assert pack_dir.name.endswith("_crypt-level_seed7")

        html = (pack_dir / "rooms.html").read_text(encoding="utf-8")
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Crypt Level</title>" in html
        assert "<h2>Room 2 - Study</h2>" in html

        assert (pack_dir / "rooms.md").read_text(encoding="utf-8").startswith("## Room 1")
        data = json.loads((pack_dir / "rooms.json").read_text(encoding="utf-8"))
        assert data["seed"] == 7
        assert len(data["rooms"]) == 2
