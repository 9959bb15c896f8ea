from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
import json

from .description import (
    room_body_text, room_description_full, room_dimensions_description, room_title,
)
from .doors import Door, doors_for_room
from .generator import Room


def _room_doors(room: Room, doors: Optional[Sequence[Door]]) -> Optional[List[Door]]:
    # Rooms the layout left without doors get no doorway sentence.
    if not doors or room.room_number is None:
        return None
    return doors_for_room(doors, room.room_number) or None


def rooms_to_html(rooms: Sequence[Room], doors: Optional[Sequence[Door]] = None) -> str:
    return "\n".join(
        f"<section>{room_description_full(room, _room_doors(room, doors))}</section>" for room in rooms
    )


def rooms_to_markdown(rooms: Sequence[Room], doors: Optional[Sequence[Door]] = None) -> str:
    """Plain-text room key: one heading per room followed by its prose."""
    lines: List[str] = []
    for room in rooms:
        lines.append(f"## {room_title(room)}")
        if room.size:
            lines.append(f"*{room_dimensions_description(*room.size)}*")
        lines.append("")
        lines.append(room_body_text(room, _room_doors(room, doors)))
        lines.append("")
    return "\n".join(lines).rstrip() if lines else "(No rooms generated)"


def rooms_to_payload(rooms: Sequence[Room], *, seed: Optional[int] = None) -> Dict[str, Any]:
    return {
        "version": 1,
        "seed": seed,
        "rooms": [asdict(room) for room in rooms],
    }


def write_session_pack(
    ctx,
    rooms: Sequence[Room],
    doors: Optional[Sequence[Door]] = None,
    *,
    title: str = "rooms",
    seed: Optional[int] = None,
) -> Path:
    """
    Writes a room session pack:
      - rooms.html (full descriptions)
      - rooms.md (plain-text key)
      - rooms.json (resolved settings + item sets)
    """
    em = ctx.export_manager
    pack_dir = em.create_session_pack(title, seed=seed)

    em.write_html(pack_dir, "rooms.html", title, rooms_to_html(rooms, doors))
    em.write_markdown(pack_dir, "rooms.md", rooms_to_markdown(rooms, doors))
    em.write_text(pack_dir, "rooms.json", json.dumps(rooms_to_payload(rooms, seed=seed), indent=2))
    return pack_dir
