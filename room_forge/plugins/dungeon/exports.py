from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional
import json

from room_forge.plugins.rooms.exports import rooms_to_markdown
from .generator import Dungeon, dungeon_description


def dungeon_to_payload(dungeon: Dungeon, *, seed: Optional[int] = None) -> Dict[str, Any]:
    return {
        "version": 1,
        "seed": seed,
        "width": dungeon.width,
        "height": dungeon.height,
        "rooms": [asdict(room) for room in dungeon.rooms],
        "doors": [asdict(door) for door in dungeon.doors],
        "keys": [asdict(key) for key in dungeon.keys],
    }


def write_dungeon_pack(ctx, dungeon: Dungeon, *, title: str = "dungeon", seed: Optional[int] = None) -> Path:
    """
    Writes a dungeon session pack:
      - dungeon.html (map stub, rooms, keys)
      - dungeon.md (room key as plain text)
      - dungeon.json (everything generated)
    """
    em = ctx.export_manager
    pack_dir = em.create_session_pack(title, seed=seed)

    em.write_html(pack_dir, "dungeon.html", title, dungeon_description(dungeon))
    em.write_markdown(pack_dir, "dungeon.md", rooms_to_markdown(dungeon.rooms, dungeon.doors))
    em.write_text(pack_dir, "dungeon.json", json.dumps(dungeon_to_payload(dungeon, seed=seed), indent=2))
    return pack_dir
