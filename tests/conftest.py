import random

import pytest

from room_forge.core.context import ForgeContext
from room_forge.plugins.rooms.generator import RoomConfig

SEED = 20240607


@pytest.fixture
def rng():
    """Seeded source so every random draw in a test is reproducible."""
    return random.Random(SEED)


@pytest.fixture
def ctx(tmp_path):
    """A context pointed at a fresh project folder; log lines are kept on ctx.lines."""
    lines = []
    c = ForgeContext(log=lines.append)
    c.lines = lines
    c.set_project_dir(tmp_path / "project")
    return c


@pytest.fixture
def room_config():
    return RoomConfig(
        item_condition="average",
        item_quantity="zero",
        item_rarity="exotic",
        item_type="treasure",
        room_condition="average",
        room_count=1,
        room_furniture_quantity="none",
        room_size="medium",
        room_type="room",
    )


@pytest.fixture
def random_config():
    return RoomConfig(
        item_condition="random",
        item_quantity="random",
        item_rarity="random",
        item_type="random",
        room_condition="random",
        room_count=1,
        room_furniture_quantity="random",
        room_size="random",
        room_type="random",
    )
