from __future__ import annotations

from room_forge.core.plugin_api import PluginMeta
from .ui import DungeonGeneratorWidget


class DungeonGeneratorPlugin:
    meta = PluginMeta(
        plugin_id="dungeon",
        name="Dungeon Generator",
        version="0.2.0",
        author="Room Forge",
        description="Sizes a dungeon by complexity, furnishes every room and renders the dungeon key.",
        category="Generators",
    )

    def create_widget(self, ctx):
        return DungeonGeneratorWidget(ctx)

    # The widget carries its own state
    def serialize_state(self):
        return {}

    def load_state(self, state):
        return


def load_plugin():
    return DungeonGeneratorPlugin()
