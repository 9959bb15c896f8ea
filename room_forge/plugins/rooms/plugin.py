from __future__ import annotations

from room_forge.core.plugin_api import PluginMeta
from .ui import RoomGeneratorWidget


class RoomGeneratorPlugin:
    meta = PluginMeta(
        plugin_id="rooms",
        name="Room Generator",
        version="1.0.0",
        author="Room Forge",
        description="Furnishes rooms from partially random settings and describes them in prose.",
        category="Generators",
    )

    def create_widget(self, ctx):
        return RoomGeneratorWidget(ctx)

    # The widget carries its own state
    def serialize_state(self):
        return {}

    def load_state(self, state):
        return


def load_plugin():
    return RoomGeneratorPlugin()
