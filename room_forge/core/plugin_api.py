from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, Dict, Any
from PySide6.QtWidgets import QWidget
from .context import ForgeContext

@dataclass(frozen=True)
class PluginMeta:
    plugin_id: str          # stable id, e.g. "rooms"
    name: str               # display name, e.g. "Room Generator"
    version: str = "0.1.0"
    author: str = "Room Forge"
    description: str = ""
    category: str = "Generators"

class ForgePlugin(Protocol):
    """
    What every generator package exposes from its plugin.py.
    The widget owns its own state; the plugin only builds it.
    """
    meta: PluginMeta

    def create_widget(self, ctx: ForgeContext) -> QWidget:
        ...

    def serialize_state(self) -> Dict[str, Any]:
        ...

    def load_state(self, state: Dict[str, Any]) -> None:
        ...
