from __future__ import annotations
import importlib
import logging
import pkgutil
from dataclasses import dataclass
from typing import List, Optional

from .plugin_api import ForgePlugin

logger = logging.getLogger(__name__)

@dataclass
class LoadedPlugin:
    package: str  # dotted name of the plugin package
    plugin: ForgePlugin

class PluginManager:
    """
    Imports every generator package under `plugins_pkg` that ships a
    `plugin.py` with load_plugin(). Import problems are kept in `failures`
    so the main window can show them in its log.
    """
    def __init__(self, plugins_pkg: str | None = None):
        base_pkg = __package__.split(".")[0]  # "room_forge"
        self.plugins_pkg = plugins_pkg or f"{base_pkg}.plugins"
        self._loaded: List[LoadedPlugin] = []
        self.failures: List[str] = []

    def discover_and_load(self) -> List[LoadedPlugin]:
        self._loaded.clear()
        self.failures.clear()

        pkg = importlib.import_module(self.plugins_pkg)
        for mod in pkgutil.iter_modules(pkg.__path__, pkg.__name__ + "."):
            # Only packages (folders) are plugins
            if not mod.ispkg:
                continue

            plugin_module_name = mod.name + ".plugin"
            try:
                plugin_mod = importlib.import_module(plugin_module_name)
            except ImportError as e:
                self._fail(f"Failed to import {plugin_module_name}: {e}")
                continue

            if not hasattr(plugin_mod, "load_plugin"):
                self._fail(f"{plugin_module_name} has no load_plugin()")
                continue

            self._loaded.append(LoadedPlugin(package=mod.name, plugin=plugin_mod.load_plugin()))

        # Stable ordering: category then name
        self._loaded.sort(key=lambda lp: (lp.plugin.meta.category, lp.plugin.meta.name))
        return list(self._loaded)

    def _fail(self, msg: str) -> None:
        logger.warning("[PluginManager] %s", msg)
        self.failures.append(msg)

    @property
    def loaded(self) -> List[LoadedPlugin]:
        return list(self._loaded)

    def get_by_id(self, plugin_id: str) -> Optional[LoadedPlugin]:
        for lp in self._loaded:
            if lp.plugin.meta.plugin_id == plugin_id:
                return lp
        return None
