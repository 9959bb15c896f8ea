from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
import hashlib
import json
import random
from typing import Any, Callable, Dict, Optional, Sequence

from .export_manager import ExportManager

DEFAULT_MASTER_SEED = 1337

PROJECT_FILE = "project.json"
PROJECT_SUBDIRS = ("exports", "modules")

# Written into project.json on first load; missing keys are filled in on every load.
DEFAULT_PROJECT_SETTINGS: Dict[str, Any] = {
    "master_seed": DEFAULT_MASTER_SEED,
    "export_subdir": "",
    "rooms": {
        "is_random_item_condition_uniform": False,
        "is_random_item_rarity_uniform": False,
    },
}


def _fill_defaults(target: Dict[str, Any], defaults: Dict[str, Any]) -> None:
    for key, value in defaults.items():
        if isinstance(value, dict):
            section = target.get(key)
            if not isinstance(section, dict):
                section = target[key] = {}
            _fill_defaults(section, value)
        else:
            target.setdefault(key, deepcopy(value))


def _seed_from_parts(parts: Sequence[Any]) -> int:
    digest = hashlib.sha256("\x1f".join(str(p) for p in parts).encode("utf-8")).digest()
    return int.from_bytes(digest[:4], "big")


@dataclass
class ForgeContext:
    """
    What every generator widget gets handed: the open project, its settings,
    seeded randomness, the log sink and export helpers.
    """

    project_dir: Path = field(default_factory=lambda: Path.cwd() / "projects" / "default_project")
    rng: random.Random = field(default_factory=lambda: random.Random(DEFAULT_MASTER_SEED))
    log: Callable[[str], None] = print

    project_settings: Dict[str, Any] = field(default_factory=dict)

    def set_project_dir(self, new_dir: Path) -> None:
        self.project_dir = Path(new_dir)
        for name in PROJECT_SUBDIRS:
            (self.project_dir / name).mkdir(parents=True, exist_ok=True)
        self.load_project_settings()
        self.rng = random.Random(self.master_seed)

    # ---------- project.json ----------

    @property
    def project_file(self) -> Path:
        return self.project_dir / PROJECT_FILE

    def load_project_settings(self) -> None:
        settings = self.load_json(PROJECT_FILE, default=None)
        if not isinstance(settings, dict):
            settings = {}
        settings.setdefault("name", self.project_dir.name)
        _fill_defaults(settings, DEFAULT_PROJECT_SETTINGS)
        self.project_settings = settings

    def save_project_settings(self) -> None:
        self.save_json(PROJECT_FILE, self.project_settings)

    @property
    def rooms_settings(self) -> Dict[str, Any]:
        """The ``rooms`` section: resolver flags shared by every room-producing generator."""
        section = self.project_settings.get("rooms")
        if not isinstance(section, dict):
            section = self.project_settings["rooms"] = {}
        return section

    def set_room_flag(self, name: str, value: bool) -> None:
        if name not in DEFAULT_PROJECT_SETTINGS["rooms"]:
            raise KeyError(f"unknown rooms setting {name!r}")
        self.rooms_settings[name] = bool(value)
        self.log(f"[Project] {name} = {bool(value)}")

    # ---------- seeds ----------

    @property
    def master_seed(self) -> int:
        try:
            return int(self.project_settings.get("master_seed", DEFAULT_MASTER_SEED))
        except (TypeError, ValueError):
            return DEFAULT_MASTER_SEED

    def reseed(self, master_seed: int) -> None:
        self.project_settings["master_seed"] = int(master_seed)
        self.rng = random.Random(self.master_seed)
        self.log(f"[Project] Master seed set to {self.master_seed}")

    def derive_seed(self, *parts: Any) -> int:
        """Stable sub-seed for (master seed, *parts); same parts, same rooms."""
        return _seed_from_parts((self.master_seed, *parts))

    def derive_rng(self, *parts: Any) -> random.Random:
        return random.Random(self.derive_seed(*parts))

    # ---------- project files ----------

    def _inside_project(self, relpath: str) -> Path:
        root = self.project_dir.resolve()
        p = (root / relpath).resolve()
        if root not in p.parents:
            raise ValueError(f"Refusing to touch {relpath!r}: outside the project directory.")
        return p

    def save_json(self, relpath: str, data: Any) -> None:
        p = self._inside_project(relpath)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    def load_json(self, relpath: str, default: Any = None) -> Any:
        p = self._inside_project(relpath)
        if not p.exists():
            return default
        try:
            return json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            self.log(f"[Project] Ignoring unreadable {relpath}: {e}")
            return default

    # ---------- exports ----------

    @property
    def export_manager(self) -> ExportManager:
        return ExportManager(self.project_dir, subdir=str(self.project_settings.get("export_subdir", "") or ""))

    def export_path(self, name: str, ext: str, *, timestamp: bool = True, seed: Optional[int] = None, subdir: Optional[str] = None) -> Path:
        return self.export_manager.export_path(name, ext, timestamp=timestamp, seed=seed, subdir=subdir)
