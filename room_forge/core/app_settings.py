from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from PySide6.QtCore import QByteArray, QSettings

MAX_RECENT_PROJECTS = 8


@dataclass
class AppSettings:
    """Per-user preferences kept in QSettings; project data never goes here."""

    org: str = "RoomForge"
    app: str = "Room Forge"

    def __post_init__(self) -> None:
        self._qs = QSettings(self.org, self.app)

    # ---------- projects ----------

    def recent_projects(self) -> List[Path]:
        raw = self._qs.value("recent_projects", []) or []
        if isinstance(raw, str):  # QSettings collapses one-element lists on some backends
            raw = [raw]
        return [Path(p) for p in (str(v).strip() for v in raw) if p]

    def remember_project(self, path: Path) -> None:
        path = Path(path)
        recent = [p for p in self.recent_projects() if p != path]
        recent.insert(0, path)
        self._qs.setValue("recent_projects", [str(p) for p in recent[:MAX_RECENT_PROJECTS]])

    def last_project_dir(self) -> Optional[Path]:
        for p in self.recent_projects():
            if p.exists():
                return p
        return None

    # ---------- window ----------

    def window_geometry(self) -> Optional[QByteArray]:
        v = self._qs.value("window_geometry", None)
        return v if isinstance(v, (bytes, bytearray, QByteArray)) else None

    def set_window_geometry(self, geometry: QByteArray) -> None:
        self._qs.setValue("window_geometry", geometry)
