from __future__ import annotations

from dataclasses import dataclass
from html import escape
from pathlib import Path
from typing import Optional
import re
import time

SESSION_PACKS = "session_packs"

HTML_PAGE = """<!DOCTYPE html>
<html><head><meta charset="utf-8"><title>{title}</title></head>
<body>
{body}
</body></html>
"""


def _slug(s: str) -> str:
    """Lowercase, dash-separated, filesystem-safe; falls back to ``rooms``."""
    words = re.findall(r"[a-z0-9_\-]+", (s or "").lower())
    return "-".join(words)[:60] or "rooms"


def _stamp() -> str:
    return time.strftime("%Y%m%d_%H%M%S")


@dataclass
class ExportManager:
    """
    Everything a generator writes lands under ``<project>/exports[/<subdir>]``.
    A session pack is one timestamped folder per export holding the HTML key,
    a markdown copy and the raw JSON.
    """

    project_dir: Path
    subdir: str = ""

    def export_root(self) -> Path:
        p = self.project_dir / "exports"
        if self.subdir.strip():
            p = p / self.subdir.strip()
        p.mkdir(parents=True, exist_ok=True)
        return p

    def make_filename(self, stem: str, ext: str, *, timestamp: bool = True, seed: Optional[int] = None) -> str:
        parts = [_stamp() if timestamp else "", _slug(stem), f"seed{seed}" if seed is not None else ""]
        return "_".join(p for p in parts if p) + "." + ext.lstrip(".")

    def export_path(self, stem: str, ext: str, *, timestamp: bool = True, seed: Optional[int] = None, subdir: Optional[str] = None) -> Path:
        folder = self.export_root() / subdir if subdir else self.export_root()
        folder.mkdir(parents=True, exist_ok=True)
        return folder / self.make_filename(stem, ext, timestamp=timestamp, seed=seed)

    def create_session_pack(self, title: str, *, seed: Optional[int] = None) -> Path:
        name = self.make_filename(title, "", seed=seed).rstrip(".")
        path = self.export_root() / SESSION_PACKS / name
        path.mkdir(parents=True, exist_ok=True)
        return path

    # ---------- pack contents ----------

    def write_text(self, pack_dir: Path, filename: str, content: str) -> Path:
        p = pack_dir / filename.lstrip("/\\")
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
        return p

    def write_markdown(self, pack_dir: Path, filename: str, content: str) -> Path:
        if not filename.lower().endswith(".md"):
            filename += ".md"
        return self.write_text(pack_dir, filename, content)

    def write_html(self, pack_dir: Path, filename: str, title: str, body: str) -> Path:
        """Wrap an HTML fragment (room key, dungeon key) in a standalone page."""
        if not filename.lower().endswith(".html"):
            filename += ".html"
        return self.write_text(pack_dir, filename, HTML_PAGE.format(title=escape(title), body=body))
