from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Dict, List

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QListWidget, QListWidgetItem, QStackedWidget,
    QTextEdit, QVBoxLayout, QLabel, QSplitter, QFileDialog, QInputDialog,
    QMessageBox
)

from room_forge.core.app_settings import AppSettings
from room_forge.core.context import ForgeContext
from room_forge.core.plugin_manager import LoadedPlugin, PluginManager

logger = logging.getLogger(__name__)

AUTOSAVE_MS = 30_000
APP_TITLE = "Room Forge"

# (project.json rooms key, menu label)
ROOM_FLAGS = (
    ("is_random_item_condition_uniform", "One Random Item Condition per Room"),
    ("is_random_item_rarity_uniform", "One Random Item Rarity per Room"),
)


class MainWindow(QMainWindow):
    """
    Generator list on the left, the selected generator above the log on the
    right. Widget state and project.json are saved on a timer, on project
    switch and on close.
    """

    def __init__(self):
        super().__init__()
        self.setWindowTitle(APP_TITLE)

        self.settings = AppSettings()
        self.ctx = ForgeContext(log=self._log)

        self.plugin_manager = PluginManager()
        self.loaded: List[LoadedPlugin] = []
        self.generator_widgets: Dict[str, QWidget] = {}
        self.flag_actions: Dict[str, QAction] = {}

        self._build_ui()
        self._build_menu()

        self._autosave = QTimer(self)
        self._autosave.setInterval(AUTOSAVE_MS)
        self._autosave.timeout.connect(self.save_all_state)
        self._autosave.start()

        self._open_initial_project()

        geom = self.settings.window_geometry()
        if geom:
            self.restoreGeometry(geom)

    # ---------- layout ----------

    def _build_ui(self) -> None:
        self.generator_list = QListWidget()
        self.generator_list.setMinimumWidth(200)
        self.generator_list.currentRowChanged.connect(self._on_generator_changed)

        self.stack = QStackedWidget()

        self.log_view = QTextEdit()
        self.log_view.setReadOnly(True)
        self.log_view.setPlaceholderText("Logs…")

        left = QWidget()
        lv = QVBoxLayout(left)
        lv.setContentsMargins(8, 8, 8, 8)
        lv.addWidget(QLabel("Generators"))
        lv.addWidget(self.generator_list)

        right = QSplitter(Qt.Vertical)
        right.addWidget(self.stack)
        log_box = QWidget()
        log_layout = QVBoxLayout(log_box)
        log_layout.setContentsMargins(8, 0, 8, 8)
        log_layout.addWidget(QLabel("Log"))
        log_layout.addWidget(self.log_view)
        right.addWidget(log_box)
        right.setStretchFactor(0, 4)
        right.setStretchFactor(1, 1)

        splitter = QSplitter(Qt.Horizontal)
        splitter.addWidget(left)
        splitter.addWidget(right)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

    def _build_menu(self) -> None:
        mb = self.menuBar()

        file_menu = mb.addMenu("File")
        self.recent_menu = None
        for label, slot in (
            ("New Project…", self._new_project),
            ("Open Project…", self._open_project),
            ("Open Recent", None),
            (None, None),
            ("Save", self.save_all_state),
            (None, None),
            ("Quit", self.close),
        ):
            if label is None:
                file_menu.addSeparator()
                continue
            if slot is None:
                self.recent_menu = file_menu.addMenu(label)
                continue
            act = QAction(label, self)
            act.triggered.connect(slot)
            file_menu.addAction(act)

        project_menu = mb.addMenu("Project")
        for key, label in ROOM_FLAGS:
            act = QAction(label, self)
            act.setCheckable(True)
            act.toggled.connect(lambda checked, k=key: self.ctx.set_room_flag(k, checked))
            project_menu.addAction(act)
            self.flag_actions[key] = act
        project_menu.addSeparator()
        act_seed = QAction("Master Seed…", self)
        act_seed.triggered.connect(self._edit_master_seed)
        project_menu.addAction(act_seed)
        act_subdir = QAction("Export Subfolder…", self)
        act_subdir.triggered.connect(self._edit_export_subdir)
        project_menu.addAction(act_subdir)

    def _log(self, msg: str) -> None:
        self.log_view.append(f"{time.strftime('%H:%M:%S')}  {msg}")
        logger.info(msg)

    # ---------- projects ----------

    def _open_initial_project(self) -> None:
        self.set_project(self.settings.last_project_dir() or Path.cwd() / "projects" / "default_project")

    def _new_project(self) -> None:
        parent_dir = QFileDialog.getExistingDirectory(self, "Choose parent folder for new project")
        if not parent_dir:
            return
        name, ok = QInputDialog.getText(self, "New Project", "Project name:")
        name = (name or "").strip()
        if not ok or not name:
            return

        proj_dir = Path(parent_dir) / name
        if proj_dir.exists() and any(proj_dir.iterdir()):
            QMessageBox.warning(self, "New Project", "That folder already exists and is not empty.")
            return
        self.set_project(proj_dir)

    def _open_project(self) -> None:
        proj_dir = QFileDialog.getExistingDirectory(self, "Open Project")
        if proj_dir:
            self.set_project(Path(proj_dir))

    def set_project(self, proj_dir: Path) -> None:
        if self.loaded:
            self.save_all_state()

        self.ctx.set_project_dir(Path(proj_dir))
        self.settings.remember_project(self.ctx.project_dir)
        self._rebuild_recent_menu()
        self.setWindowTitle(f"{APP_TITLE} — {self.ctx.project_settings['name']}")
        self.ctx.log(f"Project: {self.ctx.project_dir} (seed {self.ctx.master_seed})")

        self._sync_project_menu()
        self._reload_generators()

    def _rebuild_recent_menu(self) -> None:
        self.recent_menu.clear()
        for path in self.settings.recent_projects():
            act = QAction(str(path), self)
            act.setEnabled(path.exists() and path != self.ctx.project_dir)
            act.triggered.connect(lambda _checked=False, p=path: self.set_project(p))
            self.recent_menu.addAction(act)

    def _sync_project_menu(self) -> None:
        rooms = self.ctx.rooms_settings
        for key, act in self.flag_actions.items():
            # Reflect the file without writing it back through set_room_flag.
            act.blockSignals(True)
            act.setChecked(bool(rooms.get(key, False)))
            act.blockSignals(False)

    def _edit_master_seed(self) -> None:
        seed, ok = QInputDialog.getInt(self, "Master Seed", "Seed:", self.ctx.master_seed, 0, 2_000_000_000)
        if ok:
            self.ctx.reseed(seed)

    def _edit_export_subdir(self) -> None:
        current = str(self.ctx.project_settings.get("export_subdir", "") or "")
        text, ok = QInputDialog.getText(self, "Export Subfolder", "Folder inside exports/:", text=current)
        if ok:
            self.ctx.project_settings["export_subdir"] = text.strip()
            self.ctx.log(f"[Project] Exports go to {self.ctx.export_manager.export_root()}")

    # ---------- generators ----------

    def _reload_generators(self) -> None:
        self.generator_list.blockSignals(True)
        self.generator_list.clear()
        self.generator_list.blockSignals(False)
        while self.stack.count():
            w = self.stack.widget(0)
            self.stack.removeWidget(w)
            w.deleteLater()
        self.generator_widgets.clear()

        self.loaded = self.plugin_manager.discover_and_load()
        for msg in self.plugin_manager.failures:
            self.ctx.log(f"[Plugin] {msg}")

        for lp in self.loaded:
            meta = lp.plugin.meta
            widget = lp.plugin.create_widget(self.ctx)
            item = QListWidgetItem(meta.name)
            item.setToolTip(f"{meta.description}\n{meta.plugin_id} {meta.version}")
            self.generator_list.addItem(item)
            self.stack.addWidget(widget)
            self.generator_widgets[meta.plugin_id] = widget
            self._restore_state(meta.plugin_id, widget)

        self.ctx.log(f"Loaded {len(self.generator_widgets)} generators: {', '.join(self.generator_widgets)}")
        if self.generator_list.count():
            self.generator_list.setCurrentRow(0)

    @staticmethod
    def _state_file(plugin_id: str) -> str:
        return f"modules/{plugin_id}.json"

    def _restore_state(self, plugin_id: str, widget: QWidget) -> None:
        state = self.ctx.load_json(self._state_file(plugin_id), default=None)
        if not state:
            return
        try:
            widget.load_state(state)
        except (KeyError, TypeError, ValueError) as e:
            self.ctx.log(f"[State] Could not restore {plugin_id}: {e}")

    def save_all_state(self) -> None:
        try:
            self.ctx.save_project_settings()
        except OSError as e:
            self.ctx.log(f"[State] Failed to save project settings: {e}")

        for plugin_id, widget in self.generator_widgets.items():
            try:
                self.ctx.save_json(self._state_file(plugin_id), widget.serialize_state())
            except OSError as e:
                self.ctx.log(f"[State] Failed saving {plugin_id}: {e}")

    # ---------- events ----------

    def _on_generator_changed(self, row: int) -> None:
        if 0 <= row < self.stack.count():
            self.stack.setCurrentIndex(row)

    def closeEvent(self, event) -> None:
        self.save_all_state()
        self.settings.set_window_geometry(self.saveGeometry())
        super().closeEvent(event)
