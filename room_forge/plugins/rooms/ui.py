from __future__ import annotations

import json
from dataclasses import replace
from typing import List, Optional

from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QPushButton,
    QComboBox, QSpinBox, QCheckBox, QGroupBox, QTabWidget, QTextBrowser,
    QTextEdit, QApplication, QMessageBox
)

from .errors import RoomForgeError
from .exports import rooms_to_html, rooms_to_markdown, rooms_to_payload, write_session_pack
from .generator import Room, RoomConfig, generate_rooms, resolver_options_from_settings
from .tables import (
    CONDITIONS, FURNITURE_QUANTITIES, ITEM_TYPES, QUANTITIES, RANDOM, RARITIES,
    ROOM_TYPES, SIZES,
)

# (config field, label, choices)
FIELDS = [
    ("room_type", "Room Type", ROOM_TYPES),
    ("room_size", "Room Size", SIZES),
    ("room_condition", "Room Condition", CONDITIONS),
    ("room_furniture_quantity", "Furnishing", FURNITURE_QUANTITIES),
    ("item_quantity", "Item Quantity", QUANTITIES),
    ("item_type", "Item Type", ITEM_TYPES),
    ("item_condition", "Item Condition", CONDITIONS),
    ("item_rarity", "Item Rarity", RARITIES),
]


class RoomGeneratorWidget(QWidget):
    PLUGIN_ID = "rooms"

    def __init__(self, ctx):
        super().__init__()
        self.ctx = ctx

        self._iteration = 0
        self._rooms: List[Room] = []
        self._last_seed: Optional[int] = None

        self._build_ui()

    # ---------------- UI ----------------

    def _build_ui(self):
        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(8)

        controls = QGroupBox("Room Settings")
        root.addWidget(controls)
        g = QGridLayout(controls)
        g.setHorizontalSpacing(10)
        g.setVerticalSpacing(8)

        self.combos = {}
        for i, (name, label, choices) in enumerate(FIELDS):
            combo = QComboBox()
            combo.addItems([RANDOM, *choices])
            self.combos[name] = combo
            row, col = divmod(i, 2)
            g.addWidget(QLabel(label), row, col * 2)
            g.addWidget(combo, row, col * 2 + 1)

        row = (len(FIELDS) + 1) // 2

        g.addWidget(QLabel("Room Count"), row, 0)
        self.room_count = QSpinBox()
        self.room_count.setRange(1, 60)
        self.room_count.setValue(1)
        g.addWidget(self.room_count, row, 1)

        self.lock_seed = QCheckBox("Lock seed")
        g.addWidget(self.lock_seed, row, 2)
        self.seed = QSpinBox()
        self.seed.setRange(0, 2_000_000_000)
        self.seed.setEnabled(False)
        self.lock_seed.toggled.connect(self.seed.setEnabled)
        g.addWidget(self.seed, row, 3)

        btn_row = QHBoxLayout()
        self.generate_btn = QPushButton("Generate Rooms")
        self.copy_btn = QPushButton("Copy Text")
        self.copy_btn.setEnabled(False)
        self.export_btn = QPushButton("Export Session Pack")
        self.export_btn.setEnabled(False)
        btn_row.addWidget(self.generate_btn)
        btn_row.addWidget(self.copy_btn)
        btn_row.addWidget(self.export_btn)
        btn_row.addStretch(1)
        root.addLayout(btn_row)

        self.tabs = QTabWidget()
        root.addWidget(self.tabs, 1)

        self.out_html = QTextBrowser()
        self.tabs.addTab(self.out_html, "Rooms")

        self.out_json = QTextEdit()
        self.out_json.setReadOnly(True)
        self.out_json.setFont(QFont("Consolas", 10))
        self.tabs.addTab(self.out_json, "Data (JSON)")

        self.generate_btn.clicked.connect(self._on_generate)
        self.copy_btn.clicked.connect(self._on_copy)
        self.export_btn.clicked.connect(self._on_export)

    # ---------------- State ----------------

    def serialize_state(self) -> dict:
        return {
            "version": 1,
            "ui": {
                **{name: combo.currentText() for name, combo in self.combos.items()},
                "room_count": self.room_count.value(),
                "lock_seed": self.lock_seed.isChecked(),
                "seed": self.seed.value(),
            },
            "data": {
                "iteration": int(self._iteration),
                "last_html": self.out_html.toHtml() if self._rooms else "",
            },
        }

    def load_state(self, state: dict) -> None:
        if not state:
            return
        ver = int(state.get("version", 1))
        if ver != 1:
            self.ctx.log(f"[rooms] Unknown state version: {ver}")
            return

        ui = state.get("ui", {}) or {}
        for name, combo in self.combos.items():
            combo.setCurrentText(str(ui.get(name, RANDOM)))
        self.room_count.setValue(int(ui.get("room_count", 1)))
        self.lock_seed.setChecked(bool(ui.get("lock_seed", False)))
        self.seed.setValue(int(ui.get("seed", 0)))

        data = state.get("data", {}) or {}
        self._iteration = int(data.get("iteration", 0))
        last_html = str(data.get("last_html", ""))
        if last_html.strip():
            self.out_html.setHtml(last_html)

    # ---------------- Internals ----------------

    def _config(self) -> RoomConfig:
        values = {name: combo.currentText() for name, combo in self.combos.items()}
        return RoomConfig(room_count=int(self.room_count.value()), **values)

    def _on_generate(self):
        self._iteration += 1

        if self.lock_seed.isChecked():
            seed = int(self.seed.value())
        else:
            seed = self.ctx.derive_seed(self.PLUGIN_ID, "generate", self._iteration)

        try:
            options = resolver_options_from_settings(self.ctx.project_settings)
            rooms = generate_rooms(self._config(), options, rng=self.ctx.derive_rng(seed))
            # Numbered in generation order; the room plugin has no map layout.
            rooms = [replace(r, room_number=i) for i, r in enumerate(rooms, start=1)]
            html = rooms_to_html(rooms)
        except RoomForgeError as e:
            self.ctx.log(f"[rooms] Generation failed: {e}")
            QMessageBox.critical(self, "Room Generator Error", f"Generation failed:\n\n{e}")
            return

        self._rooms = rooms
        self._last_seed = seed
        self.out_html.setHtml(html)
        self.out_json.setPlainText(json.dumps(rooms_to_payload(rooms, seed=seed), indent=2))

        self.copy_btn.setEnabled(True)
        self.export_btn.setEnabled(True)
        self.ctx.log(f"[rooms] Generated {len(rooms)} room(s) (seed {seed})")

    def _on_copy(self):
        if not self._rooms:
            return
        QApplication.clipboard().setText(rooms_to_markdown(self._rooms))
        self.ctx.log("[rooms] Copied room text to clipboard.")

    def _on_export(self):
        if not self._rooms:
            return
        try:
            pack_dir = write_session_pack(self.ctx, self._rooms, title="rooms", seed=self._last_seed)
        except OSError as e:
            self.ctx.log(f"[rooms] Export failed: {e}")
            QMessageBox.critical(self, "Export failed", f"Export failed:\n\n{e}")
            return
        self.ctx.log(f"[rooms] Exported session pack: {pack_dir}")
        QMessageBox.information(self, "Export complete", f"Exported to:\n{pack_dir}")
