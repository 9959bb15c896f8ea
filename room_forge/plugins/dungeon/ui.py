from __future__ import annotations

import json
from typing import Optional

from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QPushButton, QComboBox,
    QSpinBox, QCheckBox, QGroupBox, QTabWidget, QTextBrowser, QTextEdit,
    QApplication, QMessageBox
)

from room_forge.plugins.rooms.errors import RoomForgeError
from room_forge.plugins.rooms.exports import rooms_to_markdown
from room_forge.plugins.rooms.generator import DungeonConfig, resolver_options_from_settings
from room_forge.plugins.rooms.tables import (
    CONDITIONS, FURNITURE_QUANTITIES, ITEM_TYPES, QUANTITIES, RANDOM, RARITIES,
)
from .exports import dungeon_to_payload, write_dungeon_pack
from .generator import Dungeon, dungeon_description, generate_dungeon, max_room_count


class DungeonGeneratorWidget(QWidget):
    PLUGIN_ID = "dungeon"

    def __init__(self, ctx):
        super().__init__()
        self.ctx = ctx

        self._iteration = 0
        self._dungeon: Optional[Dungeon] = None
        self._last_seed: Optional[int] = None

        self._build_ui()

    def _build_ui(self):
        root = QVBoxLayout(self)

        box = QGroupBox("Dungeon Settings")
        form = QFormLayout(box)
        root.addWidget(box)

        self.complexity = QSpinBox()
        self.complexity.setRange(1, 10)
        self.complexity.setValue(2)
        self.complexity.valueChanged.connect(self._update_room_hint)
        form.addRow("Complexity", self.complexity)

        # Room type and size are rolled per room; a dungeon is never all throne rooms.
        self.combos = {}
        for name, label, choices in (
            ("room_condition", "Room Condition", CONDITIONS),
            ("room_furniture_quantity", "Furnishing", FURNITURE_QUANTITIES),
            ("item_quantity", "Item Quantity", QUANTITIES),
            ("item_type", "Item Type", ITEM_TYPES),
            ("item_condition", "Item Condition", CONDITIONS),
            ("item_rarity", "Item Rarity", RARITIES),
        ):
            combo = QComboBox()
            combo.addItems([RANDOM, *choices])
            self.combos[name] = combo
            form.addRow(label, combo)

        seed_row = QHBoxLayout()
        self.lock_seed = QCheckBox("Lock seed")
        self.seed = QSpinBox()
        self.seed.setRange(0, 2_000_000_000)
        self.seed.setEnabled(False)
        self.lock_seed.toggled.connect(self.seed.setEnabled)
        seed_row.addWidget(self.lock_seed)
        seed_row.addWidget(self.seed, 1)
        form.addRow("Seed", seed_row)

        btns = QHBoxLayout()
        self.btn_generate = QPushButton()
        self.btn_copy = QPushButton("Copy Text")
        self.btn_copy.setEnabled(False)
        self.btn_export = QPushButton("Export Session Pack")
        self.btn_export.setEnabled(False)
        btns.addWidget(self.btn_generate)
        btns.addWidget(self.btn_copy)
        btns.addWidget(self.btn_export)
        btns.addStretch(1)
        root.addLayout(btns)

        self.tabs = QTabWidget()
        root.addWidget(self.tabs, 1)

        self.out_html = QTextBrowser()
        self.tabs.addTab(self.out_html, "Dungeon")

        self.out_json = QTextEdit()
        self.out_json.setReadOnly(True)
        self.out_json.setFont(QFont("Consolas", 10))
        self.tabs.addTab(self.out_json, "Data (JSON)")

        self.btn_generate.clicked.connect(self._on_generate)
        self.btn_copy.clicked.connect(self._on_copy)
        self.btn_export.clicked.connect(self._on_export)

        self._update_room_hint()

    def _update_room_hint(self):
        self.btn_generate.setText(f"Generate Dungeon ({max_room_count(self.complexity.value())} rooms)")

    # ---------------- State ----------------

    def serialize_state(self) -> dict:
        return {
            "version": 1,
            "ui": {
                "complexity": self.complexity.value(),
                **{name: combo.currentText() for name, combo in self.combos.items()},
                "lock_seed": self.lock_seed.isChecked(),
                "seed": self.seed.value(),
            },
            "data": {
                "iteration": int(self._iteration),
            },
        }

    def load_state(self, state: dict) -> None:
        if not state:
            return
        ver = int(state.get("version", 1))
        if ver != 1:
            self.ctx.log(f"[dungeon] Unknown state version: {ver}")
            return

        ui = state.get("ui", {}) or {}
        self.complexity.setValue(int(ui.get("complexity", 2)))
        for name, combo in self.combos.items():
            combo.setCurrentText(str(ui.get(name, RANDOM)))
        self.lock_seed.setChecked(bool(ui.get("lock_seed", False)))
        self.seed.setValue(int(ui.get("seed", 0)))

        data = state.get("data", {}) or {}
        self._iteration = int(data.get("iteration", 0))

    # ---------------- Actions ----------------

    def _config(self) -> DungeonConfig:
        return DungeonConfig(
            dungeon_complexity=int(self.complexity.value()),
            room_type=RANDOM,
            room_size=RANDOM,
            **{name: combo.currentText() for name, combo in self.combos.items()},
        )

    def _on_generate(self):
        self._iteration += 1
        if self.lock_seed.isChecked():
            seed = int(self.seed.value())
        else:
            seed = self.ctx.derive_seed(self.PLUGIN_ID, "generate", self._iteration)

        try:
            options = resolver_options_from_settings(self.ctx.project_settings)
            dungeon = generate_dungeon(self._config(), options, rng=self.ctx.derive_rng(seed))
            html = dungeon_description(dungeon)
        except RoomForgeError as e:
            self.ctx.log(f"[dungeon] Generation failed: {e}")
            QMessageBox.critical(self, "Dungeon Generator Error", f"Generation failed:\n\n{e}")
            return

        self._dungeon = dungeon
        self._last_seed = seed
        self.out_html.setHtml(html)
        self.out_json.setPlainText(json.dumps(dungeon_to_payload(dungeon, seed=seed), indent=2))

        self.btn_copy.setEnabled(True)
        self.btn_export.setEnabled(True)
        self.ctx.log(
            f"[dungeon] Generated {dungeon.width}x{dungeon.height} dungeon with "
            f"{len(dungeon.rooms)} rooms (seed {seed})"
        )

    def _on_copy(self):
        if self._dungeon is None:
            return
        QApplication.clipboard().setText(rooms_to_markdown(self._dungeon.rooms, self._dungeon.doors))
        self.ctx.log("[dungeon] Copied dungeon key to clipboard.")

    def _on_export(self):
        if self._dungeon is None:
            return
        try:
            pack_dir = write_dungeon_pack(self.ctx, self._dungeon, seed=self._last_seed)
        except OSError as e:
            self.ctx.log(f"[dungeon] Export failed: {e}")
            QMessageBox.critical(self, "Export failed", f"Export failed:\n\n{e}")
            return
        self.ctx.log(f"[dungeon] Exported session pack: {pack_dir}")
        QMessageBox.information(self, "Export complete", f"Exported to:\n{pack_dir}")
