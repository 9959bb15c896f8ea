"""Tests for room_forge.core.context and room_forge.core.export_manager."""

import pytest

from room_forge.core.context import DEFAULT_MASTER_SEED, ForgeContext
from room_forge.core.export_manager import ExportManager
from room_forge.plugins.rooms.generator import resolver_options_from_settings


class TestProjectSettings:
    def test_defaults(self, ctx) -> None:
        s = ctx.project_settings
        assert s["name"] == "project"
        assert s["master_seed"] == DEFAULT_MASTER_SEED
        assert s["rooms"] == {
            "is_random_item_condition_uniform": False,
            "is_random_item_rarity_uniform": False,
        }
        assert (ctx.project_dir / "exports").is_dir()
        assert (ctx.project_dir / "modules").is_dir()

    def test_save_and_reload(self, ctx) -> None:
        ctx.project_settings["rooms"]["is_random_item_rarity_uniform"] = True
        ctx.project_settings["master_seed"] = 99
        ctx.save_project_settings()

        fresh = ForgeContext(log=lambda msg: None)
        fresh.set_project_dir(ctx.project_dir)
        assert fresh.master_seed == 99
        assert resolver_options_from_settings(fresh.project_settings).is_random_item_rarity_uniform

    def test_unreadable_project_file(self, tmp_path) -> None:
        proj = tmp_path / "broken"
        proj.mkdir()
        (proj / "project.json").write_text("{not json", encoding="utf-8")
        lines = []
        c = ForgeContext(log=lines.append)
        c.set_project_dir(proj)
        assert c.project_settings["master_seed"] == DEFAULT_MASTER_SEED
        assert any("project.json" in line for line in lines)

    def test_bad_master_seed_falls_back(self, ctx) -> None:
        ctx.project_settings["master_seed"] = "lots"
        assert ctx.master_seed == DEFAULT_MASTER_SEED

    def test_missing_rooms_keys_filled_in(self, tmp_path) -> None:
        proj = tmp_path / "old"
        proj.mkdir()
        (proj / "project.json").write_text('{"name": "Old", "rooms": {"is_random_item_rarity_uniform": true}}', encoding="utf-8")
        c = ForgeContext(log=lambda msg: None)
        c.set_project_dir(proj)
        assert c.project_settings["name"] == "Old"
        assert c.rooms_settings == {
            "is_random_item_condition_uniform": False,
            "is_random_item_rarity_uniform": True,
        }

    def test_set_room_flag(self, ctx) -> None:
        ctx.set_room_flag("is_random_item_condition_uniform", True)
        opts = resolver_options_from_settings(ctx.project_settings)
        assert opts.is_random_item_condition_uniform is True
        assert any("is_random_item_condition_uniform" in line for line in ctx.lines)

    def test_set_unknown_room_flag(self, ctx) -> None:
        with pytest.raises(KeyError):
            ctx.set_room_flag("is_everything_gold", True)


class TestSeeds:
    def test_derive_seed_is_stable(self, ctx) -> None:
        assert ctx.derive_seed("rooms", "generate", 1) == ctx.derive_seed("rooms", "generate", 1)
        assert ctx.derive_seed("rooms", "generate", 1) != ctx.derive_seed("rooms", "generate", 2)

    def test_derive_rng(self, ctx) -> None:
        a = ctx.derive_rng("dungeon", 3)
        b = ctx.derive_rng("dungeon", 3)
        assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]

    def test_seed_depends_on_master_seed(self, ctx) -> None:
        before = ctx.derive_seed("rooms")
        ctx.reseed(4242)
        assert ctx.master_seed == 4242
        assert ctx.project_settings["master_seed"] == 4242
        assert ctx.derive_seed("rooms") != before


class TestJsonFiles:
    def test_round_trip(self, ctx) -> None:
        ctx.save_json("modules/rooms.json", {"version": 1, "ui": {"room_type": "study"}})
        assert ctx.load_json("modules/rooms.json")["ui"]["room_type"] == "study"

    def test_missing_returns_default(self, ctx) -> None:
        assert ctx.load_json("modules/nope.json", default={}) == {}

    def test_refuses_to_escape_project(self, ctx) -> None:
        with pytest.raises(ValueError):
            ctx.save_json("../outside.json", {})

    def test_unreadable_returns_default(self, ctx) -> None:
        (ctx.project_dir / "modules" / "bad.json").write_text("[", encoding="utf-8")
        assert ctx.load_json("modules/bad.json", default=None) is None
        assert ctx.lines


class TestExportManager:
    def test_filename(self, tmp_path) -> None:
        em = ExportManager(tmp_path)
        assert em.make_filename("Goblin Warren!", ".md", timestamp=False, seed=5) == "goblin-warren_seed5.md"

    def test_blank_stem(self, tmp_path) -> None:
        assert ExportManager(tmp_path).make_filename("", "html", timestamp=False) == "rooms.html"

    def test_export_path_subdir(self, ctx) -> None:
        ctx.project_settings["export_subdir"] = "campaign"
        p = ctx.export_path("level one", "json", timestamp=False, subdir="rooms")
        assert p == ctx.project_dir / "exports" / "campaign" / "rooms" / "level-one.json"

    def test_write_markdown_adds_suffix(self, tmp_path) -> None:
        p = ExportManager(tmp_path).write_markdown(tmp_path, "notes", "# hi")
        assert p.name == "notes.md"
        assert p.read_text(encoding="utf-8") == "# hi"

    def test_write_html_wraps_body(self, tmp_path) -> None:
        p = ExportManager(tmp_path).write_html(tmp_path, "key", "Key", "<p>x</p>")
        text = p.read_text(encoding="utf-8")
        assert p.name == "key.html"
        assert "<title>Key</title>" in text
        assert "<p>x</p>" in text

    def test_session_pack(self, tmp_path) -> None:
        pack = ExportManager(tmp_path).create_session_pack("Deep Halls", seed=11)
        assert pack.is_dir()
        assert pack.name.endswith("_deep-halls_seed11")
