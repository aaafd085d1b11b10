"""Tests for configuration management."""

from treemarks.utils.config import (
    DEFAULT_DEBOUNCE_MS,
    create_default_config,
    get_config_dir,
    get_config_file,
    get_default_color,
    get_log_config,
    get_search_debounce_ms,
    get_ui_config,
    load_config,
    save_config,
    set_ui_config,
)


class TestConfigPaths:
    def test_config_dir_exists(self, isolate_config):
        assert get_config_dir().exists()

    def test_config_file_path(self, isolate_config):
        assert get_config_file().name == "config.toml"


class TestLoadSaveConfig:
    def test_load_empty_config(self, isolate_config):
        assert load_config() == {}

    def test_save_and_load_roundtrip(self, isolate_config):
        result = save_config({
            "ui": {"dark_mode": True},
            "search": {"debounce_ms": 350},
            "editor": {"default_color": "#123456"},
        })
        assert result is None

        loaded = load_config()
        assert loaded["ui"]["dark_mode"] is True
        assert loaded["search"]["debounce_ms"] == 350
        assert loaded["editor"]["default_color"] == "#123456"

    def test_quotes_are_escaped(self, isolate_config):
        save_config({"ui": {"title": 'say "hi"'}})
        assert load_config()["ui"]["title"] == 'say "hi"'

    def test_broken_file_reads_empty(self, isolate_config):
        get_config_file().write_text("not = [valid", encoding="utf-8")
        assert load_config() == {}


class TestSections:
    def test_ui_config(self, isolate_config):
        assert get_ui_config() == {}
        set_ui_config({"dark_mode": True})
        assert get_ui_config()["dark_mode"] is True

    def test_debounce_default(self, isolate_config):
        assert get_search_debounce_ms() == DEFAULT_DEBOUNCE_MS

    def test_debounce_invalid_falls_back(self, isolate_config):
        save_config({"search": {"debounce_ms": "fast"}})
        assert get_search_debounce_ms() == DEFAULT_DEBOUNCE_MS

    def test_default_color_normalized(self, isolate_config):
        save_config({"editor": {"default_color": "#ABCDEF"}})
        assert get_default_color() == "#abcdef"

    def test_default_color_invalid(self, isolate_config):
        save_config({"editor": {"default_color": "purple"}})
        assert get_default_color() == "#eeeeee"

    def test_log_config(self, isolate_config):
        save_config({"logging": {"level": "DEBUG", "no_color": True}})
        cfg = get_log_config()
        assert cfg.level == "DEBUG"
        assert cfg.no_color is True

    def test_log_config_quiet(self, isolate_config):
        save_config({"logging": {"quiet": ["PyQt6.uic", "urllib3"]}})
        assert get_log_config().quiet == ("PyQt6.uic", "urllib3")


class TestDefaultConfig:
    def test_creates_default(self, isolate_config):
        create_default_config()
        config = load_config()
        assert config["ui"]["dark_mode"] is False
        assert config["search"]["debounce_ms"] == 200
        assert config["editor"]["default_color"] == "#eeeeee"
        assert get_log_config().quiet == ("PyQt6.uic",)

    def test_does_not_overwrite(self, isolate_config):
        save_config({"ui": {"dark_mode": True}})
        create_default_config()
        assert load_config()["ui"]["dark_mode"] is True
