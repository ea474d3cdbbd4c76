"""Tests for configuration loading."""

from pathlib import Path

from todolist.config import DATA_DIR, Config, load_config


class TestConfig:
    def test_default_storage_path(self):
        assert Config().storage_path == DATA_DIR / "storage.json"

    def test_storage_path_expands_user(self):
        config = Config(storage_file="~/todo/storage.json")
        assert config.storage_path == Path.home() / "todo" / "storage.json"


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.conf") == Config()

    def test_parses_values(self, tmp_path):
        conf = tmp_path / "todolist.conf"
        conf.write_text(
            "# todolist settings\n"
            "\n"
            'STORAGE_FILE = "/tmp/tasks.json"  # quoted\n'
            "NOTIFICATION_SECONDS = 5\n"
            "DUE_SOON_HOURS = 48 # two days\n"
            "log_level = debug\n"
            "COLOR = off\n"
        )
        config = load_config(conf)
        assert config.storage_file == "/tmp/tasks.json"
        assert config.notification_seconds == 5.0
        assert config.due_soon_hours == 48.0
        assert config.log_level == "DEBUG"
        assert config.color is False

    def test_invalid_values_keep_defaults(self, tmp_path):
        conf = tmp_path / "todolist.conf"
        conf.write_text("NOTIFICATION_SECONDS = soon\nCOLOR = maybe\nnot a setting\nUNKNOWN = 1\n")
        config = load_config(conf)
        assert config.notification_seconds == 3.0
        assert config.color is True

    def test_single_quotes(self, tmp_path):
        conf = tmp_path / "todolist.conf"
        conf.write_text("STORAGE_FILE = '~/my tasks.json'\n")
        assert load_config(conf).storage_file == "~/my tasks.json"
