"""Tests for config file parsing."""

from datetime import datetime

from muistutin.config import Config, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.conf") == Config()

    def test_parses_values(self, tmp_path):
        path = tmp_path / "muistutin.conf"
        path.write_text(
            "\n".join(
                [
                    "# Muistutin settings",
                    'DATA_DIR = "~/reminders" # where JSON lives',
                    "DEFAULT_VIEW = all",
                    "DEFAULT_DEADLINE = '07:15'",
                    "REFRESH_SECONDS = 30  # seconds",
                    "CLOCK_OVERRIDE = 2024-01-10T09:00",
                    "UNKNOWN_KEY = whatever",
                    "not a setting",
                ]
            )
        )
        config = load_config(path)
        assert config.data_dir == "~/reminders"
        assert config.default_view == "all"
        assert config.default_deadline == "07:15"
        assert config.refresh_seconds == 30
        assert config.clock_override == datetime(2024, 1, 10, 9, 0)

    def test_invalid_values_ignored(self, tmp_path):
        path = tmp_path / "muistutin.conf"
        path.write_text("DEFAULT_VIEW = week\nREFRESH_SECONDS = often\nCLOCK_OVERRIDE = soon\n")
        config = load_config(path)
        assert config.default_view == "today"
        assert config.refresh_seconds == 60
        assert config.clock_override is None

    def test_clock_override_with_utc_offset_ignored(self, tmp_path):
        path = tmp_path / "muistutin.conf"
        path.write_text("CLOCK_OVERRIDE = 2024-01-10T09:00+02:00\n")
        assert load_config(path).clock_override is None
