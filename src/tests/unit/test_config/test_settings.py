"""Tests for application settings."""

from pathlib import Path

import pytest

from symbol_index.config import (
    ConfigurationError,
    IndexConfig,
    LoggingConfig,
    Settings,
)


class TestIndexConfig:
    """Test cases for index settings."""

    def test_defaults(self):
        config = IndexConfig()

        assert config.index_directory == "./symbol_index"
        assert config.penalty_step == 0.25
        assert config.priority_bonus == 0.25
        assert config.default_max_results == 50
        assert config.worker_threads == 2

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("SYMBOL_INDEX_PENALTY_STEP", "0.1")
        monkeypatch.setenv("SYMBOL_INDEX_DEFAULT_MAX_RESULTS", "7")

        config = IndexConfig()

        assert config.penalty_step == 0.1
        assert config.default_max_results == 7

    @pytest.mark.parametrize("step", [0, 1, -0.5, 2])
    def test_penalty_step_bounds(self, step):
        with pytest.raises(ValueError):
            IndexConfig(penalty_step=step)

    def test_relative_index_path(self):
        config = IndexConfig(index_directory="idx")
        assert config.get_index_path("data") == Path("data") / "idx"

    def test_absolute_index_path(self, tmp_path):
        config = IndexConfig(index_directory=str(tmp_path))
        assert config.get_index_path("data") == tmp_path


class TestSettings:
    def test_defaults(self):
        settings = Settings()

        assert isinstance(settings.logging, LoggingConfig)
        assert isinstance(settings.index, IndexConfig)
        assert settings.get_log_file_path() is None
        assert settings.get_index_path() == Path("data") / "./symbol_index"

    def test_log_file_path(self):
        settings = Settings(logging=LoggingConfig(file_path="logs/index.log"))
        assert settings.get_log_file_path() == Path("logs/index.log")

    def test_from_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "debug: true\n"
            "logging:\n"
            "  level: DEBUG\n"
            "  json_format: false\n"
            "index:\n"
            "  penalty_step: 0.2\n"
            "  worker_threads: 4\n"
        )

        settings = Settings.from_yaml(config_file)

        assert settings.debug is True
        assert settings.logging.level == "DEBUG"
        assert settings.logging.json_format is False
        assert settings.index.penalty_step == 0.2
        assert settings.index.worker_threads == 4

    def test_from_empty_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert Settings.from_yaml(config_file).index.default_max_results == 50

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_yaml(tmp_path / "missing.yaml")

        assert "error" in exc_info.value.details

    def test_from_yaml_not_a_mapping(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- one\n- two\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            Settings.from_yaml(config_file)

    def test_from_yaml_invalid_values(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("index:\n  penalty_step: 3\n")

        with pytest.raises(ConfigurationError) as exc_info:
            Settings.from_yaml(config_file)

        assert exc_info.value.details["errors"]


class TestConfigurationError:
    def test_message_with_details(self):
        error = ConfigurationError("Invalid configuration in a.yaml", {"errors": ["x"]})
        assert str(error) == "Invalid configuration in a.yaml (Details: {'errors': ['x']})"

    def test_message_without_details(self):
        error = ConfigurationError("Cannot read configuration file a.yaml")
        assert str(error) == "Cannot read configuration file a.yaml"
        assert error.details == {}
