"""Tests for environment configuration lookup."""

import pytest

from resourcekit.config import settings as settings_module
from resourcekit.config.configuration import get_settings_registry, register_setting
from resourcekit.config.environment import Environment


class TestDefaultEncoding:
    def test_registered_default(self):
        assert Environment.get_default_encoding() == "utf-8"

    def test_environment_variable_overrides_default(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_ENCODING", "latin-1")
        assert Environment.get_default_encoding() == "latin-1"

    def test_settings_file_overrides_environment(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_ENCODING", "latin-1")
        monkeypatch.setattr(Environment, "settings", {"DEFAULT_ENCODING": "utf-16"})
        assert Environment.get_default_encoding() == "utf-16"

    def test_unknown_encoding_is_rejected(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_ENCODING", "no-such-codec")
        with pytest.raises(ValueError):
            Environment.get_default_encoding()


class TestLogLevel:
    def test_default_is_info(self):
        assert Environment.get_log_level() == "INFO"

    def test_log_level_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Environment.get_log_level() == "DEBUG"

    def test_debug_flag(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "1")
        assert Environment.get_log_level() == "DEBUG"

    def test_package_specific_env(self, monkeypatch):
        monkeypatch.setenv("RESOURCEKIT_LOG_LEVEL", "warning")
        assert Environment.get_log_level() == "WARNING"


class TestSettingsFile:
    def test_load_settings_from_yaml(self, tmp_path):
        settings_file = tmp_path / "settings.yaml"
        settings_module.save_settings({"DEFAULT_ENCODING": "cp1252"}, settings_file)
        assert settings_module.load_settings(settings_file) == {"DEFAULT_ENCODING": "cp1252"}

    def test_missing_file_loads_empty(self, tmp_path):
        assert settings_module.load_settings(tmp_path / "absent.yaml") == {}

    def test_environment_reads_settings_file_lazily(self, monkeypatch, tmp_path):
        settings_file = tmp_path / "settings.yaml"
        settings_file.write_text("DEFAULT_ENCODING: latin-1\n")
        monkeypatch.setattr(
            settings_module, "get_system_file_path", lambda filename: tmp_path / filename
        )
        monkeypatch.chdir(tmp_path)
        Environment.reset()
        assert Environment.get_default_encoding() == "latin-1"

    def test_missing_value_without_default_raises(self):
        with pytest.raises(KeyError):
            Environment.get("NOT_A_REGISTERED_SETTING")


class TestRegistry:
    def test_builtin_settings_are_registered(self):
        names = {setting.env_var for setting in get_settings_registry()}
        assert {"LOG_LEVEL", "DEFAULT_ENCODING"} <= names

    def test_duplicate_registration_is_rejected(self):
        with pytest.raises(ValueError):
            register_setting(
                package_name="resourcekit",
                env_var="DEFAULT_ENCODING",
                group="Resources",
                description="duplicate",
            )
