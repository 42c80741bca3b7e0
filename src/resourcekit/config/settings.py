"""Utility functions for reading configuration files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml

from resourcekit.config.configuration import get_settings_registry, register_setting

# Constants
SETTINGS_FILE = "settings.yaml"
MISSING_MESSAGE = "Missing required environment variable: {}"
NOT_GIVEN = object()

register_setting(
    package_name="resourcekit",
    env_var="LOG_LEVEL",
    group="Logging",
    description="Log level for resourcekit loggers (DEBUG, INFO, WARNING, ERROR).",
    default="INFO",
    enum=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
)
register_setting(
    package_name="resourcekit",
    env_var="DEFAULT_ENCODING",
    group="Resources",
    description=(
        "Text encoding used by file resources when neither the caller nor a "
        "previous read supplied one."
    ),
    default="utf-8",
)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def get_system_file_path(filename: str) -> Path:
    """Return the path to the configuration file for the current OS."""
    import platform

    os_name = platform.system()
    if os_name in {"Linux", "Darwin"}:
        return Path.home() / ".config" / "resourcekit" / filename
    elif os_name == "Windows":
        appdata = os.getenv("APPDATA")
        if appdata is not None:
            return Path(appdata) / "resourcekit" / filename
        return Path("data") / filename
    return Path("data") / filename


# ---------------------------------------------------------------------------
# Settings helpers
# ---------------------------------------------------------------------------


def get_default_env() -> Dict[str, Any]:
    """Return the defaults of every registered setting keyed by variable name."""
    return {setting.env_var: setting.default for setting in get_settings_registry()}


def load_settings(settings_file: Path | None = None) -> Dict[str, Any]:
    """Load settings from the YAML settings file."""
    if settings_file is None:
        settings_file = get_system_file_path(SETTINGS_FILE)

    settings: Dict[str, Any] = {}
    if settings_file.exists():
        with open(settings_file, "r") as f:
            settings = yaml.safe_load(f) or {}

    return settings


def save_settings(settings: Dict[str, Any], settings_file: Path | None = None) -> None:
    """Save settings to the YAML settings file."""
    if settings_file is None:
        settings_file = get_system_file_path(SETTINGS_FILE)

    os.makedirs(os.path.dirname(settings_file), exist_ok=True)
    with open(settings_file, "w") as f:
        yaml.dump(settings, f)


def get_value(
    key: str,
    settings: Dict[str, Any],
    default_env: Dict[str, Any],
    default: Any = NOT_GIVEN,
) -> Any:
    """Retrieve a configuration value from settings, the environment or defaults."""
    value = settings.get(key)
    if value is None or str(value) == "":
        value = os.environ.get(key)

    if value is None:
        value = default_env.get(key)

    if value is None:
        value = default

    if value is not NOT_GIVEN:
        return value
    raise KeyError(MISSING_MESSAGE.format(key))
