"""
Environment Configuration Management Module

Centralized configuration for resourcekit through the Environment class.
Values are looked up, in order, from:

- the settings file (settings.yaml in the per-OS config directory)
- environment variables (after loading .env files)
- defaults declared with :func:`register_setting`
"""

import codecs
import os
from pathlib import Path
from typing import Any, Dict, Optional

from resourcekit.config.settings import (
    NOT_GIVEN,
    get_default_env,
    get_value,
    load_settings,
)


def load_dotenv_files(project_root: Path | None = None):
    """Load environment variables from .env files based on current environment."""
    from dotenv import load_dotenv

    if project_root is None:
        project_root = Path.cwd()

    env_name = os.environ.get("ENV", "development")

    # Later files override earlier ones
    env_files = [
        project_root / ".env",
        project_root / f".env.{env_name}",
        project_root / f".env.{env_name}.local",
    ]

    for env_file in env_files:
        if env_file.exists():
            load_dotenv(env_file, override=False)


class Environment(object):
    """
    Manages configuration values and provides defaults and type conversions.

    Settings are read lazily on first access and cached on the class. Tests
    reset the cache with :meth:`reset`.
    """

    settings: Optional[Dict[str, Any]] = None

    @classmethod
    def load_settings(cls):
        load_dotenv_files()
        cls.settings = load_settings()

    @classmethod
    def get_settings(cls) -> Dict[str, Any]:
        if cls.settings is None:
            cls.load_settings()
        assert cls.settings is not None
        return cls.settings

    @classmethod
    def reset(cls):
        """Drop cached settings so the next access reloads them."""
        cls.settings = None

    @classmethod
    def get(cls, key: str, default: Any = NOT_GIVEN):
        return get_value(key, cls.get_settings(), get_default_env(), default)

    @classmethod
    def get_log_level(cls) -> str:
        """Return desired log level string.

        Priority:
        1) LOG_LEVEL from the environment
        2) If DEBUG env is truthy, return "DEBUG"
        3) RESOURCEKIT_LOG_LEVEL env
        4) LOG_LEVEL from settings.yaml or its registered default
        """
        level = os.getenv("LOG_LEVEL")
        if level:
            return str(level).upper()
        if os.getenv("DEBUG"):
            return "DEBUG"
        level = os.getenv("RESOURCEKIT_LOG_LEVEL")
        if level:
            return str(level).upper()
        return str(cls.get("LOG_LEVEL", "INFO")).upper()

    @classmethod
    def get_default_encoding(cls) -> str:
        """
        The text encoding file resources fall back to.

        Raises:
            ValueError: If the configured label is not a known codec.
        """
        encoding = str(cls.get("DEFAULT_ENCODING", "utf-8"))
        try:
            codecs.lookup(encoding)
        except LookupError as e:
            raise ValueError(f"Unknown DEFAULT_ENCODING '{encoding}'") from e
        return encoding
