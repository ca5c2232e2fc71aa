"""
Configuration loader for ssmsession.yml.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path

import yaml
from pydantic import ValidationError

from ssmsession.config.models import SessionSettings
from ssmsession.config.settings import CONFIG_FILE_NAME, DEFAULT_CONFIG_PATH, get_env

logger = logging.getLogger("ssm-session")

# Configuration paths
CONFIG_PATH = Path(get_env("config_path", DEFAULT_CONFIG_PATH) or DEFAULT_CONFIG_PATH).expanduser()
SESSION_CONFIG_FILE = CONFIG_PATH / CONFIG_FILE_NAME


class SessionConfig:
    """Manages ssm-session configuration from YAML file."""

    _lock = threading.Lock()
    _config: dict = {}
    _typed_config: SessionSettings | None = None
    _last_load: float = 0
    _cache_duration: int = 60
    _config_file: Path = SESSION_CONFIG_FILE

    @classmethod
    def use_file(cls, path: str | Path) -> None:
        """Point the loader at another config file and drop the cache."""
        with cls._lock:
            cls._config_file = Path(path).expanduser()
            cls._config = {}
            cls._typed_config = None
            cls._last_load = 0

    @classmethod
    def load(cls) -> dict:
        """Load configuration from YAML file."""
        now = time.time()
        if cls._config and (now - cls._last_load) < cls._cache_duration:
            return cls._config

        with cls._lock:
            # Double-check after acquiring the lock
            now = time.time()
            if cls._config and (now - cls._last_load) < cls._cache_duration:
                return cls._config
            return cls._load_locked(now)

    @classmethod
    def _load_locked(cls, now: float) -> dict:
        """Load config while holding ``_lock``. Called from :meth:`load`."""
        defaults = SessionSettings().model_dump()
        config_file = cls._config_file

        if not config_file.exists():
            logger.debug(f"Session config not found, using defaults: {config_file}")
            cls._config = defaults
            cls._typed_config = SessionSettings.model_validate(cls._config)
            cls._last_load = now
            return cls._config

        try:
            with open(config_file, "r") as f:
                file_config = yaml.safe_load(f) or {}
            if not isinstance(file_config, dict):
                raise ValueError("top-level YAML node must be a mapping")

            merged = cls._deep_merge(defaults, file_config)
            cls._typed_config = SessionSettings.model_validate(merged)
            cls._config = merged
            logger.info(f"Loaded session config from {config_file}")
        except (OSError, yaml.YAMLError, ValueError, ValidationError) as e:
            logger.error(f"Error loading session config: {e}")
            cls._config = defaults
            cls._typed_config = SessionSettings.model_validate(defaults)

        cls._last_load = now
        return cls._config

    @classmethod
    def _deep_merge(cls, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = cls._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    @classmethod
    def get(cls, *keys: str, default: object = None) -> object:
        """Get a nested config value using multiple keys."""
        config = cls.load()
        for key in keys:
            if isinstance(config, dict) and key in config:
                config = config[key]
            else:
                return default
        return config

    @classmethod
    def settings(cls) -> SessionSettings:
        """Get typed configuration as a SessionSettings instance."""
        cls.load()
        assert cls._typed_config is not None
        return cls._typed_config

    @classmethod
    def reload(cls) -> None:
        """Force reload configuration."""
        with cls._lock:
            cls._last_load = 0
            cls._config = {}
        cls.load()
