"""Configuration for IconBaker: per-user defaults read from a JSON file."""

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

from iconbaker.models import FitPolicy, ResamplePolicy

logger = logging.getLogger(__name__)


def _get_data_dir() -> Path:
    """Return the IconBaker data directory, platform-appropriate.

    Windows: %APPDATA%\\IconBaker   (e.g. C:\\Users\\<user>\\AppData\\Roaming\\IconBaker)
    Other:   ~/.iconbaker
    """
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "IconBaker"
    return Path.home() / ".iconbaker"


DATA_DIR = _get_data_dir()
CONFIG_FILE = DATA_DIR / "config.json"
LOG_FILE = DATA_DIR / "iconbaker_log.txt"
CONFIG_ENV_VAR = "ICONBAKER_CONFIG"

DEFAULT_CONFIG = {
    "defaults": {
        "resample": "nearest",  # "nearest", "linear", "cubic"
        "fit": "exact"          # "exact" or "proportional"
    },
    "logging": {
        "level": "WARNING",
        "file": False
    }
}


def default_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_FILE


class Config:
    """Read-only configuration; saved values are merged over the defaults."""

    def __init__(self, config_path: Path | None = None):
        self.config_path = config_path or default_config_path()
        self.data: dict[str, Any] = {}
        self.load()

    def load(self):
        """Load config from disk, falling back to defaults."""
        saved = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    saved = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Ignoring unreadable config %s: %s", self.config_path, e)
                saved = {}
            if not isinstance(saved, dict):
                logger.warning("Ignoring config %s: top level is not an object",
                               self.config_path)
                saved = {}
        self.data = self._deep_merge(DEFAULT_CONFIG, saved)

    def get(self, *keys: str, default: Any = None) -> Any:
        """Get a nested config value. Example: config.get('defaults', 'fit')"""
        value = self.data
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
                if value is None:
                    return default
            else:
                return default
        return value

    @property
    def resample(self) -> ResamplePolicy:
        return self._policy(ResamplePolicy, "resample")

    @property
    def fit(self) -> FitPolicy:
        return self._policy(FitPolicy, "fit")

    @property
    def log_level(self) -> int:
        name = str(self.get("logging", "level", default="WARNING")).upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            logger.warning("Unknown log level '%s', using WARNING", name)
            return logging.WARNING
        return level

    @property
    def log_to_file(self) -> bool:
        return bool(self.get("logging", "file", default=False))

    def _policy(self, enum_type, key: str):
        fallback = DEFAULT_CONFIG["defaults"][key]
        name = self.get("defaults", key, default=fallback)
        try:
            return enum_type(name)
        except ValueError:
            logger.warning("Unknown %s policy '%s' in %s, using '%s'",
                           key, name, self.config_path, fallback)
            return enum_type(fallback)

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge override into base, returning a new dict."""
        result = dict(base)
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
