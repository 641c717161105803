"""
User-level settings for the fargin command line.
Handles loading settings and falling back to defaults.
"""
import json
import os
import pathlib
from typing import Any, Dict, Optional

from ..utils.logger import get_logger

logger = get_logger(__name__)

SETTINGS_ENV = "FARGIN_SETTINGS"
SETTINGS_DIR = pathlib.Path.home() / ".config" / "fargin"
SETTINGS_FILE = SETTINGS_DIR / "settings.json"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "output": {
        "no_color": False
    },
    "suggest": {
        "limit": 5
    },
    "logging": {
        "level": "WARNING",
        "log_to_file": False,
        "directory": str(SETTINGS_DIR / "logs")
    }
}


def settings_path() -> pathlib.Path:
    """Settings file location, honouring FARGIN_SETTINGS."""
    override = os.environ.get(SETTINGS_ENV)
    if override:
        return pathlib.Path(os.path.expanduser(override))
    return SETTINGS_FILE


class FarginSettings:
    """Settings manager for the fargin CLI (singleton)."""

    _instance: Optional['FarginSettings'] = None
    _settings: Dict[str, Any]

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._settings = {}
            cls._instance._loaded = False
        return cls._instance

    def _ensure_loaded(self) -> None:
        """Ensure settings are loaded."""
        if not self._loaded:
            self._load()

    def _load(self) -> None:
        """Load settings from file or use defaults."""
        path = settings_path()
        if path.exists():
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
                if not isinstance(loaded, dict):
                    raise ValueError("settings root must be an object")
                self._settings = self._deep_merge(DEFAULT_SETTINGS, loaded)
            except (json.JSONDecodeError, ValueError, OSError) as e:
                logger.warning(f"Could not read {path}: {e}")
                self._settings = self._deep_copy(DEFAULT_SETTINGS)
        else:
            self._settings = self._deep_copy(DEFAULT_SETTINGS)
        self._loaded = True

    def _deep_copy(self, d: Dict[str, Any]) -> Dict[str, Any]:
        """Deep copy a dictionary."""
        return json.loads(json.dumps(d))

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries, override takes precedence."""
        result = self._deep_copy(base)
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def reload(self) -> None:
        """Force reload settings from file."""
        self._loaded = False
        self._ensure_loaded()

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get setting by dot-notation path.

        Example: settings.get('suggest.limit', 5)
        """
        self._ensure_loaded()
        value: Any = self._settings

        for key in path.split('.'):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value if value is not None else default

    def get_with_default(self, path: str) -> Any:
        """Get setting with fallback to DEFAULT_SETTINGS."""
        value = self.get(path)
        if value is not None:
            return value

        default_value: Any = DEFAULT_SETTINGS
        for key in path.split('.'):
            if isinstance(default_value, dict) and key in default_value:
                default_value = default_value[key]
            else:
                return None
        return default_value

    def to_dict(self) -> Dict[str, Any]:
        """Return all settings as a dictionary."""
        self._ensure_loaded()
        return self._deep_copy(self._settings)


def get_settings() -> FarginSettings:
    """Get the singleton settings instance."""
    return FarginSettings()
