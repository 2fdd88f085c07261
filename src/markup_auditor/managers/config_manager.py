# src/markup_auditor/managers/config_manager.py
import json
import logging
from typing import Any, Dict, Optional

from markup_auditor.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


def lookup_nested(config: Dict[str, Any], key_path: str, default: Optional[Any] = None) -> Any:
    """
    Safely retrieves a nested value from a settings mapping.
    Uses a dot as a separator, e.g., 'rules.max_nesting_depth'.
    """
    value: Any = config
    for key in key_path.split('.'):
        if isinstance(value, dict):
            value = value.get(key)
        else:
            return default
    return value if value is not None else default


class ConfigManager:
    """
    A singleton class to manage the application's configuration.
    It loads settings from the packaged settings.json and allows for in-memory modifications.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_all(self) -> Dict[str, Any]:
        """Returns the entire current configuration dictionary."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        return lookup_nested(self._config, key_path, default)

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a nested value in the in-memory configuration.
        e.g., 'locator.strategy', 'source'
        """
        keys = key_path.split('.')
        d = self._config
        for key in keys[:-1]:
            d = d.setdefault(key, {})
            if not isinstance(d, dict):
                logger.error("Cannot set value: '%s' is not a dictionary.", key)
                return False

        # Cast the new value to the type of the old one
        original_value = d.get(keys[-1])
        if original_value is not None and not isinstance(original_value, dict):
            try:
                value = type(original_value)(value)
            except (ValueError, TypeError):
                logger.warning(
                    "Could not cast new value for '%s' to type %s. Storing as string.",
                    key_path, type(original_value).__name__
                )

        d[keys[-1]] = value
        logger.info("Configuration updated: %s = %s", key_path, value)
        return True

    def reset(self):
        """Resets the in-memory configuration from the settings.json file."""
        try:
            config_path = PathUtils.get_settings_path()
            if not config_path.exists():
                logger.warning("settings.json not found at %s. Using empty config.", config_path)
                self._config = {}
                return
            with open(config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
            logger.debug("Configuration has been (re)loaded from settings.json.")
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to load settings.json: %s", e, exc_info=True)
            self._config = {}


config_manager = ConfigManager()
