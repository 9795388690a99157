"""Configuration management with JSON file persistence."""

import json
import os
from dataclasses import asdict, fields
from typing import Any, Callable, Dict, List, Optional

from .config.defaults import DEFAULT_CONFIG, DEFAULT_PATHS
from .logging_config import get_logger
from .models.config import SecurityConfig
from .utils import ensure_directory_exists

logger = get_logger("config_manager")

IMAGE_SERVICES = ('fake', 'opencv')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigManager:
    """Manages system configuration with file persistence."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_PATHS["config_file"]
        self._config: Optional[SecurityConfig] = None
        self._config_change_callbacks: List[Callable[[SecurityConfig], None]] = []

        self.load_config()

    def load_config(self) -> SecurityConfig:
        """Load configuration from file or create default."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    config_dict = json.load(f)
                self._config = SecurityConfig(**self._known_fields(config_dict))
            except (json.JSONDecodeError, TypeError, AttributeError) as e:
                logger.error(f"Error loading config: {e}. Using defaults.")
                self._config = SecurityConfig(**DEFAULT_CONFIG)
        else:
            self._config = SecurityConfig(**DEFAULT_CONFIG)
            self.save_config()

        return self._config

    def save_config(self) -> None:
        """Save current configuration to file."""
        if self._config is None:
            return

        directory = os.path.dirname(self.config_path)
        if directory:
            ensure_directory_exists(directory)

        with open(self.config_path, 'w') as f:
            json.dump(asdict(self._config), f, indent=2)

    def get_config(self) -> SecurityConfig:
        """Get current configuration."""
        if self._config is None:
            return self.load_config()
        return self._config

    def update_config(self, **kwargs) -> None:
        """Update configuration with new values and notify callbacks."""
        if self._config is None:
            self.load_config()

        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
            else:
                logger.warning(f"Ignoring unknown config key: {key}")

        self.save_config()

        for callback in self._config_change_callbacks:
            try:
                callback(self._config)
            except Exception as e:
                logger.error(f"Error in config change callback: {e}")

    def add_config_change_callback(self, callback: Callable[[SecurityConfig], None]) -> None:
        """Register a callback run after every update_config call."""
        self._config_change_callbacks.append(callback)

    def validate_config(self) -> bool:
        """Validate current configuration."""
        if self._config is None:
            return False

        try:
            return self._check_values(self._config)
        except (TypeError, AttributeError) as e:
            logger.error(f"Config has a value of the wrong type: {e}")
            return False

    @staticmethod
    def _check_values(config: SecurityConfig) -> bool:
        if config.image_service not in IMAGE_SERVICES:
            return False

        if not 0.0 <= config.confidence_threshold <= 100.0:
            return False

        if not 1 <= config.image_quality <= 100:
            return False

        if config.max_sensors < 0:
            return False

        if config.log_level.upper() not in LOG_LEVELS:
            return False

        if not config.database_file:
            return False

        return True

    @staticmethod
    def _known_fields(config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Merge file values over defaults, dropping unknown keys."""
        known = {f.name for f in fields(SecurityConfig)}
        merged = dict(DEFAULT_CONFIG)
        merged.update({key: value for key, value in config_dict.items() if key in known})
        return merged
