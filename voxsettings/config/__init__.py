"""YAML runtime configuration for the VoxSettings tool itself."""

import copy
import os
import yaml
import click
from pathlib import Path
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

APP_NAME = "voxsettings"

DEFAULT_CONFIG: Dict[str, Any] = {
    "storage": {
        "app_dir": None,  # None -> per-user app directory
    },
    "status": {
        "expiry_seconds": 3.0,
    },
    "credentials": {
        "validation_timeout_sec": 10.0,
    },
    "hotkey": {
        "reserved": ["Alt+F4", "Ctrl+Alt+Delete", "Super+L", "Ctrl+Alt+Escape"],
    },
    "logging": {
        "level": "INFO",
        "file_path": None,  # None -> <app_dir>/logs/voxsettings.log
        "console_output": True,
    },
}


class VoxSettingsConfig:
    """VoxSettings runtime configuration loader."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to YAML config file. If None, built-in defaults
                        are used.
        """
        self.config_file = Path(config_path) if config_path else None

        if self.config_file is None:
            logger.info("No configuration file given, using defaults")
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            return

        if not self.config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        logger.info(f"Loading configuration from: {self.config_file}")
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load and parse YAML configuration file over the defaults."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")
        except OSError as e:
            raise ValueError(f"Failed to load configuration: {e}")

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError("Configuration file must contain a mapping")

        config = copy.deepcopy(DEFAULT_CONFIG)
        self._merge(config, loaded)

        # Resolve relative paths
        self._resolve_paths(config)

        logger.info("Configuration loaded successfully")
        return config

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                self._merge(base[key], value)
            else:
                base[key] = value

    def _resolve_paths(self, config: Dict[str, Any]) -> None:
        """Resolve relative paths in configuration relative to config file location."""
        config_dir = self.config_file.parent

        for section, key in (('storage', 'app_dir'), ('logging', 'file_path')):
            value = config.get(section, {}).get(key)
            if value:
                value = os.path.expanduser(str(value))
                if not os.path.isabs(value):
                    value = str(config_dir / value)
                config[section][key] = value

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation (e.g., 'status.expiry_seconds').

        Args:
            key_path: Dot-separated key path
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key_path.split('.')
        value = self.config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return default if value is None else value

    def set(self, key_path: str, value: Any) -> None:
        """Set configuration value using dot notation.

        Args:
            key_path: Dot-separated path to config value
            value: Value to set
        """
        keys = key_path.split('.')
        config_dict = self.config

        # Navigate to the parent dictionary
        for key in keys[:-1]:
            if key not in config_dict:
                config_dict[key] = {}
            config_dict = config_dict[key]

        config_dict[keys[-1]] = value
        logger.debug(f"Configuration key '{key_path}' set to: {value}")

    def get_app_directory(self) -> str:
        """Directory holding the dictation config and credential files."""
        app_dir = self.get('storage.app_dir')
        if not app_dir:
            app_dir = click.get_app_dir(APP_NAME)
        return str(Path(app_dir).absolute())

    def get_log_file_path(self) -> str:
        log_path = self.get('logging.file_path')
        if not log_path:
            log_path = Path(self.get_app_directory()) / "logs" / f"{APP_NAME}.log"
        return str(log_path)
