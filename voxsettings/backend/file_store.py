"""JSON file backend for the dictation configuration."""

import logging
import shutil
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..errors import BackendError
from ..models.configuration import Configuration, range_violations
from .base import ConfigurationBackend

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"
CONFIG_BACKUP_NAME = "config.json.bak"
CONFIG_TEMP_NAME = "config.json.tmp"


class JsonConfigurationBackend(ConfigurationBackend):
    """Stores the configuration as pretty-printed JSON in the app directory."""

    def __init__(self, app_dir: str):
        """Initialize the file backend.

        Args:
            app_dir: Directory holding config.json (created on first write)
        """
        self.app_dir = Path(app_dir)
        self.config_file = self.app_dir / CONFIG_FILE_NAME
        self.backup_file = self.app_dir / CONFIG_BACKUP_NAME

        logger.info(f"JsonConfigurationBackend initialized with app_dir: {self.app_dir}")

    async def get_configuration(self) -> Configuration:
        return self.read_configuration()

    async def save_configuration(self, config: Configuration) -> None:
        problems = range_violations(config)
        if problems:
            raise BackendError("Invalid settings: " + "; ".join(problems))
        self.write_configuration(config)

    async def reset_configuration(self) -> Configuration:
        config = Configuration()
        self.write_configuration(config)
        logger.info("Configuration reset to defaults")
        return config

    def read_configuration(self) -> Configuration:
        """Read the configuration file.

        A missing file is replaced with defaults. A corrupted file is
        copied to config.json.bak and replaced with defaults.

        Returns:
            Persisted (or freshly defaulted) configuration

        Raises:
            BackendError: If the file exists but cannot be read
        """
        if not self.config_file.exists():
            logger.info(f"Config file not found, creating default at {self.config_file}")
            config = Configuration()
            self.write_configuration(config)
            return config

        try:
            content = self.config_file.read_text(encoding="utf-8")
            config = Configuration.model_validate_json(content)
        except OSError as e:
            raise BackendError(f"Failed to read config file {self.config_file}: {e}") from e
        except (UnicodeDecodeError, ValidationError) as e:
            logger.warning(f"Config file corrupted: {e}. Backing up and using defaults.")
            self._backup_corrupted()
            config = Configuration()
            self.write_configuration(config)
            return config

        logger.info(f"Config loaded from {self.config_file}")
        return config

    def write_configuration(self, config: Configuration) -> None:
        """Atomically write the configuration (temp file + rename).

        Raises:
            BackendError: If the directory or file cannot be written
        """
        tmp_path = self.app_dir / CONFIG_TEMP_NAME
        try:
            self.app_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(config.model_dump_json(indent=2), encoding="utf-8")
            tmp_path.replace(self.config_file)
        except OSError as e:
            raise BackendError(f"Failed to write config file {self.config_file}: {e}") from e

        logger.info(f"Config saved to {self.config_file}")

    def _backup_corrupted(self) -> Optional[Path]:
        try:
            shutil.copyfile(self.config_file, self.backup_file)
            return self.backup_file
        except OSError as e:
            logger.warning(f"Failed to create config backup: {e}")
            return None
