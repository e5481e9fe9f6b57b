"""In-memory copy of the persisted configuration."""

import logging
from typing import Any, Optional

from pydantic import ValidationError

from ..backend.base import ConfigurationBackend
from ..errors import InvalidSettingError, LoadFailure, PersistFailure, UnknownSettingError
from ..models.configuration import Configuration

logger = logging.getLogger(__name__)


class ConfigStore:
    """Owns the single authoritative in-memory Configuration.

    The instance is replaced wholesale on load and reset and mutated field by
    field on edit. Nothing here writes to the backend except ``reset``, which
    asks the backend for defaults.
    """

    def __init__(self, backend: ConfigurationBackend):
        self.backend = backend
        self.config: Optional[Configuration] = None
        self.load_error: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self.config is not None

    async def load(self) -> Configuration:
        """Fetch the persisted configuration and make it the in-memory copy.

        Returns:
            The loaded configuration

        Raises:
            LoadFailure: If the backend raises or returns malformed data; the
                store then holds no configuration
        """
        self.config = None
        self.load_error = None

        try:
            result = await self.backend.get_configuration()
            config = self._coerce(result)
        except Exception as e:
            self.load_error = str(e)
            logger.error(f"Failed to load configuration: {e}")
            raise LoadFailure(str(e)) from e

        self.config = config
        logger.info("Configuration loaded")
        return self.config

    def edit(self, field: str, value: Any) -> None:
        """Apply a single setting to the in-memory copy.

        Only the value's type is checked; range checks happen on save.

        Raises:
            LoadFailure: If no configuration is loaded
            UnknownSettingError: If ``field`` is not a setting
            InvalidSettingError: If ``value`` has the wrong type
        """
        if self.config is None:
            raise LoadFailure("Settings are not loaded")
        if field not in Configuration.model_fields:
            raise UnknownSettingError(f"Unknown setting: {field}")

        try:
            setattr(self.config, field, value)
        except ValidationError as e:
            message = e.errors()[0]["msg"] if e.errors() else str(e)
            raise InvalidSettingError(f"Invalid value for {field}: {value!r} ({message})") from e

        logger.debug(f"Setting '{field}' set to: {value!r}")

    async def reset(self) -> Configuration:
        """Replace the in-memory copy with backend defaults.

        Returns:
            The new configuration, so callers can compare it with the old one

        Raises:
            PersistFailure: If the backend fails; the previous copy is kept
        """
        try:
            result = await self.backend.reset_configuration()
            config = self._coerce(result)
        except Exception as e:
            logger.error(f"Failed to reset configuration: {e}")
            raise PersistFailure(str(e)) from e

        self.config = config
        logger.info("Configuration replaced with defaults")
        return self.config

    def snapshot(self) -> Configuration:
        """Detached copy of the in-memory configuration."""
        if self.config is None:
            raise LoadFailure("Settings are not loaded")
        return self.config.model_copy(deep=True)

    @staticmethod
    def _coerce(result: Any) -> Configuration:
        # Fresh instance so nothing outside the store aliases the copy
        if isinstance(result, Configuration):
            return result.model_copy(deep=True)
        return Configuration.model_validate(result)
