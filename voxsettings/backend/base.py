"""Abstract base classes for the collaborators the settings layer depends on."""

from abc import ABC, abstractmethod
import logging

from ..models.configuration import Configuration

logger = logging.getLogger(__name__)


class ConfigurationBackend(ABC):
    """Persistence backend for the dictation configuration."""

    @abstractmethod
    async def get_configuration(self) -> Configuration:
        """Fetch the currently persisted configuration.

        Raises:
            Exception: On I/O or parse errors
        """
        pass

    @abstractmethod
    async def save_configuration(self, config: Configuration) -> None:
        """Persist a configuration wholesale.

        Raises:
            Exception: On I/O errors or when the backend rejects a value
        """
        pass

    @abstractmethod
    async def reset_configuration(self) -> Configuration:
        """Restore and persist the default configuration.

        Returns:
            The default configuration now in effect
        """
        pass


class CredentialBackend(ABC):
    """Opaque storage and validation of the API credential."""

    @abstractmethod
    async def has_credential(self) -> bool:
        """Return True if a credential is stored."""
        pass

    @abstractmethod
    async def validate_credential(self, candidate: str) -> bool:
        """Check a candidate credential against the remote service.

        Returns:
            True if accepted, False if rejected

        Raises:
            Exception: If the check itself could not be performed
        """
        pass

    @abstractmethod
    async def save_credential(self, candidate: str) -> None:
        """Store the credential, replacing any previous one."""
        pass

    @abstractmethod
    async def delete_credential(self) -> None:
        """Remove the stored credential if there is one."""
        pass


class HotkeyBackend(ABC):
    """Global hotkey registration service."""

    @abstractmethod
    async def rebind_hotkey(self, hotkey: str) -> None:
        """Replace the live global hotkey binding.

        Raises:
            Exception: If the binding is invalid or conflicts with another one
        """
        pass
