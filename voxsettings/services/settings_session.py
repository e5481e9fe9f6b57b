"""Settings view controller: activation, edits and guarded actions."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Set, TypeVar

from ..backend.base import ConfigurationBackend, CredentialBackend, HotkeyBackend
from ..errors import LoadFailure, SettingsError
from ..models.credential import ValidationState
from ..models.launch import LaunchContext
from ..models.status import SaveOutcome, Severity
from .api_key_controller import ApiKeyController
from .config_store import ConfigStore
from .onboarding import OnboardingGate
from .save_coordinator import SaveCoordinator
from .status_notifier import StatusNotifier

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Operation names used for busy tracking
LOAD = "load"
SAVE = "save"
RESET = "reset"
VALIDATE_API_KEY = "validate_api_key"
SAVE_API_KEY = "save_api_key"
DELETE_API_KEY = "delete_api_key"


class SettingsSession:
    """Owns the settings components for one opening of the settings view.

    The view disables a control while its operation is in flight; this class
    enforces the same rule by refusing a second invocation of an operation
    that has not finished yet.
    """

    def __init__(self,
                 config_backend: ConfigurationBackend,
                 credential_backend: CredentialBackend,
                 hotkey_backend: HotkeyBackend,
                 notifier: Optional[StatusNotifier] = None):
        """Initialize settings session.

        Args:
            config_backend: Configuration persistence backend
            credential_backend: Credential storage/validation backend
            hotkey_backend: Global hotkey registration service
            notifier: Status notifier; a default one is created when omitted
        """
        self.notifier = notifier or StatusNotifier()
        self.store = ConfigStore(config_backend)
        self.onboarding = OnboardingGate()
        self.api_keys = ApiKeyController(credential_backend, self.notifier, self.onboarding)
        self.coordinator = SaveCoordinator(self.store, config_backend, hotkey_backend, self.notifier)

        self.launch_context = LaunchContext()
        self.activated = False
        self._busy: Set[str] = set()

    @property
    def form_available(self) -> bool:
        """False when the configuration failed to load."""
        return self.store.is_loaded

    @property
    def onboarding_active(self) -> bool:
        return self.onboarding.active

    def is_busy(self, operation: str) -> bool:
        return operation in self._busy

    async def activate(self, launch_context: Optional[LaunchContext] = None) -> bool:
        """Load configuration and credential presence, then derive onboarding.

        Both loads run independently; a failure of one does not stop the
        other. Failures are reported as a status message.

        Args:
            launch_context: How the view was opened

        Returns:
            True if the settings form can be shown
        """
        self.launch_context = launch_context or LaunchContext()
        result = await self._exclusive(LOAD, self._activate)
        return bool(result)

    async def _activate(self) -> bool:
        config_result, presence_result = await asyncio.gather(
            self.store.load(), self.api_keys.check_presence(), return_exceptions=True
        )

        problems = []
        for label, result in (("settings", config_result), ("API key status", presence_result)):
            if isinstance(result, LoadFailure):
                problems.append(f"Failed to load {label}: {result}")
            elif isinstance(result, BaseException):
                raise result
        if problems:
            self.notifier.show("; ".join(problems), Severity.ERROR)

        self.onboarding.derive(self.launch_context.onboarding, self.api_keys.has_credential)
        if self.api_keys.editor_forced:
            self.api_keys.open_editor()

        self.activated = True
        logger.info(f"Settings session activated (form_available={self.form_available}, "
                    f"onboarding={self.onboarding_active})")
        return self.form_available

    def edit(self, field: str, value: Any) -> bool:
        """Apply an edit to the in-memory configuration; never saves.

        Returns:
            True if applied; False if rejected (reported as a status)
        """
        try:
            self.store.edit(field, value)
        except SettingsError as e:
            self.notifier.show(str(e), Severity.ERROR)
            return False
        return True

    async def save(self) -> Optional[SaveOutcome]:
        return await self._exclusive(SAVE, self.coordinator.save)

    async def reset(self) -> Optional[SaveOutcome]:
        return await self._exclusive(RESET, self.coordinator.reset)

    async def validate_api_key(self, candidate: Optional[str] = None) -> Optional[ValidationState]:
        return await self._exclusive(VALIDATE_API_KEY, lambda: self.api_keys.validate(candidate))

    async def save_api_key(self, candidate: Optional[str] = None) -> Optional[bool]:
        return await self._exclusive(SAVE_API_KEY, lambda: self.api_keys.save(candidate))

    async def delete_api_key(self) -> Optional[bool]:
        return await self._exclusive(DELETE_API_KEY, self.api_keys.delete)

    def close(self) -> None:
        """Tear down the view: drop the pending status expiry."""
        self.notifier.close()
        logger.info("Settings session closed")

    async def _exclusive(self, operation: str, action: Callable[[], Awaitable[T]]) -> Optional[T]:
        if operation in self._busy:
            logger.warning(f"Ignoring '{operation}' request: already in progress")
            return None

        self._busy.add(operation)
        try:
            return await action()
        finally:
            self._busy.discard(operation)
