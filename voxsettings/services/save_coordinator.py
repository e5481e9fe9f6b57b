"""Commits configuration changes and rebinds the hotkey when it changed."""

import logging
from typing import Optional

from ..backend.base import ConfigurationBackend, HotkeyBackend
from ..errors import PersistFailure, SideEffectFailure
from ..models.configuration import Configuration
from ..models.status import SaveOutcome
from .config_store import ConfigStore
from .status_notifier import StatusNotifier

logger = logging.getLogger(__name__)


class SaveCoordinator:
    """Sequences persistence and the dependent hotkey side effect.

    The rebind is only issued after the configuration write has been
    confirmed, and only when the hotkey actually differs from what was
    live before. Outcomes are SUCCESS, PARTIAL_SUCCESS (saved, but the
    hotkey rebind failed) or FAILURE (nothing saved, hotkey untouched).
    """

    def __init__(self,
                 store: ConfigStore,
                 backend: ConfigurationBackend,
                 hotkeys: HotkeyBackend,
                 notifier: StatusNotifier):
        """Initialize save coordinator.

        Args:
            store: Source of the configuration to commit
            backend: Configuration persistence backend
            hotkeys: Global hotkey registration service
            notifier: Receives the outcome of every save/reset
        """
        self.store = store
        self.backend = backend
        self.hotkeys = hotkeys
        self.notifier = notifier

    async def save(self, local_config: Optional[Configuration] = None) -> SaveOutcome:
        """Persist the configuration and rebind the hotkey if it changed.

        The persisted configuration is re-fetched first, so the hotkey is
        compared with what is live rather than with the snapshot loaded
        when the view opened.

        Args:
            local_config: Configuration to commit; defaults to the store's copy

        Returns:
            The outcome, also shown through the status notifier
        """
        if local_config is None:
            if not self.store.is_loaded:
                return self._report(SaveOutcome.failure("Cannot save: settings are not loaded"))
            local_config = self.store.snapshot()

        try:
            live = await self.backend.get_configuration()
            previous_hotkey = live.hotkey
        except Exception as e:
            logger.error(f"Failed to read persisted configuration before save: {e}")
            return self._report(SaveOutcome.failure(f"Failed to save settings: {e}", str(e)))

        try:
            await self.backend.save_configuration(local_config)
        except Exception as e:
            logger.error(f"Failed to persist configuration: {e}")
            return self._report(SaveOutcome.failure(f"Failed to save settings: {e}", str(e)))

        logger.info("Configuration persisted")

        if previous_hotkey == local_config.hotkey:
            return self._report(SaveOutcome.success("Settings saved"))

        try:
            await self._rebind(local_config.hotkey)
        except SideEffectFailure as e:
            return self._report(SaveOutcome.partial(
                f"Settings saved, but the hotkey could not be updated: {e}", str(e)))

        return self._report(SaveOutcome.success("Settings saved"))

    async def reset(self) -> SaveOutcome:
        """Replace the configuration with defaults and rebind if the hotkey moved.

        Returns:
            The outcome, also shown through the status notifier
        """
        if not self.store.is_loaded:
            return self._report(SaveOutcome.failure("Cannot reset: settings are not loaded"))

        previous_hotkey = self.store.config.hotkey

        try:
            config = await self.store.reset()
        except PersistFailure as e:
            return self._report(SaveOutcome.failure(f"Failed to reset settings: {e}", str(e)))

        if config.hotkey == previous_hotkey:
            return self._report(SaveOutcome.success("Settings reset to defaults"))

        try:
            await self._rebind(config.hotkey)
        except SideEffectFailure as e:
            return self._report(SaveOutcome.partial(
                f"Settings reset to defaults, but the hotkey could not be updated: {e}", str(e)))

        return self._report(SaveOutcome.success("Settings reset to defaults"))

    async def _rebind(self, hotkey: str) -> None:
        logger.info(f"Rebinding global hotkey to {hotkey}")
        try:
            await self.hotkeys.rebind_hotkey(hotkey)
        except Exception as e:
            logger.error(f"Failed to rebind hotkey to {hotkey}: {e}")
            raise SideEffectFailure(str(e), hotkey) from e

    def _report(self, outcome: SaveOutcome) -> SaveOutcome:
        self.notifier.show(outcome.message, outcome.severity)
        return outcome
