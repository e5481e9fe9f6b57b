"""Presence, edit mode and validation state of the API credential."""

import logging
from typing import Optional

from ..backend.base import CredentialBackend
from ..errors import LoadFailure, ValidationFailure
from ..models.credential import ValidationState
from ..models.status import Severity
from .onboarding import OnboardingGate
from .status_notifier import StatusNotifier

logger = logging.getLogger(__name__)


class ApiKeyController:
    """Tracks the credential without ever holding the stored secret.

    Local state is a presence flag, an edit-mode flag, the transient input
    buffer and the buffer's validation state. Validation is advisory:
    ``save`` works regardless of the last validation result.
    """

    def __init__(self, backend: CredentialBackend, notifier: StatusNotifier, onboarding: OnboardingGate):
        """Initialize API key controller.

        Args:
            backend: Credential storage and validation backend
            notifier: Status notifier for user-visible outcomes
            onboarding: Gate cleared when a credential is saved
        """
        self.backend = backend
        self.notifier = notifier
        self.onboarding = onboarding

        self.has_credential = False
        self.editing = False
        self.buffer = ""
        self.validation = ValidationState.UNCHECKED
        self.last_failure: Optional[ValidationFailure] = None

    @property
    def editor_forced(self) -> bool:
        return OnboardingGate.editor_forced(self.has_credential)

    async def check_presence(self) -> bool:
        """Query the backend once for a stored credential.

        Raises:
            LoadFailure: If the backend query fails
        """
        try:
            self.has_credential = bool(await self.backend.has_credential())
        except Exception as e:
            self.has_credential = False
            logger.error(f"Failed to check API key presence: {e}")
            raise LoadFailure(str(e)) from e

        logger.info(f"API key present: {self.has_credential}")
        return self.has_credential

    def open_editor(self) -> None:
        """Enter edit mode with an empty buffer."""
        self.editing = True
        self._reset_buffer()

    def cancel_edit(self) -> bool:
        """Leave edit mode, discarding the buffer.

        Returns:
            False if the editor is forced open because no credential exists
        """
        if self.editor_forced:
            logger.debug("Cannot leave API key editor: no credential stored")
            return False
        self.editing = False
        self._reset_buffer()
        return True

    def update_buffer(self, text: str) -> None:
        """Replace the buffer content; any change invalidates the last check."""
        if text == self.buffer:
            return
        self.buffer = text
        self.validation = ValidationState.UNCHECKED
        self.last_failure = None

    async def validate(self, candidate: Optional[str] = None) -> ValidationState:
        """Check the candidate against the backend.

        A backend exception and a definitive rejection both end in INVALID;
        only the status message (and ``last_failure.errored``) tells them
        apart.

        Args:
            candidate: Credential to check; defaults to the buffer

        Returns:
            Validation state after the check (unchanged for empty input)
        """
        trimmed = (self.buffer if candidate is None else candidate).strip()
        if not trimmed:
            return self.validation
        if candidate is not None:
            self._take_candidate(candidate)

        self.validation = ValidationState.CHECKING
        try:
            accepted = await self.backend.validate_credential(trimmed)
        except Exception as e:
            if self._is_stale(trimmed):
                return self.validation
            logger.warning(f"API key validation call failed: {e}")
            self.last_failure = ValidationFailure(str(e), errored=True)
            self.validation = ValidationState.INVALID
            self.notifier.show(f"API key check failed: {e}", Severity.ERROR)
            return self.validation

        if self._is_stale(trimmed):
            return self.validation

        if accepted:
            self.last_failure = None
            self.validation = ValidationState.VALID
            self.notifier.show("API key is valid", Severity.SUCCESS)
        else:
            self.last_failure = ValidationFailure("API key was rejected")
            self.validation = ValidationState.INVALID
            self.notifier.show("API key is invalid", Severity.WARNING)
        return self.validation

    async def save(self, candidate: Optional[str] = None) -> bool:
        """Persist the candidate credential.

        Args:
            candidate: Credential to store; defaults to the buffer

        Returns:
            True if stored; False for empty input or backend failure
        """
        trimmed = (self.buffer if candidate is None else candidate).strip()
        if not trimmed:
            return False
        if candidate is not None:
            self._take_candidate(candidate)

        try:
            await self.backend.save_credential(trimmed)
        except Exception as e:
            logger.error(f"Failed to save API key: {e}")
            self.notifier.show(f"Failed to save API key: {e}", Severity.ERROR)
            return False

        self.has_credential = True
        self.editing = False
        self._reset_buffer()
        self.onboarding.clear()
        self.notifier.show("API key saved", Severity.SUCCESS)
        return True

    async def delete(self) -> bool:
        """Remove the stored credential and force the editor open.

        Onboarding is not re-derived afterward.
        """
        try:
            await self.backend.delete_credential()
        except Exception as e:
            logger.error(f"Failed to delete API key: {e}")
            self.notifier.show(f"Failed to remove API key: {e}", Severity.ERROR)
            return False

        self.has_credential = False
        self.open_editor()
        self.notifier.show("API key removed", Severity.INFO)
        return True

    def _take_candidate(self, candidate: str) -> None:
        # The buffer only exists while the editor is open
        if not self.editing:
            self.open_editor()
        self.update_buffer(candidate)

    def _is_stale(self, candidate: str) -> bool:
        # The buffer was edited while the check was in flight
        if self.buffer.strip() != candidate:
            logger.debug("Discarding validation result for a superseded API key")
            return True
        return False

    def _reset_buffer(self) -> None:
        self.buffer = ""
        self.validation = ValidationState.UNCHECKED
        self.last_failure = None
