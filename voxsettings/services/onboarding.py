"""First-run presentation state."""

import logging

logger = logging.getLogger(__name__)


class OnboardingGate:
    """Onboarding flag derived once per session.

    The flag is ``requested and not has_credential`` at startup. After the
    first derivation, or once cleared by a credential save, it never
    re-derives for the rest of the session.
    """

    def __init__(self):
        self._active = False
        self._settled = False

    @property
    def active(self) -> bool:
        return self._active

    def derive(self, requested: bool, has_credential: bool) -> bool:
        if self._settled:
            return self._active
        self._settled = True
        self._active = bool(requested) and not has_credential
        logger.info(f"Onboarding {'active' if self._active else 'inactive'} "
                    f"(requested={requested}, has_credential={has_credential})")
        return self._active

    def clear(self) -> None:
        if self._active:
            logger.info("Onboarding completed")
        self._active = False
        self._settled = True

    @staticmethod
    def editor_forced(has_credential: bool) -> bool:
        """Without a credential the key editor can never be closed."""
        return not has_credential
