"""Status and outcome models shown to the user."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Severity(Enum):
    """Visual weight of a status message."""
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    """A single ephemeral status line."""
    message: str
    severity: Severity = Severity.INFO
    shown_at: datetime = field(default_factory=datetime.now)


class OutcomeKind(Enum):
    """Result of a save or reset action."""
    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"  # Persisted, but the hotkey rebind failed
    FAILURE = "failure"


_SEVERITY_BY_KIND = {
    OutcomeKind.SUCCESS: Severity.SUCCESS,
    OutcomeKind.PARTIAL_SUCCESS: Severity.WARNING,
    OutcomeKind.FAILURE: Severity.ERROR,
}


@dataclass(frozen=True)
class SaveOutcome:
    """Tagged result of SaveCoordinator.save / SaveCoordinator.reset."""
    kind: OutcomeKind
    message: str
    error: Optional[str] = None

    @property
    def severity(self) -> Severity:
        return _SEVERITY_BY_KIND[self.kind]

    @property
    def persisted(self) -> bool:
        """True when the configuration reached the backend."""
        return self.kind is not OutcomeKind.FAILURE

    @classmethod
    def success(cls, message: str) -> "SaveOutcome":
        return cls(OutcomeKind.SUCCESS, message)

    @classmethod
    def partial(cls, message: str, error: str) -> "SaveOutcome":
        return cls(OutcomeKind.PARTIAL_SUCCESS, message, error)

    @classmethod
    def failure(cls, message: str, error: Optional[str] = None) -> "SaveOutcome":
        return cls(OutcomeKind.FAILURE, message, error)
