"""Data models for the VoxSettings application."""

from .configuration import Configuration, RecordingMode, SETTING_RANGES, range_violations
from .credential import ValidationState
from .launch import LaunchContext
from .status import OutcomeKind, SaveOutcome, Severity, StatusMessage

__all__ = [
    "Configuration",
    "RecordingMode",
    "SETTING_RANGES",
    "range_violations",
    "ValidationState",
    "LaunchContext",
    # Status and outcomes
    "OutcomeKind",
    "SaveOutcome",
    "Severity",
    "StatusMessage",
]
