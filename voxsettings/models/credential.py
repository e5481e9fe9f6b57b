"""Credential-related state models."""

from enum import Enum


class ValidationState(Enum):
    """Validation status of the credential input buffer."""
    UNCHECKED = "unchecked"
    CHECKING = "checking"
    VALID = "valid"
    INVALID = "invalid"
