"""Launch context parsed from the activation parameter."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs

_TRUTHY = {"", "1", "true", "yes", "on"}


@dataclass(frozen=True)
class LaunchContext:
    """How the settings view was opened."""
    onboarding: bool = False  # Activation asked for the first-run flow
    parameter: Optional[str] = None

    @classmethod
    def from_parameter(cls, parameter: Optional[str]) -> "LaunchContext":
        """Parse an activation parameter such as ``?onboarding=1``.

        Accepted forms: ``onboarding``, ``onboarding=<truthy>`` and
        ``view=onboarding``, optionally prefixed with ``?`` or ``#`` and
        mixed with unrelated query arguments.

        Args:
            parameter: Raw activation parameter, or None when absent

        Returns:
            Parsed launch context
        """
        if not parameter:
            return cls(onboarding=False, parameter=parameter)

        query = parameter.strip().lstrip("?#")
        args = parse_qs(query, keep_blank_values=True)

        onboarding = any(value.strip().lower() in _TRUTHY for value in args.get("onboarding", []))
        if not onboarding:
            onboarding = "onboarding" in [value.strip().lower() for value in args.get("view", [])]

        return cls(onboarding=onboarding, parameter=parameter)
