"""Services layer for settings reconciliation."""

from .status_notifier import StatusNotifier
from .config_store import ConfigStore
from .onboarding import OnboardingGate
from .api_key_controller import ApiKeyController
from .save_coordinator import SaveCoordinator
from .settings_session import SettingsSession

__all__ = [
    "StatusNotifier",
    "ConfigStore",
    "OnboardingGate",
    "ApiKeyController",
    "SaveCoordinator",
    "SettingsSession",
]
