"""VoxSettings - settings editor and reconciliation layer for a dictation utility."""

__version__ = "0.1.0"
__description__ = "View, edit, validate, save and reset dictation settings"

from .services.settings_session import SettingsSession

__all__ = ["SettingsSession", "__version__"]
