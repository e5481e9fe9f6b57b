"""Console presentation of the settings view."""

from .settings_screen import SettingsScreen

__all__ = ["SettingsScreen"]
