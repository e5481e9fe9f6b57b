"""Backend collaborators for configuration, credentials and hotkeys."""

from .base import ConfigurationBackend, CredentialBackend, HotkeyBackend
from .file_store import JsonConfigurationBackend
from .credentials import FileCredentialBackend
from .hotkey import PubSubHotkeyBinder, parse_hotkey

__all__ = [
    "ConfigurationBackend",
    "CredentialBackend",
    "HotkeyBackend",
    "JsonConfigurationBackend",
    "FileCredentialBackend",
    "PubSubHotkeyBinder",
    "parse_hotkey",
]
