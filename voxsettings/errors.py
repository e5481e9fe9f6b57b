"""Error types raised by the settings layer and its backends."""


class SettingsError(Exception):
    """Base class for all settings-layer failures."""


class LoadFailure(SettingsError):
    """Configuration or credential presence could not be fetched.

    This is the only failure that makes the settings form unusable.
    """


class ValidationFailure(SettingsError):
    """Credential check returned false or the check itself errored."""

    def __init__(self, message: str, errored: bool = False):
        super().__init__(message)
        self.errored = errored


class PersistFailure(SettingsError):
    """Configuration or credential could not be written; prior state is kept."""


class SideEffectFailure(SettingsError):
    """Hotkey rebinding failed after the configuration was persisted."""

    def __init__(self, message: str, hotkey: str):
        super().__init__(message)
        self.hotkey = hotkey


class UnknownSettingError(SettingsError):
    """Edit targeted a field the configuration does not have."""


class InvalidSettingError(SettingsError, ValueError):
    """Edit value has the wrong type for its field."""


class BackendError(Exception):
    """Raised by backend adapters on I/O, network or validation problems."""


class HotkeyError(BackendError):
    """Hotkey string is malformed or conflicts with a reserved binding."""
