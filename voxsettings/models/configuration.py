"""Configuration model edited by the settings view."""

from enum import Enum
from typing import Dict, List, Tuple, Union

from pydantic import BaseModel, ConfigDict

from ..errors import HotkeyError
from .hotkey import parse_hotkey


class RecordingMode(str, Enum):
    """How the global hotkey drives a recording."""
    TOGGLE = "toggle"
    PUSH_TO_TALK = "push_to_talk"


LOG_LEVELS = ("trace", "debug", "info", "warn", "error")

Number = Union[int, float]

# Inclusive bounds enforced by the backend on save, not on edit
SETTING_RANGES: Dict[str, Tuple[Number, Number]] = {
    "vad_silence_threshold_sec": (0.5, 30.0),
    "max_recording_duration_sec": (10, 120),
    "min_recording_duration_ms": (0, 5000),
    "connect_timeout_sec": (1, 60),
    "read_timeout_stt_sec": (1, 300),
    "read_timeout_enhance_sec": (1, 300),
    "retry_count": (0, 10),
}


class Configuration(BaseModel):
    """Flat record of user-editable dictation settings.

    Field types are checked on every assignment. Ranges are deliberately
    not checked here: out-of-range values are kept in memory until the
    backend rejects them on save.
    """
    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    config_version: int = 1
    hotkey: str = "Ctrl+Shift+S"
    recording_mode: RecordingMode = RecordingMode.TOGGLE
    language: str = "auto"  # "auto", "ru", "en", ...
    stt_model: str = "gpt-4o-mini-transcribe"
    enhance_model: str = "gpt-5-mini"
    enhance_enabled: bool = True

    # Voice activity detection
    vad_auto_stop: bool = True
    vad_silence_threshold_sec: float = 5.0
    vad_trim_silence: bool = True

    # Recording duration bounds
    max_recording_duration_sec: int = 60
    min_recording_duration_ms: int = 300

    show_notifications: bool = True

    # Network and retry tuning
    api_base_url: str = "https://api.openai.com"
    connect_timeout_sec: int = 5
    read_timeout_stt_sec: int = 30
    read_timeout_enhance_sec: int = 15
    retry_count: int = 3

    # Logging / debug
    log_level: str = "info"
    debug_save_audio: bool = False

    @classmethod
    def field_names(cls) -> List[str]:
        """Names of all editable settings, in declaration order."""
        return list(cls.model_fields)


def range_violations(config: Configuration) -> List[str]:
    """Describe every setting whose value falls outside its allowed range.

    Args:
        config: Configuration to check

    Returns:
        Human-readable problems; empty when the configuration is acceptable
    """
    problems = []

    for name, (low, high) in SETTING_RANGES.items():
        value = getattr(config, name)
        if not low <= value <= high:
            problems.append(f"{name} must be between {low} and {high} (got {value})")

    if not config.hotkey.strip():
        problems.append("hotkey must not be empty")
    else:
        try:
            parse_hotkey(config.hotkey)
        except HotkeyError as e:
            problems.append(str(e))
    if not config.stt_model.strip():
        problems.append("stt_model must not be empty")
    if not config.enhance_model.strip():
        problems.append("enhance_model must not be empty")
    if not config.api_base_url.startswith(("http://", "https://")):
        problems.append(f"api_base_url must be an http(s) URL (got {config.api_base_url!r})")
    if config.log_level not in LOG_LEVELS:
        problems.append(f"log_level must be one of {', '.join(LOG_LEVELS)} (got {config.log_level!r})")
    if config.min_recording_duration_ms >= config.max_recording_duration_sec * 1000:
        problems.append("min_recording_duration_ms must be shorter than max_recording_duration_sec")

    return problems
