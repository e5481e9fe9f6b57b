"""Hotkey string parsing and normalization."""

import re

from ..errors import HotkeyError

# Canonical modifier names, in the order they are written
MODIFIER_ORDER = ("Ctrl", "Alt", "Shift", "Super")

_MODIFIER_ALIASES = {
    "ctrl": "Ctrl",
    "control": "Ctrl",
    "ctl": "Ctrl",
    "commandorcontrol": "Ctrl",
    "cmdorctrl": "Ctrl",
    "alt": "Alt",
    "option": "Alt",
    "altgr": "Alt",
    "shift": "Shift",
    "super": "Super",
    "win": "Super",
    "windows": "Super",
    "meta": "Super",
    "cmd": "Super",
    "command": "Super",
}

_NAMED_KEYS = {
    "space": "Space",
    "enter": "Enter",
    "return": "Enter",
    "tab": "Tab",
    "escape": "Escape",
    "esc": "Escape",
    "backspace": "Backspace",
    "delete": "Delete",
    "del": "Delete",
    "insert": "Insert",
    "home": "Home",
    "end": "End",
    "pageup": "PageUp",
    "pagedown": "PageDown",
    "up": "Up",
    "down": "Down",
    "left": "Left",
    "right": "Right",
    "pause": "Pause",
    "printscreen": "PrintScreen",
}

_FUNCTION_KEY = re.compile(r"^f([1-9]|1[0-9]|2[0-4])$")



def parse_hotkey(text: str) -> str:
    """Normalize a hotkey string to its canonical form.

    ``"shift + control + s"`` becomes ``"Ctrl+Shift+S"``. Letter and digit
    keys need at least one modifier; function and named keys may stand
    alone.

    Args:
        text: User-provided hotkey string

    Returns:
        Canonical hotkey string

    Raises:
        HotkeyError: If the string is empty, has no key, has several keys
            or contains an unknown token
    """
    if text is None or not text.strip():
        raise HotkeyError("Hotkey is empty")

    tokens = [token.strip() for token in text.split("+")]
    if any(not token for token in tokens):
        raise HotkeyError(f"Invalid hotkey \"{text}\": empty key name")

    modifiers = set()
    keys = []
    for token in tokens:
        lowered = re.sub(r"\s+", "", token.lower())
        if lowered in _MODIFIER_ALIASES:
            modifiers.add(_MODIFIER_ALIASES[lowered])
        else:
            keys.append(_normalize_key(lowered, text))

    if not keys:
        raise HotkeyError(f"Invalid hotkey \"{text}\": modifiers need a key")
    if len(keys) > 1:
        raise HotkeyError(f"Invalid hotkey \"{text}\": only one non-modifier key is allowed")

    key = keys[0]
    if not modifiers and len(key) == 1:
        raise HotkeyError(f"Invalid hotkey \"{text}\": single character keys need a modifier")

    ordered = [name for name in MODIFIER_ORDER if name in modifiers]
    return "+".join(ordered + [key])


def _normalize_key(token: str, original: str) -> str:
    if len(token) == 1 and token.isalnum():
        return token.upper()
    if _FUNCTION_KEY.match(token):
        return token.upper()
    if token in _NAMED_KEYS:
        return _NAMED_KEYS[token]
    raise HotkeyError(f"Invalid hotkey \"{original}\": unknown key \"{token}\"")
