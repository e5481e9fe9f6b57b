"""Pub/sub hotkey binder."""

import logging
from typing import Iterable, Optional

from pubsub import pub

from ..errors import HotkeyError
from ..models.hotkey import parse_hotkey
from .base import HotkeyBackend

logger = logging.getLogger(__name__)

HOTKEY_TOPIC = "hotkey.rebound"

DEFAULT_RESERVED = ("Alt+F4", "Ctrl+Alt+Delete", "Super+L", "Ctrl+Alt+Escape")


class PubSubHotkeyBinder(HotkeyBackend):
    """Validates hotkeys and announces new bindings to the keyboard listener.

    The process owning the OS keyboard hook subscribes to ``hotkey.rebound``
    and receives ``hotkey`` (canonical string) and ``previous``.
    """

    def __init__(self, topic: str = HOTKEY_TOPIC,
                 reserved: Iterable[str] = DEFAULT_RESERVED,
                 current: Optional[str] = None):
        """Initialize hotkey binder.

        Args:
            topic: Pub/sub topic that receives rebinding announcements
            reserved: Combinations owned by the OS that may not be bound
            current: Binding already in effect, if known
        """
        self.topic = topic
        self.reserved = {parse_hotkey(combo) for combo in reserved}
        self.current = current
        logger.info(f"PubSubHotkeyBinder initialized with topic: {topic}")

    async def rebind_hotkey(self, hotkey: str) -> None:
        canonical = parse_hotkey(hotkey)
        if canonical in self.reserved:
            raise HotkeyError(f"Hotkey \"{canonical}\" conflicts with a system shortcut")

        previous = self.current
        pub.sendMessage(self.topic, hotkey=canonical, previous=previous)
        self.current = canonical
        logger.info(f"Global hotkey rebound: {previous} -> {canonical}")
