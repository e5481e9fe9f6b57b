"""Ephemeral, self-expiring status messages."""

import asyncio
import logging
import threading
from typing import Any, Callable, Optional

from pubsub import pub

from ..models.status import Severity, StatusMessage

logger = logging.getLogger(__name__)

STATUS_TOPIC = "settings.status"
DEFAULT_EXPIRY_SECONDS = 3.0

# (delay_seconds, callback) -> handle with cancel()
Scheduler = Callable[[float, Callable[[], None]], Any]


def loop_scheduler(delay: float, callback: Callable[[], None]) -> Any:
    """Schedule on the running asyncio loop, or on a timer thread outside one."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer
    return loop.call_later(delay, callback)


class StatusNotifier:
    """Shows at most one status message and expires it after a fixed delay.

    A new ``show`` replaces the visible message and restarts the countdown.
    Every change is published on ``settings.status`` with a ``status``
    argument (None once the message expires or is cleared).
    """

    def __init__(self,
                 expiry_seconds: float = DEFAULT_EXPIRY_SECONDS,
                 scheduler: Optional[Scheduler] = None,
                 topic: str = STATUS_TOPIC):
        """Initialize status notifier.

        Args:
            expiry_seconds: How long a message stays visible
            scheduler: Timer factory; defaults to the running asyncio loop
            topic: Pub/sub topic for status changes
        """
        self.expiry_seconds = expiry_seconds
        self.scheduler = scheduler or loop_scheduler
        self.topic = topic
        self._current: Optional[StatusMessage] = None
        self._expiry_handle = None

    @property
    def current(self) -> Optional[StatusMessage]:
        """The visible status, or None."""
        return self._current

    def show(self, message: str, severity: Severity = Severity.INFO) -> StatusMessage:
        """Replace the visible status and restart the expiry countdown.

        Args:
            message: Text to display
            severity: Visual weight

        Returns:
            The status now visible
        """
        self._cancel_expiry()

        status = StatusMessage(message=message, severity=severity)
        self._current = status
        self._expiry_handle = self.scheduler(self.expiry_seconds, lambda: self._expire(status))

        log_level = logging.WARNING if severity in (Severity.WARNING, Severity.ERROR) else logging.INFO
        logger.log(log_level, f"Status [{severity.value}]: {message}")
        pub.sendMessage(self.topic, status=status)
        return status

    def clear(self) -> None:
        """Hide the visible status immediately."""
        self._cancel_expiry()
        if self._current is not None:
            self._current = None
            pub.sendMessage(self.topic, status=None)

    def close(self) -> None:
        """Cancel any pending expiry without publishing (view teardown)."""
        self._cancel_expiry()
        self._current = None

    def _expire(self, status: StatusMessage) -> None:
        # A superseded timer that fired anyway must not hide the newer message
        if self._current is not status:
            return
        self._expiry_handle = None
        self._current = None
        logger.debug(f"Status expired: {status.message}")
        pub.sendMessage(self.topic, status=None)

    def _cancel_expiry(self) -> None:
        if self._expiry_handle is not None:
            self._expiry_handle.cancel()
            self._expiry_handle = None
