"""Unit tests for StatusNotifier."""

import asyncio
import time

import pytest
from pubsub import pub

from voxsettings.models.status import Severity
from voxsettings.services.status_notifier import STATUS_TOPIC, StatusNotifier


@pytest.mark.unit
class TestStatusNotifier:
    """Test cases for StatusNotifier."""

    def test_show_sets_current_and_schedules_expiry(self, notifier, scheduler):
        status = notifier.show("Settings saved", Severity.SUCCESS)

        assert notifier.current is status
        assert status.message == "Settings saved"
        assert status.severity == Severity.SUCCESS
        assert len(scheduler.pending) == 1
        assert scheduler.pending[0].delay == 3.0

    def test_expiry_clears_status(self, notifier, scheduler):
        notifier.show("Settings saved")
        scheduler.pending[0].fire()

        assert notifier.current is None

    def test_second_show_cancels_first_timer(self, notifier, scheduler):
        notifier.show("first")
        first_timer = scheduler.timers[0]

        second = notifier.show("second", Severity.WARNING)

        assert first_timer.cancelled
        assert scheduler.pending == [scheduler.timers[1]]
        assert scheduler.timers[1].delay == 3.0
        assert notifier.current is second

    def test_cancelled_timer_never_hides_newer_message(self, notifier, scheduler):
        notifier.show("first")
        notifier.show("second")

        # Simulate the old callback running anyway
        scheduler.timers[0].callback()

        assert notifier.current.message == "second"

    def test_clear_cancels_timer(self, notifier, scheduler):
        notifier.show("message")
        notifier.clear()

        assert notifier.current is None
        assert scheduler.pending == []

    def test_close_cancels_timer(self, notifier, scheduler):
        notifier.show("message")
        notifier.close()

        assert notifier.current is None
        assert scheduler.pending == []

    def test_publishes_show_and_expiry(self, notifier, scheduler):
        received = []

        def listener(status):
            received.append(status)

        pub.subscribe(listener, STATUS_TOPIC)

        status = notifier.show("hello")
        scheduler.pending[0].fire()

        assert received == [status, None]

    def test_default_scheduler_uses_running_loop(self):
        async def scenario():
            notifier = StatusNotifier(expiry_seconds=0.2)
            notifier.show("first")
            await asyncio.sleep(0.12)
            notifier.show("second")
            # First timer would have expired by now if it were not cancelled
            await asyncio.sleep(0.12)
            still_visible = notifier.current
            await asyncio.sleep(0.2)
            return still_visible, notifier.current

        still_visible, after = asyncio.run(scenario())

        assert still_visible is not None
        assert still_visible.message == "second"
        assert after is None

    def test_default_scheduler_outside_event_loop(self):
        notifier = StatusNotifier(expiry_seconds=0.1)

        notifier.show("from sync code", Severity.ERROR)
        assert notifier.current.message == "from sync code"

        time.sleep(0.4)

        assert notifier.current is None

    def test_close_cancels_timer_thread(self):
        notifier = StatusNotifier(expiry_seconds=0.1)
        notifier.show("closing")
        handle = notifier._expiry_handle

        notifier.close()
        handle.join(1.0)

        assert notifier.current is None
        assert not handle.is_alive()
