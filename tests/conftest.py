"""Pytest configuration and fixtures for VoxSettings tests."""

import pytest
import tempfile
import logging
from typing import List, Optional

from pubsub import pub

from voxsettings.backend.base import ConfigurationBackend, CredentialBackend, HotkeyBackend
from voxsettings.models.configuration import Configuration
from voxsettings.services.status_notifier import StatusNotifier


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without I/O beyond temp dirs")


class FakeConfigurationBackend(ConfigurationBackend):
    """In-memory configuration backend that records every call."""

    def __init__(self, persisted: Optional[Configuration] = None):
        self.persisted = persisted or Configuration()
        self.defaults = Configuration()
        self.calls: List[str] = []
        self.saved: List[Configuration] = []
        self.get_error: Optional[Exception] = None
        self.save_error: Optional[Exception] = None
        self.reset_error: Optional[Exception] = None
        self.get_result = None  # Overrides the returned value (e.g. malformed data)

    async def get_configuration(self):
        self.calls.append("get")
        if self.get_error:
            raise self.get_error
        if self.get_result is not None:
            return self.get_result
        return self.persisted.model_copy(deep=True)

    async def save_configuration(self, config):
        self.calls.append("save")
        if self.save_error:
            raise self.save_error
        self.saved.append(config.model_copy(deep=True))
        self.persisted = config.model_copy(deep=True)

    async def reset_configuration(self):
        self.calls.append("reset")
        if self.reset_error:
            raise self.reset_error
        self.persisted = self.defaults.model_copy(deep=True)
        return self.defaults.model_copy(deep=True)


class FakeCredentialBackend(CredentialBackend):
    """In-memory credential backend."""

    def __init__(self, stored: Optional[str] = None):
        self.stored = stored
        self.calls: List[str] = []
        self.accept = True
        self.presence_error: Optional[Exception] = None
        self.validate_error: Optional[Exception] = None
        self.save_error: Optional[Exception] = None
        self.delete_error: Optional[Exception] = None

    async def has_credential(self):
        self.calls.append("has")
        if self.presence_error:
            raise self.presence_error
        return self.stored is not None

    async def validate_credential(self, candidate):
        self.calls.append("validate")
        if self.validate_error:
            raise self.validate_error
        return self.accept

    async def save_credential(self, candidate):
        self.calls.append("save")
        if self.save_error:
            raise self.save_error
        self.stored = candidate

    async def delete_credential(self):
        self.calls.append("delete")
        if self.delete_error:
            raise self.delete_error
        self.stored = None


class FakeHotkeyBackend(HotkeyBackend):
    """Records rebind requests; optionally fails them."""

    def __init__(self):
        self.rebinds: List[str] = []
        self.error: Optional[Exception] = None

    async def rebind_hotkey(self, hotkey):
        self.rebinds.append(hotkey)
        if self.error:
            raise self.error


class FakeTimer:
    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.callback()


class FakeScheduler:
    """Scheduler that hands timers back to the test instead of waiting."""

    def __init__(self):
        self.timers: List[FakeTimer] = []

    def __call__(self, delay, callback):
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[FakeTimer]:
        return [timer for timer in self.timers if not timer.cancelled]


@pytest.fixture(autouse=True)
def reset_pubsub():
    """Drop listeners between tests so topics do not leak."""
    yield
    pub.unsubAll()


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def config_backend():
    return FakeConfigurationBackend()


@pytest.fixture
def credential_backend():
    return FakeCredentialBackend()


@pytest.fixture
def hotkey_backend():
    return FakeHotkeyBackend()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def notifier(scheduler):
    return StatusNotifier(expiry_seconds=3.0, scheduler=scheduler)
