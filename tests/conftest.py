"""Pytest configuration and fixtures."""

import pytest

from scripta.config import (
    ScriptaSettings,
    configure_logging,
    reset_settings,
    set_settings,
)
from scripta.document import DocumentStore
from scripta.models import ElementType
from scripta.storage import MemoryStorage

# Import CLI fixtures to make them available globally
from tests.cli_fixtures import clean_runner, cli_invoke  # noqa: F401
from tests.helpers import make_elements


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point every test at its own storage directory.

    Keeps tests from reading or writing scripts in the user's home directory.
    """
    for var in ("SCRIPTA_STORAGE_PATH", "SCRIPTA_LOG_LEVEL", "SCRIPTA_DEBUG"):
        monkeypatch.delenv(var, raising=False)

    settings = ScriptaSettings(storage_path=tmp_path / "scripts")
    set_settings(settings)
    configure_logging(settings)

    yield settings

    reset_settings()


@pytest.fixture
def settings(isolated_settings):
    """The settings active for the current test."""
    return isolated_settings


@pytest.fixture
def memory_storage():
    """Empty in-memory key-value storage."""
    return MemoryStorage()


@pytest.fixture
def store(memory_storage, settings):
    """A document store holding a fresh script."""
    return DocumentStore(memory_storage, settings)


class FakeTimer:
    """Timer stand-in that only fires when told to."""

    def __init__(self, delay, callback):
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.callback()


@pytest.fixture
def timers():
    """Record every timer the autosave scheduler creates."""
    return []


@pytest.fixture
def timer_factory(timers):
    """Timer factory for AutosaveScheduler that never uses real threads."""

    def factory(delay, callback):
        timer = FakeTimer(delay, callback)
        timers.append(timer)
        return timer

    return factory


@pytest.fixture
def house_scene():
    """The single-scene example used throughout the store tests."""
    return make_elements(
        ("scene-heading", "INT. HOUSE - DAY"),
        ("action", "John enters."),
        ("character", "JOHN"),
        ("dialogue", "Hello."),
    )


@pytest.fixture
def populated_store(store, house_scene):
    """A store whose script holds the house scene plus a second scene."""
    first = store.elements[0].id
    store.update_element(first, house_scene[0].content)
    anchor = first
    for element in house_scene[1:]:
        anchor = store.insert_element_after(anchor, element.type, element.content).id
    for kind, content in (
        (ElementType.SCENE_HEADING, "EXT. GARDEN - NIGHT"),
        (ElementType.CHARACTER, "MARY"),
        (ElementType.DIALOGUE, "Who's there?"),
        (ElementType.CHARACTER, "JOHN"),
        (ElementType.DIALOGUE, "Only me."),
    ):
        anchor = store.insert_element_after(anchor, kind, content).id
    return store
