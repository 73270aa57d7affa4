"""
Shared fixtures and sample components for the container tests.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from refer.descriptor import Descriptor


class Component:
    """Openable component that records lifecycle calls into a shared event list."""

    def __init__(self, name, events=None, fail_open=False, fail_close=False):
        self.name = name
        self.events = events if events is not None else []
        self.fail_open = fail_open
        self.fail_close = fail_close
        self.opened = False

    def is_open(self):
        return self.opened

    def open(self, correlation_id):
        self.events.append(("open", self.name, correlation_id))
        if self.fail_open:
            raise RuntimeError(f"{self.name} cannot open")
        self.opened = True

    def close(self, correlation_id):
        self.events.append(("close", self.name, correlation_id))
        self.opened = False
        if self.fail_close:
            raise RuntimeError(f"{self.name} cannot close")

    def __repr__(self):
        return f"Component({self.name})"


class AsyncComponent(Component):
    """Same as Component, with coroutine lifecycle methods."""

    async def open(self, correlation_id):
        super().open(correlation_id)

    async def close(self, correlation_id):
        super().close(correlation_id)


class LinkedComponent(Component):
    """Component that resolves a dependency when references are set."""

    def __init__(self, name, dependency=None, events=None, fail_link=False, fail_unlink=False):
        super().__init__(name, events)
        self.dependency_locator = dependency
        self.fail_link = fail_link
        self.fail_unlink = fail_unlink
        self.dependency = None
        self.references = None

    def set_references(self, references):
        self.events.append(("link", self.name))
        if self.fail_link:
            raise RuntimeError(f"{self.name} cannot link")
        self.references = references
        if self.dependency_locator is not None:
            self.dependency = references.get_one_required(self.dependency_locator)

    def unset_references(self):
        self.events.append(("unlink", self.name))
        if self.fail_unlink:
            raise RuntimeError(f"{self.name} cannot unlink")
        self.references = None
        self.dependency = None


class Plain:
    """Component without any lifecycle capability."""

    def __init__(self, name="plain"):
        self.name = name


@pytest.fixture
def events():
    return []


@pytest.fixture
def logger_locator():
    return Descriptor("app", "logger", "console", "default", "1.0")


@pytest.fixture
def cache_locator():
    return Descriptor("app", "cache", "memory", "default", "1.0")
