"""Shared fixtures for symbol info tests."""

from __future__ import annotations

import builtins
import functools
import json
import textwrap
from collections.abc import Callable
from types import ModuleType

import pytest

DEMO_SOURCE = textwrap.dedent(
    '''
    """Demo module for lookups."""

    import json as j

    LIMIT = 3
    QUERY = {"find": ["?e"], "in": ["$", "?name"]}
    FLAT_QUERY = [":find", "?e", ":in", "$", "?name", ":where", "?e"]
    NOT_A_QUERY = 42


    def greet(name, greeting="hi"):
        """Greet someone."""
        return f"{greeting} {name}"


    class Widget:
        """A widget."""

        def __init__(self, size):
            self.size = size

        def spin(self, times=1):
            """Spin it."""

        @property
        def broken(self):
            raise RuntimeError("getter ran")
    '''
)


class DictResources:
    """Resource locator over a fixed relative path -> URL table."""

    def __init__(self, entries: dict[str, str] | None = None) -> None:
        self.entries = dict(entries or {})

    def exists(self, relative: str) -> str | None:
        return self.entries.get(relative)


@pytest.fixture
def demo_module() -> ModuleType:
    """A module named 'demo' that is never placed in sys.modules."""
    module = ModuleType("demo")
    exec(compile(DEMO_SOURCE, "<demo>", "exec"), vars(module))  # noqa: S102
    return module


@pytest.fixture
def modules(demo_module: ModuleType) -> dict[str, ModuleType]:
    return {
        "demo": demo_module,
        "json": json,
        "functools": functools,
        "builtins": builtins,
    }


@pytest.fixture
def resources() -> Callable[..., DictResources]:
    """Factory for fixed-table resource locators."""
    return DictResources
