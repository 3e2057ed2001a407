"""Shared fixtures for MCP tests."""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import MagicMock

import pytest

from symbolinfo.config.models import SymbolInfoConfig
from symbolinfo.mcp.registry import ToolRegistry, registry


@pytest.fixture
def clean_registry() -> Generator[ToolRegistry, None, None]:
    """Clear and yield the global registry, restore after test."""
    original_tools = dict(registry._tools)
    registry.clear()
    yield registry
    registry._tools = original_tools


@pytest.fixture
def mock_context() -> MagicMock:
    """AppContext with real config and mocked ops."""
    context = MagicMock()
    context.config = SymbolInfoConfig()
    context.info_ops = MagicMock()
    return context
