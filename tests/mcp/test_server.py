"""Tests for mcp/server.py module.

Covers:
- ToolResponse model
- _extract_log_params() / _extract_result_summary()
- create_mcp_server() function
- _wire_tool() handler envelopes
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from structlog.contextvars import get_contextvars

from symbolinfo.core.errors import RequestError
from symbolinfo.core.logging import get_request_id
from symbolinfo.info.models import InfoRequest
from symbolinfo.mcp.registry import ToolRegistry
from symbolinfo.mcp.server import (
    ToolResponse,
    _extract_log_params,
    _extract_result_summary,
    _wire_tool,
    create_mcp_server,
)
from symbolinfo.mcp.tools.info import EldocQueryParams, SymbolParams


class TestToolResponse:
    """Tests for ToolResponse model."""

    def test_create_success_response(self) -> None:
        response = ToolResponse(success=True, result={"name": "loads"})
        assert response.success is True
        assert response.error is None
        assert response.meta == {}

    def test_model_dump(self) -> None:
        data = ToolResponse(success=False, error="bad").model_dump()
        assert data == {"result": None, "meta": {}, "success": False, "error": "bad"}


class TestExtractLogParams:
    """Tests for _extract_log_params."""

    def test_truncates_long_strings(self) -> None:
        result = _extract_log_params({"symbol": "x" * 80})
        assert result["symbol"] == "x" * 50 + "..."

    def test_skips_none_values(self) -> None:
        assert _extract_log_params({"ns": "json", "class": None}) == {"ns": "json"}


class TestExtractResultSummary:
    """Tests for _extract_result_summary."""

    def test_status(self) -> None:
        assert _extract_result_summary({"status": "no-info"}) == {"status": "no-info"}

    def test_counts(self) -> None:
        result = {"type": "function", "candidates": {"a": {}, "b": {}}, "see_also": ["x/y"]}
        assert _extract_result_summary(result) == {
            "type": "function",
            "candidates": 2,
            "see_also": 1,
        }

    def test_empty_result(self) -> None:
        assert _extract_result_summary({"name": "loads"}) == {}


class TestCreateMcpServer:
    """Tests for create_mcp_server function."""

    def test_creates_named_server(self, mock_context: MagicMock) -> None:
        with patch("symbolinfo.mcp.registry.registry") as mock_registry:
            mock_registry.get_all.return_value = []
            mcp = create_mcp_server(mock_context)
        assert mcp.name == "symbolinfo"

    def test_wires_every_registered_tool(self, mock_context: MagicMock) -> None:
        specs = [MagicMock(name="a"), MagicMock(name="b")]
        with (
            patch("symbolinfo.mcp.registry.registry") as mock_registry,
            patch("symbolinfo.mcp.server._wire_tool") as mock_wire,
        ):
            mock_registry.get_all.return_value = specs
            create_mcp_server(mock_context)
        assert [c.args[1] for c in mock_wire.call_args_list] == specs


def _wired_handler(clean_registry: ToolRegistry, name: str, context: MagicMock) -> Any:
    from symbolinfo.mcp.tools import info  # noqa: F401

    # Re-register after clean_registry emptied the global table
    clean_registry.register("symbol.info", "info", SymbolParams)(info.symbol_info)
    clean_registry.register("symbol.eldoc_query", "query", EldocQueryParams)(
        info.symbol_eldoc_query
    )
    mcp = MagicMock()
    spec = clean_registry.get(name)
    assert spec is not None
    _wire_tool(mcp, spec, context)
    return mcp.add_tool.call_args.args[0].fn


class TestWiredHandler:
    """Tests for the envelope produced by wired tool handlers."""

    @pytest.mark.asyncio
    async def test_success(self, clean_registry: ToolRegistry, mock_context: MagicMock) -> None:
        mock_context.info_ops.info.return_value = {"ns": "json", "name": "loads"}
        handler = _wired_handler(clean_registry, "symbol.info", mock_context)

        response = await handler(ns="json", symbol="loads")

        assert response["success"] is True
        assert response["result"] == {"ns": "json", "name": "loads"}
        assert "request_id" in response["meta"]
        mock_context.info_ops.info.assert_called_once_with(InfoRequest(ns="json", symbol="loads"))
        assert get_request_id() is None

    @pytest.mark.asyncio
    async def test_tool_bound_while_handling(
        self, clean_registry: ToolRegistry, mock_context: MagicMock
    ) -> None:
        seen: dict[str, Any] = {}

        def info(request: InfoRequest) -> dict[str, Any]:
            seen.update(get_contextvars())
            return {"ns": "json", "name": "loads"}

        mock_context.info_ops.info.side_effect = info
        handler = _wired_handler(clean_registry, "symbol.info", mock_context)

        response = await handler(ns="json", symbol="loads")

        assert seen["tool"] == "symbol.info"
        assert seen["request_id"] == response["meta"]["request_id"]
        assert get_contextvars() == {}

    @pytest.mark.asyncio
    async def test_class_alias(self, clean_registry: ToolRegistry, mock_context: MagicMock) -> None:
        mock_context.info_ops.info.return_value = {"class": "dict"}
        handler = _wired_handler(clean_registry, "symbol.info", mock_context)

        await handler(**{"class": "dict", "member": "get"})

        request = mock_context.info_ops.info.call_args.args[0]
        assert request.class_ == "dict"
        assert request.member == "get"

    @pytest.mark.asyncio
    async def test_validation_error(
        self, clean_registry: ToolRegistry, mock_context: MagicMock
    ) -> None:
        handler = _wired_handler(clean_registry, "symbol.info", mock_context)

        response = await handler(ns="json", bogus=1)

        assert response["success"] is False
        assert response["meta"]["error_type"] == "validation"
        mock_context.info_ops.info.assert_not_called()

    @pytest.mark.asyncio
    async def test_domain_error(self, clean_registry: ToolRegistry, mock_context: MagicMock) -> None:
        mock_context.info_ops.eldoc_query.side_effect = RequestError.capability_disabled(
            "eldoc_query", "query.enabled"
        )
        handler = _wired_handler(clean_registry, "symbol.eldoc_query", mock_context)

        response = await handler(ns="demo", symbol="QUERY")

        assert response["success"] is False
        assert response["meta"]["error"]["code"] == 1002

    @pytest.mark.asyncio
    async def test_internal_error(
        self, clean_registry: ToolRegistry, mock_context: MagicMock
    ) -> None:
        mock_context.info_ops.info.side_effect = RuntimeError("boom")
        handler = _wired_handler(clean_registry, "symbol.info", mock_context)

        response = await handler(ns="json", symbol="loads")

        assert response["success"] is False
        assert response["error"] == "boom"
