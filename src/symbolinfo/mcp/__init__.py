"""MCP server module - FastMCP tool registration and wiring."""

from symbolinfo.mcp.context import AppContext
from symbolinfo.mcp.registry import ToolRegistry, ToolSpec
from symbolinfo.mcp.server import create_mcp_server

__all__ = ["AppContext", "ToolRegistry", "ToolSpec", "create_mcp_server"]
