"""Tool table for the MCP server.

Tool modules register their handlers at import time on the module-level
``registry``; ``create_mcp_server`` wires whatever is registered.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

if TYPE_CHECKING:
    from symbolinfo.mcp.context import AppContext

# (ctx, validated params) -> reply dict
HandlerFn = Callable[["AppContext", Any], Awaitable[dict[str, Any]]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    handler: HandlerFn
    description: str
    params_model: type[BaseModel]


class ToolRegistry:
    """Named tool handlers, each with the pydantic model validating its params."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolSpec] = {}

    def register(
        self,
        name: str,
        description: str,
        params_model: type[BaseModel],
    ) -> Callable[[HandlerFn], HandlerFn]:
        """Decorator adding a handler under ``name``.

        Usage:
            @registry.register("symbol.info", "Describe a symbol", InfoParams)
            async def symbol_info(ctx: AppContext, params: InfoParams) -> dict:
                ...

        Raises:
            ValueError: ``name`` is already taken by another handler.
        """

        def decorator(fn: HandlerFn) -> HandlerFn:
            existing = self._tools.get(name)
            if existing is not None and existing.handler is not fn:
                raise ValueError(f"Tool {name!r} is already registered")
            self._tools[name] = ToolSpec(name, fn, description, params_model)
            return fn

        return decorator

    def get_all(self) -> list[ToolSpec]:
        return list(self._tools.values())

    def get(self, name: str) -> ToolSpec | None:
        return self._tools.get(name)

    def clear(self) -> None:
        self._tools.clear()


registry = ToolRegistry()
