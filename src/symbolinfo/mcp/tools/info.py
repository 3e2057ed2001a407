"""Symbol MCP tools - info, eldoc and structured-query inputs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

from symbolinfo.info.models import InfoRequest
from symbolinfo.mcp.registry import registry
from symbolinfo.mcp.tools.base import BaseParams

if TYPE_CHECKING:
    from symbolinfo.mcp.context import AppContext


# =============================================================================
# Parameter Models
# =============================================================================


class SymbolParams(BaseParams):
    """A symbol reference: ns + symbol, or class + member."""

    ns: str | None = Field(None, description="Module the symbol is seen from, e.g. 'json'")
    symbol: str | None = Field(None, description="Name, dotted name, keyword or module")
    class_: str | None = Field(None, alias="class", description="Qualified class name")
    member: str | None = Field(None, description="Member of 'class'")
    env: str | None = Field(None, description="Alternate environment handle")

    def to_request(self) -> InfoRequest:
        return InfoRequest(
            ns=self.ns, symbol=self.symbol, class_=self.class_, member=self.member, env=self.env
        )


class EldocQueryParams(BaseParams):
    """A structured query held in a binding, or written as a literal."""

    ns: str = Field(description="Module the symbol is seen from")
    symbol: str = Field(description="Binding name or Python literal of the query")


# =============================================================================
# Tool Handlers
# =============================================================================


@registry.register(
    "symbol.info",
    "Documentation, signatures and source location of a symbol",
    SymbolParams,
)
async def symbol_info(ctx: AppContext, params: SymbolParams) -> dict[str, Any]:
    return ctx.info_ops.info(params.to_request())


@registry.register("symbol.eldoc", "Compact signature hint for a symbol", SymbolParams)
async def symbol_eldoc(ctx: AppContext, params: SymbolParams) -> dict[str, Any]:
    return ctx.info_ops.eldoc(params.to_request())


@registry.register(
    "symbol.eldoc_query",
    "Input names of a structured query (must be enabled in config)",
    EldocQueryParams,
)
async def symbol_eldoc_query(ctx: AppContext, params: EldocQueryParams) -> dict[str, Any]:
    return ctx.info_ops.eldoc_query(params.ns, params.symbol)
