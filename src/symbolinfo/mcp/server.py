"""FastMCP server creation and wiring.

Tool calls are logged in two phases: tool_start with params, tool_complete
with a summary, both tagged with the request id and tool name bound for the
call. Expected errors log a warning; unexpected ones log the traceback at
debug level only.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import BaseModel, Field

from symbolinfo.core.logging import bind_request, clear_request

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from symbolinfo.mcp.context import AppContext
    from symbolinfo.mcp.registry import ToolSpec

log = structlog.get_logger(__name__)


class ToolResponse(BaseModel):
    """Standardized tool response envelope."""

    result: Any = None
    meta: dict[str, Any] = Field(default_factory=dict)
    success: bool
    error: str | None = None


def _extract_log_params(kwargs: dict[str, Any]) -> dict[str, Any]:
    """Key params for the tool_start log line, with long values truncated."""
    params: dict[str, Any] = {}
    for key, value in kwargs.items():
        if isinstance(value, str) and len(value) > 50:
            params[key] = value[:50] + "..."
        elif value is not None:
            params[key] = value
    return params


def _extract_result_summary(result: dict[str, Any]) -> dict[str, Any]:
    """Summary metrics from a tool result for logging."""
    summary: dict[str, Any] = {}
    if "status" in result:
        summary["status"] = result["status"]
    if "type" in result:
        summary["type"] = result["type"]
    if isinstance(result.get("candidates"), dict):
        summary["candidates"] = len(result["candidates"])
    if isinstance(result.get("see_also"), list):
        summary["see_also"] = len(result["see_also"])
    return summary


def create_mcp_server(context: AppContext) -> FastMCP:
    """Create FastMCP server with all tools wired to context.

    Args:
        context: AppContext with ops instances

    Returns:
        Configured FastMCP server ready to run
    """
    from fastmcp import FastMCP

    from symbolinfo.mcp.registry import registry

    # Import tools to trigger registration
    from symbolinfo.mcp.tools import info  # noqa: F401

    log.info("mcp_server_creating", name=context.config.server.name)

    mcp = FastMCP(context.config.server.name, instructions=context.config.server.instructions)

    tool_count = 0
    for spec in registry.get_all():
        _wire_tool(mcp, spec, context)
        tool_count += 1

    log.info("mcp_server_created", tool_count=tool_count)
    return mcp


def _wire_tool(mcp: FastMCP, spec: ToolSpec, context: AppContext) -> None:
    """Wire a single tool spec to FastMCP with a flat parameter schema."""
    from fastmcp.tools.tool import FunctionTool
    from fastmcp.utilities.json_schema import dereference_refs
    from pydantic import ValidationError

    from symbolinfo.core.errors import SymbolInfoError

    params_model = spec.params_model
    spec_handler = spec.handler
    flat_schema = dereference_refs(params_model.model_json_schema(by_alias=True))

    async def handler(**kwargs: Any) -> dict[str, Any]:
        start_time = time.perf_counter()
        request_id = bind_request(tool=spec.name)

        log.info("tool_start", **_extract_log_params(kwargs))

        try:
            try:
                params = params_model(**kwargs)
            except ValidationError as e:
                elapsed_ms = int((time.perf_counter() - start_time) * 1000)
                message = e.errors()[0]["msg"] if e.errors() else str(e)
                log.warning("tool_validation_error", error=message, elapsed_ms=elapsed_ms)
                return ToolResponse(
                    success=False,
                    error=f"Validation error: {message}",
                    meta={
                        "error_type": "validation",
                        "validation_errors": [
                            {"field": ".".join(str(x) for x in err["loc"]), "message": err["msg"]}
                            for err in e.errors()[:5]
                        ],
                    },
                ).model_dump()

            try:
                result_data = await spec_handler(context, params)
            except SymbolInfoError as e:
                elapsed_ms = int((time.perf_counter() - start_time) * 1000)
                log.warning(
                    "tool_error", error_code=e.code.value, error=e.message, elapsed_ms=elapsed_ms
                )
                return ToolResponse(
                    success=False,
                    error=e.message,
                    meta={"request_id": request_id, "error": e.to_dict()},
                ).model_dump()
            except Exception as e:
                elapsed_ms = int((time.perf_counter() - start_time) * 1000)
                log.error("tool_internal_error", error=str(e), elapsed_ms=elapsed_ms)
                log.debug("tool_internal_error_traceback", exc_info=True)
                return ToolResponse(
                    success=False,
                    error=str(e),
                    meta={"request_id": request_id},
                ).model_dump()

            elapsed_ms = int((time.perf_counter() - start_time) * 1000)
            log.info("tool_complete", elapsed_ms=elapsed_ms, **_extract_result_summary(result_data))
            return ToolResponse(
                success=True,
                result=result_data,
                meta={"request_id": request_id, "timestamp": int(time.time() * 1000)},
            ).model_dump()
        finally:
            clear_request()

    tool = FunctionTool(
        name=spec.name,
        description=spec.description,
        parameters=flat_schema,
        fn=handler,
    )
    mcp.add_tool(tool)


def run_server(project_root: Path | None = None, *, log_file: Path | None = None) -> None:
    """Create and run the MCP server over stdio."""
    from symbolinfo.config.loader import load_config
    from symbolinfo.config.models import LoggingConfig, LogOutputConfig
    from symbolinfo.core.logging import configure_logging
    from symbolinfo.mcp.context import AppContext

    config = load_config(project_root)
    outputs = [LogOutputConfig(destination="stderr", format="console", level=config.logging.level)]
    if log_file is not None:
        outputs.append(
            LogOutputConfig(destination=str(log_file.resolve()), format="json", level="DEBUG")
        )
    root_level = "DEBUG" if log_file is not None else config.logging.level
    configure_logging(config=LoggingConfig(level=root_level, outputs=outputs))

    context = AppContext.create(config)
    mcp = create_mcp_server(context)

    log.info("mcp_server_running", query_enabled=config.query.enabled)
    mcp.run()
