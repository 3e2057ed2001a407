"""structlog setup for the info server.

Every event passes through one processor chain and is then rendered once
per configured output, as JSON or console text. Per-request context
(the request id plus the op or tool being served) is held in structlog's
context variables, so any logger called while a request is in flight
tags its events with it.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any
from uuid import uuid4

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, get_contextvars

if TYPE_CHECKING:
    from symbolinfo.config.models import LoggingConfig, LogOutputConfig

# Loggers that report every MCP message at INFO
_CHATTY_LOGGERS = ("mcp.server.lowlevel.server", "fastmcp.server.context.to_client")


def bind_request(**context: Any) -> str:
    """Start request-scoped logging context and return the new request id."""
    request_id = uuid4().hex[:12]
    bind_contextvars(request_id=request_id, **context)
    return request_id


def get_request_id() -> str | None:
    return get_contextvars().get("request_id")


def clear_request() -> None:
    clear_contextvars()


def _level(name: str | None, default: int) -> int:
    if name is None:
        return default
    return logging.getLevelNamesMapping().get(name.upper(), default)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]


def _renderer(output: LogOutputConfig) -> structlog.types.Processor:
    if output.format == "json":
        return structlog.processors.JSONRenderer()
    stream = sys.stdout if output.destination == "stdout" else sys.stderr
    to_terminal = output.destination in ("stderr", "stdout") and stream.isatty()
    return structlog.dev.ConsoleRenderer(colors=to_terminal, pad_event_to=0, pad_level=False)


def _handler(destination: str) -> logging.Handler:
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    if destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog through stdlib logging.

    Args:
        config: Logging section with one entry per output. When omitted a
            single stderr output is built from ``json_format`` and ``level``.
        json_format: Render the default output as JSON lines.
        level: Root level of the default output.
    """
    from symbolinfo.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _level(config.level, logging.INFO)
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration must reach loggers created before it
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    for output in config.outputs:
        handler = _handler(output.destination)
        handler.setLevel(_level(output.level, root_level))
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=_renderer(output),
                foreign_pre_chain=shared,
            )
        )
        root.addHandler(handler)
