"""Core module exports."""

from symbolinfo.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    RequestError,
    SymbolInfoError,
)
from symbolinfo.core.logging import (
    bind_request,
    clear_request,
    configure_logging,
    get_request_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "RequestError",
    "SymbolInfoError",
    # Logging
    "bind_request",
    "clear_request",
    "configure_logging",
    "get_request_id",
]
