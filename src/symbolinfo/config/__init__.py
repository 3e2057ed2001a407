"""Config module exports."""

from symbolinfo.config.loader import SymbolInfoSettings, load_config
from symbolinfo.config.models import (
    DocsConfig,
    LoggingConfig,
    PathsConfig,
    QueryConfig,
    ServerConfig,
    SymbolInfoConfig,
)

__all__ = [
    "load_config",
    "SymbolInfoConfig",
    "SymbolInfoSettings",
    "DocsConfig",
    "LoggingConfig",
    "PathsConfig",
    "QueryConfig",
    "ServerConfig",
]
