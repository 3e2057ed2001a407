"""Application context for MCP handlers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from symbolinfo.config.models import SymbolInfoConfig
    from symbolinfo.info.ops import InfoOps
    from symbolinfo.info.resolver import AlternateEnvironment


@dataclass
class AppContext:
    """Context object passed to all MCP tool handlers."""

    config: SymbolInfoConfig
    info_ops: InfoOps

    @classmethod
    def create(
        cls,
        config: SymbolInfoConfig,
        *,
        alternate: AlternateEnvironment | None = None,
    ) -> AppContext:
        """Factory to create context with ops wired from config."""
        from symbolinfo.info.ops import InfoOps

        return cls(config=config, info_ops=InfoOps.create(config, alternate=alternate))
