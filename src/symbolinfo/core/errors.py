"""symbolinfo error types with typed error codes.

Error code ranges:
- 1xxx: Request
- 2xxx: Config
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Request (1xxx)
    INVALID_REQUEST = 1001
    CAPABILITY_DISABLED = 1002
    UNKNOWN_ENVIRONMENT = 1003

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class SymbolInfoError(Exception):
    """Base error with structured context for replies."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'INVALID_REQUEST')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON/MCP responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class RequestError(SymbolInfoError):
    """The request cannot be served as given."""

    @classmethod
    def invalid_request(cls, **fields: Any) -> "RequestError":
        return cls(
            code=ErrorCode.INVALID_REQUEST,
            message='Either "symbol", or ("class", "member") must be supplied',
            details={k: v for k, v in fields.items() if v is not None},
        )

    @classmethod
    def capability_disabled(cls, capability: str, setting: str) -> "RequestError":
        return cls(
            code=ErrorCode.CAPABILITY_DISABLED,
            message=f"{capability} is disabled; enable it with '{setting}'",
            details={"capability": capability, "setting": setting},
        )

    @classmethod
    def unknown_environment(cls, env: str) -> "RequestError":
        return cls(
            code=ErrorCode.UNKNOWN_ENVIRONMENT,
            message=f"No alternate environment is registered to serve '{env}'",
            details={"env": env},
        )


class ConfigError(SymbolInfoError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Data file not found: {path}",
            details={"path": path},
        )


class InternalError(SymbolInfoError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
