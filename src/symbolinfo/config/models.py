"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SYMBOLINFO__SECTION__KEY)
3. Project YAML (.symbolinfo/config.yaml)
4. Global YAML (~/.config/symbolinfo/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    SYMBOLINFO__<SECTION>__<KEY>=<VALUE>

Examples:
    SYMBOLINFO__LOGGING__LEVEL=DEBUG
    SYMBOLINFO__DOCS__JAVA_API_VERSION=17
    SYMBOLINFO__QUERY__ENABLED=true
"""

import sys
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

JVM_DOC_PREFIXES = ("java", "javax", "org/omg", "org/w3c/dom", "org/xml/sax")

# Library reference pages for builtins, named like modules in doc paths
PYTHON_REFERENCE_PAGES = ("stdtypes", "exceptions", "functions", "constants")


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        SYMBOLINFO__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every resolution step.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class RemoteDocConfig(BaseModel):
    """A class-name prefix served by an external documentation site."""

    prefix: str
    base_url: str


class DocsConfig(BaseModel):
    """Documentation link configuration.

    Env vars:
        SYMBOLINFO__DOCS__JAVA_API_VERSION: JVM platform API version in doc URLs
        SYMBOLINFO__DOCS__PYTHON_VERSION: Python version in stdlib doc URLs
    """

    java_api_version: str = Field(
        default="8",
        description="Platform API version substituted into JVM documentation URLs.",
    )
    java_url_template: str = Field(
        default="https://docs.oracle.com/javase/{version}/docs/api/{path}",
    )
    java_prefixes: list[str] = Field(default_factory=lambda: list(JVM_DOC_PREFIXES))
    python_version: str = Field(
        default=f"{sys.version_info.major}.{sys.version_info.minor}",
        description="Python version substituted into stdlib documentation URLs.",
    )
    python_url_template: str = Field(
        default="https://docs.python.org/{version}/library/{path}",
    )
    python_prefixes: list[str] = Field(
        default_factory=lambda: sorted({*sys.stdlib_module_names, *PYTHON_REFERENCE_PAGES}),
        description="Top-level modules documented in the Python library reference.",
    )
    remote: list[RemoteDocConfig] = Field(
        default_factory=lambda: [
            RemoteDocConfig(
                prefix="com.amazonaws.",
                base_url="http://docs.aws.amazon.com/AWSJavaSDK/latest/javadoc/",
            ),
            RemoteDocConfig(
                prefix="org.apache.kafka.",
                base_url="https://kafka.apache.org/090/javadoc/index.html?",
            ),
            RemoteDocConfig(
                prefix="numpy.",
                base_url="https://numpy.org/doc/stable/reference/generated/",
            ),
            RemoteDocConfig(
                prefix="pandas.",
                base_url="https://pandas.pydata.org/docs/reference/api/",
            ),
        ],
        description="Registered prefix -> base URL table. First matching prefix wins.",
    )


class PathsConfig(BaseModel):
    """Source location resolution.

    Env vars:
        SYMBOLINFO__PATHS__REMAP_BUILD_TEMP_PATHS: Recover classpath-relative
            paths for files served from a build tool's temp directory
    """

    search_path: list[str] | None = Field(
        default=None,
        description="Resource roots (directories or archives). Defaults to sys.path.",
    )
    placeholder_prefixes: list[str] = Field(
        default_factory=lambda: ["<", "form-init"],
        description="File names with these prefixes were evaluated at a prompt, not loaded.",
    )
    archive_extensions: list[str] = Field(
        default_factory=lambda: ["jar", "zip", "whl", "egg", "pyz"],
    )
    remap_build_temp_paths: bool = Field(
        default=False,
        description="Remap alternate-environment file paths to their shortest "
        "classpath-relative suffix.",
    )


class QueryConfig(BaseModel):
    """Structured-query introspection.

    Env vars:
        SYMBOLINFO__QUERY__ENABLED: Allow eldoc_query
    """

    enabled: bool = Field(
        default=False,
        description="Allow eldoc_query. RISK: resolving a symbol reads live values "
        "from the running interpreter.",
    )


class ServerConfig(BaseModel):
    """MCP server configuration.

    Env vars:
        SYMBOLINFO__SERVER__NAME: Server name advertised to clients
    """

    name: str = Field(default="symbolinfo")
    instructions: str = Field(
        default="Symbol documentation, signatures and source locations for the "
        "running Python environment.",
    )


class SymbolInfoConfig(BaseModel):
    """Root configuration for symbolinfo.

    All settings can be configured via:
    1. Environment variables: SYMBOLINFO__SECTION__KEY
    2. YAML config files (project or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    docs: DocsConfig = Field(default_factory=DocsConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
