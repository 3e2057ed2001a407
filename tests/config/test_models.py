"""Tests for config/models.py defaults and validation."""

from __future__ import annotations

import sys

import pytest
from pydantic import ValidationError

from symbolinfo.config.models import (
    JVM_DOC_PREFIXES,
    DocsConfig,
    LogOutputConfig,
    PathsConfig,
    QueryConfig,
    SymbolInfoConfig,
)


class TestLogOutputConfig:
    """Tests for log output destinations."""

    @pytest.mark.parametrize("destination", ["stderr", "stdout"])
    def test_console_destinations_accepted(self, destination: str) -> None:
        assert LogOutputConfig(destination=destination).destination == destination

    def test_relative_file_destination_rejected(self) -> None:
        """File destinations must be absolute."""
        with pytest.raises(ValidationError):
            LogOutputConfig(destination="logs/out.log")

    def test_home_relative_destination_expanded(self) -> None:
        config = LogOutputConfig(destination="~/symbolinfo.log")
        assert not config.destination.startswith("~")


class TestDocsConfig:
    """Tests for documentation link defaults."""

    def test_jvm_defaults(self) -> None:
        config = DocsConfig()
        assert config.java_api_version == "8"
        assert config.java_prefixes == list(JVM_DOC_PREFIXES)
        assert "{version}" in config.java_url_template
        assert "{path}" in config.java_url_template

    def test_python_defaults_track_running_interpreter(self) -> None:
        config = DocsConfig()
        assert config.python_version == f"{sys.version_info.major}.{sys.version_info.minor}"
        assert "json" in config.python_prefixes
        assert "stdtypes" in config.python_prefixes

    def test_remote_defaults_are_ordered_prefixes(self) -> None:
        prefixes = [entry.prefix for entry in DocsConfig().remote]
        assert prefixes[:2] == ["com.amazonaws.", "org.apache.kafka."]


class TestSectionDefaults:
    """Tests for the remaining section defaults."""

    def test_query_disabled_by_default(self) -> None:
        assert QueryConfig().enabled is False

    def test_paths_defaults(self) -> None:
        config = PathsConfig()
        assert config.search_path is None
        assert config.placeholder_prefixes == ["<", "form-init"]
        assert "jar" in config.archive_extensions
        assert config.remap_build_temp_paths is False

    def test_root_config_builds_all_sections(self) -> None:
        config = SymbolInfoConfig()
        assert config.logging.level == "INFO"
        assert config.server.name == "symbolinfo"
