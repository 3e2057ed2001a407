"""Source location resolution.

A raw ``file`` value may be a local path, a path inside an archive on the
import path, a build tool's temp copy of a source file, or a placeholder
name for code typed at a prompt. ``PathResolver`` turns it into the best
location an editor can open.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path, PurePath
from typing import Any

from symbolinfo.info.resources import ResourceLocator


class PathResolver:
    def __init__(
        self,
        resources: ResourceLocator,
        *,
        placeholder_prefixes: Sequence[str] = ("<", "form-init"),
        archive_extensions: Sequence[str] = ("jar", "zip", "whl", "egg", "pyz"),
    ) -> None:
        self._resources = resources
        self._placeholder_prefixes = tuple(placeholder_prefixes)
        exts = "|".join(re.escape(ext) for ext in archive_extensions)
        # ".../lib.jar!/a/b.py" first, then ".../lib.jar:a/b.py" (load-file on archive entries)
        self._archive_patterns = (
            re.compile(rf".*\.(?:{exts})!/(.*)"),
            re.compile(rf".*\.(?:{exts}):(.*)"),
        )

    def local_file_url(self, raw: str) -> str | None:
        """URL for ``raw`` if it is a real file that was not evaluated at a prompt."""
        if not raw:
            return None
        path = Path(raw)
        if path.name.startswith(self._placeholder_prefixes):
            return None
        try:
            if not path.exists():
                return None
            return path.resolve().as_uri()
        except (OSError, ValueError):
            return None

    def resource_path(self, raw: str) -> tuple[str, str] | None:
        """``(relative, full_url)`` if ``raw`` names a resource, else None."""
        if full := self._resources.exists(raw):
            return raw, full
        for pattern in self._archive_patterns:
            if match := pattern.search(raw):
                relative = match.group(1)
                if full := self._resources.exists(relative):
                    return relative, full
        return None

    def resolve(self, raw: str) -> dict[str, Any]:
        """Resolve ``raw`` to ``{"file": location, "resource"?: relative}``."""
        resource = self.resource_path(raw)
        info: dict[str, Any] = {
            "file": self.local_file_url(raw) or (resource[1] if resource else None) or raw
        }
        if resource:
            info["resource"] = resource[0]
        return info

    def classpath_relative(self, raw: str) -> str:
        """First suffix of ``raw`` that exists as a resource.

        Suffixes are tried from the full path down to the last segment, so
        ``/tmp/build-123/src/pkg/mod.py`` becomes ``pkg/mod.py`` when that
        resolves. Returns ``raw`` when no suffix does.
        """
        parts = PurePath(raw).parts
        if parts and PurePath(raw).anchor:
            parts = parts[1:]
        for start in range(len(parts)):
            candidate = "/".join(parts[start:])
            if self._resources.exists(candidate):
                return candidate
        return raw
