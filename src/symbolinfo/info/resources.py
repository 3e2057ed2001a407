"""Resource lookup over the import search path."""

from __future__ import annotations

import sys
import zipfile
from collections.abc import Sequence
from pathlib import Path, PurePosixPath
from typing import Protocol

_ARCHIVE_SUFFIXES = (".zip", ".whl", ".egg", ".pyz", ".jar")


class ResourceLocator(Protocol):
    """Finds files by path relative to a resource root."""

    def exists(self, relative: str) -> str | None:
        """Full URL of ``relative`` if some root holds it, else None."""
        ...


class SysPathResources:
    """Resolve resources against directory and archive entries of sys.path.

    Roots are read from ``sys.path`` on every lookup unless an explicit
    search path is given.
    """

    def __init__(self, search_path: Sequence[str] | None = None) -> None:
        self._search_path = list(search_path) if search_path is not None else None

    def _roots(self) -> list[str]:
        return self._search_path if self._search_path is not None else list(sys.path)

    def exists(self, relative: str) -> str | None:
        rel = PurePosixPath(relative.replace("\\", "/"))
        if not relative or rel.is_absolute() or ".." in rel.parts:
            return None
        for root in self._roots():
            if not root:
                continue
            base = Path(root)
            if base.is_dir():
                candidate = base / rel
                if candidate.is_file():
                    return candidate.resolve().as_uri()
            elif base.suffix.lower() in _ARCHIVE_SUFFIXES and base.is_file():
                if _archive_has(base, str(rel)):
                    return f"zip:{base.resolve()}!/{rel}"
        return None


def _archive_has(archive: Path, member: str) -> bool:
    try:
        with zipfile.ZipFile(archive) as zf:
            zf.getinfo(member)
    except (KeyError, OSError, zipfile.BadZipFile):
        return False
    return True
