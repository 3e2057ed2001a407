"""Documentation URL resolution for reflected classes and members.

Sources are tried best first: docs shipped on the resource path, then the
official platform reference (JVM API docs or the Python library
reference), then sites registered per class-name prefix, then the
relative path itself.
"""

from __future__ import annotations

import re
import threading
from collections.abc import Iterable

import structlog

from symbolinfo.config.models import DocsConfig
from symbolinfo.info.resources import ResourceLocator

log = structlog.get_logger(__name__)

_LEADING_SEGMENT = re.compile(r"^([^/.#]+)")


class RemoteDocs:
    """Ordered prefix -> base URL table.

    Populated at startup; later registrations are allowed from any thread.
    Readers iterate over an immutable snapshot.
    """

    def __init__(self, entries: Iterable[tuple[str, str]] = ()) -> None:
        self._lock = threading.Lock()
        self._entries: tuple[tuple[str, str], ...] = tuple(entries)

    @classmethod
    def from_config(cls, config: DocsConfig) -> RemoteDocs:
        return cls((entry.prefix, entry.base_url) for entry in config.remote)

    def register(self, prefix: str, base_url: str) -> None:
        """Add or replace the base URL for ``prefix``."""
        with self._lock:
            kept = tuple(e for e in self._entries if e[0] != prefix)
            self._entries = (*kept, (prefix, base_url))
        log.debug("remote_docs_registered", prefix=prefix, base_url=base_url)

    def entries(self) -> tuple[tuple[str, str], ...]:
        return self._entries

    def lookup(self, path: str) -> str | None:
        classname = path.replace("/", ".")
        for prefix, base_url in self._entries:
            if classname.startswith(prefix):
                return base_url + path
        return None


class DocLinkResolver:
    def __init__(
        self,
        config: DocsConfig,
        resources: ResourceLocator,
        remote: RemoteDocs | None = None,
    ) -> None:
        self._config = config
        self._resources = resources
        self._remote = remote if remote is not None else RemoteDocs.from_config(config)
        self._python_prefixes = frozenset(config.python_prefixes)

    @property
    def remote(self) -> RemoteDocs:
        return self._remote

    def platform_url(self, path: str) -> str | None:
        """Official reference URL when ``path`` belongs to a platform package."""
        for prefix in self._config.java_prefixes:
            if path.startswith(prefix.rstrip("/") + "/"):
                return self._config.java_url_template.format(
                    version=self._config.java_api_version, path=path
                )
        match = _LEADING_SEGMENT.match(path)
        if match and match.group(1) in self._python_prefixes:
            return self._config.python_url_template.format(
                version=self._config.python_version, path=path
            )
        return None

    def resolve(self, path: str) -> dict[str, str]:
        """Resolve a relative doc path to ``{"javadoc": url_or_path}``."""
        url = (
            self._resources.exists(path)
            or self.platform_url(path)
            or self._remote.lookup(path)
            or path
        )
        return {"javadoc": url}
