"""Related-binding index loaded from the bundled see_also.yaml."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from functools import cache
from pathlib import Path
from types import MappingProxyType

import structlog
import yaml

from symbolinfo.core.errors import ConfigError

log = structlog.get_logger(__name__)

BUNDLED_SEE_ALSO = Path(__file__).parent / "see_also.yaml"


class SeeAlsoIndex:
    """Read-only mapping from ``"<ns>/<name>"`` to related keys."""

    def __init__(self, entries: Mapping[str, Iterable[str]]) -> None:
        self._entries: Mapping[str, tuple[str, ...]] = MappingProxyType(
            {str(key): tuple(str(v) for v in values) for key, values in entries.items()}
        )

    @classmethod
    def load(cls, path: Path = BUNDLED_SEE_ALSO) -> SeeAlsoIndex:
        """Read an index file.

        Raises:
            ConfigError: If the file is missing or not a mapping of lists.
        """
        if not path.exists():
            raise ConfigError.file_not_found(str(path))
        try:
            with path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError.parse_error(str(path), str(e)) from e
        if not isinstance(data, dict) or not all(isinstance(v, list) for v in data.values()):
            raise ConfigError.parse_error(str(path), "expected a mapping of key -> list of keys")
        index = cls(data)
        log.debug("see_also_loaded", path=str(path), entries=len(index))
        return index

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: str) -> tuple[str, ...]:
        return self._entries.get(key, ())

    def related(self, key: str, is_live: Callable[[str], bool]) -> list[str]:
        """Entries for ``key`` that still resolve, in index order."""
        return [target for target in self.get(key) if is_live(target)]


@cache
def bundled_index() -> SeeAlsoIndex:
    """The index shipped with the package, read once per process."""
    return SeeAlsoIndex.load()
