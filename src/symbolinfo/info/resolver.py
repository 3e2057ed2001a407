"""Prioritized symbol resolution.

For an ``ns`` + ``symbol`` reference the first strategy with an answer
wins:

1. keyword (special form)
2. binding visible from ``ns``
3. alias in ``ns`` naming another module
4. module named ``symbol``
5. class or class member

``class`` + ``member`` references go straight to step 5. References
carrying an alternate environment handle are answered by that
environment alone.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Protocol

import structlog

from symbolinfo.core.errors import RequestError
from symbolinfo.info.environment import Environment
from symbolinfo.info.models import InfoMap, InfoRequest
from symbolinfo.info.paths import PathResolver
from symbolinfo.info.reflection import Reflector
from symbolinfo.info.see_also import SeeAlsoIndex

log = structlog.get_logger(__name__)

# Keys kept from alternate environments, whose output shape is not ours
ALTERNATE_KEYS = ("file", "line", "ns", "doc", "column", "name", "arglists")

Strategy = Callable[[str, str], InfoMap | None]


class AlternateEnvironment(Protocol):
    """Lookup facility of another language environment (e.g. a compiled target)."""

    def info(self, env: str, symbol: str | None, ns: str | None) -> Mapping[str, Any] | None: ...


class SymbolResolver:
    def __init__(
        self,
        environment: Environment,
        reflector: Reflector,
        see_also: SeeAlsoIndex,
        *,
        alternate: AlternateEnvironment | None = None,
        paths: PathResolver | None = None,
        remap_build_temp_paths: bool = False,
    ) -> None:
        self._env = environment
        self._reflector = reflector
        self._see_also = see_also
        self._alternate = alternate
        self._paths = paths
        self._remap = remap_build_temp_paths
        self._strategies: tuple[tuple[str, Strategy], ...] = (
            ("special_form", lambda _ns, sym: environment.special_form(sym)),
            ("binding", environment.resolve_binding),
            ("alias", environment.resolve_alias),
            ("namespace", lambda _ns, sym: environment.find_namespace(sym)),
            ("class", reflector.resolve_class_or_member),
        )

    def resolve_symbol(self, ns: str, symbol: str) -> InfoMap | None:
        for name, strategy in self._strategies:
            info = strategy(ns, symbol)
            if info is not None:
                log.debug("symbol_resolved", ns=ns, symbol=symbol, strategy=name)
                return info
        log.debug("symbol_not_found", ns=ns, symbol=symbol)
        return None

    def resolve_member(self, class_name: str, member: str) -> InfoMap | None:
        return self._reflector.member_info(class_name, member)

    def resolve_alternate(self, env: str, symbol: str | None, ns: str | None) -> InfoMap | None:
        if self._alternate is None:
            raise RequestError.unknown_environment(env)
        raw = self._alternate.info(env, symbol, ns)
        if raw is None:
            return None
        info = {key: raw[key] for key in ALTERNATE_KEYS if key in raw}
        if self._remap and self._paths is not None and isinstance(info.get("file"), str):
            info["file"] = self._paths.classpath_relative(info["file"])
        return info

    def resolve(self, request: InfoRequest) -> InfoMap | None:
        """Resolve ``request``; None when nothing matches.

        Raises:
            RequestError: Neither reference shape is populated, or the
                request names an alternate environment nobody serves.
        """
        shape = request.shape()
        if shape == "alternate":
            return self.resolve_alternate(request.env or "", request.symbol, request.ns)
        if shape == "symbol":
            info = self.resolve_symbol(request.ns or "", request.symbol or "")
        elif shape == "member":
            info = self.resolve_member(request.class_ or "", request.member or "")
        else:
            raise RequestError.invalid_request(**request.describe())
        return self.with_see_also(info)

    def with_see_also(self, info: InfoMap | None) -> InfoMap | None:
        """Add live related bindings from the index; existing keys are kept."""
        if info is None:
            return None
        key = see_also_key(info)
        if key is None:
            return info
        related = self._see_also.related(key, self._env.is_live)
        if related:
            return {"see_also": related, **info}
        return info


def see_also_key(info: InfoMap) -> str | None:
    """Index key ``"<ns>/<name>"`` of a resolved record.

    Classes are keyed by their defining module and qualified name. Keywords
    and class members have no key.
    """
    ns, name = info.get("ns"), info.get("name")
    if ns and name:
        return f"{ns}/{name}"
    cls = info.get("class")
    if isinstance(cls, str) and not info.get("member"):
        module, _, qualname = cls.rpartition(".")
        if module:
            return f"{module}/{qualname}"
    return None
