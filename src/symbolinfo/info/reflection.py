"""Class and member reflection.

Attributes are read with ``inspect.getattr_static`` so that looking up a
member never runs a descriptor or ``__getattr__`` hook.
"""

from __future__ import annotations

import builtins
import inspect
import sys
from collections.abc import Iterable, Mapping
from types import ModuleType
from typing import Any, Protocol

from symbolinfo.info.environment import compact, signature_shapes, source_location
from symbolinfo.info.models import InfoMap

_MISSING = object()


class Reflector(Protocol):
    """Class/member lookups outside the binding namespace."""

    def resolve_class_or_member(self, ns: str, symbol: str) -> InfoMap | None: ...

    def member_info(self, class_name: str, member: str | None) -> InfoMap | None: ...


def class_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class PythonReflector:
    """Reflects classes reachable from loaded modules."""

    def __init__(
        self,
        modules: Mapping[str, ModuleType] | None = None,
        *,
        stdlib_names: Iterable[str] | None = None,
    ) -> None:
        self._modules = modules if modules is not None else sys.modules
        self._stdlib = frozenset(stdlib_names if stdlib_names is not None else sys.stdlib_module_names)

    # -- lookup -------------------------------------------------------------

    def find_class(self, ns: str | None, dotted: str) -> type | None:
        """Class named by ``dotted``, seen from ``ns`` when given.

        Tried in order: a global of ``ns``, a builtin, the longest loaded
        module prefix. Later segments may cross modules and nested classes.
        """
        parts = [p for p in dotted.split(".") if p]
        if not parts:
            return None
        for value, rest in self._heads(ns, parts):
            for part in rest:
                if not isinstance(value, (ModuleType, type)):
                    value = _MISSING
                    break
                value = self._static(value, part)
                if value is _MISSING:
                    break
            if isinstance(value, type):
                return value
        return None

    def _heads(self, ns: str | None, parts: list[str]) -> Iterable[tuple[Any, list[str]]]:
        module = self._modules.get(ns) if ns else None
        if isinstance(module, ModuleType) and parts[0] in vars(module):
            yield vars(module)[parts[0]], parts[1:]
        if parts[0] in vars(builtins):
            yield vars(builtins)[parts[0]], parts[1:]
        for i in range(len(parts), 0, -1):
            loaded = self._modules.get(".".join(parts[:i]))
            if isinstance(loaded, ModuleType):
                yield loaded, parts[i:]
                return

    @staticmethod
    def _static(obj: Any, name: str) -> Any:
        try:
            return inspect.getattr_static(obj, name)
        except AttributeError:
            return _MISSING

    def visible_classes(self, ns: str | None) -> list[type]:
        """Classes bound in ``ns`` followed by builtin classes, without duplicates."""
        seen: dict[int, type] = {}
        module = self._modules.get(ns) if ns else None
        scopes = [vars(module)] if isinstance(module, ModuleType) else []
        scopes.append(vars(builtins))
        for scope in scopes:
            for value in list(scope.values()):
                if isinstance(value, type):
                    seen.setdefault(id(value), value)
        return list(seen.values())

    def resolve_class_or_member(self, ns: str, symbol: str) -> InfoMap | None:
        """Resolve ``Class``, ``pkg.Class``, ``Class.member`` or a bare ``member``.

        A bare member (optionally written ``.member``) is looked up on every
        class visible from ``ns``. When several classes declare it the
        result is ``{"candidates": {class name: member info}}``.
        """
        if symbol.startswith("."):
            return self._find_member(ns, symbol[1:])
        if cls := self.find_class(ns, symbol):
            return self.class_info(cls)
        if "." in symbol:
            owner, _, member = symbol.rpartition(".")
            cls = self.find_class(ns, owner)
            return self._member_info(cls, member) if cls else None
        return self._find_member(ns, symbol)

    def _find_member(self, ns: str, member: str) -> InfoMap | None:
        if not member.isidentifier():
            return None
        declaring = [cls for cls in self.visible_classes(ns) if member in vars(cls)]
        if not declaring:
            return None
        if len(declaring) == 1:
            return self._member_info(declaring[0], member)
        candidates = {
            class_name(cls): self._member_info(cls, member)
            for cls in sorted(declaring, key=class_name)
        }
        return {"candidates": {k: v for k, v in candidates.items() if v is not None}}

    def member_info(self, class_name: str, member: str | None) -> InfoMap | None:
        cls = self.find_class(None, class_name)
        if cls is None:
            return None
        if not member:
            return self.class_info(cls)
        return self._member_info(cls, member)

    # -- metadata -----------------------------------------------------------

    def class_info(self, cls: type) -> InfoMap:
        file, line = source_location(cls)
        return compact(
            {
                "class": class_name(cls),
                "doc": inspect.getdoc(cls),
                "arglists": signature_shapes(cls),
                "bases": [class_name(b) for b in cls.__bases__ if b is not object] or None,
                "file": file,
                "line": line,
                "javadoc": self.doc_path(cls),
            }
        )

    def _member_info(self, cls: type, member: str) -> InfoMap | None:
        raw = self._static(cls, member)
        if raw is _MISSING:
            return None
        if isinstance(raw, staticmethod):
            kind, target = "staticmethod", raw.__func__
        elif isinstance(raw, classmethod):
            kind, target = "classmethod", raw.__func__
        elif isinstance(raw, property):
            kind, target = "property", raw.fget
        elif callable(raw):
            kind, target = "method", raw
        else:
            kind, target = "attribute", None
        file, line = source_location(target) if target is not None else (None, None)
        return compact(
            {
                "class": class_name(cls),
                "member": member,
                "member_kind": kind,
                "doc": inspect.getdoc(target) if target is not None else None,
                "arglists": signature_shapes(target) if kind != "property" and target else None,
                "file": file,
                "line": line,
                "javadoc": self.doc_path(cls, member),
            }
        )

    def doc_path(self, cls: type, member: str | None = None) -> str:
        """Relative documentation path for a class or member.

        Stdlib: ``<module>.html#<module>.<Class>[.<member>]`` (library
        reference pages). Builtins land on ``stdtypes.html`` or
        ``exceptions.html``. Others: ``<module>.<Class>[.<member>].html``.
        """
        module = _public_module(cls.__module__)
        suffix = f".{member}" if member else ""
        if module == "builtins":
            page = "exceptions" if issubclass(cls, BaseException) else "stdtypes"
            return f"{page}.html#{cls.__qualname__}{suffix}"
        target = f"{module}.{cls.__qualname__}{suffix}"
        if module.split(".")[0] in self._stdlib:
            return f"{module}.html#{target}"
        return f"{target}.html"


def _public_module(name: str) -> str:
    """``_io`` -> ``io``, ``collections._x`` -> ``collections``."""
    public = [part for part in name.split(".") if not part.startswith("_")]
    return ".".join(public) or name.lstrip("_")
