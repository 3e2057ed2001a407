"""Lookups against the running interpreter.

Namespaces are modules already in ``sys.modules``; nothing here imports a
module, since importing runs arbitrary code. Bindings are module-level
values other than modules and classes: modules are reached through alias
and namespace lookup, classes through reflection.
"""

from __future__ import annotations

import builtins
import inspect
import sys
from collections.abc import Mapping
from types import ModuleType
from typing import Any, Protocol

from symbolinfo.info.models import InfoMap
from symbolinfo.info.special_forms import special_form_meta

_MISSING = object()


class Environment(Protocol):
    """Name resolution in the evaluation environment."""

    def special_form(self, name: str) -> InfoMap | None: ...

    def resolve_binding(self, ns: str, name: str) -> InfoMap | None: ...

    def resolve_alias(self, ns: str, name: str) -> InfoMap | None: ...

    def find_namespace(self, name: str) -> InfoMap | None: ...

    def is_live(self, key: str) -> bool:
        """Whether ``"<ns>/<name>"`` currently resolves to a binding."""
        ...


def compact(info: Mapping[str, Any]) -> InfoMap:
    """Drop keys whose value is None."""
    return {k: v for k, v in info.items() if v is not None}


def signature_shapes(obj: Any) -> list[tuple[inspect.Parameter, ...]] | None:
    """Parameter shapes of a callable, or None when it has no introspectable signature."""
    try:
        sig = inspect.signature(obj)
    except (TypeError, ValueError):
        return None
    return [tuple(sig.parameters.values())]


def source_location(obj: Any) -> tuple[str | None, int | None]:
    """Best-effort (file, first line) of a function or class."""
    try:
        target = inspect.unwrap(obj)
    except ValueError:
        target = obj
    try:
        file = inspect.getsourcefile(target) or inspect.getfile(target)
    except (OSError, TypeError):
        return None, None
    code = getattr(target, "__code__", None)
    if code is not None:
        return file, code.co_firstlineno
    line = getattr(target, "__firstlineno__", None)
    if line is None and inspect.isclass(target):
        try:
            line = inspect.getsourcelines(target)[1]
        except (OSError, TypeError):
            line = None
    return file, line


class PythonEnvironment:
    """Environment backed by the interpreter's loaded modules."""

    def __init__(self, modules: Mapping[str, ModuleType] | None = None) -> None:
        self._modules = modules if modules is not None else sys.modules

    def namespace(self, name: str) -> ModuleType | None:
        module = self._modules.get(name)
        return module if isinstance(module, ModuleType) else None

    def special_form(self, name: str) -> InfoMap | None:
        return special_form_meta(name)

    def lookup(self, ns: str, name: str) -> tuple[Any, ModuleType] | None:
        """Value of (possibly dotted) ``name`` as seen from ``ns``, and the module holding it.

        The head is a global of ``ns`` or a builtin. Further segments are
        followed through modules only.
        """
        module = self.namespace(ns)
        if module is None or not name:
            return None
        head, *rest = name.split(".")
        value = vars(module).get(head, _MISSING)
        holder = module
        if value is _MISSING:
            value = vars(builtins).get(head, _MISSING)
            holder = builtins
        if value is _MISSING:
            return None
        for part in rest:
            if not isinstance(value, ModuleType):
                return None
            holder = value
            value = vars(value).get(part, _MISSING)
            if value is _MISSING:
                return None
        return value, holder

    def resolve_binding(self, ns: str, name: str) -> InfoMap | None:
        found = self.lookup(ns, name)
        if found is None:
            return None
        value, holder = found
        if isinstance(value, (ModuleType, type)):
            return None
        return self.binding_meta(value, name.rsplit(".", 1)[-1], holder)

    def binding_meta(self, value: Any, name: str, holder: ModuleType) -> InfoMap:
        if callable(value) and isinstance(getattr(value, "__name__", None), str):
            file, line = source_location(value)
            return compact(
                {
                    "ns": self._home(value, holder),
                    "name": value.__name__,
                    "doc": inspect.getdoc(value),
                    "arglists": signature_shapes(value),
                    "file": file,
                    "line": line,
                }
            )
        return compact(
            {
                "ns": holder.__name__,
                "name": name,
                "doc": inspect.getdoc(value) if callable(value) else None,
                "arglists": signature_shapes(value) if callable(value) else None,
                "file": getattr(holder, "__file__", None),
            }
        )

    def _home(self, value: Any, holder: ModuleType) -> str:
        """Public module that defines ``value``.

        C accelerator modules (``_functools``) are reported under the public
        module re-exporting the same object (``functools``).
        """
        module_name = getattr(value, "__module__", None)
        if not isinstance(module_name, str):
            return holder.__name__
        for candidate in (module_name.lstrip("_"), module_name):
            module = self.namespace(candidate)
            if module is not None and vars(module).get(value.__name__) is value:
                return candidate
        return module_name

    def resolve_alias(self, ns: str, name: str) -> InfoMap | None:
        module = self.namespace(ns)
        if module is None:
            return None
        target = vars(module).get(name)
        if isinstance(target, ModuleType):
            return self.namespace_meta(target)
        return None

    def find_namespace(self, name: str) -> InfoMap | None:
        module = self.namespace(name)
        return self.namespace_meta(module) if module is not None else None

    @staticmethod
    def namespace_meta(module: ModuleType) -> InfoMap:
        file = getattr(module, "__file__", None)
        return compact(
            {
                "ns": module.__name__,
                "name": module.__name__,
                "doc": inspect.getdoc(module),
                "file": file,
                "line": 1 if file else None,
            }
        )

    def is_live(self, key: str) -> bool:
        ns, sep, name = key.rpartition("/")
        if not sep or not ns or not name:
            return False
        module = self.namespace(ns.replace("/", "."))
        return module is not None and name in vars(module)
