"""Projection of resolved info into transport-safe replies.

Raw parameter shapes hold live objects (parameter defaults can be
anything), so they are rendered to display strings and then dropped.
Everything left is forced into JSON-compatible values.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from symbolinfo.info.doclinks import DocLinkResolver
from symbolinfo.info.models import InfoMap
from symbolinfo.info.paths import PathResolver

# Metadata can hold arbitrary objects; these keys never leave the process
UNSAFE_KEYS = frozenset({"arglists", "forms"})


def print_shape(shape: Any) -> str:
    """``(sep=None, maxsplit=-1)`` style rendering of one parameter shape."""
    if isinstance(shape, str):
        return shape
    items = list(shape) if isinstance(shape, Iterable) else [shape]
    if items and all(isinstance(p, inspect.Parameter) for p in items):
        try:
            return str(inspect.Signature(items))
        except ValueError:
            pass
    return "(" + ", ".join(str(p) for p in items) + ")"


def print_form(form: Any) -> str:
    """``for target in iterable: suite`` style rendering of one literal form."""
    if isinstance(form, str):
        return form
    if isinstance(form, Iterable):
        return " ".join(str(token) for token in form)
    return str(form)


def join_printed(values: Iterable[Any], printer: Callable[[Any], str]) -> str:
    return "\n".join(printer(v) for v in values)


def strip_unsafe(info: Mapping[str, Any]) -> InfoMap:
    return {k: v for k, v in info.items() if k not in UNSAFE_KEYS}


def transport_value(value: Any) -> Any:
    """Coerce ``value`` into plain JSON-compatible data."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Mapping):
        return {str(k): transport_value(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted((transport_value(v) for v in value), key=str)
    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        return [transport_value(v) for v in value]
    return str(value)


class ResponseFormatter:
    def __init__(self, paths: PathResolver, docs: DocLinkResolver) -> None:
        self._paths = paths
        self._docs = docs

    def normalize(self, info: Mapping[str, Any] | None) -> InfoMap | None:
        """Normalize one record; None stays None."""
        if info is None:
            return None
        out: InfoMap = dict(info)
        if (ns := info.get("ns")) is not None:
            out["ns"] = str(ns)
        if (arglists := info.get("arglists")) is not None:
            out["arglists_str"] = join_printed(arglists, print_shape)
        if (forms := info.get("forms")) is not None:
            out["forms_str"] = join_printed(forms, print_form)
        if file := info.get("file"):
            out.update(self._paths.resolve(str(file)))
        if doc_path := info.get("javadoc"):
            out.update(self._docs.resolve(str(doc_path)))
        out = self._normalize_candidates(out)
        return transport_value(strip_unsafe(out))

    def _normalize_candidates(self, info: InfoMap) -> InfoMap:
        candidates = info.get("candidates")
        if not isinstance(candidates, Mapping):
            return info
        info["candidates"] = {
            str(key): self.normalize(value) for key, value in candidates.items()
        }
        return info
