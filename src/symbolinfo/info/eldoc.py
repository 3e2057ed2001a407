"""Compact signature hints derived from resolved info."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from symbolinfo.info.models import InfoMap


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping))


def extract_arglists(info: Mapping[str, Any]) -> list[tuple[Any, ...]]:
    """Parameter shapes for the hint.

    Keywords turn each literal form into a shape. Ambiguous members merge
    every candidate's shapes, without duplicates, shortest first.
    """
    if info.get("special_form"):
        return [tuple(form) if _is_sequence(form) else (form,) for form in info.get("forms") or ()]
    if candidates := info.get("candidates"):
        merged: list[tuple[Any, ...]] = []
        for candidate in candidates.values():
            for shape in (candidate or {}).get("arglists") or ():
                shape = tuple(shape)
                # Parameter defaults may be unhashable, so dedupe by equality
                if shape not in merged:
                    merged.append(shape)
        return sorted(merged, key=len)
    return [tuple(shape) for shape in info.get("arglists") or ()]


def format_arglists(raw_arglists: Iterable[Iterable[Any]]) -> list[list[str]]:
    return [[str(param) for param in shape] for shape in raw_arglists]


def extract_ns_or_class(info: Mapping[str, Any]) -> InfoMap:
    if ns := info.get("ns"):
        return {"ns": str(ns)}
    if cls := info.get("class"):
        return {"class": [str(cls)]}
    if candidates := info.get("candidates"):
        return {"class": [str(key) for key in candidates]}
    return {}


def extract_name_or_member(info: Mapping[str, Any]) -> InfoMap:
    if name := info.get("name"):
        return {"name": str(name)}
    if member := info.get("member"):
        return {"member": str(member)}
    if candidates := info.get("candidates"):
        first = next(iter(candidates.values()), None) or {}
        return {"member": str(first.get("member"))}
    return {}


def extract_eldoc(info: Mapping[str, Any]) -> InfoMap:
    if arglists := format_arglists(extract_arglists(info)):
        return {"eldoc": arglists, "type": "function"}
    return {"type": "variable"}


def eldoc(info: Mapping[str, Any]) -> InfoMap:
    """Full eldoc reply body for one resolved record."""
    return {
        **extract_ns_or_class(info),
        **extract_name_or_member(info),
        **extract_eldoc(info),
        "docstring": info.get("doc"),
    }
