"""Input names of structured queries held in live values.

A query is either a mapping naming its inputs under ``"in"`` (or ``":in"``)::

    {"find": ["?e"], "in": ["$", "?name"], "where": [...]}

or a flat sequence split into sections by ``:keyword`` markers::

    [":find", "?e", ":in", "$", "?name", ":where", ...]

Queries without declared inputs take the default source ``"$"``; declared
empty inputs stay empty. The shape test is a heuristic: anything mapping-
or sequence-shaped is accepted.
"""

from __future__ import annotations

import ast
import keyword
from collections.abc import Mapping, Sequence
from itertools import groupby
from typing import Any, Protocol

import structlog

from symbolinfo.info.eldoc import format_arglists

log = structlog.get_logger(__name__)

DEFAULT_INPUTS = "$"


class ValueSource(Protocol):
    def lookup(self, ns: str, name: str) -> tuple[Any, Any] | None: ...


class QueryShapeError(ValueError):
    """The value is not a recognized query shape."""


def is_section_keyword(token: Any) -> bool:
    return isinstance(token, str) and token.startswith(":") and len(token) > 1


def _is_name(text: str) -> bool:
    return all(part.isidentifier() and not keyword.iskeyword(part) for part in text.split("."))


def read_query(source: ValueSource, ns: str, symbol: str) -> Any:
    """Value of ``symbol``: a binding seen from ``ns``, or a Python literal.

    Raises:
        LookupError: ``symbol`` is a name that does not resolve.
        ValueError, SyntaxError: ``symbol`` is not a valid literal.
    """
    text = symbol.strip()
    if _is_name(text):
        found = source.lookup(ns, text)
        if found is None:
            raise LookupError(f"Unable to resolve {text!r} in {ns!r}")
        return found[0]
    return ast.literal_eval(text)


def query_inputs(query: Any) -> Any:
    """Declared inputs of ``query``.

    Raises:
        QueryShapeError: ``query`` is neither a mapping nor a sequence, or
            its ``:in`` section is empty.
    """
    if isinstance(query, Mapping):
        for key in ("in", ":in"):
            if query.get(key) is not None:
                return query[key]
        return DEFAULT_INPUTS
    if not isinstance(query, Sequence) or isinstance(query, (str, bytes)):
        raise QueryShapeError(f"Not a query: {type(query).__name__}")
    sections = [list(group) for _, group in groupby(query, key=is_section_keyword)]
    try:
        index = sections.index([":in"])
    except ValueError:
        return DEFAULT_INPUTS
    if index + 1 >= len(sections):
        raise QueryShapeError(":in section has no inputs")
    return sections[index + 1]


def eldoc_query(source: ValueSource, ns: str, symbol: str) -> dict[str, Any]:
    """``{"inputs": [[names...]]}`` for the query ``symbol`` denotes.

    Never raises: any failure answers ``{"status": "no-eldoc"}``.
    """
    try:
        inputs = query_inputs(read_query(source, ns, symbol))
        shape = [inputs] if isinstance(inputs, str) else list(inputs)
        return {"inputs": format_arglists([shape])}
    except Exception as e:  # noqa: BLE001
        log.debug("eldoc_query_failed", ns=ns, symbol=symbol, error=str(e))
        return {"status": "no-eldoc"}
