"""Static metadata for Python's reserved keywords.

Keywords are not bindings: nothing in a module namespace describes them,
so their usage shapes live here. Soft keywords (``match``, ``case``,
``type``) are ordinary names outside their statements and are left to
binding lookup. Docs come from the interpreter's bundled help topics
when that data is installed, with a one-line summary as the fallback.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cache
from typing import Any

Form = tuple[str, ...] | str


@dataclass(frozen=True, slots=True)
class SpecialForm:
    name: str
    summary: str
    forms: tuple[Form, ...]
    topic: str | None = None


_FORMS: tuple[SpecialForm, ...] = (
    SpecialForm("if", "Conditional execution.", (
        ("if", "test:", "suite"),
        ("if", "test:", "suite", "elif", "test:", "suite"),
        ("if", "test:", "suite", "else:", "suite"),
    ), "if"),
    SpecialForm("elif", "Additional branch of an if statement.", (("elif", "test:", "suite"),), "if"),
    SpecialForm("else", "Fallback branch of if, for, while or try.", (("else:", "suite"),), "if"),
    SpecialForm("while", "Repeat while a condition holds.", (
        ("while", "test:", "suite"),
        ("while", "test:", "suite", "else:", "suite"),
    ), "while"),
    SpecialForm("for", "Iterate over an iterable.", (
        ("for", "target", "in", "iterable:", "suite"),
        ("for", "target", "in", "iterable:", "suite", "else:", "suite"),
    ), "for"),
    SpecialForm("try", "Exception handling and cleanup.", (
        ("try:", "suite", "except", "expression", "as", "name:", "suite"),
        ("try:", "suite", "except*", "expression:", "suite"),
        ("try:", "suite", "finally:", "suite"),
    ), "try"),
    SpecialForm("except", "Exception handler clause of try.", (
        ("except", "expression:", "suite"),
        ("except", "expression", "as", "name:", "suite"),
    ), "try"),
    SpecialForm("finally", "Cleanup clause of try.", (("finally:", "suite"),), "try"),
    SpecialForm("with", "Run a block inside context managers.", (
        ("with", "expression:", "suite"),
        ("with", "expression", "as", "target:", "suite"),
    ), "with"),
    SpecialForm("def", "Function definition.", (
        ("def", "name(parameters):", "suite"),
        ("def", "name(parameters)", "->", "annotation:", "suite"),
    ), "function"),
    SpecialForm("class", "Class definition.", (
        ("class", "name:", "suite"),
        ("class", "name(bases):", "suite"),
    ), "class"),
    SpecialForm("lambda", "Anonymous function expression.", (("lambda", "parameters:", "expression"),), "lambda"),
    SpecialForm("return", "Leave the current function.", ("return", ("return", "expression")), "return"),
    SpecialForm("yield", "Produce a value from a generator.", (
        "yield",
        ("yield", "expression"),
        ("yield", "from", "iterable"),
    ), "yield"),
    SpecialForm("raise", "Raise an exception.", (
        "raise",
        ("raise", "expression"),
        ("raise", "expression", "from", "cause"),
    ), "raise"),
    SpecialForm("assert", "Debugging assertion.", (
        ("assert", "expression"),
        ("assert", "expression,", "message"),
    ), "assert"),
    SpecialForm("pass", "No-op statement.", ("pass",), "pass"),
    SpecialForm("break", "Leave the innermost loop.", ("break",), "break"),
    SpecialForm("continue", "Next iteration of the innermost loop.", ("continue",), "continue"),
    SpecialForm("del", "Delete names, items or attributes.", (("del", "target"),), "del"),
    SpecialForm("import", "Import modules.", (
        ("import", "module"),
        ("import", "module", "as", "name"),
    ), "import"),
    SpecialForm("from", "Import names from a module.", (
        ("from", "module", "import", "name"),
        ("from", "module", "import", "name", "as", "alias"),
    ), "import"),
    SpecialForm("global", "Declare module-level names.", (("global", "name"),), "global"),
    SpecialForm("nonlocal", "Declare enclosing-scope names.", (("nonlocal", "name"),), "nonlocal"),
    SpecialForm("async", "Coroutine definition and asynchronous statements.", (
        ("async", "def", "name(parameters):", "suite"),
        ("async", "for", "target", "in", "iterable:", "suite"),
        ("async", "with", "expression:", "suite"),
    ), "async"),
    SpecialForm("await", "Suspend until an awaitable completes.", (("await", "expression"),), "await"),
    SpecialForm("and", "Boolean conjunction.", (("x", "and", "y"),), "booleans"),
    SpecialForm("or", "Boolean disjunction.", (("x", "or", "y"),), "booleans"),
    SpecialForm("not", "Boolean negation.", (("not", "x"),), "booleans"),
    SpecialForm("in", "Membership test.", (("x", "in", "y"), ("x", "not", "in", "y")), "comparisons"),
    SpecialForm("is", "Identity test.", (("x", "is", "y"), ("x", "is", "not", "y")), "comparisons"),
)

SPECIAL_FORMS: dict[str, SpecialForm] = {form.name: form for form in _FORMS}

_REFERENCE = "https://docs.python.org/3/reference/"

_REFERENCE_ANCHORS = {
    "if": "compound_stmts.html#the-if-statement",
    "while": "compound_stmts.html#the-while-statement",
    "for": "compound_stmts.html#the-for-statement",
    "try": "compound_stmts.html#the-try-statement",
    "with": "compound_stmts.html#the-with-statement",
    "function": "compound_stmts.html#function-definitions",
    "class": "compound_stmts.html#class-definitions",
    "async": "compound_stmts.html#coroutines",
    "assert": "simple_stmts.html#the-assert-statement",
    "pass": "simple_stmts.html#the-pass-statement",
    "del": "simple_stmts.html#the-del-statement",
    "return": "simple_stmts.html#the-return-statement",
    "yield": "simple_stmts.html#the-yield-statement",
    "raise": "simple_stmts.html#the-raise-statement",
    "break": "simple_stmts.html#the-break-statement",
    "continue": "simple_stmts.html#the-continue-statement",
    "import": "simple_stmts.html#the-import-statement",
    "global": "simple_stmts.html#the-global-statement",
    "nonlocal": "simple_stmts.html#the-nonlocal-statement",
    "lambda": "expressions.html#lambda",
    "await": "expressions.html#await-expression",
    "booleans": "expressions.html#boolean-operations",
    "comparisons": "expressions.html#comparisons",
}


@cache
def _help_topics() -> dict[str, str]:
    try:
        from pydoc_data.topics import topics
    except ImportError:
        # Some distributions strip pydoc_data
        return {}
    return dict(topics)


def special_form_meta(name: str) -> dict[str, Any] | None:
    """Metadata for keyword ``name``, or None if it is not a keyword."""
    form = SPECIAL_FORMS.get(name)
    if form is None:
        return None
    meta: dict[str, Any] = {
        "name": form.name,
        "special_form": True,
        "forms": list(form.forms),
        "doc": _help_topics().get(form.topic or "", "").strip() or form.summary,
    }
    if anchor := _REFERENCE_ANCHORS.get(form.topic or ""):
        meta["url"] = _REFERENCE + anchor
    return meta
