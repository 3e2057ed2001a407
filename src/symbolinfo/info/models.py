"""Request and record shapes for symbol lookups.

Resolved info is a sparse ``dict[str, Any]``. Absent keys mean "unknown",
never an error. Keys a record may carry:

    ns, name          defining module and binding name
    class, member     reflected class (qualified name) and member name
    file, line, column
    doc               free text
    arglists          list of parameter shapes (tuples of inspect.Parameter
                      or of plain tokens); live objects, never sent as-is
    forms             list of literal forms (special forms only)
    special_form      True for language keywords
    candidates        {class name: partial info} for ambiguous members
    javadoc           relative documentation path
    see_also          related "<ns>/<name>" keys
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

InfoMap = dict[str, Any]

RequestShape = Literal["alternate", "symbol", "member"]


class InfoRequest(BaseModel):
    """A reference to a binding, namespace, keyword, class or member.

    Exactly one shape is used: ``env`` present routes to the alternate
    environment, otherwise ``ns`` + ``symbol`` or ``class`` + ``member``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    ns: str | None = None
    symbol: str | None = None
    class_: str | None = Field(default=None, alias="class")
    member: str | None = None
    env: str | None = Field(
        default=None,
        description="Handle of an alternate environment that owns the lookup.",
    )

    def shape(self) -> RequestShape | None:
        """Which lookup the populated fields select, or None if neither fits."""
        if self.env:
            return "alternate"
        if self.ns and self.symbol:
            return "symbol"
        if self.class_ and self.member:
            return "member"
        return None

    def describe(self) -> dict[str, str | None]:
        return {
            "ns": self.ns,
            "symbol": self.symbol,
            "class": self.class_,
            "member": self.member,
            "env": self.env,
        }
