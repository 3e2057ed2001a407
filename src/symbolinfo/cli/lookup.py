"""syminfo info / eldoc / query commands - one-shot lookups."""

from __future__ import annotations

import importlib
import json
from typing import Any

import click
from rich.console import Console

from symbolinfo.config.loader import load_config
from symbolinfo.core.errors import SymbolInfoError
from symbolinfo.info.models import InfoRequest
from symbolinfo.info.ops import InfoOps


def _ops(preload: tuple[str, ...], **overrides: Any) -> InfoOps:
    # Lookups only see loaded modules; --import loads the ones asked for
    for module in preload:
        try:
            importlib.import_module(module)
        except ImportError as e:
            raise click.ClickException(f"Cannot import '{module}': {e}") from e
    try:
        return InfoOps.create(load_config(**overrides))
    except SymbolInfoError as e:
        raise click.ClickException(e.message) from e


def _emit(reply: dict[str, Any], as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(reply))
    else:
        Console().print_json(data=reply)


def _run(ops: InfoOps, op: str, payload: dict[str, Any], as_json: bool) -> None:
    reply = ops.handle(op, payload)
    _emit(reply, as_json)
    if reply.get("status") == "error":
        raise SystemExit(1)


_preload_option = click.option(
    "--import",
    "preload",
    multiple=True,
    metavar="MODULE",
    help="Import MODULE before the lookup (repeatable)",
)
_json_option = click.option("--json", "as_json", is_flag=True, help="Compact JSON output")


def _parse_doc_prefixes(
    _ctx: click.Context, _param: click.Parameter, values: tuple[str, ...]
) -> list[tuple[str, str]]:
    pairs = []
    for value in values:
        prefix, sep, base_url = value.partition("=")
        if not sep or not prefix or not base_url:
            raise click.BadParameter(f"expected PREFIX=URL, got {value!r}")
        pairs.append((prefix, base_url))
    return pairs


@click.command()
@click.argument("ns", required=False)
@click.argument("symbol", required=False)
@click.option("--class", "class_", help="Qualified class name")
@click.option("--member", help="Member of --class")
@click.option(
    "--doc-prefix",
    "doc_prefixes",
    multiple=True,
    callback=_parse_doc_prefixes,
    metavar="PREFIX=URL",
    help="Link docs of classes under PREFIX to URL (repeatable)",
)
@_preload_option
@_json_option
def info_command(
    ns: str | None,
    symbol: str | None,
    class_: str | None,
    member: str | None,
    doc_prefixes: list[tuple[str, str]],
    preload: tuple[str, ...],
    as_json: bool,
) -> None:
    """Describe SYMBOL as seen from module NS.

    Without NS/SYMBOL, describe --member of --class.
    """
    ops = _ops(preload)
    for prefix, base_url in doc_prefixes:
        ops.register_doc_prefix(prefix, base_url)
    request = InfoRequest(ns=ns, symbol=symbol, class_=class_, member=member)
    _run(ops, "info", request.model_dump(by_alias=True), as_json)


@click.command()
@click.argument("ns", required=False)
@click.argument("symbol", required=False)
@click.option("--class", "class_", help="Qualified class name")
@click.option("--member", help="Member of --class")
@_preload_option
@_json_option
def eldoc_command(
    ns: str | None,
    symbol: str | None,
    class_: str | None,
    member: str | None,
    preload: tuple[str, ...],
    as_json: bool,
) -> None:
    """Signature hint for SYMBOL as seen from module NS."""
    request = InfoRequest(ns=ns, symbol=symbol, class_=class_, member=member)
    _run(_ops(preload), "eldoc", request.model_dump(by_alias=True), as_json)


@click.command()
@click.argument("ns")
@click.argument("symbol")
@_preload_option
@_json_option
def query_command(ns: str, symbol: str, preload: tuple[str, ...], as_json: bool) -> None:
    """Input names of the structured query SYMBOL (a binding in NS or a literal).

    Always enabled from the command line: the caller chose to run it.
    """
    ops = _ops(preload, query={"enabled": True})
    _run(ops, "eldoc-query", {"ns": ns, "symbol": symbol}, as_json)
