"""syminfo serve command - run the MCP server over stdio."""

from __future__ import annotations

import importlib
from pathlib import Path

import click


@click.command()
@click.option(
    "--project",
    "project_root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory holding .symbolinfo/config.yaml (default: current directory)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write DEBUG logs as JSON to this file",
)
@click.option("--import", "preload", multiple=True, metavar="MODULE", help="Import MODULE at startup")
def serve_command(project_root: Path | None, log_file: Path | None, preload: tuple[str, ...]) -> None:
    """Serve symbol info to MCP clients."""
    from symbolinfo.mcp.server import run_server

    for module in preload:
        importlib.import_module(module)
    run_server(project_root, log_file=log_file)
