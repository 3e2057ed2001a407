"""symbolinfo CLI - syminfo command."""

import click

from symbolinfo.cli.lookup import eldoc_command, info_command, query_command
from symbolinfo.cli.serve import serve_command
from symbolinfo.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="syminfo")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """symbolinfo - documentation and signatures for Python symbols."""
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(info_command, name="info")
cli.add_command(eldoc_command, name="eldoc")
cli.add_command(query_command, name="query")
cli.add_command(serve_command, name="serve")


if __name__ == "__main__":
    cli()
