"""CLI entry point for snippetlens.

Commands:
  review   — review a snippet from a file or stdin and print it by section
  serve    — run the web app
  init     — interactive setup wizard writing .snippetlens.yml
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from snippetlens_cli.commands.init import init_cmd
from snippetlens_cli.commands.review import review_cmd
from snippetlens_cli.commands.serve import serve_cmd

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=verbose)],
        force=True,
    )


@click.group()
@click.version_option(
    version=importlib.metadata.version("snippetlens"),
    prog_name="snippetlens",
)
@click.option(
    "--config",
    "config_path",
    default=".snippetlens.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="SNIPPETLENS_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Paste a code snippet, get an AI review grouped into sections."""
    ctx.ensure_object(dict)
    _configure_logging(verbose)
    ctx.obj["config_path"] = config_path


main.add_command(review_cmd)
main.add_command(serve_cmd)
main.add_command(init_cmd)
