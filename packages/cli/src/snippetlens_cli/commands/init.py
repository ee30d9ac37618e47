"""init command — interactive setup wizard writing .snippetlens.yml."""

from __future__ import annotations

import os
from pathlib import Path

import click
import yaml
from rich.console import Console

from snippetlens_core.config import API_KEY_ENV
from snippetlens_core.sections import SectionTitle

console = Console()


@click.command("init")
@click.pass_context
def init_cmd(ctx):
    """Create or update .snippetlens.yml interactively."""
    config_path = ctx.obj.get("config_path", ".snippetlens.yml") if ctx.obj else ".snippetlens.yml"
    console.print("\n[bold cyan]snippetlens init[/bold cyan] — setup wizard\n")

    provider = click.prompt(
        "AI provider",
        type=click.Choice(list(API_KEY_ENV)),
        default="gemini",
    )
    config: dict = {"model": provider}

    console.print("\nSections shown collapsed by [bold]snippetlens review[/bold] (all are expanded by default):")
    collapsed = [
        title.value
        for title in SectionTitle
        if click.confirm(f"  Collapse {title.value}?", default=False)
    ]
    config["collapsed"] = collapsed

    port = click.prompt("Web server port", type=int, default=8000)
    if port != 8000:
        config["port"] = port

    _write_config(config, Path(config_path))
    console.print(f"[green]Wrote {config_path}[/green]")

    api_key_env = API_KEY_ENV[provider]
    if not os.environ.get(api_key_env):
        console.print(f"\n[yellow]Remember to set [bold]{api_key_env}[/bold] before running a review.[/yellow]")

    console.print("\n[bold green]Setup complete![/bold green]")
    console.print("Review a file with: [bold]snippetlens review path/to/file.py[/bold]")


def _write_config(config: dict, path: Path) -> None:
    """Write or update the config file, preserving any existing keys."""
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))
