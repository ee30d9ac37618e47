"""serve command — run the web app with uvicorn."""

from __future__ import annotations

import click
from rich.console import Console

console = Console()


@click.command("serve")
@click.option("--host", default=None, help="Host to bind to. Overrides config file (default: 127.0.0.1).")
@click.option("--port", "-p", type=int, default=None, help="Port to bind to. Overrides config file (default: 8000).")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development.")
@click.pass_context
def serve_cmd(ctx, host: str | None, port: int | None, reload: bool):
    """Serve the paste-and-review web page and its JSON API."""
    import os

    import uvicorn

    from snippetlens_core.config import load_config

    config_path = ctx.obj.get("config_path", ".snippetlens.yml") if ctx.obj else ".snippetlens.yml"
    config = load_config(config_path, cli_overrides={"host": host, "port": port})

    # The app loads its own config on import; point it at the same file.
    os.environ["SNIPPETLENS_CONFIG"] = config_path

    console.print(f"Serving on [bold]http://{config['host']}:{config['port']}[/bold] with model {config['model']}")
    try:
        uvicorn.run(
            "snippetlens_web.app:app",
            host=config["host"],
            port=config["port"],
            reload=reload,
        )
    except KeyboardInterrupt:
        console.print("\nServer stopped")
