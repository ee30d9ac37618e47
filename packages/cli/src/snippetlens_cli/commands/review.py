"""review command — review a snippet and print it section by section."""

from __future__ import annotations

import click
from rich.console import Console

from snippetlens_cli.render import section_to_renderable
from snippetlens_core.errors import ReviewFailedError
from snippetlens_core.fragments import render_review
from snippetlens_core.reviewer import run_review
from snippetlens_core.sections import SectionDisplayState, SectionTitle

console = Console()


@click.command("review")
@click.argument("source", type=click.File("r"), default="-")
@click.option(
    "--model",
    type=click.Choice(["gemini", "anthropic", "openai"]),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.option(
    "--guidelines",
    "guidelines_path",
    default=None,
    help="Path to a review checklist file. Overrides config file.",
)
@click.option(
    "--collapse",
    multiple=True,
    type=click.Choice([t.value for t in SectionTitle], case_sensitive=False),
    help="Show this section collapsed (header only). Repeatable.",
)
@click.option("--raw", is_flag=True, help="Print the review text as returned by the model.")
@click.pass_context
def review_cmd(
    ctx,
    source,
    model: str | None,
    guidelines_path: str | None,
    collapse: tuple[str, ...],
    raw: bool,
):
    """Review a code snippet read from SOURCE (a file, or - for stdin).

    The model first detects the snippet's language, then reviews it for bugs,
    performance, security, style and improvements. The review is printed
    grouped into collapsible sections.

    \b
    Required environment variables (one, matching the provider):
      GEMINI_API_KEY       --model gemini (default; GOOGLE_API_KEY also accepted)
      ANTHROPIC_API_KEY    --model anthropic
      OPENAI_API_KEY       --model openai
    """
    from snippetlens_core.config import API_KEY_ENV, api_key_for, load_config

    config_path = ctx.obj.get("config_path", ".snippetlens.yml") if ctx.obj else ".snippetlens.yml"
    config = load_config(config_path, cli_overrides={"model": model, "guidelines": guidelines_path})

    if config["model"] not in API_KEY_ENV:
        raise click.UsageError(f"Unknown model provider {config['model']!r} in config.")
    if not api_key_for(config):
        raise click.UsageError(f"{API_KEY_ENV[config['model']]} environment variable is not set.")

    code = source.read()
    if not code.strip():
        raise click.UsageError("No code provided.")

    try:
        with console.status("Analyzing your code..."):
            result = run_review(code, config)
    except ReviewFailedError as e:
        raise click.ClickException(str(e))

    console.print(f"Detected language: [bold blue]{result.detected_language}[/bold blue]\n")

    if raw:
        console.print(result.review, markup=False, highlight=False)
        return

    try:
        state = SectionDisplayState.with_collapsed([*config.get("collapsed", []), *collapse])
    except ValueError as e:
        raise click.UsageError(f"Invalid 'collapsed' entry in config: {e}")

    for section in render_review(result.sections(), state):
        console.print(section_to_renderable(section))
