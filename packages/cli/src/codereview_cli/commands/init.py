"""init command — interactive setup wizard.

Writes .codereview.yml with the provider, default language and request
timeout so later runs need no flags. API keys are never written to the file;
the wizard only reminds you which environment variable to set.
"""

from __future__ import annotations

from pathlib import Path

import click
import yaml
from rich.console import Console

from codereview_core.config import API_KEY_ENV, DEFAULT_CONFIG
from codereview_core.languages import LANGUAGES

console = Console()


@click.command("init")
@click.pass_context
def init_cmd(ctx):
    """Set up codereview for this directory.

    Creates (or updates) the configuration file, keeping any keys it does
    not ask about.
    """
    config_path = (ctx.obj or {}).get("config_path", ".codereview.yml")
    console.print("\n[bold cyan]codereview init[/bold cyan] — setup wizard\n")

    provider = click.prompt(
        "AI provider",
        type=click.Choice(list(API_KEY_ENV)),
        default=DEFAULT_CONFIG["provider"],
    )
    language = click.prompt(
        "Default language",
        type=click.Choice(list(LANGUAGES)),
        default=DEFAULT_CONFIG["language"],
    )
    timeout = click.prompt("Request timeout (seconds)", type=click.IntRange(min=1), default=DEFAULT_CONFIG["timeout"])

    _write_config(config_path, {"provider": provider, "language": language, "timeout": timeout})
    console.print(f"[green]Created {config_path}[/green]")

    console.print(
        f"\n[yellow]Remember to set [bold]{API_KEY_ENV[provider]}[/bold] in your environment "
        "before running a review.[/yellow]"
    )
    console.print("\n[bold green]Setup complete![/bold green]")
    console.print("Run a review with: [bold]codereview review <file>[/bold]")


def _write_config(config_path: str, config: dict) -> None:
    """Write or update the config file, preserving any existing keys."""
    path = Path(config_path)
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))
