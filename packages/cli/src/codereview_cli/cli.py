"""CLI entry point for codereview.

Commands:
  review     — review one file (or stdin) and print the result
  session    — interactive review session with tab switching and export
  languages  — list the supported language tags
  init       — interactive setup wizard writing .codereview.yml
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from codereview_cli.commands.init import init_cmd
from codereview_cli.commands.languages import languages_cmd
from codereview_cli.commands.review import review_cmd
from codereview_cli.commands.session import session_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    # urllib3 logs request lines at DEBUG, and the Gemini key travels in the query string.
    logging.getLogger("urllib3").setLevel(logging.WARNING)


@click.group()
@click.version_option(
    version=importlib.metadata.version("codereview-assistant"),
    prog_name="codereview",
)
@click.option(
    "--config",
    "config_path",
    default=".codereview.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="CODEREVIEW_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log request details to stderr.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """AI-powered review of a single source file."""
    from codereview_core.config import load_config

    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["config"] = load_config(config_path)


main.add_command(review_cmd)
main.add_command(session_cmd)
main.add_command(languages_cmd)
main.add_command(init_cmd)
