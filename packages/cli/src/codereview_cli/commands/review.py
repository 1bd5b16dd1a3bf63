"""review command — review one source file (or stdin) and print the result."""

from __future__ import annotations

import json
import sys

import click
from rich.console import Console

from codereview_core.errors import ReviewError
from codereview_core.languages import LANGUAGES
from codereview_core.render import print_error, print_review
from codereview_core.reviewer import run_review
from codereview_core.session import ReviewController, Tab
from codereview_core.utils.files import language_for_path, read_source

console = Console()

PROVIDERS = ["gemini", "anthropic", "openai"]


def resolve_config(ctx: click.Context, **overrides) -> dict:
    """The group-level config with non-None command options applied on top."""
    config = dict(ctx.obj["config"]) if ctx.obj else {}
    for key, value in overrides.items():
        if value is not None:
            config[key] = value
    return config


def make_controller(config: dict) -> ReviewController:
    return ReviewController(lambda text, language: run_review(text, language, config))


def submit_with_spinner(controller: ReviewController):
    """Run one review behind a spinner.

    Configuration problems (unknown provider, missing guidelines file) are
    usage errors rather than review failures.
    """
    try:
        with console.status("Analyzing your code..."):
            return controller.submit()
    except (ValueError, FileNotFoundError) as e:
        raise click.UsageError(str(e))


@click.command("review")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--language",
    "-l",
    type=click.Choice(list(LANGUAGES)),
    default=None,
    help="Language tag. Defaults to the file extension, then to the config file.",
)
@click.option("--provider", type=click.Choice(PROVIDERS), default=None, help="AI provider. Overrides config file.")
@click.option("--model", default=None, help="Model name. Overrides the provider default.")
@click.option(
    "--tab",
    "-t",
    type=click.Choice([t.value for t in Tab] + ["all"]),
    default="overall",
    show_default=True,
    help="Which part of the review to print.",
)
@click.option("--export", "-o", "export_path", default=None, help="Write the text report to this path.")
@click.option("--save", is_flag=True, help="Write the text report to the configured report filename.")
@click.option("--json", "as_json", is_flag=True, help="Print the raw review JSON instead of the formatted view.")
@click.pass_context
def review_cmd(
    ctx,
    path: str | None,
    language: str | None,
    provider: str | None,
    model: str | None,
    tab: str,
    export_path: str | None,
    save: bool,
    as_json: bool,
):
    """Review a source file with an AI model.

    Reads PATH, or stdin when PATH is omitted, sends it for review and prints
    the overall assessment (or the tab chosen with --tab).

    \b
    Required environment variables (depending on --provider):
      GEMINI_API_KEY       default provider
      ANTHROPIC_API_KEY    --provider anthropic
      OPENAI_API_KEY       --provider openai
    """
    config = resolve_config(ctx, provider=provider, model=model)

    try:
        if path:
            source_text = read_source(path)
            language = language or language_for_path(path)
        else:
            if sys.stdin.isatty():
                console.print("[dim]Paste your code, then press Ctrl-D.[/dim]")
            source_text = sys.stdin.read()
    except ReviewError as e:
        print_error(console, str(e))
        ctx.exit(1)

    controller = make_controller(config)
    controller.set_source(source_text)
    try:
        controller.set_language(language or config.get("language", "javascript"))
    except ReviewError as e:
        raise click.UsageError(str(e))

    state = submit_with_spinner(controller)
    if state.error:
        print_error(console, state.error)
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps(state.result.to_dict(), indent=2))
    else:
        print_review(console, state.result, tab, state.language)

    if save and not export_path:
        export_path = config.get("report_filename", "code_review_report.txt")
    if export_path:
        try:
            written = controller.export(export_path)
        except OSError as e:
            print_error(console, f"Could not write report: {e}")
            ctx.exit(1)
        console.print(f"[green]Report saved to {written}[/green]")
