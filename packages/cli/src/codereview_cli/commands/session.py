"""session command — interactive review loop.

Mirrors the single-page workflow: edit the source (paste or load a file),
pick a language, submit, then flip between the four result tabs and export
the report. Only one review runs at a time; the prompt does not come back
until it has finished.
"""

from __future__ import annotations

import sys

import click
from rich.console import Console

from codereview_cli.commands.review import PROVIDERS, make_controller, resolve_config, submit_with_spinner
from codereview_core.errors import ReviewError
from codereview_core.languages import LANGUAGES, label_for
from codereview_core.render import PLACEHOLDER, print_error, print_review
from codereview_core.session import ReviewController, Tab

console = Console()

_PASTE_END = "."

ACTIONS = ["review", "tab", "paste", "load", "language", "export", "quit"]


def _read_pasted() -> str:
    console.print(f"[dim]Paste your code. Finish with a line containing only '{_PASTE_END}'.[/dim]")
    lines = []
    while True:
        line = sys.stdin.readline()
        if not line or line.rstrip("\r\n") == _PASTE_END:
            break
        lines.append(line)
    return "".join(lines)


def _print_status(controller: ReviewController) -> None:
    state = controller.state
    lines = len(state.source_text.splitlines())
    console.print(
        f"\n[bold]Language:[/bold] {label_for(state.language)}  "
        f"[bold]Source:[/bold] {lines} line(s)  "
        f"[bold]Review:[/bold] {'ready' if state.result else 'none'}"
    )


def _show(controller: ReviewController) -> None:
    state = controller.state
    if state.error:
        print_error(console, state.error)
    elif state.result is None:
        console.print(f"[grey50]{PLACEHOLDER}[/grey50]")
    else:
        print_review(console, state.result, state.active_tab, state.language)


@click.command("session")
@click.argument("path", required=False, type=click.Path(dir_okay=False))
@click.option("--language", "-l", type=click.Choice(list(LANGUAGES)), default=None, help="Initial language tag.")
@click.option("--provider", type=click.Choice(PROVIDERS), default=None, help="AI provider. Overrides config file.")
@click.pass_context
def session_cmd(ctx, path: str | None, language: str | None, provider: str | None):
    """Start an interactive review session."""
    config = resolve_config(ctx, provider=provider)
    controller = make_controller(config)
    try:
        controller.set_language(language or config.get("language", "javascript"))
    except ReviewError as e:
        raise click.UsageError(str(e))

    if path:
        try:
            controller.load_file(path)
        except ReviewError as e:
            print_error(console, str(e))
        if language:
            controller.set_language(language)

    while True:
        _print_status(controller)
        default = "tab" if controller.state.result else "review"
        action = click.prompt("Action", type=click.Choice(ACTIONS), default=default)

        if action == "quit":
            break

        if action == "review":
            submit_with_spinner(controller)
            _show(controller)

        elif action == "tab":
            if controller.state.result is None:
                console.print(f"[grey50]{PLACEHOLDER}[/grey50]")
                continue
            tab = click.prompt(
                "Tab",
                type=click.Choice([t.value for t in Tab]),
                default=controller.state.active_tab.value,
            )
            controller.select_tab(tab)
            _show(controller)

        elif action == "paste":
            controller.set_source(_read_pasted())

        elif action == "load":
            file_path = click.prompt("File path")
            try:
                controller.load_file(file_path)
            except ReviewError as e:
                print_error(console, str(e))

        elif action == "language":
            tag = click.prompt("Language", type=click.Choice(list(LANGUAGES)), default=controller.state.language)
            controller.set_language(tag)

        elif action == "export":
            target = click.prompt("Save report as", default=config.get("report_filename", "code_review_report.txt"))
            try:
                written = controller.export(target)
            except ReviewError as e:
                print_error(console, str(e))
                continue
            except OSError as e:
                print_error(console, f"Could not write report: {e}")
                continue
            console.print(f"[green]Report saved to {written}[/green]")
