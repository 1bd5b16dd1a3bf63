"""languages command — list the supported language tags."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from codereview_core.languages import DEFAULT_LANGUAGE, LANGUAGES
from codereview_core.utils.files import SOURCE_EXTENSIONS

console = Console()


@click.command("languages")
def languages_cmd():
    """Show the language tags accepted by --language."""
    table = Table(title="Supported Languages", show_header=True, header_style="bold cyan")
    table.add_column("Tag", style="bold")
    table.add_column("Label")
    table.add_column("Extensions")

    for tag, label in LANGUAGES.items():
        extensions = " ".join(ext for ext, lang in SOURCE_EXTENSIONS.items() if lang == tag)
        marker = " [dim](default)[/dim]" if tag == DEFAULT_LANGUAGE else ""
        table.add_row(f"{tag}{marker}", label, extensions)

    console.print(table)
