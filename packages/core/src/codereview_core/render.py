"""Terminal rendering of a review, one tab at a time."""

from __future__ import annotations

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from codereview_core.models import Finding, ReviewResult
from codereview_core.session import Tab

EMPTY_CATEGORY = "No specific issues found in this category."
PLACEHOLDER = "Your code review will appear here."


def render_tab_bar(active: Tab | str) -> Text:
    active = Tab(active)
    bar = Text()
    for i, tab in enumerate(Tab):
        if i:
            bar.append("  │  ", style="dim")
        style = "bold cyan underline" if tab is active else "grey62"
        bar.append(tab.label, style=style)
    return bar


def _render_finding(finding: Finding, language: str) -> RenderableType:
    parts: list[RenderableType] = [Text(finding.suggestion)]
    if finding.code_snippet:
        parts.append(Syntax(finding.code_snippet, language, theme="monokai", word_wrap=True))
    return Panel(Group(*parts), border_style="grey39")


def render_tab(result: ReviewResult, tab: Tab | str, language: str = "text") -> RenderableType:
    tab = Tab(tab)
    if tab is Tab.OVERALL:
        return Group(*(Text(paragraph) for paragraph in result.overall_assessment.split("\n")))

    findings = result.findings(tab.value)
    if not findings:
        return Text(EMPTY_CATEGORY, style="grey62")
    return Group(*(_render_finding(f, language) for f in findings))


def print_review(console: Console, result: ReviewResult, tab: Tab | str = Tab.OVERALL, language: str = "text") -> None:
    """Print the tab bar and one tab, or every tab in order when ``tab == "all"``."""
    tabs = list(Tab) if tab == "all" else [Tab(tab)]
    for t in tabs:
        console.print(render_tab_bar(t))
        console.print()
        console.print(render_tab(result, t, language))
        console.print()


def print_error(console: Console, message: str) -> None:
    console.print(Text(message, style="red"))
