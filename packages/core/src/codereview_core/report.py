"""Plain-text report export."""

from __future__ import annotations

from pathlib import Path

from codereview_core.models import Finding, ReviewResult

DEFAULT_REPORT_FILENAME = "code_review_report.txt"

_RULE = "========================"

# (heading, category) in report order.
_SECTIONS = (
    ("Readability", "readability"),
    ("Modularity & Structure", "modularity"),
    ("Potential Bugs & Errors", "bugs"),
)


def _format_category(title: str, items: list[Finding]) -> str:
    content = f"{title.upper()}:\n"
    if not items:
        return content + "No specific issues found.\n\n"
    for index, item in enumerate(items, 1):
        content += f"{index}. Suggestion: {item.suggestion}\n"
        if item.code_snippet:
            content += f"   Code Snippet: {item.code_snippet}\n"
        content += "\n"
    return content


def build_report(result: ReviewResult, language: str) -> str:
    """Render a review as the fixed-layout text report. Pure and deterministic."""
    report = f"Code Review Report\nLanguage: {language}\n"
    report += f"{_RULE}\n\n"
    report += f"OVERALL ASSESSMENT:\n{result.overall_assessment}\n\n"
    for title, category in _SECTIONS:
        report += _format_category(title, result.findings(category))
    report += f"{_RULE}\n"
    return report


def write_report(result: ReviewResult, language: str, path: str | Path = DEFAULT_REPORT_FILENAME) -> Path:
    p = Path(path)
    p.write_text(build_report(result, language), encoding="utf-8")
    return p
