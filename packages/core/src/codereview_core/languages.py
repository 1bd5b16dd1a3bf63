"""The closed set of language tags a review can be annotated with.

The tag is only used to label the request and the report; it never selects a
parser.
"""

from __future__ import annotations

from codereview_core.errors import LocalValidationError

LANGUAGES: dict[str, str] = {
    "javascript": "JavaScript",
    "jsx": "React (JSX)",
    "typescript": "TypeScript",
    "html": "HTML",
    "css": "CSS",
    "python": "Python",
    "java": "Java",
    "csharp": "C#",
    "cpp": "C++",
    "php": "PHP",
    "swift": "Swift",
    "go": "Go",
    "ruby": "Ruby",
    "rust": "Rust",
}

DEFAULT_LANGUAGE = "javascript"


def is_supported(tag: str | None) -> bool:
    return tag in LANGUAGES


def label_for(tag: str) -> str:
    """Human-readable label, e.g. ``csharp`` -> ``C#``. Unknown tags echo back."""
    return LANGUAGES.get(tag, tag)


def ensure_supported(tag: str | None) -> str:
    if not is_supported(tag):
        choices = ", ".join(LANGUAGES)
        raise LocalValidationError(f"Unsupported language {tag!r}. Choose one of: {choices}.")
    return tag
