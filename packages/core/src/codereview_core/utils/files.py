from __future__ import annotations

from pathlib import Path

from codereview_core.errors import LocalValidationError

# Suffix -> language tag. ".txt" is accepted but carries no language.
SOURCE_EXTENSIONS = {
    ".js": "javascript",
    ".jsx": "jsx",
    ".ts": "typescript",
    ".html": "html",
    ".css": "css",
    ".py": "python",
    ".java": "java",
    ".cs": "csharp",
    ".cpp": "cpp",
    ".php": "php",
    ".swift": "swift",
    ".go": "go",
    ".rb": "ruby",
    ".rs": "rust",
    ".txt": None,
}


def is_source_file(file_name: str) -> bool:
    return Path(file_name).suffix.lower() in SOURCE_EXTENSIONS


def language_for_path(file_name: str) -> str | None:
    return SOURCE_EXTENSIONS.get(Path(file_name).suffix.lower())


def read_source(path: str | Path) -> str:
    """Read a whole source file as UTF-8 text. No size limit is applied."""
    p = Path(path)
    if not is_source_file(p.name):
        allowed = " ".join(SOURCE_EXTENSIONS)
        raise LocalValidationError(f"Unsupported file type: {p.name}. Allowed: {allowed}")
    try:
        return p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise LocalValidationError(f"File not found: {p}")
    except UnicodeDecodeError:
        raise LocalValidationError(f"Could not read {p.name} as UTF-8 text.")
