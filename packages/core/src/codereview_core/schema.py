"""The review response schema, defined once.

REVIEW_SCHEMA is sent verbatim as ``generationConfig.responseSchema`` so the
service constrains its own output, and the same definition drives
``validate`` when the answer comes back. Keeping a single definition means
the request and the decoder cannot drift apart.

The dialect is the OpenAPI subset the Gemini API accepts: ``type`` is one of
OBJECT / ARRAY / STRING, objects carry ``properties`` and ``required``,
arrays carry ``items``.
"""

from __future__ import annotations

from typing import Any

REVIEW_CATEGORIES = ("readability", "modularity", "bugs")

FINDING_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "suggestion": {"type": "STRING"},
        "codeSnippet": {"type": "STRING"},
    },
    "required": ["suggestion", "codeSnippet"],
}

REVIEW_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "overallAssessment": {"type": "STRING"},
        **{category: {"type": "ARRAY", "items": FINDING_SCHEMA} for category in REVIEW_CATEGORIES},
    },
    "required": ["overallAssessment", *REVIEW_CATEGORIES],
}

_PY_TYPES = {"OBJECT": dict, "ARRAY": list, "STRING": str}


class SchemaMismatch(ValueError):
    """Raised by validate(); ``path`` points at the offending value."""

    def __init__(self, path: str, message: str):
        super().__init__(f"{path or '<root>'}: {message}")
        self.path = path


def validate(value: Any, schema: dict = REVIEW_SCHEMA, path: str = "") -> None:
    """Check ``value`` against ``schema``, raising SchemaMismatch on the first problem.

    Extra object keys are tolerated; the service occasionally adds fields and
    they carry no meaning for us.
    """
    expected = schema["type"]
    py_type = _PY_TYPES[expected]
    if not isinstance(value, py_type):
        raise SchemaMismatch(path, f"expected {expected.lower()}, got {type(value).__name__}")

    if expected == "OBJECT":
        for key in schema.get("required", []):
            if key not in value:
                raise SchemaMismatch(_join(path, key), "missing required field")
        for key, sub_schema in schema.get("properties", {}).items():
            if key in value:
                validate(value[key], sub_schema, _join(path, key))
    elif expected == "ARRAY":
        for i, item in enumerate(value):
            validate(item, schema["items"], f"{path}[{i}]")


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def describe(schema: dict = REVIEW_SCHEMA) -> str:
    """Render the schema as the example JSON shape quoted in the system prompt."""
    hints = {
        "overallAssessment": "A brief summary of the code's quality.",
        "readability": "A specific suggestion for improving readability.",
        "modularity": "A specific suggestion for improving modularity.",
        "bugs": "A specific potential bug found.",
    }
    lines = ["{"]
    props = list(schema["properties"])
    for i, key in enumerate(props):
        comma = "," if i < len(props) - 1 else ""
        if schema["properties"][key]["type"] == "STRING":
            lines.append(f'  "{key}": "{hints.get(key, "")}"{comma}')
        else:
            lines.append(
                f'  "{key}": [ {{ "suggestion": "{hints.get(key, "")}", '
                f'"codeSnippet": "The relevant line(s) of code." }} ]{comma}'
            )
    lines.append("}")
    return "\n".join(lines)
