"""Review data models.

Wire JSON uses the service's camelCase keys; the dataclasses use snake_case
and convert at the boundary in from_dict / to_dict.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from codereview_core.schema import REVIEW_CATEGORIES


@dataclass(frozen=True)
class Finding:
    """One suggestion plus an optional illustrative code excerpt."""

    suggestion: str
    code_snippet: str = ""

    @classmethod
    def from_dict(cls, d: dict) -> Finding:
        return cls(suggestion=d.get("suggestion", ""), code_snippet=d.get("codeSnippet", "") or "")

    def to_dict(self) -> dict:
        return {"suggestion": self.suggestion, "codeSnippet": self.code_snippet}


@dataclass(frozen=True)
class ReviewResult:
    """The full structured output for one submitted source text.

    List order is the priority order reported by the model and is kept as-is
    for display and export.
    """

    overall_assessment: str
    readability: list[Finding] = field(default_factory=list)
    modularity: list[Finding] = field(default_factory=list)
    bugs: list[Finding] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> ReviewResult:
        return cls(
            overall_assessment=d.get("overallAssessment", ""),
            **{category: [Finding.from_dict(item) for item in d.get(category, [])] for category in REVIEW_CATEGORIES},
        )

    def to_dict(self) -> dict:
        return {
            "overallAssessment": self.overall_assessment,
            **{category: [f.to_dict() for f in self.findings(category)] for category in REVIEW_CATEGORIES},
        }

    def findings(self, category: str) -> list[Finding]:
        if category not in REVIEW_CATEGORIES:
            raise KeyError(category)
        return getattr(self, category)


@dataclass(frozen=True)
class ReviewRequest:
    """What gets sent for review. Frozen: a dispatched request never changes."""

    source_text: str
    language: str
