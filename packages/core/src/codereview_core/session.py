"""Review session state and the controller that owns it.

SessionState is immutable. Every change goes through a pure transition
function ``(state, ...) -> state``, and ReviewController is the only place
that swaps the current state, so there is exactly one owner of mutable
session data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Callable

from codereview_core.errors import LocalValidationError, ReviewError, ReviewInProgressError
from codereview_core.languages import DEFAULT_LANGUAGE, ensure_supported
from codereview_core.models import ReviewResult
from codereview_core.report import write_report
from codereview_core.utils.files import language_for_path, read_source

logger = logging.getLogger(__name__)


class Tab(str, Enum):
    OVERALL = "overall"
    READABILITY = "readability"
    MODULARITY = "modularity"
    BUGS = "bugs"

    @property
    def label(self) -> str:
        return _TAB_LABELS[self]


_TAB_LABELS = {
    Tab.OVERALL: "Overall Assessment",
    Tab.READABILITY: "Readability",
    Tab.MODULARITY: "Modularity",
    Tab.BUGS: "Potential Bugs",
}


@dataclass(frozen=True)
class SessionState:
    source_text: str = ""
    language: str = DEFAULT_LANGUAGE
    result: ReviewResult | None = None
    loading: bool = False
    error: str | None = None
    active_tab: Tab = Tab.OVERALL


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------


def with_source(state: SessionState, text: str) -> SessionState:
    return replace(state, source_text=text)


def with_language(state: SessionState, language: str) -> SessionState:
    return replace(state, language=language)


def select_tab(state: SessionState, tab: Tab | str) -> SessionState:
    return replace(state, active_tab=Tab(tab))


def begin_review(state: SessionState) -> SessionState:
    return replace(state, result=None, error=None, active_tab=Tab.OVERALL, loading=True)


def complete_review(state: SessionState, result: ReviewResult) -> SessionState:
    return replace(state, result=result, error=None, loading=False)


def fail_review(state: SessionState, message: str) -> SessionState:
    return replace(state, result=None, error=message, loading=False)


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------

ReviewFn = Callable[[str, str], ReviewResult]


class ReviewController:
    """Owns one SessionState and serialises reviews against it.

    ``review_fn(source_text, language)`` performs the actual call; the CLI
    binds it to run_review with the loaded config.
    """

    def __init__(self, review_fn: ReviewFn, state: SessionState | None = None):
        self._review_fn = review_fn
        self.state = state or SessionState()

    @property
    def loading(self) -> bool:
        return self.state.loading

    def set_source(self, text: str) -> None:
        self.state = with_source(self.state, text)

    def set_language(self, language: str) -> None:
        self.state = with_language(self.state, ensure_supported(language))

    def load_file(self, path: str | Path) -> None:
        """Replace the source text with a file's contents.

        The language follows the file extension when it maps to one.
        """
        text = read_source(path)
        self.state = with_source(self.state, text)
        language = language_for_path(str(path))
        if language:
            self.state = with_language(self.state, language)

    def select_tab(self, tab: Tab | str) -> None:
        self.state = select_tab(self.state, tab)

    def submit(self) -> SessionState:
        """Review the current source text and return the resulting state.

        Failures are recorded on the state, not raised, except when a review
        is already running.
        """
        if self.state.loading:
            raise ReviewInProgressError("A review is already in progress.")

        source_text, language = self.state.source_text, self.state.language
        self.state = begin_review(self.state)
        try:
            result = self._review_fn(source_text, language)
        except ReviewError as e:
            logger.debug("Review failed: %s", e)
            self.state = fail_review(self.state, str(e))
        else:
            self.state = complete_review(self.state, result)
        finally:
            if self.state.loading:
                # Only reached when review_fn raised something other than a ReviewError.
                self.state = replace(self.state, loading=False)
        return self.state

    def export(self, path: str | Path) -> Path:
        if self.state.result is None:
            raise LocalValidationError("There is no review to export yet.")
        return write_report(self.state.result, self.state.language, path)
