"""Tests for session state transitions and the controller."""

import pytest

from codereview_core.errors import (
    LocalValidationError,
    ParseError,
    ReviewInProgressError,
    TransportError,
)
from codereview_core.models import Finding, ReviewResult
from codereview_core.session import (
    ReviewController,
    SessionState,
    Tab,
    begin_review,
    complete_review,
    fail_review,
    select_tab,
    with_language,
    with_source,
)

RESULT = ReviewResult(overall_assessment="OK", bugs=[Finding("no docstring", "def f():")])


class TestTransitions:
    def test_initial_state(self):
        state = SessionState()
        assert state.language == "javascript"
        assert state.active_tab is Tab.OVERALL
        assert state.result is None
        assert state.loading is False

    def test_transitions_do_not_mutate(self):
        state = SessionState()
        with_source(state, "x = 1")
        assert state.source_text == ""

    def test_any_tab_reachable_from_any_tab(self):
        for start in Tab:
            for target in Tab:
                assert select_tab(SessionState(active_tab=start), target).active_tab is target

    def test_select_tab_accepts_value(self):
        assert select_tab(SessionState(), "bugs").active_tab is Tab.BUGS

    def test_begin_review_resets(self):
        state = SessionState(result=RESULT, error="old", active_tab=Tab.BUGS)
        state = begin_review(state)
        assert state.result is None
        assert state.error is None
        assert state.active_tab is Tab.OVERALL
        assert state.loading is True

    def test_complete_review(self):
        state = complete_review(begin_review(SessionState()), RESULT)
        assert state.result is RESULT
        assert state.loading is False

    def test_fail_review(self):
        state = fail_review(begin_review(SessionState()), "boom")
        assert state.error == "boom"
        assert state.result is None
        assert state.loading is False

    def test_with_language(self):
        assert with_language(SessionState(), "rust").language == "rust"

    def test_tab_labels(self):
        assert [t.label for t in Tab] == ["Overall Assessment", "Readability", "Modularity", "Potential Bugs"]


class TestReviewController:
    def test_submit_success(self):
        calls = []

        def review_fn(text, language):
            calls.append((text, language))
            return RESULT

        controller = ReviewController(review_fn)
        controller.set_source("def f():\n  pass")
        controller.set_language("python")
        state = controller.submit()

        assert calls == [("def f():\n  pass", "python")]
        assert state.result is RESULT
        assert state.error is None
        assert controller.loading is False

    def test_submit_failure_sets_error_and_clears_result(self):
        outcomes = [RESULT, TransportError("API request failed: quota exceeded")]

        def review_fn(text, language):
            outcome = outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        controller = ReviewController(review_fn)
        controller.set_source("x")
        controller.submit()
        controller.select_tab(Tab.BUGS)
        state = controller.submit()

        assert state.error == "API request failed: quota exceeded"
        assert state.result is None
        assert state.active_tab is Tab.OVERALL
        assert state.loading is False

    def test_loading_true_during_call(self):
        seen = []
        controller = ReviewController(lambda text, language: seen.append(controller.loading) or RESULT)
        controller.set_source("x")
        controller.submit()
        assert seen == [True]
        assert controller.loading is False

    def test_refuses_second_submission_while_loading(self):
        def review_fn(text, language):
            with pytest.raises(ReviewInProgressError):
                controller.submit()
            return RESULT

        controller = ReviewController(review_fn)
        controller.set_source("x")
        assert controller.submit().result is RESULT

    def test_unexpected_exception_clears_loading(self):
        def review_fn(text, language):
            raise ValueError("bad provider")

        controller = ReviewController(review_fn)
        with pytest.raises(ValueError):
            controller.submit()
        assert controller.loading is False

    def test_parse_error_recorded(self):
        def review_fn(text, language):
            raise ParseError("The model returned invalid JSON: Expecting value")

        controller = ReviewController(review_fn)
        state = controller.submit()
        assert state.error.startswith("The model returned invalid JSON")

    def test_set_language_rejects_unknown(self):
        controller = ReviewController(lambda text, language: RESULT)
        with pytest.raises(LocalValidationError):
            controller.set_language("cobol")

    def test_load_file_sets_source_and_language(self, tmp_path):
        f = tmp_path / "lib.rs"
        f.write_text("fn main() {}\n")
        controller = ReviewController(lambda text, language: RESULT)
        controller.load_file(f)
        assert controller.state.source_text == "fn main() {}\n"
        assert controller.state.language == "rust"

    def test_load_txt_keeps_language(self, tmp_path):
        f = tmp_path / "snippet.txt"
        f.write_text("print(1)")
        controller = ReviewController(lambda text, language: RESULT)
        controller.set_language("python")
        controller.load_file(f)
        assert controller.state.language == "python"

    def test_export_without_result(self, tmp_path):
        controller = ReviewController(lambda text, language: RESULT)
        with pytest.raises(LocalValidationError):
            controller.export(tmp_path / "report.txt")

    def test_export_writes_report(self, tmp_path):
        controller = ReviewController(lambda text, language: RESULT)
        controller.set_source("x")
        controller.set_language("python")
        controller.submit()
        path = controller.export(tmp_path / "report.txt")
        content = path.read_text(encoding="utf-8")
        assert "Language: python" in content
        assert "1. Suggestion: no docstring" in content
