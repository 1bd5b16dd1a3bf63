"""Tests for the review orchestration: local preconditions and provider selection."""

import json
from unittest.mock import MagicMock

import pytest

from codereview_core.errors import LocalValidationError
from codereview_core.models import ReviewRequest, ReviewResult
from codereview_core.providers.gemini import GeminiReviewer
from codereview_core.reviewer import _get_reviewer, build_request, run_review


def _make_config(provider="gemini", gemini_key="gem", **extra):
    return {
        "provider": provider,
        "model": None,
        "language": "javascript",
        "timeout": 60,
        "report_filename": "code_review_report.txt",
        "guidelines": None,
        "gemini_api_key": gemini_key,
        "anthropic_api_key": None,
        "openai_api_key": None,
        **extra,
    }


class StubReviewer:
    def __init__(self, result=None):
        self.result = result or ReviewResult(overall_assessment="fine")
        self.requests = []

    def review(self, request, guidelines=None):
        self.requests.append((request, guidelines))
        return self.result


class TestBuildRequest:
    def test_keeps_text_verbatim(self):
        request = build_request("  x = 1\n", "python")
        assert request == ReviewRequest(source_text="  x = 1\n", language="python")

    @pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
    def test_rejects_blank_text(self, text):
        with pytest.raises(LocalValidationError, match="Please enter or upload some code to review."):
            build_request(text, "python")

    def test_rejects_unknown_language(self):
        with pytest.raises(LocalValidationError, match="Unsupported language 'kotlin'"):
            build_request("x", "kotlin")


class TestGetReviewer:
    def test_gemini_is_default(self):
        reviewer = _get_reviewer(_make_config())
        assert isinstance(reviewer, GeminiReviewer)
        assert reviewer.api_key == "gem"

    def test_model_and_timeout_forwarded(self):
        reviewer = _get_reviewer(_make_config(model="gemini-2.5-pro", timeout=9))
        assert reviewer.model == "gemini-2.5-pro"
        assert reviewer.timeout == 9

    def test_missing_key_is_local_error(self):
        with pytest.raises(LocalValidationError, match="GEMINI_API_KEY"):
            _get_reviewer(_make_config(gemini_key=None))

    def test_missing_openai_key_names_its_variable(self):
        with pytest.raises(LocalValidationError, match="OPENAI_API_KEY"):
            _get_reviewer(_make_config(provider="openai"))

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown model provider"):
            _get_reviewer(_make_config(provider="llama"))

    def test_missing_sdk_is_local_error(self, mocker):
        mocker.patch.dict("sys.modules", {"anthropic": None})
        with pytest.raises(LocalValidationError, match="pip install"):
            _get_reviewer(_make_config(provider="anthropic", anthropic_api_key="ant"))


class TestRunReview:
    def test_blank_text_never_reaches_network(self, mocker):
        post = mocker.patch("codereview_core.providers.gemini.requests.post")
        with pytest.raises(LocalValidationError):
            run_review("   ", "python", _make_config())
        post.assert_not_called()

    def test_missing_key_never_reaches_network(self, mocker):
        post = mocker.patch("codereview_core.providers.gemini.requests.post")
        with pytest.raises(LocalValidationError):
            run_review("x = 1", "python", _make_config(gemini_key=None))
        post.assert_not_called()

    def test_uses_given_reviewer(self):
        stub = StubReviewer()
        result = run_review("x = 1", "python", _make_config(), reviewer=stub)
        assert result.overall_assessment == "fine"
        assert stub.requests[0][0] == ReviewRequest("x = 1", "python")

    def test_guidelines_forwarded(self, tmp_path):
        guidelines = tmp_path / "rules.md"
        guidelines.write_text("No globals.")
        stub = StubReviewer()
        run_review("x = 1", "python", _make_config(guidelines=str(guidelines)), reviewer=stub)
        assert stub.requests[0][1] == "No globals."

    def test_end_to_end_through_gemini(self, mocker):
        review = {
            "overallAssessment": "OK",
            "readability": [],
            "modularity": [],
            "bugs": [{"suggestion": "no docstring", "codeSnippet": "def f():"}],
        }
        response = MagicMock(ok=True, status_code=200)
        response.json.return_value = {"candidates": [{"content": {"parts": [{"text": json.dumps(review)}]}}]}
        post = mocker.patch("codereview_core.providers.gemini.requests.post", return_value=response)

        result = run_review("def f():\n  pass", "python", _make_config())

        post.assert_called_once()
        assert "def f():\n  pass" in post.call_args.kwargs["json"]["contents"][0]["parts"][0]["text"]
        assert result.bugs[0].suggestion == "no docstring"
        assert result.bugs[0].code_snippet == "def f():"
