"""Core review orchestration: validate locally, pick a provider, make one call."""

from __future__ import annotations

import logging

from codereview_core.config import API_KEY_ENV, api_key_for, load_guidelines
from codereview_core.errors import LocalValidationError
from codereview_core.languages import ensure_supported
from codereview_core.models import ReviewRequest, ReviewResult
from codereview_core.providers.anthropic import AnthropicReviewer
from codereview_core.providers.base import BaseReviewer
from codereview_core.providers.gemini import GeminiReviewer
from codereview_core.providers.openai import OpenAIReviewer

logger = logging.getLogger(__name__)

_PROVIDERS: dict[str, type[BaseReviewer]] = {
    "gemini": GeminiReviewer,
    "anthropic": AnthropicReviewer,
    "openai": OpenAIReviewer,
}


def _get_reviewer(config: dict) -> BaseReviewer:
    provider = config["provider"]
    if provider not in _PROVIDERS:
        choices = ", ".join(repr(p) for p in _PROVIDERS)
        raise ValueError(f"Unknown model provider: {provider!r}. Choose one of {choices}.")

    api_key = api_key_for(config)
    if not api_key:
        raise LocalValidationError(
            f"API key is not configured. Please set {API_KEY_ENV[provider]} in your environment."
        )
    try:
        return _PROVIDERS[provider](api_key=api_key, model=config.get("model"), timeout=config.get("timeout"))
    except ImportError as e:
        # Optional SDK providers raise this when their package is not installed.
        raise LocalValidationError(str(e)) from e


def build_request(source_text: str, language: str) -> ReviewRequest:
    """Check the local preconditions and freeze the request.

    The text is kept exactly as given; the trim is only used for the
    emptiness check.
    """
    if not source_text or not source_text.strip():
        raise LocalValidationError("Please enter or upload some code to review.")
    return ReviewRequest(source_text=source_text, language=ensure_supported(language))


def run_review(source_text: str, language: str, config: dict, reviewer: BaseReviewer | None = None) -> ReviewResult:
    """Run one review and return its result.

    All preconditions (non-empty text, known language, credential present)
    are checked before any network activity. Raises a ReviewError subclass on
    failure; there are no retries and no partial results.
    """
    request = build_request(source_text, language)
    if reviewer is None:
        reviewer = _get_reviewer(config)
    guidelines = load_guidelines(config)

    logger.info("Reviewing %d line(s) of %s with %s", len(source_text.splitlines()), language, config["provider"])
    result = reviewer.review(request, guidelines=guidelines)
    logger.info(
        "Review complete: %d readability, %d modularity, %d bug finding(s)",
        len(result.readability),
        len(result.modularity),
        len(result.bugs),
    )
    return result
