"""Base reviewer implementing the Template Method pattern.

All providers share the same review algorithm:
    review() → _build_system_prompt() + _build_user_prompt()
             → _call_api()   ← only this differs per provider
             → _parse()

Subclasses implement two things only:
  - __init__: validate and store the client / credentials
  - _call_api: make one raw API call and return the model's text

There is no retry loop: a failed call surfaces once as a ReviewError.
"""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod

from codereview_core.errors import ParseError
from codereview_core.models import ReviewRequest, ReviewResult
from codereview_core.schema import SchemaMismatch, describe, validate

logger = logging.getLogger(__name__)

_MAX_TOKENS = 8192


class BaseReviewer(ABC):
    MAX_TOKENS: int = _MAX_TOKENS
    MODEL: str = ""

    # ------------------------------------------------------------------ #
    # Public interface                                                     #
    # ------------------------------------------------------------------ #

    def review(self, request: ReviewRequest, guidelines: str | None = None) -> ReviewResult:
        """Send one review request and decode the structured answer.

        Raises a ReviewError subclass on any failure; never returns a partial
        result.
        """
        system = self._build_system_prompt(guidelines)
        user = self._build_user_prompt(request.language, request.source_text)
        logger.debug(
            "%s: requesting review of %d chars of %s",
            self.__class__.__name__,
            len(request.source_text),
            request.language,
        )
        raw = self._call_api(system, user)
        return self._parse(raw)

    # ------------------------------------------------------------------ #
    # Abstract — implement in each provider                               #
    # ------------------------------------------------------------------ #

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        """Make a single API call and return the raw text response.

        Raise TransportError when the service cannot be reached or rejects
        the call, ResponseShapeError when it answers without any text.
        """

    # ------------------------------------------------------------------ #
    # Shared implementations                                               #
    # ------------------------------------------------------------------ #

    def _build_system_prompt(self, guidelines: str | None = None) -> str:
        prompt = f"""You are an expert code reviewer. Analyze the user-provided code and return a JSON object.
Your response MUST be a valid JSON object with the following schema:
{describe()}
For each suggestion, provide the exact corresponding line(s) of code in the "codeSnippet" field.
If a suggestion is general and doesn't apply to a specific line, you can leave the "codeSnippet" as an empty string.
Do not include markdown or backticks inside the JSON string values."""
        if guidelines:
            prompt += f"\n\nAlso apply these team guidelines:\n{guidelines}"
        return prompt

    def _build_user_prompt(self, language: str, source_text: str) -> str:
        # The source is embedded verbatim: no trimming, no truncation.
        return f"Review the following {language} code:\n\n```{language}\n{source_text}\n```"

    def _parse(self, raw: str) -> ReviewResult:
        """Decode the model's text into a ReviewResult, or raise ParseError."""
        # Strip only an outer ```json ... ``` fence; providers without a native
        # JSON mode sometimes wrap the object in one.
        cleaned = re.sub(r"^```(?:json)?\s*", "", raw.strip())
        cleaned = re.sub(r"\s*```$", "", cleaned.strip())
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as e:
            logger.warning(
                "%s: failed to parse response as JSON: %s",
                self.__class__.__name__,
                raw[:200],
            )
            raise ParseError(f"The model returned invalid JSON: {e.msg}") from e
        try:
            validate(data)
        except SchemaMismatch as e:
            logger.warning("%s: response does not match the review schema: %s", self.__class__.__name__, e)
            raise ParseError(f"The model returned an unexpected review format ({e})") from e
        return ReviewResult.from_dict(data)
