"""Gemini provider: one plain HTTPS POST to the generateContent endpoint.

The request asks the service to constrain its own output with
``responseSchema``; the shared decoder in BaseReviewer checks the answer
against the same schema.
"""

from __future__ import annotations

import logging

import requests

from codereview_core.errors import ResponseShapeError, TransportError
from codereview_core.providers.base import BaseReviewer
from codereview_core.schema import REVIEW_SCHEMA

logger = logging.getLogger(__name__)

API_BASE = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiReviewer(BaseReviewer):
    MODEL = "gemini-2.5-flash-preview-05-20"
    TIMEOUT = 60

    def __init__(self, api_key: str, model: str | None = None, timeout: float | None = None):
        self.api_key = api_key
        self.model = model or self.MODEL
        self.timeout = timeout or self.TIMEOUT

    @property
    def url(self) -> str:
        return f"{API_BASE}/{self.model}:generateContent"

    def build_payload(self, system_prompt: str, user_prompt: str) -> dict:
        return {
            "contents": [{"parts": [{"text": user_prompt}]}],
            "systemInstruction": {"parts": [{"text": system_prompt}]},
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": REVIEW_SCHEMA,
            },
        }

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        try:
            response = requests.post(
                self.url,
                params={"key": self.api_key},
                headers={"Content-Type": "application/json"},
                json=self.build_payload(system_prompt, user_prompt),
                timeout=self.timeout,
            )
        except requests.Timeout:
            logger.warning("Gemini API timed out after %ss", self.timeout)
            raise TransportError(f"API request failed: timed out after {self.timeout} seconds")
        except requests.RequestException as e:
            # str(e) carries the full URL, credential included.
            logger.warning("Gemini API unreachable: %s", type(e).__name__)
            raise TransportError(f"API request failed: could not reach the service ({type(e).__name__})")

        if not response.ok:
            message = _error_message(response)
            logger.warning("Gemini API returned HTTP %d: %s", response.status_code, message)
            raise TransportError(f"API request failed: {message}", status_code=response.status_code)

        try:
            body = response.json()
        except ValueError:
            raise ResponseShapeError("Failed to get a valid review from the model.")

        text = _candidate_text(body)
        if not text:
            logger.warning("Gemini response had no candidate text: %s", str(body)[:200])
            raise ResponseShapeError("Failed to get a valid review from the model.")
        return text


def _error_message(response: requests.Response) -> str:
    """Pull ``error.message`` out of an error body, falling back to the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
    reason = f" {response.reason}" if response.reason else ""
    return f"HTTP {response.status_code}{reason}"


def _candidate_text(body) -> str | None:
    """Return ``candidates[0].content.parts[0].text`` or None if any step is missing."""
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None
