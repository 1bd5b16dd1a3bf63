from __future__ import annotations

try:
    from openai import OpenAI as _OpenAI
    from openai import OpenAIError as _OpenAIError
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]
    _OpenAIError = None  # type: ignore[assignment,misc]

from codereview_core.errors import ResponseShapeError, TransportError
from codereview_core.providers.base import BaseReviewer


class OpenAIReviewer(BaseReviewer):
    MODEL = "gpt-4o"
    TEMPERATURE = 0.2

    def __init__(self, api_key: str, model: str | None = None, timeout: float | None = None):
        if _OpenAI is None:
            raise ImportError(
                "The 'openai' package is required for this provider. "
                "Install it with: pip install 'codereview-assistant[openai]'"
            )
        self.model = model or self.MODEL
        self.client = _OpenAI(api_key=api_key, **({"timeout": timeout} if timeout else {}))

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
                temperature=self.TEMPERATURE,
                max_tokens=self.MAX_TOKENS,
            )
        except _OpenAIError as e:
            raise TransportError(f"API request failed: {getattr(e, 'message', None) or e}")

        if not response.choices or not response.choices[0].message.content:
            raise ResponseShapeError("Failed to get a valid review from the model.")
        return response.choices[0].message.content
