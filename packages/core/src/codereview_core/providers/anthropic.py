from __future__ import annotations

from codereview_core.errors import ResponseShapeError, TransportError
from codereview_core.providers.base import BaseReviewer


class AnthropicReviewer(BaseReviewer):
    MODEL = "claude-sonnet-4-20250514"
    # Low temperature keeps the JSON structure stable; there is no native
    # schema mode here, so the system prompt and the shared decoder do the work.
    TEMPERATURE = 0.2

    def __init__(self, api_key: str, model: str | None = None, timeout: float | None = None):
        try:
            from anthropic import Anthropic
        except ImportError:
            raise ImportError(
                "The 'anthropic' package is required for this provider. "
                "Install it with: pip install 'codereview-assistant[anthropic]'"
            )
        self.model = model or self.MODEL
        self.client = Anthropic(api_key=api_key, **({"timeout": timeout} if timeout else {}))

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        # Imported inside the method because the anthropic package is optional;
        # __init__ already validated it is installed before we reach here.
        from anthropic import APIError
        from anthropic.types import TextBlock

        try:
            response = self.client.messages.create(
                model=self.model,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                temperature=self.TEMPERATURE,
                max_tokens=self.MAX_TOKENS,
            )
        except APIError as e:
            raise TransportError(f"API request failed: {getattr(e, 'message', None) or e}")

        text_blocks = [block.text for block in response.content if isinstance(block, TextBlock)]
        text = "".join(text_blocks).strip()
        if not text:
            raise ResponseShapeError("Failed to get a valid review from the model.")
        return text
