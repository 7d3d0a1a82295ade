from __future__ import annotations

import asyncio
from typing import Any, Optional

import structlog
from google import genai

logger = structlog.get_logger(__name__)


class GeminiAdapterError(Exception):
    pass


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        *,
        model: str = "gemini-2.0-flash-001",
        client: Optional[Any] = None,
    ) -> None:
        self._client = client or genai.Client(api_key=api_key)
        self.model = model

    async def generate(self, prompt: str) -> str:
        """Run a single-turn generation and return the reply text ("" when empty)."""

        def _sync_generate() -> Any:
            return self._client.models.generate_content(model=self.model, contents=prompt)

        logger.debug("gemini_api_call", model=self.model, prompt_length=len(prompt))
        try:
            # SDK call is blocking; keep it off the event loop
            response = await asyncio.to_thread(_sync_generate)
            text = response.text or ""
        except Exception as exc:  # pylint: disable=broad-except
            raise GeminiAdapterError(f"Gemini request failed: {exc}") from exc
        logger.debug("gemini_response", model=self.model, content_preview=text[:60])
        return text
