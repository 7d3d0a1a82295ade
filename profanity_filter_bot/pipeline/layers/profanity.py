from __future__ import annotations

from typing import Sequence

import structlog

from ...adapters.gemini import GeminiClient
from ...models import LayerType

logger = structlog.get_logger(__name__)

PROMPT_TEMPLATE = (
    "Detect if the following message contains any profanity or offensive language "
    "in any language (including {languages}).\n"
    'Respond with "YES" if it contains profanity, otherwise respond with "NO".\n'
    'Message: "{text}"'
)


def _join_languages(languages: Sequence[str]) -> str:
    if len(languages) == 1:
        return languages[0]
    return ", ".join(languages[:-1]) + f" and {languages[-1]}"


class ProfanityLayer:
    """Fallback signal: asks a generative model for a strict YES/NO verdict."""

    layer_type = LayerType.PROFANITY

    def __init__(
        self,
        client: GeminiClient,
        *,
        languages: Sequence[str] = ("English", "Tagalog"),
    ) -> None:
        if not languages:
            raise ValueError("At least one language must be named in the prompt")
        self._client = client
        self._languages = tuple(languages)

    def build_prompt(self, text: str) -> str:
        return PROMPT_TEMPLATE.format(languages=_join_languages(self._languages), text=text)

    async def contains_profanity(self, text: str) -> bool:
        prompt = self.build_prompt(text)
        try:
            reply = await self._client.generate(prompt)
        except Exception as exc:  # pylint: disable=broad-except
            # fail open: a broken fallback must not delete messages
            logger.error("profanity_check_failed", error=str(exc), model=getattr(self._client, "model", None))
            return False
        normalized = reply.strip().upper()
        logger.debug("profanity_check_reply", reply=normalized[:20])
        return normalized == "YES"
