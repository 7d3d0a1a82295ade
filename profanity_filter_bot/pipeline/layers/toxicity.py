from __future__ import annotations

from typing import Sequence

from ...adapters.perspective import PerspectiveClient
from ...models import LayerType


class ToxicityLayer:
    """Primary signal: Perspective TOXICITY summary score.

    Errors from the client are not handled here; the pipeline needs to tell a
    failed call apart from a low score.
    """

    layer_type = LayerType.TOXICITY

    def __init__(self, client: PerspectiveClient, *, languages: Sequence[str] = ("en",)) -> None:
        self._client = client
        self._languages = tuple(languages)

    async def score(self, text: str) -> float:
        result = await self._client.analyze(text, languages=self._languages)
        return result.value

    async def close(self) -> None:
        await self._client.close()
