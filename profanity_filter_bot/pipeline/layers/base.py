from __future__ import annotations

from typing import Protocol, runtime_checkable

from ...models import LayerType


@runtime_checkable
class ToxicityScorer(Protocol):
    layer_type: LayerType

    async def score(self, text: str) -> float:
        """Return a toxicity score in [0, 1]; raise on transport failure."""
        ...


@runtime_checkable
class ProfanityClassifier(Protocol):
    layer_type: LayerType

    async def contains_profanity(self, text: str) -> bool:
        """Return the profanity verdict; never raises."""
        ...


@runtime_checkable
class Closeable(Protocol):
    async def close(self) -> None:
        ...
