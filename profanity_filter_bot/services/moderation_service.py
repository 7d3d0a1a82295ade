from __future__ import annotations

import logging
from typing import Optional

import structlog

from ..adapters.gemini import GeminiClient
from ..adapters.perspective import PerspectiveClient
from ..channels.registry import ChannelRegistry
from ..config import BotSettings
from ..logging.events import setup_logging
from ..models import MessageEnvelope, ModerationDecision
from ..pipeline.layers.base import Closeable, ProfanityClassifier, ToxicityScorer
from ..pipeline.layers.profanity import ProfanityLayer
from ..pipeline.layers.toxicity import ToxicityLayer
from ..pipeline.pipeline import ModerationPipeline

logger = structlog.get_logger(__name__)


class ModerationCoordinator:
    """Owns the channel registry and the scoring layers for one bot process."""

    def __init__(
        self,
        settings: BotSettings,
        *,
        registry: Optional[ChannelRegistry] = None,
        scorer: Optional[ToxicityScorer] = None,
        classifier: Optional[ProfanityClassifier] = None,
    ) -> None:
        log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)
        setup_logging(level=log_level, use_json=settings.logging.use_json)
        self._settings = settings
        self.registry = registry or ChannelRegistry()
        self._scorer = scorer or ToxicityLayer(
            PerspectiveClient(
                api_key=settings.perspective.api_key,
                base_url=settings.perspective.base_url,
                timeout=settings.perspective.timeout_seconds,
            ),
            languages=settings.perspective.languages,
        )
        self._classifier = classifier or ProfanityLayer(
            GeminiClient(api_key=settings.gemini.api_key, model=settings.gemini.model),
            languages=settings.gemini.languages,
        )
        self._pipeline = ModerationPipeline(
            self.registry,
            self._scorer,
            self._classifier,
            threshold=settings.moderation.toxicity_threshold,
        )

    async def evaluate(self, message: MessageEnvelope) -> ModerationDecision:
        logger.debug(
            "coordinator_evaluate",
            channel_id=message.context.channel_id,
            message_id=message.context.message_id,
        )
        return await self._pipeline.decide(message)

    async def shutdown(self) -> None:
        for layer in (self._scorer, self._classifier):
            if isinstance(layer, Closeable):
                await layer.close()
        logger.info("moderation_coordinator_stopped")
