from __future__ import annotations

import structlog

from ..adapters.perspective import PerspectiveAdapterError
from ..channels.registry import ChannelRegistry
from ..models import (
    LayerType,
    MessageEnvelope,
    ModerationDecision,
    ModerationOutcome,
    SkipReason,
)
from .layers.base import ProfanityClassifier, ToxicityScorer

logger = structlog.get_logger(__name__)

DEFAULT_TOXICITY_THRESHOLD = 0.8


class ModerationPipeline:
    """Guard → toxicity score → (below threshold) profanity fallback.

    Each call to :meth:`decide` is independent; the only shared state is the
    channel registry, which is read once per message.
    """

    def __init__(
        self,
        registry: ChannelRegistry,
        scorer: ToxicityScorer,
        classifier: ProfanityClassifier,
        *,
        threshold: float = DEFAULT_TOXICITY_THRESHOLD,
    ) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"Toxicity threshold must be within [0, 1], got {threshold}")
        self._registry = registry
        self._scorer = scorer
        self._classifier = classifier
        self.threshold = threshold
        logger.info(
            "pipeline_initialized",
            layers=[scorer.layer_type.value, classifier.layer_type.value],
            threshold=threshold,
        )

    def _skip_reason(self, message: MessageEnvelope) -> SkipReason | None:
        ctx = message.context
        if ctx.author_is_bot:
            return SkipReason.BOT_AUTHOR
        if not self._registry.contains(ctx.channel_id):
            return SkipReason.CHANNEL_NOT_MONITORED
        if not message.content_text().strip():
            return SkipReason.EMPTY_CONTENT
        return None

    async def decide(self, message: MessageEnvelope) -> ModerationDecision:
        ctx = message.context
        reason = self._skip_reason(message)
        if reason is not None:
            logger.debug("pipeline_message_skipped", message_id=ctx.message_id, reason=reason.value)
            return ModerationDecision(message=message, outcome=ModerationOutcome.SKIP, skip_reason=reason)

        text = message.content_text()
        evaluated = [LayerType.TOXICITY]
        try:
            score = await self._scorer.score(text)
        except PerspectiveAdapterError as exc:
            logger.error(
                "toxicity_scoring_failed",
                error=str(exc),
                author_id=ctx.author_id,
                channel_id=ctx.channel_id,
                message_id=ctx.message_id,
            )
            return ModerationDecision(
                message=message,
                outcome=ModerationOutcome.SKIP,
                skip_reason=SkipReason.SCORING_FAILED,
                evaluated_layers=evaluated,
            )
        logger.info(
            "toxicity_scored",
            author=ctx.author_name or ctx.author_id,
            message_id=ctx.message_id,
            score=score,
        )

        if score >= self.threshold:
            return self._finish(message, ModerationOutcome.DELETE, score=score, evaluated=evaluated)

        evaluated.append(LayerType.PROFANITY)
        has_profanity = await self._classifier.contains_profanity(text)
        logger.info("profanity_checked", message_id=ctx.message_id, has_profanity=has_profanity)
        outcome = ModerationOutcome.DELETE if has_profanity else ModerationOutcome.ALLOW
        return self._finish(message, outcome, score=score, profanity=has_profanity, evaluated=evaluated)

    def _finish(
        self,
        message: MessageEnvelope,
        outcome: ModerationOutcome,
        *,
        score: float,
        evaluated: list[LayerType],
        profanity: bool | None = None,
    ) -> ModerationDecision:
        decision = ModerationDecision(
            message=message,
            outcome=outcome,
            toxicity_score=score,
            profanity=profanity,
            evaluated_layers=evaluated,
        )
        logger.info(
            "pipeline_decision",
            message_id=message.context.message_id,
            author_id=message.context.author_id,
            outcome=outcome.value,
            score=score,
            profanity=profanity,
            evaluated=[layer.value for layer in evaluated],
        )
        return decision
