from __future__ import annotations

import pytest

from profanity_filter_bot.adapters.perspective import PerspectiveAdapterError
from profanity_filter_bot.channels.registry import ChannelRegistry
from profanity_filter_bot.models import LayerType, ModerationDecision, ModerationOutcome, SkipReason
from profanity_filter_bot.pipeline.pipeline import ModerationPipeline
from tests.factories import FakeClassifier, FakeScorer, make_envelope

MONITORED = "100"


def build_pipeline(
    scorer: FakeScorer,
    classifier: FakeClassifier,
    *,
    threshold: float = 0.8,
) -> ModerationPipeline:
    registry = ChannelRegistry()
    registry.add(MONITORED)
    return ModerationPipeline(registry, scorer, classifier, threshold=threshold)


@pytest.mark.asyncio
async def test_unmonitored_channel_is_skipped_without_remote_calls() -> None:
    scorer, classifier = FakeScorer(0.99), FakeClassifier(True)
    pipeline = build_pipeline(scorer, classifier)

    decision = await pipeline.decide(make_envelope("bad words", channel_id="999"))

    assert decision.outcome is ModerationOutcome.SKIP
    assert decision.skip_reason is SkipReason.CHANNEL_NOT_MONITORED
    assert scorer.calls == []
    assert classifier.calls == []


@pytest.mark.asyncio
async def test_bot_author_is_skipped_without_remote_calls() -> None:
    scorer, classifier = FakeScorer(0.99), FakeClassifier(True)
    pipeline = build_pipeline(scorer, classifier)

    decision = await pipeline.decide(make_envelope("bad words", channel_id=MONITORED, author_is_bot=True))

    assert decision.skip_reason is SkipReason.BOT_AUTHOR
    assert not decision.should_delete
    assert scorer.calls == []
    assert classifier.calls == []


@pytest.mark.parametrize("text", ["", "   ", None])
@pytest.mark.asyncio
async def test_empty_message_is_skipped(text) -> None:
    scorer, classifier = FakeScorer(0.99), FakeClassifier(True)
    pipeline = build_pipeline(scorer, classifier)

    decision = await pipeline.decide(make_envelope(text, channel_id=MONITORED))

    assert decision.skip_reason is SkipReason.EMPTY_CONTENT
    assert scorer.calls == []


@pytest.mark.asyncio
async def test_high_score_deletes_without_fallback() -> None:
    scorer, classifier = FakeScorer(0.95), FakeClassifier(False)
    pipeline = build_pipeline(scorer, classifier)

    decision = await pipeline.decide(make_envelope("x", channel_id=MONITORED))

    assert decision.outcome is ModerationOutcome.DELETE
    assert decision.toxicity_score == 0.95
    assert decision.profanity is None
    assert decision.evaluated_layers == [LayerType.TOXICITY]
    assert classifier.calls == []


@pytest.mark.asyncio
async def test_score_equal_to_threshold_deletes() -> None:
    scorer, classifier = FakeScorer(0.8), FakeClassifier(False)
    pipeline = build_pipeline(scorer, classifier)

    decision = await pipeline.decide(make_envelope("borderline", channel_id=MONITORED))

    assert decision.should_delete
    assert classifier.calls == []


@pytest.mark.asyncio
async def test_low_score_and_negative_verdict_allows() -> None:
    scorer, classifier = FakeScorer(0.3), FakeClassifier(False)
    pipeline = build_pipeline(scorer, classifier)

    decision = await pipeline.decide(make_envelope("y", channel_id=MONITORED))

    assert decision.outcome is ModerationOutcome.ALLOW
    assert decision.profanity is False
    assert classifier.calls == ["y"]


@pytest.mark.asyncio
async def test_low_score_and_positive_verdict_deletes() -> None:
    scorer, classifier = FakeScorer(0.5), FakeClassifier(True)
    pipeline = build_pipeline(scorer, classifier)

    decision = await pipeline.decide(make_envelope("z", channel_id=MONITORED))

    assert decision.outcome is ModerationOutcome.DELETE
    assert decision.profanity is True
    assert decision.evaluated_layers == [LayerType.TOXICITY, LayerType.PROFANITY]
    assert classifier.calls == ["z"]


@pytest.mark.asyncio
async def test_scorer_failure_skips_without_fallback() -> None:
    scorer = FakeScorer(error=PerspectiveAdapterError("API error: 500"))
    classifier = FakeClassifier(True)
    pipeline = build_pipeline(scorer, classifier)

    decision = await pipeline.decide(make_envelope("z", channel_id=MONITORED))

    assert decision.outcome is ModerationOutcome.SKIP
    assert decision.skip_reason is SkipReason.SCORING_FAILED
    assert not decision.should_delete
    assert classifier.calls == []


@pytest.mark.asyncio
async def test_custom_threshold_is_respected() -> None:
    scorer, classifier = FakeScorer(0.6), FakeClassifier(False)
    pipeline = build_pipeline(scorer, classifier, threshold=0.5)

    decision = await pipeline.decide(make_envelope("meh", channel_id=MONITORED))

    assert decision.should_delete
    assert classifier.calls == []


def test_threshold_outside_unit_interval_is_rejected() -> None:
    with pytest.raises(ValueError):
        build_pipeline(FakeScorer(), FakeClassifier(), threshold=1.5)


def test_removal_notice_names_author() -> None:
    decision = ModerationDecision(
        message=make_envelope("x", author_id="42"),
        outcome=ModerationOutcome.DELETE,
    )

    assert decision.removal_notice() == "⚠️ Message from <@42> was removed due to toxicity or profanity."
