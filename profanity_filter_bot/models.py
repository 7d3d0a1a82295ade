from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

REMOVAL_REASON = "toxicity or profanity"


class LayerType(str, Enum):
    TOXICITY = "toxicity"
    PROFANITY = "profanity"


class ModerationOutcome(str, Enum):
    SKIP = "skip"
    DELETE = "delete"
    ALLOW = "allow"


class SkipReason(str, Enum):
    BOT_AUTHOR = "bot_author"
    CHANNEL_NOT_MONITORED = "channel_not_monitored"
    EMPTY_CONTENT = "empty_content"
    SCORING_FAILED = "scoring_failed"


@dataclass(slots=True)
class MessageContext:
    author_id: str
    channel_id: str
    message_id: str
    author_is_bot: bool = False
    author_name: Optional[str] = None
    guild_id: Optional[str] = None


@dataclass(slots=True)
class MessageEnvelope:
    context: MessageContext
    text: Optional[str] = None

    def content_text(self) -> str:
        return self.text or ""


@dataclass(slots=True)
class ModerationDecision:
    message: MessageEnvelope
    outcome: ModerationOutcome
    toxicity_score: Optional[float] = None
    profanity: Optional[bool] = None
    skip_reason: Optional[SkipReason] = None
    evaluated_layers: list[LayerType] = field(default_factory=list)

    @property
    def should_delete(self) -> bool:
        return self.outcome is ModerationOutcome.DELETE

    def removal_notice(self) -> str:
        return (
            f"⚠️ Message from <@{self.message.context.author_id}> "
            f"was removed due to {REMOVAL_REASON}."
        )


__all__ = [
    "LayerType",
    "MessageContext",
    "MessageEnvelope",
    "ModerationDecision",
    "ModerationOutcome",
    "REMOVAL_REASON",
    "SkipReason",
]
