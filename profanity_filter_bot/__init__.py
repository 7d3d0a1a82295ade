"""
Discord profanity filter bot.

Scores messages in administrator-selected channels with the Perspective API,
falls back to a Gemini YES/NO profanity check for ambiguous scores and removes
offending messages.
"""

from .services.discord_bot import DiscordModerationApp
from .services.moderation_service import ModerationCoordinator

__all__ = ["DiscordModerationApp", "ModerationCoordinator"]
