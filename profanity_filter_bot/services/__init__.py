from .discord_bot import DiscordModerationApp
from .health import create_health_app, start_health_server
from .moderation_service import ModerationCoordinator

__all__ = ["DiscordModerationApp", "ModerationCoordinator", "create_health_app", "start_health_server"]
