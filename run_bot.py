#!/usr/bin/env python3
"""
Entry point for running the Discord profanity filter bot.

Usage:
    python run_bot.py

Environment:
    - PROFANITY_BOT_DISCORD_TOKEN
    - PROFANITY_BOT_PERSPECTIVE__API_KEY
    - PROFANITY_BOT_GEMINI__API_KEY
    - PROFANITY_BOT_MODERATION__TOXICITY_THRESHOLD (optional, default 0.8)
    - PROFANITY_BOT_HEALTH__PORT (optional, default 3000)

Settings are loaded via BotSettings (reads .env by default). The liveness
endpoint is started first, then the Discord client runs until Ctrl+C.
"""

import asyncio

from profanity_filter_bot import DiscordModerationApp
from profanity_filter_bot.config import BotSettings
from profanity_filter_bot.services.health import start_health_server


async def _main() -> None:
    settings = BotSettings()
    app = DiscordModerationApp(settings)
    runner = await start_health_server(settings.health.host, settings.health.port)
    try:
        await app.serve()
    finally:
        await runner.cleanup()


def main() -> None:
    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        print("\n\n🛑 Bot shutdown requested by user.")


if __name__ == "__main__":
    main()
