from __future__ import annotations

import structlog
from aiohttp import web

logger = structlog.get_logger(__name__)

STATUS_TEXT = "Discord Profanity Filter Bot is running!"


async def handle_status(_: web.Request) -> web.Response:
    return web.Response(text=STATUS_TEXT, content_type="text/plain")


def create_health_app() -> web.Application:
    app = web.Application()
    # any path answers, matching plain liveness probes
    app.router.add_get("/{tail:.*}", handle_status)
    return app


async def start_health_server(host: str, port: int) -> web.AppRunner:
    runner = web.AppRunner(create_health_app(), access_log=None)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info("health_server_listening", host=host, port=port)
    return runner
