from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

NOISY_LOGGERS = ("httpx", "httpcore", "google_genai", "aiohttp.access")


class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    TIMESTAMP = "\033[90m"
    EVENT = "\033[96m"
    KEY = "\033[94m"
    NUMBER = "\033[93m"
    STRING = "\033[92m"
    VALUE = "\033[37m"

    LEVELS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }


def _colorize(value: Any) -> str:
    if value is None:
        color = Colors.DIM
    elif isinstance(value, (bool, int, float)):
        color = Colors.NUMBER
    elif isinstance(value, str):
        color = Colors.STRING
    else:
        color = Colors.VALUE
    return f"{color}{value}{Colors.RESET}"


class ColoredConsoleRenderer:
    """Renders `[time] LEVEL event | key=value | ...` lines for a terminal.

    Falls back to JSON when stdout is not a TTY so that log collectors
    still get one parseable record per line.
    """

    def __init__(self, colored: bool = True) -> None:
        self.colored = colored and sys.stdout.isatty()
        self._json = structlog.processors.JSONRenderer()

    def __call__(self, logger: Any, name: str, event_dict: dict) -> str:
        if not self.colored:
            return self._json(logger, name, event_dict)

        timestamp = event_dict.pop("timestamp", "")
        level = str(event_dict.pop("level", "info")).upper()
        event = event_dict.pop("event", "")
        source = event_dict.pop("logger", None)

        parts = []
        if timestamp:
            parts.append(f"{Colors.TIMESTAMP}[{timestamp}]{Colors.RESET}")
        level_color = Colors.LEVELS.get(level, Colors.LEVELS["INFO"])
        parts.append(f"{level_color}{Colors.BOLD}{level:8}{Colors.RESET}")
        if source:
            parts.append(f"{Colors.DIM}{source}{Colors.RESET}")
        parts.append(f"{Colors.EVENT}{event}{Colors.RESET}")

        exception = event_dict.pop("exception", None)
        if event_dict:
            separator = f" {Colors.DIM}|{Colors.RESET} "
            pairs = (f"{Colors.KEY}{key}{Colors.RESET}={_colorize(value)}" for key, value in event_dict.items())
            parts.append(f"{Colors.DIM}|{Colors.RESET} " + separator.join(pairs))

        line = " ".join(parts)
        if exception:
            line = f"{line}\n{exception}"
        return line


def setup_logging(level: int = logging.INFO, use_json: bool = False) -> None:
    """
    Configure structlog and route stdlib loggers (discord.py, httpx, aiohttp)
    through the same renderer.

    Args:
        level: Logging level (default: INFO)
        use_json: If True, use JSON format instead of colored output (default: False)
    """
    renderer = structlog.processors.JSONRenderer() if use_json else ColoredConsoleRenderer(colored=True)
    shared_processors = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[structlog.stdlib.add_logger_name, *shared_processors],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=[handler], force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("discord").setLevel(max(level, logging.INFO))
