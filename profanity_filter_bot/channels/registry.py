from __future__ import annotations

from typing import Union

import structlog

logger = structlog.get_logger(__name__)

ChannelId = Union[str, int]


class ChannelRegistry:
    """In-memory set of channels opted into moderation.

    State lives for the lifetime of the process. All access happens on the
    event loop thread, so plain dict operations are enough.
    """

    def __init__(self) -> None:
        # dict keeps insertion order for display
        self._channels: dict[str, None] = {}

    def add(self, channel_id: ChannelId) -> None:
        key = str(channel_id)
        self._channels[key] = None
        logger.info("channel_registry_added", channel_id=key, total=len(self._channels))

    def remove(self, channel_id: ChannelId) -> None:
        key = str(channel_id)
        removed = self._channels.pop(key, False) is None
        logger.info(
            "channel_registry_removed",
            channel_id=key,
            was_present=removed,
            total=len(self._channels),
        )

    def contains(self, channel_id: ChannelId) -> bool:
        return str(channel_id) in self._channels

    def list(self) -> list[str]:
        return list(self._channels)

    def __contains__(self, channel_id: object) -> bool:
        return isinstance(channel_id, (str, int)) and self.contains(channel_id)

    def __len__(self) -> int:
        return len(self._channels)
