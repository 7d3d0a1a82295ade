from __future__ import annotations

from typing import Any, Optional

import discord
import structlog

from ..channels.registry import ChannelRegistry

logger = structlog.get_logger(__name__)

ADMIN_REQUIRED = "You need Administrator permission to use this command."
INVALID_CHANNEL = "Invalid channel."
NO_CHANNELS = "No allowed channels set."


def channel_mention(channel_id: str | int) -> str:
    return f"<#{channel_id}>"


def has_admin_permission(interaction: discord.Interaction[Any]) -> bool:
    # Users outside a guild carry no guild_permissions
    permissions = getattr(interaction.user, "guild_permissions", None)
    return bool(permissions is not None and permissions.administrator)


class ChannelCommandHandler:
    """
    Administrator commands managing the set of moderated channels.

    - `/addchannel <channel>` opts a channel into moderation.
    - `/removechannel <channel>` opts it back out.
    - `/listchannels` shows the current set.

    Every reply is ephemeral. Members without the Administrator permission get
    a refusal and the registry is left untouched.
    """

    def __init__(self, registry: ChannelRegistry) -> None:
        self._registry = registry

    async def _reply(self, interaction: discord.Interaction[Any], content: str) -> None:
        await interaction.response.send_message(content, ephemeral=True)

    async def _ensure_admin(self, interaction: discord.Interaction[Any], command: str) -> bool:
        if has_admin_permission(interaction):
            return True
        logger.info("command_permission_denied", command=command, user_id=interaction.user.id)
        await self._reply(interaction, ADMIN_REQUIRED)
        return False

    async def add_channel(self, interaction: discord.Interaction[Any], channel: Optional[Any]) -> None:
        if not await self._ensure_admin(interaction, "addchannel"):
            return
        if channel is None:
            await self.reject_invalid_channel(interaction, "addchannel")
            return
        self._registry.add(channel.id)
        await self._reply(interaction, f"Channel {channel_mention(channel.id)} added to allowed list.")

    async def remove_channel(self, interaction: discord.Interaction[Any], channel: Optional[Any]) -> None:
        if not await self._ensure_admin(interaction, "removechannel"):
            return
        if channel is None:
            await self.reject_invalid_channel(interaction, "removechannel")
            return
        self._registry.remove(channel.id)
        await self._reply(interaction, f"Channel {channel_mention(channel.id)} removed from allowed list.")

    async def list_channels(self, interaction: discord.Interaction[Any]) -> None:
        if not await self._ensure_admin(interaction, "listchannels"):
            return
        await self._reply(interaction, self.format_channel_list())

    async def reject_invalid_channel(self, interaction: discord.Interaction[Any], command: Optional[str]) -> None:
        logger.warning("command_invalid_channel", command=command, user_id=interaction.user.id)
        await self._reply(interaction, INVALID_CHANNEL)

    def format_channel_list(self) -> str:
        channels = self._registry.list()
        if not channels:
            return NO_CHANNELS
        return "Allowed channels: " + ", ".join(channel_mention(channel_id) for channel_id in channels)
