from __future__ import annotations

from typing import Any, Optional

import discord
import structlog
from discord import app_commands

from ..config import BotSettings
from ..models import MessageContext, MessageEnvelope, ModerationDecision
from .commands import ChannelCommandHandler
from .moderation_service import ModerationCoordinator

logger = structlog.get_logger(__name__)


class DiscordModerationApp(discord.Client):
    """
    discord.py client that wires the moderation pipeline into gateway events.

    - `on_message` runs every guild message through the coordinator and
      enforces `delete` decisions (delete, then post a notice).
    - `/addchannel`, `/removechannel`, `/listchannels` manage the monitored
      channels and are synced globally in `setup_hook`.
    """

    def __init__(
        self,
        settings: BotSettings,
        *,
        coordinator: Optional[ModerationCoordinator] = None,
    ) -> None:
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents)
        self._settings = settings
        self.coordinator = coordinator or ModerationCoordinator(settings)
        self.channel_commands = ChannelCommandHandler(self.coordinator.registry)
        self.tree = app_commands.CommandTree(self)
        self.tree.error(self._on_app_command_error)
        self._register_commands()

    def _register_commands(self) -> None:
        handler = self.channel_commands

        @self.tree.command(name="addchannel", description="Add a channel to the allowed list.")
        @app_commands.describe(channel="Channel to add")
        @app_commands.default_permissions(administrator=True)
        @app_commands.guild_only()
        async def addchannel(interaction: discord.Interaction, channel: discord.abc.GuildChannel) -> None:
            await handler.add_channel(interaction, channel)

        @self.tree.command(name="removechannel", description="Remove a channel from the allowed list.")
        @app_commands.describe(channel="Channel to remove")
        @app_commands.default_permissions(administrator=True)
        @app_commands.guild_only()
        async def removechannel(interaction: discord.Interaction, channel: discord.abc.GuildChannel) -> None:
            await handler.remove_channel(interaction, channel)

        @self.tree.command(name="listchannels", description="List all allowed channels.")
        @app_commands.default_permissions(administrator=True)
        @app_commands.guild_only()
        async def listchannels(interaction: discord.Interaction) -> None:
            await handler.list_channels(interaction)

    async def _on_app_command_error(
        self,
        interaction: discord.Interaction[Any],
        error: app_commands.AppCommandError,
    ) -> None:
        command = interaction.command.name if interaction.command else None
        if isinstance(error, app_commands.TransformerError):
            await self.channel_commands.reject_invalid_channel(interaction, command)
            return
        logger.error("app_command_failed", command=command, error=str(error))
        if not interaction.response.is_done():
            await interaction.response.send_message("Command failed. Check logs for details.", ephemeral=True)

    async def setup_hook(self) -> None:
        try:
            synced = await self.tree.sync()
        except discord.HTTPException as exc:
            logger.error("slash_command_sync_failed", error=str(exc))
            return
        logger.info("slash_commands_registered", commands=[command.name for command in synced])

    async def on_ready(self) -> None:
        logger.info("discord_logged_in", user=str(self.user), guilds=len(self.guilds))

    @staticmethod
    def build_envelope(message: discord.Message) -> MessageEnvelope:
        return MessageEnvelope(
            context=MessageContext(
                author_id=str(message.author.id),
                channel_id=str(message.channel.id),
                message_id=str(message.id),
                author_is_bot=bool(message.author.bot),
                author_name=str(message.author),
                guild_id=str(message.guild.id) if message.guild else None,
            ),
            text=message.content,
        )

    async def on_message(self, message: discord.Message) -> None:
        envelope = self.build_envelope(message)
        try:
            decision = await self.coordinator.evaluate(envelope)
        except Exception:  # pylint: disable=broad-except
            logger.exception(
                "message_moderation_failed",
                message_id=envelope.context.message_id,
                channel_id=envelope.context.channel_id,
            )
            return
        if decision.should_delete:
            await self._enforce(message, decision)

    async def _enforce(self, message: discord.Message, decision: ModerationDecision) -> None:
        ctx = decision.message.context
        log = logger.bind(
            author_id=ctx.author_id,
            channel_id=ctx.channel_id,
            message_id=ctx.message_id,
            score=decision.toxicity_score,
            profanity=decision.profanity,
            outcome=decision.outcome.value,
        )
        try:
            await message.delete()
        except discord.HTTPException as exc:
            log.error("moderation_delete_failed", error=str(exc))
            return
        log.info("moderation_message_deleted")
        try:
            await message.channel.send(decision.removal_notice())
        except discord.HTTPException as exc:
            log.error("moderation_notice_failed", error=str(exc))

    async def close(self) -> None:
        await self.coordinator.shutdown()
        await super().close()

    async def serve(self) -> None:
        async with self:
            await self.start(self._settings.discord_token)
