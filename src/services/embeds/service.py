"""
HarborBot - Embed Service
=========================

Posting, editing and deleting bot-authored embeds, and keeping the
sent-embed registry in step with what is on Discord.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

import discord

from src.core.logger import logger
from src.core.database import SentEmbedRecord

from .builder import embed_from_payload, payload_from_embed

if TYPE_CHECKING:
    from src.bot import HarborBot


class EmbedLookupError(Exception):
    """A message could not be used for an embed action. title is user-facing."""

    def __init__(self, title: str, message: str) -> None:
        super().__init__(message)
        self.title = title
        self.message = message


class EmbedService:
    """Embed operations that touch both Discord and the record store."""

    def __init__(self, bot: "HarborBot") -> None:
        self.bot = bot

    @property
    def db(self):
        return self.bot.ctx.db

    # =========================================================================
    # Send
    # =========================================================================

    def can_send(self, channel: discord.abc.GuildChannel) -> bool:
        me = channel.guild.me
        return me is not None and channel.permissions_for(me).send_messages

    async def send(
        self,
        channel: discord.TextChannel,
        payload: Dict[str, Any],
        user: discord.abc.User,
    ) -> discord.Message:
        """Post the payload and record it for later edits."""
        message = await channel.send(embed=embed_from_payload(payload))
        self.db.store_sent_embed(message.id, channel.id, channel.guild.id, payload, user.id)

        logger.tree("Embed Sent", [
            ("Channel", f"#{channel.name} ({channel.id})"),
            ("Message ID", str(message.id)),
            ("By", f"{user} ({user.id})"),
        ], emoji="📨")

        return message

    # =========================================================================
    # Lookup
    # =========================================================================

    async def fetch_bot_embed(
        self,
        channel: Optional[discord.abc.GuildChannel],
        message_id: Any,
        action: str = "edit",
    ) -> Tuple[discord.Message, Dict[str, Any]]:
        """
        Fetch a bot-authored embed message and its payload.

        Raises:
            EmbedLookupError: Invalid channel or id, missing message,
                no embed, or a message the bot did not send.
        """
        if not isinstance(channel, (discord.TextChannel, discord.Thread)):
            raise EmbedLookupError("Invalid Channel", "The specified channel is not a text channel.")

        try:
            message_id = int(message_id)
        except (TypeError, ValueError):
            raise EmbedLookupError("Invalid Message ID", "Please provide a valid message ID.") from None

        try:
            message = await channel.fetch_message(message_id)
        except discord.NotFound:
            raise EmbedLookupError("Message Not Found", "Could not find a message with that ID.") from None
        except discord.Forbidden:
            raise EmbedLookupError(
                "Missing Permissions", "I don't have permission to read messages in that channel.",
            ) from None

        if not message.embeds:
            raise EmbedLookupError("No Embed Found", "The specified message does not contain an embed.")
        if message.author.id != self.bot.user.id:
            raise EmbedLookupError(
                f"Cannot {action.title()}", f"I can only {action} embeds that I have sent.",
            )

        stored: Optional[SentEmbedRecord] = self.db.get_sent_embed(message.id)
        payload = stored["embed_data"] if stored else payload_from_embed(message.embeds[0])
        return message, payload

    # =========================================================================
    # Edit / Delete
    # =========================================================================

    async def edit(
        self,
        message: discord.Message,
        payload: Dict[str, Any],
        user: discord.abc.User,
    ) -> None:
        await message.edit(embed=embed_from_payload(payload))
        if self.db.update_sent_embed(message.id, payload, user.id) is None:
            # Posted before the registry existed; start tracking it now
            self.db.store_sent_embed(message.id, message.channel.id, message.guild.id, payload, user.id)
            self.db.update_sent_embed(message.id, payload, user.id)

        logger.tree("Embed Edited", [
            ("Message ID", str(message.id)),
            ("By", f"{user} ({user.id})"),
        ], emoji="✏️")

    async def delete(self, message: discord.Message, user: discord.abc.User) -> None:
        await message.delete()
        self.db.delete_sent_embed(message.id)

        logger.tree("Embed Deleted", [
            ("Message ID", str(message.id)),
            ("By", f"{user} ({user.id})"),
        ], emoji="🗑️")


__all__ = ["EmbedService", "EmbedLookupError"]
