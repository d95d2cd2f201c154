"""
HarborBot - Message Events
==========================

Transcript capture for ticket channels.
"""

from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from src.core.logger import logger
from src.services.tickets.transcript import message_to_record
from src.utils.error_handler import safe_execute

if TYPE_CHECKING:
    from src.bot import HarborBot


TICKET_CHANNEL_PREFIX = "ticket-"


class MessageEvents(commands.Cog):
    """Appends guild messages in ticket channels to their transcript."""

    def __init__(self, bot: "HarborBot") -> None:
        self.bot = bot

    @commands.Cog.listener()
    @safe_execute
    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot or message.guild is None:
            return

        # Ticket channels keep the prefix through renames
        if not getattr(message.channel, "name", "").startswith(TICKET_CHANNEL_PREFIX):
            return

        if self.bot.ctx.tickets.record_message(message.channel.id, message_to_record(message)):
            logger.debug("Transcript Message Stored", [
                ("Channel", str(message.channel.id)),
                ("Author", str(message.author)),
            ])


async def setup(bot: "HarborBot") -> None:
    await bot.add_cog(MessageEvents(bot))


__all__ = ["MessageEvents", "TICKET_CHANNEL_PREFIX", "setup"]
