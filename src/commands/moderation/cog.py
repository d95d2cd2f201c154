"""
HarborBot - Moderation Cog
==========================

Slash command definitions for member and channel moderation.
The work itself lives in MemberOpsMixin and MessageOpsMixin.
"""

from typing import TYPE_CHECKING, Optional

import discord
from discord import app_commands
from discord.ext import commands

from src.core.config import get_config
from src.core.constants import CLEAR_MAX_AMOUNT, MAX_BAN_DELETE_DAYS, PURGE_MAX_AMOUNT
from src.utils.interaction import safe_respond
from src.utils.responses import error

from .animations import ANIMATION_CHOICES
from .member_ops import DEFAULT_REASON, MemberOpsMixin
from .message_ops import MessageOpsMixin

if TYPE_CHECKING:
    from src.bot import HarborBot


class ModerationCog(MemberOpsMixin, MessageOpsMixin, commands.Cog):
    """Ban, kick, timeout, message cleanup and channel nukes."""

    def __init__(self, bot: "HarborBot") -> None:
        self.bot = bot
        self.config = get_config()

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        return interaction.guild is not None

    # =========================================================================
    # Member Actions
    # =========================================================================

    @app_commands.command(name="ban", description="Ban a user from the server")
    @app_commands.describe(
        user="The user to ban",
        reason="Reason for banning",
        days="Number of days of messages to delete (0-7)",
    )
    @app_commands.default_permissions(ban_members=True)
    async def ban(
        self,
        interaction: discord.Interaction,
        user: discord.User,
        reason: Optional[str] = None,
        days: app_commands.Range[int, 0, MAX_BAN_DELETE_DAYS] = 0,
    ) -> None:
        await self.execute_ban(interaction, user, reason or DEFAULT_REASON, days)

    @app_commands.command(name="kick", description="Kick a user from the server")
    @app_commands.describe(user="The user to kick", reason="Reason for kicking")
    @app_commands.default_permissions(kick_members=True)
    async def kick(
        self,
        interaction: discord.Interaction,
        user: discord.User,
        reason: Optional[str] = None,
    ) -> None:
        await self.execute_kick(interaction, user, reason or DEFAULT_REASON)

    @app_commands.command(name="mute", description="Timeout a user")
    @app_commands.describe(
        user="The user to timeout",
        duration="Timeout duration (e.g. 10s, 10m, 1h, 1d, 1w)",
        reason="Reason for the timeout",
    )
    @app_commands.default_permissions(moderate_members=True)
    async def mute(
        self,
        interaction: discord.Interaction,
        user: discord.User,
        duration: str,
        reason: Optional[str] = None,
    ) -> None:
        await self.execute_mute(interaction, user, duration, reason or DEFAULT_REASON)

    @app_commands.command(name="unmute", description="Remove timeout from a user")
    @app_commands.describe(user="The user to remove timeout from", reason="Reason for removing the timeout")
    @app_commands.default_permissions(moderate_members=True)
    async def unmute(
        self,
        interaction: discord.Interaction,
        user: discord.User,
        reason: Optional[str] = None,
    ) -> None:
        await self.execute_unmute(interaction, user, reason or DEFAULT_REASON)

    # =========================================================================
    # Message Actions
    # =========================================================================

    @app_commands.command(name="clear", description="Clear messages from the channel")
    @app_commands.describe(
        amount="Number of messages to delete (1-99)",
        user="Only delete messages from this user",
    )
    @app_commands.default_permissions(manage_messages=True)
    async def clear(
        self,
        interaction: discord.Interaction,
        amount: app_commands.Range[int, 1, CLEAR_MAX_AMOUNT],
        user: Optional[discord.User] = None,
    ) -> None:
        await self.execute_clear(interaction, amount, user)

    @app_commands.command(name="purge", description="Delete messages with filters")
    @app_commands.describe(
        amount="Number of messages to check (1-100)",
        user="Only delete messages from this user",
        contains="Only delete messages containing this text",
    )
    @app_commands.default_permissions(manage_messages=True)
    async def purge(
        self,
        interaction: discord.Interaction,
        amount: app_commands.Range[int, 1, PURGE_MAX_AMOUNT],
        user: Optional[discord.User] = None,
        contains: Optional[str] = None,
    ) -> None:
        await self.execute_purge(interaction, amount, user, contains)

    # =========================================================================
    # Nuke
    # =========================================================================

    @app_commands.command(name="nuke", description="Delete all messages by cloning and deleting the channel")
    @app_commands.describe(
        channel="The channel to nuke (defaults to current channel)",
        reason="Reason for nuking the channel",
    )
    @app_commands.default_permissions(manage_channels=True)
    async def nuke(
        self,
        interaction: discord.Interaction,
        channel: Optional[discord.TextChannel] = None,
        reason: Optional[str] = None,
    ) -> None:
        target = channel or interaction.channel
        if not isinstance(target, discord.TextChannel):
            await safe_respond(interaction, embed=error("Invalid Channel", "Only text channels can be nuked."))
            return
        await self.prompt_nuke(interaction, target, reason or DEFAULT_REASON)

    @app_commands.command(name="nukeanimation", description="Play a nuke animation in the channel")
    @app_commands.describe(type="Animation to play")
    @app_commands.choices(type=[
        app_commands.Choice(name=label, value=key) for key, label in ANIMATION_CHOICES.items()
    ])
    @app_commands.default_permissions(manage_messages=True)
    async def nukeanimation(
        self,
        interaction: discord.Interaction,
        type: app_commands.Choice[str],
    ) -> None:
        await self.play_animation(interaction, type.value)


__all__ = ["ModerationCog"]
