"""
HarborBot - Moderation Helpers
==============================

Target validation, DM notices and mod-log posting shared by the
moderation commands.
"""

from typing import Iterable, Optional

import discord

from src.core.logger import logger
from src.utils.interaction import find_log_channel, send_to_channel
from src.utils.responses import Field, create_embed, error


# =============================================================================
# Target Validation
# =============================================================================

async def fetch_member(guild: discord.Guild, user: discord.abc.User) -> Optional[discord.Member]:
    """Member object for user, or None if they are not in the guild."""
    if isinstance(user, discord.Member) and user.guild.id == guild.id:
        return user
    member = guild.get_member(user.id)
    if member is not None:
        return member
    try:
        return await guild.fetch_member(user.id)
    except discord.NotFound:
        return None


def outranks(guild: discord.Guild, member: discord.Member) -> bool:
    """True if the bot's top role is above the member's and they do not own the guild."""
    me = guild.me
    if me is None or member.id == guild.owner_id:
        return False
    return me.top_role > member.top_role


def check_target(
    interaction: discord.Interaction,
    member: Optional[discord.Member],
    verb: str,
    bot_can: bool,
    bot_permission: str,
    title: Optional[str] = None,
) -> Optional[discord.Embed]:
    """
    Validate a moderation target.

    Args:
        verb: Action word for messages ("ban", "kick", "timeout").
        bot_can: Whether the bot holds the guild permission for the action.
        bot_permission: Human wording of that permission ("ban members").
        title: Error title, defaults to "Cannot <Verb>".

    Returns:
        An error embed to send, or None if the action may proceed.
    """
    title = title or f"Cannot {verb.title()}"

    if member is None:
        return error("Error", "User not found in this server.")
    if not bot_can:
        return error("Missing Permissions", f"I don't have permission to {bot_permission}.")
    if member.id == interaction.user.id:
        return error(title, f"You cannot {verb} yourself.")
    if interaction.client.user and member.id == interaction.client.user.id:
        return error(title, f"I cannot {verb} myself.")
    if not outranks(interaction.guild, member):
        return error(title, f"I cannot {verb} this user. They may have a higher role than me.")
    return None


# =============================================================================
# Notifications
# =============================================================================

async def send_dm(user: discord.abc.User, embed: discord.Embed) -> bool:
    """DM the user. Closed DMs are logged and reported as False."""
    try:
        await user.send(embed=embed)
        return True
    except discord.HTTPException as e:
        logger.debug("Moderation DM Failed", [
            ("User", f"{user} ({user.id})"),
            ("Error", str(e)[:50]),
        ])
        return False


def dm_embed(kind: str, title: str, reason: str, extra: str = "", footer: Optional[str] = None) -> discord.Embed:
    return create_embed(kind, title, f"**Reason:** {reason}{extra}", footer=footer)


async def post_mod_log(
    guild: discord.Guild,
    kind: str,
    title: str,
    description: str,
    fields: Iterable[Field],
    footer: str,
) -> Optional[discord.Message]:
    """Post an action summary to the guild's mod-logs (or logs) channel."""
    return await send_to_channel(
        find_log_channel(guild),
        embed=create_embed(kind, title, description, fields=fields, footer=footer),
    )


__all__ = [
    "fetch_member",
    "outranks",
    "check_target",
    "send_dm",
    "dm_embed",
    "post_mod_log",
]
