"""
HarborBot - Member Moderation Mixin
===================================

Ban, kick, timeout and timeout removal.

Every action follows the same order: validate the target, DM them
while they can still be reached, act, reply ephemerally, then post
to the mod-log channel.
"""

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import discord

from src.core.constants import MAX_BAN_DELETE_DAYS, SECONDS_PER_DAY
from src.core.logger import logger
from src.utils.duration import (
    INVALID_DURATION_MESSAGE,
    clamp_timeout,
    format_duration_long,
    parse_duration,
)
from src.utils.interaction import safe_respond
from src.utils.responses import error, success

from .helpers import check_target, dm_embed, fetch_member, post_mod_log, send_dm

if TYPE_CHECKING:
    from .cog import ModerationCog


DEFAULT_REASON = "No reason provided"


def _tag(user: discord.abc.User) -> str:
    return str(user)


class MemberOpsMixin:
    """Mixin for actions applied to a single member."""

    # =========================================================================
    # Ban
    # =========================================================================

    async def execute_ban(
        self: "ModerationCog",
        interaction: discord.Interaction,
        user: discord.User,
        reason: str = DEFAULT_REASON,
        days: int = 0,
    ) -> bool:
        """Ban a member, optionally deleting their recent messages. Returns True on success."""
        guild = interaction.guild
        days = max(0, min(days, MAX_BAN_DELETE_DAYS))

        member = await fetch_member(guild, user)
        problem = check_target(
            interaction, member, "ban",
            bot_can=guild.me.guild_permissions.ban_members,
            bot_permission="ban members",
        )
        if problem:
            await safe_respond(interaction, embed=problem)
            return False

        await send_dm(member, dm_embed("error", f"You have been banned from {guild.name}", reason))

        try:
            await member.ban(
                reason=f"{reason} - Banned by {interaction.user}",
                delete_message_seconds=days * SECONDS_PER_DAY,
            )
        except discord.HTTPException as e:
            logger.error("Ban Failed", [
                ("Target", f"{member} ({member.id})"),
                ("Error", str(e)[:100]),
            ])
            await safe_respond(interaction, embed=error("Ban Failed", f"Failed to ban {_tag(member)}: {e.text or e}"))
            return False

        deleted = f" and deleted their messages from the last {days} day(s)" if days else ""
        await safe_respond(interaction, embed=success(
            "User Banned",
            f"Successfully banned {_tag(member)}{deleted}.",
            fields=[("Reason", reason)],
        ))

        logger.tree("USER BANNED", [
            ("User", f"{member} ({member.id})"),
            ("Moderator", f"{interaction.user} ({interaction.user.id})"),
            ("Reason", reason[:50]),
            ("Delete Days", str(days)),
        ], emoji="🔨")

        await post_mod_log(
            guild, "error", "User Banned",
            f"**{_tag(member)}** ({member.id}) was banned by {interaction.user.mention}",
            fields=[
                ("Reason", reason),
                ("Message Deletion", f"{days} day(s)" if days else "None"),
            ],
            footer=f"Banned by {interaction.user}",
        )
        return True

    # =========================================================================
    # Kick
    # =========================================================================

    async def execute_kick(
        self: "ModerationCog",
        interaction: discord.Interaction,
        user: discord.User,
        reason: str = DEFAULT_REASON,
    ) -> bool:
        guild = interaction.guild
        member = await fetch_member(guild, user)
        problem = check_target(
            interaction, member, "kick",
            bot_can=guild.me.guild_permissions.kick_members,
            bot_permission="kick members",
        )
        if problem:
            await safe_respond(interaction, embed=problem)
            return False

        await send_dm(member, dm_embed("warning", f"You have been kicked from {guild.name}", reason))

        try:
            await member.kick(reason=f"{reason} - Kicked by {interaction.user}")
        except discord.HTTPException as e:
            logger.error("Kick Failed", [
                ("Target", f"{member} ({member.id})"),
                ("Error", str(e)[:100]),
            ])
            await safe_respond(interaction, embed=error("Kick Failed", f"Failed to kick {_tag(member)}: {e.text or e}"))
            return False

        await safe_respond(interaction, embed=success(
            "User Kicked",
            f"Successfully kicked {_tag(member)}.",
            fields=[("Reason", reason)],
        ))

        logger.tree("USER KICKED", [
            ("User", f"{member} ({member.id})"),
            ("Moderator", f"{interaction.user} ({interaction.user.id})"),
            ("Reason", reason[:50]),
        ], emoji="👢")

        await post_mod_log(
            guild, "warning", "User Kicked",
            f"**{_tag(member)}** ({member.id}) was kicked by {interaction.user.mention}",
            fields=[("Reason", reason)],
            footer=f"Kicked by {interaction.user}",
        )
        return True

    # =========================================================================
    # Timeout
    # =========================================================================

    async def execute_mute(
        self: "ModerationCog",
        interaction: discord.Interaction,
        user: discord.User,
        duration: str,
        reason: str = DEFAULT_REASON,
    ) -> bool:
        """Time a member out for a parsed duration, capped at 28 days."""
        guild = interaction.guild

        seconds = parse_duration(duration)
        if seconds is None:
            await safe_respond(interaction, embed=error("Invalid Duration", INVALID_DURATION_MESSAGE))
            return False
        seconds = clamp_timeout(seconds, self.config.max_timeout_days * SECONDS_PER_DAY)

        member = await fetch_member(guild, user)
        problem = check_target(
            interaction, member, "timeout",
            bot_can=guild.me.guild_permissions.moderate_members,
            bot_permission="timeout members",
            title="Cannot Timeout",
        )
        if problem:
            await safe_respond(interaction, embed=problem)
            return False

        until = datetime.now(timezone.utc) + timedelta(seconds=seconds)
        expires = f"<t:{int(until.timestamp())}:R>"
        readable = format_duration_long(seconds)

        await send_dm(member, dm_embed(
            "warning",
            f"You have been timed out in {guild.name}",
            reason,
            extra=f"\n**Duration:** {readable}\n**Expires:** {expires}",
        ))

        try:
            await member.timeout(until, reason=f"{reason} - Timed out by {interaction.user}")
        except discord.HTTPException as e:
            logger.error("Timeout Failed", [
                ("Target", f"{member} ({member.id})"),
                ("Error", str(e)[:100]),
            ])
            await safe_respond(interaction, embed=error(
                "Timeout Failed", f"Failed to timeout {_tag(member)}: {e.text or e}",
            ))
            return False

        await safe_respond(interaction, embed=success(
            "User Timed Out",
            f"Successfully timed out {_tag(member)} for {readable}.",
            fields=[("Reason", reason), ("Expires", expires)],
        ))

        logger.tree("USER TIMED OUT", [
            ("User", f"{member} ({member.id})"),
            ("Moderator", f"{interaction.user} ({interaction.user.id})"),
            ("Duration", readable),
            ("Reason", reason[:50]),
        ], emoji="🔇")

        await post_mod_log(
            guild, "warning", "User Timed Out",
            f"**{_tag(member)}** ({member.id}) was timed out by {interaction.user.mention}",
            fields=[("Reason", reason), ("Duration", readable), ("Expires", expires)],
            footer=f"Timed out by {interaction.user}",
        )
        return True

    async def execute_unmute(
        self: "ModerationCog",
        interaction: discord.Interaction,
        user: discord.User,
        reason: str = DEFAULT_REASON,
    ) -> bool:
        guild = interaction.guild
        member = await fetch_member(guild, user)
        problem = check_target(
            interaction, member, "modify",
            bot_can=guild.me.guild_permissions.moderate_members,
            bot_permission="manage timeouts",
        )
        if problem:
            # Hierarchy wording differs for timeouts
            if problem.title == "Cannot Modify":
                problem.description = "I cannot modify this user's timeout. They may have a higher role than me."
            await safe_respond(interaction, embed=problem)
            return False

        if not member.is_timed_out():
            await safe_respond(interaction, embed=error("Not Timed Out", "This user is not currently timed out."))
            return False

        try:
            await member.timeout(None, reason=f"{reason} - Timeout removed by {interaction.user}")
        except discord.HTTPException as e:
            logger.error("Unmute Failed", [
                ("Target", f"{member} ({member.id})"),
                ("Error", str(e)[:100]),
            ])
            await safe_respond(interaction, embed=error(
                "Unmute Failed", f"Failed to remove timeout from {_tag(member)}: {e.text or e}",
            ))
            return False

        await send_dm(member, dm_embed("success", f"Your timeout has been removed in {guild.name}", reason))

        await safe_respond(interaction, embed=success(
            "Timeout Removed",
            f"Successfully removed timeout from {_tag(member)}.",
            fields=[("Reason", reason)],
        ))

        logger.tree("USER TIMEOUT REMOVED", [
            ("User", f"{member} ({member.id})"),
            ("Moderator", f"{interaction.user} ({interaction.user.id})"),
            ("Reason", reason[:50]),
        ], emoji="🔊")

        await post_mod_log(
            guild, "success", "User Timeout Removed",
            f"**{_tag(member)}** ({member.id}) had their timeout removed by {interaction.user.mention}",
            fields=[("Reason", reason)],
            footer=f"Timeout removed by {interaction.user}",
        )
        return True


__all__ = ["MemberOpsMixin", "DEFAULT_REASON"]
