"""
HarborBot - Message Moderation Mixin
====================================

Bulk message deletion and channel nuking.

DESIGN:
    Discord only bulk-deletes messages younger than 14 days. /clear
    refuses anything older; /purge bulk-deletes the recent part and
    falls back to one-by-one deletes for the rest.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, List, Optional, Tuple

import discord

from src.core.constants import PURGE_MAX_AMOUNT, SECONDS_PER_DAY
from src.core.logger import logger
from src.utils.interaction import safe_defer, safe_respond
from src.utils.responses import error, info, success, warning

from .animations import ANIMATIONS, COMPLETION_MESSAGES, NUKE_FRAMES
from .helpers import post_mod_log
from .views import NukeConfirmView

if TYPE_CHECKING:
    from .cog import ModerationCog


def split_by_age(
    messages: List[discord.Message],
    max_age_seconds: int,
    now: Optional[datetime] = None,
) -> Tuple[List[discord.Message], List[discord.Message]]:
    """Split messages into (bulk-deletable, too old) around the cutoff."""
    cutoff = (now or datetime.now(timezone.utc)) - timedelta(seconds=max_age_seconds)
    recent = [m for m in messages if m.created_at > cutoff]
    old = [m for m in messages if m.created_at <= cutoff]
    return recent, old


def matches_filters(message: discord.Message, user: Optional[discord.abc.User], contains: Optional[str]) -> bool:
    if user is not None and message.author.id != user.id:
        return False
    if contains and contains.lower() not in (message.content or "").lower():
        return False
    return True


def purge_summary(count: int, user: Optional[discord.abc.User], contains: Optional[str]) -> str:
    filters = []
    if user is not None:
        filters.append(f"from user @{user}")
    if contains:
        filters.append(f'containing "{contains}"')
    suffix = f" ({' and '.join(filters)})" if filters else ""
    return f"Successfully deleted {count} message(s){suffix}."


class MessageOpsMixin:
    """Mixin for channel-level moderation."""

    @property
    def bulk_max_age(self: "ModerationCog") -> int:
        return self.config.bulk_delete_max_age_days * SECONDS_PER_DAY

    # =========================================================================
    # Clear
    # =========================================================================

    async def execute_clear(
        self: "ModerationCog",
        interaction: discord.Interaction,
        amount: int,
        user: Optional[discord.User] = None,
    ) -> int:
        """Bulk delete up to amount recent messages. Returns the number deleted."""
        channel = interaction.channel
        if not channel.permissions_for(interaction.guild.me).manage_messages:
            await safe_respond(interaction, embed=error(
                "Missing Permissions", "I don't have permission to delete messages in this channel.",
            ))
            return 0

        await safe_defer(interaction)

        fetched = [m async for m in channel.history(limit=PURGE_MAX_AMOUNT)]
        recent, _ = split_by_age(fetched, self.bulk_max_age)
        targets = [m for m in recent if matches_filters(m, user, None)][:amount]

        if not targets:
            await safe_respond(interaction, embed=error(
                "No Messages",
                "There are no recent messages to delete. Messages older than 14 days cannot be bulk deleted.",
            ))
            return 0

        try:
            await channel.delete_messages(targets, reason=f"Cleared by {interaction.user}")
        except discord.HTTPException as e:
            logger.error("Clear Failed", [
                ("Channel", f"#{channel.name} ({channel.id})"),
                ("Error", str(e)[:100]),
            ])
            await safe_respond(interaction, embed=error("Clear Failed", f"Failed to delete messages: {e.text or e}"))
            return 0

        from_user = f" from {user}" if user else ""
        await safe_respond(interaction, embed=success(
            "Messages Deleted", f"Successfully deleted {len(targets)} message(s){from_user}.",
        ))

        logger.tree("MESSAGES CLEARED", [
            ("Channel", f"#{channel.name} ({channel.id})"),
            ("Moderator", f"{interaction.user} ({interaction.user.id})"),
            ("Deleted", str(len(targets))),
            ("Target User", str(user) if user else "All"),
        ], emoji="🧹")

        await post_mod_log(
            interaction.guild, "info", "Messages Purged",
            f"{len(targets)} message(s) were deleted in {channel.mention}",
            fields=[
                ("Channel", channel.mention),
                ("Amount", str(len(targets))),
                ("Target User", user.mention if user else "All users"),
            ],
            footer=f"Action by {interaction.user}",
        )
        return len(targets)

    # =========================================================================
    # Purge
    # =========================================================================

    async def execute_purge(
        self: "ModerationCog",
        interaction: discord.Interaction,
        amount: int,
        user: Optional[discord.User] = None,
        contains: Optional[str] = None,
    ) -> int:
        """Delete matching messages of any age. Returns the number deleted."""
        channel = interaction.channel
        if not channel.permissions_for(interaction.guild.me).manage_messages:
            await safe_respond(interaction, embed=error(
                "Missing Permissions", "I don't have permission to delete messages in this channel.",
            ))
            return 0

        await safe_defer(interaction)

        fetched = [m async for m in channel.history(limit=min(amount + 10, PURGE_MAX_AMOUNT))]
        targets = [m for m in fetched if matches_filters(m, user, contains)][:amount]
        recent, old = split_by_age(targets, self.bulk_max_age)

        deleted = 0
        try:
            if recent:
                await channel.delete_messages(recent, reason=f"Purged by {interaction.user}")
                deleted += len(recent)
        except discord.HTTPException as e:
            logger.warning("Bulk Delete Failed", [
                ("Channel", f"#{channel.name} ({channel.id})"),
                ("Error", str(e)[:100]),
            ])
            old = recent + old

        for message in old:
            try:
                await message.delete()
                deleted += 1
            except discord.NotFound:
                continue
            except discord.HTTPException as e:
                logger.warning("Single Delete Failed", [
                    ("Message", str(message.id)),
                    ("Error", str(e)[:100]),
                ])

        if deleted == 0:
            await safe_respond(interaction, embed=info(
                "No Messages Deleted", "No messages were found matching your criteria.",
            ))
            return 0

        await safe_respond(interaction, embed=success("Messages Purged", purge_summary(deleted, user, contains)))

        logger.tree("MESSAGES PURGED", [
            ("Channel", f"#{channel.name} ({channel.id})"),
            ("Moderator", f"{interaction.user} ({interaction.user.id})"),
            ("Deleted", str(deleted)),
            ("Bulk", str(len(recent))),
            ("Filter User", str(user) if user else "-"),
            ("Filter Text", contains or "-"),
        ], emoji="🧹")

        await post_mod_log(
            interaction.guild, "info", "Messages Purged",
            f"{deleted} message(s) were deleted in {channel.mention}",
            fields=[
                ("Channel", channel.mention),
                ("Amount", str(deleted)),
                ("Target User", user.mention if user else "All users"),
                ("Contains", contains or "-"),
            ],
            footer=f"Action by {interaction.user}",
        )
        return deleted

    # =========================================================================
    # Nuke
    # =========================================================================

    async def prompt_nuke(
        self: "ModerationCog",
        interaction: discord.Interaction,
        channel: discord.TextChannel,
        reason: str,
    ) -> None:
        """Ask for confirmation, then clone and delete the channel."""
        if not channel.permissions_for(interaction.guild.me).manage_channels:
            await safe_respond(interaction, embed=error(
                "Missing Permissions", "I don't have permission to manage that channel.",
            ))
            return

        async def confirmed(button_interaction: discord.Interaction) -> None:
            await self.execute_nuke(button_interaction, channel, reason)

        view = NukeConfirmView(interaction.user.id, confirmed, timeout=self.config.view_timeout)
        await safe_respond(interaction, embed=warning(
            "⚠️ Channel Nuke Confirmation",
            f"Are you sure you want to nuke {channel.mention} and delete ALL messages?\n\n"
            "This will create a clone of the channel with the same permissions and delete the original.\n\n"
            "**This action cannot be undone!**\n\n"
            f"Reason: {reason}",
        ), view=view)
        view.interaction = interaction

    async def execute_nuke(
        self: "ModerationCog",
        interaction: discord.Interaction,
        channel: discord.TextChannel,
        reason: str,
    ) -> Optional[discord.TextChannel]:
        """Clone the channel, play the countdown in the clone and delete the original."""
        await interaction.response.edit_message(
            embed=warning("Nuking in Progress", f"Nuking {channel.mention}... This may take a moment."),
            view=None,
        )

        try:
            clone = await channel.clone(reason=f"Channel nuked by {interaction.user} - {reason}")
            await clone.edit(position=channel.position)

            countdown = await clone.send("**CHANNEL NUKE INCOMING**")
            for frame in NUKE_FRAMES:
                await asyncio.sleep(self.config.nuke_frame_delay)
                await countdown.edit(content=frame)

            await channel.delete(reason=f"Channel nuked by {interaction.user} - {reason}")
        except discord.HTTPException as e:
            logger.error("Nuke Failed", [
                ("Channel", f"#{channel.name} ({channel.id})"),
                ("Error", str(e)[:100]),
            ])
            await safe_respond(interaction, embed=error("Nuke Failed", f"Failed to nuke channel: {e.text or e}"))
            return None

        await clone.send(embed=success(
            "💥 Channel Nuked",
            f"This channel has been nuked by {interaction.user.mention}.\n\n"
            f"**Reason:** {reason}\n\n"
            "All previous messages have been deleted.",
        ))

        logger.tree("CHANNEL NUKED", [
            ("Channel", f"#{channel.name}"),
            ("Old ID", str(channel.id)),
            ("New ID", str(clone.id)),
            ("Moderator", f"{interaction.user} ({interaction.user.id})"),
            ("Reason", reason[:50]),
        ], emoji="💥")

        await post_mod_log(
            interaction.guild, "warning", "Channel Nuked",
            f"#{channel.name} was nuked by {interaction.user.mention}",
            fields=[("Channel", clone.mention), ("Reason", reason)],
            footer=f"Action by {interaction.user}",
        )
        return clone

    async def play_animation(self: "ModerationCog", interaction: discord.Interaction, kind: str) -> None:
        """Edit the deferred public response through the frames of one animation."""
        frames = ANIMATIONS[kind]
        await safe_defer(interaction, ephemeral=False, thinking=True)

        for frame in frames:
            try:
                await interaction.edit_original_response(content=frame)
            except discord.HTTPException as e:
                logger.warning("Animation Frame Failed", [
                    ("Animation", kind),
                    ("Error", str(e)[:100]),
                ])
                return
            await asyncio.sleep(self.config.nuke_frame_delay)

        await asyncio.sleep(2)
        await safe_respond(
            interaction,
            embed=success("Animation Complete", COMPLETION_MESSAGES[kind]),
            ephemeral=False,
        )

        logger.tree("Nuke Animation Played", [
            ("Animation", kind),
            ("Channel", str(interaction.channel_id)),
            ("User", f"{interaction.user} ({interaction.user.id})"),
        ], emoji="💣")


__all__ = ["MessageOpsMixin", "split_by_age", "matches_filters", "purge_summary"]
