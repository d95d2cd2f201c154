"""
HarborBot - Warn Cog
====================

/warn add | list | remove | clear backed by the record store.

Warnings are addressed by their 1-based position for the user, so after
removing #2 of three the old #3 becomes #2.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import discord
from discord import app_commands
from discord.ext import commands

from src.core.logger import logger
from src.core.config import get_config
from src.utils.interaction import safe_defer, safe_respond
from src.utils.responses import error, info, success
from src.commands.moderation.helpers import post_mod_log, send_dm

from .helpers import COMMON_REASONS, build_warn_dm, format_warning_list

if TYPE_CHECKING:
    from src.bot import HarborBot


class WarnCog(commands.Cog):
    """Cog for issuing and managing user warnings."""

    warn = app_commands.Group(
        name="warn",
        description="Manage warnings for users",
        default_permissions=discord.Permissions(moderate_members=True),
        guild_only=True,
    )

    def __init__(self, bot: "HarborBot") -> None:
        self.bot = bot
        self.config = get_config()

    @property
    def db(self):
        return self.bot.ctx.db

    # =========================================================================
    # Autocomplete
    # =========================================================================

    async def reason_autocomplete(
        self,
        interaction: discord.Interaction,
        current: str,
    ) -> List[app_commands.Choice[str]]:
        """Suggest common reasons, keeping whatever the moderator typed first."""
        current_lower = current.lower()
        choices = [
            app_commands.Choice(name=reason, value=reason)
            for reason in COMMON_REASONS
            if current_lower in reason.lower()
        ]

        if current and current not in COMMON_REASONS:
            choices.insert(0, app_commands.Choice(name=current[:100], value=current[:100]))

        return choices[:25]

    # =========================================================================
    # /warn add
    # =========================================================================

    @warn.command(name="add", description="Warn a user")
    @app_commands.describe(user="The user to warn", reason="Reason for the warning")
    @app_commands.autocomplete(reason=reason_autocomplete)
    async def warn_add(self, interaction: discord.Interaction, user: discord.User, reason: str) -> None:
        await safe_defer(interaction)

        if user.bot:
            await safe_respond(interaction, embed=error("Cannot Warn", "You cannot warn bots."))
            return
        if user.id == interaction.user.id:
            await safe_respond(interaction, embed=error("Cannot Warn", "You cannot warn yourself."))
            return

        record = self.db.add_warning(interaction.guild_id, user.id, interaction.user.id, reason)
        count = self.db.get_user_warn_count(interaction.guild_id, user.id)

        dm_sent = await send_dm(user, build_warn_dm(interaction.guild, reason, count))

        await safe_respond(interaction, embed=success(
            "User Warned",
            f"Successfully warned {user}.",
            fields=[("Reason", reason), ("Warning Count", str(count))],
        ))

        logger.tree("USER WARNED", [
            ("User", f"{user} ({user.id})"),
            ("Moderator", f"{interaction.user} ({interaction.user.id})"),
            ("Warning", f"#{record['number']}"),
            ("Total", str(count)),
            ("DM Sent", "Yes" if dm_sent else "No"),
            ("Reason", reason[:50]),
        ], emoji="⚠️")

        await post_mod_log(
            interaction.guild, "warning", "User Warned",
            f"**{user}** ({user.id}) was warned by {interaction.user.mention}",
            fields=[
                ("Reason", reason),
                ("Warning ID", str(record["number"])),
                ("Total Warnings", str(count)),
            ],
            footer=f"Warned by {interaction.user}",
        )

    # =========================================================================
    # /warn list
    # =========================================================================

    @warn.command(name="list", description="List warnings for a user")
    @app_commands.describe(user="The user to check warnings for")
    async def warn_list(self, interaction: discord.Interaction, user: discord.User) -> None:
        await safe_defer(interaction)

        warnings = self.db.get_user_warnings(interaction.guild_id, user.id)
        if not warnings:
            await safe_respond(interaction, embed=info("No Warnings", f"{user} has no warnings."))
            return

        await safe_respond(interaction, embed=info(f"Warnings for {user}", format_warning_list(warnings)))

    # =========================================================================
    # /warn remove
    # =========================================================================

    @warn.command(name="remove", description="Remove a warning from a user")
    @app_commands.describe(user="The user to remove a warning from", warning_id="The ID of the warning to remove")
    @app_commands.rename(warning_id="warning-id")
    async def warn_remove(
        self,
        interaction: discord.Interaction,
        user: discord.User,
        warning_id: int,
    ) -> None:
        await safe_defer(interaction)

        if self.db.get_user_warn_count(interaction.guild_id, user.id) == 0:
            await safe_respond(interaction, embed=error("No Warnings", f"{user} has no warnings."))
            return

        removed = self.db.remove_warning(interaction.guild_id, user.id, warning_id)
        if removed is None:
            await safe_respond(interaction, embed=error(
                "Warning Not Found", f"Could not find a warning with ID {warning_id} for {user}.",
            ))
            return

        remaining = self.db.get_user_warn_count(interaction.guild_id, user.id)

        await safe_respond(interaction, embed=success(
            "Warning Removed",
            f"Successfully removed warning {warning_id} from {user}.",
            fields=[("Remaining Warnings", str(remaining))],
        ))

        logger.tree("WARNING REMOVED", [
            ("User", f"{user} ({user.id})"),
            ("Moderator", f"{interaction.user} ({interaction.user.id})"),
            ("Warning", f"#{warning_id}"),
            ("Remaining", str(remaining)),
        ], emoji="🗑️")

        await post_mod_log(
            interaction.guild, "success", "Warning Removed",
            f"Warning {warning_id} was removed from **{user}** ({user.id}) by {interaction.user.mention}",
            fields=[
                ("Original Reason", removed["reason"] or "None"),
                ("Remaining Warnings", str(remaining)),
            ],
            footer=f"Removed by {interaction.user}",
        )

    # =========================================================================
    # /warn clear
    # =========================================================================

    @warn.command(name="clear", description="Clear all warnings from a user")
    @app_commands.describe(user="The user to clear warnings from")
    async def warn_clear(self, interaction: discord.Interaction, user: discord.User) -> None:
        await safe_defer(interaction)

        cleared = self.db.clear_warnings(interaction.guild_id, user.id)
        if cleared == 0:
            await safe_respond(interaction, embed=error("No Warnings", f"{user} has no warnings."))
            return

        await safe_respond(interaction, embed=success(
            "Warnings Cleared", f"Successfully cleared all warnings ({cleared}) from {user}.",
        ))

        logger.tree("WARNINGS CLEARED", [
            ("User", f"{user} ({user.id})"),
            ("Moderator", f"{interaction.user} ({interaction.user.id})"),
            ("Cleared", str(cleared)),
        ], emoji="🧽")

        await post_mod_log(
            interaction.guild, "success", "Warnings Cleared",
            f"All warnings ({cleared}) were cleared from **{user}** ({user.id}) by {interaction.user.mention}",
            fields=[],
            footer=f"Cleared by {interaction.user}",
        )


__all__ = ["WarnCog"]
