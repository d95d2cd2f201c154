"""
HarborBot - Interaction Events
==============================

Component and modal routing plus the slash command error boundary.

DESIGN:
    Persistent views carry no callbacks, so every button, select and
    modal submit reaching on_interaction is handed to bot.ctx.router.
    Views with their own callbacks (RPS, nuke confirmation) produce
    custom IDs the router does not know; it ignores those at debug level.

    Slash command failures land in tree.on_error, which logs the full
    context once and answers the user with a generic message.
"""

from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from src.core.logger import logger
from src.utils.error_handler import ErrorHandler
from src.utils.interaction import safe_respond, send_generic_error
from src.utils.router import interaction_kind

if TYPE_CHECKING:
    from src.bot import HarborBot


class InteractionEvents(commands.Cog):
    """Router dispatch and command error handling."""

    def __init__(self, bot: "HarborBot") -> None:
        self.bot = bot
        self._previous_on_error = bot.tree.on_error
        bot.tree.on_error = self.on_app_command_error

    async def cog_unload(self) -> None:
        self.bot.tree.on_error = self._previous_on_error

    # =========================================================================
    # Component Routing
    # =========================================================================

    @commands.Cog.listener()
    async def on_interaction(self, interaction: discord.Interaction) -> None:
        kind = interaction_kind(interaction)
        if kind is None:
            return
        await self.bot.ctx.router.dispatch(interaction, kind)

    # =========================================================================
    # Slash Command Errors
    # =========================================================================

    async def on_app_command_error(
        self,
        interaction: discord.Interaction,
        error: app_commands.AppCommandError,
    ) -> None:
        if isinstance(error, app_commands.CheckFailure):
            logger.debug("Command Check Failed", [
                ("Command", f"/{interaction.command.qualified_name}" if interaction.command else "?"),
                ("User", f"{interaction.user} ({interaction.user.id})"),
                ("Error", type(error).__name__),
            ])
            await safe_respond(interaction, "❌ You can't use this command here.")
            return

        original = getattr(error, "original", error)
        name = interaction.command.qualified_name if interaction.command else "unknown"
        ErrorHandler.handle(
            original,
            location=f"Command: /{name}",
            interaction=interaction,
        )
        await send_generic_error(interaction)


async def setup(bot: "HarborBot") -> None:
    await bot.add_cog(InteractionEvents(bot))


__all__ = ["InteractionEvents", "setup"]
