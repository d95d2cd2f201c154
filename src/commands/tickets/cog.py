"""
HarborBot - Tickets Cog
=======================

Slash commands for the ticket system.

DESIGN:
    Commands are thin: TicketService does the Discord work and
    TicketWorkflow decides the outcome. Buttons, the panel dropdown and
    the rename modal are registered on the bot's router when the cog
    loads, so the same handlers serve old messages after a restart.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

import discord
from discord import app_commands
from discord.ext import commands

from src.core.logger import logger
from src.core.config import get_config
from src.core.constants import TICKET_LOG_VIEW_LIMIT
from src.services.tickets import (
    TicketComponentHandlers,
    TicketPanelView,
    TicketRenameModal,
    TicketService,
    build_logs_list_embed,
    build_panel_embed,
    failure_title,
    is_ticket_staff,
)
from src.services.tickets.buttons import NO_PERMISSION
from src.services.tickets.workflow import NOT_A_TICKET, TransitionResult
from src.utils.interaction import safe_respond
from src.utils.responses import error, success, info

if TYPE_CHECKING:
    from src.bot import HarborBot


NOT_SET_UP_TITLE = "Ticket System Not Set Up"
NOT_SET_UP_HINT = "Please run `/ticket-setup` first to configure the ticket system."

TICKET_TYPE_CHOICES = [
    app_commands.Choice(name="General Support", value="General Support"),
    app_commands.Choice(name="Report Issue", value="Report Issue"),
    app_commands.Choice(name="Feature Request", value="Feature Request"),
]


class TicketsCog(commands.Cog):
    """Ticket lifecycle and ticket system configuration."""

    def __init__(self, bot: "HarborBot") -> None:
        self.bot = bot
        self.config = get_config()
        self.service = TicketService(bot)

        TicketComponentHandlers(self.service).register(bot.ctx.router)

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        """Ticket commands only make sense inside a server."""
        return interaction.guild is not None

    @property
    def db(self):
        return self.bot.ctx.db

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _reply(
        self,
        interaction: discord.Interaction,
        result: TransitionResult,
        ok_title: str,
    ) -> None:
        if result.ok:
            await safe_respond(interaction, embed=success(ok_title, result.message))
        else:
            await safe_respond(interaction, embed=error(failure_title(result.message), result.message))

    async def _require_settings(self, interaction: discord.Interaction):
        settings = self.service.get_settings(interaction.guild_id)
        if settings is None:
            await safe_respond(interaction, embed=error(NOT_SET_UP_TITLE, NOT_SET_UP_HINT))
        return settings

    # =========================================================================
    # Lifecycle Commands
    # =========================================================================

    @app_commands.command(name="ticket-open", description="Open a new ticket")
    @app_commands.describe(reason="Reason for opening a ticket", type="Type of ticket")
    @app_commands.choices(type=TICKET_TYPE_CHOICES)
    async def ticket_open(
        self,
        interaction: discord.Interaction,
        reason: Optional[str] = None,
        type: Optional[app_commands.Choice[str]] = None,
    ) -> None:
        await interaction.response.defer(ephemeral=True)

        result, channel = await self.service.open_ticket(
            interaction.guild,
            interaction.user,
            type.value if type else None,
            reason,
        )
        if not result.ok:
            await safe_respond(interaction, embed=error(failure_title(result.message), result.message))
            return

        await safe_respond(
            interaction,
            embed=success("Ticket Created", f"Your ticket has been created: {channel.mention}"),
        )

    @app_commands.command(name="ticket-claim", description="Claim a ticket")
    async def ticket_claim(self, interaction: discord.Interaction) -> None:
        settings = self.service.get_settings(interaction.guild_id)
        if not is_ticket_staff(interaction.user, settings):
            await safe_respond(interaction, embed=error("Permission Denied", NO_PERMISSION))
            return

        await interaction.response.defer(ephemeral=True)
        result = await self.service.claim(interaction.channel, interaction.user)
        await self._reply(interaction, result, "Ticket Claimed")

    @app_commands.command(name="ticket-close", description="Close a ticket")
    @app_commands.describe(reason="Reason for closing the ticket")
    async def ticket_close(self, interaction: discord.Interaction, reason: Optional[str] = None) -> None:
        await interaction.response.defer()
        result = await self.service.close(interaction.channel, interaction.user, reason)
        if result.ok:
            await safe_respond(
                interaction,
                embed=success("Ticket Closed", result.message),
                ephemeral=False,
            )
        else:
            await self._reply(interaction, result, "Ticket Closed")

    @app_commands.command(name="ticket-add", description="Add a user to a ticket")
    @app_commands.describe(user="The user to add to the ticket")
    async def ticket_add(self, interaction: discord.Interaction, user: discord.Member) -> None:
        await interaction.response.defer(ephemeral=True)
        result = await self.service.add_user(interaction.channel, user, interaction.user)
        await self._reply(interaction, result, "User Added")

    @app_commands.command(name="ticket-remove", description="Remove a user from a ticket")
    @app_commands.describe(user="The user to remove from the ticket")
    async def ticket_remove(self, interaction: discord.Interaction, user: discord.Member) -> None:
        await interaction.response.defer(ephemeral=True)
        result = await self.service.remove_user(interaction.channel, user, interaction.user)
        await self._reply(interaction, result, "User Removed")

    @app_commands.command(name="ticket-rename", description="Rename a ticket channel")
    @app_commands.describe(name="New name for the ticket (without ticket- prefix)")
    async def ticket_rename(self, interaction: discord.Interaction, name: Optional[str] = None) -> None:
        if self.db.get_ticket(interaction.channel_id) is None:
            await safe_respond(interaction, embed=error("Not a Ticket", NOT_A_TICKET))
            return

        if not name:
            await interaction.response.send_modal(TicketRenameModal())
            return

        await interaction.response.defer(ephemeral=True)
        result = await self.service.rename(interaction.channel, name, interaction.user)
        await self._reply(interaction, result, "Ticket Renamed")

    @app_commands.command(name="ticket-transcript", description="Get a transcript of this ticket")
    async def ticket_transcript(self, interaction: discord.Interaction) -> None:
        file = self.service.transcript_file(interaction.channel_id)
        if file is None:
            await safe_respond(interaction, embed=error("Not a Ticket", NOT_A_TICKET))
            return

        logger.tree("Ticket Transcript Saved", [
            ("Channel", str(interaction.channel_id)),
            ("By", f"{interaction.user} ({interaction.user.id})"),
        ], emoji="📝")

        await safe_respond(
            interaction,
            embed=info("Transcript", "Here is the transcript for this ticket."),
            file=file,
        )

    # =========================================================================
    # Configuration Commands
    # =========================================================================

    @app_commands.command(name="ticket-setup", description="Setup the ticket system")
    @app_commands.describe(
        logs="Channel where ticket logs will be sent",
        category="Category where tickets will be created",
        staff_role="Role that can access tickets",
    )
    @app_commands.rename(staff_role="staff-role")
    @app_commands.default_permissions(administrator=True)
    async def ticket_setup(
        self,
        interaction: discord.Interaction,
        logs: Optional[discord.TextChannel] = None,
        category: Optional[Union[discord.CategoryChannel, discord.TextChannel, discord.VoiceChannel]] = None,
        staff_role: Optional[discord.Role] = None,
    ) -> None:
        await interaction.response.defer(ephemeral=True)

        if category is not None and not isinstance(category, discord.CategoryChannel):
            await safe_respond(interaction, embed=error(
                "Invalid Category",
                "The channel you selected is not a category. Please select a valid category.",
            ))
            return

        fields = {}
        if logs is not None:
            fields["logs_channel"] = str(logs.id)
        if category is not None:
            fields["category"] = str(category.id)
        if staff_role is not None:
            fields["staff_roles"] = [str(staff_role.id)]

        self.db.upsert_ticket_settings(interaction.guild_id, fields)

        logger.tree("Ticket System Setup", [
            ("Guild", f"{interaction.guild.name} ({interaction.guild_id})"),
            ("By", f"{interaction.user} ({interaction.user.id})"),
            ("Logs", logs.name if logs else "-"),
            ("Category", category.name if category else "-"),
            ("Staff Role", staff_role.name if staff_role else "-"),
        ], emoji="⚙️")

        embed = success(
            "Ticket System Setup",
            "The ticket system has been set up successfully. Use `/ticket-panel` to create a ticket creation panel.",
        )
        if logs is not None:
            embed.add_field(name="Logs Channel", value=logs.mention, inline=True)
        if category is not None:
            embed.add_field(name="Tickets Category", value=category.name, inline=True)
        if staff_role is not None:
            embed.add_field(name="Staff Role", value=staff_role.mention, inline=True)
        await safe_respond(interaction, embed=embed)

    @app_commands.command(name="ticket-panel", description="Create a ticket panel for users to open tickets")
    @app_commands.describe(
        channel="Channel to send the ticket panel to",
        title="Title for the ticket panel",
        description="Description for the ticket panel",
    )
    @app_commands.default_permissions(manage_channels=True)
    async def ticket_panel(
        self,
        interaction: discord.Interaction,
        channel: discord.TextChannel,
        title: Optional[str] = None,
        description: Optional[str] = None,
    ) -> None:
        await interaction.response.defer(ephemeral=True)

        settings = await self._require_settings(interaction)
        if settings is None:
            return

        embed = build_panel_embed(
            settings,
            title or "Support Tickets",
            description or "To create a ticket, select the appropriate option below or click the button.",
        )
        try:
            message = await channel.send(
                embed=embed,
                view=TicketPanelView(settings.get("ticket_types") or []),
            )
        except discord.HTTPException as e:
            await safe_respond(interaction, embed=error("Failed to Create Panel", f"Error: {e.text or e}"))
            return

        self.db.set_panel_message(interaction.guild_id, channel.id, message.id)

        logger.tree("Ticket Panel Created", [
            ("Guild", f"{interaction.guild.name} ({interaction.guild_id})"),
            ("Channel", f"#{channel.name}"),
            ("Message", str(message.id)),
        ], emoji="🎫")

        await safe_respond(
            interaction,
            embed=success("Ticket Panel Created", f"The ticket panel has been created in {channel.mention}."),
        )

    ticket_log = app_commands.Group(
        name="ticket-log",
        description="Set or view the ticket log channel",
        default_permissions=discord.Permissions(administrator=True),
        guild_only=True,
    )

    @ticket_log.command(name="set", description="Set the channel for ticket logs")
    @app_commands.describe(channel="The channel where ticket logs will be sent")
    async def ticket_log_set(self, interaction: discord.Interaction, channel: discord.TextChannel) -> None:
        await interaction.response.defer(ephemeral=True)
        if await self._require_settings(interaction) is None:
            return

        self.db.update_ticket_settings(interaction.guild_id, {"logs_channel": str(channel.id)})

        logger.tree("Ticket Logs Channel Set", [
            ("Guild", str(interaction.guild_id)),
            ("Channel", f"#{channel.name}"),
        ], emoji="📋")

        await safe_respond(
            interaction,
            embed=success("Logs Channel Set", f"Ticket logs will now be sent to {channel.mention}."),
        )

    @ticket_log.command(name="view", description="View the current ticket log channel")
    async def ticket_log_view(self, interaction: discord.Interaction) -> None:
        await interaction.response.defer(ephemeral=True)
        settings = await self._require_settings(interaction)
        if settings is None:
            return

        logs_channel = self.service.find_logs_channel(interaction.guild, settings)
        entries = self.db.get_ticket_logs(interaction.guild_id, TICKET_LOG_VIEW_LIMIT)
        if logs_channel is None and not entries:
            await safe_respond(interaction, embed=error("No Logs Channel", "No ticket logs channel has been set."))
            return

        await safe_respond(
            interaction,
            embed=build_logs_list_embed(entries, logs_channel.mention if logs_channel else None),
        )

    @app_commands.command(name="ticket-category", description="Set the category for ticket channels")
    @app_commands.describe(category="The category where tickets will be created")
    @app_commands.default_permissions(administrator=True)
    async def ticket_category(
        self,
        interaction: discord.Interaction,
        category: Union[discord.CategoryChannel, discord.TextChannel, discord.VoiceChannel],
    ) -> None:
        await interaction.response.defer(ephemeral=True)

        if not isinstance(category, discord.CategoryChannel):
            await safe_respond(interaction, embed=error("Invalid Channel", "Please select a category channel."))
            return
        if await self._require_settings(interaction) is None:
            return

        self.db.update_ticket_category(interaction.guild_id, str(category.id))

        logger.tree("Ticket Category Updated", [
            ("Guild", str(interaction.guild_id)),
            ("Category", category.name),
        ], emoji="📁")

        await safe_respond(
            interaction,
            embed=success("Category Updated", f"Ticket category has been set to {category.name}."),
        )


__all__ = ["TicketsCog"]
