"""
HarborBot - Embeds Cog
======================

Slash commands for the embed builder.

DESIGN:
    /embed-create opens the form; everything after that (preview,
    sending, saving as a template) continues through component routes
    handled by EmbedComponentHandlers. The commands here are the entry
    points plus the direct paths: sending a template, editing or
    deleting a message by ID, and listing templates.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

import discord
from discord import app_commands
from discord.ext import commands

from src.core.logger import logger
from src.core.config import get_config
from src.services.embeds import (
    EmbedComponentHandlers,
    EmbedLookupError,
    EmbedService,
    TemplateListView,
    create_modal,
    edit_modal,
    get_preset,
)
from src.utils.interaction import safe_respond
from src.utils.responses import error, info, success

if TYPE_CHECKING:
    from src.bot import HarborBot


PRESET_CHOICES = [
    app_commands.Choice(name="Info (Blue)", value="info"),
    app_commands.Choice(name="Success (Green)", value="success"),
    app_commands.Choice(name="Error (Red)", value="error"),
    app_commands.Choice(name="Warning (Yellow)", value="warning"),
]


def _created_on(timestamp: Optional[float]) -> str:
    if not timestamp:
        return "unknown date"
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%m/%d/%Y")


class EmbedsCog(commands.Cog):
    """Create, send, edit and template custom embeds."""

    def __init__(self, bot: "HarborBot") -> None:
        self.bot = bot
        self.config = get_config()
        self.service = EmbedService(bot)

        EmbedComponentHandlers(self.service, bot.ctx.embed_sessions).register(bot.ctx.router)

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        return interaction.guild is not None

    @property
    def sessions(self):
        return self.bot.ctx.embed_sessions

    # =========================================================================
    # Create
    # =========================================================================

    @app_commands.command(name="embed-create", description="Create a custom embed")
    @app_commands.describe(preset="Use a preset template")
    @app_commands.choices(preset=PRESET_CHOICES)
    @app_commands.default_permissions(manage_messages=True)
    async def embed_create(
        self,
        interaction: discord.Interaction,
        preset: Optional[app_commands.Choice[str]] = None,
    ) -> None:
        await interaction.response.send_modal(create_modal(get_preset(preset.value if preset else None)))

    # =========================================================================
    # Send
    # =========================================================================

    @app_commands.command(name="embed-send", description="Send a saved embed or previously created embed")
    @app_commands.describe(channel="Channel to send the embed to", template="Use a saved template")
    @app_commands.default_permissions(manage_messages=True)
    async def embed_send(
        self,
        interaction: discord.Interaction,
        channel: discord.abc.GuildChannel,
        template: Optional[str] = None,
    ) -> None:
        await interaction.response.defer(ephemeral=True)

        if not isinstance(channel, (discord.TextChannel, discord.Thread)):
            await safe_respond(interaction, embed=error(
                "Invalid Channel", "You can only send embeds to text channels.",
            ))
            return

        if not self.service.can_send(channel):
            await safe_respond(interaction, embed=error(
                "Missing Permissions", "I don't have permission to send messages in that channel.",
            ))
            return

        if template:
            record = self.bot.ctx.db.get_template(interaction.guild_id, template)
            if record is None:
                await safe_respond(interaction, embed=error(
                    "Template Not Found", f'Could not find a template named "{template}".',
                ))
                return
            payload = record["embed_data"]
        else:
            payload = self.sessions.get(interaction.user.id)

        if payload is None:
            await self._reply_available_templates(interaction)
            return

        try:
            await self.service.send(channel, payload, interaction.user)
        except discord.HTTPException as e:
            await safe_respond(interaction, embed=error("Failed to Send Embed", f"Error: {e.text or e}"))
            return

        await safe_respond(interaction, embed=success("Embed Sent", f"Embed has been sent to {channel.mention}."))

    async def _reply_available_templates(self, interaction: discord.Interaction) -> None:
        templates = self.bot.ctx.db.list_templates(interaction.guild_id)
        if not templates:
            await safe_respond(interaction, embed=error(
                "No Embed Available",
                "You don't have any embed to send. Create one first with `/embed-create` or create a template.",
            ))
            return

        listing = "\n".join(f"{i}. **{t['name']}**" for i, t in enumerate(templates, start=1))
        await safe_respond(interaction, embed=info(
            "Available Templates",
            "Use `/embed-send channel:#channel template:name` to send a template.\n\n" + listing,
        ))

    @embed_send.autocomplete("template")
    async def template_autocomplete(
        self,
        interaction: discord.Interaction,
        current: str,
    ) -> list[app_commands.Choice[str]]:
        current_lower = current.lower()
        return [
            app_commands.Choice(name=t["name"], value=t["name"])
            for t in self.bot.ctx.db.list_templates(interaction.guild_id)
            if current_lower in t["name"].lower()
        ][:25]

    # =========================================================================
    # Edit / Delete
    # =========================================================================

    @app_commands.command(name="embed-edit", description="Edit an existing embed message")
    @app_commands.describe(
        message_id="The ID of the message containing the embed to edit",
        channel="The channel containing the message (defaults to current channel)",
    )
    @app_commands.rename(message_id="message-id")
    @app_commands.default_permissions(manage_messages=True)
    async def embed_edit(
        self,
        interaction: discord.Interaction,
        message_id: str,
        channel: Optional[discord.abc.GuildChannel] = None,
    ) -> None:
        # A modal must be the first response, so no defer here
        channel = channel or interaction.channel
        try:
            message, payload = await self.service.fetch_bot_embed(channel, message_id, "edit")
        except EmbedLookupError as e:
            await safe_respond(interaction, embed=error(e.title, e.message))
            return

        await interaction.response.send_modal(edit_modal(message.id, channel.id, payload))

    @app_commands.command(name="embed-delete", description="Delete an embed message sent by the bot")
    @app_commands.describe(
        message_id="The ID of the message containing the embed to delete",
        channel="The channel containing the message (defaults to current channel)",
    )
    @app_commands.rename(message_id="message-id")
    @app_commands.default_permissions(manage_messages=True)
    async def embed_delete(
        self,
        interaction: discord.Interaction,
        message_id: str,
        channel: Optional[discord.abc.GuildChannel] = None,
    ) -> None:
        await interaction.response.defer(ephemeral=True)
        try:
            message, _ = await self.service.fetch_bot_embed(channel or interaction.channel, message_id, "delete")
        except EmbedLookupError as e:
            await safe_respond(interaction, embed=error(e.title, e.message))
            return

        try:
            await self.service.delete(message, interaction.user)
        except discord.HTTPException as e:
            await safe_respond(interaction, embed=error("Error", f"Failed to delete message: {e.text or e}"))
            return

        await safe_respond(interaction, embed=success("Embed Deleted", "The embed has been successfully deleted."))

    # =========================================================================
    # Templates
    # =========================================================================

    embed_template = app_commands.Group(
        name="embed-template",
        description="Manage embed templates",
        default_permissions=discord.Permissions(manage_messages=True),
        guild_only=True,
    )

    @embed_template.command(name="list", description="List available embed templates")
    async def template_list(self, interaction: discord.Interaction) -> None:
        await interaction.response.defer(ephemeral=True)
        templates = self.bot.ctx.db.list_templates(interaction.guild_id)
        if not templates:
            await safe_respond(interaction, embed=info(
                "No Templates Found",
                "You haven't created any embed templates yet. Use `/embed-template create` to create one.",
            ))
            return

        embed = info("Embed Templates", "Here are your saved embed templates:")
        for index, template in enumerate(templates[:25], start=1):
            embed.add_field(
                name=f"{index}. {template['name']}",
                value=f"Created by <@{template['created_by']}> on {_created_on(template.get('created_at'))}",
                inline=False,
            )

        logger.debug("Embed Templates Listed", [
            ("Guild", str(interaction.guild_id)),
            ("Count", str(len(templates))),
        ])

        await safe_respond(interaction, embed=embed, view=TemplateListView(templates))

    @embed_template.command(name="create", description="Create a new embed template")
    async def template_create(self, interaction: discord.Interaction) -> None:
        # Same form as /embed-create; the preview offers "Save as Template"
        await interaction.response.send_modal(create_modal())


__all__ = ["EmbedsCog"]
