"""
HarborBot - Embed Component Handlers
====================================

Handlers for the embed preview buttons, channel picker, template
dropdown/buttons and the embed modals.

Registered routes:
    modal   embed_create_modal
    button  embed_send              select  embed_send_channel
    button  embed_edit              modal   embed_edit_modal_<msg>_<chan>
    button  embed_delete_<msg>_<chan>
    button  embed_template_save     modal   embed_template_save_modal
    select  embed_template_select
    button  embed_template_use_<name> / embed_template_delete_<name>
"""

from typing import List

import discord

from src.core.database import DuplicateRecordError
from src.utils.interaction import (
    get_modal_values,
    get_select_values,
    safe_respond,
    safe_edit,
)
from src.utils.responses import error, success
from src.utils.router import InteractionRouter

from .builder import EmbedValidationError, embed_from_payload, validate_embed_input
from .modals import TemplateSaveModal, create_modal
from .service import EmbedLookupError, EmbedService
from .sessions import EmbedSessionStore
from .views import ChannelPickerView, PreviewActionsView, SentEmbedView, TemplateActionsView


NO_SESSION = "No embed found. Please create one with `/embed-create` first."
TEMPLATE_GONE = "Template not found. It may have been deleted."


def payload_from_modal(interaction: discord.Interaction) -> dict:
    """
    Validate the embed form fields of a submitted modal.

    Raises:
        EmbedValidationError: On any invalid field.
    """
    values = get_modal_values(interaction)
    return validate_embed_input(
        title=values.get("embedTitle"),
        description=values.get("embedDescription"),
        color=values.get("embedColor"),
        footer=values.get("embedFooter"),
        image=values.get("embedImage"),
    )


class EmbedComponentHandlers:
    """Routes embed component interactions."""

    def __init__(self, service: EmbedService, sessions: EmbedSessionStore) -> None:
        self.service = service
        self.sessions = sessions

    def register(self, router: InteractionRouter) -> None:
        router.register("embed", "create", "modal", self.create_modal, sub="modal")
        router.register("embed", "send", "button", self.send)
        router.register("embed", "send", "select", self.send_channel, sub="channel")
        router.register("embed", "edit", "button", self.edit)
        router.register("embed", "edit", "modal", self.edit_modal, sub="modal")
        router.register("embed", "delete", "button", self.delete)
        router.register("embed", "template", "button", self.template_save, sub="save")
        router.register("embed", "template", "button", self.template_use, sub="use")
        router.register("embed", "template", "button", self.template_delete, sub="delete")
        router.register("embed", "template", "select", self.template_select, sub="select")
        router.register("embed", "template", "modal", self.template_save_modal, sub="save")

    # =========================================================================
    # Authoring
    # =========================================================================

    async def create_modal(self, interaction: discord.Interaction, args: List[str]) -> None:
        try:
            payload = payload_from_modal(interaction)
        except EmbedValidationError as e:
            await safe_respond(interaction, embed=error(e.title, e.message))
            return

        self.sessions.set(interaction.user.id, payload)
        await safe_respond(
            interaction,
            "Here's a preview of your embed:",
            embed=embed_from_payload(payload),
            view=PreviewActionsView(),
        )

    async def edit(self, interaction: discord.Interaction, args: List[str]) -> None:
        """Reopen the form prefilled with the session embed."""
        await interaction.response.send_modal(create_modal(self.sessions.get(interaction.user.id)))

    # =========================================================================
    # Sending
    # =========================================================================

    async def send(self, interaction: discord.Interaction, args: List[str]) -> None:
        if self.sessions.get(interaction.user.id) is None:
            await safe_respond(interaction, NO_SESSION)
            return
        await safe_respond(
            interaction,
            "Choose a channel to send your embed to:",
            view=ChannelPickerView(),
        )

    async def send_channel(self, interaction: discord.Interaction, args: List[str]) -> None:
        await interaction.response.defer()

        values = get_select_values(interaction)
        channel = interaction.guild.get_channel(int(values[0])) if values else None
        if not isinstance(channel, (discord.TextChannel, discord.Thread)):
            await safe_edit(interaction, content="Invalid channel selected.", view=None)
            return

        payload = self.sessions.get(interaction.user.id)
        if payload is None:
            await safe_edit(interaction, content=NO_SESSION, view=None)
            return

        if not self.service.can_send(channel):
            await safe_edit(
                interaction,
                content=None,
                embed=error("Missing Permissions", "I don't have permission to send messages in that channel."),
                view=None,
            )
            return

        message = await self.service.send(channel, payload, interaction.user)
        await safe_edit(
            interaction,
            content=None,
            embed=success("Embed Sent", f"Embed has been sent to {channel.mention}."),
            view=SentEmbedView(message.id, channel.id),
        )

    # =========================================================================
    # Sent Embeds
    # =========================================================================

    async def edit_modal(self, interaction: discord.Interaction, args: List[str]) -> None:
        await interaction.response.defer(ephemeral=True)
        if len(args) < 2:
            await safe_respond(interaction, embed=error("Embed Not Found", "This edit form is no longer valid."))
            return

        message_id, channel_id = args[0], args[1]
        channel = interaction.guild.get_channel(int(channel_id)) if channel_id.isdigit() else None
        if channel is None:
            await safe_respond(interaction, embed=error(
                "Channel Not Found", "The channel containing the message could not be found.",
            ))
            return

        try:
            payload = payload_from_modal(interaction)
            message, _ = await self.service.fetch_bot_embed(channel, message_id, "edit")
        except (EmbedValidationError, EmbedLookupError) as e:
            await safe_respond(interaction, embed=error(e.title, e.message))
            return

        await self.service.edit(message, payload, interaction.user)
        await safe_respond(interaction, embed=success("Embed Updated", "The embed has been successfully updated."))

    async def delete(self, interaction: discord.Interaction, args: List[str]) -> None:
        await interaction.response.defer(ephemeral=True)
        if not args:
            await safe_respond(interaction, embed=error("Embed Not Found", "No message was specified."))
            return

        channel_id = args[1] if len(args) > 1 else str(interaction.channel_id)
        channel = interaction.guild.get_channel(int(channel_id)) if channel_id.isdigit() else None
        if channel is None:
            await safe_respond(interaction, embed=error(
                "Channel Not Found", "The channel containing the message could not be found.",
            ))
            return

        try:
            message, _ = await self.service.fetch_bot_embed(channel, args[0], "delete")
        except EmbedLookupError as e:
            await safe_respond(interaction, embed=error(e.title, e.message))
            return

        await self.service.delete(message, interaction.user)
        await safe_respond(interaction, embed=success("Embed Deleted", "The embed has been successfully deleted."))

    # =========================================================================
    # Templates
    # =========================================================================

    async def template_save(self, interaction: discord.Interaction, args: List[str]) -> None:
        if self.sessions.get(interaction.user.id) is None:
            await safe_respond(interaction, embed=error(
                "No Embed Found", "You need to create an embed first with `/embed-create`.",
            ))
            return
        await interaction.response.send_modal(TemplateSaveModal())

    async def template_save_modal(self, interaction: discord.Interaction, args: List[str]) -> None:
        await interaction.response.defer(ephemeral=True)
        name = get_modal_values(interaction).get("templateName", "").strip()
        guild_id = interaction.guild_id

        duplicate = error(
            "Template Already Exists",
            f'A template with the name "{name}" already exists. Please choose a different name.',
        )
        if self.service.db.get_template(guild_id, name) is not None:
            await safe_respond(interaction, embed=duplicate)
            return

        payload = self.sessions.get(interaction.user.id)
        if payload is None:
            await safe_respond(interaction, embed=error(
                "No Embed Found", "You need to create an embed first with `/embed-create`.",
            ))
            return

        try:
            self.service.db.create_template(guild_id, name, payload, interaction.user.id)
        except DuplicateRecordError:
            await safe_respond(interaction, embed=duplicate)
            return

        await safe_respond(interaction, embed=success("Template Saved", f'Embed template "{name}" has been saved.'))

    async def template_select(self, interaction: discord.Interaction, args: List[str]) -> None:
        values = get_select_values(interaction)
        name = values[0] if values else ""
        template = self.service.db.get_template(interaction.guild_id, name)
        if template is None:
            await interaction.response.edit_message(content=TEMPLATE_GONE, embed=None, view=None)
            return

        await interaction.response.edit_message(
            content=f"Template: **{name}**",
            embed=embed_from_payload(template["embed_data"]),
            view=TemplateActionsView(name),
        )

    async def template_use(self, interaction: discord.Interaction, args: List[str]) -> None:
        name = "_".join(args)
        template = self.service.db.get_template(interaction.guild_id, name)
        if template is None:
            await safe_respond(interaction, TEMPLATE_GONE)
            return

        self.sessions.set(interaction.user.id, template["embed_data"])
        await safe_respond(
            interaction,
            "Template loaded! Choose a channel to send it to.",
            view=ChannelPickerView(),
        )

    async def template_delete(self, interaction: discord.Interaction, args: List[str]) -> None:
        name = "_".join(args)
        if self.service.db.delete_template(interaction.guild_id, name):
            content = f"Template **{name}** has been deleted."
        else:
            content = "Failed to delete template. It may have already been deleted."
        await interaction.response.edit_message(content=content, embed=None, view=None)


__all__ = ["EmbedComponentHandlers", "payload_from_modal", "NO_SESSION", "TEMPLATE_GONE"]
