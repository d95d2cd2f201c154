"""
HarborBot - Embed Modals
========================

Modal forms for embed authoring. Submissions are handled by routes:

    embed_create_modal              -> EmbedComponentHandlers.create_modal
    embed_edit_modal_<msg>_<chan>   -> EmbedComponentHandlers.edit_modal
    embed_template_save_modal       -> EmbedComponentHandlers.template_save_modal
"""

from typing import Any, Dict, Optional

import discord

from src.core.constants import (
    EMBED_TITLE_LIMIT,
    EMBED_DESCRIPTION_LIMIT,
    EMBED_FOOTER_LIMIT,
    EMBED_IMAGE_URL_LIMIT,
    TEMPLATE_NAME_MAX_LENGTH,
)

from .builder import DEFAULT_COLOR


class EmbedFormModal(discord.ui.Modal):
    """Title / description / colour / footer / image form."""

    def __init__(
        self,
        custom_id: str,
        title: str = "Create Embed",
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(title=title, custom_id=custom_id)
        data = data or {}
        footer = data.get("footer") or {}
        image = data.get("image") or {}

        self.embed_title = discord.ui.TextInput(
            label="Embed Title",
            custom_id="embedTitle",
            placeholder="Enter a title for your embed",
            default=data.get("title") or None,
            required=False,
            max_length=EMBED_TITLE_LIMIT,
        )
        self.embed_description = discord.ui.TextInput(
            label="Embed Description",
            custom_id="embedDescription",
            style=discord.TextStyle.paragraph,
            placeholder="Enter a description for your embed",
            default=data.get("description") or None,
            required=False,
            max_length=EMBED_DESCRIPTION_LIMIT,
        )
        self.embed_color = discord.ui.TextInput(
            label="Embed Color (Hex code e.g. #5865F2)",
            custom_id="embedColor",
            placeholder=DEFAULT_COLOR,
            default=data.get("color") or DEFAULT_COLOR,
            required=False,
            max_length=7,
        )
        self.embed_footer = discord.ui.TextInput(
            label="Embed Footer",
            custom_id="embedFooter",
            placeholder="Enter a footer for your embed",
            default=footer.get("text") or None,
            required=False,
            max_length=EMBED_FOOTER_LIMIT,
        )
        self.embed_image = discord.ui.TextInput(
            label="Embed Image URL (optional)",
            custom_id="embedImage",
            placeholder="Enter an image URL for your embed",
            default=image.get("url") or None,
            required=False,
            max_length=EMBED_IMAGE_URL_LIMIT,
        )

        for item in (
            self.embed_title,
            self.embed_description,
            self.embed_color,
            self.embed_footer,
            self.embed_image,
        ):
            self.add_item(item)


def create_modal(data: Optional[Dict[str, Any]] = None) -> EmbedFormModal:
    return EmbedFormModal("embed_create_modal", "Create Embed", data)


def edit_modal(message_id: int, channel_id: int, data: Dict[str, Any]) -> EmbedFormModal:
    return EmbedFormModal(f"embed_edit_modal_{message_id}_{channel_id}", "Edit Embed", data)


class TemplateSaveModal(discord.ui.Modal, title="Save Embed Template"):
    def __init__(self) -> None:
        super().__init__(custom_id="embed_template_save_modal")
        self.template_name = discord.ui.TextInput(
            label="Template Name",
            custom_id="templateName",
            placeholder="Enter a name for this template",
            required=True,
            max_length=TEMPLATE_NAME_MAX_LENGTH,
        )
        self.add_item(self.template_name)


__all__ = ["EmbedFormModal", "create_modal", "edit_modal", "TemplateSaveModal"]
