"""
HarborBot - Embed Views
=======================

Component layouts for embed previews. Clicks are routed by custom_id.
"""

from typing import List

import discord

from src.core.constants import MAX_SELECT_OPTIONS
from src.core.database import EmbedTemplateRecord


class PreviewActionsView(discord.ui.View):
    """Send / Save as Template / Edit under a preview."""

    def __init__(self) -> None:
        super().__init__(timeout=None)
        self.add_item(discord.ui.Button(
            label="Send Embed", style=discord.ButtonStyle.primary, custom_id="embed_send",
        ))
        self.add_item(discord.ui.Button(
            label="Save as Template", style=discord.ButtonStyle.success, custom_id="embed_template_save",
        ))
        self.add_item(discord.ui.Button(
            label="Edit", style=discord.ButtonStyle.secondary, custom_id="embed_edit",
        ))


class ChannelPickerView(discord.ui.View):
    def __init__(self) -> None:
        super().__init__(timeout=None)
        self.add_item(discord.ui.ChannelSelect(
            custom_id="embed_send_channel",
            placeholder="Select a channel to send the embed to",
            channel_types=[discord.ChannelType.text, discord.ChannelType.news],
        ))


class TemplateListView(discord.ui.View):
    """Dropdown over a guild's templates."""

    def __init__(self, templates: List[EmbedTemplateRecord]) -> None:
        super().__init__(timeout=None)
        self.add_item(discord.ui.Select(
            custom_id="embed_template_select",
            placeholder="Select a template to view or manage",
            options=[
                discord.SelectOption(
                    label=t["name"][:100],
                    value=t["name"][:100],
                    description=f"Created by {t['created_by']}"[:100],
                )
                for t in templates[:MAX_SELECT_OPTIONS]
            ],
        ))


class TemplateActionsView(discord.ui.View):
    """Use / Delete for one template. The name rides in the custom_id."""

    def __init__(self, name: str) -> None:
        super().__init__(timeout=None)
        self.add_item(discord.ui.Button(
            label="Use Template",
            style=discord.ButtonStyle.primary,
            custom_id=f"embed_template_use_{name}"[:100],
        ))
        self.add_item(discord.ui.Button(
            label="Delete Template",
            style=discord.ButtonStyle.danger,
            custom_id=f"embed_template_delete_{name}"[:100],
        ))


class SentEmbedView(discord.ui.View):
    """Delete button for an embed that was just posted."""

    def __init__(self, message_id: int, channel_id: int) -> None:
        super().__init__(timeout=None)
        self.add_item(discord.ui.Button(
            label="Delete Embed",
            emoji="🗑️",
            style=discord.ButtonStyle.danger,
            custom_id=f"embed_delete_{message_id}_{channel_id}",
        ))


__all__ = [
    "PreviewActionsView",
    "ChannelPickerView",
    "TemplateListView",
    "TemplateActionsView",
    "SentEmbedView",
]
