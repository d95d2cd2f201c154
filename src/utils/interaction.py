"""
HarborBot - Interaction Utilities
=================================

Shared helpers for replying to interactions and finding log channels.

safe_respond() picks response.send_message() or followup.send() based on
whether the interaction was already answered, so handlers never need to
track that themselves.
"""

from typing import Any, Iterable, Optional, Union

import discord

from src.core.config import get_config
from src.core.constants import GENERIC_ERROR_MESSAGE
from src.core.logger import logger


async def safe_respond(
    interaction: discord.Interaction,
    content: Optional[str] = None,
    *,
    embed: Optional[discord.Embed] = None,
    embeds: Optional[list[discord.Embed]] = None,
    view: Optional[discord.ui.View] = None,
    ephemeral: bool = True,
    allowed_mentions: Optional[discord.AllowedMentions] = None,
    file: Optional[discord.File] = None,
) -> Optional[Union[discord.InteractionMessage, discord.WebhookMessage]]:
    """
    Respond to an interaction whether or not it was already acknowledged.

    Args:
        interaction: The Discord interaction to respond to.
        content: The message content.
        embed: A single embed to send.
        embeds: A list of embeds to send.
        view: A view to attach.
        ephemeral: Whether the response is ephemeral (default True).
        allowed_mentions: Allowed mentions configuration.
        file: A file to attach.

    Returns:
        The sent message if successful, None if Discord rejected it.
    """
    kwargs: dict[str, Any] = {"ephemeral": ephemeral}

    if content is not None:
        kwargs["content"] = content
    if embed is not None:
        kwargs["embed"] = embed
    if embeds is not None:
        kwargs["embeds"] = embeds
    if view is not None:
        kwargs["view"] = view
    if allowed_mentions is not None:
        kwargs["allowed_mentions"] = allowed_mentions
    if file is not None:
        kwargs["file"] = file

    try:
        response_done = interaction.response.is_done()
    except discord.HTTPException:
        response_done = True

    try:
        if not response_done:
            await interaction.response.send_message(**kwargs)
            return None
        return await interaction.followup.send(**kwargs)

    except discord.HTTPException as e:
        # Expired interactions land here; nothing left to answer
        logger.debug("safe_respond failed", [
            ("Status", str(e.status)),
            ("Error", str(e)[:50]),
        ])
        return None


async def safe_defer(
    interaction: discord.Interaction,
    *,
    ephemeral: bool = True,
    thinking: bool = False,
) -> bool:
    """
    Defer an interaction response.

    Returns:
        True if deferred, False if already responded or Discord refused.
    """
    try:
        if interaction.response.is_done():
            return False
        await interaction.response.defer(ephemeral=ephemeral, thinking=thinking)
        return True
    except discord.HTTPException:
        return False


async def safe_edit(
    interaction: discord.Interaction,
    *,
    content: Optional[str] = discord.utils.MISSING,
    embed: Optional[discord.Embed] = discord.utils.MISSING,
    view: Optional[discord.ui.View] = discord.utils.MISSING,
) -> bool:
    """
    Edit the original interaction response.

    Returns:
        True if edited successfully, False if failed.
    """
    kwargs: dict[str, Any] = {}

    if content is not discord.utils.MISSING:
        kwargs["content"] = content
    if embed is not discord.utils.MISSING:
        kwargs["embed"] = embed
    if view is not discord.utils.MISSING:
        kwargs["view"] = view

    try:
        await interaction.edit_original_response(**kwargs)
        return True
    except discord.HTTPException as e:
        logger.debug("safe_edit failed", [
            ("Status", str(e.status)),
            ("Error", str(e)[:50]),
        ])
        return False


async def send_generic_error(interaction: discord.Interaction) -> None:
    """Tell the user something went wrong without leaking details."""
    await safe_respond(interaction, GENERIC_ERROR_MESSAGE, ephemeral=True)


def get_modal_values(interaction: discord.Interaction) -> dict[str, str]:
    """Map text input custom_id -> submitted value from a modal payload."""
    values: dict[str, str] = {}
    for row in (interaction.data or {}).get("components", []):
        children = row.get("components") or ([row["component"]] if "component" in row else [])
        for child in children:
            if "custom_id" in child:
                values[child["custom_id"]] = child.get("value") or ""
    return values


def get_select_values(interaction: discord.Interaction) -> list[str]:
    return list((interaction.data or {}).get("values", []))


# =============================================================================
# Channel Lookup
# =============================================================================

def find_text_channel(
    guild: Optional[discord.Guild],
    names: Iterable[str],
) -> Optional[discord.TextChannel]:
    """First text channel whose name is in names, checked in order."""
    if guild is None:
        return None
    for name in names:
        channel = discord.utils.get(guild.text_channels, name=name)
        if channel is not None:
            return channel
    return None


def find_log_channel(guild: Optional[discord.Guild]) -> Optional[discord.TextChannel]:
    """The guild's moderation log channel, by the configured names in order."""
    return find_text_channel(guild, get_config().mod_log_channel_names)


async def send_to_channel(
    channel: Optional[discord.abc.Messageable],
    **kwargs: Any,
) -> Optional[discord.Message]:
    """Send to a log channel, logging instead of raising on Discord errors."""
    if channel is None:
        return None
    try:
        return await channel.send(**kwargs)
    except discord.HTTPException as e:
        logger.warning("Log Channel Send Failed", [
            ("Channel", str(getattr(channel, "name", channel))),
            ("Error", str(e)[:100]),
        ])
        return None


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "safe_respond",
    "safe_defer",
    "safe_edit",
    "send_generic_error",
    "get_modal_values",
    "get_select_values",
    "find_text_channel",
    "find_log_channel",
    "send_to_channel",
]
