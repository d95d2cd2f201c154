"""
HarborBot - Response Formatter
==============================

Standard embeds for command replies.

Every reply embed goes through create_embed() so colours and timestamps
stay consistent: success is green, error red, warning yellow, info and
primary blurple.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Tuple, Union

import discord

from src.core.config import EmbedColors

Field = Union[Tuple[str, str], Tuple[str, str, bool], Dict[str, Any]]

COLORS = {
    "success": EmbedColors.SUCCESS,
    "error": EmbedColors.ERROR,
    "warning": EmbedColors.WARNING,
    "info": EmbedColors.INFO,
    "primary": EmbedColors.PRIMARY,
}


def create_embed(
    kind: str,
    title: Optional[str],
    description: Optional[str],
    fields: Optional[Iterable[Field]] = None,
    footer: Optional[str] = None,
    thumbnail: Optional[str] = None,
    image: Optional[str] = None,
    author: Optional[Dict[str, str]] = None,
) -> discord.Embed:
    """
    Build a reply embed.

    Args:
        kind: success, error, warning, info or primary. Unknown kinds use primary.
        title: Embed title.
        description: Embed body.
        fields: (name, value), (name, value, inline) or {"name", "value", "inline"} items.
        footer: Footer text.
        thumbnail: Thumbnail URL.
        image: Image URL.
        author: {"name", "icon_url"?, "url"?}.
    """
    embed = discord.Embed(
        title=title,
        description=description,
        color=COLORS.get(kind, EmbedColors.PRIMARY),
        timestamp=datetime.now(timezone.utc),
    )

    for field in fields or ():
        if isinstance(field, dict):
            embed.add_field(
                name=field["name"],
                value=field["value"],
                inline=field.get("inline", False),
            )
        else:
            name, value, *rest = field
            embed.add_field(name=name, value=value, inline=rest[0] if rest else False)

    if footer:
        embed.set_footer(text=footer)
    if thumbnail:
        embed.set_thumbnail(url=thumbnail)
    if image:
        embed.set_image(url=image)
    if author:
        embed.set_author(**author)

    return embed


def success(title: str, description: Optional[str] = None, **options: Any) -> discord.Embed:
    return create_embed("success", title, description, **options)


def error(title: str, description: Optional[str] = None, **options: Any) -> discord.Embed:
    return create_embed("error", title, description, **options)


def info(title: str, description: Optional[str] = None, **options: Any) -> discord.Embed:
    return create_embed("info", title, description, **options)


def warning(title: str, description: Optional[str] = None, **options: Any) -> discord.Embed:
    return create_embed("warning", title, description, **options)


__all__ = ["COLORS", "create_embed", "success", "error", "info", "warning"]
