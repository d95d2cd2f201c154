"""
HarborBot - Embed Builder
=========================

Validation and conversion for user-authored embeds.

An embed payload is the stored form of an embed:

    {"title": str | None, "description": str | None, "color": "#RRGGBB",
     "footer": {"text": str} | None, "image": {"url": str} | None,
     "timestamp": ISO-8601 str}

Every key is optional. Payloads are what templates, sent-embed records
and authoring sessions hold; discord.Embed objects are only built when
something is shown or posted.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import discord

from src.core.constants import (
    EMBED_TITLE_LIMIT,
    EMBED_DESCRIPTION_LIMIT,
    EMBED_FOOTER_LIMIT,
    EMBED_IMAGE_URL_LIMIT,
)


DEFAULT_COLOR = "#5865F2"

HEX_COLOR_RE = re.compile(r"^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")
IMAGE_URL_RE = re.compile(r"^(https?://)(www\.)?([a-zA-Z0-9-]+(\.[a-zA-Z0-9-]+)+)(/[^\s]*)?$")

PRESETS: Dict[str, Dict[str, Any]] = {
    "info": {
        "title": "Information",
        "color": "#5865F2",
        "footer": {"text": "Bot Information"},
    },
    "success": {
        "title": "Success",
        "color": "#57F287",
        "footer": {"text": "Operation Successful"},
    },
    "error": {
        "title": "Error",
        "color": "#ED4245",
        "footer": {"text": "An error occurred"},
    },
    "warning": {
        "title": "Warning",
        "color": "#FEE75C",
        "footer": {"text": "Please take note"},
    },
}


class EmbedValidationError(ValueError):
    """Rejected embed input. title is shown as the error embed title."""

    def __init__(self, title: str, message: str) -> None:
        super().__init__(message)
        self.title = title
        self.message = message


# =============================================================================
# Validation
# =============================================================================

def validate_embed_input(
    title: Optional[str] = None,
    description: Optional[str] = None,
    color: Optional[str] = None,
    footer: Optional[str] = None,
    image: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Validate modal fields and build a payload.

    Raises:
        EmbedValidationError: With the user-facing title and message.
    """
    title = (title or "").strip()
    description = (description or "").strip()
    color = (color or "").strip()
    footer = (footer or "").strip()
    image = (image or "").strip()

    if not title and not description:
        raise EmbedValidationError(
            "Missing Content",
            "You must provide at least a title or description for the embed.",
        )

    if len(title) > EMBED_TITLE_LIMIT:
        raise EmbedValidationError(
            "Title Too Long", f"The title can be at most {EMBED_TITLE_LIMIT} characters.",
        )
    if len(description) > EMBED_DESCRIPTION_LIMIT:
        raise EmbedValidationError(
            "Description Too Long",
            f"The description can be at most {EMBED_DESCRIPTION_LIMIT} characters.",
        )
    if len(footer) > EMBED_FOOTER_LIMIT:
        raise EmbedValidationError(
            "Footer Too Long", f"The footer can be at most {EMBED_FOOTER_LIMIT} characters.",
        )

    if color and not HEX_COLOR_RE.match(color):
        raise EmbedValidationError(
            "Invalid Color",
            "Please provide a valid hex color code (e.g., #5865F2).",
        )

    if image and (len(image) > EMBED_IMAGE_URL_LIMIT or not IMAGE_URL_RE.match(image)):
        raise EmbedValidationError(
            "Invalid Image URL",
            "Please provide a valid image URL or leave it blank.",
        )

    return {
        "title": title or None,
        "description": description or None,
        "color": color or DEFAULT_COLOR,
        "footer": {"text": footer} if footer else None,
        "image": {"url": image} if image else None,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def get_preset(name: Optional[str]) -> Dict[str, Any]:
    """Copy of a preset payload, or {} for no/unknown preset."""
    preset = PRESETS.get(name or "")
    if preset is None:
        return {}
    return {
        "title": preset["title"],
        "color": preset["color"],
        "footer": dict(preset["footer"]),
    }


# =============================================================================
# Conversion
# =============================================================================

def parse_color(value: Optional[str]) -> discord.Colour:
    """#RGB or #RRGGBB to a Colour. Invalid values fall back to blurple."""
    if not value or not HEX_COLOR_RE.match(value):
        value = DEFAULT_COLOR
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return discord.Colour(int(digits, 16))


def embed_from_payload(data: Dict[str, Any]) -> discord.Embed:
    """Build a discord.Embed from a stored payload."""
    embed = discord.Embed(
        title=data.get("title") or None,
        description=data.get("description") or None,
        colour=parse_color(data.get("color")),
    )

    footer = data.get("footer")
    if footer and footer.get("text"):
        embed.set_footer(text=footer["text"])

    image = data.get("image")
    if image and image.get("url"):
        embed.set_image(url=image["url"])

    timestamp = _parse_timestamp(data.get("timestamp"))
    if timestamp is not None:
        embed.timestamp = timestamp

    return embed


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def payload_from_embed(embed: discord.Embed) -> Dict[str, Any]:
    """Recover a payload from a message embed the bot did not record."""
    colour = embed.colour
    return {
        "title": embed.title or None,
        "description": embed.description or None,
        "color": f"#{colour.value:06X}" if colour is not None else DEFAULT_COLOR,
        "footer": {"text": embed.footer.text} if embed.footer and embed.footer.text else None,
        "image": {"url": embed.image.url} if embed.image and embed.image.url else None,
        "timestamp": (embed.timestamp or datetime.now(timezone.utc)).isoformat(),
    }


__all__ = [
    "DEFAULT_COLOR",
    "HEX_COLOR_RE",
    "IMAGE_URL_RE",
    "PRESETS",
    "EmbedValidationError",
    "validate_embed_input",
    "get_preset",
    "parse_color",
    "embed_from_payload",
    "payload_from_embed",
]
