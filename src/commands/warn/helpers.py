"""
HarborBot - Warn Helpers
========================

Formatting for warning DMs and listings.
"""

from typing import List

import discord

from src.core.constants import EMBED_DESCRIPTION_LIMIT
from src.core.database import WarningRecord
from src.utils.responses import create_embed


WARN_DM_FOOTER = "Please follow the server rules to avoid further action."

COMMON_REASONS = [
    "Spamming",
    "Harassment",
    "Inappropriate content",
    "Off-topic in channel",
    "Advertising",
    "Disrespecting staff",
]


def build_warn_dm(guild: discord.Guild, reason: str, count: int) -> discord.Embed:
    return create_embed(
        "warning",
        f"You have been warned in {guild.name}",
        f"**Reason:** {reason}\n**Warning Count:** {count}",
        footer=WARN_DM_FOOTER,
    )


def format_warning_line(warning: WarningRecord) -> str:
    date = f"<t:{int(warning['created_at'])}:f>"
    return (
        f"**ID:** {warning['number']} - **Reason:** {warning['reason']}\n"
        f"**Date:** {date} - **Moderator:** <@{warning['issued_by']}>"
    )


def format_warning_list(warnings: List[WarningRecord]) -> str:
    """
    Body for /warn list.

    Lines that would push the embed past Discord's description limit are
    replaced by a count of the omitted warnings.
    """
    count = len(warnings)
    header = f"This user has {count} warning{'' if count == 1 else 's'}:\n\n"

    body = header
    for shown, warning in enumerate(warnings):
        line = format_warning_line(warning)
        separator = "\n\n" if shown else ""
        remaining = count - shown
        footer = f"\n\n...and {remaining} more"
        if len(body) + len(separator) + len(line) + len(footer) > EMBED_DESCRIPTION_LIMIT:
            return body + footer
        body += separator + line
    return body


__all__ = [
    "WARN_DM_FOOTER",
    "COMMON_REASONS",
    "build_warn_dm",
    "format_warning_line",
    "format_warning_list",
]
