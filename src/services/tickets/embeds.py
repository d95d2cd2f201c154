"""
HarborBot - Ticket System Embeds
================================

Embed builder functions for the ticket system.
"""

from datetime import datetime, timezone
from typing import List, Optional

import discord

from src.core.config import EmbedColors
from src.core.database import TicketLogRecord, TicketRecord, TicketSettingsRecord


# =============================================================================
# Ticket Channel Embeds
# =============================================================================

def build_welcome_embed(
    ticket: TicketRecord,
    user: discord.abc.User,
    ticket_type: str,
    reason: str,
    welcome_message: str,
) -> discord.Embed:
    """First message in a new ticket channel."""
    embed = discord.Embed(
        title=f"{ticket_type} Ticket",
        description=welcome_message,
        color=EmbedColors.TICKET,
        timestamp=datetime.now(timezone.utc),
    )
    embed.add_field(name="Created By", value=f"<@{user.id}>", inline=True)
    embed.add_field(name="Ticket Type", value=ticket_type, inline=True)
    embed.add_field(name="Reason", value=reason[:1024], inline=False)
    embed.set_footer(text=f"Ticket ID: {ticket['id']}")
    return embed


def build_close_confirm_embed() -> discord.Embed:
    embed = discord.Embed(
        title="Confirm Ticket Closure",
        description="Are you sure you want to close this ticket?",
        color=EmbedColors.WARNING,
    )
    embed.set_footer(text="The ticket will be closed and archived.")
    return embed


def build_closed_embed(closed_by: discord.abc.User, reason: str) -> discord.Embed:
    """Posted in the channel once the ticket is closed."""
    embed = discord.Embed(
        title="Ticket Closed",
        description="This ticket has been closed.",
        color=EmbedColors.WARNING,
        timestamp=datetime.now(timezone.utc),
    )
    embed.add_field(name="Closed By", value=f"<@{closed_by.id}>", inline=True)
    embed.add_field(name="Reason", value=reason[:1024], inline=True)
    return embed


# =============================================================================
# Logs Channel Embeds
# =============================================================================

def build_created_log_embed(ticket: TicketRecord, user: discord.abc.User, ticket_type: str) -> discord.Embed:
    embed = discord.Embed(
        title="Ticket Created",
        description=f"A new ticket has been created: <#{ticket['channel_id']}>",
        color=EmbedColors.SUCCESS,
        timestamp=datetime.now(timezone.utc),
    )
    embed.add_field(name="Created By", value=f"<@{user.id}>", inline=True)
    embed.add_field(name="Ticket Type", value=ticket_type, inline=True)
    embed.add_field(name="Ticket ID", value=ticket["id"], inline=True)
    return embed


def build_closed_log_embed(ticket: TicketRecord, closed_by: discord.abc.User, reason: str) -> discord.Embed:
    embed = discord.Embed(
        title="Ticket Closed",
        description=f"Ticket {ticket['id']} has been closed.",
        color=EmbedColors.TICKET_CLOSED,
        timestamp=datetime.now(timezone.utc),
    )
    embed.add_field(name="Ticket Channel", value=f"<#{ticket['channel_id']}>", inline=True)
    embed.add_field(name="Closed By", value=f"<@{closed_by.id}>", inline=True)
    embed.add_field(name="Reason", value=reason[:1024], inline=False)
    return embed


def build_event_log_embed(title: str, description: str) -> discord.Embed:
    """Short log line for claim/add/remove/rename/delete."""
    return discord.Embed(
        title=title,
        description=description,
        color=EmbedColors.INFO,
        timestamp=datetime.now(timezone.utc),
    )


# =============================================================================
# Panel Embed
# =============================================================================

def build_panel_embed(
    settings: TicketSettingsRecord,
    title: str = "Support Tickets",
    description: str = "To create a ticket, select the appropriate option below or click the button.",
) -> discord.Embed:
    embed = discord.Embed(
        title=title,
        description=description,
        color=EmbedColors.PRIMARY,
        timestamp=datetime.now(timezone.utc),
    )
    types = settings.get("ticket_types") or []
    embed.add_field(
        name="Available Support",
        value="\n".join(f"{t['emoji']} **{t['name']}**" for t in types) or "General Support",
        inline=False,
    )
    embed.set_footer(text="Click the button below or use the dropdown to open a ticket")
    return embed


def build_logs_list_embed(entries: List[TicketLogRecord], channel_mention: Optional[str]) -> discord.Embed:
    """Recent ticket log entries for /ticket-log view."""
    embed = discord.Embed(
        title="Ticket Logs Channel",
        description=(
            f"The current ticket logs channel is {channel_mention}."
            if channel_mention else "No ticket logs channel has been set."
        ),
        color=EmbedColors.INFO,
    )
    if entries:
        lines = [
            f"<t:{int(e['created_at'])}:R> `{e['action']}` "
            f"{e.get('ticket_id') or '-'} by <@{e['user_id']}>"
            for e in entries
        ]
        embed.add_field(name="Recent Activity", value="\n".join(lines)[:1024], inline=False)
    return embed


__all__ = [
    "build_welcome_embed",
    "build_close_confirm_embed",
    "build_closed_embed",
    "build_created_log_embed",
    "build_closed_log_embed",
    "build_event_log_embed",
    "build_panel_embed",
    "build_logs_list_embed",
]
