"""
HarborBot - Ticket System Views
===============================

Component layouts for ticket messages.

DESIGN:
    These views carry no callbacks. Every component has a stable custom_id
    and clicks are dispatched by the InteractionRouter, so the buttons keep
    working after a restart without re-registering views.
"""

from typing import List

import discord

from src.core.constants import MAX_SELECT_OPTIONS
from src.core.database import TicketType


class TicketControlView(discord.ui.View):
    """Claim / Close buttons under the welcome embed."""

    def __init__(self) -> None:
        super().__init__(timeout=None)
        self.add_item(discord.ui.Button(
            label="Claim Ticket",
            emoji="🙋",
            style=discord.ButtonStyle.primary,
            custom_id="ticket_claim",
        ))
        self.add_item(discord.ui.Button(
            label="Close Ticket",
            emoji="🔒",
            style=discord.ButtonStyle.danger,
            custom_id="ticket_close",
        ))


class CloseConfirmView(discord.ui.View):
    def __init__(self) -> None:
        super().__init__(timeout=None)
        self.add_item(discord.ui.Button(
            label="Close Ticket",
            style=discord.ButtonStyle.danger,
            custom_id="ticket_close_confirm",
        ))
        self.add_item(discord.ui.Button(
            label="Cancel",
            style=discord.ButtonStyle.secondary,
            custom_id="ticket_close_cancel",
        ))


class ClosedTicketView(discord.ui.View):
    """Transcript / Delete buttons on the closed-ticket embed."""

    def __init__(self) -> None:
        super().__init__(timeout=None)
        self.add_item(discord.ui.Button(
            label="Save Transcript",
            emoji="📝",
            style=discord.ButtonStyle.primary,
            custom_id="ticket_transcript",
        ))
        self.add_item(discord.ui.Button(
            label="Delete Ticket",
            emoji="🗑️",
            style=discord.ButtonStyle.danger,
            custom_id="ticket_delete",
        ))


class TicketPanelView(discord.ui.View):
    """Create button plus a type dropdown for the public panel."""

    def __init__(self, ticket_types: List[TicketType]) -> None:
        super().__init__(timeout=None)
        self.add_item(discord.ui.Button(
            label="Create Ticket",
            emoji="🎫",
            style=discord.ButtonStyle.primary,
            custom_id="ticket_open_default",
            row=0,
        ))
        if ticket_types:
            self.add_item(discord.ui.Select(
                custom_id="ticket_open_select",
                placeholder="Select ticket type...",
                options=[
                    discord.SelectOption(
                        label=t["name"][:100],
                        value=t["name"][:100],
                        emoji=t.get("emoji") or None,
                        description=f"Create a {t['name']} ticket"[:100],
                    )
                    for t in ticket_types[:MAX_SELECT_OPTIONS]
                ],
                row=1,
            ))


__all__ = [
    "TicketControlView",
    "CloseConfirmView",
    "ClosedTicketView",
    "TicketPanelView",
]
