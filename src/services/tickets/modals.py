"""
HarborBot - Ticket Modals
=========================

Modal forms for the ticket system. Submissions are handled by the
"ticket_rename_modal" route.
"""

import discord

from src.core.constants import TICKET_NAME_MAX_LENGTH


class TicketRenameModal(discord.ui.Modal, title="Rename Ticket"):
    """Asks for the new ticket name when /ticket-rename has no argument."""

    def __init__(self) -> None:
        super().__init__(custom_id="ticket_rename_modal")
        self.ticket_name = discord.ui.TextInput(
            label="New Ticket Name",
            custom_id="ticketName",
            placeholder="Enter a new name for this ticket",
            style=discord.TextStyle.short,
            required=True,
            max_length=TICKET_NAME_MAX_LENGTH,
        )
        self.add_item(self.ticket_name)


__all__ = ["TicketRenameModal"]
