"""
HarborBot - Ticket Component Handlers
=====================================

Handlers for ticket buttons, the panel dropdown and the rename modal.

Registered routes:
    button  ticket_claim
    button  ticket_close / ticket_close_confirm / ticket_close_cancel
    button  ticket_transcript
    button  ticket_delete
    button  ticket_open_default
    select  ticket_open_select
    modal   ticket_rename_modal
"""

from typing import List

import discord

from src.core.logger import logger
from src.utils.interaction import (
    get_modal_values,
    get_select_values,
    safe_defer,
    safe_respond,
)
from src.utils.responses import error, success, info
from src.utils.router import InteractionRouter

from .embeds import build_close_confirm_embed
from .service import TicketService, failure_title, is_ticket_staff
from .views import CloseConfirmView
from .workflow import NOT_A_TICKET, ALREADY_CLOSED


NO_PERMISSION = "You don't have permission to manage tickets."


class TicketComponentHandlers:
    """Routes ticket component interactions into TicketService."""

    def __init__(self, service: TicketService) -> None:
        self.service = service

    def register(self, router: InteractionRouter) -> None:
        router.register("ticket", "claim", "button", self.claim)
        router.register("ticket", "close", "button", self.close)
        router.register("ticket", "close", "button", self.close_confirm, sub="confirm")
        router.register("ticket", "close", "button", self.close_cancel, sub="cancel")
        router.register("ticket", "transcript", "button", self.transcript)
        router.register("ticket", "delete", "button", self.delete)
        router.register("ticket", "open", "button", self.open_default, sub="default")
        router.register("ticket", "open", "select", self.open_select, sub="select")
        router.register("ticket", "rename", "modal", self.rename_modal, sub="modal")

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _reply_result(self, interaction: discord.Interaction, result, ok_title: str) -> None:
        if result.ok:
            await safe_respond(interaction, embed=success(ok_title, result.message))
        else:
            await safe_respond(interaction, embed=error(failure_title(result.message), result.message))

    async def _require_staff(self, interaction: discord.Interaction) -> bool:
        settings = self.service.get_settings(interaction.guild_id) if interaction.guild_id else None
        if is_ticket_staff(interaction.user, settings):
            return True
        await safe_respond(interaction, embed=error("Permission Denied", NO_PERMISSION))
        return False

    # =========================================================================
    # Claim / Close
    # =========================================================================

    async def claim(self, interaction: discord.Interaction, args: List[str]) -> None:
        if not await self._require_staff(interaction):
            return
        result = await self.service.claim(interaction.channel, interaction.user)
        await self._reply_result(interaction, result, "Ticket Claimed")

    async def close(self, interaction: discord.Interaction, args: List[str]) -> None:
        ticket = self.service.db.get_ticket(interaction.channel_id)
        if ticket is None:
            await safe_respond(interaction, embed=error("Not a Ticket", NOT_A_TICKET))
            return
        if ticket["status"] == "closed":
            await safe_respond(interaction, embed=error("Ticket Closed", ALREADY_CLOSED))
            return

        await safe_respond(
            interaction,
            embed=build_close_confirm_embed(),
            view=CloseConfirmView(),
        )

    async def close_confirm(self, interaction: discord.Interaction, args: List[str]) -> None:
        await interaction.response.edit_message(content="Closing ticket...", embed=None, view=None)
        result = await self.service.close(interaction.channel, interaction.user, "Closed via button")
        await self._reply_result(interaction, result, "Ticket Closed")

    async def close_cancel(self, interaction: discord.Interaction, args: List[str]) -> None:
        await interaction.response.edit_message(content="Ticket closure cancelled.", embed=None, view=None)

    # =========================================================================
    # Transcript / Delete
    # =========================================================================

    async def transcript(self, interaction: discord.Interaction, args: List[str]) -> None:
        file = self.service.transcript_file(interaction.channel_id)
        if file is None:
            await safe_respond(interaction, embed=error("Not a Ticket", NOT_A_TICKET))
            return

        logger.tree("Ticket Transcript Saved", [
            ("Channel", str(interaction.channel_id)),
            ("By", f"{interaction.user} ({interaction.user.id})"),
        ], emoji="📝")

        await safe_respond(
            interaction,
            embed=info("Transcript", "Here is the transcript for this ticket."),
            file=file,
        )

    async def delete(self, interaction: discord.Interaction, args: List[str]) -> None:
        if not await self._require_staff(interaction):
            return
        if self.service.db.get_ticket(interaction.channel_id) is None:
            await safe_respond(interaction, embed=error("Not a Ticket", NOT_A_TICKET))
            return

        await safe_respond(interaction, "Deleting ticket...")
        await self.service.delete(interaction.channel, interaction.user)

    # =========================================================================
    # Panel
    # =========================================================================

    async def _open(self, interaction: discord.Interaction, ticket_type) -> None:
        await safe_defer(interaction, ephemeral=True, thinking=True)
        result, channel = await self.service.open_ticket(
            interaction.guild, interaction.user, ticket_type,
        )
        if not result.ok:
            await safe_respond(interaction, embed=error(failure_title(result.message), result.message))
            return
        await safe_respond(
            interaction,
            embed=success("Ticket Created", f"Your ticket has been created: {channel.mention}"),
        )

    async def open_default(self, interaction: discord.Interaction, args: List[str]) -> None:
        # None picks the guild's first configured ticket type
        await self._open(interaction, None)

    async def open_select(self, interaction: discord.Interaction, args: List[str]) -> None:
        values = get_select_values(interaction)
        await self._open(interaction, values[0] if values else None)

    # =========================================================================
    # Rename Modal
    # =========================================================================

    async def rename_modal(self, interaction: discord.Interaction, args: List[str]) -> None:
        name = get_modal_values(interaction).get("ticketName", "")
        result = await self.service.rename(interaction.channel, name, interaction.user)
        await self._reply_result(interaction, result, "Ticket Renamed")


__all__ = ["TicketComponentHandlers", "NO_PERMISSION"]
