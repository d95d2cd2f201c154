"""
HarborBot - Moderation Views
============================

Confirmation view for /nuke.

The view is local to one command invocation: its buttons carry
auto-generated custom IDs and callbacks, so the component router never
sees them.
"""

from typing import Awaitable, Callable, Optional

import discord

from src.core.constants import VIEW_TIMEOUT
from src.core.logger import logger
from src.utils.responses import info

ConfirmCallback = Callable[[discord.Interaction], Awaitable[None]]


class NukeConfirmView(discord.ui.View):
    """Confirm/cancel buttons that only the invoking moderator may press."""

    def __init__(self, author_id: int, on_confirm: ConfirmCallback, timeout: float = VIEW_TIMEOUT) -> None:
        super().__init__(timeout=timeout)
        self.author_id = author_id
        self.on_confirm = on_confirm
        self.interaction: Optional[discord.Interaction] = None
        self.finished = False

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.author_id:
            await interaction.response.send_message(
                "Only the moderator who started this can respond.", ephemeral=True,
            )
            return False
        return True

    @discord.ui.button(label="Confirm Nuke", style=discord.ButtonStyle.danger)
    async def confirm(self, interaction: discord.Interaction, button: discord.ui.Button) -> None:
        self.finished = True
        self.stop()
        await self.on_confirm(interaction)

    @discord.ui.button(label="Cancel", style=discord.ButtonStyle.secondary)
    async def cancel(self, interaction: discord.Interaction, button: discord.ui.Button) -> None:
        self.finished = True
        self.stop()
        await interaction.response.edit_message(
            embed=info("Nuke Cancelled", "Channel nuke operation has been cancelled."),
            view=None,
        )

    async def on_timeout(self) -> None:
        if self.finished or self.interaction is None:
            return
        try:
            await self.interaction.edit_original_response(
                embed=info("Nuke Cancelled", "Channel nuke operation timed out and was cancelled."),
                view=None,
            )
        except discord.HTTPException as e:
            logger.debug("Nuke Timeout Edit Failed", [("Error", str(e)[:50])])


__all__ = ["NukeConfirmView"]
