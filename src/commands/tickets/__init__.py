"""
HarborBot - Tickets Command Package
===================================

Ticket lifecycle and configuration commands.
"""

from typing import TYPE_CHECKING

from src.core.logger import logger

from .cog import TicketsCog

if TYPE_CHECKING:
    from src.bot import HarborBot


async def setup(bot: "HarborBot") -> None:
    """Load the Tickets cog."""
    await bot.add_cog(TicketsCog(bot))
    logger.tree("Tickets Cog Loaded", [
        ("Commands", "/ticket-open, /ticket-claim, /ticket-close, /ticket-add, /ticket-remove"),
        ("Admin", "/ticket-setup, /ticket-panel, /ticket-log, /ticket-category"),
        ("Routes", str(len(bot.ctx.router))),
    ], emoji="🎫")


__all__ = ["TicketsCog", "setup"]
