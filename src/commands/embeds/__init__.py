"""
HarborBot - Embeds Command Package
==================================

Embed builder commands: create, send, edit, delete and templates.
"""

from typing import TYPE_CHECKING

from src.core.logger import logger

from .cog import EmbedsCog

if TYPE_CHECKING:
    from src.bot import HarborBot


async def setup(bot: "HarborBot") -> None:
    """Load the Embeds cog."""
    await bot.add_cog(EmbedsCog(bot))
    logger.tree("Embeds Cog Loaded", [
        ("Commands", "/embed-create, /embed-send, /embed-edit, /embed-delete, /embed-template"),
        ("Features", "modal builder, templates, sent-embed registry"),
    ], emoji="🧩")


__all__ = ["EmbedsCog", "setup"]
