"""
HarborBot - Warn Command Package
================================

Persistent user warnings with DM notification and mod-log posts.
"""

from typing import TYPE_CHECKING

from src.core.logger import logger

from .cog import WarnCog

if TYPE_CHECKING:
    from src.bot import HarborBot


async def setup(bot: "HarborBot") -> None:
    """Load the Warn cog."""
    await bot.add_cog(WarnCog(bot))
    logger.tree("Warn Cog Loaded", [
        ("Commands", "/warn add, /warn list, /warn remove, /warn clear"),
        ("Storage", bot.ctx.db.backend_name),
    ], emoji="📋")


__all__ = ["WarnCog", "setup"]
