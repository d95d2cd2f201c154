"""
HarborBot - World Clock Package
===============================
"""

from typing import TYPE_CHECKING

from src.core.logger import logger

from .cog import WorldClockCog

if TYPE_CHECKING:
    from src.bot import HarborBot


async def setup(bot: "HarborBot") -> None:
    """Load the WorldClockCog."""
    await bot.add_cog(WorldClockCog(bot))
    logger.tree("World Clock Cog Loaded", [
        ("Commands", "/worldclock, /worldclock-list, /worldclock-multiple"),
    ], emoji="🌍")


__all__ = ["WorldClockCog", "setup"]
