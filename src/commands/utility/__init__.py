"""
HarborBot - Utility Package
===========================

Structure:
    - help.py: Help menu embeds and category dropdown
    - cog.py: UtilityCog (/avatar, /ping, /serverinfo, /userinfo, /help, /database)
"""

from typing import TYPE_CHECKING

from src.core.logger import logger

from .cog import UtilityCog

if TYPE_CHECKING:
    from src.bot import HarborBot


async def setup(bot: "HarborBot") -> None:
    """Load the UtilityCog."""
    await bot.add_cog(UtilityCog(bot))
    logger.tree("Utility Cog Loaded", [
        ("Commands", "/avatar, /ping, /serverinfo, /userinfo, /help"),
        ("Admin", "/database status, /database init"),
    ], emoji="🛠️")


__all__ = ["UtilityCog", "setup"]
