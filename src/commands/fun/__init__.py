"""
HarborBot - Fun Package
=======================

Structure:
    - games.py: Deterministic meters, answers, ASCII rendering, RPS rules
    - api.py: aiohttp client for jokes, memes and yes/no answers
    - views.py: RPSView
    - cog.py: FunCog with the slash commands
"""

from typing import TYPE_CHECKING

from src.core.logger import logger

from .cog import FunCog

if TYPE_CHECKING:
    from src.bot import HarborBot


async def setup(bot: "HarborBot") -> None:
    """Load the FunCog."""
    await bot.add_cog(FunCog(bot))
    logger.tree("Fun Cog Loaded", [
        ("Commands", "/8ball, /ascii, /coinflip, /howgay, /joke, /math, /meme"),
        ("More", "/mock, /q, /reverse, /rps, /say, /ship"),
    ], emoji="🎲")


__all__ = ["FunCog", "setup"]
