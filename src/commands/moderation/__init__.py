"""
HarborBot - Moderation Package
==============================

Member and channel moderation commands.

Structure:
    - helpers.py: Target validation, DMs, mod-log posting
    - member_ops.py: Ban, kick, timeout, timeout removal
    - message_ops.py: Clear, purge, nuke, nuke animations
    - animations.py: Animation frames
    - views.py: NukeConfirmView
    - cog.py: ModerationCog with the slash commands
"""

from typing import TYPE_CHECKING

from src.core.logger import logger

from .cog import ModerationCog
from .views import NukeConfirmView

if TYPE_CHECKING:
    from src.bot import HarborBot

__all__ = [
    "ModerationCog",
    "NukeConfirmView",
]


async def setup(bot: "HarborBot") -> None:
    """Load the ModerationCog."""
    await bot.add_cog(ModerationCog(bot))
    logger.tree("Moderation Cog Loaded", [
        ("Commands", "/ban, /kick, /mute, /unmute, /clear, /purge, /nuke, /nukeanimation"),
        ("Mod Logs", ", ".join(f"#{name}" for name in bot.ctx.config.mod_log_channel_names)),
    ], emoji="🔨")
