"""
HarborBot - World Clock Cog
===========================

Current time lookups by common code or IANA zone name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import discord
from discord import app_commands
from discord.ext import commands

from src.core.logger import logger
from src.core.config import get_config
from src.core.constants import MAX_AUTOCOMPLETE_RESULTS
from src.utils.interaction import get_select_values, safe_defer, safe_respond
from src.utils.timezones import PRESET_LABELS, PRESETS, search_timezones

from .embeds import WorldClockSelectView, build_list_embed, build_multi_embed, build_time_embed

if TYPE_CHECKING:
    from src.bot import HarborBot


class WorldClockCog(commands.Cog):
    """/worldclock, /worldclock-list and /worldclock-multiple."""

    def __init__(self, bot: "HarborBot") -> None:
        self.bot = bot
        self.config = get_config()

        bot.ctx.router.register("worldclock", "select", "select", self.handle_select)

    @app_commands.command(name="worldclock", description="Show the current time in a specific timezone or region")
    @app_commands.describe(region="The timezone or region to show time for")
    async def worldclock(self, interaction: discord.Interaction, region: str) -> None:
        await safe_defer(interaction, ephemeral=False)

        embed = build_time_embed(region.strip())
        if embed is None:
            logger.debug("Unknown Timezone", [("Region", region[:50])])
            await safe_respond(
                interaction,
                f'❌ Error: Invalid timezone "{region}". Use `/worldclock-list` to see available timezones.',
            )
            return

        await safe_respond(interaction, embed=embed, ephemeral=False)

    @worldclock.autocomplete("region")
    async def region_autocomplete(
        self,
        interaction: discord.Interaction,
        current: str,
    ) -> List[app_commands.Choice[str]]:
        return [
            app_commands.Choice(name=label[:100], value=value)
            for label, value in search_timezones(current, MAX_AUTOCOMPLETE_RESULTS)
        ]

    @app_commands.command(name="worldclock-list", description="List all available timezones and regions")
    async def worldclock_list(self, interaction: discord.Interaction) -> None:
        await safe_respond(interaction, embed=build_list_embed(), ephemeral=False)

    @app_commands.command(name="worldclock-multiple", description="Show the current time in multiple timezones")
    @app_commands.describe(preset="Preset timezone groups")
    @app_commands.choices(preset=[
        app_commands.Choice(name=label, value=key) for key, label in PRESET_LABELS.items()
    ])
    async def worldclock_multiple(
        self,
        interaction: discord.Interaction,
        preset: Optional[app_commands.Choice[str]] = None,
    ) -> None:
        if preset is not None:
            await safe_respond(interaction, embed=build_multi_embed(PRESETS[preset.value]), ephemeral=False)
            return

        await safe_respond(
            interaction,
            "Select up to 10 timezones to display:",
            view=WorldClockSelectView(),
            ephemeral=False,
        )

    async def handle_select(self, interaction: discord.Interaction, args: List[str]) -> None:
        """Route: worldclock_select."""
        codes = get_select_values(interaction)
        if not codes:
            return
        await interaction.response.edit_message(
            content=None,
            embed=build_multi_embed((code, code) for code in codes),
            view=None,
        )


__all__ = ["WorldClockCog"]
