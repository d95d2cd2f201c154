"""
HarborBot - Rock Paper Scissors View
====================================

One game per view. Buttons use auto-generated custom IDs and are
handled by the view's own callbacks, never by the router.
"""

import random
from typing import Optional

import discord

from src.core.constants import VIEW_TIMEOUT
from src.core.logger import logger
from src.utils.responses import create_embed, error

from .games import RPS_CHOICES, rps_outcome


def build_prompt_embed(timeout: float) -> discord.Embed:
    return create_embed(
        "primary",
        "Rock Paper Scissors",
        "Choose your move!",
        footer=f"Game will expire in {int(timeout)} seconds",
    )


def build_result_embed(player: str, bot: str) -> discord.Embed:
    result, kind = rps_outcome(player, bot)
    return create_embed(
        kind,
        "Rock Paper Scissors Result",
        result,
        fields=[
            ("Your Choice", f"{RPS_CHOICES[player]} {player.capitalize()}", True),
            ("My Choice", f"{RPS_CHOICES[bot]} {bot.capitalize()}", True),
        ],
        footer="Thanks for playing!",
    )


class RPSButton(discord.ui.Button["RPSView"]):
    def __init__(self, choice: str) -> None:
        super().__init__(
            label=choice.capitalize(),
            emoji=RPS_CHOICES[choice],
            style=discord.ButtonStyle.primary,
        )
        self.choice = choice

    async def callback(self, interaction: discord.Interaction) -> None:
        await self.view.play(interaction, self.choice)


class RPSView(discord.ui.View):
    """Three buttons; only the player who started the game may press them."""

    def __init__(self, player_id: int, timeout: float = VIEW_TIMEOUT, rng: Optional[random.Random] = None) -> None:
        super().__init__(timeout=timeout)
        self.player_id = player_id
        self.rng = rng or random.Random()
        self.interaction: Optional[discord.Interaction] = None
        self.played = False
        for choice in RPS_CHOICES:
            self.add_item(RPSButton(choice))

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.player_id:
            await interaction.response.send_message("This isn't your game!", ephemeral=True)
            return False
        return True

    async def play(self, interaction: discord.Interaction, choice: str) -> None:
        self.played = True
        self.stop()
        bot_choice = self.rng.choice(list(RPS_CHOICES))
        await interaction.response.edit_message(embed=build_result_embed(choice, bot_choice), view=None)

        logger.debug("RPS Played", [
            ("User", f"{interaction.user} ({interaction.user.id})"),
            ("Player", choice),
            ("Bot", bot_choice),
        ])

    async def on_timeout(self) -> None:
        if self.played or self.interaction is None:
            return
        try:
            await self.interaction.edit_original_response(
                embed=error("Game Expired", "You took too long to make a choice."),
                view=None,
            )
        except discord.HTTPException as e:
            logger.debug("RPS Timeout Edit Failed", [("Error", str(e)[:50])])


__all__ = ["RPSView", "build_prompt_embed", "build_result_embed"]
