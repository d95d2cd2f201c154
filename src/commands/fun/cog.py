"""
HarborBot - Fun Cog
===================

Games, text toys and random content from public APIs.
"""

from __future__ import annotations

import random
import re
from typing import TYPE_CHECKING, Optional

import discord
import pyfiglet
from discord import app_commands
from discord.ext import commands

from src.core.logger import logger
from src.core.config import get_config
from src.core.constants import ASCII_MAX_INPUT, MESSAGE_CONTENT_LIMIT
from src.utils.interaction import safe_defer, safe_respond
from src.utils.math_eval import MathError, evaluate, format_result
from src.utils.responses import create_embed, error, info, success

from .api import FunApiClient, FunApiError
from .games import (
    EIGHT_BALL_ANSWERS,
    FALLBACK_ANSWERS,
    FONTS,
    AsciiTooLarge,
    as_question,
    gay_colour,
    gay_percentage,
    mock_text,
    progress_bar,
    render_ascii,
    ship_colour,
    ship_name,
    ship_percentage,
    ship_verdict,
)
from .views import RPSView, build_prompt_embed

if TYPE_CHECKING:
    from src.bot import HarborBot


INVITE_PATTERN = re.compile(r"(discord\.(gg|io|me|li)|discordapp\.com/invite)", re.IGNORECASE)
NO_MENTIONS = discord.AllowedMentions.none()

JOKE_CATEGORIES = ["Any", "Programming", "Miscellaneous", "Dark", "Pun", "Spooky", "Christmas"]


class FunCog(commands.Cog):
    """Fun and games commands."""

    def __init__(self, bot: "HarborBot") -> None:
        self.bot = bot
        self.config = get_config()
        self.api = FunApiClient()

    async def cog_unload(self) -> None:
        await self.api.close()

    # =========================================================================
    # Random Answers
    # =========================================================================

    @app_commands.command(name="8ball", description="Ask the magic 8-ball a question")
    @app_commands.describe(question="The question to ask")
    async def eight_ball(self, interaction: discord.Interaction, question: str) -> None:
        embed = create_embed(
            "primary",
            "🎱 Magic 8-Ball",
            None,
            fields=[("Question", question[:1024]), ("Answer", random.choice(EIGHT_BALL_ANSWERS))],
            footer="The 8-ball has spoken!",
        )
        await safe_respond(interaction, embed=embed, ephemeral=False)

    @app_commands.command(name="coinflip", description="Flip a coin")
    async def coinflip(self, interaction: discord.Interaction) -> None:
        side = "Heads" if random.random() >= 0.5 else "Tails"
        embed = create_embed(
            "primary",
            "💰 Coin Flip",
            f"You flipped a coin and got: **{side}**!",
            footer="Better luck next time!",
        )
        await safe_respond(interaction, embed=embed, ephemeral=False)

    @app_commands.command(name="q", description="Ask a question and get a random answer")
    @app_commands.describe(question="The question to ask")
    async def q(self, interaction: discord.Interaction, question: str) -> None:
        if not question.strip():
            await safe_respond(interaction, embed=error("Empty Question", "Please provide a question to ask."))
            return

        await safe_defer(interaction, ephemeral=False)
        try:
            answer = await self.api.yes_no()
        except FunApiError:
            answer = random.choice(FALLBACK_ANSWERS)

        await safe_respond(interaction, embed=info(
            "🔮 Question Response",
            f"**Q:** {as_question(question)}\n**A:** {answer}",
            footer="The universe has spoken!",
        ), ephemeral=False)

    # =========================================================================
    # Meters
    # =========================================================================

    @app_commands.command(name="howgay", description="Find out how gay someone is (for fun only!)")
    @app_commands.describe(user="The user to check (defaults to you)")
    async def howgay(self, interaction: discord.Interaction, user: Optional[discord.User] = None) -> None:
        target = user or interaction.user
        percentage = gay_percentage(target.id)

        embed = create_embed(
            "primary",
            "💖 Gay Rate Machine 🌈",
            f"{target.name} is {percentage}% gay!",
            fields=[("Gay Meter", progress_bar(percentage, "🏳️‍🌈", "⬛"))],
            footer="This is just for fun and not meant to offend anyone!",
            thumbnail=target.display_avatar.url,
        )
        embed.colour = gay_colour(percentage)
        await safe_respond(interaction, embed=embed, ephemeral=False)

    @app_commands.command(name="ship", description="Ship two users together and see their compatibility!")
    @app_commands.describe(user1="First user to ship", user2="Second user to ship")
    async def ship(self, interaction: discord.Interaction, user1: discord.User, user2: discord.User) -> None:
        percentage = ship_percentage(user1.id, user2.id)

        embed = create_embed(
            "primary",
            "💘 Shipping Calculator 💘",
            f"Shipping **{user1.name}** with **{user2.name}**",
            fields=[
                ("Ship Name", f"**{ship_name(user1.name, user2.name)}**"),
                ("Compatibility", f"{percentage}%", True),
                ("Match Rating", progress_bar(percentage, "❤️", "🖤")),
                ("Verdict", ship_verdict(percentage)),
            ],
            footer="Ship with another user to find your perfect match!",
        )
        embed.colour = ship_colour(percentage)
        await safe_respond(interaction, embed=embed, ephemeral=False)

    # =========================================================================
    # Text Toys
    # =========================================================================

    @app_commands.command(name="ascii", description="Convert text to ASCII art")
    @app_commands.describe(text="The text to convert to ASCII art", font="The font to use (default: Standard)")
    @app_commands.choices(font=[app_commands.Choice(name=name, value=value) for name, value in FONTS.items()])
    async def ascii(
        self,
        interaction: discord.Interaction,
        text: str,
        font: Optional[app_commands.Choice[str]] = None,
    ) -> None:
        await safe_defer(interaction, ephemeral=False)

        if len(text) > ASCII_MAX_INPUT:
            await safe_respond(interaction, embed=error(
                "Text Too Long", f"Please provide a shorter text (maximum {ASCII_MAX_INPUT} characters).",
            ))
            return

        try:
            art = render_ascii(text, font.value if font else "standard")
        except AsciiTooLarge:
            await safe_respond(interaction, embed=error(
                "Result Too Large", "The generated ASCII art is too large to display.",
            ))
            return
        except pyfiglet.FontNotFound as e:
            logger.warning("ASCII Font Missing", [("Font", font.value if font else "standard"), ("Error", str(e)[:80])])
            await safe_respond(interaction, embed=error("Error", "Failed to generate ASCII art."))
            return

        await safe_respond(interaction, f"```\n{art}\n```", ephemeral=False, allowed_mentions=NO_MENTIONS)

    @app_commands.command(name="mock", description="Mock a text with alternating cases")
    @app_commands.describe(text="The text to mock")
    async def mock(self, interaction: discord.Interaction, text: str) -> None:
        if not text.strip():
            await safe_respond(interaction, embed=error("Empty Text", "Please provide some text to mock."))
            return
        await safe_respond(interaction, mock_text(text), ephemeral=False, allowed_mentions=NO_MENTIONS)

    @app_commands.command(name="reverse", description="Reverse a text")
    @app_commands.describe(text="The text to reverse")
    async def reverse(self, interaction: discord.Interaction, text: str) -> None:
        if not text.strip():
            await safe_respond(interaction, embed=error("Empty Text", "Please provide some text to reverse."))
            return
        await safe_respond(interaction, text[::-1], ephemeral=False, allowed_mentions=NO_MENTIONS)

    @app_commands.command(name="math", description="Evaluate a math expression")
    @app_commands.describe(expression="The math expression to evaluate")
    async def math(self, interaction: discord.Interaction, expression: str) -> None:
        if not expression.strip():
            await safe_respond(interaction, embed=error(
                "Empty Expression", "Please provide a math expression to evaluate.",
            ))
            return

        try:
            result = format_result(evaluate(expression))
        except MathError as e:
            await safe_respond(interaction, embed=error(
                "Invalid Expression", f"Could not evaluate the expression: {e}",
            ))
            return

        await safe_respond(interaction, embed=success(
            "🧮 Math Result", f"Expression: `{expression}`\nResult: `{result}`",
        ), ephemeral=False)

    @app_commands.command(name="say", description="Make the bot say something")
    @app_commands.describe(
        message="The message to say",
        ephemeral="Whether to show the command use only to you (default: true)",
    )
    @app_commands.default_permissions(manage_messages=True)
    @app_commands.guild_only()
    async def say(self, interaction: discord.Interaction, message: str, ephemeral: bool = True) -> None:
        if "@everyone" in message or "@here" in message:
            await safe_respond(interaction, embed=error(
                "Forbidden Mention", "You cannot use everyone/here mentions in say command.",
            ))
            return

        if not interaction.user.guild_permissions.administrator and INVITE_PATTERN.search(message):
            await safe_respond(interaction, embed=error(
                "Forbidden Content", "You cannot include Discord invite links in say command.",
            ))
            return

        if len(message) > MESSAGE_CONTENT_LIMIT:
            await safe_respond(interaction, embed=error(
                "Message Too Long", "The message cannot exceed 2000 characters.",
            ))
            return

        try:
            await interaction.channel.send(
                message,
                allowed_mentions=discord.AllowedMentions(everyone=False, users=True, roles=True),
            )
        except discord.HTTPException as e:
            await safe_respond(interaction, embed=error("Error", f"Failed to send message: {e.text or e}"))
            return

        await safe_respond(interaction, "Your message has been sent!" if ephemeral else "Message sent!")

        logger.tree("Say Used", [
            ("User", f"{interaction.user} ({interaction.user.id})"),
            ("Channel", str(interaction.channel_id)),
            ("Length", str(len(message))),
        ], emoji="💬")

    # =========================================================================
    # External Content
    # =========================================================================

    @app_commands.command(name="joke", description="Get a random joke")
    @app_commands.describe(category="Category of joke")
    @app_commands.choices(category=[app_commands.Choice(name=c, value=c) for c in JOKE_CATEGORIES])
    async def joke(
        self,
        interaction: discord.Interaction,
        category: Optional[app_commands.Choice[str]] = None,
    ) -> None:
        await safe_defer(interaction, ephemeral=False)
        try:
            joke = await self.api.joke(category.value if category else "Any")
        except FunApiError as e:
            await safe_respond(interaction, embed=error("Error", f"Failed to fetch a joke. {e.message}"))
            return

        await safe_respond(interaction, embed=info(
            "😂 Random Joke", joke["text"], footer=f"Category: {joke['category']}",
        ), ephemeral=False)

    @app_commands.command(name="meme", description="Get a random meme from Reddit")
    @app_commands.describe(subreddit="Subreddit to get meme from (default: random)")
    async def meme(self, interaction: discord.Interaction, subreddit: Optional[str] = None) -> None:
        await safe_defer(interaction, ephemeral=False)
        try:
            meme = await self.api.meme(subreddit)
        except FunApiError as e:
            await safe_respond(interaction, embed=error("Error", f"Failed to fetch a meme. {e.message}"))
            return

        if meme.get("nsfw") and not getattr(interaction.channel, "nsfw", False):
            await safe_respond(interaction, embed=error(
                "NSFW Content", "This meme is NSFW and can only be shown in NSFW channels.",
            ))
            return

        embed = create_embed(
            "primary",
            (meme.get("title") or "Meme")[:256],
            None,
            image=meme.get("url"),
            footer=f"👍 {meme.get('ups', 0)} | From r/{meme.get('subreddit', '?')}",
        )
        embed.url = meme.get("postLink")
        await safe_respond(interaction, embed=embed, ephemeral=False)

    # =========================================================================
    # Games
    # =========================================================================

    @app_commands.command(name="rps", description="Play rock-paper-scissors with the bot")
    async def rps(self, interaction: discord.Interaction) -> None:
        view = RPSView(interaction.user.id, timeout=self.config.view_timeout)
        await safe_respond(interaction, embed=build_prompt_embed(view.timeout), view=view, ephemeral=False)
        view.interaction = interaction


__all__ = ["FunCog"]
