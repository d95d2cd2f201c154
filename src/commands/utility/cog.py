"""
HarborBot - Utility Cog
=======================

General information commands plus the admin database probe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import discord
from discord import app_commands
from discord.ext import commands

from src.core.logger import logger
from src.core.config import get_config
from src.core.constants import MAX_AUTOCOMPLETE_RESULTS
from src.core.database import DatabaseError
from src.utils.interaction import get_select_values, safe_defer, safe_respond
from src.utils.responses import create_embed, error, success

from .help import (
    HelpMenuView,
    all_commands,
    build_category_embed,
    build_command_embed,
    build_help_embed,
    collect_categories,
    find_command,
)

if TYPE_CHECKING:
    from src.bot import HarborBot


STATUS_LABELS = {
    discord.Status.online: "🟢 Online",
    discord.Status.idle: "🟡 Idle",
    discord.Status.dnd: "🔴 Do Not Disturb",
    discord.Status.offline: "⚫ Offline",
}

ACTIVITY_PREFIXES = {
    discord.ActivityType.playing: "Playing ",
    discord.ActivityType.streaming: "Streaming ",
    discord.ActivityType.listening: "Listening to ",
    discord.ActivityType.watching: "Watching ",
    discord.ActivityType.competing: "Competing in ",
}


def _relative(dt) -> str:
    return f"<t:{int(dt.timestamp())}:R>" if dt else "Unknown"


def format_feature(feature: str) -> str:
    """ANIMATED_ICON -> Animated Icon."""
    return " ".join(word.capitalize() for word in feature.split("_"))


def describe_activity(activity) -> Optional[str]:
    if activity is None or not getattr(activity, "name", None):
        return None
    return f"{ACTIVITY_PREFIXES.get(activity.type, '')}{activity.name}"


class UtilityCog(commands.Cog):
    """Avatar, latency, server/user info, help and database status."""

    database = app_commands.Group(
        name="database",
        description="Database management commands (Admin only)",
        default_permissions=discord.Permissions(administrator=True),
        guild_only=True,
    )

    def __init__(self, bot: "HarborBot") -> None:
        self.bot = bot
        self.config = get_config()

        bot.ctx.router.register("help", "category", "select", self.handle_category_select, sub="select")

    # =========================================================================
    # /avatar
    # =========================================================================

    @app_commands.command(name="avatar", description="Display the avatar of a user")
    @app_commands.describe(user="The user whose avatar to show (defaults to yourself)")
    async def avatar(self, interaction: discord.Interaction, user: Optional[discord.User] = None) -> None:
        user = user or interaction.user
        asset = user.display_avatar
        links = " | ".join(
            f"[{label}]({asset.with_format(fmt).with_size(1024).url})"
            for label, fmt in (("JPG", "jpg"), ("PNG", "png"), ("WebP", "webp"))
        )
        embed = create_embed(
            "primary",
            f"{user.name}'s Avatar",
            links,
            image=asset.with_format("png").with_size(1024).url,
            footer=f"Requested by {interaction.user}",
        )
        await safe_respond(interaction, embed=embed, ephemeral=False)

    # =========================================================================
    # /ping
    # =========================================================================

    @app_commands.command(name="ping", description="Check the bot's latency and API response time")
    async def ping(self, interaction: discord.Interaction) -> None:
        await interaction.response.send_message("Pinging...")
        sent = await interaction.original_response()

        roundtrip_ms = int((sent.created_at - interaction.created_at).total_seconds() * 1000)
        heartbeat_ms = round(self.bot.latency * 1000)

        embed = create_embed(
            "primary",
            "🏓 Pong!",
            None,
            fields=[
                ("Bot Latency", f"{roundtrip_ms}ms", True),
                ("API Heartbeat", f"{heartbeat_ms}ms", True),
            ],
            footer=f"discord.py v{discord.__version__}",
        )
        await interaction.edit_original_response(content=None, embed=embed)

        logger.debug("Ping", [("Roundtrip", f"{roundtrip_ms}ms"), ("Heartbeat", f"{heartbeat_ms}ms")])

    # =========================================================================
    # /serverinfo
    # =========================================================================

    @app_commands.command(name="serverinfo", description="Display information about the current server")
    @app_commands.guild_only()
    async def serverinfo(self, interaction: discord.Interaction) -> None:
        await safe_defer(interaction, ephemeral=False)
        guild = interaction.guild

        embed = create_embed(
            "primary",
            f"Server Information: {guild.name}",
            guild.description,
            fields=[
                ("Server ID", str(guild.id), True),
                ("Owner", f"<@{guild.owner_id}>", True),
                ("Created", _relative(guild.created_at), True),
                ("Members", f"Total: {guild.member_count}", True),
                (
                    "Channels",
                    f"Total: {len(guild.channels)}\n"
                    f"Text: {len(guild.text_channels)}\n"
                    f"Voice: {len(guild.voice_channels)}\n"
                    f"Categories: {len(guild.categories)}",
                    True,
                ),
                ("Other", f"Roles: {len(guild.roles)}\nEmojis: {len(guild.emojis)}", True),
            ],
            thumbnail=guild.icon.url if guild.icon else None,
            image=guild.banner.with_size(1024).url if guild.banner else None,
        )

        if guild.features:
            embed.add_field(
                name="Server Features",
                value=", ".join(format_feature(f) for f in guild.features)[:1024],
                inline=False,
            )

        embed.add_field(
            name="Boost Status",
            value=f"Level {guild.premium_tier}\nBoosts: {guild.premium_subscription_count or 0}",
            inline=True,
        )
        embed.add_field(
            name="Verification Level",
            value=str(guild.verification_level).replace("_", " ").title(),
            inline=True,
        )

        await safe_respond(interaction, embed=embed, ephemeral=False)

    # =========================================================================
    # /userinfo
    # =========================================================================

    @app_commands.command(name="userinfo", description="Display information about a user")
    @app_commands.describe(user="The user to display info about (defaults to yourself)")
    @app_commands.guild_only()
    async def userinfo(self, interaction: discord.Interaction, user: Optional[discord.User] = None) -> None:
        await safe_defer(interaction, ephemeral=False)
        user = user or interaction.user

        member = interaction.guild.get_member(user.id)
        if member is None:
            try:
                member = await interaction.guild.fetch_member(user.id)
            except discord.NotFound:
                member = None

        colour = member.colour if member and member.colour.value else None
        embed = create_embed(
            "primary",
            f"User Information: {user}",
            None,
            fields=[
                ("User ID", str(user.id), True),
                ("Account Created", _relative(user.created_at), True),
            ],
            thumbnail=user.display_avatar.url,
        )
        if colour:
            embed.colour = colour

        if member is not None:
            roles = sorted(
                (r for r in member.roles if not r.is_default()),
                key=lambda r: r.position,
                reverse=True,
            )
            role_list = ", ".join(r.mention for r in roles) if roles else "No roles"

            embed.add_field(name="Nickname", value=member.nick or "None", inline=True)
            embed.add_field(name="Joined Server", value=_relative(member.joined_at), inline=True)
            embed.add_field(name=f"Roles [{len(roles)}]", value=role_list[:1024], inline=False)
            embed.add_field(name="Status", value=STATUS_LABELS.get(member.status, "⚫ Offline"), inline=True)

            activity = describe_activity(member.activity)
            if activity:
                embed.add_field(name="Activity", value=activity[:1024], inline=True)

        await safe_respond(interaction, embed=embed, ephemeral=False)

    # =========================================================================
    # /help
    # =========================================================================

    @app_commands.command(
        name="help",
        description="Display a list of available commands or info about a specific command",
    )
    @app_commands.describe(command="Get info about a specific command")
    async def help(self, interaction: discord.Interaction, command: Optional[str] = None) -> None:
        if command:
            found = find_command(self.bot, command)
            if found is None:
                await safe_respond(
                    interaction,
                    f"Command `{command}` not found. Use `/help` to see all available commands.",
                )
                return
            await safe_respond(interaction, embed=build_command_embed(found), ephemeral=False)
            return

        categories = list(collect_categories(self.bot))
        view = HelpMenuView(categories) if categories else None
        await safe_respond(interaction, embed=build_help_embed(self.bot), view=view, ephemeral=False)

    @help.autocomplete("command")
    async def help_autocomplete(
        self,
        interaction: discord.Interaction,
        current: str,
    ) -> List[app_commands.Choice[str]]:
        current = current.lower()
        return [
            app_commands.Choice(name=c.name, value=c.name)
            for c in all_commands(self.bot)
            if current in c.name.lower()
        ][:MAX_AUTOCOMPLETE_RESULTS]

    async def handle_category_select(self, interaction: discord.Interaction, args: List[str]) -> None:
        """Route: help_category_select."""
        values = get_select_values(interaction)
        if not values:
            return
        await interaction.response.edit_message(embed=build_category_embed(self.bot, values[0]))

    # =========================================================================
    # /database
    # =========================================================================

    @database.command(name="status", description="Check database connection status")
    async def database_status(self, interaction: discord.Interaction) -> None:
        await safe_defer(interaction)
        db = self.bot.ctx.db

        try:
            status = db.ping()
        except DatabaseError as e:
            await safe_respond(interaction, embed=error(
                "Database Error", f"Failed to connect to the database: {e}",
            ))
            return

        counts = "\n".join(f"{table}: {count}" for table, count in status["counts"].items())
        await safe_respond(interaction, embed=success(
            "Database Connected",
            "Successfully connected to the database.",
            fields=[
                ("Backend", status["backend"], True),
                ("Server Time", status["server_time"], True),
                ("Latency", f"{status['latency_ms']}ms", True),
                ("Location", status["location"], False),
                ("Records", counts or "None", False),
            ],
        ))

        logger.tree("Database Status Checked", [
            ("Backend", status["backend"]),
            ("Latency", f"{status['latency_ms']}ms"),
            ("By", f"{interaction.user} ({interaction.user.id})"),
        ], emoji="🗄️")

    @database.command(name="init", description="Initialize database tables")
    async def database_init(self, interaction: discord.Interaction) -> None:
        await safe_defer(interaction)
        db = self.bot.ctx.db

        try:
            db.init_schema()
        except DatabaseError as e:
            await safe_respond(interaction, embed=error(
                "Database Error", f"Failed to initialize the database: {e}",
            ))
            return

        await safe_respond(interaction, embed=success(
            "Database Initialized",
            "Successfully initialized the database tables.",
            fields=[("Backend", db.backend_name, True)],
        ))


__all__ = ["UtilityCog"]
