"""
HarborBot - Help Menu
=====================

/help content built from the loaded cogs' application commands.

DESIGN:
    Categories are derived from bot.cogs at call time, so a cog that
    failed to load simply has no entry. The category dropdown uses the
    stable custom ID "help_category_select" and is answered by the
    router, not by a view callback.
"""

from typing import TYPE_CHECKING, Dict, List, Optional, Union

import discord
from discord import app_commands

from src.core.constants import MAX_SELECT_OPTIONS
from src.utils.responses import create_embed

if TYPE_CHECKING:
    from discord.ext import commands


AppCommand = Union[app_commands.Command, app_commands.Group]

# Cog class name -> (category key, label, emoji)
HELP_CATEGORIES: Dict[str, tuple] = {
    "ModerationCog": ("moderation", "Moderation", "🔨"),
    "WarnCog": ("moderation", "Moderation", "🔨"),
    "TicketsCog": ("tickets", "Tickets", "🎫"),
    "EmbedsCog": ("embeds", "Embeds", "🖼️"),
    "UtilityCog": ("utility", "Utility", "🛠️"),
    "WorldClockCog": ("worldclock", "World Clock", "🌍"),
    "FunCog": ("fun", "Fun", "🎲"),
}

HELP_SELECT_ID = "help_category_select"


def collect_categories(bot: "commands.Bot") -> Dict[str, List[AppCommand]]:
    """Category key -> commands, in cog load order."""
    categories: Dict[str, List[AppCommand]] = {}
    for cog in bot.cogs.values():
        commands = cog.get_app_commands()
        if not commands:
            continue
        key = HELP_CATEGORIES.get(type(cog).__name__, (cog.qualified_name.lower(),))[0]
        categories.setdefault(key, []).extend(commands)
    return categories


def category_label(key: str) -> str:
    for cat_key, label, _ in HELP_CATEGORIES.values():
        if cat_key == key:
            return label
    return key.capitalize()


def category_emoji(key: str) -> Optional[str]:
    for cat_key, _, emoji in HELP_CATEGORIES.values():
        if cat_key == key:
            return emoji
    return None


def all_commands(bot: "commands.Bot") -> List[AppCommand]:
    return [command for commands in collect_categories(bot).values() for command in commands]


def find_command(bot: "commands.Bot", name: str) -> Optional[AppCommand]:
    name = (name or "").strip().lstrip("/").lower()
    for command in all_commands(bot):
        if command.name == name:
            return command
    return None


# =============================================================================
# Embeds
# =============================================================================

def build_help_embed(bot: "commands.Bot") -> discord.Embed:
    return create_embed(
        "primary",
        "Help Menu",
        "Use the dropdown menu below to view commands by category, "
        "or use `/help command` to get detailed information about a specific command.",
        footer=f"The bot has {len(all_commands(bot))} commands in total",
    )


def build_category_embed(bot: "commands.Bot", key: str) -> discord.Embed:
    commands = collect_categories(bot).get(key, [])
    label = category_label(key)

    if commands:
        listing = "\n".join(f"**/{c.name}** - {c.description}" for c in commands)
    else:
        listing = "No commands found in this category."

    return create_embed(
        "primary",
        f"{label} Commands",
        f"Here are all the commands in the {label} category:",
        fields=[("Available Commands", listing[:1024])],
        footer="Use /help command to get more details about a specific command",
    )


def build_command_embed(command: AppCommand) -> discord.Embed:
    """Usage for one command: options, or subcommands for a group."""
    lines = []
    if isinstance(command, app_commands.Group):
        for sub in command.commands:
            lines.append(f"**/{command.name} {sub.name}** - {sub.description}")
    else:
        for param in command.parameters:
            required = " (Required)" if param.required else ""
            lines.append(f"**{param.display_name}** - {param.description}{required}")

    fields = [("Options", "\n".join(lines)[:1024])] if lines else None
    return create_embed(
        "primary",
        f"Command: /{command.name}",
        command.description or "No description available",
        fields=fields,
    )


# =============================================================================
# View
# =============================================================================

class HelpMenuView(discord.ui.View):
    """Category dropdown. Selections are dispatched by the router."""

    def __init__(self, categories: List[str]) -> None:
        super().__init__(timeout=None)
        self.add_item(discord.ui.Select(
            custom_id=HELP_SELECT_ID,
            placeholder="Select a category",
            options=[
                discord.SelectOption(
                    label=category_label(key),
                    value=key,
                    emoji=category_emoji(key),
                    description=f"View all {category_label(key)} commands",
                )
                for key in categories[:MAX_SELECT_OPTIONS]
            ],
        ))


__all__ = [
    "HELP_CATEGORIES",
    "HELP_SELECT_ID",
    "collect_categories",
    "category_label",
    "all_commands",
    "find_command",
    "build_help_embed",
    "build_category_embed",
    "build_command_embed",
    "HelpMenuView",
]
