"""
HarborBot - Commands Package
============================

Slash command implementations for HarborBot.
Commands are implemented as discord.py Cogs for modularity.

DESIGN:
    Each command package exposes a Cog class and an async setup(bot)
    function. Cogs are loaded dynamically by the bot using
    load_extension(). Cogs that own component routes register them on
    bot.ctx.router in their __init__.

    To add a new command:
    1. Create new_command/ with cog.py and __init__.py
    2. Create a Cog class with @app_commands.command decorators
    3. Add async def setup(bot) to __init__.py
    4. Add the package to COMMAND_COGS below

Available Commands:
    Moderation: /ban, /kick, /mute, /unmute, /clear, /purge, /nuke, /nukeanimation, /warn
    Tickets: /ticket-open, /ticket-claim, /ticket-close, /ticket-add, /ticket-remove,
             /ticket-rename, /ticket-panel, /ticket-setup, /ticket-log, /ticket-category,
             /ticket-transcript
    Embeds: /embed-create, /embed-send, /embed-edit, /embed-delete, /embed-template
    Utility: /avatar, /ping, /serverinfo, /userinfo, /help, /database
    World Clock: /worldclock, /worldclock-list, /worldclock-multiple
    Fun: /8ball, /ascii, /coinflip, /howgay, /joke, /math, /meme, /mock, /q,
         /reverse, /rps, /say, /ship
"""

# =============================================================================
# Command Cog Registry
# =============================================================================

COMMAND_COGS = [
    "src.commands.moderation",
    "src.commands.warn",
    "src.commands.tickets",
    "src.commands.embeds",
    "src.commands.utility",
    "src.commands.worldclock",
    "src.commands.fun",
]
"""
List of command cog module paths for dynamic loading.

DESIGN:
    Bot iterates this list and calls load_extension() for each.
    Add new command cogs here to have them loaded automatically.
"""


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "COMMAND_COGS",
]
