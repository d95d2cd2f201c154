"""
HarborBot - Main Bot Class
==========================

Core Discord client for HarborBot: moderation, tickets, embed templates,
utility and fun commands, plus a keep-alive HTTP server.
"""

import time
from typing import Optional

import discord
from discord.ext import commands

from src.core.logger import logger
from src.core.config import get_config
from src.core.context import BotContext
from src.core.database import init_db
from src.core.health import HealthCheckServer


# =============================================================================
# HarborBot Class
# =============================================================================

class HarborBot(commands.Bot):
    """
    Main Discord bot class.

    DESIGN: Central orchestrator that:
    - Owns the BotContext (store, router, sessions, ticket workflow)
    - Loads command and event cogs
    - Manages bot lifecycle (startup, shutdown)

    INITIALIZATION ORDER:
    1. __init__:
       - Record store selection (SQLite or memory)
       - BotContext
    2. setup_hook (before on_ready):
       - Command cog loading (cogs register their component routes)
       - Event cog loading
       - Command tree syncing
    3. on_ready:
       - Keep-alive server
       - Error webhook
    """

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(self, ctx: Optional[BotContext] = None) -> None:
        self.config = get_config()

        intents = discord.Intents.default()
        intents.message_content = True
        intents.members = True

        super().__init__(
            command_prefix="!",
            intents=intents,
            help_command=None,
        )

        if ctx is None:
            init_db(self.config.database_path)
            ctx = BotContext.from_environment()
        self.ctx = ctx

        self.start_time: float = time.time()
        self.health_server: Optional[HealthCheckServer] = None

        # Ready state guard
        self._ready_initialized: bool = False

        logger.info("Bot Instance Created")

    # =========================================================================
    # Setup Hook
    # =========================================================================

    async def setup_hook(self) -> None:
        """Load cogs and sync commands before on_ready."""
        from src.commands import COMMAND_COGS
        for cog in COMMAND_COGS:
            try:
                await self.load_extension(cog)
            except commands.ExtensionError as e:
                logger.error("Failed to Load Cog", [("Cog", cog), ("Error", str(e))])

        from src.events import EVENT_COGS
        for cog in EVENT_COGS:
            try:
                await self.load_extension(cog)
                logger.debug(f"Event Cog Loaded: {cog.split('.')[-1]}")
            except commands.ExtensionError as e:
                logger.error("Failed to Load Event Cog", [("Cog", cog), ("Error", str(e))])

        logger.tree("Component Routes Registered", [
            ("Routes", str(len(self.ctx.router))),
        ], emoji="🧭")

        await self._sync_commands()

    async def _sync_commands(self) -> None:
        """Sync to the dev guild when configured (instant), globally otherwise."""
        try:
            if self.config.dev_guild_id:
                guild = discord.Object(id=self.config.dev_guild_id)
                self.tree.copy_global_to(guild=guild)
                synced = await self.tree.sync(guild=guild)
                scope = f"Guild {self.config.dev_guild_id}"
            else:
                synced = await self.tree.sync()
                scope = "Global"
            logger.tree("Commands Synced", [
                ("Count", str(len(synced))),
                ("Scope", scope),
            ], emoji="✅")
        except discord.HTTPException as e:
            logger.error("Command Sync Failed", [("Error", str(e))])

    # =========================================================================
    # On Ready
    # =========================================================================

    async def on_ready(self) -> None:
        """Start the keep-alive server once, on the first ready event."""
        if self._ready_initialized:
            logger.info("Bot Reconnected (skipping re-initialization)")
            return

        self._ready_initialized = True

        if not self.user:
            return

        logger.tree("BOT ONLINE", [
            ("Name", self.user.name),
            ("ID", str(self.user.id)),
            ("Guilds", str(len(self.guilds))),
        ], emoji="🚀")

        if self.config.error_webhook_url:
            logger.set_webhook(self.config.error_webhook_url)

        self.health_server = HealthCheckServer(self, port=self.config.port)
        await self.health_server.start()

        logger.tree("HARBOR READY", [
            ("Storage", self.ctx.db.backend_name),
            ("Cogs", str(len(self.cogs))),
            ("Keep-alive", f"Port {self.config.port}" if self.health_server.runner else "Stopped"),
            ("Error Webhook", "Enabled" if self.config.error_webhook_url else "Disabled"),
        ], emoji="⚓")

    # =========================================================================
    # Shutdown
    # =========================================================================

    async def close(self) -> None:
        """Stop the keep-alive server and close the store before disconnecting."""
        logger.info("Shutting down...")

        if self.health_server:
            await self.health_server.stop()

        self.ctx.db.close()

        await super().close()


__all__ = ["HarborBot"]
