#!/usr/bin/env python3
"""
HarborBot - Entry Point
=======================

Loads the environment, validates configuration and runs the bot until
interrupted.
"""

import asyncio
import sys

from dotenv import load_dotenv

from src.core.logger import logger
from src.core.config import ConfigValidationError, validate_and_log_config
from src.bot import HarborBot
from src.utils.error_handler import ErrorHandler


async def main() -> None:
    """
    Main entry point for HarborBot.

    Handles the complete bot lifecycle:
    1. Loads environment configuration
    2. Validates configuration (DISCORD_TOKEN is required)
    3. Selects the record store and creates the bot
    4. Connects to Discord and runs until closed

    Raises:
        SystemExit: If configuration is invalid or the bot fails to start
    """
    load_dotenv()

    try:
        config = validate_and_log_config()
    except ConfigValidationError as e:
        logger.error("Invalid Configuration", [("Error", str(e))])
        sys.exit(1)

    logger.tree("HARBOR STARTING", [
        ("Storage", config.storage_backend),
        ("Port", str(config.port)),
    ], emoji="⚓")

    bot = HarborBot()
    try:
        await bot.start(config.discord_token)
    except Exception as e:
        ErrorHandler.handle(
            e,
            location="main.main",
            critical=True,
            token_present=bool(config.discord_token),
        )
        sys.exit(1)
    finally:
        if not bot.is_closed():
            await bot.close()


def run() -> None:
    """Console entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("🛑 Bot stopped by user (Ctrl+C)")
    except Exception as e:
        ErrorHandler.handle(
            e,
            location="main.__main__",
            critical=True
        )
        sys.exit(1)


if __name__ == "__main__":
    run()

