"""
HarborBot - Error Handler
=========================

Detailed error context and categorized logging.

Features:
- Error categorization (Discord, network, database)
- Recovery suggestions in every error log
- Discord context capture (guild, channel, user)
- Critical error dumps to logs/errors/
- safe_execute decorator for callbacks that must not raise
"""

import functools
import json
import sqlite3
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

import aiohttp
import discord

from src.core.logger import logger, LOGS_DIR
from src.core.database.base import DatabaseError, DuplicateRecordError


class ErrorContext:
    """Captures and formats detailed error context"""

    @staticmethod
    def get_full_context(e: Exception, location: str, **kwargs) -> Dict[str, Any]:
        """
        Get comprehensive error context.

        Args:
            e: The exception
            location: Where the error occurred
            **kwargs: Additional context (interaction, message, member)

        Returns:
            Dictionary with full error context
        """
        context = {
            'timestamp': datetime.now().isoformat(),
            'location': location,
            'error_type': type(e).__name__,
            'error_message': str(e),
            'traceback': "".join(traceback.format_exception(type(e), e, e.__traceback__)),
            'python_version': sys.version,
            'additional_context': {k: str(v)[:200] for k, v in kwargs.items()},
        }

        interaction = kwargs.get('interaction')
        if isinstance(interaction, discord.Interaction):
            context['discord_context'] = {
                'guild': interaction.guild.name if interaction.guild else 'DM',
                'channel': getattr(interaction.channel, 'name', str(interaction.channel)),
                'author': str(interaction.user),
                'author_id': interaction.user.id,
                'custom_id': (interaction.data or {}).get('custom_id'),
            }

        msg = kwargs.get('message')
        if isinstance(msg, discord.Message):
            context['discord_context'] = {
                'guild': msg.guild.name if msg.guild else 'DM',
                'channel': getattr(msg.channel, 'name', str(msg.channel)),
                'author': str(msg.author),
                'author_id': msg.author.id,
                'content': msg.content[:100] if msg.content else None,
            }

        return context


class ErrorHandler:
    """Categorized error logging with recovery hints"""

    ERROR_CATEGORIES = {
        'discord': (
            discord.Forbidden,
            discord.NotFound,
            discord.HTTPException,
        ),
        'network': (
            aiohttp.ClientError,
            ConnectionError,
            TimeoutError,
        ),
        'database': (
            DatabaseError,
            sqlite3.Error,
        ),
    }

    RECOVERY_SUGGESTIONS = (
        (discord.Forbidden, "Check bot permissions in server settings"),
        (discord.NotFound, "Resource not found - check IDs and channels"),
        (discord.HTTPException, "Discord API issue - retry the action"),
        (aiohttp.ClientError, "External API unreachable - try again later"),
        (ConnectionError, "Network connection issue - check internet connection"),
        (TimeoutError, "Request timed out - try again later"),
        (DuplicateRecordError, "Record already exists - pick a different key"),
        (DatabaseError, "Database error - check the database file and disk space"),
        (sqlite3.Error, "Database error - check the database file and disk space"),
    )

    @classmethod
    def categorize_error(cls, e: Exception) -> str:
        """Return 'discord', 'network', 'database' or 'general'."""
        for category, error_types in cls.ERROR_CATEGORIES.items():
            if isinstance(e, error_types):
                return category
        return 'general'

    @classmethod
    def get_recovery_suggestion(cls, e: Exception, category: str) -> str:
        for error_type, suggestion in cls.RECOVERY_SUGGESTIONS:
            if isinstance(e, error_type):
                return suggestion
        return "Unexpected error - check logs for details"

    @classmethod
    def handle(cls, e: Exception, location: str, critical: bool = False, **context) -> Dict[str, Any]:
        """
        Log an error with full context.

        Args:
            e: The exception
            location: Where the error occurred
            critical: Also dump the context to logs/errors/
            **context: Additional context

        Returns:
            The collected context, for callers that want to inspect it.
        """
        category = cls.categorize_error(e)
        suggestion = cls.get_recovery_suggestion(e, category)
        full_context = ErrorContext.get_full_context(e, location, **context)

        details = [
            ("Category", category),
            ("Location", location),
            ("Type", full_context['error_type']),
            ("Error", str(e)[:100]),
            ("Recovery", suggestion),
        ]
        if 'discord_context' in full_context:
            dc = full_context['discord_context']
            details.append(("User", f"{dc['author']} ({dc['author_id']})"))
            details.append(("Where", f"{dc['guild']} / #{dc['channel']}"))

        if critical:
            logger.error("💥 CRITICAL ERROR", details)
            logger.info(f"Traceback:\n{full_context['traceback']}")
            cls._store_critical_error(full_context)
        else:
            logger.error(f"Error in {location}", details)

        return full_context

    @staticmethod
    def _store_critical_error(context: Dict[str, Any]) -> None:
        """Write the context as JSON under logs/errors/."""
        try:
            error_dir = Path(LOGS_DIR) / 'errors'
            error_dir.mkdir(exist_ok=True, parents=True)

            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            error_file = error_dir / f"error_{timestamp}.json"

            with open(error_file, 'w', encoding='utf-8') as f:
                json.dump(context, f, indent=2, default=str)

            logger.info(f"Critical error saved to {error_file}")
        except OSError as save_error:
            logger.info(f"Failed to save error details: {save_error}")


def safe_execute(func):
    """
    Decorator for coroutines that must log instead of raising.

    Usage:
        @safe_execute
        async def refresh_panel():
            ...
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            ErrorHandler.handle(
                e,
                location=f"{func.__module__}.{func.__name__}",
                critical=False,
                function_args=str(args)[:100],
                function_kwargs=str(kwargs)[:100],
            )
            return None

    return wrapper


__all__ = ["ErrorContext", "ErrorHandler", "safe_execute"]
