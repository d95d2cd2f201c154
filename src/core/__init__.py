"""
HarborBot - Core Package
========================

Configuration, logging, record stores and the keep-alive server.

DESIGN:
    Core modules expose one shared instance each:
    - get_config() returns the same Config instance
    - get_db() returns the record store selected by init_db()
    - logger is a global TreeLogger instance

    BotContext is imported from src.core.context directly; it depends on
    services and is kept out of this package namespace.
"""

# =============================================================================
# Core Imports
# =============================================================================

from .config import (
    Config,
    ConfigValidationError,
    EmbedColors,
    NY_TZ,
    get_config,
    is_developer,
    is_moderator,
    has_mod_role,
)

from .database import Database, DatabaseManager, MemoryDatabase, get_db, init_db

from .logger import logger, TreeLogger

from .health import HealthCheckServer


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    # Config
    "Config",
    "ConfigValidationError",
    "EmbedColors",
    "NY_TZ",
    "get_config",
    "is_developer",
    "is_moderator",
    "has_mod_role",
    # Database
    "Database",
    "DatabaseManager",
    "MemoryDatabase",
    "get_db",
    "init_db",
    # Logger
    "logger",
    "TreeLogger",
    # Health
    "HealthCheckServer",
]
