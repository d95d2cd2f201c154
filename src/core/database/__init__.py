"""
HarborBot - Database Module
===========================

Record stores for tickets, embeds and warnings.

Two interchangeable backends share one method surface:
DatabaseManager (SQLite) and MemoryDatabase (process memory).
init_db() selects one at startup and get_db() returns it.
"""

from src.core.database.manager import (
    DatabaseManager,
    Database,
    Store,
    init_db,
    get_db,
    reset_db,
    DATA_DIR,
    DB_PATH,
)
from src.core.database.memory import MemoryDatabase
from src.core.database.base import (
    DatabaseError,
    DuplicateRecordError,
    _safe_json_loads,
)
from src.core.database.models import (
    TicketRecord,
    TicketSettingsRecord,
    TicketLogRecord,
    TicketMessage,
    TicketType,
    EmbedTemplateRecord,
    SentEmbedRecord,
    WarningRecord,
    DEFAULT_TICKET_SETTINGS,
    TICKET_LOG_ACTIONS,
    default_ticket_settings,
)

__all__ = [
    # Backends
    "DatabaseManager",
    "Database",
    "MemoryDatabase",
    "Store",
    "init_db",
    "get_db",
    "reset_db",

    # Errors
    "DatabaseError",
    "DuplicateRecordError",

    # Helpers
    "_safe_json_loads",
    "DATA_DIR",
    "DB_PATH",

    # Type definitions
    "TicketRecord",
    "TicketSettingsRecord",
    "TicketLogRecord",
    "TicketMessage",
    "TicketType",
    "EmbedTemplateRecord",
    "SentEmbedRecord",
    "WarningRecord",
    "DEFAULT_TICKET_SETTINGS",
    "TICKET_LOG_ACTIONS",
    "default_ticket_settings",
]
