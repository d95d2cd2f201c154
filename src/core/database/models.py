"""
HarborBot - Database Type Definitions
=====================================

TypedDict definitions for records returned by either backend, plus the
default ticket settings used when a guild has not configured anything.
"""

import copy
from typing import Any, Dict, List, Optional, TypedDict


class TicketMessage(TypedDict, total=False):
    """One message captured into a ticket transcript."""
    id: int
    content: str
    author: str
    author_id: int
    timestamp: float
    attachments: List[str]


class TicketRecord(TypedDict, total=False):
    """Type for ticket records. Keyed by channel_id."""
    id: str
    guild_id: int
    channel_id: int
    user_id: int
    type: str
    status: str
    claimed_by: Optional[int]
    closed_by: Optional[int]
    closed_at: Optional[float]
    ticket_name: Optional[str]
    participants: List[int]
    messages: List[TicketMessage]
    created_at: float
    updated_at: float


class TicketType(TypedDict):
    name: str
    emoji: str


class TicketSettingsRecord(TypedDict, total=False):
    """Per-guild ticket configuration."""
    guild_id: int
    category: str
    staff_roles: List[str]
    logs_channel: str
    ticket_types: List[TicketType]
    welcome_message: str
    panel_channel_id: Optional[int]
    panel_message_id: Optional[int]
    created_at: float
    updated_at: float


class TicketLogRecord(TypedDict, total=False):
    """Append-only audit entry for ticket actions."""
    id: int
    guild_id: int
    ticket_id: Optional[str]
    action: str
    user_id: int
    details: Dict[str, Any]
    created_at: float


class EmbedTemplateRecord(TypedDict, total=False):
    """Named embed payload, unique per (guild_id, name)."""
    id: int
    guild_id: int
    name: str
    embed_data: Dict[str, Any]
    created_by: int
    created_at: float
    updated_at: float


class SentEmbedRecord(TypedDict, total=False):
    """Embed the bot posted, keyed by message_id."""
    message_id: int
    channel_id: int
    guild_id: int
    embed_data: Dict[str, Any]
    created_by: int
    updated_by: Optional[int]
    created_at: float
    updated_at: float


class WarningRecord(TypedDict, total=False):
    """Warning row. number is the 1-based display position for the user."""
    id: int
    number: int
    guild_id: int
    user_id: int
    issued_by: int
    reason: str
    created_at: float


# =============================================================================
# Ticket Settings Defaults
# =============================================================================

TICKET_LOG_ACTIONS = ("create", "close", "claim", "add_user", "remove_user", "rename")

DEFAULT_TICKET_SETTINGS: Dict[str, Any] = {
    "category": "Tickets",
    "staff_roles": [],
    "logs_channel": "ticket-logs",
    "ticket_types": [
        {"name": "General Support", "emoji": "🔧"},
        {"name": "Report Issue", "emoji": "⚠️"},
        {"name": "Feature Request", "emoji": "💡"},
    ],
    "welcome_message": "Thank you for creating a ticket. Support staff will be with you shortly.",
    "panel_channel_id": None,
    "panel_message_id": None,
}


def default_ticket_settings() -> Dict[str, Any]:
    """Fresh copy of the defaults, safe to mutate."""
    return copy.deepcopy(DEFAULT_TICKET_SETTINGS)


__all__ = [
    "TicketMessage",
    "TicketRecord",
    "TicketType",
    "TicketSettingsRecord",
    "TicketLogRecord",
    "EmbedTemplateRecord",
    "SentEmbedRecord",
    "WarningRecord",
    "TICKET_LOG_ACTIONS",
    "DEFAULT_TICKET_SETTINGS",
    "default_ticket_settings",
]
