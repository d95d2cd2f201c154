"""
HarborBot - Database Ticket Operations Module
=============================================

Tickets, per-guild ticket settings and the ticket audit log.

DESIGN:
    Every state change a user can race on (claim, close, participant
    changes) is a single conditional write. claim/close are one UPDATE
    with the guard in the WHERE clause; participant and transcript
    changes read and write inside one BEGIN IMMEDIATE transaction.
    A False return always means "guard not met, nothing written".
"""

from typing import Any, Dict, List, Optional, TYPE_CHECKING

from src.core.logger import logger
from src.core.database.base import (
    _safe_json_loads,
    _json_dumps,
    _now,
    _pick_fields,
    _format_ticket_id,
    _parse_ticket_id,
)
from src.core.database.models import (
    TicketRecord,
    TicketSettingsRecord,
    TicketLogRecord,
    TicketMessage,
    default_ticket_settings,
)

if TYPE_CHECKING:
    from src.core.database.manager import DatabaseManager


TICKET_UPDATABLE = (
    "type", "status", "claimed_by", "closed_by", "closed_at",
    "ticket_name", "participants", "messages",
)
TICKET_JSON_COLUMNS = ("participants", "messages")

SETTINGS_UPDATABLE = (
    "category", "staff_roles", "logs_channel", "ticket_types",
    "welcome_message", "panel_channel_id", "panel_message_id",
)
SETTINGS_JSON_COLUMNS = ("staff_roles", "ticket_types")


# =============================================================================
# Row Conversion
# =============================================================================

def _row_to_ticket(row) -> Optional[TicketRecord]:
    if row is None:
        return None
    data = dict(row)
    data["id"] = _format_ticket_id(data.pop("ticket_number"))
    data["participants"] = _safe_json_loads(data.get("participants"), [])
    data["messages"] = _safe_json_loads(data.get("messages"), [])
    return data


def _row_to_settings(row) -> Optional[TicketSettingsRecord]:
    if row is None:
        return None
    data = dict(row)
    data["staff_roles"] = _safe_json_loads(data.get("staff_roles"), [])
    data["ticket_types"] = _safe_json_loads(data.get("ticket_types"), [])
    return data


def _row_to_log(row) -> TicketLogRecord:
    data = dict(row)
    data["details"] = _safe_json_loads(data.get("details"), {})
    return data


def _encode(fields: Dict[str, Any], json_columns) -> Dict[str, Any]:
    return {
        k: (_json_dumps(v) if k in json_columns else v)
        for k, v in fields.items()
    }


class TicketsMixin:
    """Mixin for ticket, ticket settings and ticket log operations."""

    # =========================================================================
    # Tickets
    # =========================================================================

    def create_ticket(
        self: "DatabaseManager",
        guild_id: int,
        channel_id: int,
        user_id: int,
        ticket_type: str,
    ) -> TicketRecord:
        """
        Insert a new open ticket owned by user_id.

        Raises:
            DuplicateRecordError: If channel_id already has a ticket.
        """
        now = _now()
        self.execute(
            """INSERT INTO tickets
               (guild_id, channel_id, user_id, type, status, participants,
                messages, created_at, updated_at)
               VALUES (?, ?, ?, ?, 'open', ?, '[]', ?, ?)""",
            (guild_id, channel_id, user_id, ticket_type, _json_dumps([user_id]), now, now)
        )
        ticket = self.get_ticket(channel_id)

        logger.tree("Ticket Created (DB)", [
            ("Ticket ID", ticket["id"]),
            ("Channel", str(channel_id)),
            ("User ID", str(user_id)),
            ("Type", ticket_type),
        ], emoji="🎫")

        return ticket

    def get_ticket(self: "DatabaseManager", channel_id: int) -> Optional[TicketRecord]:
        row = self.fetchone("SELECT * FROM tickets WHERE channel_id = ?", (channel_id,))
        return _row_to_ticket(row)

    def get_ticket_by_id(self: "DatabaseManager", ticket_id: str) -> Optional[TicketRecord]:
        number = _parse_ticket_id(ticket_id)
        if number is None:
            return None
        row = self.fetchone("SELECT * FROM tickets WHERE ticket_number = ?", (number,))
        return _row_to_ticket(row)

    def list_tickets(
        self: "DatabaseManager",
        guild_id: int,
        status: Optional[str] = None,
    ) -> List[TicketRecord]:
        """List a guild's tickets in creation order, optionally by status."""
        if status:
            rows = self.fetchall(
                """SELECT * FROM tickets WHERE guild_id = ? AND status = ?
                   ORDER BY ticket_number""",
                (guild_id, status)
            )
        else:
            rows = self.fetchall(
                "SELECT * FROM tickets WHERE guild_id = ? ORDER BY ticket_number",
                (guild_id,)
            )
        return [_row_to_ticket(r) for r in rows]

    def update_ticket(
        self: "DatabaseManager",
        channel_id: int,
        fields: Dict[str, Any],
    ) -> Optional[TicketRecord]:
        """Merge fields into a ticket. Returns None if there is no ticket."""
        updates = _encode(_pick_fields(fields, TICKET_UPDATABLE), TICKET_JSON_COLUMNS)
        updates["updated_at"] = _now()

        assignments = ", ".join(f"{column} = ?" for column in updates)
        cursor = self.execute(
            f"UPDATE tickets SET {assignments} WHERE channel_id = ?",
            (*updates.values(), channel_id)
        )
        if cursor.rowcount == 0:
            return None
        return self.get_ticket(channel_id)

    def delete_ticket(self: "DatabaseManager", channel_id: int) -> bool:
        cursor = self.execute("DELETE FROM tickets WHERE channel_id = ?", (channel_id,))
        if cursor.rowcount > 0:
            logger.tree("Ticket Deleted (DB)", [
                ("Channel", str(channel_id)),
            ], emoji="🗑️")
            return True
        return False

    # -------------------------------------------------------------------------
    # Guarded transitions
    # -------------------------------------------------------------------------

    def claim_ticket(self: "DatabaseManager", channel_id: int, staff_id: int) -> bool:
        """Claim an open, unclaimed ticket."""
        cursor = self.execute(
            """UPDATE tickets SET claimed_by = ?, updated_at = ?
               WHERE channel_id = ? AND status = 'open' AND claimed_by IS NULL""",
            (staff_id, _now(), channel_id)
        )
        return cursor.rowcount > 0

    def close_ticket(self: "DatabaseManager", channel_id: int, closed_by: int) -> bool:
        """Close an open ticket."""
        now = _now()
        cursor = self.execute(
            """UPDATE tickets SET status = 'closed', closed_by = ?, closed_at = ?, updated_at = ?
               WHERE channel_id = ? AND status = 'open'""",
            (closed_by, now, now, channel_id)
        )
        return cursor.rowcount > 0

    def rename_ticket(self: "DatabaseManager", channel_id: int, name: str) -> bool:
        cursor = self.execute(
            "UPDATE tickets SET ticket_name = ?, updated_at = ? WHERE channel_id = ?",
            (name, _now(), channel_id)
        )
        return cursor.rowcount > 0

    def add_ticket_participant(self: "DatabaseManager", channel_id: int, user_id: int) -> bool:
        """Add user_id to an open ticket's participants if not already there."""
        with self.transaction() as tx:
            tx.execute(
                "SELECT status, participants FROM tickets WHERE channel_id = ?",
                (channel_id,)
            )
            row = tx.fetchone()
            if row is None or row["status"] != "open":
                return False
            participants = _safe_json_loads(row["participants"], [])
            if user_id in participants:
                return False
            participants.append(user_id)
            tx.execute(
                "UPDATE tickets SET participants = ?, updated_at = ? WHERE channel_id = ?",
                (_json_dumps(participants), _now(), channel_id)
            )
        return True

    def remove_ticket_participant(self: "DatabaseManager", channel_id: int, user_id: int) -> bool:
        """Remove a non-creator participant from an open ticket."""
        with self.transaction() as tx:
            tx.execute(
                "SELECT status, user_id, participants FROM tickets WHERE channel_id = ?",
                (channel_id,)
            )
            row = tx.fetchone()
            if row is None or row["status"] != "open" or row["user_id"] == user_id:
                return False
            participants = _safe_json_loads(row["participants"], [])
            if user_id not in participants:
                return False
            participants.remove(user_id)
            tx.execute(
                "UPDATE tickets SET participants = ?, updated_at = ? WHERE channel_id = ?",
                (_json_dumps(participants), _now(), channel_id)
            )
        return True

    def append_ticket_message(
        self: "DatabaseManager",
        channel_id: int,
        message: TicketMessage,
    ) -> bool:
        """Append one message to a ticket transcript."""
        with self.transaction() as tx:
            tx.execute("SELECT messages FROM tickets WHERE channel_id = ?", (channel_id,))
            row = tx.fetchone()
            if row is None:
                return False
            messages = _safe_json_loads(row["messages"], [])
            messages.append(dict(message))
            tx.execute(
                "UPDATE tickets SET messages = ?, updated_at = ? WHERE channel_id = ?",
                (_json_dumps(messages), _now(), channel_id)
            )
        return True

    def get_ticket_transcript(self: "DatabaseManager", channel_id: int) -> List[TicketMessage]:
        row = self.fetchone("SELECT messages FROM tickets WHERE channel_id = ?", (channel_id,))
        if row is None:
            return []
        return _safe_json_loads(row["messages"], [])

    # =========================================================================
    # Ticket Settings
    # =========================================================================

    def get_ticket_settings(self: "DatabaseManager", guild_id: int) -> Optional[TicketSettingsRecord]:
        row = self.fetchone("SELECT * FROM ticket_settings WHERE guild_id = ?", (guild_id,))
        return _row_to_settings(row)

    def list_ticket_settings(self: "DatabaseManager") -> List[TicketSettingsRecord]:
        rows = self.fetchall("SELECT * FROM ticket_settings ORDER BY guild_id")
        return [_row_to_settings(r) for r in rows]

    def upsert_ticket_settings(
        self: "DatabaseManager",
        guild_id: int,
        fields: Optional[Dict[str, Any]] = None,
    ) -> TicketSettingsRecord:
        """
        Create the guild's settings from defaults, or merge into existing ones.
        """
        fields = _pick_fields(fields or {}, SETTINGS_UPDATABLE)
        existing = self.get_ticket_settings(guild_id)
        if existing is not None:
            return self.update_ticket_settings(guild_id, fields)

        now = _now()
        settings = default_ticket_settings()
        settings.update(fields)
        encoded = _encode(settings, SETTINGS_JSON_COLUMNS)
        self.execute(
            """INSERT INTO ticket_settings
               (guild_id, category, staff_roles, logs_channel, ticket_types,
                welcome_message, panel_channel_id, panel_message_id, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                guild_id, encoded["category"], encoded["staff_roles"],
                encoded["logs_channel"], encoded["ticket_types"],
                encoded["welcome_message"], encoded["panel_channel_id"],
                encoded["panel_message_id"], now, now,
            )
        )

        logger.tree("Ticket Settings Created", [
            ("Guild ID", str(guild_id)),
            ("Category", settings["category"]),
            ("Logs Channel", settings["logs_channel"]),
        ], emoji="⚙️")

        return self.get_ticket_settings(guild_id)

    def update_ticket_settings(
        self: "DatabaseManager",
        guild_id: int,
        fields: Dict[str, Any],
    ) -> Optional[TicketSettingsRecord]:
        updates = _encode(_pick_fields(fields, SETTINGS_UPDATABLE), SETTINGS_JSON_COLUMNS)
        updates["updated_at"] = _now()

        assignments = ", ".join(f"{column} = ?" for column in updates)
        cursor = self.execute(
            f"UPDATE ticket_settings SET {assignments} WHERE guild_id = ?",
            (*updates.values(), guild_id)
        )
        if cursor.rowcount == 0:
            return None
        return self.get_ticket_settings(guild_id)

    def delete_ticket_settings(self: "DatabaseManager", guild_id: int) -> bool:
        cursor = self.execute("DELETE FROM ticket_settings WHERE guild_id = ?", (guild_id,))
        return cursor.rowcount > 0

    def set_panel_message(
        self: "DatabaseManager",
        guild_id: int,
        channel_id: int,
        message_id: int,
    ) -> TicketSettingsRecord:
        return self.upsert_ticket_settings(guild_id, {
            "panel_channel_id": channel_id,
            "panel_message_id": message_id,
        })

    def update_ticket_category(self: "DatabaseManager", guild_id: int, category: str) -> TicketSettingsRecord:
        return self.upsert_ticket_settings(guild_id, {"category": category})

    # =========================================================================
    # Ticket Logs
    # =========================================================================

    def add_ticket_log(
        self: "DatabaseManager",
        guild_id: int,
        action: str,
        user_id: int,
        details: Optional[Dict[str, Any]] = None,
        ticket_id: Optional[str] = None,
    ) -> TicketLogRecord:
        now = _now()
        cursor = self.execute(
            """INSERT INTO ticket_logs (guild_id, ticket_id, action, user_id, details, created_at)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (guild_id, ticket_id, action, user_id, _json_dumps(details or {}), now)
        )
        return {
            "id": cursor.lastrowid,
            "guild_id": guild_id,
            "ticket_id": ticket_id,
            "action": action,
            "user_id": user_id,
            "details": dict(details or {}),
            "created_at": now,
        }

    def get_ticket_logs(
        self: "DatabaseManager",
        guild_id: int,
        limit: int = 10,
    ) -> List[TicketLogRecord]:
        """Most recent log entries first."""
        rows = self.fetchall(
            """SELECT * FROM ticket_logs WHERE guild_id = ?
               ORDER BY created_at DESC, id DESC LIMIT ?""",
            (guild_id, limit)
        )
        return [_row_to_log(r) for r in rows]


__all__ = ["TicketsMixin"]
