"""
HarborBot - In-Memory Record Store
==================================

Volatile backend with the same method surface as DatabaseManager.

DESIGN:
    Used when no database path is configured or SQLite cannot be opened at
    startup. Records live in dicts keyed the same way the SQLite tables
    are keyed. Every read returns a deep copy, so callers cannot change
    stored state without going through an update method. Guarded
    transitions run under one lock and contain no await, so each
    check-and-set is atomic.
"""

import threading
import time
from typing import Any, Dict, List, Optional, Tuple

from src.core.logger import logger
from src.core.database.base import (
    DuplicateRecordError,
    _copy_record,
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
    EmbedTemplateRecord,
    SentEmbedRecord,
    WarningRecord,
    default_ticket_settings,
)

TICKET_UPDATABLE = (
    "type", "status", "claimed_by", "closed_by", "closed_at",
    "ticket_name", "participants", "messages",
)
SETTINGS_UPDATABLE = (
    "category", "staff_roles", "logs_channel", "ticket_types",
    "welcome_message", "panel_channel_id", "panel_message_id",
)


class MemoryDatabase:
    """Dict-backed record store."""

    backend_name = "memory"

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tickets: Dict[int, TicketRecord] = {}
        self._ticket_settings: Dict[int, TicketSettingsRecord] = {}
        self._ticket_logs: List[TicketLogRecord] = []
        self._templates: Dict[Tuple[int, str], EmbedTemplateRecord] = {}
        self._sent_embeds: Dict[int, SentEmbedRecord] = {}
        self._warnings: List[WarningRecord] = []
        self._ticket_seq = 0
        self._template_seq = 0
        self._log_seq = 0
        self._warning_seq = 0

        logger.tree("Memory Store Initialized", [
            ("Persistence", "None (process lifetime)"),
        ], emoji="🧠")

    def close(self) -> None:
        pass

    # =========================================================================
    # Tickets
    # =========================================================================

    def create_ticket(
        self,
        guild_id: int,
        channel_id: int,
        user_id: int,
        ticket_type: str,
    ) -> TicketRecord:
        with self._lock:
            if channel_id in self._tickets:
                raise DuplicateRecordError(f"Ticket already exists for channel {channel_id}")
            self._ticket_seq += 1
            now = _now()
            ticket: TicketRecord = {
                "id": _format_ticket_id(self._ticket_seq),
                "guild_id": guild_id,
                "channel_id": channel_id,
                "user_id": user_id,
                "type": ticket_type,
                "status": "open",
                "claimed_by": None,
                "closed_by": None,
                "closed_at": None,
                "ticket_name": None,
                "participants": [user_id],
                "messages": [],
                "created_at": now,
                "updated_at": now,
            }
            self._tickets[channel_id] = ticket

        logger.tree("Ticket Created (Memory)", [
            ("Ticket ID", ticket["id"]),
            ("Channel", str(channel_id)),
            ("User ID", str(user_id)),
            ("Type", ticket_type),
        ], emoji="🎫")

        return _copy_record(ticket)

    def get_ticket(self, channel_id: int) -> Optional[TicketRecord]:
        return _copy_record(self._tickets.get(channel_id))

    def get_ticket_by_id(self, ticket_id: str) -> Optional[TicketRecord]:
        if _parse_ticket_id(ticket_id) is None:
            return None
        for ticket in self._tickets.values():
            if ticket["id"] == ticket_id:
                return _copy_record(ticket)
        return None

    def list_tickets(self, guild_id: int, status: Optional[str] = None) -> List[TicketRecord]:
        tickets = [
            t for t in self._tickets.values()
            if t["guild_id"] == guild_id and (status is None or t["status"] == status)
        ]
        tickets.sort(key=lambda t: _parse_ticket_id(t["id"]))
        return [_copy_record(t) for t in tickets]

    def update_ticket(self, channel_id: int, fields: Dict[str, Any]) -> Optional[TicketRecord]:
        with self._lock:
            ticket = self._tickets.get(channel_id)
            if ticket is None:
                return None
            ticket.update(_copy_record(_pick_fields(fields, TICKET_UPDATABLE)))
            ticket["updated_at"] = _now()
            return _copy_record(ticket)

    def delete_ticket(self, channel_id: int) -> bool:
        with self._lock:
            return self._tickets.pop(channel_id, None) is not None

    # -------------------------------------------------------------------------
    # Guarded transitions
    # -------------------------------------------------------------------------

    def claim_ticket(self, channel_id: int, staff_id: int) -> bool:
        with self._lock:
            ticket = self._tickets.get(channel_id)
            if ticket is None or ticket["status"] != "open" or ticket["claimed_by"] is not None:
                return False
            ticket["claimed_by"] = staff_id
            ticket["updated_at"] = _now()
            return True

    def close_ticket(self, channel_id: int, closed_by: int) -> bool:
        with self._lock:
            ticket = self._tickets.get(channel_id)
            if ticket is None or ticket["status"] != "open":
                return False
            now = _now()
            ticket["status"] = "closed"
            ticket["closed_by"] = closed_by
            ticket["closed_at"] = now
            ticket["updated_at"] = now
            return True

    def rename_ticket(self, channel_id: int, name: str) -> bool:
        with self._lock:
            ticket = self._tickets.get(channel_id)
            if ticket is None:
                return False
            ticket["ticket_name"] = name
            ticket["updated_at"] = _now()
            return True

    def add_ticket_participant(self, channel_id: int, user_id: int) -> bool:
        with self._lock:
            ticket = self._tickets.get(channel_id)
            if ticket is None or ticket["status"] != "open" or user_id in ticket["participants"]:
                return False
            ticket["participants"].append(user_id)
            ticket["updated_at"] = _now()
            return True

    def remove_ticket_participant(self, channel_id: int, user_id: int) -> bool:
        with self._lock:
            ticket = self._tickets.get(channel_id)
            if (
                ticket is None
                or ticket["status"] != "open"
                or ticket["user_id"] == user_id
                or user_id not in ticket["participants"]
            ):
                return False
            ticket["participants"].remove(user_id)
            ticket["updated_at"] = _now()
            return True

    def append_ticket_message(self, channel_id: int, message: TicketMessage) -> bool:
        with self._lock:
            ticket = self._tickets.get(channel_id)
            if ticket is None:
                return False
            ticket["messages"].append(_copy_record(dict(message)))
            ticket["updated_at"] = _now()
            return True

    def get_ticket_transcript(self, channel_id: int) -> List[TicketMessage]:
        ticket = self._tickets.get(channel_id)
        return _copy_record(ticket["messages"]) if ticket else []

    # =========================================================================
    # Ticket Settings
    # =========================================================================

    def get_ticket_settings(self, guild_id: int) -> Optional[TicketSettingsRecord]:
        return _copy_record(self._ticket_settings.get(guild_id))

    def list_ticket_settings(self) -> List[TicketSettingsRecord]:
        return [_copy_record(s) for _, s in sorted(self._ticket_settings.items())]

    def upsert_ticket_settings(
        self,
        guild_id: int,
        fields: Optional[Dict[str, Any]] = None,
    ) -> TicketSettingsRecord:
        fields = _copy_record(_pick_fields(fields or {}, SETTINGS_UPDATABLE))
        with self._lock:
            settings = self._ticket_settings.get(guild_id)
            now = _now()
            if settings is None:
                settings = default_ticket_settings()
                settings.update({"guild_id": guild_id, "created_at": now})
                self._ticket_settings[guild_id] = settings
                logger.tree("Ticket Settings Created", [
                    ("Guild ID", str(guild_id)),
                    ("Category", fields.get("category", settings["category"])),
                ], emoji="⚙️")
            settings.update(fields)
            settings["updated_at"] = now
            return _copy_record(settings)

    def update_ticket_settings(
        self,
        guild_id: int,
        fields: Dict[str, Any],
    ) -> Optional[TicketSettingsRecord]:
        with self._lock:
            settings = self._ticket_settings.get(guild_id)
            if settings is None:
                return None
            settings.update(_copy_record(_pick_fields(fields, SETTINGS_UPDATABLE)))
            settings["updated_at"] = _now()
            return _copy_record(settings)

    def delete_ticket_settings(self, guild_id: int) -> bool:
        with self._lock:
            return self._ticket_settings.pop(guild_id, None) is not None

    def set_panel_message(self, guild_id: int, channel_id: int, message_id: int) -> TicketSettingsRecord:
        return self.upsert_ticket_settings(guild_id, {
            "panel_channel_id": channel_id,
            "panel_message_id": message_id,
        })

    def update_ticket_category(self, guild_id: int, category: str) -> TicketSettingsRecord:
        return self.upsert_ticket_settings(guild_id, {"category": category})

    # =========================================================================
    # Ticket Logs
    # =========================================================================

    def add_ticket_log(
        self,
        guild_id: int,
        action: str,
        user_id: int,
        details: Optional[Dict[str, Any]] = None,
        ticket_id: Optional[str] = None,
    ) -> TicketLogRecord:
        with self._lock:
            self._log_seq += 1
            entry: TicketLogRecord = {
                "id": self._log_seq,
                "guild_id": guild_id,
                "ticket_id": ticket_id,
                "action": action,
                "user_id": user_id,
                "details": _copy_record(dict(details or {})),
                "created_at": _now(),
            }
            self._ticket_logs.append(entry)
            return _copy_record(entry)

    def get_ticket_logs(self, guild_id: int, limit: int = 10) -> List[TicketLogRecord]:
        entries = [e for e in self._ticket_logs if e["guild_id"] == guild_id]
        entries.sort(key=lambda e: (e["created_at"], e["id"]), reverse=True)
        return [_copy_record(e) for e in entries[:limit]]

    # =========================================================================
    # Templates
    # =========================================================================

    def create_template(
        self,
        guild_id: int,
        name: str,
        embed_data: Dict[str, Any],
        created_by: int,
    ) -> EmbedTemplateRecord:
        with self._lock:
            key = (guild_id, name)
            if key in self._templates:
                raise DuplicateRecordError(f"Template {name!r} already exists")
            self._template_seq += 1
            now = _now()
            record: EmbedTemplateRecord = {
                "id": self._template_seq,
                "guild_id": guild_id,
                "name": name,
                "embed_data": _copy_record(embed_data),
                "created_by": created_by,
                "created_at": now,
                "updated_at": now,
            }
            self._templates[key] = record

        logger.tree("Embed Template Saved", [
            ("Guild ID", str(guild_id)),
            ("Name", name),
            ("Created By", str(created_by)),
        ], emoji="📝")

        return _copy_record(record)

    def get_template(self, guild_id: int, name: str) -> Optional[EmbedTemplateRecord]:
        return _copy_record(self._templates.get((guild_id, name)))

    def list_templates(self, guild_id: int) -> List[EmbedTemplateRecord]:
        records = [r for (g, _), r in self._templates.items() if g == guild_id]
        records.sort(key=lambda r: r["name"])
        return [_copy_record(r) for r in records]

    def update_template(
        self,
        guild_id: int,
        name: str,
        embed_data: Dict[str, Any],
    ) -> Optional[EmbedTemplateRecord]:
        with self._lock:
            record = self._templates.get((guild_id, name))
            if record is None:
                return None
            record["embed_data"] = _copy_record(embed_data)
            record["updated_at"] = _now()
            return _copy_record(record)

    def delete_template(self, guild_id: int, name: str) -> bool:
        with self._lock:
            removed = self._templates.pop((guild_id, name), None) is not None
        if removed:
            logger.tree("Embed Template Deleted", [
                ("Guild ID", str(guild_id)),
                ("Name", name),
            ], emoji="🗑️")
        return removed

    # =========================================================================
    # Sent Embeds
    # =========================================================================

    def store_sent_embed(
        self,
        message_id: int,
        channel_id: int,
        guild_id: int,
        embed_data: Dict[str, Any],
        created_by: int,
    ) -> SentEmbedRecord:
        with self._lock:
            now = _now()
            existing = self._sent_embeds.get(message_id)
            if existing is not None:
                existing["embed_data"] = _copy_record(embed_data)
                existing["updated_at"] = now
                return _copy_record(existing)
            record: SentEmbedRecord = {
                "message_id": message_id,
                "channel_id": channel_id,
                "guild_id": guild_id,
                "embed_data": _copy_record(embed_data),
                "created_by": created_by,
                "updated_by": None,
                "created_at": now,
                "updated_at": now,
            }
            self._sent_embeds[message_id] = record
            return _copy_record(record)

    def get_sent_embed(self, message_id: int) -> Optional[SentEmbedRecord]:
        return _copy_record(self._sent_embeds.get(message_id))

    def list_sent_embeds(self, guild_id: int) -> List[SentEmbedRecord]:
        records = [r for r in self._sent_embeds.values() if r["guild_id"] == guild_id]
        records.sort(key=lambda r: r["created_at"])
        return [_copy_record(r) for r in records]

    def update_sent_embed(
        self,
        message_id: int,
        embed_data: Dict[str, Any],
        updated_by: int,
    ) -> Optional[SentEmbedRecord]:
        with self._lock:
            record = self._sent_embeds.get(message_id)
            if record is None:
                return None
            record["embed_data"] = _copy_record(embed_data)
            record["updated_by"] = updated_by
            record["updated_at"] = _now()
            return _copy_record(record)

    def delete_sent_embed(self, message_id: int) -> bool:
        with self._lock:
            return self._sent_embeds.pop(message_id, None) is not None

    # =========================================================================
    # Warnings
    # =========================================================================

    def _numbered_warnings(self, guild_id: int, user_id: int) -> List[WarningRecord]:
        rows = [
            w for w in self._warnings
            if w["guild_id"] == guild_id and w["user_id"] == user_id
        ]
        rows.sort(key=lambda w: w["id"])
        numbered = []
        for number, row in enumerate(rows, start=1):
            record = _copy_record(row)
            record["number"] = number
            numbered.append(record)
        return numbered

    def add_warning(
        self,
        guild_id: int,
        user_id: int,
        issued_by: int,
        reason: str,
    ) -> WarningRecord:
        with self._lock:
            self._warning_seq += 1
            self._warnings.append({
                "id": self._warning_seq,
                "guild_id": guild_id,
                "user_id": user_id,
                "issued_by": issued_by,
                "reason": reason,
                "created_at": _now(),
            })
            record = self._numbered_warnings(guild_id, user_id)[-1]

        logger.tree("Warning Added", [
            ("User ID", str(user_id)),
            ("Issued By", str(issued_by)),
            ("Number", str(record["number"])),
            ("Reason", (reason or "None")[:50]),
        ], emoji="⚠️")

        return record

    def get_user_warnings(self, guild_id: int, user_id: int) -> List[WarningRecord]:
        return self._numbered_warnings(guild_id, user_id)

    def get_user_warn_count(self, guild_id: int, user_id: int) -> int:
        return len(self._numbered_warnings(guild_id, user_id))

    def remove_warning(self, guild_id: int, user_id: int, number: int) -> Optional[WarningRecord]:
        with self._lock:
            warnings = self._numbered_warnings(guild_id, user_id)
            if number < 1 or number > len(warnings):
                return None
            target = warnings[number - 1]
            self._warnings = [w for w in self._warnings if w["id"] != target["id"]]
        return target

    def clear_warnings(self, guild_id: int, user_id: int) -> int:
        with self._lock:
            before = len(self._warnings)
            self._warnings = [
                w for w in self._warnings
                if not (w["guild_id"] == guild_id and w["user_id"] == user_id)
            ]
            return before - len(self._warnings)

    # =========================================================================
    # Status
    # =========================================================================

    def init_schema(self) -> None:
        logger.info("Memory store has no schema to initialize")

    def ping(self) -> Dict[str, Any]:
        started = time.perf_counter()
        counts = {
            "tickets": len(self._tickets),
            "ticket_logs": len(self._ticket_logs),
            "embed_templates": len(self._templates),
            "sent_embeds": len(self._sent_embeds),
            "warnings": len(self._warnings),
        }
        return {
            "backend": self.backend_name,
            "ok": True,
            "latency_ms": round((time.perf_counter() - started) * 1000, 2),
            "server_time": time.strftime("%Y-%m-%d %H:%M:%S UTC", time.gmtime()),
            "location": "process memory",
            "counts": counts,
        }


__all__ = ["MemoryDatabase"]
