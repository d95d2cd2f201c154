"""
HarborBot - Ticket Workflow
===========================

Ticket state machine on top of the record store.

States are open and closed. claim/close and participant changes are
only legal on open tickets; rename is legal in any state. Every
successful transition appends one ticket log entry. A refused
transition writes nothing and tells the caller why.

DESIGN:
    The workflow has no Discord dependency. It is handed a store (SQLite
    or memory) and answers with a TransitionResult, so the Discord side
    (TicketService) only has to mirror a successful transition onto the
    channel. The guard that decides the outcome is the store's
    conditional write, so two staff members clicking "Claim" at the same
    time produce exactly one claim.
"""

import re
from typing import Any, Dict, List, NamedTuple, Optional

from src.core.logger import logger
from src.core.database import Store, TicketMessage, TicketRecord


NOT_A_TICKET = "This command can only be used in a ticket channel."
ALREADY_CLOSED = "This ticket is already closed."
ALREADY_CLAIMED_SELF = "You have already claimed this ticket."
ALREADY_CLAIMED_OTHER = "This ticket is already claimed by <@{user_id}>."
ALREADY_ADDED = "This user is already added to the ticket."
NOT_IN_TICKET = "This user is not in the ticket."
CANNOT_REMOVE_CREATOR = "You cannot remove the ticket creator from the ticket."
INVALID_NAME = "Please provide a valid ticket name."

_NAME_STRIP = re.compile(r"[^\w-]")


class TransitionResult(NamedTuple):
    """Outcome of a workflow call. ticket is the record after the change."""
    ok: bool
    message: str
    ticket: Optional[TicketRecord] = None


def clean_ticket_name(name: str) -> str:
    """Keep word characters and dashes, lowercased. May return ""."""
    return _NAME_STRIP.sub("", name or "").lower()


class TicketWorkflow:
    """Guarded ticket transitions with audit logging."""

    def __init__(self, db: Store) -> None:
        self.db = db

    # =========================================================================
    # Internal
    # =========================================================================

    def _log(
        self,
        ticket: TicketRecord,
        action: str,
        user_id: int,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.db.add_ticket_log(
            ticket["guild_id"],
            action,
            user_id,
            details=details,
            ticket_id=ticket["id"],
        )

    def _refuse(self, channel_id: int, action: str, message: str) -> TransitionResult:
        logger.debug("Ticket Transition Refused", [
            ("Channel", str(channel_id)),
            ("Action", action),
            ("Reason", message),
        ])
        return TransitionResult(False, message, self.db.get_ticket(channel_id))

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def open_ticket(
        self,
        guild_id: int,
        channel_id: int,
        user_id: int,
        ticket_type: str,
        reason: Optional[str] = None,
    ) -> TransitionResult:
        """Create an open ticket owned by user_id."""
        ticket = self.db.create_ticket(guild_id, channel_id, user_id, ticket_type)
        self._log(ticket, "create", user_id, {
            "type": ticket_type,
            "reason": reason or "No reason provided",
        })
        return TransitionResult(True, f"Ticket {ticket['id']} created.", ticket)

    def claim(self, channel_id: int, user_id: int) -> TransitionResult:
        ticket = self.db.get_ticket(channel_id)
        if ticket is None:
            return TransitionResult(False, NOT_A_TICKET)

        if not self.db.claim_ticket(channel_id, user_id):
            # Lost the guard; explain using the current record
            current = self.db.get_ticket(channel_id) or ticket
            if current["status"] == "closed":
                return self._refuse(channel_id, "claim", ALREADY_CLOSED)
            if current.get("claimed_by") == user_id:
                return self._refuse(channel_id, "claim", ALREADY_CLAIMED_SELF)
            return self._refuse(
                channel_id, "claim",
                ALREADY_CLAIMED_OTHER.format(user_id=current.get("claimed_by")),
            )

        claimed = self.db.get_ticket(channel_id)
        self._log(claimed, "claim", user_id)

        logger.tree("Ticket Claimed", [
            ("Ticket ID", claimed["id"]),
            ("Staff ID", str(user_id)),
        ], emoji="🙋")

        return TransitionResult(True, "You have claimed this ticket.", claimed)

    def close(self, channel_id: int, user_id: int, reason: Optional[str] = None) -> TransitionResult:
        ticket = self.db.get_ticket(channel_id)
        if ticket is None:
            return TransitionResult(False, NOT_A_TICKET)

        if not self.db.close_ticket(channel_id, user_id):
            return self._refuse(channel_id, "close", ALREADY_CLOSED)

        reason = reason or "No reason provided"
        closed = self.db.get_ticket(channel_id)
        self._log(closed, "close", user_id, {"reason": reason})

        logger.tree("Ticket Closed", [
            ("Ticket ID", closed["id"]),
            ("Closed By", str(user_id)),
            ("Reason", reason[:50]),
        ], emoji="🔒")

        return TransitionResult(True, "This ticket has been closed.", closed)

    # =========================================================================
    # Participants
    # =========================================================================

    def add_participant(self, channel_id: int, user_id: int, actor_id: int) -> TransitionResult:
        ticket = self.db.get_ticket(channel_id)
        if ticket is None:
            return TransitionResult(False, NOT_A_TICKET)
        if ticket["status"] == "closed":
            return self._refuse(channel_id, "add_user", ALREADY_CLOSED)

        if not self.db.add_ticket_participant(channel_id, user_id):
            current = self.db.get_ticket(channel_id) or ticket
            if current["status"] == "closed":
                return self._refuse(channel_id, "add_user", ALREADY_CLOSED)
            return self._refuse(channel_id, "add_user", ALREADY_ADDED)

        updated = self.db.get_ticket(channel_id)
        self._log(updated, "add_user", actor_id, {"target_id": user_id})

        logger.tree("Ticket User Added", [
            ("Ticket ID", updated["id"]),
            ("User ID", str(user_id)),
            ("By", str(actor_id)),
        ], emoji="➕")

        return TransitionResult(True, f"<@{user_id}> has been added to the ticket.", updated)

    def remove_participant(self, channel_id: int, user_id: int, actor_id: int) -> TransitionResult:
        ticket = self.db.get_ticket(channel_id)
        if ticket is None:
            return TransitionResult(False, NOT_A_TICKET)
        if ticket["user_id"] == user_id:
            return self._refuse(channel_id, "remove_user", CANNOT_REMOVE_CREATOR)
        if ticket["status"] == "closed":
            return self._refuse(channel_id, "remove_user", ALREADY_CLOSED)
        if user_id not in ticket.get("participants", []):
            return self._refuse(channel_id, "remove_user", NOT_IN_TICKET)

        if not self.db.remove_ticket_participant(channel_id, user_id):
            current = self.db.get_ticket(channel_id) or ticket
            if current["status"] == "closed":
                return self._refuse(channel_id, "remove_user", ALREADY_CLOSED)
            return self._refuse(channel_id, "remove_user", NOT_IN_TICKET)

        updated = self.db.get_ticket(channel_id)
        self._log(updated, "remove_user", actor_id, {"target_id": user_id})

        logger.tree("Ticket User Removed", [
            ("Ticket ID", updated["id"]),
            ("User ID", str(user_id)),
            ("By", str(actor_id)),
        ], emoji="➖")

        return TransitionResult(True, f"<@{user_id}> has been removed from the ticket.", updated)

    # =========================================================================
    # Rename
    # =========================================================================

    def rename(self, channel_id: int, name: str, actor_id: int) -> TransitionResult:
        """Rename to ticket-<clean name>. Allowed on closed tickets too."""
        ticket = self.db.get_ticket(channel_id)
        if ticket is None:
            return TransitionResult(False, NOT_A_TICKET)

        clean = clean_ticket_name(name)
        if not clean:
            return self._refuse(channel_id, "rename", INVALID_NAME)

        formatted = f"ticket-{clean}"
        if not self.db.rename_ticket(channel_id, formatted):
            return TransitionResult(False, NOT_A_TICKET)

        renamed = self.db.get_ticket(channel_id)
        self._log(renamed, "rename", actor_id, {
            "old_name": ticket.get("ticket_name"),
            "new_name": formatted,
        })

        logger.tree("Ticket Renamed", [
            ("Ticket ID", renamed["id"]),
            ("Name", formatted),
            ("By", str(actor_id)),
        ], emoji="✏️")

        return TransitionResult(True, f"The ticket has been renamed to `{formatted}`.", renamed)

    # =========================================================================
    # Transcript
    # =========================================================================

    def record_message(self, channel_id: int, message: TicketMessage) -> bool:
        """Append a message to the transcript. False if the channel has no ticket."""
        return self.db.append_ticket_message(channel_id, message)

    def transcript(self, channel_id: int) -> List[TicketMessage]:
        return self.db.get_ticket_transcript(channel_id)


__all__ = [
    "TicketWorkflow",
    "TransitionResult",
    "clean_ticket_name",
    "NOT_A_TICKET",
    "ALREADY_CLOSED",
    "ALREADY_CLAIMED_SELF",
    "ALREADY_CLAIMED_OTHER",
    "ALREADY_ADDED",
    "NOT_IN_TICKET",
    "CANNOT_REMOVE_CREATOR",
    "INVALID_NAME",
]
