"""
HarborBot - Ticket Transcript
=============================

Plain text transcript built from the messages captured into a ticket.
"""

import io
from datetime import datetime
from typing import List

import discord

from src.core.config import NY_TZ
from src.core.database import TicketMessage, TicketRecord


def format_transcript(ticket: TicketRecord, messages: List[TicketMessage]) -> str:
    """Render one line per message, attachments indented underneath."""
    opened = datetime.fromtimestamp(ticket["created_at"], NY_TZ).strftime("%Y-%m-%d %H:%M:%S %Z")
    lines = [
        f"Transcript for {ticket['id']} ({ticket.get('ticket_name') or ticket['type']})",
        f"Opened by {ticket['user_id']} at {opened}",
        f"Status: {ticket['status']}",
        "-" * 60,
    ]

    if not messages:
        lines.append("(no messages recorded)")

    for message in messages:
        stamp = datetime.fromtimestamp(message.get("timestamp", 0), NY_TZ).strftime("%Y-%m-%d %H:%M:%S")
        lines.append(f"[{stamp}] {message.get('author', 'Unknown')}: {message.get('content', '')}")
        for url in message.get("attachments") or []:
            lines.append(f"    attachment: {url}")

    return "\n".join(lines) + "\n"


def create_transcript_file(ticket: TicketRecord, messages: List[TicketMessage]) -> discord.File:
    text = format_transcript(ticket, messages)
    return discord.File(
        io.BytesIO(text.encode("utf-8")),
        filename=f"transcript-{ticket['id']}.txt",
    )


def message_to_record(message: discord.Message) -> TicketMessage:
    """Snapshot a Discord message for storage."""
    return {
        "id": message.id,
        "content": message.content,
        "author": str(message.author),
        "author_id": message.author.id,
        "timestamp": message.created_at.timestamp(),
        "attachments": [a.url for a in message.attachments],
    }


__all__ = ["format_transcript", "create_transcript_file", "message_to_record"]
