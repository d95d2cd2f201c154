"""
HarborBot - Transcript Tests
============================

Transcript rendering and capture from ticket channels.
"""

from unittest.mock import MagicMock

import pytest

from src.events.messages import MessageEvents
from src.services.tickets.transcript import (
    create_transcript_file,
    format_transcript,
    message_to_record,
)


TICKET = {
    "id": "ticket-7",
    "type": "General Support",
    "ticket_name": None,
    "user_id": 3000,
    "status": "closed",
    "created_at": 1704164645.0,
}


class TestFormatTranscript:
    """Tests for format_transcript()."""

    def test_header_and_lines(self):
        messages = [
            {"author": "alice", "content": "hello", "timestamp": 1704164645.0, "attachments": []},
            {"author": "bob", "content": "see file", "timestamp": 1704164700.0,
             "attachments": ["https://cdn.example.com/log.txt"]},
        ]
        text = format_transcript(TICKET, messages)

        assert text.startswith("Transcript for ticket-7 (General Support)")
        assert "Status: closed" in text
        assert "alice: hello" in text
        assert "    attachment: https://cdn.example.com/log.txt" in text

    def test_empty(self):
        assert "(no messages recorded)" in format_transcript(TICKET, [])

    def test_renamed_ticket_uses_name(self):
        ticket = dict(TICKET, ticket_name="ticket-billing")
        assert "(ticket-billing)" in format_transcript(ticket, [])

    def test_file_name(self):
        assert create_transcript_file(TICKET, []).filename == "transcript-ticket-7.txt"


class TestMessageCapture:
    """Tests for message_to_record() and the on_message listener."""

    def test_message_to_record(self, mock_discord_message):
        attachment = MagicMock()
        attachment.url = "https://cdn.example.com/a.png"
        mock_discord_message.attachments = [attachment]

        record = message_to_record(mock_discord_message)
        assert record["id"] == 111222333
        assert record["author"] == "testuser"
        assert record["author_id"] == 123456789
        assert record["attachments"] == ["https://cdn.example.com/a.png"]
        assert record["timestamp"] == mock_discord_message.created_at.timestamp()

    @pytest.mark.asyncio
    async def test_ticket_message_recorded(self, mock_bot, mock_discord_message):
        mock_bot.ctx.tickets.open_ticket(1000, 555666777, 3000, "General Support")

        await MessageEvents(mock_bot).on_message(mock_discord_message)

        transcript = mock_bot.ctx.tickets.transcript(555666777)
        assert [m["content"] for m in transcript] == ["Test message content"]

    @pytest.mark.asyncio
    async def test_other_channels_ignored(self, mock_bot, mock_discord_message):
        mock_bot.ctx.tickets.open_ticket(1000, 555666777, 3000, "General Support")
        mock_discord_message.channel.name = "general"

        await MessageEvents(mock_bot).on_message(mock_discord_message)
        assert mock_bot.ctx.tickets.transcript(555666777) == []

    @pytest.mark.asyncio
    async def test_bots_ignored(self, mock_bot, mock_discord_message):
        mock_bot.ctx.tickets.open_ticket(1000, 555666777, 3000, "General Support")
        mock_discord_message.author.bot = True

        await MessageEvents(mock_bot).on_message(mock_discord_message)
        assert mock_bot.ctx.tickets.transcript(555666777) == []
