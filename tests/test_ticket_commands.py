"""
HarborBot - Ticket Command Tests
================================

Settings written by the ticket configuration commands.
"""

from unittest.mock import MagicMock

import discord
import pytest

from src.commands.tickets.cog import TicketsCog


@pytest.fixture
def tickets_cog(mock_bot):
    return TicketsCog(mock_bot)


def make_text_channel(channel_id):
    channel = MagicMock(spec=discord.TextChannel)
    channel.id = channel_id
    channel.name = "ticket-logs"
    channel.mention = f"<#{channel_id}>"
    return channel


def make_role(role_id):
    role = MagicMock()
    role.id = role_id
    role.name = "Support"
    role.mention = f"<@&{role_id}>"
    return role


class TestTicketSetup:
    """Tests for /ticket-setup."""

    @pytest.mark.asyncio
    async def test_ids_stored_as_strings(self, tickets_cog, mock_discord_interaction, memory_db):
        await tickets_cog.ticket_setup.callback(
            tickets_cog,
            mock_discord_interaction,
            logs=make_text_channel(111),
            category=None,
            staff_role=make_role(222),
        )

        settings = memory_db.get_ticket_settings(mock_discord_interaction.guild_id)
        assert settings["logs_channel"] == "111"
        assert settings["staff_roles"] == ["222"]

        embed = mock_discord_interaction.response.send_message.await_args.kwargs["embed"]
        assert embed.title == "Ticket System Setup"

    @pytest.mark.asyncio
    async def test_text_channel_rejected_as_category(self, tickets_cog, mock_discord_interaction, memory_db):
        await tickets_cog.ticket_setup.callback(
            tickets_cog,
            mock_discord_interaction,
            category=make_text_channel(333),
        )

        assert memory_db.get_ticket_settings(mock_discord_interaction.guild_id) is None
