"""
HarborBot - Event Cog Tests
===========================

Interaction routing and the slash command error boundary.
"""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest
from discord import app_commands

from src.events.interactions import InteractionEvents
from src.core.constants import GENERIC_ERROR_MESSAGE


@pytest.fixture
def events_bot(mock_bot):
    previous = MagicMock(name="previous_on_error")
    mock_bot.tree.on_error = previous
    return mock_bot


def button_press(custom_id):
    interaction = MagicMock()
    interaction.type = discord.InteractionType.component
    interaction.data = {"custom_id": custom_id, "component_type": discord.ComponentType.button.value}
    interaction.response.is_done = MagicMock(return_value=False)
    interaction.response.send_message = AsyncMock()
    interaction.followup.send = AsyncMock()
    return interaction


class TestErrorBoundary:
    """Tests for tree.on_error installation."""

    @pytest.mark.asyncio
    async def test_installed_and_restored(self, events_bot):
        previous = events_bot.tree.on_error
        cog = InteractionEvents(events_bot)
        assert events_bot.tree.on_error == cog.on_app_command_error

        await cog.cog_unload()
        assert events_bot.tree.on_error is previous

    @pytest.mark.asyncio
    async def test_check_failure(self, events_bot, mock_discord_interaction):
        cog = InteractionEvents(events_bot)
        await cog.on_app_command_error(mock_discord_interaction, app_commands.CheckFailure())

        sent = mock_discord_interaction.response.send_message.await_args
        assert sent.kwargs["content"] == "❌ You can't use this command here."

    @pytest.mark.asyncio
    async def test_command_failure_gets_generic_reply(self, events_bot, mock_discord_interaction):
        cog = InteractionEvents(events_bot)
        command = MagicMock()
        command.name = "ping"
        error = app_commands.CommandInvokeError(command, RuntimeError("boom"))

        await cog.on_app_command_error(mock_discord_interaction, error)

        sent = mock_discord_interaction.response.send_message.await_args
        assert sent.kwargs["content"] == GENERIC_ERROR_MESSAGE
        assert sent.kwargs["ephemeral"] is True


class TestComponentRouting:
    """Tests for on_interaction()."""

    @pytest.mark.asyncio
    async def test_button_dispatched(self, events_bot):
        handler = AsyncMock()
        events_bot.ctx.router.register("ticket", "claim", "button", handler)
        cog = InteractionEvents(events_bot)

        interaction = button_press("ticket_claim")
        await cog.on_interaction(interaction)
        handler.assert_awaited_once_with(interaction, [])

    @pytest.mark.asyncio
    async def test_slash_command_not_routed(self, events_bot):
        handler = AsyncMock()
        events_bot.ctx.router.register("ticket", "claim", "button", handler)
        cog = InteractionEvents(events_bot)

        interaction = MagicMock()
        interaction.type = discord.InteractionType.application_command
        await cog.on_interaction(interaction)
        handler.assert_not_awaited()
