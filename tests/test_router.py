"""
HarborBot - Interaction Router Tests
====================================

Custom ID parsing, route resolution and dispatch.
"""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from src.utils.router import InteractionRouter, interaction_kind, parse_custom_id


def component(custom_id, component_type=discord.ComponentType.button):
    interaction = MagicMock()
    interaction.type = discord.InteractionType.component
    interaction.data = {"custom_id": custom_id, "component_type": component_type.value}
    interaction.response.is_done = MagicMock(return_value=False)
    interaction.response.send_message = AsyncMock()
    interaction.followup.send = AsyncMock()
    return interaction


class TestParseCustomId:
    """Tests for parse_custom_id()."""

    def test_domain_action_args(self):
        assert parse_custom_id("embed_delete_111_222") == ("embed", "delete", ["111", "222"])

    def test_plain(self):
        assert parse_custom_id("ticket_claim") == ("ticket", "claim", [])

    def test_trailing_separator_ignored(self):
        assert parse_custom_id("ticket_claim_") == ("ticket", "claim", [])

    def test_missing_parts(self):
        assert parse_custom_id("ticket") == ("ticket", "", [])
        assert parse_custom_id("") == ("", "", [])


class TestInteractionKind:
    """Tests for interaction_kind()."""

    def test_button(self):
        assert interaction_kind(component("x_y")) == "button"

    def test_select(self):
        assert interaction_kind(component("x_y", discord.ComponentType.string_select)) == "select"

    def test_modal(self):
        interaction = MagicMock()
        interaction.type = discord.InteractionType.modal_submit
        assert interaction_kind(interaction) == "modal"

    def test_slash_command_ignored(self):
        interaction = MagicMock()
        interaction.type = discord.InteractionType.application_command
        assert interaction_kind(interaction) is None


class TestRegistration:
    """Tests for register() and route()."""

    def test_duplicate_route_rejected(self):
        router = InteractionRouter()
        router.register("ticket", "claim", "button", AsyncMock())
        with pytest.raises(ValueError):
            router.register("ticket", "claim", "button", AsyncMock())

    def test_same_id_different_kind(self):
        router = InteractionRouter()
        router.register("ticket", "rename", "button", AsyncMock())
        router.register("ticket", "rename", "modal", AsyncMock())
        assert len(router) == 2

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            InteractionRouter().register("ticket", "claim", "slash", AsyncMock())

    def test_route_decorator(self):
        router = InteractionRouter()

        @router.route("embed", "template", "button", sub="use")
        async def use_template(interaction, args):
            pass

        assert ("button", "embed", "template", "use") in router


class TestResolve:
    """Tests for resolve()."""

    def test_sub_route_preferred(self):
        router = InteractionRouter()
        plain, use = AsyncMock(), AsyncMock()
        router.register("embed", "template", "button", plain)
        router.register("embed", "template", "button", use, sub="use")

        handler, args = router.resolve("embed_template_use_rules", "button")
        assert handler is use
        assert args == ["rules"]

        handler, args = router.resolve("embed_template_delete_rules", "button")
        assert handler is plain
        assert args == ["delete", "rules"]

    def test_unknown(self):
        assert InteractionRouter().resolve("nothing_here", "button") is None


class TestDispatch:
    """Tests for dispatch()."""

    @pytest.mark.asyncio
    async def test_dispatch_passes_args(self):
        router = InteractionRouter()
        handler = AsyncMock()
        router.register("embed", "delete", "button", handler)

        interaction = component("embed_delete_111_222")
        assert await router.dispatch(interaction) is True
        handler.assert_awaited_once_with(interaction, ["111", "222"])

    @pytest.mark.asyncio
    async def test_unknown_id_ignored(self):
        interaction = component("a1b2c3d4e5")
        assert await InteractionRouter().dispatch(interaction) is False
        interaction.response.send_message.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_handler_failure_sends_generic_error(self):
        router = InteractionRouter()
        router.register("ticket", "claim", "button", AsyncMock(side_effect=RuntimeError("boom")))

        interaction = component("ticket_claim")
        assert await router.dispatch(interaction) is True
        interaction.response.send_message.assert_awaited_once()
        assert interaction.response.send_message.await_args.kwargs["ephemeral"] is True


class TestTicketRoutes:
    """Dispatch through the routes TicketComponentHandlers registers."""

    @pytest.fixture
    def ticket_router(self, mock_bot):
        from src.services.tickets import TicketComponentHandlers, TicketService

        TicketComponentHandlers(TicketService(mock_bot)).register(mock_bot.ctx.router)
        return mock_bot.ctx.router

    @pytest.fixture
    def claim_press(self, mock_discord_interaction, mock_discord_guild):
        interaction = mock_discord_interaction
        interaction.type = discord.InteractionType.component
        interaction.data = {"custom_id": "ticket_claim_", "component_type": discord.ComponentType.button.value}
        interaction.user.guild_permissions.administrator = True
        interaction.channel.guild = mock_discord_guild
        interaction.channel.send = AsyncMock()
        return interaction

    @pytest.mark.asyncio
    async def test_trailing_separator_reaches_claim(self, ticket_router, claim_press, mock_bot):
        mock_bot.ctx.tickets.open_ticket(
            claim_press.guild_id, claim_press.channel_id, 42, "General Support",
        )

        assert await ticket_router.dispatch(claim_press, "button") is True

        ticket = mock_bot.ctx.db.get_ticket(claim_press.channel_id)
        assert ticket["claimed_by"] == claim_press.user.id
        embed = claim_press.response.send_message.await_args.kwargs["embed"]
        assert embed.title == "Ticket Claimed"

    @pytest.mark.asyncio
    async def test_claim_outside_ticket_refused(self, ticket_router, claim_press):
        assert await ticket_router.dispatch(claim_press, "button") is True

        embed = claim_press.response.send_message.await_args.kwargs["embed"]
        assert embed.description == "This command can only be used in a ticket channel."
