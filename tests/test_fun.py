"""
HarborBot - Fun Command Tests
=============================

Deterministic meters, text toys, RPS rules and the API client.
"""

import random
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.commands.fun.api import FunApiClient, FunApiError
from src.commands.fun.games import (
    AsciiTooLarge,
    as_question,
    gay_percentage,
    mock_text,
    progress_bar,
    render_ascii,
    rps_outcome,
    ship_name,
    ship_percentage,
    ship_verdict,
)
from src.commands.fun.views import RPSView, build_result_embed
from src.core.config import EmbedColors


class TestMeters:
    """Tests for the ID-derived percentages."""

    def test_gay_percentage_uses_last_eight_digits(self):
        assert gay_percentage(123456789012345678) == 12345678 % 101
        assert gay_percentage(42) == 42

    def test_ship_percentage_is_stable(self):
        first = ship_percentage(111, 222)
        assert first == ship_percentage(111, 222)
        assert 0 <= first <= 100
        assert first == sum(ord(c) for c in "111222") % 101

    def test_ship_name(self):
        assert ship_name("alice", "bob") == "aliob"
        assert ship_name("ab", "cd") == "ad"

    def test_ship_verdict_bands(self):
        assert ship_verdict(5).startswith("Yikes")
        assert ship_verdict(95) == "Perfect match! When's the wedding?"

    def test_progress_bar(self):
        assert progress_bar(50, "#", "-", length=10) == "#####-----"
        assert progress_bar(0, "#", "-", length=4) == "----"
        assert progress_bar(100, "#", "-", length=4) == "####"


class TestText:
    """Tests for the text helpers."""

    def test_as_question(self):
        assert as_question("will it rain") == "will it rain?"
        assert as_question(" really? ") == "really?"

    def test_mock_text_keeps_letters(self):
        result = mock_text("Hello World", rng=random.Random(7))
        assert result.lower() == "hello world"

    def test_render_ascii(self):
        art = render_ascii("Hi")
        assert art
        assert "\n" in art

    def test_render_ascii_too_large(self):
        with pytest.raises(AsciiTooLarge):
            render_ascii("W" * 60, font="big")


class TestRockPaperScissors:
    """Tests for RPS rules and the game view."""

    @pytest.mark.parametrize("player, bot, kind", [
        ("rock", "scissors", "success"),
        ("paper", "rock", "success"),
        ("scissors", "paper", "success"),
        ("rock", "paper", "error"),
        ("scissors", "scissors", "warning"),
    ])
    def test_outcome(self, player, bot, kind):
        assert rps_outcome(player, bot)[1] == kind

    def test_result_embed(self):
        embed = build_result_embed("rock", "scissors")
        assert embed.description == "You win!"
        assert embed.colour.value == EmbedColors.SUCCESS

    @pytest.mark.asyncio
    async def test_only_player_may_press(self, mock_discord_interaction):
        view = RPSView(player_id=1, timeout=30)
        assert await view.interaction_check(mock_discord_interaction) is False
        mock_discord_interaction.response.send_message.assert_awaited_once_with(
            "This isn't your game!", ephemeral=True,
        )

    @pytest.mark.asyncio
    async def test_play_shows_result(self, mock_discord_interaction):
        view = RPSView(player_id=mock_discord_interaction.user.id, timeout=30, rng=random.Random(1))
        await view.play(mock_discord_interaction, "rock")

        assert view.played is True
        kwargs = mock_discord_interaction.response.edit_message.await_args.kwargs
        assert kwargs["view"] is None
        assert kwargs["embed"].title == "Rock Paper Scissors Result"

    @pytest.mark.asyncio
    async def test_timeout_after_play_is_silent(self, mock_discord_interaction):
        view = RPSView(player_id=1, timeout=30)
        view.interaction = mock_discord_interaction
        view.played = True

        await view.on_timeout()
        mock_discord_interaction.edit_original_response.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_timeout_expires_game(self, mock_discord_interaction):
        view = RPSView(player_id=1, timeout=30)
        view.interaction = mock_discord_interaction

        await view.on_timeout()
        embed = mock_discord_interaction.edit_original_response.await_args.kwargs["embed"]
        assert embed.title == "Game Expired"


class TestFunApiClient:
    """Tests for response handling, with the HTTP layer stubbed."""

    @pytest.mark.asyncio
    async def test_single_joke(self):
        api = FunApiClient()
        api._get_json = AsyncMock(return_value={"type": "single", "joke": "A joke", "category": "Pun"})
        assert await api.joke("Pun") == {"category": "Pun", "text": "A joke"}

    @pytest.mark.asyncio
    async def test_two_part_joke_spoilers_punchline(self):
        api = FunApiClient()
        api._get_json = AsyncMock(return_value={
            "type": "twopart", "setup": "Why?", "delivery": "Because.", "category": "Misc",
        })
        joke = await api.joke()
        assert joke["text"] == "Why?\n\n||Because.||"

    @pytest.mark.asyncio
    async def test_joke_api_error(self):
        api = FunApiClient()
        api._get_json = AsyncMock(return_value={"error": True, "message": "No matching joke found"})
        with pytest.raises(FunApiError) as exc:
            await api.joke("Spooky")
        assert exc.value.message == "No matching joke found"

    @pytest.mark.asyncio
    async def test_meme_url(self):
        api = FunApiClient()
        api._get_json = AsyncMock(return_value={"title": "lol"})

        await api.meme()
        await api.meme("memes")

        first, second = [c.args[0] for c in api._get_json.await_args_list]
        assert not first.endswith("/")
        assert second.endswith("/memes")

    @pytest.mark.asyncio
    async def test_yes_no_uppercase(self):
        api = FunApiClient()
        api._get_json = AsyncMock(return_value={"answer": "yes"})
        assert await api.yes_no() == "YES"

    @pytest.mark.asyncio
    async def test_yes_no_missing_answer(self):
        api = FunApiClient()
        api._get_json = AsyncMock(return_value={})
        with pytest.raises(FunApiError):
            await api.yes_no()

    @pytest.mark.asyncio
    async def test_close_without_session(self):
        api = FunApiClient()
        await api.close()
        assert api._session is None
