"""
HarborBot - Utility Tests
=========================

Config loading, reply embeds, interaction helpers, world clock lookups
and error categorization.
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from src.core.config import ConfigValidationError, EmbedColors, has_mod_role, load_config
from src.core.database import DatabaseError
from src.utils.error_handler import ErrorHandler, safe_execute
from src.utils.interaction import (
    find_text_channel,
    get_modal_values,
    get_select_values,
    safe_defer,
    safe_respond,
    send_generic_error,
)
from src.utils.responses import create_embed, error, success
from src.utils.timezones import (
    COMMON_TIMEZONES,
    PRESETS,
    format_time,
    resolve_timezone,
    search_timezones,
)


# =============================================================================
# Config
# =============================================================================

class TestLoadConfig:
    """Tests for load_config()."""

    def test_token_required(self, monkeypatch):
        monkeypatch.delenv("DISCORD_TOKEN", raising=False)
        with pytest.raises(ConfigValidationError):
            load_config()

    def test_memory_backend_by_default(self, monkeypatch):
        monkeypatch.delenv("DATABASE_PATH", raising=False)
        monkeypatch.delenv("DATABASE_URL", raising=False)
        config = load_config()
        assert config.database_path is None
        assert config.storage_backend == "memory"

    def test_parsed_values(self, monkeypatch):
        monkeypatch.setenv("DATABASE_PATH", "data/harbor.db")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("GUILD_ID", "not-a-number")
        monkeypatch.setenv("MAX_TIMEOUT_DAYS", "90")
        monkeypatch.setenv("MOD_LOG_CHANNELS", "audit, staff-log")
        monkeypatch.setenv("MODERATOR_IDS", "1, 2,x")

        config = load_config()
        assert config.storage_backend == "sqlite"
        assert config.port == 8080
        assert config.dev_guild_id is None
        assert config.max_timeout_days == 28
        assert config.mod_log_channel_names == ("audit", "staff-log")
        assert config.moderator_ids == {1, 2}

    def test_has_mod_role(self):
        member = MagicMock()
        member.id = 5
        member.guild_permissions.administrator = False
        member.roles = [MagicMock(id=42)]

        assert has_mod_role(member, ["42"]) is True
        assert has_mod_role(member, ["43"]) is False
        assert has_mod_role(None) is False


# =============================================================================
# Responses
# =============================================================================

class TestResponses:
    """Tests for create_embed() and the kind shortcuts."""

    def test_kind_colours(self):
        assert success("Done").colour.value == EmbedColors.SUCCESS
        assert error("Nope").colour.value == EmbedColors.ERROR
        assert create_embed("mystery", "T", None).colour.value == EmbedColors.PRIMARY

    def test_fields_and_extras(self):
        embed = create_embed(
            "info",
            "Title",
            "Body",
            fields=[("A", "1"), ("B", "2", True), {"name": "C", "value": "3"}],
            footer="foot",
            thumbnail="https://example.com/t.png",
        )

        assert [(f.name, f.value, f.inline) for f in embed.fields] == [
            ("A", "1", False),
            ("B", "2", True),
            ("C", "3", False),
        ]
        assert embed.footer.text == "foot"
        assert embed.thumbnail.url == "https://example.com/t.png"
        assert embed.timestamp is not None


# =============================================================================
# Interaction Helpers
# =============================================================================

class TestInteractionHelpers:
    """Tests for safe_respond(), safe_defer() and payload readers."""

    @pytest.mark.asyncio
    async def test_first_response(self, mock_discord_interaction):
        await safe_respond(mock_discord_interaction, "hi")
        mock_discord_interaction.response.send_message.assert_awaited_once_with(
            content="hi", ephemeral=True,
        )
        mock_discord_interaction.followup.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_followup_after_defer(self, mock_discord_interaction):
        mock_discord_interaction.response.is_done.return_value = True
        await safe_respond(mock_discord_interaction, "hi", ephemeral=False)
        mock_discord_interaction.followup.send.assert_awaited_once_with(content="hi", ephemeral=False)

    @pytest.mark.asyncio
    async def test_http_errors_swallowed(self, mock_discord_interaction):
        mock_discord_interaction.response.send_message.side_effect = discord.HTTPException(
            MagicMock(status=404), "Unknown interaction",
        )
        assert await safe_respond(mock_discord_interaction, "hi") is None

    @pytest.mark.asyncio
    async def test_defer_once(self, mock_discord_interaction):
        assert await safe_defer(mock_discord_interaction) is True
        mock_discord_interaction.response.is_done.return_value = True
        assert await safe_defer(mock_discord_interaction) is False

    @pytest.mark.asyncio
    async def test_generic_error_is_ephemeral(self, mock_discord_interaction):
        await send_generic_error(mock_discord_interaction)
        kwargs = mock_discord_interaction.response.send_message.await_args.kwargs
        assert kwargs["ephemeral"] is True
        assert "error" in kwargs["content"].lower()

    def test_modal_values(self, mock_discord_interaction):
        mock_discord_interaction.data = {"components": [
            {"type": 1, "components": [{"custom_id": "title", "value": "Hello"}]},
            {"type": 1, "components": [{"custom_id": "footer", "value": None}]},
        ]}
        assert get_modal_values(mock_discord_interaction) == {"title": "Hello", "footer": ""}

    def test_select_values(self, mock_discord_interaction):
        mock_discord_interaction.data = {"values": ["UTC", "EST"]}
        assert get_select_values(mock_discord_interaction) == ["UTC", "EST"]

    def test_find_text_channel_order(self, mock_discord_guild):
        logs, mod_logs = MagicMock(), MagicMock()
        logs.name, mod_logs.name = "logs", "mod-logs"
        mock_discord_guild.text_channels = [logs, mod_logs]

        assert find_text_channel(mock_discord_guild, ("mod-logs", "logs")) is mod_logs
        assert find_text_channel(mock_discord_guild, ("audit",)) is None
        assert find_text_channel(None, ("logs",)) is None


# =============================================================================
# World Clock
# =============================================================================

class TestTimezones:
    """Tests for world clock lookups."""

    def test_common_code(self):
        assert resolve_timezone("est").key == "America/New_York"

    def test_iana_name(self):
        assert resolve_timezone("Europe/Berlin").key == "Europe/Berlin"

    def test_unknown(self):
        assert resolve_timezone("Mars/Olympus") is None
        assert resolve_timezone("") is None

    def test_presets_resolve(self):
        for zones in PRESETS.values():
            for zone, _ in zones:
                assert resolve_timezone(zone) is not None

    def test_format_time(self):
        zone = resolve_timezone("UTC")
        now = datetime(2025, 1, 6, 15, 4, 5, tzinfo=timezone.utc)
        assert format_time(zone, now) == "Monday, January 6, 2025 at 3:04:05 PM"

    def test_search_common_first(self):
        results = search_timezones("")
        assert [value for _, value in results] == list(COMMON_TIMEZONES)

    def test_search_iana(self):
        results = search_timezones("berlin")
        assert ("Europe/Berlin", "Europe/Berlin") in results

    def test_search_limit(self):
        assert len(search_timezones("a", limit=5)) == 5


# =============================================================================
# Error Handling
# =============================================================================

class TestErrorHandler:
    """Tests for categorization and safe_execute."""

    def test_categories(self):
        assert ErrorHandler.categorize_error(DatabaseError("x")) == "database"
        assert ErrorHandler.categorize_error(TimeoutError()) == "network"
        assert ErrorHandler.categorize_error(KeyError("x")) == "general"

    def test_handle_returns_context(self):
        context = ErrorHandler.handle(ValueError("bad"), location="tests", user_id=1)
        assert context["error_type"] == "ValueError"
        assert context["additional_context"] == {"user_id": "1"}

    @pytest.mark.asyncio
    async def test_safe_execute_logs_instead_of_raising(self):
        @safe_execute
        async def failing():
            raise RuntimeError("boom")

        assert await failing() is None
