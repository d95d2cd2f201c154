"""
HarborBot - Moderation Tests
============================

Target validation, bulk delete partitioning, warning formatting and
the help menu.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from src.commands.moderation.animations import ANIMATION_CHOICES, ANIMATIONS, NUKE_FRAMES
from src.commands.moderation.helpers import check_target, fetch_member, outranks, post_mod_log, send_dm
from src.commands.moderation.message_ops import matches_filters, purge_summary, split_by_age
from src.commands.utility.help import (
    build_category_embed,
    category_label,
    collect_categories,
    find_command,
)
from src.commands.warn.helpers import build_warn_dm, format_warning_line, format_warning_list
from src.core.constants import EMBED_DESCRIPTION_LIMIT


NOW = datetime(2025, 1, 20, 12, 0, 0, tzinfo=timezone.utc)
FOURTEEN_DAYS = 14 * 86400


def make_member(member_id, top_role=5):
    member = MagicMock()
    member.id = member_id
    member.top_role = top_role
    return member


def make_message(age_days, author_id=1, content=""):
    message = MagicMock()
    message.created_at = NOW - timedelta(days=age_days)
    message.author.id = author_id
    message.content = content
    return message


@pytest.fixture
def moderation_interaction(mock_discord_interaction):
    guild = mock_discord_interaction.guild
    guild.owner_id = 1
    guild.me = make_member(999888777, top_role=10)
    mock_discord_interaction.client.user.id = 999888777
    return mock_discord_interaction


# =============================================================================
# Target Validation
# =============================================================================

class TestCheckTarget:
    """Tests for check_target()."""

    def test_valid_target(self, moderation_interaction):
        assert check_target(moderation_interaction, make_member(50), "ban", True, "ban members") is None

    def test_member_missing(self, moderation_interaction):
        embed = check_target(moderation_interaction, None, "kick", True, "kick members")
        assert embed.description == "User not found in this server."

    def test_bot_lacks_permission(self, moderation_interaction):
        embed = check_target(moderation_interaction, make_member(50), "ban", False, "ban members")
        assert embed.title == "Missing Permissions"

    def test_self(self, moderation_interaction):
        member = make_member(moderation_interaction.user.id)
        embed = check_target(moderation_interaction, member, "kick", True, "kick members")
        assert embed.title == "Cannot Kick"
        assert embed.description == "You cannot kick yourself."

    def test_bot_itself(self, moderation_interaction):
        embed = check_target(moderation_interaction, make_member(999888777), "ban", True, "ban members")
        assert embed.description == "I cannot ban myself."

    def test_higher_role(self, moderation_interaction):
        embed = check_target(
            moderation_interaction, make_member(50, top_role=20), "timeout", True,
            "timeout members", title="Cannot Mute",
        )
        assert embed.title == "Cannot Mute"
        assert "higher role" in embed.description

    def test_owner_never_outranked(self, moderation_interaction):
        assert outranks(moderation_interaction.guild, make_member(1, top_role=0)) is False


class TestMemberLookup:
    """Tests for fetch_member() and send_dm()."""

    @pytest.mark.asyncio
    async def test_cached_member(self, mock_discord_guild):
        member = make_member(50)
        mock_discord_guild.get_member.return_value = member
        assert await fetch_member(mock_discord_guild, member) is member

    @pytest.mark.asyncio
    async def test_member_left(self, mock_discord_guild, mock_discord_user):
        mock_discord_guild.fetch_member.side_effect = discord.NotFound(MagicMock(status=404), "Unknown Member")
        assert await fetch_member(mock_discord_guild, mock_discord_user) is None

    @pytest.mark.asyncio
    async def test_closed_dms(self, mock_discord_user):
        mock_discord_user.send.side_effect = discord.Forbidden(MagicMock(status=403), "Cannot send")
        assert await send_dm(mock_discord_user, discord.Embed(title="x")) is False

    @pytest.mark.asyncio
    async def test_mod_log_posted(self, mock_discord_guild):
        channel = MagicMock()
        channel.name = "mod-logs"
        channel.send = AsyncMock()
        mock_discord_guild.text_channels = [channel]

        await post_mod_log(mock_discord_guild, "error", "User Banned", "x", [("Reason", "spam")], "ID: 1")
        embed = channel.send.await_args.kwargs["embed"]
        assert embed.title == "User Banned"
        assert embed.fields[0].value == "spam"

    @pytest.mark.asyncio
    async def test_no_log_channel(self, mock_discord_guild):
        assert await post_mod_log(mock_discord_guild, "error", "t", "d", [], "f") is None


# =============================================================================
# Bulk Deletes
# =============================================================================

class TestMessageFilters:
    """Tests for the /clear and /purge helpers."""

    def test_split_by_age(self):
        fresh, old = make_message(1), make_message(20)
        recent, too_old = split_by_age([fresh, old], FOURTEEN_DAYS, now=NOW)
        assert recent == [fresh]
        assert too_old == [old]

    def test_matches_user(self):
        user = MagicMock()
        user.id = 7
        assert matches_filters(make_message(0, author_id=7), user, None) is True
        assert matches_filters(make_message(0, author_id=8), user, None) is False

    def test_matches_contains_case_insensitive(self):
        assert matches_filters(make_message(0, content="Buy NOW"), None, "now") is True
        assert matches_filters(make_message(0, content="hello"), None, "now") is False

    def test_purge_summary(self):
        user = MagicMock()
        user.__str__ = MagicMock(return_value="spammer")
        assert purge_summary(5, None, None) == "Successfully deleted 5 message(s)."
        assert purge_summary(2, user, "free") == (
            'Successfully deleted 2 message(s) (from user @spammer and containing "free").'
        )


class TestAnimations:
    """Tests for the nuke animation tables."""

    def test_every_choice_has_frames(self):
        assert set(ANIMATION_CHOICES) == set(ANIMATIONS)
        for frames in ANIMATIONS.values():
            assert frames
            assert all(len(frame) <= 2000 for frame in frames)

    def test_nuke_countdown(self):
        assert "3" in NUKE_FRAMES[0]


# =============================================================================
# Warnings
# =============================================================================

def warning_record(number, reason="Spam"):
    return {
        "id": number,
        "number": number,
        "guild_id": 1,
        "user_id": 2,
        "issued_by": 3,
        "reason": reason,
        "created_at": 1736000000.5,
    }


class TestWarnFormatting:
    """Tests for warning DMs and listings."""

    def test_line(self):
        line = format_warning_line(warning_record(2))
        assert line.startswith("**ID:** 2 - **Reason:** Spam")
        assert "<t:1736000000:f>" in line
        assert "<@3>" in line

    def test_list_header(self):
        assert format_warning_list([warning_record(1)]).startswith("This user has 1 warning:")
        assert format_warning_list([warning_record(1), warning_record(2)]).startswith(
            "This user has 2 warnings:"
        )

    def test_long_list_truncated(self):
        warnings = [warning_record(n, reason="x" * 200) for n in range(1, 41)]
        body = format_warning_list(warnings)

        assert len(body) <= EMBED_DESCRIPTION_LIMIT
        assert "more" in body.splitlines()[-1]

    def test_dm(self, mock_discord_guild):
        embed = build_warn_dm(mock_discord_guild, "Spam", 3)
        assert embed.title == "You have been warned in Test Server"
        assert "**Warning Count:** 3" in embed.description


# =============================================================================
# Help
# =============================================================================

def make_command(name, description="desc"):
    command = MagicMock()
    command.name = name
    command.description = description
    return command


class TestHelp:
    """Tests for the help menu built from loaded cogs."""

    @pytest.fixture
    def help_bot(self):
        class FunCog:
            qualified_name = "FunCog"

            def get_app_commands(self):
                return [make_command("8ball"), make_command("rps")]

        class WarnCog:
            qualified_name = "WarnCog"

            def get_app_commands(self):
                return [make_command("warn")]

        class EmptyCog:
            qualified_name = "EmptyCog"

            def get_app_commands(self):
                return []

        bot = MagicMock()
        bot.cogs = {"FunCog": FunCog(), "WarnCog": WarnCog(), "EmptyCog": EmptyCog()}
        return bot

    def test_categories(self, help_bot):
        categories = collect_categories(help_bot)
        assert list(categories) == ["fun", "moderation"]
        assert [c.name for c in categories["fun"]] == ["8ball", "rps"]

    def test_labels(self):
        assert category_label("worldclock") == "World Clock"
        assert category_label("misc") == "Misc"

    def test_find_command(self, help_bot):
        assert find_command(help_bot, "/RPS").name == "rps"
        assert find_command(help_bot, "nope") is None

    def test_category_embed(self, help_bot):
        embed = build_category_embed(help_bot, "fun")
        assert embed.title == "Fun Commands"
        assert "**/8ball** - desc" in embed.fields[0].value

    def test_empty_category(self, help_bot):
        embed = build_category_embed(help_bot, "tickets")
        assert embed.fields[0].value == "No commands found in this category."
