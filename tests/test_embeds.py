"""
HarborBot - Embed Builder Tests
===============================

Validation, payload conversion and authoring sessions.
"""

from datetime import timedelta

import pytest

from src.services.embeds.builder import (
    DEFAULT_COLOR,
    EmbedValidationError,
    embed_from_payload,
    get_preset,
    parse_color,
    payload_from_embed,
    validate_embed_input,
)
from src.services.embeds.sessions import EmbedSessionStore


# =============================================================================
# Validation
# =============================================================================

class TestValidateEmbedInput:
    """Tests for validate_embed_input()."""

    def test_minimal(self):
        payload = validate_embed_input(title="Hello")

        assert payload["title"] == "Hello"
        assert payload["description"] is None
        assert payload["color"] == DEFAULT_COLOR
        assert payload["footer"] is None
        assert payload["image"] is None
        assert payload["timestamp"]

    def test_full(self):
        payload = validate_embed_input(
            title=" Rules ",
            description="Be nice",
            color="#abc",
            footer="Staff",
            image="https://example.com/banner.png",
        )

        assert payload["title"] == "Rules"
        assert payload["color"] == "#abc"
        assert payload["footer"] == {"text": "Staff"}
        assert payload["image"] == {"url": "https://example.com/banner.png"}

    def test_title_or_description_required(self):
        with pytest.raises(EmbedValidationError) as exc:
            validate_embed_input(title="  ", description="")
        assert exc.value.title == "Missing Content"

    @pytest.mark.parametrize("kwargs, title", [
        ({"title": "x" * 257}, "Title Too Long"),
        ({"description": "x" * 4001}, "Description Too Long"),
        ({"title": "ok", "footer": "x" * 2049}, "Footer Too Long"),
        ({"title": "ok", "color": "blue"}, "Invalid Color"),
        ({"title": "ok", "color": "#12345"}, "Invalid Color"),
        ({"title": "ok", "image": "not a url"}, "Invalid Image URL"),
        ({"title": "ok", "image": "ftp://example.com/a.png"}, "Invalid Image URL"),
    ])
    def test_rejected(self, kwargs, title):
        with pytest.raises(EmbedValidationError) as exc:
            validate_embed_input(**kwargs)
        assert exc.value.title == title


class TestPresets:
    """Tests for get_preset()."""

    def test_known_preset(self):
        preset = get_preset("success")
        assert preset["color"] == "#57F287"
        assert preset["footer"] == {"text": "Operation Successful"}

    def test_preset_is_a_copy(self):
        get_preset("info")["footer"]["text"] = "changed"
        assert get_preset("info")["footer"]["text"] == "Bot Information"

    def test_unknown_preset(self):
        assert get_preset(None) == {}
        assert get_preset("rainbow") == {}


# =============================================================================
# Conversion
# =============================================================================

class TestConversion:
    """Tests for payload <-> discord.Embed conversion."""

    def test_parse_color(self):
        assert parse_color("#FF0000").value == 0xFF0000
        assert parse_color("#f00").value == 0xFF0000
        assert parse_color("nope").value == 0x5865F2

    def test_embed_from_payload(self):
        embed = embed_from_payload({
            "title": "Hello",
            "description": "World",
            "color": "#57F287",
            "footer": {"text": "foot"},
            "image": {"url": "https://example.com/a.png"},
            "timestamp": "2025-01-06T15:04:05+00:00",
        })

        assert embed.title == "Hello"
        assert embed.colour.value == 0x57F287
        assert embed.footer.text == "foot"
        assert embed.image.url == "https://example.com/a.png"
        assert embed.timestamp.year == 2025

    def test_bad_timestamp_ignored(self):
        assert embed_from_payload({"title": "x", "timestamp": "yesterday"}).timestamp is None

    def test_payload_from_embed(self):
        embed = embed_from_payload({"title": "Hello", "color": "#ED4245", "footer": {"text": "f"}})
        payload = payload_from_embed(embed)

        assert payload["title"] == "Hello"
        assert payload["color"] == "#ED4245"
        assert payload["footer"] == {"text": "f"}
        assert payload["image"] is None


# =============================================================================
# Sessions
# =============================================================================

class TestEmbedSessionStore:
    """Tests for EmbedSessionStore."""

    def test_set_get_pop(self):
        sessions = EmbedSessionStore()
        sessions.set(1, {"title": "Draft"})

        assert 1 in sessions
        assert sessions.get(1) == {"title": "Draft"}
        assert sessions.pop(1) == {"title": "Draft"}
        assert sessions.get(1) is None

    def test_values_are_copied(self):
        sessions = EmbedSessionStore()
        payload = {"footer": {"text": "a"}}
        sessions.set(1, payload)

        payload["footer"]["text"] = "changed"
        sessions.get(1)["footer"]["text"] = "changed again"
        assert sessions.get(1) == {"footer": {"text": "a"}}

    def test_expired_sessions_vanish(self):
        sessions = EmbedSessionStore(ttl=timedelta(seconds=-1))
        sessions.set(1, {"title": "Draft"})

        assert sessions.get(1) is None
        assert len(sessions) == 0

    def test_cleanup_expired(self):
        sessions = EmbedSessionStore(ttl=timedelta(seconds=-1))
        sessions.set(1, {})
        sessions.set(2, {})
        assert sessions.cleanup_expired() == 2

    def test_oldest_evicted_at_capacity(self):
        sessions = EmbedSessionStore(max_size=2)
        sessions.set(1, {"n": 1})
        sessions.set(2, {"n": 2})
        sessions.set(3, {"n": 3})

        assert len(sessions) == 2
        assert sessions.get(1) is None
        assert sessions.get(3) == {"n": 3}
