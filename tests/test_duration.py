"""
Tests for src/utils/duration.py

Covers parsing and formatting of duration strings used by /mute.
"""

import pytest

from src.core.constants import MAX_TIMEOUT_SECONDS
from src.utils.duration import (
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    clamp_timeout,
    format_duration,
    format_duration_long,
    parse_duration,
)


# =============================================================================
# parse_duration() Tests
# =============================================================================

class TestParseDuration:
    """Tests for parse_duration function."""

    def test_single_units(self):
        assert parse_duration("30s") == 30
        assert parse_duration("5m") == 300
        assert parse_duration("1h") == 3600
        assert parse_duration("1d") == 86400
        assert parse_duration("1w") == 604800

    def test_combined(self):
        assert parse_duration("1d12h") == 129600
        assert parse_duration("1h30m") == 5400

    def test_full_words(self):
        assert parse_duration("10 minutes") == 600
        assert parse_duration("2 hours") == 7200
        assert parse_duration("1 day") == 86400

    def test_decimal(self):
        assert parse_duration("1.5h") == 5400

    def test_case_insensitive(self):
        assert parse_duration("1H") == 3600

    @pytest.mark.parametrize("value", ["", "soon", "0s", "1x", "h1", "1 monday"])
    def test_invalid(self, value):
        assert parse_duration(value) is None


class TestClampTimeout:
    """Tests for clamp_timeout function."""

    def test_under_limit(self):
        assert clamp_timeout(SECONDS_PER_HOUR) == SECONDS_PER_HOUR

    def test_discord_maximum(self):
        assert clamp_timeout(60 * SECONDS_PER_DAY) == MAX_TIMEOUT_SECONDS

    def test_configured_limit(self):
        assert clamp_timeout(10 * SECONDS_PER_DAY, limit=7 * SECONDS_PER_DAY) == 7 * SECONDS_PER_DAY

    def test_limit_never_exceeds_maximum(self):
        assert clamp_timeout(90 * SECONDS_PER_DAY, limit=90 * SECONDS_PER_DAY) == MAX_TIMEOUT_SECONDS


# =============================================================================
# Formatting Tests
# =============================================================================

class TestFormatDurationLong:
    """Tests for format_duration_long function."""

    def test_largest_unit_only(self):
        assert format_duration_long(90061) == "1 day"
        assert format_duration_long(7200) == "2 hours"
        assert format_duration_long(60) == "1 minute"

    def test_seconds(self):
        assert format_duration_long(45) == "45 seconds"
        assert format_duration_long(1) == "1 second"


class TestFormatDuration:
    """Tests for format_duration function."""

    def test_compact(self):
        assert format_duration(3661) == "1h 1m 1s"
        assert format_duration(86400) == "1d"

    def test_max_units(self):
        assert format_duration(90061, max_units=2) == "1d 1h"

    def test_special_values(self):
        assert format_duration(None) == "Permanent"
        assert format_duration(0) == "0s"
