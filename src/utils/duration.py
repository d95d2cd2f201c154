"""
Duration Utilities
==================

Parsing and formatting for moderation durations.

Usage:
    from src.utils.duration import parse_duration, format_duration_long

    seconds = parse_duration("1d12h")         # 129600
    seconds = parse_duration("10 minutes")    # 600
    capped = clamp_timeout(seconds)           # never above 28 days
    display = format_duration_long(129600)    # "1 day"
"""

import re
from typing import Optional

from src.core.constants import MAX_TIMEOUT_SECONDS


# =============================================================================
# Time Constants
# =============================================================================

SECONDS_PER_YEAR = 31536000
SECONDS_PER_WEEK = 604800
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

TIME_MULTIPLIERS = {
    "y": SECONDS_PER_YEAR,
    "w": SECONDS_PER_WEEK,
    "d": SECONDS_PER_DAY,
    "h": SECONDS_PER_HOUR,
    "m": SECONDS_PER_MINUTE,
    "s": 1,
}

TIME_UNIT_ALIASES = {
    "year": "y", "years": "y", "yr": "y", "yrs": "y",
    "week": "w", "weeks": "w", "wk": "w", "wks": "w",
    "day": "d", "days": "d",
    "hour": "h", "hours": "h", "hr": "h", "hrs": "h",
    "minute": "m", "minutes": "m", "min": "m", "mins": "m",
    "second": "s", "seconds": "s", "sec": "s", "secs": "s",
}

INVALID_DURATION_MESSAGE = "Please provide a valid duration (e.g. 10s, 1m, 1h, 1d)."


# =============================================================================
# Parsing Functions
# =============================================================================

def _normalize_duration_string(duration_str: str) -> str:
    """
    Convert full unit words to short forms.

    Examples:
        "1 day" -> "1d"
        "2 hours 30 mins" -> "2h30m"
        "1 monday" -> "1monday" (fails validation)
    """
    result = duration_str.lower().strip()
    result = re.sub(r"(\d+(?:\.\d+)?)\s+", r"\1", result)

    for word, short in sorted(TIME_UNIT_ALIASES.items(), key=lambda x: -len(x[0])):
        result = re.sub(rf"(?<=\d){word}\b|(?<!\w){word}\b", short, result)

    return result.replace(" ", "")


def parse_duration(duration_str: str) -> Optional[int]:
    """
    Parse a duration string into whole seconds.

    Supports:
        - Single units: "10s", "5m", "1h", "1d", "1w", "1y", "1.5h"
        - Combined: "1d12h30m"
        - Full words: "1 day", "2 hours"

    Returns:
        Seconds (at least 1), or None when the input is not a duration.

    Examples:
        >>> parse_duration("1h")
        3600
        >>> parse_duration("1d12h")
        129600
        >>> parse_duration("soon")
        None
    """
    if not duration_str:
        return None

    normalized = _normalize_duration_string(duration_str)

    single = re.fullmatch(r"(\d+(?:\.\d+)?)(y|w|d|h|m|s)", normalized)
    if single:
        total = int(float(single.group(1)) * TIME_MULTIPLIERS[single.group(2)])
        return total if total > 0 else None

    pattern = r"(?:(\d+)y)?(?:(\d+)w)?(?:(\d+)d)?(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s)?"
    match = re.fullmatch(pattern, normalized)
    if not match or not any(match.groups()):
        return None

    units = ("y", "w", "d", "h", "m", "s")
    total = sum(
        int(value or 0) * TIME_MULTIPLIERS[unit]
        for value, unit in zip(match.groups(), units)
    )
    return total if total > 0 else None


def clamp_timeout(seconds: int, limit: int = MAX_TIMEOUT_SECONDS) -> int:
    """Cap a timeout at limit, which itself never exceeds Discord's 28-day maximum."""
    return min(seconds, limit, MAX_TIMEOUT_SECONDS)


# =============================================================================
# Formatting Functions
# =============================================================================

def format_duration_long(seconds: int) -> str:
    """
    Format seconds using only the largest whole unit.

    Examples:
        >>> format_duration_long(90061)
        "1 day"
        >>> format_duration_long(7200)
        "2 hours"
        >>> format_duration_long(45)
        "45 seconds"
    """
    seconds = int(seconds)
    for unit_seconds, name in (
        (SECONDS_PER_DAY, "day"),
        (SECONDS_PER_HOUR, "hour"),
        (SECONDS_PER_MINUTE, "minute"),
    ):
        value = seconds // unit_seconds
        if value > 0:
            return f"{value} {name}{'' if value == 1 else 's'}"
    return f"{seconds} second{'' if seconds == 1 else 's'}"


def format_duration(seconds: Optional[int], max_units: int = 3) -> str:
    """
    Format seconds as compact units.

    Examples:
        >>> format_duration(3661)
        "1h 1m 1s"
        >>> format_duration(None)
        "Permanent"
    """
    if seconds is None:
        return "Permanent"
    if seconds <= 0:
        return "0s"

    parts = []
    remaining = int(seconds)
    for unit, unit_seconds in (("d", SECONDS_PER_DAY), ("h", SECONDS_PER_HOUR),
                               ("m", SECONDS_PER_MINUTE), ("s", 1)):
        if remaining >= unit_seconds and len(parts) < max_units:
            value, remaining = divmod(remaining, unit_seconds)
            parts.append(f"{value}{unit}")

    return " ".join(parts)


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "SECONDS_PER_YEAR",
    "SECONDS_PER_WEEK",
    "SECONDS_PER_DAY",
    "SECONDS_PER_HOUR",
    "SECONDS_PER_MINUTE",
    "INVALID_DURATION_MESSAGE",
    "parse_duration",
    "clamp_timeout",
    "format_duration_long",
    "format_duration",
]
