"""
HarborBot - World Clock Helpers
===============================

Timezone code resolution and formatting for the world clock commands.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError, available_timezones

COMMON_TIMEZONES: Dict[str, str] = {
    "UTC": "UTC",
    "EST": "America/New_York",
    "CST": "America/Chicago",
    "MST": "America/Denver",
    "PST": "America/Los_Angeles",
    "GMT": "Europe/London",
    "CET": "Europe/Paris",
    "JST": "Asia/Tokyo",
    "AEST": "Australia/Sydney",
    "IST": "Asia/Kolkata",
}

# Presets name IANA zones directly; short codes like CST are ambiguous
PRESETS: Dict[str, List[Tuple[str, str]]] = {
    "us": [
        ("America/New_York", "Eastern Time"),
        ("America/Chicago", "Central Time"),
        ("America/Denver", "Mountain Time"),
        ("America/Los_Angeles", "Pacific Time"),
        ("America/Anchorage", "Alaska Time"),
        ("Pacific/Honolulu", "Hawaii Time"),
    ],
    "global": [
        ("UTC", "Universal Time"),
        ("America/New_York", "Eastern Time (US)"),
        ("America/Los_Angeles", "Pacific Time (US)"),
        ("Europe/London", "London"),
        ("Europe/Paris", "Central Europe"),
        ("Asia/Kolkata", "India"),
        ("Asia/Tokyo", "Japan/Korea"),
        ("Australia/Sydney", "Australia Eastern"),
    ],
    "europe": [
        ("Europe/London", "London"),
        ("Europe/Paris", "Paris/Berlin/Rome"),
        ("Europe/Athens", "Eastern Europe"),
        ("Europe/Moscow", "Moscow"),
    ],
    "apac": [
        ("Asia/Kolkata", "India"),
        ("Asia/Bangkok", "Thailand/Vietnam"),
        ("Asia/Shanghai", "China/Taiwan"),
        ("Asia/Tokyo", "Japan/Korea"),
        ("Australia/Sydney", "Sydney/Melbourne"),
        ("Pacific/Auckland", "New Zealand"),
    ],
}

PRESET_LABELS = {
    "us": "Major US",
    "global": "Global",
    "europe": "Europe",
    "apac": "Asia Pacific",
}


def resolve_timezone(code: str) -> Optional[ZoneInfo]:
    """
    Resolve a common code ("EST") or IANA name ("Europe/Berlin").

    Returns:
        ZoneInfo, or None if the name is unknown.
    """
    if not code:
        return None
    name = COMMON_TIMEZONES.get(code.strip().upper(), code.strip())
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return None


def format_time(zone: ZoneInfo, now: Optional[datetime] = None) -> str:
    """Format like "Monday, January 6, 2025 at 03:04:05 PM"."""
    current = (now or datetime.now(tz=zone)).astimezone(zone)
    return current.strftime("%A, %B %d, %Y at %I:%M:%S %p").replace(" 0", " ")


def search_timezones(query: str, limit: int = 25) -> List[Tuple[str, str]]:
    """
    Autocomplete candidates as (label, value) pairs.

    Common codes come first, then IANA names containing the query.
    """
    query = (query or "").strip().lower()
    results: List[Tuple[str, str]] = []

    for code, zone in COMMON_TIMEZONES.items():
        if not query or query in code.lower() or query in zone.lower():
            results.append((f"{code} ({zone})", code))

    if query and len(results) < limit:
        for zone in sorted(available_timezones()):
            if query in zone.lower() and zone not in COMMON_TIMEZONES.values():
                results.append((zone, zone))
                if len(results) >= limit:
                    break

    return results[:limit]


__all__ = [
    "COMMON_TIMEZONES",
    "PRESETS",
    "PRESET_LABELS",
    "resolve_timezone",
    "format_time",
    "search_timezones",
]
