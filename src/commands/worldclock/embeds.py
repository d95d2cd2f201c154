"""
HarborBot - World Clock Embeds
==============================
"""

from datetime import datetime
from typing import Iterable, List, Optional, Tuple

import discord

from src.core.constants import MAX_SELECT_OPTIONS, WORLDCLOCK_MULTI_MAX
from src.utils.responses import create_embed
from src.utils.timezones import COMMON_TIMEZONES, format_time, resolve_timezone


def build_time_embed(region: str, now: Optional[datetime] = None) -> Optional[discord.Embed]:
    """Single-zone embed, or None if the region does not resolve."""
    zone = resolve_timezone(region)
    if zone is None:
        return None
    return create_embed(
        "primary",
        f"🕰️ World Clock: {region}",
        f"Current time: **{format_time(zone, now)}**",
    )


def build_multi_embed(zones: Iterable[Tuple[str, str]], now: Optional[datetime] = None) -> discord.Embed:
    """
    One inline field per (code, label) pair.

    Codes that do not resolve are shown as "Invalid timezone" instead of
    failing the whole reply.
    """
    fields = []
    for code, label in zones:
        zone = resolve_timezone(code)
        fields.append((label or code, format_time(zone, now) if zone else "Invalid timezone", True))
    return create_embed("primary", "🌎 World Clock", None, fields=fields)


def build_list_embed() -> discord.Embed:
    entries = list(COMMON_TIMEZONES.items())
    fields = []
    for index in range(0, len(entries), 5):
        chunk = entries[index:index + 5]
        fields.append((
            f"Timezones ({index // 5 + 1})",
            "\n".join(f"`{code}` - {zone}" for code, zone in chunk),
            True,
        ))
    fields.append((
        "Full List",
        "You can also use any valid IANA timezone identifier, such as `America/New_York` or `Europe/London`.",
        False,
    ))
    return create_embed(
        "primary",
        "🌐 Supported Timezones",
        "Here are some common timezones you can use:",
        fields=fields,
    )


class WorldClockSelectView(discord.ui.View):
    """Zone picker for /worldclock-multiple. Selections go through the router."""

    def __init__(self) -> None:
        super().__init__(timeout=None)
        options: List[discord.SelectOption] = [
            discord.SelectOption(label=code, description=zone, value=code)
            for code, zone in list(COMMON_TIMEZONES.items())[:MAX_SELECT_OPTIONS]
        ]
        self.add_item(discord.ui.Select(
            custom_id="worldclock_select",
            placeholder="Select timezones to display",
            min_values=1,
            max_values=min(WORLDCLOCK_MULTI_MAX, len(options)),
            options=options,
        ))


__all__ = [
    "build_time_embed",
    "build_multi_embed",
    "build_list_embed",
    "WorldClockSelectView",
]
