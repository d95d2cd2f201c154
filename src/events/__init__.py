"""
HarborBot - Events Package
==========================

Event handler Cogs for HarborBot.

DESIGN:
    Each event file contains a Cog class with @commands.Cog.listener
    decorators. Cogs are loaded dynamically by the bot using
    load_extension().

    Event routing:
    - interactions.py: Component/modal routing and the slash command error boundary
    - messages.py: Ticket transcript capture
"""

# =============================================================================
# Event Cog Registry
# =============================================================================

EVENT_COGS = [
    "src.events.interactions",
    "src.events.messages",
]
"""
List of event cog module paths for dynamic loading.

DESIGN:
    Bot iterates this list and calls load_extension() for each.
    Add new event cogs here to have them loaded automatically.
"""


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "EVENT_COGS",
]
