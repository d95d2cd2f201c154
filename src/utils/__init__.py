"""
HarborBot - Utils Package
=========================

Stateless helpers used across cogs and services.

Available Utilities:
    duration: Parse and format timeout durations
    error_handler: Categorized error logging
    interaction: Safe replies and log channel lookup
    math_eval: Arithmetic expression evaluator
    responses: Standard reply embeds
    router: Custom ID routing for components and modals
    timezones: World clock lookups
"""

# =============================================================================
# Utility Imports
# =============================================================================

from .responses import create_embed, success, error, info, warning
from .interaction import safe_respond, safe_defer, safe_edit, send_generic_error
from .duration import parse_duration, format_duration, format_duration_long
from .error_handler import ErrorHandler, safe_execute


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    # Responses
    "create_embed",
    "success",
    "error",
    "info",
    "warning",
    # Interaction
    "safe_respond",
    "safe_defer",
    "safe_edit",
    "send_generic_error",
    # Duration
    "parse_duration",
    "format_duration",
    "format_duration_long",
    # Errors
    "ErrorHandler",
    "safe_execute",
]
