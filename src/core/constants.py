"""
HarborBot - Centralized Constants
=================================

Magic numbers and fixed strings shared across cogs and services.
Import from this module instead of hardcoding values.
"""

# =============================================================================
# Time Constants (in seconds)
# =============================================================================

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400
SECONDS_PER_WEEK = 604800

# =============================================================================
# Network Constants
# =============================================================================

DEFAULT_KEEP_ALIVE_PORT = 5000
API_TIMEOUT = 10                      # External API request timeout

JOKE_API_URL = "https://v2.jokeapi.dev/joke/{category}"
MEME_API_URL = "https://meme-api.com/gimme/{subreddit}"
YESNO_API_URL = "https://yesno.wtf/api"

# =============================================================================
# Database Constants
# =============================================================================

DB_CONNECTION_TIMEOUT = 30.0          # sqlite3.connect timeout
SQLITE_BUSY_TIMEOUT = 5000            # PRAGMA busy_timeout (ms)

# =============================================================================
# Interaction Constants
# =============================================================================

VIEW_TIMEOUT = 30                     # Confirm/RPS views
GENERIC_ERROR_MESSAGE = "An error occurred while processing your request."

# =============================================================================
# Moderation Constants
# =============================================================================

MAX_BAN_DELETE_DAYS = 7
MAX_TIMEOUT_SECONDS = 28 * SECONDS_PER_DAY
BULK_DELETE_MAX_AGE = 14 * SECONDS_PER_DAY
CLEAR_MAX_AMOUNT = 99
PURGE_MAX_AMOUNT = 100
NUKE_FRAME_DELAY = 1.5
MOD_LOG_CHANNEL_NAMES = ("mod-logs", "logs")

# =============================================================================
# Ticket Constants
# =============================================================================

TICKET_NAME_MAX_LENGTH = 32
TICKET_LOG_VIEW_LIMIT = 10

# =============================================================================
# Discord Limits
# =============================================================================

EMBED_TITLE_LIMIT = 256
EMBED_DESCRIPTION_LIMIT = 4000        # Modal paragraph limit, below Discord's 4096
EMBED_FOOTER_LIMIT = 2048
EMBED_IMAGE_URL_LIMIT = 1024
EMBED_FIELD_VALUE_LIMIT = 1024
MESSAGE_CONTENT_LIMIT = 2000
MAX_AUTOCOMPLETE_RESULTS = 25
MAX_SELECT_OPTIONS = 25
TEMPLATE_NAME_MAX_LENGTH = 32

# =============================================================================
# Fun Command Limits
# =============================================================================

ASCII_MAX_INPUT = 20
ASCII_MAX_OUTPUT = 1994               # 2000 minus the code fence
WORLDCLOCK_MULTI_MAX = 10

# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "SECONDS_PER_MINUTE",
    "SECONDS_PER_HOUR",
    "SECONDS_PER_DAY",
    "SECONDS_PER_WEEK",
    "DEFAULT_KEEP_ALIVE_PORT",
    "API_TIMEOUT",
    "JOKE_API_URL",
    "MEME_API_URL",
    "YESNO_API_URL",
    "DB_CONNECTION_TIMEOUT",
    "SQLITE_BUSY_TIMEOUT",
    "VIEW_TIMEOUT",
    "GENERIC_ERROR_MESSAGE",
    "MAX_BAN_DELETE_DAYS",
    "MAX_TIMEOUT_SECONDS",
    "BULK_DELETE_MAX_AGE",
    "CLEAR_MAX_AMOUNT",
    "PURGE_MAX_AMOUNT",
    "NUKE_FRAME_DELAY",
    "MOD_LOG_CHANNEL_NAMES",
    "TICKET_NAME_MAX_LENGTH",
    "TICKET_LOG_VIEW_LIMIT",
    "EMBED_TITLE_LIMIT",
    "EMBED_DESCRIPTION_LIMIT",
    "EMBED_FOOTER_LIMIT",
    "EMBED_IMAGE_URL_LIMIT",
    "EMBED_FIELD_VALUE_LIMIT",
    "MESSAGE_CONTENT_LIMIT",
    "MAX_AUTOCOMPLETE_RESULTS",
    "MAX_SELECT_OPTIONS",
    "TEMPLATE_NAME_MAX_LENGTH",
    "ASCII_MAX_INPUT",
    "ASCII_MAX_OUTPUT",
    "WORLDCLOCK_MULTI_MAX",
]
