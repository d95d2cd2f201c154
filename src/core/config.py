"""
HarborBot - Configuration Module
================================

Centralized configuration loaded from environment variables.

DESIGN:
    One dataclass holds every setting the bot reads at runtime. The values
    are parsed and validated once, at startup, and reused through
    get_config(). Permission helpers live here so every cog checks
    moderator access the same way.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Set, Tuple
from zoneinfo import ZoneInfo

from src.core.constants import MOD_LOG_CHANNEL_NAMES


# =============================================================================
# Timezone Configuration
# =============================================================================

NY_TZ = ZoneInfo("America/New_York")
"""Timezone for log timestamps."""


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass
class Config:
    """
    Bot configuration loaded from environment variables.

    Attributes:
        discord_token: Discord bot authentication token.
        client_id: Application ID, used to build the invite link.
        dev_guild_id: When set, slash commands are synced to this guild only.
        database_path: SQLite file path. None selects the in-memory store.
        port: Port of the keep-alive HTTP server.
    """

    # -------------------------------------------------------------------------
    # Required: Discord
    # -------------------------------------------------------------------------

    discord_token: str

    # -------------------------------------------------------------------------
    # Optional: Discord
    # -------------------------------------------------------------------------

    client_id: Optional[int] = None
    dev_guild_id: Optional[int] = None
    developer_id: Optional[int] = None
    moderator_ids: Set[int] = field(default_factory=set)

    # -------------------------------------------------------------------------
    # Optional: Storage
    # -------------------------------------------------------------------------

    database_path: Optional[str] = None

    # -------------------------------------------------------------------------
    # Optional: Keep-alive Server
    # -------------------------------------------------------------------------

    port: int = 5000

    # -------------------------------------------------------------------------
    # Optional: Moderation
    # -------------------------------------------------------------------------

    mod_log_channel_names: Tuple[str, ...] = MOD_LOG_CHANNEL_NAMES
    max_timeout_days: int = 28
    bulk_delete_max_age_days: int = 14

    # -------------------------------------------------------------------------
    # Optional: Interaction Timeouts (seconds)
    # -------------------------------------------------------------------------

    view_timeout: int = 30
    nuke_frame_delay: float = 1.5

    # -------------------------------------------------------------------------
    # Optional: Webhooks
    # -------------------------------------------------------------------------

    error_webhook_url: Optional[str] = None

    # -------------------------------------------------------------------------
    # Optional: Debug
    # -------------------------------------------------------------------------

    debug: bool = False

    @property
    def storage_backend(self) -> str:
        """Backend name selected by this configuration."""
        return "sqlite" if self.database_path else "memory"


# =============================================================================
# Embed Colors
# =============================================================================

class EmbedColors:
    """Color palette for Discord embeds."""

    BLURPLE = 0x5865F2  # #5865F2
    GREEN = 0x57F287    # #57F287
    YELLOW = 0xFEE75C   # #FEE75C
    RED = 0xED4245      # #ED4245
    FUCHSIA = 0xEB459E  # #EB459E

    PRIMARY = BLURPLE
    SUCCESS = GREEN
    WARNING = YELLOW
    ERROR = RED
    INFO = BLURPLE

    TICKET = BLURPLE
    TICKET_CLOSED = RED
    MODERATION = RED
    FUN = FUCHSIA


# =============================================================================
# Validation
# =============================================================================

class ConfigValidationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


def _parse_int_optional(value: Optional[str], name: str = "") -> Optional[int]:
    """
    Parse an optional integer, returning None when unset or invalid.

    Args:
        value: Raw environment value.
        name: Variable name for the warning on invalid input.
    """
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        if name:
            from src.core.logger import logger
            logger.warning(f"Config {name}='{value}' is not an integer, ignoring")
        return None


def _parse_int_set(value: Optional[str]) -> Set[int]:
    """Parse "123,456" into {123, 456}. Invalid entries are skipped."""
    if not value:
        return set()
    result = set()
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            result.add(int(part))
        except ValueError:
            continue
    return result


def _parse_int_with_default(
    value: Optional[str],
    default: int,
    name: str,
    min_val: Optional[int] = None,
    max_val: Optional[int] = None,
) -> int:
    """
    Parse optional integer with default and range validation.

    Out-of-range values are clamped, unparsable values fall back to the
    default. Both cases log a warning.
    """
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        from src.core.logger import logger
        logger.warning(f"Config {name}='{value}' invalid, using default {default}")
        return default

    if min_val is not None and parsed < min_val:
        from src.core.logger import logger
        logger.warning(f"Config {name}={parsed} below min {min_val}, using {min_val}")
        return min_val
    if max_val is not None and parsed > max_val:
        from src.core.logger import logger
        logger.warning(f"Config {name}={parsed} above max {max_val}, using {max_val}")
        return max_val
    return parsed


def _parse_bool(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() in ("1", "true", "yes", "on")


def _validate_url(value: Optional[str], name: str) -> Optional[str]:
    """Return the URL if it looks like http(s), otherwise None with a warning."""
    if not value:
        return None
    if not value.startswith(("https://", "http://")):
        from src.core.logger import logger
        logger.warning(f"Config {name} invalid URL format, ignoring")
        return None
    return value


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    Returns:
        Validated Config object.

    Raises:
        ConfigValidationError: If any required variable is missing.
    """
    missing = []

    discord_token = os.getenv("DISCORD_TOKEN")
    if not discord_token:
        missing.append("DISCORD_TOKEN")

    if missing:
        raise ConfigValidationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    # DATABASE_URL is accepted as an alias for hosts that inject that name
    database_path = os.getenv("DATABASE_PATH") or os.getenv("DATABASE_URL") or None
    mod_log_channel_names = tuple(
        name.strip() for name in os.getenv("MOD_LOG_CHANNELS", "").split(",") if name.strip()
    ) or MOD_LOG_CHANNEL_NAMES

    return Config(
        discord_token=discord_token,
        client_id=_parse_int_optional(os.getenv("CLIENT_ID"), "CLIENT_ID"),
        dev_guild_id=_parse_int_optional(os.getenv("GUILD_ID"), "GUILD_ID"),
        developer_id=_parse_int_optional(os.getenv("DEVELOPER_ID"), "DEVELOPER_ID"),
        moderator_ids=_parse_int_set(os.getenv("MODERATOR_IDS")),
        database_path=database_path,
        mod_log_channel_names=mod_log_channel_names,
        port=_parse_int_with_default(os.getenv("PORT"), 5000, "PORT", min_val=1, max_val=65535),
        max_timeout_days=_parse_int_with_default(
            os.getenv("MAX_TIMEOUT_DAYS"), 28, "MAX_TIMEOUT_DAYS", min_val=1, max_val=28
        ),
        view_timeout=_parse_int_with_default(
            os.getenv("VIEW_TIMEOUT"), 30, "VIEW_TIMEOUT", min_val=5, max_val=900
        ),
        error_webhook_url=_validate_url(os.getenv("ERROR_WEBHOOK_URL"), "ERROR_WEBHOOK_URL"),
        debug=_parse_bool(os.getenv("DEBUG")),
    )


# =============================================================================
# Global Config Instance
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance, loading it on first use.

    Raises:
        ConfigValidationError: On first call if config is invalid.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the environment."""
    global _config
    _config = None


# =============================================================================
# Config Validation & Logging
# =============================================================================

def validate_and_log_config() -> Config:
    """
    Load the config (raising on invalid input) and log a summary tree.

    Raises:
        ConfigValidationError: If required configuration is missing.
    """
    from src.core.logger import logger

    config = get_config()

    if not config.client_id:
        logger.info("Optional config not set: CLIENT_ID")

    logger.tree_nested("Configuration Validated", [
        ("Discord", [
            ("Token", "✅ Set"),
            ("Client ID", str(config.client_id or "None")),
            ("Command Sync", f"Guild {config.dev_guild_id}" if config.dev_guild_id else "Global"),
        ]),
        ("Storage", [
            ("Backend", config.storage_backend),
            ("Path", config.database_path or "-"),
        ]),
        ("Server", [
            ("Port", str(config.port)),
            ("Error Webhook", "✅ Set" if config.error_webhook_url else "None"),
            ("Debug", str(config.debug)),
        ]),
    ], emoji="⚙️")

    return config


# =============================================================================
# Permission Helpers
# =============================================================================

def is_developer(user_id: int) -> bool:
    """Check if user is the configured bot developer."""
    developer_id = get_config().developer_id
    return developer_id is not None and user_id == developer_id


def is_moderator(user_id: int) -> bool:
    """Check if user is in the MODERATOR_IDS list."""
    return user_id in get_config().moderator_ids


def has_mod_role(member, staff_role_ids=None) -> bool:
    """
    Check if a member may perform staff actions.

    Developers, listed moderators, administrators and holders of any role
    in staff_role_ids all qualify.

    Args:
        member: Discord member object to check.
        staff_role_ids: Optional iterable of role IDs that count as staff.
    """
    if member is None:
        return False

    if is_developer(member.id) or is_moderator(member.id):
        return True

    permissions = getattr(member, "guild_permissions", None)
    if permissions is not None and permissions.administrator:
        return True

    if staff_role_ids:
        wanted = {int(r) for r in staff_role_ids}
        return any(role.id in wanted for role in getattr(member, "roles", []))

    return False


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "Config",
    "ConfigValidationError",
    "EmbedColors",
    "NY_TZ",
    "get_config",
    "load_config",
    "reset_config",
    "validate_and_log_config",
    "is_developer",
    "is_moderator",
    "has_mod_role",
]
