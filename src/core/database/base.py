"""
HarborBot - Database Base Module
================================

Shared helpers and error types for both storage backends.
"""

import copy
import json
import time
from typing import Any, Dict, Iterable, Optional

from src.core.logger import logger


# =============================================================================
# Errors
# =============================================================================

class DatabaseError(Exception):
    """Raised when the durable backend fails a read or write."""

    pass


class DuplicateRecordError(DatabaseError):
    """Raised when a create would violate a uniqueness rule."""

    pass


# =============================================================================
# Helper Functions
# =============================================================================

def _safe_json_loads(value: Optional[str], default: Any = None) -> Any:
    """Safely parse JSON, returning default on error."""
    if not value:
        return default if default is not None else []
    try:
        return json.loads(value)
    except (json.JSONDecodeError, ValueError):
        logger.warning(f"Corrupted JSON in database: {value[:50] if len(value) > 50 else value}")
        return default if default is not None else []


def _json_dumps(value: Any) -> Optional[str]:
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False)


def _now() -> float:
    return time.time()


def _copy_record(record: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Deep copy so callers never mutate stored state."""
    return copy.deepcopy(record) if record is not None else None


def _pick_fields(fields: Dict[str, Any], allowed: Iterable[str]) -> Dict[str, Any]:
    """Keep only the keys a table accepts for updates."""
    allowed = set(allowed)
    return {k: v for k, v in fields.items() if k in allowed}


def _format_ticket_id(number: int) -> str:
    return f"ticket-{number}"


def _parse_ticket_id(ticket_id: str) -> Optional[int]:
    """Reverse of _format_ticket_id. Returns None for foreign ids."""
    if not ticket_id or not ticket_id.startswith("ticket-"):
        return None
    try:
        return int(ticket_id[len("ticket-"):])
    except ValueError:
        return None


__all__ = [
    "DatabaseError",
    "DuplicateRecordError",
    "_safe_json_loads",
    "_json_dumps",
    "_now",
    "_copy_record",
    "_pick_fields",
    "_format_ticket_id",
    "_parse_ticket_id",
]
