"""
HarborBot - Embed Authoring Sessions
====================================

The embed each user is currently working on, between the create modal
and the send / save-as-template buttons.

Entries expire after SESSION_TTL and the store is capped at max_size
users, evicting the oldest entry. Values are copied in and out so a
caller can never mutate a stored payload.
"""

import copy
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple


SESSION_TTL = timedelta(hours=1)
MAX_SESSIONS = 500

Payload = Dict[str, Any]


class EmbedSessionStore:
    """Per-user embed payloads with TTL expiry."""

    def __init__(self, ttl: timedelta = SESSION_TTL, max_size: int = MAX_SESSIONS) -> None:
        self._ttl = ttl
        self._max_size = max_size
        self._sessions: Dict[int, Tuple[Payload, datetime]] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, user_id: int) -> bool:
        return self.get(user_id) is not None

    def get(self, user_id: int) -> Optional[Payload]:
        entry = self._sessions.get(user_id)
        if entry is None:
            return None

        payload, stored_at = entry
        if datetime.now() - stored_at > self._ttl:
            self._sessions.pop(user_id, None)
            return None
        return copy.deepcopy(payload)

    def set(self, user_id: int, payload: Payload) -> None:
        if user_id not in self._sessions and len(self._sessions) >= self._max_size:
            self._evict_oldest()
        self._sessions[user_id] = (copy.deepcopy(payload), datetime.now())

    def pop(self, user_id: int) -> Optional[Payload]:
        payload = self.get(user_id)
        self._sessions.pop(user_id, None)
        return payload

    def clear(self) -> None:
        self._sessions.clear()

    def cleanup_expired(self) -> int:
        """Drop expired sessions. Returns how many were removed."""
        now = datetime.now()
        expired = [uid for uid, (_, stored_at) in self._sessions.items() if now - stored_at > self._ttl]
        for uid in expired:
            del self._sessions[uid]
        return len(expired)

    def _evict_oldest(self) -> None:
        if not self._sessions:
            return
        oldest = min(self._sessions, key=lambda uid: self._sessions[uid][1])
        del self._sessions[oldest]


__all__ = ["EmbedSessionStore", "SESSION_TTL", "MAX_SESSIONS"]
