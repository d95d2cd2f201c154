"""
HarborBot - Database Embed Operations Module
============================================

Embed templates and the registry of embeds the bot has posted.
"""

from typing import Any, Dict, List, Optional, TYPE_CHECKING

from src.core.logger import logger
from src.core.database.base import _safe_json_loads, _json_dumps, _now
from src.core.database.models import EmbedTemplateRecord, SentEmbedRecord

if TYPE_CHECKING:
    from src.core.database.manager import DatabaseManager


def _row_to_embed_record(row) -> Optional[Dict[str, Any]]:
    if row is None:
        return None
    data = dict(row)
    data["embed_data"] = _safe_json_loads(data.get("embed_data"), {})
    return data


class EmbedsMixin:
    """Mixin for embed template and sent embed operations."""

    # =========================================================================
    # Templates
    # =========================================================================

    def create_template(
        self: "DatabaseManager",
        guild_id: int,
        name: str,
        embed_data: Dict[str, Any],
        created_by: int,
    ) -> EmbedTemplateRecord:
        """
        Save a named template.

        Raises:
            DuplicateRecordError: If the guild already has a template with this name.
        """
        now = _now()
        self.execute(
            """INSERT INTO embed_templates
               (guild_id, name, embed_data, created_by, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (guild_id, name, _json_dumps(embed_data), created_by, now, now)
        )

        logger.tree("Embed Template Saved", [
            ("Guild ID", str(guild_id)),
            ("Name", name),
            ("Created By", str(created_by)),
        ], emoji="📝")

        return self.get_template(guild_id, name)

    def get_template(self: "DatabaseManager", guild_id: int, name: str) -> Optional[EmbedTemplateRecord]:
        row = self.fetchone(
            "SELECT * FROM embed_templates WHERE guild_id = ? AND name = ?",
            (guild_id, name)
        )
        return _row_to_embed_record(row)

    def list_templates(self: "DatabaseManager", guild_id: int) -> List[EmbedTemplateRecord]:
        rows = self.fetchall(
            "SELECT * FROM embed_templates WHERE guild_id = ? ORDER BY name",
            (guild_id,)
        )
        return [_row_to_embed_record(r) for r in rows]

    def update_template(
        self: "DatabaseManager",
        guild_id: int,
        name: str,
        embed_data: Dict[str, Any],
    ) -> Optional[EmbedTemplateRecord]:
        cursor = self.execute(
            """UPDATE embed_templates SET embed_data = ?, updated_at = ?
               WHERE guild_id = ? AND name = ?""",
            (_json_dumps(embed_data), _now(), guild_id, name)
        )
        if cursor.rowcount == 0:
            return None
        return self.get_template(guild_id, name)

    def delete_template(self: "DatabaseManager", guild_id: int, name: str) -> bool:
        cursor = self.execute(
            "DELETE FROM embed_templates WHERE guild_id = ? AND name = ?",
            (guild_id, name)
        )
        if cursor.rowcount > 0:
            logger.tree("Embed Template Deleted", [
                ("Guild ID", str(guild_id)),
                ("Name", name),
            ], emoji="🗑️")
            return True
        return False

    # =========================================================================
    # Sent Embeds
    # =========================================================================

    def store_sent_embed(
        self: "DatabaseManager",
        message_id: int,
        channel_id: int,
        guild_id: int,
        embed_data: Dict[str, Any],
        created_by: int,
    ) -> SentEmbedRecord:
        """Record an embed the bot posted. Re-storing the same message replaces it."""
        now = _now()
        self.execute(
            """INSERT INTO sent_embeds
               (message_id, channel_id, guild_id, embed_data, created_by, updated_by, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, NULL, ?, ?)
               ON CONFLICT(message_id) DO UPDATE SET
                   embed_data = excluded.embed_data,
                   updated_at = excluded.updated_at""",
            (message_id, channel_id, guild_id, _json_dumps(embed_data), created_by, now, now)
        )
        return self.get_sent_embed(message_id)

    def get_sent_embed(self: "DatabaseManager", message_id: int) -> Optional[SentEmbedRecord]:
        row = self.fetchone("SELECT * FROM sent_embeds WHERE message_id = ?", (message_id,))
        return _row_to_embed_record(row)

    def list_sent_embeds(self: "DatabaseManager", guild_id: int) -> List[SentEmbedRecord]:
        rows = self.fetchall(
            "SELECT * FROM sent_embeds WHERE guild_id = ? ORDER BY created_at",
            (guild_id,)
        )
        return [_row_to_embed_record(r) for r in rows]

    def update_sent_embed(
        self: "DatabaseManager",
        message_id: int,
        embed_data: Dict[str, Any],
        updated_by: int,
    ) -> Optional[SentEmbedRecord]:
        cursor = self.execute(
            """UPDATE sent_embeds SET embed_data = ?, updated_by = ?, updated_at = ?
               WHERE message_id = ?""",
            (_json_dumps(embed_data), updated_by, _now(), message_id)
        )
        if cursor.rowcount == 0:
            return None
        return self.get_sent_embed(message_id)

    def delete_sent_embed(self: "DatabaseManager", message_id: int) -> bool:
        cursor = self.execute("DELETE FROM sent_embeds WHERE message_id = ?", (message_id,))
        return cursor.rowcount > 0


__all__ = ["EmbedsMixin"]
