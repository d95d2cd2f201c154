"""
HarborBot - Database Warning Operations Module
==============================================

Warning database operations.

Rows keep their autoincrement id forever. Users address warnings by their
1-based position in creation order, so numbers close up after a removal.
"""

from typing import List, Optional, TYPE_CHECKING

from src.core.logger import logger
from src.core.database.base import _now
from src.core.database.models import WarningRecord

if TYPE_CHECKING:
    from src.core.database.manager import DatabaseManager


def _number_warnings(rows) -> List[WarningRecord]:
    warnings = []
    for number, row in enumerate(rows, start=1):
        record = dict(row)
        record["number"] = number
        warnings.append(record)
    return warnings


class WarningsMixin:
    """Mixin for warning-related database operations."""

    def add_warning(
        self: "DatabaseManager",
        guild_id: int,
        user_id: int,
        issued_by: int,
        reason: str,
    ) -> WarningRecord:
        """
        Add a warning to the database.

        Returns:
            The stored warning with its display number.
        """
        cursor = self.execute(
            """INSERT INTO warnings (guild_id, user_id, issued_by, reason, created_at)
               VALUES (?, ?, ?, ?, ?)""",
            (guild_id, user_id, issued_by, reason, _now())
        )
        warning_id = cursor.lastrowid

        warnings = self.get_user_warnings(guild_id, user_id)
        record = next(w for w in warnings if w["id"] == warning_id)

        logger.tree("Warning Added", [
            ("User ID", str(user_id)),
            ("Issued By", str(issued_by)),
            ("Number", str(record["number"])),
            ("Reason", (reason or "None")[:50]),
        ], emoji="⚠️")

        return record

    def get_user_warnings(self: "DatabaseManager", guild_id: int, user_id: int) -> List[WarningRecord]:
        """All warnings for a user, oldest first, numbered 1..n."""
        rows = self.fetchall(
            """SELECT id, guild_id, user_id, issued_by, reason, created_at
               FROM warnings
               WHERE guild_id = ? AND user_id = ?
               ORDER BY id""",
            (guild_id, user_id)
        )
        return _number_warnings(rows)

    def get_user_warn_count(self: "DatabaseManager", guild_id: int, user_id: int) -> int:
        row = self.fetchone(
            "SELECT COUNT(*) as count FROM warnings WHERE guild_id = ? AND user_id = ?",
            (guild_id, user_id)
        )
        return row["count"] if row else 0

    def remove_warning(
        self: "DatabaseManager",
        guild_id: int,
        user_id: int,
        number: int,
    ) -> Optional[WarningRecord]:
        """
        Remove the warning shown as #number.

        Returns:
            The removed warning, or None if number is out of range.
        """
        if number < 1:
            return None

        with self.transaction() as tx:
            tx.execute(
                """SELECT id, guild_id, user_id, issued_by, reason, created_at
                   FROM warnings WHERE guild_id = ? AND user_id = ?
                   ORDER BY id""",
                (guild_id, user_id)
            )
            warnings = _number_warnings(tx.fetchall())
            if number > len(warnings):
                return None
            target = warnings[number - 1]
            tx.execute("DELETE FROM warnings WHERE id = ?", (target["id"],))

        logger.tree("Warning Removed", [
            ("User ID", str(user_id)),
            ("Number", str(number)),
        ], emoji="🧹")

        return target

    def clear_warnings(self: "DatabaseManager", guild_id: int, user_id: int) -> int:
        """Delete every warning for a user. Returns how many were removed."""
        cursor = self.execute(
            "DELETE FROM warnings WHERE guild_id = ? AND user_id = ?",
            (guild_id, user_id)
        )
        removed = cursor.rowcount
        if removed:
            logger.tree("Warnings Cleared", [
                ("User ID", str(user_id)),
                ("Removed", str(removed)),
            ], emoji="🧹")
        return removed


__all__ = ["WarningsMixin"]
