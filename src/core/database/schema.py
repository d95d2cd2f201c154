"""
Database Schema Module
======================

Table definitions for the SQLite backend.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.core.database.manager import DatabaseManager


class SchemaMixin:
    """Mixin for database schema initialization."""

    def _init_tables(self: "DatabaseManager") -> None:
        """
        Create every table and index if missing.

        Safe to run repeatedly; /database init calls it on a live connection.
        """
        conn = self._ensure_connection()
        cursor = conn.cursor()

        # -----------------------------------------------------------------
        # Embed Templates
        # Named payloads, one name per guild
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS embed_templates (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                guild_id INTEGER NOT NULL,
                name TEXT NOT NULL,
                embed_data TEXT NOT NULL,
                created_by INTEGER NOT NULL,
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL
            )
        """)
        cursor.execute("""
            CREATE UNIQUE INDEX IF NOT EXISTS idx_embed_templates_guild_name
            ON embed_templates(guild_id, name)
        """)

        # -----------------------------------------------------------------
        # Sent Embeds
        # Messages the bot posted through /embed-send
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS sent_embeds (
                message_id INTEGER PRIMARY KEY,
                channel_id INTEGER NOT NULL,
                guild_id INTEGER NOT NULL,
                embed_data TEXT NOT NULL,
                created_by INTEGER NOT NULL,
                updated_by INTEGER,
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_sent_embeds_guild
            ON sent_embeds(guild_id)
        """)

        # -----------------------------------------------------------------
        # Ticket Settings
        # One row per guild; list columns are JSON
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS ticket_settings (
                guild_id INTEGER PRIMARY KEY,
                category TEXT NOT NULL,
                staff_roles TEXT NOT NULL DEFAULT '[]',
                logs_channel TEXT NOT NULL,
                ticket_types TEXT NOT NULL DEFAULT '[]',
                welcome_message TEXT NOT NULL,
                panel_channel_id INTEGER,
                panel_message_id INTEGER,
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL
            )
        """)

        # -----------------------------------------------------------------
        # Tickets
        # ticket_number backs the public "ticket-<n>" id
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS tickets (
                ticket_number INTEGER PRIMARY KEY AUTOINCREMENT,
                guild_id INTEGER NOT NULL,
                channel_id INTEGER NOT NULL UNIQUE,
                user_id INTEGER NOT NULL,
                type TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'open',
                claimed_by INTEGER,
                closed_by INTEGER,
                closed_at REAL,
                ticket_name TEXT,
                participants TEXT NOT NULL DEFAULT '[]',
                messages TEXT NOT NULL DEFAULT '[]',
                created_at REAL NOT NULL,
                updated_at REAL NOT NULL
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_tickets_guild_status
            ON tickets(guild_id, status)
        """)

        # -----------------------------------------------------------------
        # Ticket Logs
        # Append-only audit trail
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS ticket_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                guild_id INTEGER NOT NULL,
                ticket_id TEXT,
                action TEXT NOT NULL,
                user_id INTEGER NOT NULL,
                details TEXT NOT NULL DEFAULT '{}',
                created_at REAL NOT NULL
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_ticket_logs_guild
            ON ticket_logs(guild_id, created_at)
        """)

        # -----------------------------------------------------------------
        # Warnings
        # id is stable, display numbers are computed per user
        # -----------------------------------------------------------------
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS warnings (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                guild_id INTEGER NOT NULL,
                user_id INTEGER NOT NULL,
                issued_by INTEGER NOT NULL,
                reason TEXT NOT NULL,
                created_at REAL NOT NULL
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_warnings_guild_user
            ON warnings(guild_id, user_id)
        """)

        conn.commit()


__all__ = ["SchemaMixin"]
