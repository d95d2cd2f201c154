"""
HarborBot - Database Manager
============================

SQLite record store and startup backend selection.

DESIGN:
    DatabaseManager is a process-wide singleton holding one WAL-mode
    connection behind a thread lock. Entity operations live in mixins.

    init_db() picks the backend exactly once: SQLite when a path is
    configured and opens cleanly, otherwise the in-memory store. After
    that choice, SQLite failures surface as DatabaseError and are never
    answered by quietly writing to memory instead.
"""

import sqlite3
import threading
import time
from pathlib import Path
from typing import Optional, List, Tuple, Union, Dict, Any

from src.core.logger import logger
from src.core.constants import DB_CONNECTION_TIMEOUT, SQLITE_BUSY_TIMEOUT
from src.core.database.base import DatabaseError, DuplicateRecordError
from src.core.database.schema import SchemaMixin
from src.core.database.tickets import TicketsMixin
from src.core.database.embeds import EmbedsMixin
from src.core.database.warnings import WarningsMixin
from src.core.database.memory import MemoryDatabase


def _integrity_error(e: sqlite3.IntegrityError) -> DatabaseError:
    """DuplicateRecordError for UNIQUE or PRIMARY KEY violations, DatabaseError otherwise."""
    message = str(e)
    if message.startswith(("UNIQUE constraint failed", "PRIMARY KEY must be unique")):
        return DuplicateRecordError(message)
    return DatabaseError(message)


# =============================================================================
# Constants
# =============================================================================

# Path: src/core/database/manager.py -> go up 4 levels to reach project root
DATA_DIR: Path = Path(__file__).parent.parent.parent.parent / "data"
DB_PATH: Path = DATA_DIR / "harbor.db"


# =============================================================================
# Database Manager (Singleton)
# =============================================================================

class DatabaseManager(
    SchemaMixin,
    TicketsMixin,
    EmbedsMixin,
    WarningsMixin,
):
    """
    Centralized SQLite manager with thread-safe operations.

    Attributes:
        path: Database file location.
        backend_name: Always "sqlite".
    """

    backend_name = "sqlite"

    _instance: Optional["DatabaseManager"] = None
    _lock: threading.Lock = threading.Lock()

    def __new__(cls, path: Optional[Union[str, Path]] = None) -> "DatabaseManager":
        """Singleton pattern - only one instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        if self._initialized:
            return

        self.path: Path = Path(path) if path else DB_PATH
        self._db_lock: threading.Lock = threading.Lock()
        self._conn: Optional[sqlite3.Connection] = None

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._connect()
        try:
            self._create_schema()
        except DatabaseError:
            self._conn.close()
            self._conn = None
            raise
        self._initialized = True

        logger.tree("Database Manager Initialized", [
            ("Path", str(self.path)),
            ("WAL Mode", "Enabled"),
            ("Cache Size", "64MB"),
        ], emoji="🗄️")

    @classmethod
    def reset_instance(cls) -> None:
        """Close and forget the singleton."""
        with cls._lock:
            if cls._instance is not None and cls._instance._initialized:
                cls._instance.close()
            cls._instance = None

    # =========================================================================
    # Connection Management
    # =========================================================================

    def _connect(self) -> None:
        """Open the connection with WAL mode and a 64MB page cache."""
        try:
            self._conn = sqlite3.connect(
                str(self.path),
                check_same_thread=False,
                timeout=DB_CONNECTION_TIMEOUT,
            )
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.execute("PRAGMA synchronous=NORMAL")
            self._conn.execute("PRAGMA cache_size=-64000")
            self._conn.execute("PRAGMA temp_store=MEMORY")
            self._conn.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT}")
            self._conn.row_factory = sqlite3.Row
        except sqlite3.Error as e:
            logger.error("Database Connection Failed", [
                ("Path", str(self.path)),
                ("Error", str(e)),
            ])
            raise DatabaseError(str(e)) from e

    def _ensure_connection(self) -> sqlite3.Connection:
        """Ensure connection is valid, reconnect if needed."""
        if self._conn is None:
            self._connect()
        try:
            self._conn.execute("SELECT 1")
        except sqlite3.Error:
            self._connect()
        return self._conn

    def execute(
        self,
        query: str,
        params: Tuple = (),
        commit: bool = True
    ) -> sqlite3.Cursor:
        """
        Execute a query with thread safety.

        Raises:
            DuplicateRecordError: On a uniqueness violation.
            DatabaseError: On any other SQLite failure.
        """
        with self._db_lock:
            conn = self._ensure_connection()
            try:
                cursor = conn.cursor()
                cursor.execute(query, params)
                if commit:
                    conn.commit()
                return cursor
            except sqlite3.IntegrityError as e:
                conn.rollback()
                error = _integrity_error(e)
                if not isinstance(error, DuplicateRecordError):
                    logger.error("Database Constraint Failed", [
                        ("Query", " ".join(query.split())[:80]),
                        ("Error", str(e)[:100]),
                    ])
                raise error from e
            except sqlite3.Error as e:
                conn.rollback()
                logger.error("Database Query Failed", [
                    ("Query", " ".join(query.split())[:80]),
                    ("Error", str(e)[:100]),
                ])
                raise DatabaseError(str(e)) from e

    def fetchone(self, query: str, params: Tuple = ()) -> Optional[sqlite3.Row]:
        """Execute query and fetch one result."""
        cursor = self.execute(query, params, commit=False)
        return cursor.fetchone()

    def fetchall(self, query: str, params: Tuple = ()) -> List[sqlite3.Row]:
        """Execute query and fetch all results."""
        cursor = self.execute(query, params, commit=False)
        return cursor.fetchall()

    def close(self) -> None:
        """Close database connection."""
        with self._db_lock:
            if self._conn:
                self._conn.close()
                self._conn = None
                logger.info("Database Connection Closed")

    # =========================================================================
    # Transaction Support
    # =========================================================================

    class Transaction:
        """
        Context manager for atomic database transactions.

        Usage:
            with db.transaction() as tx:
                tx.execute("SELECT ...", (...))
                row = tx.fetchone()
                tx.execute("UPDATE ...", (...))
            # Commits on success, rolls back on exception
        """

        def __init__(self, db: "DatabaseManager"):
            self._db = db
            self._cursor: Optional[sqlite3.Cursor] = None

        def __enter__(self) -> "DatabaseManager.Transaction":
            self._db._db_lock.acquire()
            try:
                conn = self._db._ensure_connection()
                conn.execute("BEGIN IMMEDIATE")
            except (sqlite3.Error, DatabaseError) as e:
                self._db._db_lock.release()
                raise DatabaseError(str(e)) from e
            self._cursor = conn.cursor()
            return self

        def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
            conn = self._db._ensure_connection()
            try:
                if exc_type is None:
                    conn.commit()
                else:
                    conn.rollback()
                    logger.warning("Database Transaction Rolled Back", [
                        ("Error", str(exc_val)[:100] if exc_val else "Unknown"),
                    ])
            finally:
                self._db._db_lock.release()
            return False

        def execute(self, query: str, params: Tuple = ()) -> sqlite3.Cursor:
            """Execute a query within this transaction."""
            try:
                self._cursor.execute(query, params)
            except sqlite3.IntegrityError as e:
                raise _integrity_error(e) from e
            except sqlite3.Error as e:
                raise DatabaseError(str(e)) from e
            return self._cursor

        def fetchone(self) -> Optional[sqlite3.Row]:
            """Fetch one result from the last query."""
            return self._cursor.fetchone() if self._cursor else None

        def fetchall(self) -> List[sqlite3.Row]:
            """Fetch all results from the last query."""
            return self._cursor.fetchall() if self._cursor else []

        @property
        def lastrowid(self) -> int:
            """Get the last inserted row ID."""
            return self._cursor.lastrowid if self._cursor else 0

    def transaction(self) -> "DatabaseManager.Transaction":
        """Create a new transaction context manager."""
        return self.Transaction(self)

    # =========================================================================
    # Status
    # =========================================================================

    def _create_schema(self) -> None:
        """Run _init_tables, reporting SQLite failures as DatabaseError."""
        try:
            self._init_tables()
        except sqlite3.Error as e:
            logger.error("Database Schema Failed", [
                ("Path", str(self.path)),
                ("Error", str(e)[:100]),
            ])
            raise DatabaseError(str(e)) from e

    def init_schema(self) -> None:
        """Re-run table creation on the live connection."""
        with self._db_lock:
            self._create_schema()
        logger.tree("Database Schema Initialized", [
            ("Backend", self.backend_name),
            ("Path", str(self.path)),
        ], emoji="🗄️")

    def ping(self) -> Dict[str, Any]:
        """
        Probe the connection and collect row counts.

        Raises:
            DatabaseError: If the probe query fails.
        """
        started = time.perf_counter()
        clock = self.fetchone("SELECT datetime('now') as now")
        latency_ms = (time.perf_counter() - started) * 1000

        counts = {}
        for table in ("tickets", "ticket_logs", "embed_templates", "sent_embeds", "warnings"):
            row = self.fetchone(f"SELECT COUNT(*) as count FROM {table}")
            counts[table] = row["count"] if row else 0

        return {
            "backend": self.backend_name,
            "ok": True,
            "latency_ms": round(latency_ms, 2),
            "server_time": f"{clock['now']} UTC",
            "location": str(self.path),
            "counts": counts,
        }


# =============================================================================
# Backend Selection
# =============================================================================

Store = Union[DatabaseManager, MemoryDatabase]

_active: Optional[Store] = None


def init_db(path: Optional[Union[str, Path]] = None) -> Store:
    """
    Select the record store for this process.

    Args:
        path: SQLite file path. None or empty selects the memory store.

    Returns:
        The selected backend, also returned by get_db() from now on.
    """
    global _active

    if not path:
        _active = MemoryDatabase()
        logger.tree("Record Store Selected", [
            ("Backend", "memory"),
            ("Reason", "No database path configured"),
        ], emoji="🧠")
        return _active

    try:
        _active = DatabaseManager(path)
    except (DatabaseError, OSError) as e:
        DatabaseManager._instance = None
        _active = MemoryDatabase()
        logger.warning("SQLite Unavailable, Using Memory Store", [
            ("Path", str(path)),
            ("Error", str(e)[:100]),
        ])
        return _active

    logger.tree("Record Store Selected", [
        ("Backend", "sqlite"),
        ("Path", str(path)),
    ], emoji="🗄️")
    return _active


def get_db() -> Store:
    """Get the selected record store, selecting from config on first use."""
    if _active is None:
        from src.core.config import get_config
        return init_db(get_config().database_path)
    return _active


def reset_db() -> None:
    """Forget the selected backend and close SQLite if it was in use."""
    global _active
    if isinstance(_active, DatabaseManager):
        DatabaseManager.reset_instance()
    _active = None


# Alias used across the codebase
Database = DatabaseManager


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "DatabaseManager",
    "Database",
    "Store",
    "init_db",
    "get_db",
    "reset_db",
    "DB_PATH",
    "DATA_DIR",
]
