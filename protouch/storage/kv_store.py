"""
Key-value store adapters.
Each key holds one serialized (JSON text) document.
"""

import asyncio
import sqlite3
import threading
from contextlib import contextmanager
from typing import Dict, Iterable, List, Optional, Protocol

from config.logging_config import get_logger
from config import settings
from protouch.core.errors import StorageError

logger = get_logger(__name__)


class KeyValueStore(Protocol):
    """
    Asynchronous string-keyed document store.

    No transaction spans several keys; writes to one key are last-write-wins.
    """

    async def get(self, key: str) -> Optional[str]: ...
    async def set(self, key: str, document: str) -> None: ...
    async def remove(self, keys: Iterable[str]) -> None: ...
    async def initialize(self) -> None: ...


class SQLiteKeyValueStore:
    """
    Durable SQLite-backed store.
    Blocking sqlite3 work runs on the default executor behind a thread lock.
    """

    SCHEMA = """
    CREATE TABLE IF NOT EXISTS kv_store (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """

    def __init__(self, db_path: str = None):
        """
        Initialize store. Nothing touches the database until initialize()
        or the first read/write.

        Args:
            db_path: Path to SQLite database (default from settings)
        """
        self.db_path = db_path or str(settings.DB_PATH)
        self.lock = threading.Lock()
        self.initialized = False

        logger.info(f"SQLiteKeyValueStore created: {self.db_path}")

    async def initialize(self) -> None:
        """
        Create the schema on the executor if not done yet.

        Raises:
            StorageError: If the schema cannot be created
        """
        if self.initialized:
            return
        await self._execute(self._initialize_database)
        self.initialized = True

    def _initialize_database(self) -> None:
        """Create database schema if it doesn't exist."""
        try:
            with self._get_connection() as conn:
                conn.executescript(self.SCHEMA)
                conn.commit()
            logger.debug("Key-value schema initialized")

        except sqlite3.Error as e:
            logger.error(f"Failed to initialize key-value store: {e}", exc_info=True)
            raise StorageError(f"Cannot initialize store at {self.db_path}") from e

    @contextmanager
    def _get_connection(self):
        """
        Get database connection (context manager).

        Yields:
            SQLite connection
        """
        conn = sqlite3.connect(self.db_path)
        try:
            yield conn
        finally:
            conn.close()

    async def _run(self, func, *args):
        """Run a blocking store call once the schema exists."""
        await self.initialize()
        return await self._execute(func, *args)

    async def _execute(self, func, *args):
        """Run a blocking call on the executor, mapping sqlite errors to StorageError."""
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, func, *args)
        except (sqlite3.Error, OSError) as e:
            raise StorageError(str(e)) from e

    async def get(self, key: str) -> Optional[str]:
        """
        Read the document stored under key.

        Returns:
            Serialized document or None if the key is absent
        """
        return await self._run(self._get_sync, key)

    async def set(self, key: str, document: str) -> None:
        """Store document under key, replacing any previous value."""
        await self._run(self._set_sync, key, document)

    async def remove(self, keys: Iterable[str]) -> None:
        """Delete every key in keys; absent keys are ignored."""
        await self._run(self._remove_sync, list(keys))

    async def keys(self) -> List[str]:
        """List stored keys (diagnostics)."""
        return await self._run(self._keys_sync)

    def _get_sync(self, key: str) -> Optional[str]:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?",
                (key,)
            ).fetchone()
            return row[0] if row else None

    def _set_sync(self, key: str, document: str) -> None:
        with self.lock:
            with self._get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at)
                    VALUES (?, ?, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, document)
                )
                conn.commit()
        logger.debug(f"Stored {key} ({len(document)} bytes)")

    def _remove_sync(self, keys: List[str]) -> None:
        if not keys:
            return
        placeholders = ", ".join("?" for _ in keys)
        with self.lock:
            with self._get_connection() as conn:
                cursor = conn.execute(
                    f"DELETE FROM kv_store WHERE key IN ({placeholders})",
                    keys
                )
                conn.commit()
        logger.debug(f"Removed {cursor.rowcount} of {len(keys)} keys")

    def _keys_sync(self) -> List[str]:
        with self._get_connection() as conn:
            rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
            return [row[0] for row in rows]


class InMemoryKeyValueStore:
    """Process-local store with the same contract; nothing survives a restart."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def initialize(self) -> None:
        pass

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, document: str) -> None:
        self._data[key] = document

    async def remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    async def keys(self) -> List[str]:
        return sorted(self._data)
