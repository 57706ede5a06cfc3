"""
Key-value repository backing the persisted application state
"""

import logging

from ..connection import DatabaseConnection

logger = logging.getLogger(__name__)


class StateRepository:
    """Repository for raw key-value state operations"""

    def __init__(self, db_connection: DatabaseConnection):
        self.db_connection = db_connection

    def get(self, key: str) -> str | None:
        """Get raw value by key"""
        with self.db_connection.get_connection() as conn:
            cursor = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace a value"""
        with self.db_connection.get_connection() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value),
            )
            conn.commit()

    def set_many(self, values: dict[str, str]) -> None:
        """Write several keys in one transaction"""
        with self.db_connection.get_connection() as conn:
            conn.executemany(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                list(values.items()),
            )
            conn.commit()

    def delete(self, key: str) -> bool:
        """Delete a key, returning whether it existed"""
        with self.db_connection.get_connection() as conn:
            cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
            return cursor.rowcount > 0

    def keys(self) -> list[str]:
        with self.db_connection.get_connection() as conn:
            cursor = conn.execute("SELECT key FROM kv_store ORDER BY key")
            return [row["key"] for row in cursor.fetchall()]

    def clear(self) -> int:
        """Delete every key"""
        with self.db_connection.get_connection() as conn:
            cursor = conn.execute("DELETE FROM kv_store")
            conn.commit()
            logger.info(f"Cleared {cursor.rowcount} stored keys")
            return cursor.rowcount
