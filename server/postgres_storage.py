"""PostgreSQL preference storage implementation."""

import logging
import os

import psycopg2
from psycopg2.extras import RealDictCursor

from core.interfaces import Storage
from server.file_storage import default_preferences

logger = logging.getLogger(__name__)


class PostgresStorage(Storage):
    """PostgreSQL-based preference storage."""

    def __init__(self, db_url: str = None):
        self.db_url = db_url or os.environ.get(
            'DATABASE_URL',
            'postgresql://localhost:5432/wordmatch'
        )
        self._conn = None
        self._initialized = False

    @property
    def conn(self):
        """Lazy connection initialization."""
        if self._conn is None or self._conn.closed:
            self._conn = psycopg2.connect(self.db_url)
            if not self._initialized:
                self._init_db()
                self._initialized = True
        return self._conn

    def _init_db(self):
        """Create tables if they don't exist."""
        with self._conn.cursor() as cur:
            cur.execute("""
                CREATE TABLE IF NOT EXISTS user_preferences (
                    user_id VARCHAR(255) PRIMARY KEY,
                    best_streak INTEGER NOT NULL DEFAULT 0,
                    swapped BOOLEAN NOT NULL DEFAULT FALSE,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)
        self._conn.commit()

    def close(self):
        """Close the database connection."""
        if self._conn and not self._conn.closed:
            self._conn.close()

    def load_preferences(self, user_id: str = "default") -> dict:
        try:
            with self.conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(
                    "SELECT best_streak, swapped FROM user_preferences WHERE user_id = %s",
                    (user_id,)
                )
                row = cur.fetchone()
                if row:
                    return {'best_streak': row['best_streak'], 'swapped': row['swapped']}
        except Exception as e:
            logger.warning(f"Error loading preferences for {user_id}: {e}")
        return default_preferences()

    def save_preferences(self, prefs: dict, user_id: str = "default") -> None:
        try:
            with self.conn.cursor() as cur:
                cur.execute("""
                    INSERT INTO user_preferences (user_id, best_streak, swapped, updated_at)
                    VALUES (%s, %s, %s, CURRENT_TIMESTAMP)
                    ON CONFLICT (user_id)
                    DO UPDATE SET best_streak = EXCLUDED.best_streak,
                                  swapped = EXCLUDED.swapped,
                                  updated_at = CURRENT_TIMESTAMP
                """, (user_id, prefs['best_streak'], prefs['swapped']))
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise

    def list_users(self) -> list[str]:
        """List all user IDs with stored preferences."""
        try:
            with self.conn.cursor() as cur:
                cur.execute("SELECT user_id FROM user_preferences ORDER BY user_id")
                return [row[0] for row in cur.fetchall()]
        except Exception as e:
            logger.warning(f"Error listing users: {e}")
            return []
