"""
High score repository for the high_scores table.
"""

from typing import Dict, List, Any

from .base import BaseRepository

DEFAULT_KEY = "default"


class HighScoreRepository(BaseRepository):
    """
    Repository for high_scores table operations.

    Each row holds the best score for one key (a player profile or board
    variant); the single-player game uses DEFAULT_KEY.
    """

    def get(self, key: str = DEFAULT_KEY) -> int:
        """
        Get the stored high score.

        Returns:
            The score, or 0 if nothing has been stored for this key
        """
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT score FROM high_scores WHERE key = ?", (key,))
            row = cursor.fetchone()
            return int(row['score']) if row else 0

    def save(self, score: int, key: str = DEFAULT_KEY) -> None:
        """
        Store a high score, replacing whatever was there.

        Raises:
            ValueError: if score is negative
        """
        if score < 0:
            raise ValueError(f"High score cannot be negative, got {score}")
        with self.connection() as (conn, cursor):
            cursor.execute("""
                INSERT INTO high_scores (key, score, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    score = excluded.score,
                    updated_at = excluded.updated_at
            """, (key, int(score)))

    def get_all(self) -> List[Dict[str, Any]]:
        """Get every stored high score, best first."""
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT key, score, updated_at FROM high_scores ORDER BY score DESC, key")
            return [dict(row) for row in cursor.fetchall()]

    def clear(self) -> int:
        """
        Delete all stored high scores.

        Returns:
            Number of rows deleted
        """
        with self.connection() as (conn, cursor):
            cursor.execute("DELETE FROM high_scores")
            return cursor.rowcount
