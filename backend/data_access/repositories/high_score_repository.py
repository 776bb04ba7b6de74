"""
High score repository - one named integer per row.
"""

import logging

from domain.constants import HIGH_SCORE_KEY
from .base import BaseRepository

logger = logging.getLogger(__name__)


class HighScoreRepository(BaseRepository):
    """
    Repository for the high_scores table.

    Errors from sqlite3 propagate to the caller; the game engine decides
    how to degrade when storage is unavailable.
    """

    def __init__(self, name: str = HIGH_SCORE_KEY):
        self.name = name

    def get_high_score(self) -> int:
        """
        Return the stored high score, or 0 if nothing has been saved yet.
        """
        with self.connection() as (conn, cursor):
            cursor.execute(
                "SELECT value FROM high_scores WHERE name = ?",
                (self.name,)
            )
            row = cursor.fetchone()

        if row is None:
            return 0
        return max(0, int(row["value"]))

    def set_high_score(self, value: int) -> None:
        """
        Insert or overwrite the stored high score.

        Args:
            value: non-negative score to store
        """
        if value < 0:
            raise ValueError(f"High score cannot be negative: {value}")

        with self.connection() as (conn, cursor):
            cursor.execute(
                """
                INSERT INTO high_scores (name, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(name) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (self.name, int(value))
            )
        logger.info("Stored high score %s=%s", self.name, value)
