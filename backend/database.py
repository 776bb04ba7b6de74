"""
Database configuration and schema management for the snake game.

This module provides database connection management with environment-aware
path selection and schema initialization. The only thing persisted is the
high score, stored as a single named integer.
"""

import logging
import os
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

HIGH_SCORES_SCHEMA = """
    CREATE TABLE IF NOT EXISTS high_scores (
        name TEXT PRIMARY KEY,
        value INTEGER NOT NULL DEFAULT 0 CHECK(value >= 0),
        updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
"""


def get_database_path() -> str:
    """
    Determine the appropriate database path based on environment.

    Returns:
        Path to the SQLite database file.
        - SNAKE_DB_PATH when set (parent directories are created)
        - Local (development): backend/snake.db
    """
    db_path = os.getenv('SNAKE_DB_PATH')
    if db_path:
        parent = os.path.dirname(db_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        return db_path

    backend_dir = Path(__file__).parent
    return str(backend_dir / 'snake.db')


def get_connection() -> sqlite3.Connection:
    """
    Get a database connection with appropriate settings.

    Returns:
        sqlite3.Connection: Database connection with row factory enabled.
    """
    db_path = get_database_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row  # Enable column access by name
    return conn


def init_database() -> None:
    """
    Initialize the database schema.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    logger.info("Initializing database at: %s", get_database_path())

    conn = get_connection()
    cursor = conn.cursor()

    try:
        cursor.execute(HIGH_SCORES_SCHEMA)
        conn.commit()

    except Exception:
        conn.rollback()
        logger.exception("Error initializing database")
        raise
    finally:
        conn.close()


if __name__ == "__main__":
    # Allow running this module directly to initialize the database
    logging.basicConfig(level=logging.INFO)
    init_database()
    logger.info("Database ready at: %s", get_database_path())
