"""
Base repository for the SQLite high score file.
"""

from contextlib import contextmanager
from typing import Generator, Tuple
import sqlite3

import database


class BaseRepository:
    """
    Base class for repositories over the local SQLite file.

    Every connection makes sure the schema exists first, since the file may
    be new or SNAKE_DB_PATH may point somewhere else since the last call.
    """

    @contextmanager
    def connection(self) -> Generator[Tuple[sqlite3.Connection, sqlite3.Cursor], None, None]:
        """
        Open the database file, commit on success, roll back on error.

        Yields:
            (connection, cursor)
        """
        conn = database.get_connection()
        cursor = conn.cursor()
        try:
            cursor.execute(database.HIGH_SCORES_SCHEMA)
            yield conn, cursor
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()
