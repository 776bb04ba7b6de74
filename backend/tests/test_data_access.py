"""
Tests for the data_access layer.

These tests run the repository against a throwaway SQLite file
so the SQL itself is exercised.
"""

import pytest
import sys
import os
import sqlite3
from unittest.mock import patch, MagicMock

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import database
import data_access
from data_access.repositories import HighScoreRepository
from main import SnakeGame
from domain.constants import RIGHT


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "scores" / "snake.db"
    monkeypatch.setenv("SNAKE_DB_PATH", str(path))
    return path


class TestDatabase:
    """Tests for database.py."""

    def test_database_path_from_env(self, db_path):
        assert database.get_database_path() == str(db_path)
        # Parent directory is created on demand
        assert db_path.parent.is_dir()

    def test_default_database_path(self, monkeypatch):
        monkeypatch.delenv("SNAKE_DB_PATH", raising=False)
        path = database.get_database_path()
        assert path.endswith("snake.db")
        assert os.path.dirname(path) == os.path.dirname(os.path.abspath(database.__file__))

    def test_init_database_is_idempotent(self, db_path):
        database.init_database()
        database.init_database()

        conn = sqlite3.connect(str(db_path))
        try:
            tables = [row[0] for row in conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            )]
        finally:
            conn.close()
        assert "high_scores" in tables


class TestHighScoreRepository:
    """Tests for HighScoreRepository."""

    def test_missing_value_reads_as_zero(self, db_path):
        assert HighScoreRepository().get_high_score() == 0

    def test_first_connection_creates_schema(self, db_path):
        """A brand new file gets the high_scores table on the first read."""
        HighScoreRepository().get_high_score()

        conn = sqlite3.connect(str(db_path))
        try:
            row = conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'high_scores'"
            ).fetchone()
        finally:
            conn.close()
        assert row is not None

    def test_connection_follows_database_path(self, tmp_path, monkeypatch):
        repo = HighScoreRepository()
        monkeypatch.setenv("SNAKE_DB_PATH", str(tmp_path / "one.db"))
        repo.set_high_score(6)

        monkeypatch.setenv("SNAKE_DB_PATH", str(tmp_path / "two.db"))
        assert repo.get_high_score() == 0

    def test_set_then_get(self, db_path):
        repo = HighScoreRepository()
        repo.set_high_score(12)
        assert repo.get_high_score() == 12

    def test_overwrite(self, db_path):
        repo = HighScoreRepository()
        repo.set_high_score(3)
        repo.set_high_score(8)
        assert repo.get_high_score() == 8

    def test_names_are_independent(self, db_path):
        HighScoreRepository("a").set_high_score(4)
        assert HighScoreRepository("b").get_high_score() == 0

    def test_negative_value_rejected(self, db_path):
        with pytest.raises(ValueError):
            HighScoreRepository().set_high_score(-1)

    @patch('data_access.repositories.base.database.get_connection')
    def test_failed_write_rolls_back_and_closes(self, mock_get_conn):
        mock_cursor = MagicMock()
        mock_cursor.execute.side_effect = sqlite3.OperationalError("database is locked")
        mock_conn = MagicMock()
        mock_conn.cursor.return_value = mock_cursor
        mock_get_conn.return_value = mock_conn

        with pytest.raises(sqlite3.OperationalError):
            HighScoreRepository().set_high_score(5)

        mock_conn.rollback.assert_called_once()
        mock_conn.commit.assert_not_called()
        mock_conn.close.assert_called_once()


class TestModuleFunctions:
    """Tests for the get_high_score / set_high_score wrappers."""

    def test_wrappers_round_trip(self, db_path):
        data_access.set_high_score(21)
        assert data_access.get_high_score() == 21

    def test_module_works_as_engine_store(self, db_path):
        data_access.set_high_score(0)
        game = SnakeGame(high_score_store=data_access)
        game.load_state([(10, 10)], RIGHT, food=(11, 10))

        game.tick()

        assert data_access.get_high_score() == 1
        # A new engine picks the value up at startup
        assert SnakeGame(high_score_store=data_access).high_score == 1

    def test_unreadable_database_degrades_to_zero(self, tmp_path, monkeypatch):
        # A directory where the database file should be cannot be opened
        bad_path = tmp_path / "not-a-file"
        bad_path.mkdir()
        monkeypatch.setenv("SNAKE_DB_PATH", str(bad_path))

        game = SnakeGame(high_score_store=data_access)

        assert game.high_score == 0
