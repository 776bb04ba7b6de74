"""
High score query functions.

These functions provide the persistence collaborator used by the game
engine. They delegate to the repository class for actual database operations.
"""

from .repositories import HighScoreRepository

# Repository instance
_high_score_repo = HighScoreRepository()


def get_high_score() -> int:
    """
    Retrieve the persisted high score.

    Returns:
        The stored value, 0 if none has been stored yet
    """
    return _high_score_repo.get_high_score()


def set_high_score(value: int) -> None:
    """
    Persist a new high score.

    Args:
        value: The new high score
    """
    _high_score_repo.set_high_score(value)
