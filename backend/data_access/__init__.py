"""
Data access layer for the snake game.

The only persisted value is the high score. The module-level functions
double as the engine's persistence collaborator:

    import data_access
    game = SnakeGame(high_score_store=data_access)
"""

from .high_score import get_high_score, set_high_score
from .repositories import HighScoreRepository

__all__ = [
    'get_high_score',
    'set_high_score',
    'HighScoreRepository',
]
