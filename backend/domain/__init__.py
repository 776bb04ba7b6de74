"""
Domain entities for the snake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (database, web server, timers).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, DIRECTION_MAP, OPPOSITE_DIRECTIONS,
    IDLE, RUNNING, PAUSED, GAME_OVER, PHASES,
    BOARD_SIZE, INITIAL_SPEED, MIN_SPEED, SPEED_INCREMENT,
    INITIAL_SNAKE, INITIAL_FOOD, INITIAL_DIRECTION, HIGH_SCORE_KEY,
)
from .snake import Snake
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'DIRECTION_MAP', 'OPPOSITE_DIRECTIONS',
    'IDLE', 'RUNNING', 'PAUSED', 'GAME_OVER', 'PHASES',
    'BOARD_SIZE', 'INITIAL_SPEED', 'MIN_SPEED', 'SPEED_INCREMENT',
    'INITIAL_SNAKE', 'INITIAL_FOOD', 'INITIAL_DIRECTION', 'HIGH_SCORE_KEY',
    'Snake',
    'GameState',
]
