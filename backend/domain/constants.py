"""
Game constants for the snake engine.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Screen coordinates: (0, 0) is the top left cell, y grows downwards
DIRECTION_MAP = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITE_DIRECTIONS = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Game phases
IDLE = "IDLE"
RUNNING = "RUNNING"
PAUSED = "PAUSED"
GAME_OVER = "GAME_OVER"
PHASES = {IDLE, RUNNING, PAUSED, GAME_OVER}

# Game settings
BOARD_SIZE = 20
INITIAL_SPEED = 200  # ms per tick
MIN_SPEED = 50
SPEED_INCREMENT = 5

INITIAL_SNAKE = [(10, 10), (9, 10), (8, 10)]
INITIAL_FOOD = (15, 10)
INITIAL_DIRECTION = RIGHT

# Name of the persisted high score value
HIGH_SCORE_KEY = "snakeHighScore"
