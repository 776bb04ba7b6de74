"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import List, Tuple, Dict, Any, Optional


class GameState:
    """
    A snapshot of the engine after an operation, handed to renderers.

    Attributes:
        phase: one of IDLE, RUNNING, PAUSED, GAME_OVER
        snake: list of (x, y), head first
        food: (x, y) of the food cell, or None when the board is full
        direction: direction committed on the last tick
        pending_direction: direction queued for the next tick
        score, high_score: points of this game and best points so far
        speed: current tick interval in milliseconds
        board_size: the board is board_size x board_size cells
    """

    def __init__(
        self,
        phase: str,
        snake: List[Tuple[int, int]],
        food: Optional[Tuple[int, int]],
        direction: str,
        pending_direction: str,
        score: int,
        high_score: int,
        speed: int,
        board_size: int
    ):
        self.phase = phase
        self.snake = snake
        self.food = food
        self.direction = direction
        self.pending_direction = pending_direction
        self.score = score
        self.high_score = high_score
        self.speed = speed
        self.board_size = board_size

    @property
    def head(self) -> Tuple[int, int]:
        return self.snake[0]

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        H = snake head
        T = snake body
        (0,0) is at the top left, x-axis labels at the bottom
        """
        # Create empty board
        board = [['.' for _ in range(self.board_size)] for _ in range(self.board_size)]

        if self.food is not None:
            fx, fy = self.food
            board[fy][fx] = 'F'

        for pos_idx, (x, y) in enumerate(self.snake):
            board[y][x] = 'H' if pos_idx == 0 else 'T'

        result = [f"{y:2d} {' '.join(row)}" for y, row in enumerate(board)]
        # Only the last digit fits in a single column
        result.append("   " + " ".join(str(i % 10) for i in range(self.board_size)))

        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the snapshot to a JSON-serializable dict.

        Cells become {"x": .., "y": ..} objects so the browser does not
        have to know about tuple ordering.
        """
        return {
            "phase": self.phase,
            "snake": [{"x": x, "y": y} for x, y in self.snake],
            "food": {"x": self.food[0], "y": self.food[1]} if self.food is not None else None,
            "direction": self.direction,
            "pending_direction": self.pending_direction,
            "score": self.score,
            "high_score": self.high_score,
            "speed": self.speed,
            "board_size": self.board_size,
        }

    def __repr__(self):
        return (
            f"<GameState phase={self.phase}, head={self.head}, food={self.food}, "
            f"score={self.score}, high_score={self.high_score}, speed={self.speed}>"
        )
