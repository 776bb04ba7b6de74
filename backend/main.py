import argparse
import logging
import os
import random
from itertools import islice
from typing import List, Tuple, Optional, Callable, Any

from dotenv import load_dotenv

from domain.constants import (
    VALID_MOVES,
    DIRECTION_MAP,
    OPPOSITE_DIRECTIONS,
    IDLE,
    RUNNING,
    PAUSED,
    GAME_OVER,
    PHASES,
    BOARD_SIZE,
    INITIAL_SPEED,
    MIN_SPEED,
    SPEED_INCREMENT,
    INITIAL_SNAKE,
    INITIAL_FOOD,
    INITIAL_DIRECTION,
)
from domain.snake import Snake
from domain.game_state import GameState

load_dotenv()

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class SnakeGame:
    """
    Manages:
      - Board (board_size x board_size)
      - The snake and its committed / pending direction
      - The food cell
      - Score, high score and speed
      - The phase (IDLE, RUNNING, PAUSED, GAME_OVER)

    Every operation is total: intents that do not apply in the current phase
    are ignored and return False. Operations that change the state notify
    subscribers with a fresh GameState.

    high_score_store is any object with get_high_score() and
    set_high_score(value); the data_access module is one.
    """

    def __init__(
        self,
        board_size: int = BOARD_SIZE,
        high_score_store: Any = None,
        rng: Any = None
    ):
        if board_size < 4:
            raise ValueError(f"Board must be at least 4x4, got {board_size}.")

        self.board_size = board_size
        self.high_score_store = high_score_store
        self.rng = rng if rng is not None else random
        self._listeners: List[Callable[[GameState], None]] = []

        self.phase = IDLE
        self.snake = Snake(self._initial_snake())
        self.food: Optional[Cell] = self._initial_food()
        self.direction = INITIAL_DIRECTION
        self.pending_direction = INITIAL_DIRECTION
        self.score = 0
        self.speed = INITIAL_SPEED
        self.death_reason: Optional[str] = None

        # Loaded once, then only raised by this engine
        self.high_score = self._load_high_score()

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """
        Begin a fresh game. Only valid from IDLE or GAME_OVER.
        """
        if self.phase not in (IDLE, GAME_OVER):
            return False

        self._reset()
        self.phase = RUNNING
        logger.info("Game started (high score %s).", self.high_score)
        self._emit()
        return True

    def restart(self) -> bool:
        return self.start()

    def steer(self, direction: str) -> bool:
        """
        Queue a direction for the next tick.

        Reversing onto the current heading is ignored. The last accepted
        request before a tick wins.
        """
        if not isinstance(direction, str) or direction not in VALID_MOVES:
            return False
        if direction == OPPOSITE_DIRECTIONS[self.direction]:
            return False

        self.pending_direction = direction
        self._emit()
        return True

    def pause(self) -> bool:
        if self.phase != RUNNING:
            return False
        self.phase = PAUSED
        self._emit()
        return True

    def resume(self) -> bool:
        if self.phase != PAUSED:
            return False
        self.phase = RUNNING
        self._emit()
        return True

    def toggle_pause(self) -> bool:
        if self.phase == RUNNING:
            return self.pause()
        if self.phase == PAUSED:
            return self.resume()
        return False

    def tick(self) -> bool:
        """
        Advance the game by one step:
          1) Commit the pending direction
          2) Compute the new head
          3) Wall collision -> GAME_OVER, snake untouched
          4) Self collision -> GAME_OVER, snake untouched
          5) Move; on food grow, score, speed up and place new food
        """
        if self.phase != RUNNING:
            return False

        self.direction = self.pending_direction
        dx, dy = DIRECTION_MAP[self.direction]
        hx, hy = self.snake.head
        new_head = (hx + dx, hy + dy)

        if not self._in_bounds(new_head):
            self._end_game("wall")
            return True

        # Checked against the pre-move body, tail included
        if new_head in islice(self.snake.positions, 1, None):
            self._end_game("self")
            return True

        self.snake.positions.appendleft(new_head)

        if new_head == self.food:
            self.score += 1
            if self.score > self.high_score:
                self.high_score = self.score
                self._save_high_score()
            self.food = self._random_free_cell()
            self.speed = max(MIN_SPEED, self.speed - SPEED_INCREMENT)
        else:
            self.snake.positions.pop()

        self._emit()
        return True

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            phase=self.phase,
            snake=list(self.snake.positions),
            food=self.food,
            direction=self.direction,
            pending_direction=self.pending_direction,
            score=self.score,
            high_score=self.high_score,
            speed=self.speed,
            board_size=self.board_size
        )

    def subscribe(self, listener: Callable[[GameState], None]) -> Callable[[], None]:
        """
        Call listener with a new GameState after every state change.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load_state(
        self,
        snake: List[Cell],
        direction: str,
        food: Optional[Cell] = None,
        score: int = 0,
        phase: str = RUNNING,
        speed: Optional[int] = None
    ):
        """
        Put the engine into an arbitrary valid position, e.g. to replay a scenario.

        Args:
            snake: cells head first, inside the board, no duplicates
            direction: heading the snake is already moving in
            food: food cell; a random free cell when omitted
            score: points already scored
            phase: phase to resume in
            speed: tick interval in ms within [MIN_SPEED, INITIAL_SPEED];
                   INITIAL_SPEED when omitted
        """
        snake = [tuple(cell) for cell in snake]
        if food is not None:
            food = tuple(food)

        if not snake:
            raise ValueError("Snake must have at least one cell.")
        if len(set(snake)) != len(snake):
            raise ValueError(f"Snake has duplicate cells: {snake}")
        for cell in snake:
            if not self._in_bounds(cell):
                raise ValueError(f"Snake cell out of bounds at {cell}.")
        if not isinstance(direction, str) or direction not in VALID_MOVES:
            raise ValueError(f"Unknown direction {direction!r}.")
        if phase not in PHASES:
            raise ValueError(f"Unknown phase {phase!r}.")
        if score < 0:
            raise ValueError(f"Score cannot be negative: {score}")
        if speed is not None and not (MIN_SPEED <= speed <= INITIAL_SPEED):
            raise ValueError(
                f"Speed must be between {MIN_SPEED} and {INITIAL_SPEED} ms, got {speed}."
            )
        if food is not None:
            if not self._in_bounds(food):
                raise ValueError(f"Food out of bounds at {food}.")
            if food in snake:
                raise ValueError(f"Food at {food} overlaps the snake.")

        self.snake = Snake(snake)
        self.direction = direction
        self.pending_direction = direction
        self.food = food if food is not None else self._random_free_cell()
        self.score = score
        self.speed = speed if speed is not None else INITIAL_SPEED
        self.phase = phase
        self.death_reason = None
        self._emit()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _initial_snake(self) -> List[Cell]:
        if self.board_size == BOARD_SIZE:
            return list(INITIAL_SNAKE)
        mid = self.board_size // 2
        return [(mid, mid), (mid - 1, mid), (mid - 2, mid)]

    def _initial_food(self) -> Cell:
        if self.board_size == BOARD_SIZE:
            return INITIAL_FOOD
        return (self.board_size * 3 // 4, self.board_size // 2)

    def _reset(self):
        self.snake = Snake(self._initial_snake())
        self.food = self._random_free_cell()
        self.direction = INITIAL_DIRECTION
        self.pending_direction = INITIAL_DIRECTION
        self.score = 0
        self.speed = INITIAL_SPEED
        self.death_reason = None

    def _in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.board_size and 0 <= y < self.board_size

    def _random_free_cell(self) -> Optional[Cell]:
        """
        Return a random cell (x, y) not occupied by the snake.
        We'll do a simple loop to find one.
        Returns None when the snake covers the whole board.
        """
        if len(self.snake) >= self.board_size * self.board_size:
            return None

        occupied = set(self.snake.positions)
        while True:
            x = self.rng.randint(0, self.board_size - 1)
            y = self.rng.randint(0, self.board_size - 1)
            if (x, y) not in occupied:
                return (x, y)

    def _end_game(self, reason: str):
        self.phase = GAME_OVER
        self.death_reason = reason
        logger.info(
            "Game Over: hit %s. Score %s, high score %s.",
            reason, self.score, self.high_score
        )
        logger.debug("Final board:\n%s", self.get_current_state().print_board())
        self._emit()

    def _load_high_score(self) -> int:
        if self.high_score_store is None:
            return 0
        try:
            return max(0, int(self.high_score_store.get_high_score()))
        except Exception as e:
            logger.warning("Could not load high score, starting from 0: %s", e)
            return 0

    def _save_high_score(self):
        logger.info("New high score: %s", self.high_score)
        if self.high_score_store is None:
            return
        try:
            self.high_score_store.set_high_score(self.high_score)
        except Exception as e:
            # Don't raise - the game keeps running even if storage is unavailable
            logger.warning("Could not persist high score %s: %s", self.high_score, e)

    def _emit(self):
        if not self._listeners:
            return
        state = self.get_current_state()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener %r failed", listener)

    def __repr__(self):
        return (
            f"<SnakeGame phase={self.phase}, length={len(self.snake)}, "
            f"score={self.score}, speed={self.speed}>"
        )


# -------------------------------
# Main Entry Point
# -------------------------------
def main():
    parser = argparse.ArgumentParser(
        description="Serve the snake game in a browser tab."
    )
    parser.add_argument("--host", type=str, required=False,
                        default=os.getenv("SNAKE_HOST", "127.0.0.1"),
                        help="Interface to bind the web server to")
    parser.add_argument("--port", type=int, required=False,
                        default=int(os.getenv("SNAKE_PORT", "5000")),
                        help="Port to serve on")
    parser.add_argument("--db-path", type=str, required=False, default=None,
                        help="SQLite file holding the high score (overrides SNAKE_DB_PATH)")
    parser.add_argument("--debug", action="store_true",
                        help="Run Flask in debug mode")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.db_path:
        os.environ["SNAKE_DB_PATH"] = args.db_path

    # Imported here so the engine module stays free of web dependencies
    from app import create_app

    app = create_app()
    logger.info("Serving snake on http://%s:%s", args.host, args.port)
    # The reloader would fork a second tick driver
    app.run(host=args.host, port=args.port, debug=args.debug, use_reloader=False)


if __name__ == "__main__":
    main()
