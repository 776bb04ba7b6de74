"""
A game engine bound to its tick driver for a multi-threaded host.

Flask serves requests on several threads while the tick driver runs on its
own. Every engine call goes through one re-entrant lock shared with the
driver, so the engine only ever sees one caller at a time.
"""

import logging
from typing import Optional

import data_access
from domain.game_state import GameState
from main import SnakeGame
from services.input_adapter import intent_for_key
from services.tick_driver import TickDriver

logger = logging.getLogger(__name__)

PHASE_INTENTS = ("start", "restart", "pause", "resume", "toggle_pause")
INTENTS = PHASE_INTENTS + ("steer",)


class GameSession:
    """
    Owns one SnakeGame and one TickDriver.

    The driver is re-synced from the engine's state notifications, so its
    interval follows the speed and it stops outside RUNNING.
    """

    def __init__(
        self,
        game: Optional[SnakeGame] = None,
        driver: Optional[TickDriver] = None
    ):
        self.game = game if game is not None else SnakeGame(high_score_store=data_access)
        self.driver = driver if driver is not None else TickDriver(self.tick)
        self._lock = self.driver.lock
        self._unsubscribe = self.game.subscribe(self._on_state_change)

    def dispatch(self, intent: str, direction: Optional[str] = None) -> GameState:
        """
        Apply an intent and return the resulting state.

        Raises:
            ValueError: if the intent name is unknown
        """
        if intent not in INTENTS:
            raise ValueError(f"Unknown intent {intent!r}. Expected one of {', '.join(INTENTS)}.")

        with self._lock:
            if intent == "steer":
                self.game.steer(direction)
            else:
                getattr(self.game, intent)()
            return self.game.get_current_state()

    def handle_key(self, key: str) -> GameState:
        """Apply the intent bound to a key; unbound keys are ignored."""
        binding = intent_for_key(key)
        if binding is None:
            return self.snapshot()

        intent, direction = binding
        return self.dispatch(intent, direction)

    def tick(self) -> None:
        with self._lock:
            self.game.tick()

    def snapshot(self) -> GameState:
        with self._lock:
            return self.game.get_current_state()

    def shutdown(self) -> None:
        self._unsubscribe()
        self.driver.stop()
        logger.info("Game session shut down.")

    def _on_state_change(self, state: GameState) -> None:
        self.driver.sync(state.phase, state.speed)
