"""
Periodic tick driver for the game engine.

Runs a private schedule.Scheduler on a daemon thread. The single job fires
every `speed` milliseconds while the game is RUNNING; it is rescheduled
whenever the speed changes and cancelled whenever the phase leaves RUNNING.
"""

import logging
import threading
from typing import Callable, Optional

import schedule

from domain.constants import RUNNING


SCHEDULER_LOOP_SLEEP_SECONDS = 0.005

logger = logging.getLogger(__name__)


class TickDriver:
    """
    Owns a cancellable periodic task that calls `callback`.

    The scheduler is only touched while holding `lock`; share that lock with
    whatever else mutates the engine so ticks and intents never interleave.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        lock: Optional[threading.RLock] = None,
        poll_interval: float = SCHEDULER_LOOP_SLEEP_SECONDS,
        autostart: bool = True
    ):
        self.callback = callback
        self.lock = lock if lock is not None else threading.RLock()
        self.poll_interval = poll_interval
        self.autostart = autostart
        self.interval_ms: Optional[int] = None

        self._scheduler = schedule.Scheduler()
        self._job: Optional[schedule.Job] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        """True while a tick job is scheduled."""
        return self._job is not None

    def sync(self, phase: str, speed: int) -> None:
        """
        Align the scheduled job with the engine's phase and speed.
        """
        with self.lock:
            if phase != RUNNING:
                if self._job is not None:
                    logger.debug("Stopping tick driver (phase %s).", phase)
                self._cancel()
                return

            if self._job is not None and self.interval_ms == speed:
                return

            self._cancel()
            self._job = self._scheduler.every(speed / 1000).seconds.do(self._run_tick)
            self.interval_ms = speed
            logger.debug("Ticking every %s ms.", speed)

            if self.autostart:
                self._ensure_thread()

    def run_pending(self) -> None:
        """Run the tick job if it is due."""
        with self.lock:
            self._scheduler.run_pending()

    def stop(self) -> None:
        """Cancel the job and end the background thread."""
        with self.lock:
            self._cancel()
            self._stop_event.set()
            thread = self._thread
            self._thread = None

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=1.0)

    def _cancel(self) -> None:
        if self._job is not None:
            self._scheduler.cancel_job(self._job)
        self._job = None
        self.interval_ms = None

    def _run_tick(self) -> None:
        try:
            self.callback()
        except Exception:
            # Keep the loop alive; the next tick gets another chance
            logger.exception("Tick callback failed")

    def _ensure_thread(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._loop, name="snake-tick-driver", daemon=True
        )
        self._thread.start()

    def _loop(self) -> None:
        while not self._stop_event.is_set():
            self.run_pending()
            self._stop_event.wait(self.poll_interval)
