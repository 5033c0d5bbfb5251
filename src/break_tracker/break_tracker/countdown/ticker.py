from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_TICK_SECONDS
from .model import CountdownState

logger = logging.getLogger(__name__)


class CountdownTicker:
    """
    Periodic driver for a countdown computation.
    Every tick re-reads the clock and recomputes from scratch, so late or
    skipped ticks correct themselves on the next one.
    """

    def __init__(
        self,
        compute: Callable[[datetime], CountdownState],
        on_tick: Optional[Callable[[CountdownState], None]] = None,
        *,
        interval: float = DEFAULT_TICK_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._compute = compute
        self._on_tick = on_tick
        self._interval = float(interval)
        self._clock = clock

        self._lock = threading.RLock()
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.last_state: Optional[CountdownState] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stopped.is_set()

    def tick(self) -> CountdownState:
        """Evaluate once, synchronously."""
        state = self._compute(self._clock())
        self.last_state = state
        if self._on_tick:
            self._on_tick(state)
        return state

    def start(self) -> None:
        with self._lock:
            if self.is_running:
                return
            self._stopped = threading.Event()
            self._thread = threading.Thread(target=self._run, args=(self._stopped,), daemon=True)
            self._thread.start()
        logger.info("countdown ticker started (interval=%ss)", self._interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop ticking. No tick fires after this returns."""
        with self._lock:
            self._stopped.set()
            thread = self._thread
            self._thread = None

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.info("countdown ticker stopped")

    def _run(self, stopped: threading.Event) -> None:
        while not stopped.wait(self._interval):
            with self._lock:
                if stopped.is_set():
                    break
                try:
                    self.tick()
                except Exception:
                    logger.exception("countdown tick failed")
