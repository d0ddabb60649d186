from __future__ import annotations

import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

TickHandler = Callable[[float], None]


class TickLoop:
    """Self-rescheduling tick that feeds timestamps to a single handler.

    Each iteration calls the handler and then re-arms itself for the next
    one; stop() cancels the pending re-arm. A stopped loop never calls its
    handler again, so a torn-down game cannot keep moving.

    The loop can be driven two ways: run() blocks and ticks at ``tick_rate``
    per second, while pump() runs a single iteration for callers that own
    their own scheduling (request handlers, tests).
    """

    def __init__(
        self,
        handler: TickHandler,
        tick_rate: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._handler = handler
        self.tick_rate = tick_rate
        self._clock = clock
        self._sleep = sleep
        self._running = False
        self._armed = False
        self._ticks = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def ticks(self) -> int:
        return self._ticks

    def start(self) -> None:
        """Arms the first tick. Safe to call multiple times."""
        if self._running:
            logger.debug("TickLoop.start() called while already running")
            return
        self._running = True
        self._armed = True
        self._ticks = 0
        logger.debug("TickLoop started (tick_rate=%s)", self.tick_rate)

    def stop(self) -> None:
        """Cancels the pending tick."""
        if not self._running:
            return
        self._running = False
        self._armed = False
        logger.debug("TickLoop stopped after %d ticks", self._ticks)

    def pump(self, now: Optional[float] = None) -> bool:
        """Runs one iteration if a tick is armed. Returns whether the handler ran."""
        if not self._armed:
            return False
        self._armed = False
        self._handler(self._clock() if now is None else now)
        self._ticks += 1
        # Re-arm unless the handler stopped us.
        if self._running:
            self._armed = True
        return True

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Blocks, ticking until stopped or ``max_ticks`` iterations have run."""
        self.start()
        period = 1.0 / self.tick_rate if self.tick_rate and self.tick_rate > 0 else 0.0
        while self._running:
            started = self._clock()
            self.pump(started)
            if max_ticks is not None and self._ticks >= max_ticks:
                self.stop()
                break
            if period > 0:
                remaining = period - (self._clock() - started)
                if remaining > 0:
                    self._sleep(remaining)
        return self._ticks
