from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .config import GameConfig
from .engine import GameEngine
from .inputs import KeyInput
from .loop import TickLoop
from .placement import RngLike, make_rng
from .state import GameSnapshot

logger = logging.getLogger(__name__)


class GameSession:
    """Ties one live engine to its tick loop and input source.

    The session is the unit of teardown: close() cancels the loop and detaches
    the input, and restart() does the same before dealing a new game, so a
    previous engine can never be stepped or fed input again.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        clock: Callable[[], float] = time.monotonic,
        rng: RngLike = None,
        keys: Optional[KeyInput] = None,
    ) -> None:
        self.config = (config or GameConfig()).validate()
        self._clock = clock
        self._rng = make_rng(rng)
        self.keys = keys or KeyInput()
        self.engine: GameEngine
        self.loop: Optional[TickLoop] = None
        self._open()

    def _open(self) -> None:
        engine = GameEngine(self.config, clock=self._clock, rng=self._rng)
        self.engine = engine
        self.keys.attach(engine)
        self.loop = TickLoop(engine.tick, tick_rate=self.config.tick_rate, clock=self._clock)
        self.loop.start()

    def _teardown(self) -> None:
        if self.loop is not None:
            self.loop.stop()
        self.keys.detach()

    @property
    def closed(self) -> bool:
        return self.loop is None or not self.loop.running

    def close(self) -> None:
        self._teardown()
        logger.debug("Session closed")

    def restart(self, seed: RngLike = None) -> GameEngine:
        """Tears the current game down and starts a fresh one."""
        self._teardown()
        if seed is not None:
            self._rng = make_rng(seed)
        self._open()
        logger.info("Session restarted")
        return self.engine

    def __enter__(self) -> 'GameSession':
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ---------- Driving ----------

    def pump(self, now: Optional[float] = None) -> bool:
        if self.loop is None:
            return False
        return self.loop.pump(now)

    def press(self, key: Optional[str]) -> bool:
        return self.keys.key_down(key)

    def release(self, key: Optional[str]) -> bool:
        return self.keys.key_up(key)

    def snapshot(self) -> GameSnapshot:
        return self.engine.snapshot()
