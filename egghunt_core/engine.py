from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Union

from .board import ORIGIN, Board
from .config import GameConfig
from .directions import Direction, parse_direction
from .placement import RngLike, make_rng, place_items
from .state import GameSnapshot, GameState

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
DirectionLike = Union[Direction, str, None]


class GameEngine:
    """
    Owns one GameState and is the only thing that mutates it.

    Input arrives through press()/release(); a scheduling driver calls tick()
    as often as it likes and the engine moves the avatar at most once per
    move interval while a direction is held. Timestamps are seconds on the
    engine clock (monotonic by default).
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        clock: Clock = time.monotonic,
        rng: RngLike = None,
    ) -> None:
        self.config = (config or GameConfig()).validate()
        self.board = Board(self.config.board_size)
        self._clock = clock
        self._rng = make_rng(rng)
        self.state = self._new_state(self._clock())

    def _new_state(self, now: float) -> GameState:
        # Placement runs before any state exists so configuration errors surface first.
        items = place_items(self.config.item_count, ORIGIN, self.config.board_size, self._rng)
        return GameState(item_count=self.config.item_count, items=items, start_time=now)

    # ---------- Input contract ----------

    def press(self, direction: DirectionLike) -> bool:
        """Holds a direction, overriding whatever was held before."""
        if self.state.game_over:
            return False
        d = parse_direction(direction)
        if d is None:
            logger.debug("Ignoring press of unknown direction %r", direction)
            return False
        self.state.held_direction = d
        return True

    def release(self, direction: DirectionLike) -> bool:
        """Stops moving, but only if the released direction is the one held."""
        if self.state.game_over:
            return False
        d = parse_direction(direction)
        if d is None:
            logger.debug("Ignoring release of unknown direction %r", direction)
            return False
        if self.state.held_direction is not d:
            return False
        self.state.held_direction = None
        return True

    # ---------- Movement & collection ----------

    def _throttled(self, now: float) -> bool:
        last = self.state.last_step_time
        if last is None:
            return False
        # Rounded to the microsecond so 0.3 - 0.2 counts as a full 100ms.
        elapsed_ms = round((now - last) * 1000.0, 3)
        return elapsed_ms < self.config.move_interval_ms

    def step(self, now: Optional[float] = None) -> bool:
        """
        Applies one movement step if one is due.

        Returns True when a step executed (including a step against a wall that
        left the avatar where it was), False for every no-op.
        """
        s = self.state
        if s.game_over:
            return False
        if s.held_direction is None:
            return False
        if now is None:
            now = self._clock()
        if self._throttled(now):
            return False

        dx, dy = s.held_direction.delta
        s.avatar = self.board.clamp_step(s.avatar, dx, dy)
        s.last_step_time = now
        self._collect(now)
        return True

    def _collect(self, now: float) -> None:
        s = self.state
        if s.avatar not in s.items:
            return
        s.items.remove(s.avatar)
        s.score += 1
        logger.debug("Collected item at (%d,%d); score=%d", s.avatar.x, s.avatar.y, s.score)
        if s.score == s.item_count:
            s.game_over = True
            s.end_time = now
            logger.info("All %d items collected in %.1fs", s.item_count, s.end_time - s.start_time)

    def tick(self, now: Optional[float] = None) -> None:
        """Scheduling-driver callback."""
        self.step(now)

    # ---------- Queries ----------

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot.of(self.state, self.config.board_size)

    def pretty(self) -> str:
        return self.board.pretty(self.state.avatar, self.state.items)
