from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Union

from .directions import Direction
from .engine import GameEngine

logger = logging.getLogger(__name__)

DEFAULT_KEYMAP: Dict[str, Direction] = {
    'ARROWUP': Direction.UP,
    'UP': Direction.UP,
    'W': Direction.UP,
    'ARROWDOWN': Direction.DOWN,
    'DOWN': Direction.DOWN,
    'S': Direction.DOWN,
    'ARROWLEFT': Direction.LEFT,
    'LEFT': Direction.LEFT,
    'A': Direction.LEFT,
    'ARROWRIGHT': Direction.RIGHT,
    'RIGHT': Direction.RIGHT,
    'D': Direction.RIGHT,
}


class KeyInput:
    """Input source that turns key and pad events into engine press/release calls.

    Keyboards and the on-screen pad are equivalent: both report a key going
    down and coming up. The source is bound to at most one engine at a time
    through attach()/detach(); events arriving while detached are dropped.
    """

    def __init__(self, keymap: Optional[Mapping[str, Direction]] = None) -> None:
        self._keymap: Dict[str, Direction] = {}
        for key, direction in (keymap or DEFAULT_KEYMAP).items():
            self.bind(key, direction)
        self._engine: Optional[GameEngine] = None
        self._last_pressed: Optional[Direction] = None

    @staticmethod
    def _normalize(key: Union[str, None]) -> Optional[str]:
        if not isinstance(key, str):
            return None
        k = key.strip()
        return k.upper() if k else None

    def bind(self, key: str, direction: Direction) -> None:
        nk = self._normalize(key)
        if nk is None:
            logger.warning("Attempted to bind invalid key: %r", key)
            return
        self._keymap[nk] = direction

    def translate(self, key: Union[str, None]) -> Optional[Direction]:
        nk = self._normalize(key)
        if nk is None:
            return None
        return self._keymap.get(nk)

    # ---------- Lifecycle ----------

    @property
    def attached(self) -> bool:
        return self._engine is not None

    def attach(self, engine: GameEngine) -> 'KeyInput':
        if self._engine is not None:
            raise RuntimeError('KeyInput is already attached to an engine')
        self._engine = engine
        self._last_pressed = None
        return self

    def detach(self) -> None:
        self._engine = None
        self._last_pressed = None

    def __enter__(self) -> 'KeyInput':
        return self

    def __exit__(self, *exc) -> None:
        self.detach()

    # ---------- Events ----------

    def key_down(self, key: Union[str, None]) -> bool:
        direction = self.translate(key)
        if direction is None or self._engine is None:
            return False
        self._last_pressed = direction
        return self._engine.press(direction)

    def key_up(self, key: Union[str, None]) -> bool:
        """Releases a key. ``None`` (the pad letting go) releases the last pressed key."""
        if self._engine is None:
            return False
        if key is None:
            direction = self._last_pressed
        else:
            direction = self.translate(key)
        if direction is None:
            return False
        return self._engine.release(direction)
