from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple, Union


class Direction(Enum):
    """The four directions the avatar can be held moving in."""

    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'

    @property
    def delta(self) -> Tuple[int, int]:
        """(dx, dy) for one step; y grows downwards."""
        return _DELTAS[self]


_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

# Canonical uppercase names accepted from keyboards, the pad widget and the API.
_NAMES: Dict[str, Direction] = {
    'UP': Direction.UP,
    'ARROWUP': Direction.UP,
    'U': Direction.UP,
    'DOWN': Direction.DOWN,
    'ARROWDOWN': Direction.DOWN,
    'D': Direction.DOWN,
    'LEFT': Direction.LEFT,
    'ARROWLEFT': Direction.LEFT,
    'L': Direction.LEFT,
    'RIGHT': Direction.RIGHT,
    'ARROWRIGHT': Direction.RIGHT,
    'R': Direction.RIGHT,
}


def parse_direction(value: Union[Direction, str, None]) -> Optional[Direction]:
    """
    Maps an external direction value to a Direction.

    Returns None for anything unrecognised so callers can ignore noisy events.
    Single letters follow the U/D/L/R shorthand, so 'D' is down.
    """
    if isinstance(value, Direction):
        return value
    if not isinstance(value, str):
        return None
    key = value.strip().replace('_', '').replace('-', '').upper()
    if not key:
        return None
    return _NAMES.get(key)
