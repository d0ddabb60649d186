from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .board import BOARD_SIZE, MOVE_INTERVAL_MS, NUM_ITEMS
from .errors import ConfigurationError

DEFAULT_TICK_RATE = 60.0


def env_flag(name: str, default: str = '0', environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return env.get(name, default).lower() in ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class GameConfig:
    """Fixed parameters of one game instance."""
    board_size: int = BOARD_SIZE
    item_count: int = NUM_ITEMS
    move_interval_ms: float = MOVE_INTERVAL_MS
    tick_rate: float = DEFAULT_TICK_RATE  # scheduler ticks per second

    def validate(self) -> 'GameConfig':
        """Fails fast on settings no game could start with."""
        if self.board_size <= 0:
            raise ConfigurationError(f'board size must be positive, got {self.board_size}')
        if self.item_count < 0:
            raise ConfigurationError(f'item count must not be negative, got {self.item_count}')
        capacity = self.board_size * self.board_size - 1
        if self.item_count > capacity:
            raise ConfigurationError(
                f'item count {self.item_count} exceeds the {capacity} cells available '
                f'on a {self.board_size}x{self.board_size} board'
            )
        if self.move_interval_ms < 0:
            raise ConfigurationError(f'move interval must not be negative, got {self.move_interval_ms}')
        if self.tick_rate < 0:
            raise ConfigurationError(f'tick rate must not be negative, got {self.tick_rate}')
        return self

    def with_overrides(self, **kwargs) -> 'GameConfig':
        """Returns a copy with the given non-None fields replaced."""
        changes = {k: v for k, v in kwargs.items() if v is not None}
        return replace(self, **changes)


def env_number(env: Mapping[str, str], name: str, cast, default):
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigurationError(f'{name} must be a number, got {raw!r}') from None


def load_config(environ: Optional[Mapping[str, str]] = None) -> GameConfig:
    """Builds a GameConfig from EGGHUNT_* environment variables."""
    env = os.environ if environ is None else environ
    cfg = GameConfig(
        board_size=env_number(env, 'EGGHUNT_BOARD_SIZE', int, BOARD_SIZE),
        item_count=env_number(env, 'EGGHUNT_ITEM_COUNT', int, NUM_ITEMS),
        move_interval_ms=env_number(env, 'EGGHUNT_MOVE_INTERVAL_MS', float, MOVE_INTERVAL_MS),
        tick_rate=env_number(env, 'EGGHUNT_TICK_RATE', float, DEFAULT_TICK_RATE),
    )
    return cfg.validate()
