from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Set

from .board import ORIGIN, Position
from .directions import Direction


@dataclass
class GameState:
    """The authoritative, mutable state of one game. Only the engine writes to it."""
    item_count: int
    items: Set[Position]
    start_time: float
    avatar: Position = ORIGIN
    score: int = 0
    game_over: bool = False
    end_time: Optional[float] = None
    held_direction: Optional[Direction] = None
    last_step_time: Optional[float] = None

    @property
    def duration(self) -> Optional[float]:
        """Seconds from start to win, or None while the game is running."""
        if self.end_time is None:
            return None
        return self.end_time - self.start_time


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only copy of the state handed to render consumers."""
    board_size: int
    item_count: int
    avatar: Position
    items: FrozenSet[Position] = field(default_factory=frozenset)
    score: int = 0
    game_over: bool = False
    held_direction: Optional[Direction] = None
    duration: Optional[float] = None

    @classmethod
    def of(cls, state: GameState, board_size: int) -> 'GameSnapshot':
        return cls(
            board_size=board_size,
            item_count=state.item_count,
            avatar=state.avatar,
            items=frozenset(state.items),
            score=state.score,
            game_over=state.game_over,
            held_direction=state.held_direction,
            duration=state.duration,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "boardSize": int(self.board_size),
            "itemCount": int(self.item_count),
            "avatar": [int(self.avatar.x), int(self.avatar.y)],
            "items": [[int(p.x), int(p.y)] for p in sorted(self.items, key=lambda p: (p.y, p.x))],
            "score": int(self.score),
            "gameOver": bool(self.game_over),
            "heldDirection": self.held_direction.value if self.held_direction else None,
            "duration": self.duration,
        }
