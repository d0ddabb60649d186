from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterable, List, Optional

BOARD_SIZE = 10
NUM_ITEMS = 5
MOVE_INTERVAL_MS = 100


@dataclass(frozen=True)
class Position:
    """A single cell on the board; x is the column, y the row."""
    x: int
    y: int


ORIGIN = Position(0, 0)


@dataclass(frozen=True)
class Board:
    """Represents the static square grid the avatar moves on."""
    size: int = BOARD_SIZE

    def contains(self, pos: Position) -> bool:
        """True if the position lies on the board."""
        return 0 <= pos.x < self.size and 0 <= pos.y < self.size

    def clamp_step(self, pos: Position, dx: int, dy: int) -> Position:
        """Moves one step, rejecting the shift on any axis that would leave the board."""
        x = pos.x + dx
        if not self.contains(Position(x, pos.y)):
            x = pos.x
        y = pos.y + dy
        if not self.contains(Position(x, y)):
            y = pos.y
        return Position(x, y)

    def coords(self) -> Iterable[Position]:
        """Iterates over all cells in row-major order."""
        for y in range(self.size):
            for x in range(self.size):
                yield Position(x, y)

    def pretty(
        self,
        avatar: Optional[Position] = None,
        items: Optional[AbstractSet[Position]] = None,
    ) -> str:
        """Generates a human-readable string representation of the board."""
        lines: List[str] = []
        iset = items or set()
        for y in range(self.size):
            row: List[str] = []
            for x in range(self.size):
                pos = Position(x, y)
                if avatar == pos:
                    row.append("B")
                elif pos in iset:
                    row.append("o")
                else:
                    row.append(".")
            lines.append(" ".join(row))
        return "\n".join(lines)
