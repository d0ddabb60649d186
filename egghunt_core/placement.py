from __future__ import annotations

import logging
import random
from typing import List, Set, Union

from .board import BOARD_SIZE, Board, Position
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

RngLike = Union[random.Random, int, None]


def make_rng(rng: RngLike) -> random.Random:
    if isinstance(rng, random.Random):
        return rng
    return random.Random(rng)


def eligible_cells(excluded: Position, board_size: int = BOARD_SIZE) -> List[Position]:
    """Lists every cell of the board except the excluded one, row by row."""
    return [pos for pos in Board(board_size).coords() if pos != excluded]


def place_items(
    count: int,
    excluded: Position,
    board_size: int = BOARD_SIZE,
    rng: RngLike = None,
) -> Set[Position]:
    """
    Picks `count` distinct cells uniformly at random, never the excluded cell.

    The whole eligible domain is shuffled and the prefix taken, so every cell is
    equally likely and the draw always terminates.
    """
    if board_size <= 0:
        raise ConfigurationError(f'board size must be positive, got {board_size}')
    if count < 0:
        raise ConfigurationError(f'item count must not be negative, got {count}')
    cells = eligible_cells(excluded, board_size)
    if count > len(cells):
        raise ConfigurationError(
            f'cannot place {count} items: only {len(cells)} eligible cells on a '
            f'{board_size}x{board_size} board'
        )
    make_rng(rng).shuffle(cells)
    chosen = set(cells[:count])
    logger.debug("Placed %d items on %dx%d board", len(chosen), board_size, board_size)
    return chosen
