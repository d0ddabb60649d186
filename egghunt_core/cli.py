from __future__ import annotations

import argparse
from typing import List, Optional

from .config import load_config
from .directions import Direction, parse_direction
from .errors import ConfigurationError
from .log import configure_logging
from .session import GameSession

FRAME_MS = 16.0


class SimClock:
    """Manually advanced clock so replays are deterministic."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


def parse_keys(text: str) -> List[Direction]:
    """Parses a key script such as 'RRDD' or 'right,right,down'."""
    tokens = [t for t in text.replace(',', ' ').split() if t]
    if len(tokens) == 1 and all(parse_direction(ch) for ch in tokens[0]):
        tokens = list(tokens[0])
    out: List[Direction] = []
    for tok in tokens:
        d = parse_direction(tok)
        if d is None:
            raise ValueError(f'unknown direction {tok!r}')
        out.append(d)
    return out


def replay(session: GameSession, clock: SimClock, keys: List[Direction], hold_ms: float) -> None:
    """Holds each key for hold_ms of simulated time, pumping the loop once per frame."""
    for d in keys:
        session.press(d.value)
        held = 0.0
        while held < hold_ms:
            session.pump(clock())
            clock.advance_ms(FRAME_MS)
            held += FRAME_MS
        session.release(d.value)
        if session.snapshot().game_over:
            break


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Egg Hunt board dealer and key-script replayer')
    parser.add_argument('--board-size', type=int, default=None, help='Board size (NxN)')
    parser.add_argument('--items', type=int, default=None, help='Number of items to place')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for placement')
    parser.add_argument('--keys', default=None, help="Key script to replay, e.g. 'RRDD' or 'right,down'")
    parser.add_argument('--hold-ms', type=float, default=100.0, help='Simulated time each key is held')
    args = parser.parse_args(argv)

    configure_logging()
    try:
        config = load_config().with_overrides(board_size=args.board_size, item_count=args.items).validate()
    except ConfigurationError as e:
        parser.error(str(e))
    try:
        keys = parse_keys(args.keys) if args.keys else []
    except ValueError as e:
        parser.error(str(e))

    clock = SimClock()
    with GameSession(config, clock=clock, rng=args.seed) as session:
        if not keys:
            print('Initial board:')
            print(session.engine.pretty())
            return
        replay(session, clock, keys, args.hold_ms)
        snap = session.snapshot()
        print(session.engine.pretty())
        print(f'Score: {snap.score}/{snap.item_count}')
        if snap.game_over and snap.duration is not None:
            print(f'You found all the eggs! Time: {snap.duration:.1f} seconds')


if __name__ == '__main__':
    main()
