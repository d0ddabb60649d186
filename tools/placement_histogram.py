import argparse
import random
import sys
from collections import Counter
sys.path.append('.')
import game  # type: ignore


def histogram(runs: int, count: int, board_size: int, seed: int) -> Counter:
    rng = random.Random(seed)
    hits: Counter = Counter()
    for _ in range(runs):
        for pos in game.place_items(count, game.ORIGIN, board_size, rng):
            hits[pos] += 1
    return hits


def main() -> int:
    ap = argparse.ArgumentParser(description='Histogram item placements over many deals')
    ap.add_argument('--runs', type=int, default=1000)
    ap.add_argument('--items', type=int, default=game.NUM_ITEMS)
    ap.add_argument('--board-size', type=int, default=game.BOARD_SIZE)
    ap.add_argument('--seed', type=int, default=0)
    args = ap.parse_args()

    try:
        hits = histogram(args.runs, args.items, args.board_size, args.seed)
    except game.ConfigurationError as e:
        print(f'error: {e}')
        return 2
    cells = game.eligible_cells(game.ORIGIN, args.board_size)
    expected = args.runs * args.items / len(cells)
    for y in range(args.board_size):
        row = []
        for x in range(args.board_size):
            pos = game.Position(x, y)
            row.append('   -' if pos == game.ORIGIN else f'{hits[pos]:4d}')
        print(' '.join(row))
    counts = [hits[c] for c in cells]
    print(f'cells={len(cells)} expected={expected:.1f} min={min(counts)} max={max(counts)}')
    missing = sum(1 for c in counts if c == 0)
    if missing:
        print(f'warning: {missing} eligible cells never chosen')
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
