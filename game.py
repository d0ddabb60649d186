from __future__ import annotations

# Facade module that re-exports the Egg Hunt core API.
# The Flask app, tools and tests import from here; the single-responsibility
# modules live under egghunt_core/*.

try:
    from .egghunt_core.board import (  # type: ignore
        BOARD_SIZE,
        MOVE_INTERVAL_MS,
        NUM_ITEMS,
        ORIGIN,
        Board,
        Position,
    )
    from .egghunt_core.config import GameConfig, load_config  # type: ignore
    from .egghunt_core.directions import Direction, parse_direction  # type: ignore
    from .egghunt_core.engine import GameEngine  # type: ignore
    from .egghunt_core.errors import ConfigurationError  # type: ignore
    from .egghunt_core.inputs import DEFAULT_KEYMAP, KeyInput  # type: ignore
    from .egghunt_core.loop import TickLoop  # type: ignore
    from .egghunt_core.placement import eligible_cells, place_items  # type: ignore
    from .egghunt_core.session import GameSession  # type: ignore
    from .egghunt_core.state import GameSnapshot, GameState  # type: ignore
except ImportError:
    from egghunt_core.board import (  # type: ignore
        BOARD_SIZE,
        MOVE_INTERVAL_MS,
        NUM_ITEMS,
        ORIGIN,
        Board,
        Position,
    )
    from egghunt_core.config import GameConfig, load_config  # type: ignore
    from egghunt_core.directions import Direction, parse_direction  # type: ignore
    from egghunt_core.engine import GameEngine  # type: ignore
    from egghunt_core.errors import ConfigurationError  # type: ignore
    from egghunt_core.inputs import DEFAULT_KEYMAP, KeyInput  # type: ignore
    from egghunt_core.loop import TickLoop  # type: ignore
    from egghunt_core.placement import eligible_cells, place_items  # type: ignore
    from egghunt_core.session import GameSession  # type: ignore
    from egghunt_core.state import GameSnapshot, GameState  # type: ignore


def new_session(seed=None, **overrides) -> GameSession:
    """Starts a session using environment configuration plus keyword overrides."""
    config = load_config().with_overrides(**overrides).validate()
    return GameSession(config, rng=seed)


def main() -> None:
    # CLI driver delegated to egghunt_core.cli
    try:
        from .egghunt_core.cli import main as _main  # type: ignore
    except ImportError:
        from egghunt_core.cli import main as _main  # type: ignore
    _main()


if __name__ == '__main__':
    main()
