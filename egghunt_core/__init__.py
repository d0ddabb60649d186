"""
Egg Hunt core Python package.

This package holds the game-state engine behind the Egg Hunt board game:
an avatar walks a square grid collecting randomly placed eggs.
Modules:
- board.py: Position, Board and the default dimensions
- placement.py: unbiased item placement
- directions.py: Direction and name parsing
- state.py: GameState and the read-only GameSnapshot
- engine.py: GameEngine (input, throttled movement, collection, win)
- loop.py, inputs.py, session.py: tick driver, input source, game lifetime
- config.py, log.py, errors.py: configuration, logging setup, exceptions
"""
