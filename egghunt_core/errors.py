from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a game cannot be set up with the requested board/item configuration."""
