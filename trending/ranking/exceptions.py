from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when a caller passes records or a config the engine cannot accept."""
