"""Error types raised by the position engine."""
from __future__ import annotations


class InvalidInput(ValueError):
    """Raised when a decoded record is missing a field or has the wrong shape."""

    def __init__(self, message: str, field: str = "") -> None:
        super().__init__(message)
        self.field = field
