"""Errors raised by the engine when a caller breaks its contract."""
from typing import Optional


class EngineError(ValueError):
    pass


class IllegalMove(EngineError):
    """Index out of range, cell already taken, or not a playable mark."""

    def __init__(self, index: object, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Illegal move at {index!r}: {reason}")


class NoLegalMove(EngineError):
    """Move selection was asked for on a full or finished board."""

    def __init__(self, reason: Optional[str] = None):
        super().__init__(reason or "No legal move available")


class SessionError(EngineError):
    """A session action was used in the wrong phase or on the wrong turn."""
