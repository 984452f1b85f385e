"""
Exceptions raised by the Othello rules engine and search.
"""


class OthelloError(Exception):
    """Base class for all game errors."""


class IllegalMoveError(OthelloError):
    """A move was requested out of turn or after the game ended."""


class InvalidStateError(OthelloError, RuntimeError):
    """An operation was called on a board in a state that doesn't allow it."""


class SearchCancelled(OthelloError):
    """The AI search was cancelled before it finished."""
