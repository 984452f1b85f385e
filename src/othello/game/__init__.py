"""
Othello game module.
This package contains the board model, the move rules and the game session.
"""

from .types import SIZE, MIN_LEVEL, MAX_LEVEL, DEFAULT_LEVEL, Player, Token, Move
from .exceptions import OthelloError, IllegalMoveError, InvalidStateError, SearchCancelled
from .board import Board, new_game
from .game import OthelloGame, MoveOutcome

__all__ = [
    'SIZE', 'MIN_LEVEL', 'MAX_LEVEL', 'DEFAULT_LEVEL', 'Player', 'Token', 'Move',
    'OthelloError', 'IllegalMoveError', 'InvalidStateError', 'SearchCancelled',
    'Board', 'new_game', 'OthelloGame', 'MoveOutcome',
]
