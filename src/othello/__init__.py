"""
Othello (Reversi) against a minimax AI.
"""
from .game import (
    Board, new_game, OthelloGame, MoveOutcome, Player, Move, SIZE,
    OthelloError, IllegalMoveError, InvalidStateError, SearchCancelled,
)

__version__ = '0.1'

__all__ = [
    'Board', 'new_game', 'OthelloGame', 'MoveOutcome', 'Player', 'Move', 'SIZE',
    'OthelloError', 'IllegalMoveError', 'InvalidStateError', 'SearchCancelled',
]
