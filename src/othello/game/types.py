"""
Basic value types shared by the Othello game model and the AI search.
"""
from enum import Enum
from typing import NamedTuple

# Board dimensions
SIZE = 8
BOARD_SIZE = SIZE * SIZE

# Look-ahead bounds of the AI
MIN_LEVEL = 1
MAX_LEVEL = 5
DEFAULT_LEVEL = 3


class Player(Enum):
    """Participants of a game. TIE is only ever returned as a result."""
    HUMAN = 'human'
    AI = 'ai'
    TIE = 'tie'

    def opponent(self) -> 'Player':
        if self is Player.HUMAN:
            return Player.AI
        if self is Player.AI:
            return Player.HUMAN
        raise ValueError("TIE has no opponent")

    @property
    def symbol(self) -> str:
        return {Player.HUMAN: 'X', Player.AI: 'O'}[self]


class Token(Enum):
    """Cell colours as stored in the grid."""
    FREE = 0
    DARK = 1   # colour of the player with the opening move
    LIGHT = 2


class Move(NamedTuple):
    """A zero-based (row, col) coordinate on the board."""
    row: int
    col: int

    def in_bounds(self) -> bool:
        return 0 <= self.row < SIZE and 0 <= self.col < SIZE


# Compass directions as (d_row, d_col)
DIRECTIONS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)
