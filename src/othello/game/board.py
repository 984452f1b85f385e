"""
Board module for Othello.
Holds the board state, computes legal moves and performs tile flipping.
The grid is a numpy array of Token values, shared copy-on-write between clones.
"""
from typing import Dict, List, Optional
import numpy as np

from .types import (
    SIZE, BOARD_SIZE, MIN_LEVEL, MAX_LEVEL, DEFAULT_LEVEL, DIRECTIONS,
    Player, Token, Move,
)
from .exceptions import IllegalMoveError, InvalidStateError
from ..search.tree import MinimaxSearch, CancellationToken


def _shift(mask: np.ndarray, dr: int, dc: int) -> np.ndarray:
    """Move every cell of a boolean mask one step in direction (dr, dc), filling with False."""
    out = np.zeros_like(mask)
    dst_rows = slice(max(dr, 0), SIZE + min(dr, 0))
    src_rows = slice(max(-dr, 0), SIZE + min(-dr, 0))
    dst_cols = slice(max(dc, 0), SIZE + min(dc, 0))
    src_cols = slice(max(-dc, 0), SIZE + min(-dc, 0))
    out[dst_rows, dst_cols] = mask[src_rows, src_cols]
    return out


class Board:
    """
    Represents an Othello position between a human and the AI.

    Boards are values: every move returns a new board and leaves the
    original untouched. The only in-place setter is set_level().
    """

    SIZE = SIZE
    BOARD_SIZE = BOARD_SIZE

    def __init__(self, first_player: Player = Player.HUMAN, level: int = DEFAULT_LEVEL):
        """
        Initialize a board in the standard opening position.

        Args:
            first_player: The player with the opening move (plays the dark colour)
            level: Look-ahead depth of the AI (1..5)
        """
        if first_player not in (Player.HUMAN, Player.AI):
            raise ValueError(f"First player must be HUMAN or AI, got {first_player}")

        self._first_player = first_player
        self._to_move = first_player
        self._level = DEFAULT_LEVEL
        self.set_level(level)

        # Colour ownership belongs to this board only
        self._owners: Dict[Token, Player] = {
            Token.DARK: first_player,
            Token.LIGHT: first_player.opponent(),
        }
        self._tokens: Dict[Player, Token] = {p: t for t, p in self._owners.items()}

        mid = SIZE // 2
        self._grid = np.zeros((SIZE, SIZE), dtype=np.int8)
        self._grid[mid, mid] = Token.LIGHT.value
        self._grid[mid - 1, mid - 1] = Token.LIGHT.value
        self._grid[mid - 1, mid] = Token.DARK.value
        self._grid[mid, mid - 1] = Token.DARK.value
        self._owns_grid = True
        self._moves_cache: Dict[Player, List[Move]] = {}

    # ---------- Construction ----------

    @classmethod
    def from_string(cls, text: str, first_player: Player = Player.HUMAN,
                    to_move: Optional[Player] = None, level: int = DEFAULT_LEVEL) -> 'Board':
        """
        Build a board from its text rendering ('.' empty, 'X' human, 'O' AI).

        Args:
            text: SIZE rows of SIZE space-separated cells
            first_player: Player that had the opening move
            to_move: Player whose turn it is (default: first_player)
            level: Look-ahead depth of the AI

        Returns:
            The parsed board
        """
        rows = [line.split() for line in text.strip().splitlines()]
        if len(rows) != SIZE or any(len(row) != SIZE for row in rows):
            raise ValueError(f"Board text must have {SIZE} rows of {SIZE} cells")

        board = cls(first_player, level)
        symbols = {'.': Token.FREE, 'X': board._tokens[Player.HUMAN], 'O': board._tokens[Player.AI]}
        for i, row in enumerate(rows):
            for j, cell in enumerate(row):
                if cell not in symbols:
                    raise ValueError(f"Unknown cell symbol {cell!r} at ({i}, {j})")
                board._grid[i, j] = symbols[cell].value

        if to_move is not None:
            if to_move not in (Player.HUMAN, Player.AI):
                raise ValueError(f"Player to move must be HUMAN or AI, got {to_move}")
            board._to_move = to_move
        return board

    def clone(self) -> 'Board':
        """Create an independent copy. The grid is only copied when one side writes to it."""
        copy = Board.__new__(Board)
        copy._first_player = self._first_player
        copy._to_move = self._to_move
        copy._level = self._level
        copy._owners = self._owners
        copy._tokens = self._tokens
        copy._grid = self._grid
        copy._moves_cache = dict(self._moves_cache)
        copy._owns_grid = False
        self._owns_grid = False
        return copy

    def _write(self, row: int, col: int, token: Token) -> None:
        if not self._owns_grid:
            self._grid = self._grid.copy()
            self._owns_grid = True
        self._grid[row, col] = token.value
        self._moves_cache.clear()

    # ---------- Queries ----------

    @property
    def first_player(self) -> Player:
        return self._first_player

    @property
    def to_move(self) -> Player:
        """The player whose turn it is."""
        return self._to_move

    @property
    def level(self) -> int:
        return self._level

    def set_level(self, level: int) -> None:
        """Set the look-ahead depth of the AI."""
        if not isinstance(level, int) or not MIN_LEVEL <= level <= MAX_LEVEL:
            raise ValueError(f"Level must be between {MIN_LEVEL} and {MAX_LEVEL}, got {level}")
        self._level = level

    def next_player(self) -> Player:
        """The player whose turn follows the current one."""
        return self._to_move.opponent()

    def get_slot(self, row: int, col: int) -> Optional[Player]:
        """Owner of a cell, or None when the cell is empty or off the board."""
        if row < 0 or row >= SIZE or col < 0 or col >= SIZE:
            return None
        token = Token(int(self._grid[row, col]))
        if token is Token.FREE:
            return None
        return self._owners[token]

    def mask(self, player: Optional[Player]) -> np.ndarray:
        """Boolean SIZE x SIZE array of the cells owned by player (None for empty cells)."""
        token = Token.FREE if player is None else self._tokens[player]
        return self._grid == token.value

    def tile_count(self, player: Player) -> int:
        return int(np.count_nonzero(self.mask(player)))

    def empty_count(self) -> int:
        return int(np.count_nonzero(self.mask(None)))

    def has_same_tiles(self, other: 'Board') -> bool:
        """Check whether every cell is owned by the same player on both boards."""
        return (np.array_equal(self.mask(Player.HUMAN), other.mask(Player.HUMAN))
                and np.array_equal(self.mask(Player.AI), other.mask(Player.AI)))

    # ---------- Legality ----------

    def legal_moves(self, player: Optional[Player] = None) -> List[Move]:
        """
        Get all legal moves for a player, in row-major order.

        Args:
            player: The player to get legal moves for. If None, uses the player to move.

        Returns:
            List of Move tuples
        """
        if player is None:
            player = self._to_move
        if player not in self._moves_cache:
            self._moves_cache[player] = self._compute_legal_moves(player)
        return list(self._moves_cache[player])

    def _compute_legal_moves(self, player: Player) -> List[Move]:
        own = self.mask(player)
        opponent = self.mask(player.opponent())
        empty = self.mask(None)

        legal = np.zeros_like(empty)
        for dr, dc in DIRECTIONS:
            # Opponent runs that start next to one of our tiles
            candidates = _shift(own, dr, dc) & opponent
            for _ in range(SIZE - 3):
                candidates |= _shift(candidates, dr, dc) & opponent
            # An empty cell right past the end of such a run closes the line
            legal |= _shift(candidates, dr, dc) & empty

        return [Move(int(r), int(c)) for r, c in np.argwhere(legal)]

    def is_legal_move(self, row: int, col: int, player: Optional[Player] = None) -> bool:
        """Check if placing a tile for player at (row, col) captures at least one tile."""
        if player is None:
            player = self._to_move
        if self.get_slot(row, col) is not None or not Move(row, col).in_bounds():
            return False
        return len(self._captured_tiles(row, col, player)) > 0

    def has_legal_move(self, player: Optional[Player] = None) -> bool:
        return len(self.legal_moves(player)) > 0

    def _captured_tiles(self, row: int, col: int, player: Player) -> List[Move]:
        """Tiles flipped when player places at (row, col), over all 8 directions."""
        opponent = player.opponent()
        captured: List[Move] = []

        for dr, dc in DIRECTIONS:
            line: List[Move] = []
            r, c = row + dr, col + dc
            while self.get_slot(r, c) == opponent:
                line.append(Move(r, c))
                r += dr
                c += dc
            # Only a line closed by one of our own tiles is captured
            if line and self.get_slot(r, c) == player:
                captured.extend(line)

        return captured

    # ---------- Transitions ----------

    def apply_move(self, move: Move) -> 'Board':
        """
        Place a tile for the player to move and flip every captured line.

        Args:
            move: A legal move for the player to move

        Returns:
            A new board with the turn passed to the opponent
        """
        row, col = move
        mover = self._to_move
        if not Move(row, col).in_bounds() or self.get_slot(row, col) is not None:
            raise ValueError(f"Cell ({row}, {col}) is not an empty cell on the board")
        captured = self._captured_tiles(row, col, mover)
        if not captured:
            raise ValueError(f"Move ({row}, {col}) captures nothing for {mover.name}")

        result = self.clone()
        token = self._tokens[mover]
        result._write(row, col, token)
        for r, c in captured:
            result._write(r, c, token)
        result._to_move = mover.opponent()
        return result

    def pass_turn(self) -> 'Board':
        """Return a copy with the turn handed to the opponent and no cell changed."""
        result = self.clone()
        result._to_move = self.next_player()
        return result

    def move(self, row: int, col: int) -> Optional['Board']:
        """
        Make a human move.

        Args:
            row: Row of the move (0-based)
            col: Column of the move (0-based)

        Returns:
            The resulting board; a board with only the turn changed when the
            human has no legal move at all; or None when (row, col) is not
            legal but other moves are, meaning the human should try again.
        """
        if not Move(row, col).in_bounds():
            raise ValueError(f"Coordinates ({row}, {col}) are outside the board")
        if self.is_terminal():
            raise IllegalMoveError("The game is already over")
        if self._to_move is not Player.HUMAN:
            raise IllegalMoveError("It is not the human's turn")

        if self.is_legal_move(row, col):
            return self.apply_move(Move(row, col))
        if not self.has_legal_move():
            return self.pass_turn()
        return None

    def machine_move(self, cancel_token: Optional[CancellationToken] = None) -> 'Board':
        """
        Let the AI search for and make its move.

        Args:
            cancel_token: Polled during the search; cancelling it raises SearchCancelled

        Returns:
            The resulting board, or a board with only the turn changed when
            the AI has no legal move
        """
        if self.is_terminal():
            raise IllegalMoveError("The game is already over")
        if self._to_move is not Player.AI:
            raise IllegalMoveError("It is not the AI's turn")

        if not self.has_legal_move():
            return self.pass_turn()

        search = MinimaxSearch(depth=self._level, cancel_token=cancel_token)
        return self.apply_move(search.best_move(self))

    # ---------- Game end ----------

    def is_terminal(self) -> bool:
        """The game ends when the board is full or neither player can move."""
        if self.empty_count() == 0:
            return True
        return not self.has_legal_move(self._to_move) and not self.has_legal_move(self.next_player())

    def winner(self) -> Player:
        """
        Get the winner of a finished game.

        Returns:
            Player.HUMAN, Player.AI or Player.TIE
        """
        if not self.is_terminal():
            raise InvalidStateError("The game is not over yet")

        human = self.tile_count(Player.HUMAN)
        ai = self.tile_count(Player.AI)
        if human > ai:
            return Player.HUMAN
        if ai > human:
            return Player.AI
        return Player.TIE

    # ---------- Representation ----------

    def __str__(self) -> str:
        symbols = {None: '.', Player.HUMAN: 'X', Player.AI: 'O'}
        rows = []
        for i in range(SIZE):
            rows.append(' '.join(symbols[self.get_slot(i, j)] for j in range(SIZE)))
        return "\n".join(rows)

    def __repr__(self) -> str:
        return (f"Board(first_player={self._first_player.name}, to_move={self._to_move.name}, "
                f"level={self._level}, human={self.tile_count(Player.HUMAN)}, "
                f"ai={self.tile_count(Player.AI)})")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self._first_player is other._first_player
                and self._to_move is other._to_move
                and self._level == other._level
                and np.array_equal(self._grid, other._grid))

    __hash__ = None


def new_game(first_player: Player = Player.HUMAN, level: int = DEFAULT_LEVEL) -> Board:
    """Start a game in the opening position."""
    return Board(first_player, level)
