"""
Othello game module.
Handles game flow and state management for one human-vs-AI session.
"""
from enum import Enum
from typing import List, Optional

from .board import Board
from .types import DEFAULT_LEVEL, Player


class MoveOutcome(Enum):
    """What happened when a player tried to move."""
    PLACED = 'placed'   # a tile was placed
    PASSED = 'passed'   # the player had no legal move and lost the turn
    RETRY = 'retry'     # the requested cell is not legal, nothing changed


class OthelloGame:
    """
    Main game class that keeps the current board, the AI level and the
    history needed to undo human moves.
    """

    def __init__(self, first_player: Player = Player.HUMAN, level: int = DEFAULT_LEVEL):
        """
        Initialize a new game.

        Args:
            first_player: Player with the opening move
            level: Look-ahead depth of the AI (1..5)
        """
        self.level = level
        self.board = Board(first_player, level)
        self.history: List[Board] = []

    def new_game(self, first_player: Optional[Player] = None) -> None:
        """Restart, by default with the same player opening."""
        if first_player is None:
            first_player = self.board.first_player
        self.board = Board(first_player, self.level)
        self.history = []

    def switch(self) -> None:
        """Restart with the other player opening."""
        self.new_game(self.board.first_player.opponent())

    def set_level(self, level: int) -> None:
        self.board.set_level(level)
        self.level = level
        for board in self.history:
            board.set_level(level)

    def ai_to_move(self) -> bool:
        return not self.board.is_terminal() and self.board.to_move is Player.AI

    def play(self, row: int, col: int) -> MoveOutcome:
        """
        Make a human move.

        Args:
            row: Row of the move (0-based)
            col: Column of the move (0-based)

        Returns:
            MoveOutcome of the attempt
        """
        result = self.board.move(row, col)
        if result is None:
            return MoveOutcome.RETRY

        self.history.append(self.board)
        outcome = MoveOutcome.PASSED if result.has_same_tiles(self.board) else MoveOutcome.PLACED
        self.board = result
        return outcome

    def machine_play(self, cancel_token=None) -> MoveOutcome:
        """Let the AI move."""
        result = self.board.machine_move(cancel_token)
        outcome = MoveOutcome.PASSED if result.has_same_tiles(self.board) else MoveOutcome.PLACED
        self.board = result
        return outcome

    def undo(self) -> bool:
        """
        Go back to the position before the last human move.

        Returns:
            False if there is no human move to undo
        """
        if not self.history:
            return False
        self.board = self.history.pop()
        return True

    def is_over(self) -> bool:
        return self.board.is_terminal()

    def winner(self) -> Player:
        return self.board.winner()

    def get_score(self):
        """
        Get the current tile counts.

        Returns:
            Tuple of (human_tiles, ai_tiles)
        """
        return self.board.tile_count(Player.HUMAN), self.board.tile_count(Player.AI)

    def __str__(self) -> str:
        human, ai = self.get_score()
        lines = [str(self.board), f"Score - Human: {human}, AI: {ai}"]
        if self.is_over():
            winner = self.winner()
            lines.append("Game over! It's a tie!" if winner is Player.TIE
                         else f"Game over! {winner.name} wins!")
        else:
            lines.append(f"To move: {self.board.to_move.name}")
        return "\n".join(lines)
