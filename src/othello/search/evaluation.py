"""
Heuristic evaluation of Othello positions from the AI's point of view.

The score combines three terms, each computed for both players:
positional value (a fixed weight per cell), mobility (number of legal
moves) and potential mobility (empty cells bordering the opponent's tiles).
"""
from dataclasses import dataclass
import numpy as np

from ..game.types import SIZE, DIRECTIONS, Player

# Value of owning each cell: corners and edges high, cells next to corners low
FIELD_VALUE = np.array([
    [9999, 5, 500, 200, 200, 500, 5, 9999],
    [5, 1, 50, 150, 150, 50, 1, 5],
    [500, 50, 250, 100, 100, 250, 50, 500],
    [200, 150, 100, 50, 50, 100, 150, 200],
    [200, 150, 100, 50, 50, 100, 150, 200],
    [500, 50, 250, 100, 100, 250, 50, 500],
    [5, 1, 50, 150, 150, 50, 1, 5],
    [9999, 5, 500, 200, 200, 500, 5, 9999],
], dtype=np.float64)


@dataclass(frozen=True)
class ScorePair:
    """Scores of one evaluation term for both players."""
    human: float
    ai: float


def _require_board(board) -> None:
    if board is None:
        raise ValueError("No board to evaluate")


def positional_scores(board) -> ScorePair:
    """Sum of FIELD_VALUE over the tiles each player owns."""
    _require_board(board)
    return ScorePair(
        human=float(FIELD_VALUE[board.mask(Player.HUMAN)].sum()),
        ai=float(FIELD_VALUE[board.mask(Player.AI)].sum()),
    )


def mobility_scores(board) -> ScorePair:
    """Number of legal moves of each player, as if that player were to move."""
    _require_board(board)
    return ScorePair(
        human=float(len(board.legal_moves(Player.HUMAN))),
        ai=float(len(board.legal_moves(Player.AI))),
    )


def empty_neighbour_counts(board) -> np.ndarray:
    """For every cell, the number of empty cells among its 8 neighbours."""
    padded = np.pad(board.mask(None), 1, constant_values=False).astype(np.int32)
    counts = np.zeros((SIZE, SIZE), dtype=np.int32)
    for dr, dc in DIRECTIONS:
        counts += padded[1 + dr:1 + dr + SIZE, 1 + dc:1 + dc + SIZE]
    return counts


def potential_mobility_scores(board) -> ScorePair:
    """
    Free cells around the opponent's tiles, summed per player.

    A player's potential mobility is the number of empty neighbours of every
    opponent tile, i.e. the places the player may later be able to play.
    """
    _require_board(board)
    counts = empty_neighbour_counts(board)
    return ScorePair(
        human=float(counts[board.mask(Player.AI)].sum()),
        ai=float(counts[board.mask(Player.HUMAN)].sum()),
    )


def evaluate(board) -> float:
    """
    Score a non-terminal board for the AI.

    Args:
        board: The board to evaluate

    Returns:
        Higher values are better for the AI
    """
    _require_board(board)

    total_tiles = float(board.tile_count(Player.HUMAN) + board.tile_count(Player.AI))
    state = positional_scores(board)
    mobility = mobility_scores(board)
    potential = potential_mobility_scores(board)

    return ((state.ai - 1.5 * state.human)
            + (64.0 / total_tiles) * (3.0 * mobility.ai - 4.0 * mobility.human)
            + (64.0 / (2.0 * total_tiles)) * (2.5 * potential.ai - 3.0 * potential.human))
