"""
Tests for the heuristic board evaluation.
"""
import sys
from pathlib import Path

import numpy as np
import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.absolute() / 'src'))

from othello.game import Board, Move, Player
from othello.search.evaluation import (
    FIELD_VALUE, ScorePair, evaluate, positional_scores, mobility_scores,
    potential_mobility_scores, empty_neighbour_counts,
)


@pytest.fixture
def opening():
    return Board(Player.HUMAN)


@pytest.fixture
def after_ai_opening():
    """The AI opened at (2, 3)."""
    return Board(Player.AI).apply_move(Move(2, 3))


def test_weight_table_is_symmetric():
    assert FIELD_VALUE.shape == (8, 8)
    assert np.array_equal(FIELD_VALUE, FIELD_VALUE.T)
    assert np.array_equal(FIELD_VALUE, FIELD_VALUE[::-1, ::-1])
    assert FIELD_VALUE[0, 0] == 9999
    assert FIELD_VALUE[1, 1] == 1


def test_opening_terms(opening):
    assert positional_scores(opening) == ScorePair(human=100.0, ai=100.0)
    assert mobility_scores(opening) == ScorePair(human=4.0, ai=4.0)
    assert potential_mobility_scores(opening) == ScorePair(human=10.0, ai=10.0)


def test_opening_score(opening):
    # (100 - 150) + 16 * (12 - 16) + 8 * (25 - 30)
    assert evaluate(opening) == pytest.approx(-154.0)


def test_score_after_ai_opening(after_ai_opening):
    board = after_ai_opening
    assert positional_scores(board) == ScorePair(human=50.0, ai=250.0)
    assert mobility_scores(board) == ScorePair(human=3.0, ai=3.0)
    assert potential_mobility_scores(board) == ScorePair(human=19.0, ai=5.0)
    # 175 + 12.8 * (9 - 12) + 6.4 * (12.5 - 57)
    assert evaluate(board) == pytest.approx(-148.2)


def test_mobility_ignores_turn(after_ai_opening):
    passed = after_ai_opening.pass_turn()
    assert mobility_scores(passed) == mobility_scores(after_ai_opening)
    assert evaluate(passed) == evaluate(after_ai_opening)


def test_empty_neighbour_counts_at_edges():
    board = Board.from_string("\n".join([". . . . . . . ."] * 8), Player.HUMAN)
    counts = empty_neighbour_counts(board)
    assert counts[0, 0] == 3
    assert counts[0, 3] == 5
    assert counts[3, 3] == 8


def test_corner_is_worth_more_than_x_square():
    corner = Board.from_string("\n".join(["O X X . . . . ."] + [". . . . . . . ."] * 7), Player.HUMAN)
    x_square = Board.from_string("\n".join([". . . . . . . .", ". O X X . . . ."] + [". . . . . . . ."] * 6),
                                 Player.HUMAN)
    assert positional_scores(corner).ai > positional_scores(x_square).ai


def test_missing_board_is_rejected():
    for func in (evaluate, positional_scores, mobility_scores, potential_mobility_scores):
        with pytest.raises(ValueError):
            func(None)
