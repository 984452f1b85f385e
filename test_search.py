"""
Tests for the minimax tree search.
"""
import sys
from pathlib import Path

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.absolute() / 'src'))

from othello.game import Board, Move, Player, InvalidStateError, SearchCancelled
from othello.search import MinimaxSearch, SearchNode, CancellationToken, evaluate


def empty_rows(*lines):
    lines = list(lines) + [". . . . . . . ."] * (8 - len(lines))
    return "\n".join(lines)


def test_depth_one_opening_move():
    """All four openings score alike, so the first generated one wins the tie."""
    board = Board(Player.AI, level=1)
    search = MinimaxSearch(depth=1)
    root = search.search(board)

    assert [child.move for child in root.children] == [(2, 3), (3, 2), (4, 5), (5, 4)]
    for child in root.children:
        assert child.score == pytest.approx(-148.2)
        assert child.children is None
    assert search.best_move(board) == Move(2, 3)


def test_child_scores_are_evaluations():
    board = Board(Player.AI)
    root = SearchNode(board.clone())
    MinimaxSearch(depth=1).build_tree(root, 1)
    for child in root.children:
        assert child.score == evaluate(board.apply_move(child.move))
        assert child.board.to_move is Player.HUMAN


def test_backup_adds_own_score():
    human_to_move = Board(Player.HUMAN)   # reached by an AI move
    ai_to_move = Board(Player.AI)         # reached by a human move

    a = SearchNode(human_to_move, Move(0, 0), 10.0)
    a.add_child(SearchNode(ai_to_move, Move(1, 1), 5.0))
    a.add_child(SearchNode(ai_to_move, Move(1, 2), -3.0))
    b = SearchNode(human_to_move, Move(0, 1), 20.0)
    root = SearchNode(ai_to_move)
    root.add_child(a)
    root.add_child(b)

    # a: 10 + min(5, -3); root: 0 + max(7, 20)
    assert root.backup() == pytest.approx(20.0)
    assert a.score == pytest.approx(7.0)
    assert b.score == pytest.approx(20.0)


def test_pass_through_expansion():
    """A stuck player's node is expanded with the opponent's moves."""
    board = Board.from_string(empty_rows("O X . . . . . ."), Player.HUMAN)
    search = MinimaxSearch(depth=2)
    root = SearchNode(board)
    search.build_tree(root, 1)

    assert [child.move for child in root.children] == [(0, 2)]
    child = root.children[0]
    assert child.board.get_slot(0, 1) is Player.AI
    assert child.board.to_move is Player.HUMAN
    # The pass used up the single ply
    assert child.children is None


def test_terminal_node_is_not_expanded():
    board = Board.from_string(empty_rows("X . . . . . . ."), Player.HUMAN)
    root = SearchNode(board)
    MinimaxSearch(depth=3).build_tree(root, 3)
    assert not root.expanded()

    with pytest.raises(InvalidStateError):
        MinimaxSearch(depth=3).search(board)


def test_search_is_deterministic():
    board = Board(Player.HUMAN).move(2, 3)
    board.set_level(3)
    first = board.machine_move()
    second = board.machine_move()
    assert first == second
    assert board == Board(Player.HUMAN, level=3).move(2, 3)


def test_search_does_not_touch_board():
    board = Board(Player.AI, level=2)
    MinimaxSearch(depth=2).search(board)
    assert board == Board(Player.AI, level=2)


def test_cancelled_search():
    token = CancellationToken()
    token.cancel()
    assert token.cancelled

    board = Board(Player.AI, level=2)
    with pytest.raises(SearchCancelled):
        MinimaxSearch(depth=2, cancel_token=token).best_move(board)
    with pytest.raises(SearchCancelled):
        board.machine_move(token)
    assert board == Board(Player.AI, level=2)


def test_invalid_arguments():
    with pytest.raises(ValueError):
        MinimaxSearch(depth=0)
    with pytest.raises(ValueError):
        MinimaxSearch(depth=1).search(None)


def test_node_counts():
    search = MinimaxSearch(depth=2)
    search.search(Board(Player.AI))
    # 4 openings, each answered by 3 human replies
    assert search.nodes_created == 4 + 4 * 3
    assert search.nodes_expanded == 1 + 4
