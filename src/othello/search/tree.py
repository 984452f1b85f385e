"""
Fixed-depth game tree search for the Othello AI.

The tree is rebuilt from scratch for every AI turn. Each node keeps its own
heuristic score; during backup an inner node adds the best (AI to play) or
worst (human to play) score among its children to its own score.
"""
import logging
import threading
from typing import List, Optional

from ..game.types import Move, Player
from ..game.exceptions import InvalidStateError, SearchCancelled
from .evaluation import evaluate

logger = logging.getLogger(__name__)


class CancellationToken:
    """Cooperative cancellation flag shared between a search and its owner."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise SearchCancelled("Search was cancelled")


class SearchNode:
    """A node of the game tree."""

    __slots__ = ['board', 'move', 'score', 'children']

    def __init__(self, board, move: Optional[Move] = None, score: float = 0.0):
        """
        Initialize a new node.

        Args:
            board: Board reached at this node (owned by the node)
            move: The move that led to this node (None for root)
            score: Heuristic score of the board
        """
        self.board = board
        self.move = move
        self.score = score
        self.children: Optional[List['SearchNode']] = None

    def expanded(self) -> bool:
        """Check if the node has been expanded (has children)."""
        return bool(self.children)

    def add_child(self, child: 'SearchNode') -> None:
        if self.children is None:
            self.children = []
        self.children.append(child)

    def mover_after(self) -> Player:
        """The player who made the move into this node."""
        return self.board.next_player()

    def backup(self) -> float:
        """
        Back the scores up the subtree rooted at this node.

        Leaves keep their score. Inner nodes add the maximum child score when
        the AI made the children's moves and the minimum when the human did.

        Returns:
            The backed-up score, also stored in self.score
        """
        if not self.children:
            return self.score

        first = self.children[0]
        extreme = first.backup()
        maximize = first.mover_after() is Player.AI
        for child in self.children[1:]:
            value = child.backup()
            if (value > extreme) if maximize else (value < extreme):
                extreme = value

        self.score += extreme
        return self.score

    def __repr__(self) -> str:
        return f"SearchNode(move={self.move}, score={self.score})"


class MinimaxSearch:
    """Builds a bounded-depth game tree and picks the AI's move from it."""

    def __init__(self, depth: int, cancel_token: Optional[CancellationToken] = None):
        """
        Args:
            depth: Number of plies to look ahead
            cancel_token: Optional token polled at every node expansion
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.depth = depth
        self.cancel_token = cancel_token
        self.nodes_expanded = 0
        self.nodes_created = 0

    def build_tree(self, node: SearchNode, depth: int) -> None:
        """
        Expand node recursively until depth runs out or no one can move.

        When the player to move is stuck but the opponent isn't, the
        opponent's moves are expanded instead; this still costs one ply.
        """
        if depth <= 0:
            return
        if self.cancel_token is not None:
            self.cancel_token.raise_if_cancelled()

        board = node.board
        moves = board.legal_moves()
        if not moves:
            board = board.pass_turn()
            moves = board.legal_moves()
            if not moves:
                return

        self.nodes_expanded += 1
        for move in moves:
            child_board = board.apply_move(move)
            node.add_child(SearchNode(child_board, move, evaluate(child_board)))
            self.nodes_created += 1

        for child in node.children:
            self.build_tree(child, depth - 1)

    def search(self, board) -> SearchNode:
        """
        Build and score the whole tree for board.

        Returns:
            The root node, with all scores backed up
        """
        if board is None:
            raise ValueError("No board to search")

        self.nodes_expanded = 0
        self.nodes_created = 0
        root = SearchNode(board.clone())
        self.build_tree(root, self.depth)
        if not root.expanded():
            raise InvalidStateError("The AI has no move to search")

        for child in root.children:
            child.backup()
        return root

    def best_move(self, board) -> Move:
        """
        Select the root move with the highest backed-up score.
        Ties keep the move generated first (row-major order).
        """
        root = self.search(board)

        best = root.children[0]
        for child in root.children[1:]:
            if child.score > best.score:
                best = child

        logger.debug(
            "Depth %d search expanded %d nodes (%d created), chose %s with score %.2f",
            self.depth, self.nodes_expanded, self.nodes_created, best.move, best.score,
        )
        return best.move
