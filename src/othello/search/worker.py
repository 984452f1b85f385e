"""
Runs the AI move on a background thread so a front end stays responsive.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Optional

from ..game.exceptions import SearchCancelled
from .tree import CancellationToken

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Outcome of a background AI move. Exactly one of the fields describes it."""
    board: Optional[object] = None
    cancelled: bool = False
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.board is not None


class SearchWorker:
    """
    Computes board.machine_move() on a daemon thread.

    The caller's board is never touched; the finished board is handed over
    as a whole through result(). cancel() only sets a flag that the search
    polls, so the worker always finishes cleanly.
    """

    def __init__(self, board):
        if board is None:
            raise ValueError("No board to search")
        self._board = board.clone()
        self._token = CancellationToken()
        self._result: Optional[SearchResult] = None
        self._done = threading.Event()
        self._thread = threading.Thread(target=self._run, name="othello-search", daemon=True)

    def start(self) -> 'SearchWorker':
        self._thread.start()
        return self

    def cancel(self) -> None:
        self._token.cancel()

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def _run(self) -> None:
        try:
            board = self._board.machine_move(self._token)
            result = SearchResult(board=board)
        except SearchCancelled:
            logger.debug("Background search cancelled")
            result = SearchResult(cancelled=True)
        except Exception as e:
            # Handed to the caller through result()
            result = SearchResult(error=e)
        self._result = result
        self._done.set()

    def result(self, timeout: Optional[float] = None) -> Optional[SearchResult]:
        """
        Wait for the search to finish.

        Args:
            timeout: Seconds to wait, or None to wait for completion

        Returns:
            The SearchResult, or None if the timeout expired first
        """
        if not self._done.wait(timeout):
            return None
        return self._result
