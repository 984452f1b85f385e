"""
Minimax search and heuristic evaluation for the Othello AI.
"""
from .evaluation import evaluate, ScorePair, FIELD_VALUE
from .tree import MinimaxSearch, SearchNode, CancellationToken
from .worker import SearchWorker, SearchResult

__all__ = [
    'evaluate', 'ScorePair', 'FIELD_VALUE',
    'MinimaxSearch', 'SearchNode', 'CancellationToken',
    'SearchWorker', 'SearchResult',
]
