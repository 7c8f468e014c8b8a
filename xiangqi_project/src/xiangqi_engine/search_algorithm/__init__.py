"""
搜索算法模块

包含局面静态评估和 alpha-beta 剪枝的极小极大搜索。
"""

from .evaluator import Evaluator, evaluate
from .alpha_beta_searcher import AlphaBetaSearcher, SearchResult, SearchStats, best_move

__all__ = [
    'Evaluator', 'evaluate',
    'AlphaBetaSearcher', 'SearchResult', 'SearchStats', 'best_move'
]
