"""
alpha-beta 搜索器

深度受限的极小极大搜索，带 alpha-beta 剪枝和吃子优先的走法排序。
红方为极大方，黑方为极小方。
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .evaluator import Evaluator
from ..config.engine_config import SearchConfig
from ..rules_engine import ChessBoard, Color, Move, RuleEngine
from ..utils.logger import performance_logger


@dataclass
class SearchStats:
    """单次搜索的统计信息"""
    nodes: int = 0              # 访问的节点数
    leaf_evaluations: int = 0   # 静态评估次数
    cutoffs: int = 0            # 剪枝次数
    time_used: float = 0.0      # 耗时(秒)


@dataclass
class SearchResult:
    """搜索结果"""
    move: Optional[Move]
    score: int
    depth: int
    stats: SearchStats = field(default_factory=SearchStats)


class AlphaBetaSearcher:
    """
    alpha-beta 搜索器

    搜索过程不修改任何共享状态，统计信息按次返回，
    因此同一个搜索器可以被多个调用方同时使用。
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        evaluator: Optional[Evaluator] = None,
        rule_engine: Optional[RuleEngine] = None
    ):
        """
        初始化搜索器

        Args:
            config: 搜索配置
            evaluator: 局面评估器
            rule_engine: 规则引擎
        """
        self.config = config or SearchConfig()
        self.evaluator = evaluator or Evaluator()
        self.rule_engine = rule_engine or RuleEngine()
        self.logger = logging.getLogger(__name__)

    def search(
        self,
        board: ChessBoard,
        depth: Optional[int] = None,
        color: Color = Color.BLACK
    ) -> SearchResult:
        """
        从指定走子方出发执行搜索

        Args:
            board: 根节点棋盘
            depth: 搜索深度（覆盖配置）
            color: 根节点走子方，默认黑方（极小方）

        Returns:
            SearchResult: 最佳走法及其极小极大值
        """
        depth = self.config.depth if depth is None else depth
        stats = SearchStats()
        start_time = time.perf_counter()

        score, move = self._minimax(
            board, depth, -math.inf, math.inf, Color(color) == Color.RED, stats
        )

        stats.time_used = time.perf_counter() - start_time
        if move is not None:
            move = move.with_score(score)

        if self.config.log_stats:
            performance_logger.log_search_stats(
                depth, stats.nodes, stats.cutoffs, stats.time_used, score
            )
        self.logger.debug(f"最佳走法: {move}, 评分: {score}")

        return SearchResult(move=move, score=score, depth=depth, stats=stats)

    def best_move(
        self,
        board: ChessBoard,
        depth: Optional[int] = None,
        color: Color = Color.BLACK
    ) -> Optional[Move]:
        """
        选出最佳走法

        Returns:
            Optional[Move]: 最佳走法，走子方无合法走法时返回None
        """
        return self.search(board, depth, color).move

    def order_moves(self, board: ChessBoard, moves: List[Move]) -> List[Move]:
        """
        按被吃棋子价值从高到低排序，同价值保持原有顺序
        """
        return sorted(
            moves,
            key=lambda move: -self.evaluator.piece_value(board.get_piece_at(move.to_pos))
        )

    def _minimax(
        self,
        board: ChessBoard,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
        stats: SearchStats
    ) -> Tuple[int, Optional[Move]]:
        """
        极小极大搜索

        Args:
            board: 当前局面
            depth: 剩余深度
            alpha: 极大方已保证的下界
            beta: 极小方已保证的上界
            maximizing: 当前是否为极大方(红方)
            stats: 统计信息

        Returns:
            Tuple[int, Optional[Move]]: (评分, 最佳走法)
        """
        stats.nodes += 1

        if depth == 0:
            stats.leaf_evaluations += 1
            return self.evaluator.evaluate(board), None

        color = Color.RED if maximizing else Color.BLACK
        moves = self.rule_engine.generate_legal_moves(board, color)

        if not moves:
            if self.rule_engine.is_in_check(board, color):
                # 被将死：对走子方而言是最差的分值
                mate = self.config.mate_score
                return (-mate if maximizing else mate), None
            # 未被将军但无子可走，搜索中记为0分
            return 0, None

        if self.config.capture_ordering:
            moves = self.order_moves(board, moves)

        best_move = None

        if maximizing:
            best_score = -math.inf
            for move in moves:
                score, _ = self._minimax(board.make_move(move), depth - 1, alpha, beta, False, stats)
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, score)
                if beta <= alpha:
                    stats.cutoffs += 1
                    break
        else:
            best_score = math.inf
            for move in moves:
                score, _ = self._minimax(board.make_move(move), depth - 1, alpha, beta, True, stats)
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, score)
                if beta <= alpha:
                    stats.cutoffs += 1
                    break

        return best_score, best_move


_default_searcher = AlphaBetaSearcher(SearchConfig(log_stats=False))


def best_move(board: ChessBoard, depth: int = 3, color: Color = Color.BLACK) -> Optional[Move]:
    """黑方（默认）在指定深度下的最佳走法"""
    return _default_searcher.best_move(board, depth, color)
