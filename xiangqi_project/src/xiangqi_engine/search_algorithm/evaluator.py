"""
局面静态评估

正分有利于红方，负分有利于黑方。只依赖棋盘内容，不含走子方项。
"""

from typing import Dict, Optional

from ..config.engine_config import EvaluationConfig
from ..rules_engine import ChessBoard, Color, Piece, PieceType


class Evaluator:
    """
    局面评估器

    子力价值加少量位置加分：过河兵加分，中路的炮和马加分。
    """

    def __init__(self, config: Optional[EvaluationConfig] = None):
        self.config = config or EvaluationConfig()
        self.piece_values: Dict[PieceType, int] = {
            piece_type: self.config.piece_values[piece_type.name.lower()]
            for piece_type in PieceType
        }

    def piece_value(self, piece: Optional[Piece]) -> int:
        """棋子的子力价值，空位为0"""
        if piece is None:
            return 0
        return self.piece_values[piece.piece_type]

    def position_bonus(self, piece: Piece, x: int, y: int) -> int:
        """
        位置加分

        Args:
            piece: 棋子
            x: 列
            y: 行

        Returns:
            int: 加分（不带符号）
        """
        if piece.piece_type == PieceType.SOLDIER:
            if piece.color == Color.BLACK and y > 4:
                return self.config.crossed_soldier_bonus
            if piece.color == Color.RED and y < 5:
                return self.config.crossed_soldier_bonus
        if piece.piece_type in (PieceType.CANNON, PieceType.HORSE):
            if self.config.central_min_col <= x <= self.config.central_max_col:
                return self.config.central_bonus
        return 0

    def evaluate(self, board: ChessBoard) -> int:
        """
        评估局面

        Args:
            board: 棋盘状态

        Returns:
            int: 评分，正数有利于红方
        """
        score = 0
        for pos, piece in board.get_all_pieces():
            value = self.piece_value(piece) + self.position_bonus(piece, pos.x, pos.y)
            score += value if piece.color == Color.RED else -value
        return score


_default_evaluator = Evaluator()


def evaluate(board: ChessBoard) -> int:
    return _default_evaluator.evaluate(board)
