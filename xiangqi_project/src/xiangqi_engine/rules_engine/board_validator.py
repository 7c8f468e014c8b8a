"""
棋局合法性验证器

检查局面是否可能出现在正常对局中，用于识别格式正确但内容异常的FEN输入。
规则引擎和搜索引擎不依赖这里的结果。
"""

from typing import Any, Dict, List, Optional, Tuple

from .chess_board import ChessBoard
from .piece import Color, Piece, PieceType
from .rule_engine import RuleEngine


class BoardValidator:
    """
    棋局合法性验证器

    提供各种棋局状态的验证功能。
    """

    # 每方棋子数量上限
    PIECE_LIMITS = {
        PieceType.GENERAL: 1,
        PieceType.ADVISOR: 2,
        PieceType.ELEPHANT: 2,
        PieceType.HORSE: 2,
        PieceType.ROOK: 2,
        PieceType.CANNON: 2,
        PieceType.SOLDIER: 5,
    }

    # 相/象的七个合法落点 (列, 行)，黑方取行号镜像
    RED_ELEPHANT_POINTS = {(2, 9), (6, 9), (0, 7), (4, 7), (8, 7), (2, 5), (6, 5)}
    RED_ADVISOR_POINTS = {(3, 9), (5, 9), (4, 8), (3, 7), (5, 7)}

    def __init__(self, rule_engine: Optional[RuleEngine] = None):
        """初始化验证器"""
        self.rule_engine = rule_engine or RuleEngine()

    @staticmethod
    def _mirror(points) -> set:
        return {(x, 9 - y) for x, y in points}

    def validate_piece_counts(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        验证棋子数量

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []
        counts = board.count_pieces()

        for color in (Color.RED, Color.BLACK):
            for piece_type, limit in self.PIECE_LIMITS.items():
                piece = Piece(piece_type, color)
                count = counts.get(piece, 0)
                if count > limit:
                    errors.append(f"{piece.name}数量超限: {count} > {limit}")

            general = Piece(PieceType.GENERAL, color)
            if counts.get(general, 0) == 0:
                errors.append(f"缺少{general.name}")

        return len(errors) == 0, errors

    def validate_piece_positions(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        验证棋子位置的合法性

        帅/将、仕/士必须在九宫的合法点上，相/象必须在己方的七个象位上，
        兵/卒不能位于己方兵线之后。
        """
        errors = []
        elephant_points = {
            Color.RED: self.RED_ELEPHANT_POINTS,
            Color.BLACK: self._mirror(self.RED_ELEPHANT_POINTS),
        }
        advisor_points = {
            Color.RED: self.RED_ADVISOR_POINTS,
            Color.BLACK: self._mirror(self.RED_ADVISOR_POINTS),
        }

        for pos, piece in board.get_all_pieces():
            color = piece.color
            where = f"({pos.x}, {pos.y})"

            if piece.piece_type == PieceType.GENERAL:
                if not self.rule_engine.in_palace(pos, color):
                    errors.append(f"{piece.name}位置错误: {where}, 应在九宫内")
            elif piece.piece_type == PieceType.ADVISOR:
                if tuple(pos) not in advisor_points[color]:
                    errors.append(f"{piece.name}位置错误: {where}")
            elif piece.piece_type == PieceType.ELEPHANT:
                if tuple(pos) not in elephant_points[color]:
                    errors.append(f"{piece.name}位置错误: {where}")
            elif piece.piece_type == PieceType.SOLDIER:
                # 红兵起始于第6行，黑卒起始于第3行
                if (color == Color.RED and pos.y > 6) or (color == Color.BLACK and pos.y < 3):
                    errors.append(f"{piece.name}位于己方兵线之后: {where}")

        return len(errors) == 0, errors

    def validate_generals_facing(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """验证帅将是否照面"""
        if self.rule_engine.generals_facing(board):
            return False, ["帅将照面，中间无棋子阻挡"]
        return True, []

    def validate_side_to_move(self, board: ChessBoard, color: Color) -> Tuple[bool, List[str]]:
        """不走子的一方不能处于被将军状态"""
        waiting = Color(color).opponent
        if board.find_general(waiting) is not None and self.rule_engine.is_in_check(board, waiting):
            return False, ["非走子方正被将军"]
        return True, []

    def full_validation(self, board: ChessBoard, color: Optional[Color] = None) -> Tuple[bool, List[str]]:
        """
        执行全部验证

        Args:
            board: 要验证的棋盘
            color: 走子方，给定时额外检查非走子方是否被将军

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []
        for check in (self.validate_piece_counts,
                      self.validate_piece_positions,
                      self.validate_generals_facing):
            _, check_errors = check(board)
            errors.extend(check_errors)

        if color is not None:
            _, check_errors = self.validate_side_to_move(board, color)
            errors.extend(check_errors)

        return len(errors) == 0, errors

    def get_validation_report(self, board: ChessBoard, color: Optional[Color] = None) -> Dict[str, Any]:
        """
        获取详细的验证报告

        Returns:
            Dict[str, Any]: 验证报告
        """
        is_valid, errors = self.full_validation(board, color)
        red_count = sum(board.count_pieces(Color.RED).values())
        black_count = sum(board.count_pieces(Color.BLACK).values())
        return {
            'is_valid': is_valid,
            'errors': errors,
            'fen': board.to_fen(color if color is not None else Color.RED),
            'piece_counts': {'red': red_count, 'black': black_count},
        }
