"""
象棋规则引擎

实现各棋子的走法合法性判定、将军检测、帅将照面检测、
合法走法生成和终局状态判定。

分层约束：将军检测只调用几何合法性判定 (is_legal_move)，
从不调用完整的合法走法生成，否则两者会互相递归。
"""

from typing import Iterator, List, Optional

import numpy as np

from .chess_board import ChessBoard
from .move import BOARD_COLS, BOARD_ROWS, Move, Position
from .piece import Color, GameStatus, PieceType


class RuleEngine:
    """
    象棋规则引擎

    无状态：所有方法都是棋盘的纯函数。
    """

    # 九宫范围
    PALACE_COLS = (3, 5)
    PALACE_ROWS = {Color.BLACK: (0, 2), Color.RED: (7, 9)}

    # 相/象不能过河的行范围
    OWN_SIDE_ROWS = {Color.BLACK: (0, 4), Color.RED: (5, 9)}

    # 兵/卒的前进方向
    FORWARD = {Color.RED: -1, Color.BLACK: 1}

    def __init__(self):
        """初始化规则引擎"""
        # 各棋子候选落点的偏移 (dx, dy)，仅用于缩小走法生成的搜索范围
        self.orthogonal_steps = [(0, 1), (0, -1), (1, 0), (-1, 0)]
        self.diagonal_steps = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
        self.elephant_steps = [(2, 2), (2, -2), (-2, 2), (-2, -2)]
        self.horse_steps = [
            (1, 2), (-1, 2), (1, -2), (-1, -2),
            (2, 1), (-2, 1), (2, -1), (-2, -1)
        ]

    # ==================== 几何合法性 ====================

    def is_legal_move(self, board: ChessBoard, move: Move, color: Color) -> bool:
        """
        验证走法在几何上是否合法

        只检查走子方棋子的走法规则，不做将军/照面过滤。

        Args:
            board: 当前棋盘状态
            move: 要验证的走法
            color: 走子方

        Returns:
            bool: 是否合法
        """
        from_pos, to_pos = move.from_pos, move.to_pos
        piece = board.get_piece_at(from_pos)

        if piece is None or piece.color != color:
            return False
        if not to_pos.is_valid():
            return False
        if from_pos == to_pos:
            return False

        target = board.get_piece_at(to_pos)
        if target is not None and target.color == color:  # 不能吃己方棋子
            return False

        piece_type = piece.piece_type

        if piece_type == PieceType.GENERAL:
            return self._is_legal_general_move(move, color)
        elif piece_type == PieceType.ADVISOR:
            return self._is_legal_advisor_move(move, color)
        elif piece_type == PieceType.ELEPHANT:
            return self._is_legal_elephant_move(board, move, color)
        elif piece_type == PieceType.HORSE:
            return self._is_legal_horse_move(board, move)
        elif piece_type == PieceType.ROOK:
            return self._is_legal_rook_move(board, move)
        elif piece_type == PieceType.CANNON:
            return self._is_legal_cannon_move(board, move, target is not None)
        elif piece_type == PieceType.SOLDIER:
            return self._is_legal_soldier_move(move, color)

        return False

    def in_palace(self, pos: Position, color: Color) -> bool:
        min_row, max_row = self.PALACE_ROWS[color]
        min_col, max_col = self.PALACE_COLS
        return min_col <= pos.x <= max_col and min_row <= pos.y <= max_row

    def _is_legal_general_move(self, move: Move, color: Color) -> bool:
        """帅/将：九宫内直走一步"""
        if not self.in_palace(move.to_pos, color):
            return False
        dx, dy = self._delta(move)
        return abs(dx) + abs(dy) == 1

    def _is_legal_advisor_move(self, move: Move, color: Color) -> bool:
        """仕/士：九宫内斜走一步"""
        if not self.in_palace(move.to_pos, color):
            return False
        dx, dy = self._delta(move)
        return abs(dx) == 1 and abs(dy) == 1

    def _is_legal_elephant_move(self, board: ChessBoard, move: Move, color: Color) -> bool:
        """相/象：走田字，不能过河，象眼不能被塞"""
        min_row, max_row = self.OWN_SIDE_ROWS[color]
        if not min_row <= move.to_pos.y <= max_row:
            return False

        dx, dy = self._delta(move)
        if abs(dx) != 2 or abs(dy) != 2:
            return False

        eye = Position(move.from_pos.x + dx // 2, move.from_pos.y + dy // 2)
        return board.is_empty(eye)

    def _is_legal_horse_move(self, board: ChessBoard, move: Move) -> bool:
        """马：走日字，马腿不能被绊"""
        dx, dy = self._delta(move)
        if (abs(dx), abs(dy)) not in ((1, 2), (2, 1)):
            return False

        # 马腿在长边方向上紧挨起点
        leg = Position(
            move.from_pos.x + (dx // 2 if abs(dx) == 2 else 0),
            move.from_pos.y + (dy // 2 if abs(dy) == 2 else 0)
        )
        return board.is_empty(leg)

    def _is_legal_rook_move(self, board: ChessBoard, move: Move) -> bool:
        """车：直线行走，中间不能有棋子"""
        if not self._is_straight(move):
            return False
        return self.count_pieces_between(board, move.from_pos, move.to_pos) == 0

    def _is_legal_cannon_move(self, board: ChessBoard, move: Move, is_capture: bool) -> bool:
        """炮：不吃子时同车，吃子时中间必须恰好隔一个炮台"""
        if not self._is_straight(move):
            return False
        screens = self.count_pieces_between(board, move.from_pos, move.to_pos)
        return screens == 1 if is_capture else screens == 0

    def _is_legal_soldier_move(self, move: Move, color: Color) -> bool:
        """兵/卒：不能后退；过河前只能直进一步，过河后可进可平"""
        dx, dy = self._delta(move)
        forward = self.FORWARD[color]

        if dy * forward < 0:
            return False

        if color == Color.RED:
            crossed_river = move.from_pos.y <= 4
        else:
            crossed_river = move.from_pos.y >= 5

        if not crossed_river:
            return dx == 0 and dy == forward
        return abs(dx) + abs(dy) == 1

    @staticmethod
    def _delta(move: Move):
        return move.to_pos.x - move.from_pos.x, move.to_pos.y - move.from_pos.y

    @staticmethod
    def _is_straight(move: Move) -> bool:
        return move.from_pos.x == move.to_pos.x or move.from_pos.y == move.to_pos.y

    # ==================== 阻挡计数 ====================

    def count_pieces_between(self, board: ChessBoard, start: Position, end: Position) -> int:
        """
        统计同一行或同一列上两点之间（不含端点）的棋子数

        Args:
            board: 棋盘状态
            start: 起点
            end: 终点

        Returns:
            int: 中间的棋子数

        Raises:
            ValueError: 两点既不同行也不同列
        """
        grid = board.board
        if start.x == end.x:
            low, high = sorted((start.y, end.y))
            return int(np.count_nonzero(grid[low + 1:high, start.x]))
        if start.y == end.y:
            low, high = sorted((start.x, end.x))
            return int(np.count_nonzero(grid[start.y, low + 1:high]))
        raise ValueError(f"两点不在同一直线上: {start}, {end}")

    # ==================== 将军与照面 ====================

    def is_in_check(self, board: ChessBoard, color: Color) -> bool:
        """
        检查指定阵营是否被将军

        找不到己方帅/将时视为被将军，保证没有帅/将的局面不会被当成安全局面。

        Args:
            board: 棋盘状态
            color: 阵营

        Returns:
            bool: 是否被将军
        """
        general_pos = board.find_general(color)
        if general_pos is None:
            return True

        enemy = Color(color).opponent
        for pos, _ in board.get_all_pieces(enemy):
            if self.is_legal_move(board, Move(pos, general_pos), enemy):
                return True

        return False

    def generals_facing(self, board: ChessBoard) -> bool:
        """
        检查帅将是否照面（同列且中间无子）

        Args:
            board: 棋盘状态

        Returns:
            bool: 是否照面
        """
        red_general = board.find_general(Color.RED)
        black_general = board.find_general(Color.BLACK)

        if red_general is None or black_general is None:
            return False
        if red_general.x != black_general.x:
            return False
        return self.count_pieces_between(board, red_general, black_general) == 0

    # ==================== 走法生成 ====================

    def generate_legal_moves(self, board: ChessBoard, color: Color) -> List[Move]:
        """
        生成指定阵营的所有合法走法

        按起点行优先、再按终点行优先排序。
        过滤掉走后己方被将军或帅将照面的走法。

        Args:
            board: 当前棋盘状态
            color: 走子方

        Returns:
            List[Move]: 合法走法列表
        """
        legal_moves = []
        for pos, _ in board.get_all_pieces(color):
            legal_moves.extend(self.generate_piece_moves(board, pos, color))
        return legal_moves

    def generate_piece_moves(self, board: ChessBoard, pos: Position, color: Color) -> List[Move]:
        """
        生成指定位置棋子的所有合法走法

        Args:
            board: 当前棋盘状态
            pos: 棋子位置
            color: 走子方

        Returns:
            List[Move]: 合法走法列表，按终点行优先排序
        """
        pos = Position(*pos)
        piece = board.get_piece_at(pos)
        if piece is None or piece.color != color:
            return []

        targets = sorted(set(self._candidate_targets(pos, piece.piece_type)),
                         key=lambda p: (p.y, p.x))

        moves = []
        for target in targets:
            move = Move(pos, target)
            if self.is_legal_move(board, move, color) and self._is_safe(board, move, color):
                moves.append(move)
        return moves

    def _candidate_targets(self, pos: Position, piece_type: PieceType) -> Iterator[Position]:
        """
        棋子可能到达的落点（超集）

        最终合法性仍由 is_legal_move 判定，这里只用于避免逐格扫描整个棋盘。
        """
        if piece_type in (PieceType.ROOK, PieceType.CANNON):
            for x in range(BOARD_COLS):
                yield Position(x, pos.y)
            for y in range(BOARD_ROWS):
                yield Position(pos.x, y)
            return

        if piece_type in (PieceType.GENERAL, PieceType.SOLDIER):
            steps = self.orthogonal_steps
        elif piece_type == PieceType.ADVISOR:
            steps = self.diagonal_steps
        elif piece_type == PieceType.ELEPHANT:
            steps = self.elephant_steps
        else:
            steps = self.horse_steps

        for dx, dy in steps:
            target = Position(pos.x + dx, pos.y + dy)
            if target.is_valid():
                yield target

    def _is_safe(self, board: ChessBoard, move: Move, color: Color) -> bool:
        """走后己方不被将军且帅将不照面"""
        new_board = board.make_move(move)
        return not self.is_in_check(new_board, color) and not self.generals_facing(new_board)

    # ==================== 终局判定 ====================

    def get_game_status(self, board: ChessBoard, color: Color) -> GameStatus:
        """
        判定对局状态

        走子方没有合法走法即告负（象棋中困毙也算输，不存在逼和）。

        Args:
            board: 棋盘状态
            color: 走子方

        Returns:
            GameStatus: 对局状态
        """
        if not self.has_legal_move(board, color):
            return GameStatus.BLACK_WIN if color == Color.RED else GameStatus.RED_WIN
        return GameStatus.PLAYING

    def has_legal_move(self, board: ChessBoard, color: Color) -> bool:
        """是否存在至少一个合法走法"""
        return any(self.generate_piece_moves(board, pos, color)
                   for pos, _ in board.get_all_pieces(color))

    def is_checkmate(self, board: ChessBoard, color: Color) -> bool:
        """被将军且无合法走法"""
        return self.is_in_check(board, color) and not self.has_legal_move(board, color)


_default_engine = RuleEngine()


def is_legal_move(board: ChessBoard, move: Move, color: Color) -> bool:
    return _default_engine.is_legal_move(board, move, color)


def legal_moves(board: ChessBoard, color: Color) -> List[Move]:
    return _default_engine.generate_legal_moves(board, color)


def is_in_check(board: ChessBoard, color: Color) -> bool:
    return _default_engine.is_in_check(board, color)


def generals_facing(board: ChessBoard) -> bool:
    return _default_engine.generals_facing(board)


def game_status(board: ChessBoard, color: Color) -> GameStatus:
    return _default_engine.get_game_status(board, color)


def legal_moves_from(board: ChessBoard, pos: Position, color: Optional[Color] = None) -> List[Move]:
    """选中某个棋子后的合法走法，color为None时取该棋子的阵营"""
    piece = board.get_piece_at(pos)
    if piece is None:
        return []
    return _default_engine.generate_piece_moves(board, pos, color if color is not None else piece.color)
