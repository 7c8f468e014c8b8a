"""
象棋棋盘数据结构

定义象棋棋盘的表示、走子和FEN格式转换功能。

棋盘是不可变值：底层的 numpy 矩阵被设为只读，
执行走法总是返回一个新的棋盘对象。
"""

from typing import Dict, List, Optional, Tuple

import numpy as np

from .move import BOARD_COLS, BOARD_ROWS, Move, Position
from .piece import PIECE_NAMES, Color, Piece
from ..utils.exceptions import FenParseError


INITIAL_FEN = "rnbakabnr/9/1c5c1/p1p1p1p1p/9/9/P1P1P1P1P/1C5C1/9/RNBAKABNR w - - 0 1"


class ChessBoard:
    """
    象棋棋盘类

    10x9 的格子，每格存放一个有符号棋子编码 (0 为空)。
    """

    EMPTY = 0

    def __init__(self, matrix: Optional[np.ndarray] = None):
        """
        初始化棋盘

        Args:
            matrix: 10x9的棋子编码矩阵，为None时创建空棋盘
        """
        if matrix is None:
            grid = np.zeros((BOARD_ROWS, BOARD_COLS), dtype=np.int8)
        else:
            grid = np.array(matrix, dtype=np.int8)
            if grid.shape != (BOARD_ROWS, BOARD_COLS):
                raise ValueError(f"棋盘尺寸错误: {grid.shape}, 应为(10, 9)")
            if np.abs(grid).max(initial=0) > 7:
                raise ValueError("棋盘中存在无效的棋子编码")

        grid.flags.writeable = False
        self._grid = grid

    @property
    def board(self) -> np.ndarray:
        """只读的棋盘矩阵 (行x列)"""
        return self._grid

    # ==================== 构造方法 ====================

    @classmethod
    def initial(cls) -> 'ChessBoard':
        """创建象棋初始局面"""
        return cls.from_fen(INITIAL_FEN)

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> 'ChessBoard':
        """从矩阵创建棋盘对象"""
        return cls(matrix)

    def to_matrix(self) -> np.ndarray:
        """
        转换为矩阵格式

        Returns:
            np.ndarray: 可写的10x9矩阵副本
        """
        return self._grid.copy()

    # ==================== FEN 转换 ====================

    @classmethod
    def parse_fen(cls, fen: str) -> Tuple['ChessBoard', Color]:
        """
        解析FEN字符串

        Args:
            fen: FEN格式字符串，走子方字段可省略（默认为红方）

        Returns:
            Tuple[ChessBoard, Color]: (棋盘, 走子方)
        """
        parts = fen.split()
        if not parts:
            raise FenParseError(fen, "FEN为空")

        rows = parts[0].split("/")
        if len(rows) != BOARD_ROWS:
            raise FenParseError(fen, f"FEN格式应包含10行，实际为{len(rows)}行")

        grid = np.zeros((BOARD_ROWS, BOARD_COLS), dtype=np.int8)

        for y, row in enumerate(rows):
            x = 0
            for char in row:
                if char in "123456789":
                    x += int(char)
                else:
                    if x >= BOARD_COLS:
                        raise FenParseError(fen, f"第{y + 1}行列数超出范围")
                    try:
                        grid[y, x] = Piece.from_fen_char(char).code
                    except ValueError as e:
                        raise FenParseError(fen, str(e)) from e
                    x += 1
            if x != BOARD_COLS:
                raise FenParseError(fen, f"第{y + 1}行应为9列，实际为{x}列")

        color = Color.RED
        if len(parts) > 1:
            try:
                color = Color.from_fen_char(parts[1])
            except ValueError as e:
                raise FenParseError(fen, str(e)) from e

        return cls(grid), color

    @classmethod
    def from_fen(cls, fen: str) -> 'ChessBoard':
        """从FEN格式创建棋盘，忽略走子方"""
        board, _ = cls.parse_fen(fen)
        return board

    def to_fen(self, color: Color = Color.RED) -> str:
        """
        转换为FEN格式

        Args:
            color: 走子方

        Returns:
            str: FEN格式字符串
        """
        fen_parts = []

        for row in self._grid:
            fen_row = ""
            empty_count = 0

            for code in row:
                if code == self.EMPTY:
                    empty_count += 1
                else:
                    if empty_count > 0:
                        fen_row += str(empty_count)
                        empty_count = 0
                    fen_row += Piece.from_code(code).fen_char

            if empty_count > 0:
                fen_row += str(empty_count)

            fen_parts.append(fen_row)

        # 易位、吃过路兵、回合数字段在象棋中无意义，保留占位以兼容常规FEN
        return f"{'/'.join(fen_parts)} {Color(color).fen_char} - - 0 1"

    # ==================== 查询 ====================

    def get_piece_at(self, pos: Tuple[int, int]) -> Optional[Piece]:
        """
        获取指定位置的棋子

        Args:
            pos: 位置坐标 (列, 行)

        Returns:
            Optional[Piece]: 棋子，空位或越界时返回None
        """
        code = self.get_code_at(pos)
        return Piece.from_code(code) if code != self.EMPTY else None

    def get_code_at(self, pos: Tuple[int, int]) -> int:
        """获取指定位置的棋子编码，越界返回0"""
        x, y = pos
        if 0 <= x < BOARD_COLS and 0 <= y < BOARD_ROWS:
            return int(self._grid[y, x])
        return self.EMPTY

    def is_empty(self, pos: Tuple[int, int]) -> bool:
        return self.get_code_at(pos) == self.EMPTY

    def find_general(self, color: Color) -> Optional[Position]:
        """
        找到指定阵营的帅/将的位置

        Args:
            color: 阵营

        Returns:
            Optional[Position]: 帅/将的位置，如果找不到返回None
        """
        found = np.argwhere(self._grid == int(color))
        if len(found) == 0:
            return None
        y, x = found[0]
        return Position(int(x), int(y))

    def get_all_pieces(self, color: Optional[Color] = None) -> List[Tuple[Position, Piece]]:
        """
        获取所有棋子的位置，按行优先顺序

        Args:
            color: 指定阵营，None表示获取所有棋子

        Returns:
            List[Tuple[Position, Piece]]: [(位置, 棋子), ...]
        """
        if color is None:
            mask = self._grid != self.EMPTY
        elif color == Color.RED:
            mask = self._grid > 0
        else:
            mask = self._grid < 0

        return [
            (Position(int(x), int(y)), Piece.from_code(self._grid[y, x]))
            for y, x in np.argwhere(mask)
        ]

    def count_pieces(self, color: Optional[Color] = None) -> Dict[Piece, int]:
        """统计棋子数量"""
        counts: Dict[Piece, int] = {}
        for _, piece in self.get_all_pieces(color):
            counts[piece] = counts.get(piece, 0) + 1
        return counts

    # ==================== 走子 ====================

    def make_move(self, move: Move) -> 'ChessBoard':
        """
        执行走法，返回新的棋盘状态

        起点棋子移到终点（终点原有棋子被吃掉），起点置空。
        不做走法规则检查，也不修改当前棋盘。

        Args:
            move: 要执行的走法

        Returns:
            ChessBoard: 新的棋盘状态

        Raises:
            ValueError: 起点或终点在棋盘外
        """
        if not move.from_pos.is_valid() or not move.to_pos.is_valid():
            raise ValueError(f"走法超出棋盘范围: {move}")

        grid = self._grid.copy()
        (from_x, from_y), (to_x, to_y) = move.from_pos, move.to_pos
        grid[to_y, to_x] = grid[from_y, from_x]
        grid[from_y, from_x] = self.EMPTY
        return ChessBoard(grid)

    def with_piece(self, pos: Tuple[int, int], piece: Optional[Piece]) -> 'ChessBoard':
        """返回在指定位置放置（piece为None时移除）棋子后的新棋盘"""
        grid = self._grid.copy()
        x, y = pos
        grid[y, x] = piece.code if piece is not None else self.EMPTY
        return ChessBoard(grid)

    # ==================== 显示 ====================

    def to_visual_string(self) -> str:
        """
        转换为可视化字符串

        Returns:
            str: 可视化的棋盘字符串
        """
        lines = ["   a  b  c  d  e  f  g  h  i"]

        for y in range(BOARD_ROWS):
            cells = []
            for x in range(BOARD_COLS):
                code = int(self._grid[y, x])
                cells.append(PIECE_NAMES[code] if code else "．")
            lines.append(f"{y} " + " ".join(cells))
            if y == 4:
                lines.append("  " + "～" * 13)

        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_visual_string()

    def __repr__(self) -> str:
        return f"ChessBoard({self.to_fen()!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChessBoard):
            return False
        return np.array_equal(self._grid, other._grid)

    def __hash__(self) -> int:
        return hash(self._grid.tobytes())


def create_initial_board() -> ChessBoard:
    """创建初始局面"""
    return ChessBoard.initial()


def apply_move(board: ChessBoard, move: Move) -> ChessBoard:
    """执行走法，返回新棋盘"""
    return board.make_move(move)


def to_fen(board: ChessBoard, color: Color = Color.RED) -> str:
    return board.to_fen(color)


def from_fen(fen: str) -> ChessBoard:
    return ChessBoard.from_fen(fen)
