"""
象棋棋子数据结构

定义阵营、棋子类型和棋子的表示与编码。

棋盘矩阵中每个格子存放一个有符号整数：0 表示空位，
正数为红方棋子，负数为黑方棋子，绝对值为棋子类型。
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class Color(IntEnum):
    """阵营 (1: 红方, -1: 黑方)"""
    RED = 1
    BLACK = -1

    @property
    def opponent(self) -> 'Color':
        """对方阵营"""
        return Color.BLACK if self is Color.RED else Color.RED

    @property
    def fen_char(self) -> str:
        """FEN中的走子方标记"""
        return 'w' if self is Color.RED else 'b'

    @classmethod
    def from_fen_char(cls, char: str) -> 'Color':
        if char in ('w', 'r'):
            return cls.RED
        if char == 'b':
            return cls.BLACK
        raise ValueError(f"无效的走子方标记: {char}")


class PieceType(IntEnum):
    """棋子类型"""
    GENERAL = 1    # 帅/将
    ADVISOR = 2    # 仕/士
    ELEPHANT = 3   # 相/象
    HORSE = 4      # 马
    ROOK = 5       # 车
    CANNON = 6     # 炮
    SOLDIER = 7    # 兵/卒


class GameStatus(Enum):
    """对局状态"""
    PLAYING = 'playing'
    RED_WIN = 'red_win'
    BLACK_WIN = 'black_win'
    DRAW = 'draw'  # 保留，当前规则不会产生


# FEN记法中的棋子符号（小写，红方取大写）
FEN_LETTERS = {
    PieceType.GENERAL: 'k',
    PieceType.ADVISOR: 'a',
    PieceType.ELEPHANT: 'b',
    PieceType.HORSE: 'n',
    PieceType.ROOK: 'r',
    PieceType.CANNON: 'c',
    PieceType.SOLDIER: 'p',
}

LETTER_TO_TYPE = {letter: piece_type for piece_type, letter in FEN_LETTERS.items()}

# 棋子名称映射
PIECE_NAMES = {
    1: "帅", 2: "仕", 3: "相", 4: "马", 5: "车", 6: "炮", 7: "兵",
    -1: "将", -2: "士", -3: "象", -4: "马", -5: "车", -6: "炮", -7: "卒"
}


@dataclass(frozen=True)
class Piece:
    """
    象棋棋子

    不可变的 (类型, 阵营) 二元组，没有实例标识。
    """
    piece_type: PieceType
    color: Color

    @property
    def code(self) -> int:
        """棋盘矩阵中的整数编码"""
        return int(self.piece_type) * int(self.color)

    @property
    def fen_char(self) -> str:
        letter = FEN_LETTERS[self.piece_type]
        return letter.upper() if self.color is Color.RED else letter

    @property
    def name(self) -> str:
        """中文名称"""
        return PIECE_NAMES[self.code]

    @classmethod
    def from_code(cls, code: int) -> 'Piece':
        """
        从整数编码创建棋子

        Args:
            code: 非零的棋子编码

        Returns:
            Piece: 棋子对象
        """
        code = int(code)
        if code == 0 or abs(code) > 7:
            raise ValueError(f"无效的棋子编码: {code}")
        return cls(PieceType(abs(code)), Color.RED if code > 0 else Color.BLACK)

    @classmethod
    def from_fen_char(cls, char: str) -> 'Piece':
        """从FEN字符创建棋子，大写为红方，小写为黑方"""
        piece_type = LETTER_TO_TYPE.get(char.lower())
        if piece_type is None:
            raise ValueError(f"未知的棋子符号: {char}")
        return cls(piece_type, Color.RED if char.isupper() else Color.BLACK)

    def __str__(self) -> str:
        return self.fen_char
