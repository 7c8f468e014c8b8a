"""
象棋走法数据结构

定义棋盘坐标和走法的表示与转换功能。

坐标采用 (列, 行)：列 0-8，行 0-9。第 0 行是黑方底线，第 9 行是红方底线。
"""

from dataclasses import dataclass, field
from typing import NamedTuple, Optional

from ..utils.exceptions import FenParseError


BOARD_ROWS = 10
BOARD_COLS = 9


class Position(NamedTuple):
    """棋盘坐标 (x: 列, y: 行)"""
    x: int
    y: int

    def is_valid(self) -> bool:
        """是否在棋盘范围内"""
        return 0 <= self.x < BOARD_COLS and 0 <= self.y < BOARD_ROWS


@dataclass(frozen=True)
class Move:
    """
    象棋走法类

    只是一个"提议"：只有结合具体棋盘和走子方才有意义。
    score 是搜索时附带的评分，不参与相等性比较。
    """
    from_pos: Position
    to_pos: Position
    score: Optional[int] = field(default=None, compare=False)

    def __post_init__(self):
        # 允许传入普通元组
        object.__setattr__(self, 'from_pos', Position(*self.from_pos))
        object.__setattr__(self, 'to_pos', Position(*self.to_pos))

    def to_coordinate_notation(self) -> str:
        """
        转换为坐标记法

        Returns:
            str: 坐标记法字符串，如 "b9c7"（列字母 + 行号）
        """
        from_col = chr(ord('a') + self.from_pos.x)
        to_col = chr(ord('a') + self.to_pos.x)
        return f"{from_col}{self.from_pos.y}{to_col}{self.to_pos.y}"

    @classmethod
    def from_coordinate_notation(cls, notation: str) -> 'Move':
        """
        从坐标记法创建Move对象

        Args:
            notation: 坐标记法字符串，如 "b9c7"

        Returns:
            Move: Move对象
        """
        notation = notation.strip().lower()
        if (len(notation) != 4
                or notation[0] not in 'abcdefghi' or notation[2] not in 'abcdefghi'
                or not notation[1].isdigit() or not notation[3].isdigit()):
            raise FenParseError(notation, "无效的坐标记法")

        return cls(
            from_pos=Position(ord(notation[0]) - ord('a'), int(notation[1])),
            to_pos=Position(ord(notation[2]) - ord('a'), int(notation[3]))
        )

    def with_score(self, score: int) -> 'Move':
        """返回附带评分的新走法"""
        return Move(self.from_pos, self.to_pos, score)

    def __str__(self) -> str:
        return self.to_coordinate_notation()

    def to_dict(self) -> dict:
        """转换为字典"""
        return {
            'from': {'x': self.from_pos.x, 'y': self.from_pos.y},
            'to': {'x': self.to_pos.x, 'y': self.to_pos.y},
            'score': self.score
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Move':
        """从字典创建Move对象"""
        return cls(
            from_pos=Position(data['from']['x'], data['from']['y']),
            to_pos=Position(data['to']['x'], data['to']['y']),
            score=data.get('score')
        )
